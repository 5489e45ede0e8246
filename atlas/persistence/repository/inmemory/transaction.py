"""In-memory transaction manager for testing.

Repositories record an undo step for every write made while a unit of work is
open. The open unit is tracked per task, so concurrent logins in one event
loop only ever undo their own writes.
"""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import Optional

from atlas.domain.repository.transaction import TransactionManager

UndoStep = Callable[[], None]

_undo_log: ContextVar[Optional[list[UndoStep]]] = ContextVar(
    "inmemory_undo_log", default=None
)


def record_undo(step: UndoStep) -> None:
    """Register how to revert a write, if a unit of work is open."""
    log = _undo_log.get()
    if log is not None:
        log.append(step)


class InMemoryTransactionManager(TransactionManager):
    """In-memory implementation of TransactionManager for testing."""

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        parent = _undo_log.get()
        log: list[UndoStep] = []
        token = _undo_log.set(log)
        try:
            yield
        except BaseException:
            for step in reversed(log):
                step()
            raise
        else:
            # Writes of a nested block are undone if the outer block fails
            if parent is not None:
                parent.extend(log)
        finally:
            _undo_log.reset(token)
