"""Transaction boundary interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class TransactionManager(ABC):
    """Groups repository writes into one unit.

    Writes made inside :meth:`atomic` land together or not at all. Blocks may
    nest; an inner block that fails discards only its own writes.
    """

    @abstractmethod
    def atomic(self) -> AbstractAsyncContextManager[None]:
        """Open a unit of work.

        Usage:
            async with transactions.atomic():
                account = await account_repository.save(account)
                await identity_link_repository.save(link)

        Any exception escaping the block discards the block's writes and is
        re-raised.
        """
        pass
