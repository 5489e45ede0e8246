"""Production container assembly."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from atlas.util.di import PROVIDERS


def create_container() -> AsyncContainer:
    """Container with the production implementation of every component.

    Nothing is resolved here: settings are read and the database engine is
    created on first use.
    """
    providers = [base.select(use_mock=False)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach a container to the app for ``FromDishka`` injection."""
    setup_dishka(container, app)
