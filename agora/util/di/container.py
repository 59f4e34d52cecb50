"""Dependency injection container."""

from dishka import AsyncContainer, Provider, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from agora.util.di import PROVIDERS, get_provider


def create_container(*extra_providers: Provider) -> AsyncContainer:
    """Build the production container.

    Every layer gets its production provider, persistence included, and
    the FastAPI provider is always added so routes can resolve
    request-scoped dependencies.

    Args:
        extra_providers: Providers appended after the standard set
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider(), *extra_providers)


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app; it is closed on app shutdown."""
    setup_dishka(container, app)
