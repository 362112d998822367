"""Production container assembly."""

from dishka import AsyncContainer, Provider, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from shelf.util.di import PROVIDERS, get_provider


def create_container(with_fastapi: bool = True) -> AsyncContainer:
    """Build the production container.

    The API wires it into FastAPI; the purge sweep script opens request
    scopes on it directly and does not need the FastAPI provider.

    Args:
        with_fastapi: Include dishka's FastAPI provider

    Returns:
        Container with every production provider
    """
    providers: list[Provider] = [
        get_provider(base, use_mock=False)() for base in PROVIDERS
    ]
    if with_fastapi:
        providers.append(FastapiProvider())
    return make_async_container(*providers)
