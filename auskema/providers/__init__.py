"""Schedule providers: one adapter per remote schedule source."""

from __future__ import annotations

from typing import Any

from auskema.errors import UnknownProvider

from .base import ScheduleProvider
from .json_provider import JsonProvider
from .lukasj import LukasjProvider


PROVIDERS: dict[str, type[ScheduleProvider]] = {
    LukasjProvider.name: LukasjProvider,
    JsonProvider.name: JsonProvider,
}


def get_provider(name: str, **options: Any) -> ScheduleProvider:
    """
    Instantiate the provider registered under name.

    Raises UnknownProvider if no provider has that name.
    """
    try:
        provider_cls = PROVIDERS[name]
    except KeyError:
        raise UnknownProvider(f'The provider "{name}" does not exist.') from None
    return provider_cls(**options)


__all__ = ["PROVIDERS", "ScheduleProvider", "JsonProvider", "LukasjProvider", "get_provider"]
