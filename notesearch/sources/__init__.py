"""Source adapter registry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from notesearch.errors import UnknownSourceError

if TYPE_CHECKING:
    import httpx

    from notesearch.sources.base import BaseSource

SOURCES: dict[str, type[BaseSource]] = {}


def register_source(name: str):
    """Decorator to register a source adapter."""

    def decorator(cls):
        SOURCES[name] = cls
        return cls

    return decorator


def get_source(
    key: str, config: dict, client: httpx.AsyncClient | None = None,
) -> BaseSource:
    """Instantiate the adapter registered under key."""
    if key not in SOURCES:
        raise UnknownSourceError(key)
    return SOURCES[key](config, client=client)


# Import implementations to trigger registration
from notesearch.sources.note import NoteSource  # noqa: E402, F401
from notesearch.sources.qiita import QiitaSource  # noqa: E402, F401
from notesearch.sources.zenn import ZennSource  # noqa: E402, F401
