"""Exporter registry."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from notesearch.export.base import BaseExporter

EXPORTERS: dict[str, type[BaseExporter]] = {}


def register_exporter(name: str):
    """Decorator to register an exporter."""

    def decorator(cls):
        EXPORTERS[name] = cls
        return cls

    return decorator


from notesearch.export.clipboard import ClipboardExporter  # noqa: E402, F401
from notesearch.export.csv_file import CsvExporter  # noqa: E402, F401
from notesearch.export.html import HtmlExporter  # noqa: E402, F401
