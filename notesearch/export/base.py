"""Abstract base class for exporters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime, timezone
from pathlib import Path

from notesearch.config import get_export_config
from notesearch.labels import get_labels
from notesearch.models import ArticleRecord


def export_filename(extension: str, today: date | None = None) -> str:
    """article_list_<YYYY-MM-DD>.<extension>, dated in UTC."""
    today = today or datetime.now(timezone.utc).date()
    return f"article_list_{today.isoformat()}.{extension}"


class BaseExporter(ABC):
    """Base class for result list exporters.

    Keyword overrides take precedence over the export.<name> config section.
    """

    def __init__(self, config: dict, **overrides):
        self.config = config
        self.overrides = {k: v for k, v in overrides.items() if v is not None}
        self.labels = get_labels(config)

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    def settings(self) -> dict:
        return {**get_export_config(self.config, self.name), **self.overrides}

    @abstractmethod
    async def export(self, records: list[ArticleRecord]) -> str:
        """Export records and return where they went. Raises on failure."""
        ...

    def _output_path(self, extension: str) -> Path:
        directory = Path(self.settings.get("output_dir", "."))
        directory.mkdir(parents=True, exist_ok=True)
        return directory / export_filename(extension)
