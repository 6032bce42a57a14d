"""Application controller: active source, last results, filtering and export."""

from __future__ import annotations

import logging

import httpx

from notesearch.aggregate import Aggregator
from notesearch.errors import SessionCancelled, UnknownSourceError
from notesearch.export import EXPORTERS
from notesearch.labels import get_labels
from notesearch.models import ArticleRecord
from notesearch.present import BasePresenter
from notesearch.sources import SOURCES

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "note"


def filter_articles(
    records: list[ArticleRecord], query: str,
) -> list[ArticleRecord]:
    """Records whose title contains query, ignoring case."""
    needle = query.lower()
    return [r for r in records if needle in r.title.lower()]


class ArticleBrowser:
    """Holds the records of the most recent session for one active source."""

    def __init__(
        self,
        config: dict,
        presenter: BasePresenter,
        source_key: str = DEFAULT_SOURCE,
        client: httpx.AsyncClient | None = None,
    ):
        if source_key not in SOURCES:
            raise UnknownSourceError(source_key)
        self.config = config
        self.presenter = presenter
        self.labels = get_labels(config)
        self.aggregator = Aggregator(config, presenter=presenter, client=client)
        self.source_key = source_key
        self.records: list[ArticleRecord] = []
        self.query = ""

    def select_source(self, source_key: str) -> None:
        """Switch source; previous results never carry over."""
        if source_key not in SOURCES:
            raise UnknownSourceError(source_key)
        self.source_key = source_key
        self.reset()

    def reset(self) -> None:
        self.aggregator.invalidate()
        self.records = []
        self.query = ""
        self.presenter.show_empty(self.labels["prompt"])
        self.presenter.update_count(0)

    async def fetch(self, user_id: str, query: str = "") -> list[ArticleRecord] | None:
        """Fetch all pages for user_id. Blank input does nothing.

        With a query, only the filtered view is rendered once the fetch
        completes. Returns None when the input is blank or the session was
        superseded.
        """
        user_id = (user_id or "").strip()
        if not user_id:
            return None

        self.records = []
        self.query = ""
        try:
            records = await self.aggregator.fetch_all(
                self.source_key, user_id, present_results=not query,
            )
        except SessionCancelled:
            logger.debug("Fetch for '%s' superseded", user_id)
            return None
        self.records = records
        if query:
            self.filter(query)
        return records

    def filter(self, query: str) -> list[ArticleRecord]:
        self.query = query
        filtered = filter_articles(self.records, query)
        if filtered:
            self.presenter.render(filtered)
        elif self.records:
            self.presenter.show_empty(self.labels["no_match"])
        else:
            self.presenter.show_empty(self.labels["no_results"])
        self.presenter.update_count(len(filtered))
        return filtered

    async def export(self, kind: str, **options) -> bool:
        """Export all current records. Failures are reported, not raised."""
        if not self.records:
            return False
        if kind not in EXPORTERS:
            logger.error("Unknown exporter '%s'", kind)
            self.presenter.show_error(f"Unknown export format: {kind}")
            return False

        exporter = EXPORTERS[kind](self.config, **options)
        try:
            destination = await exporter.export(self.records)
        except Exception as exc:
            logger.exception("Export via %s failed", kind)
            message = str(exc) or type(exc).__name__
            if kind == "clipboard":
                message = f"{self.labels['copy_failed']} {message}"
            self.presenter.show_error(message)
            return False

        if kind == "clipboard":
            message = self.labels["copied"].format(count=len(self.records))
        else:
            message = self.labels["saved"].format(
                count=len(self.records), path=destination,
            )
        self.presenter.notify(message)
        return True
