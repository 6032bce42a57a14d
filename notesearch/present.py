"""Presenters: where aggregation progress and results are shown."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import TextIO

from notesearch.models import ArticleRecord


class BasePresenter(ABC):
    """Receives progress, results and errors from a fetch session."""

    @abstractmethod
    def progress(self, source_name: str, count: int) -> None:
        """Records accumulated so far in the running session."""
        ...

    @abstractmethod
    def render(self, records: list[ArticleRecord]) -> None:
        ...

    @abstractmethod
    def update_count(self, count: int) -> None:
        ...

    @abstractmethod
    def show_error(self, message: str) -> None:
        ...

    @abstractmethod
    def show_empty(self, message: str) -> None:
        """Replace the result list with a message (no results, no match, reset)."""
        ...

    @abstractmethod
    def notify(self, message: str) -> None:
        """Transient notice, e.g. export finished."""
        ...


class ConsolePresenter(BasePresenter):
    """Print results as a numbered list to a text stream."""

    def __init__(self, labels: dict[str, str], stream: TextIO | None = None):
        self.labels = labels
        self.stream = stream or sys.stdout

    def _print(self, text: str = "") -> None:
        print(text, file=self.stream)

    def progress(self, source_name: str, count: int) -> None:
        print(
            self.labels["fetching"].format(source=source_name, count=count),
            file=sys.stderr,
        )

    def render(self, records: list[ArticleRecord]) -> None:
        for i, record in enumerate(records, 1):
            self._print(f"{i:>4}. [{record.service}] {record.title}")
            self._print(f"      {record.formatted_date}  {record.url}")

    def update_count(self, count: int) -> None:
        if count:
            self._print(self.labels["found"].format(count=count))
        else:
            self._print(self.labels["none_found"])

    def show_error(self, message: str) -> None:
        print(f"Error: {message}", file=sys.stderr)

    def show_empty(self, message: str) -> None:
        self._print(message)

    def notify(self, message: str) -> None:
        print(message, file=sys.stderr)
