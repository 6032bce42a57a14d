"""Core data models for article aggregation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass
class ArticleRecord:
    """A single article listing from any source."""

    title: str
    url: str
    date: str | None
    service: str  # note, zenn, qiita
    formatted_date: str = ""


class PageKind(str, Enum):
    PAGE = "page"
    END = "end"
    ERROR = "error"


@dataclass
class PageResult:
    """Outcome of a single page request against a source.

    PAGE carries records, END means the source returned no items, ERROR
    means the source answered with a non-success status.
    """

    kind: PageKind
    records: list[ArticleRecord] = field(default_factory=list)
    cause: str | None = None
    status_code: int | None = None

    @classmethod
    def page(cls, records: list[ArticleRecord]) -> PageResult:
        if not records:
            return cls(kind=PageKind.END)
        return cls(kind=PageKind.PAGE, records=records)

    @classmethod
    def end(cls) -> PageResult:
        return cls(kind=PageKind.END)

    @classmethod
    def error(cls, cause: str, status_code: int | None = None) -> PageResult:
        return cls(kind=PageKind.ERROR, cause=cause, status_code=status_code)


@dataclass
class PaginationPolicy:
    """When to stop requesting further pages."""

    min_batch_size: int = 5
    max_pages: int = 100
    stop_on_http_error: bool = True

    def stop_reason(self, batch_size: int, pages_fetched: int) -> str | None:
        """Why pagination ends after this batch, or None to fetch the next page."""
        if batch_size == 0:
            return "exhausted"
        if batch_size < self.min_batch_size:
            return "short_batch"
        if pages_fetched >= self.max_pages:
            return "max_pages"
        return None


class SessionState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    COMPLETE = "complete"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class FetchSession:
    """Accumulator and bookkeeping for one fetch-all-pages operation."""

    generation: int
    source_key: str
    user_id: str
    state: SessionState = SessionState.IDLE
    records: list[ArticleRecord] = field(default_factory=list)
    pages_fetched: int = 0
    end_reason: str = ""  # exhausted, short_batch, max_pages, http_error
    error: str | None = None
