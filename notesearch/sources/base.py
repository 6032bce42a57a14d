"""Abstract base class for all source adapters."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable
from urllib.parse import quote

import httpx

from notesearch.config import get_proxy_config
from notesearch.models import ArticleRecord, PageResult

logger = logging.getLogger(__name__)

# Left unescaped by encodeURIComponent on top of quote()'s own safe set
CHARS_SAFE_IN_URI_COMPONENT = "!'()*"

# (item, user_id) -> value or None
Extractor = Callable[[dict, str], Any]


def from_field(name: str) -> Extractor:
    """Extractor reading a single top-level field."""

    def extract(item: dict, user_id: str) -> Any:
        return item.get(name)

    extract.__name__ = f"from_field({name!r})"
    return extract


def first_of(extractors: tuple[Extractor, ...], item: dict, user_id: str) -> Any:
    """Try extractors in order; the first non-empty value wins."""
    for extract in extractors:
        value = extract(item, user_id)
        if value:
            return value
    return None


def proxied_url(url: str, proxy: dict) -> str:
    """Wrap url with the proxy prefix, encoding it like encodeURIComponent."""
    if not proxy.get("enabled", True):
        return url
    return f"{proxy['url']}{quote(url, safe=CHARS_SAFE_IN_URI_COMPONENT)}"


class BaseSource(ABC):
    """Base class for article listing sources.

    Subclasses build the page URL, locate the item list in the response
    body and map one item to an ArticleRecord. fetch_page() does the
    request and turns the outcome into a PageResult. Requests go through
    the httpx client the caller owns, one per fetch session.
    """

    display_name: str = ""
    url_prefix: str = ""
    id_label: str = ""
    placeholder: str = ""

    def __init__(self, config: dict, client: httpx.AsyncClient | None = None):
        self.config = config
        self.client = client

    @property
    @abstractmethod
    def name(self) -> str:
        """Source key, also stamped on every record as its service."""
        ...

    @abstractmethod
    def build_url(self, user_id: str, page: int) -> str:
        """Source API URL for one page of a user's articles."""
        ...

    @abstractmethod
    def parse_items(self, data: Any) -> list[dict]:
        """Extract the raw item list from a decoded response body."""
        ...

    @abstractmethod
    def to_record(self, item: dict, user_id: str) -> ArticleRecord:
        ...

    async def fetch_page(self, user_id: str, page: int) -> PageResult:
        """Request one page. Transport and JSON errors propagate."""
        url = self.build_url(user_id, page)
        resp = await self._request(url)
        if not resp.is_success:
            return PageResult.error(
                f"{self.display_name} returned HTTP {resp.status_code}",
                status_code=resp.status_code,
            )

        items = self.parse_items(resp.json())
        logger.debug(
            "%s page %d: %d items", self.name, page, len(items),
        )
        return PageResult.page([self.to_record(item, user_id) for item in items])

    async def _request(self, url: str) -> httpx.Response:
        if self.client is None:
            raise RuntimeError(f"{self.name} source has no HTTP client")
        return await self.client.get(proxied_url(url, get_proxy_config(self.config)))
