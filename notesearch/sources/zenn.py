"""Zenn source adapter via the public articles API."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlencode

from notesearch.models import ArticleRecord
from notesearch.sources import register_source
from notesearch.sources.base import BaseSource, first_of, from_field

ZENN_BASE_URL = "https://zenn.dev"
ZENN_API_URL = f"{ZENN_BASE_URL}/api/articles"


def _from_path(item: dict, user_id: str) -> str | None:
    path = item.get("path")
    if not path:
        return None
    return f"{ZENN_BASE_URL}{path}"


def _canonical_url(item: dict, user_id: str) -> str | None:
    slug = item.get("slug")
    if not slug:
        return None
    return f"{ZENN_BASE_URL}/{user_id}/articles/{slug}"


URL_FIELDS = (_from_path, _canonical_url)
DATE_FIELDS = (from_field("published_at"),)


@register_source("zenn")
class ZennSource(BaseSource):
    """Fetch a user's articles from zenn.dev, newest first."""

    display_name = "Zenn"
    url_prefix = "zenn.dev/"
    id_label = "username"
    placeholder = "zenn_official"

    @property
    def name(self) -> str:
        return "zenn"

    def build_url(self, user_id: str, page: int) -> str:
        params = {"username": user_id, "order": "latest", "page": page}
        return f"{ZENN_API_URL}?{urlencode(params)}"

    def parse_items(self, data: Any) -> list[dict]:
        if not isinstance(data, dict):
            return []
        return data.get("articles") or []

    def to_record(self, item: dict, user_id: str) -> ArticleRecord:
        return ArticleRecord(
            title=item.get("title") or "",
            url=first_of(URL_FIELDS, item, user_id) or "",
            date=first_of(DATE_FIELDS, item, user_id),
            service=self.name,
        )
