"""Qiita source adapter via the v2 items search API."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlencode

from notesearch.models import ArticleRecord
from notesearch.sources import register_source
from notesearch.sources.base import BaseSource, first_of, from_field

QIITA_API_URL = "https://qiita.com/api/v2/items"
PER_PAGE = 100


def _canonical_url(item: dict, user_id: str) -> str | None:
    item_id = item.get("id")
    if not item_id:
        return None
    return f"https://qiita.com/{user_id}/items/{item_id}"


URL_FIELDS = (from_field("url"), _canonical_url)
DATE_FIELDS = (from_field("created_at"),)


@register_source("qiita")
class QiitaSource(BaseSource):
    """Fetch a user's items from qiita.com."""

    display_name = "Qiita"
    url_prefix = "qiita.com/"
    id_label = "user ID"
    placeholder = "qiita_official"

    @property
    def name(self) -> str:
        return "qiita"

    def build_url(self, user_id: str, page: int) -> str:
        params = {"query": f"user:{user_id}", "page": page, "per_page": PER_PAGE}
        return f"{QIITA_API_URL}?{urlencode(params)}"

    def parse_items(self, data: Any) -> list[dict]:
        # The body is a bare array of items
        if not isinstance(data, list):
            return []
        return data

    def to_record(self, item: dict, user_id: str) -> ArticleRecord:
        return ArticleRecord(
            title=item.get("title") or "",
            url=first_of(URL_FIELDS, item, user_id) or "",
            date=first_of(DATE_FIELDS, item, user_id),
            service=self.name,
        )
