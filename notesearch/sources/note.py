"""note.com source adapter via the creators contents API."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote, urlencode

from notesearch.models import ArticleRecord
from notesearch.sources import register_source
from notesearch.sources.base import BaseSource, first_of, from_field

NOTE_API_URL = "https://note.com/api/v2/creators/{user}/contents"


def _canonical_url(item: dict, user_id: str) -> str | None:
    key = item.get("key")
    if not key:
        return None
    return f"https://note.com/{user_id}/n/{key}"


TITLE_FIELDS = (from_field("name"), from_field("title"))
URL_FIELDS = (from_field("noteUrl"), from_field("note_full_url"), _canonical_url)
DATE_FIELDS = (
    from_field("publishAt"),
    from_field("publish_at"),
    from_field("status_publish_at"),
)


@register_source("note")
class NoteSource(BaseSource):
    """Fetch a creator's notes from note.com."""

    display_name = "note"
    url_prefix = "note.com/"
    id_label = "note ID"
    placeholder = "iitomo3"

    @property
    def name(self) -> str:
        return "note"

    def build_url(self, user_id: str, page: int) -> str:
        params = {"kind": "note", "page": page}
        return f"{NOTE_API_URL.format(user=quote(user_id, safe=''))}?{urlencode(params)}"

    def parse_items(self, data: Any) -> list[dict]:
        if not isinstance(data, dict):
            return []
        return (data.get("data") or {}).get("contents") or []

    def to_record(self, item: dict, user_id: str) -> ArticleRecord:
        return ArticleRecord(
            title=first_of(TITLE_FIELDS, item, user_id) or "",
            url=first_of(URL_FIELDS, item, user_id) or "",
            date=first_of(DATE_FIELDS, item, user_id),
            service=self.name,
        )
