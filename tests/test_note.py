"""Tests for the note.com source adapter."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from notesearch.models import PageKind
from notesearch.sources.note import NoteSource

MOCK_NOTE_RESPONSE = {
    "data": {
        "contents": [
            {
                "name": "はじめてのnote",
                "key": "n1a2b3c4d5",
                "noteUrl": "https://note.com/iitomo3/n/n1a2b3c4d5",
                "publishAt": "2024-01-15T12:00:00+09:00",
            },
            {
                "name": "Second post",
                "key": "n9z8y7x6w5",
                "note_full_url": "https://note.com/iitomo3/n/n9z8y7x6w5",
                "publish_at": "2024-01-16T08:00:00+09:00",
            },
            {
                "name": "Draft-era post",
                "key": "nkeyonly00",
                "status_publish_at": "2023-12-01T00:00:00+09:00",
            },
        ],
        "isLastPage": True,
    },
}


@pytest.mark.asyncio
@patch("notesearch.sources.note.NoteSource._request", new_callable=AsyncMock)
async def test_note_maps_contents(mock_request):
    """note contents become records with url/date fallbacks applied."""
    mock_request.return_value = httpx.Response(200, json=MOCK_NOTE_RESPONSE)

    result = await NoteSource({}).fetch_page("iitomo3", 1)

    assert result.kind is PageKind.PAGE
    records = result.records
    assert len(records) == 3
    assert all(r.service == "note" for r in records)
    assert all(r.formatted_date == "" for r in records)

    assert records[0].title == "はじめてのnote"
    assert records[0].url == "https://note.com/iitomo3/n/n1a2b3c4d5"
    assert records[0].date == "2024-01-15T12:00:00+09:00"

    # noteUrl missing: note_full_url, publish_at
    assert records[1].url == "https://note.com/iitomo3/n/n9z8y7x6w5"
    assert records[1].date == "2024-01-16T08:00:00+09:00"

    # No URL field at all: synthesized from user and key
    assert records[2].url == "https://note.com/iitomo3/n/nkeyonly00"
    assert records[2].date == "2023-12-01T00:00:00+09:00"


@pytest.mark.asyncio
@patch("notesearch.sources.note.NoteSource._request", new_callable=AsyncMock)
async def test_note_empty_contents_is_end(mock_request):
    mock_request.return_value = httpx.Response(
        200, json={"data": {"contents": [], "isLastPage": True}},
    )
    result = await NoteSource({}).fetch_page("iitomo3", 4)
    assert result.kind is PageKind.END
    assert result.records == []


@pytest.mark.asyncio
@patch("notesearch.sources.note.NoteSource._request", new_callable=AsyncMock)
async def test_note_missing_envelope_is_end(mock_request):
    mock_request.return_value = httpx.Response(200, json={"data": None})
    result = await NoteSource({}).fetch_page("iitomo3", 1)
    assert result.kind is PageKind.END


@pytest.mark.asyncio
@patch("notesearch.sources.note.NoteSource._request", new_callable=AsyncMock)
async def test_note_unknown_creator_is_error_result(mock_request):
    """A 404 for an unknown creator is reported, not raised."""
    mock_request.return_value = httpx.Response(404, json={"error": "not found"})

    result = await NoteSource({}).fetch_page("nobody", 1)

    assert result.kind is PageKind.ERROR
    assert result.status_code == 404
    assert "404" in result.cause


def test_note_build_url():
    url = NoteSource({}).build_url("iitomo3", 2)
    assert url == "https://note.com/api/v2/creators/iitomo3/contents?kind=note&page=2"


def test_note_metadata():
    assert NoteSource.display_name == "note"
    assert NoteSource.url_prefix == "note.com/"
    assert NoteSource({}).name == "note"
