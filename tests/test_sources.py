"""Tests for the source registry and shared adapter plumbing."""

from __future__ import annotations

from urllib.parse import unquote

import httpx
import pytest

from notesearch.errors import UnknownSourceError
from notesearch.models import PageKind
from notesearch.sources import SOURCES, get_source
from notesearch.sources.base import first_of, from_field, proxied_url
from notesearch.sources.note import URL_FIELDS as NOTE_URL_FIELDS
from notesearch.sources.qiita import QiitaSource

PROXY = {"enabled": True, "url": "https://corsproxy.io/?"}


def test_registry_has_all_sources():
    assert set(SOURCES) == {"note", "zenn", "qiita"}
    for key, cls in SOURCES.items():
        source = cls({})
        assert source.name == key
        assert cls.display_name
        assert cls.placeholder


def test_get_source_unknown_key():
    with pytest.raises(UnknownSourceError, match="hatena"):
        get_source("hatena", {})


def test_proxied_url_encodes_like_encode_uri_component():
    target = "https://qiita.com/api/v2/items?query=user%3Afoo&page=1"
    assert proxied_url(target, PROXY) == (
        "https://corsproxy.io/?https%3A%2F%2Fqiita.com%2Fapi%2Fv2%2Fitems"
        "%3Fquery%3Duser%253Afoo%26page%3D1"
    )


def test_proxied_url_disabled_passes_through():
    target = "https://zenn.dev/api/articles?username=a&page=1"
    assert proxied_url(target, {"enabled": False, "url": "x"}) == target


def test_first_of_takes_first_non_empty():
    chain = (from_field("a"), from_field("b"), lambda item, user: f"{user}-c")
    assert first_of(chain, {"a": "", "b": "bee"}, "u") == "bee"
    assert first_of(chain, {"a": None}, "u") == "u-c"
    assert first_of((from_field("a"),), {}, "u") is None


def test_note_url_chain_priority():
    item = {
        "noteUrl": "https://note.com/u/n/primary",
        "note_full_url": "https://note.com/u/n/secondary",
        "key": "nkey",
    }
    assert first_of(NOTE_URL_FIELDS, item, "u") == "https://note.com/u/n/primary"
    del item["noteUrl"]
    assert first_of(NOTE_URL_FIELDS, item, "u") == "https://note.com/u/n/secondary"
    del item["note_full_url"]
    assert first_of(NOTE_URL_FIELDS, item, "u") == "https://note.com/u/n/nkey"
    assert first_of(NOTE_URL_FIELDS, {}, "u") is None


@pytest.mark.asyncio
async def test_requests_are_routed_through_proxy():
    """Every adapter call goes to the proxy with the target URL encoded."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    config = {"proxy": PROXY}
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        result = await QiitaSource(config, client=client).fetch_page("alice", 1)

    assert result.kind is PageKind.END
    assert len(seen) == 1
    request_url = str(seen[0].url)
    assert seen[0].url.host == "corsproxy.io"
    assert "https://qiita.com/api/v2/items?query=user%3Aalice&page=1&per_page=100" in (
        unquote(request_url)
    )


@pytest.mark.asyncio
async def test_direct_request_without_proxy():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"articles": []})

    config = {"proxy": {"enabled": False}}
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        await get_source("zenn", config, client=client).fetch_page("bob", 2)

    assert seen[0].url.host == "zenn.dev"
    assert seen[0].url.params["username"] == "bob"
    assert seen[0].url.params["page"] == "2"


@pytest.mark.asyncio
async def test_fetch_page_requires_a_client():
    with pytest.raises(RuntimeError, match="no HTTP client"):
        await QiitaSource({}).fetch_page("alice", 1)
