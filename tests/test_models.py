"""Tests for pagination policy and page results."""

from __future__ import annotations

from notesearch.models import PageKind, PageResult, PaginationPolicy


def test_stop_reason():
    policy = PaginationPolicy()
    assert policy.stop_reason(0, 1) == "exhausted"
    assert policy.stop_reason(4, 1) == "short_batch"
    assert policy.stop_reason(5, 1) is None
    assert policy.stop_reason(100, 99) is None
    assert policy.stop_reason(100, 100) == "max_pages"


def test_empty_page_is_end():
    assert PageResult.page([]).kind is PageKind.END


def test_error_result_carries_cause():
    result = PageResult.error("note returned HTTP 404", status_code=404)
    assert result.kind is PageKind.ERROR
    assert result.records == []
    assert result.status_code == 404
