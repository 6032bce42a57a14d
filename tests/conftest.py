"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from notesearch.config import load_config
from notesearch.models import ArticleRecord, PageResult
from notesearch.present import BasePresenter


@pytest.fixture
def sample_config(tmp_path):
    """Config with the proxy disabled and exports under tmp_path."""
    config_text = """
proxy:
  enabled: false

http:
  timeout: 5

pagination:
  min_batch_size: 5
  max_pages: 100
  stop_on_http_error: true

locale:
  tag: "ja-JP"

export:
  output_dir: "OUTPUT_DIR"

logging:
  path: "LOG_PATH"
"""
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(
        config_text
        .replace("OUTPUT_DIR", str(tmp_path / "out"))
        .replace("LOG_PATH", str(tmp_path / "notesearch.log"))
    )
    return load_config(str(cfg_path))


@pytest.fixture
def presenter():
    return MagicMock(spec=BasePresenter)


@pytest.fixture
def sample_records():
    """Formatted records as they come out of a finished session."""
    return [
        ArticleRecord(
            title="Intro to Go",
            url="https://qiita.com/alice/items/1",
            date="2024-01-15T00:00:00Z",
            service="qiita",
            formatted_date="2024/1/15",
        ),
        ArticleRecord(
            title="Rust Basics",
            url="https://qiita.com/alice/items/2",
            date="2024-02-01T09:30:00+09:00",
            service="qiita",
            formatted_date="2024/2/1",
        ),
        ArticleRecord(
            title="go fast",
            url="https://qiita.com/alice/items/3",
            date=None,
            service="qiita",
            formatted_date="日付不明",
        ),
    ]


def _make_batch(size: int, service: str = "qiita") -> PageResult:
    return PageResult.page([
        ArticleRecord(
            title=f"Article {i}",
            url=f"https://example.com/{service}/{i}",
            date="2024-01-15T00:00:00Z",
            service=service,
        )
        for i in range(size)
    ])


@pytest.fixture
def make_batch():
    """Factory for PAGE results holding size raw records."""
    return _make_batch
