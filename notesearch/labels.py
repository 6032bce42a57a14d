"""Localized labels for presenter messages and export headers."""

from __future__ import annotations

from notesearch.config import get_locale_tag

LABELS: dict[str, dict[str, str]] = {
    "ja": {
        "service": "サービス",
        "title": "タイトル",
        "date": "日付",
        "url": "URL",
        "unknown_date": "日付不明",
        "fetching": "{source} から取得中... ({count}件完了)",
        "found": "{count} 件の記事が見つかりました",
        "none_found": "記事が見つかりません",
        "no_results": "記事が見つかりませんでした。IDが正しいか確認してください。",
        "no_match": "検索条件に一致する記事はありません。",
        "prompt": "IDを入力して「取得」ボタンを押してください",
        "copied": "{count}件のデータをコピーしました。",
        "copy_failed": "コピーに失敗しました。",
        "saved": "{count}件を {path} に保存しました。",
    },
    "en": {
        "service": "Service",
        "title": "Title",
        "date": "Date",
        "url": "URL",
        "unknown_date": "Unknown date",
        "fetching": "Fetching from {source}... ({count} done)",
        "found": "{count} articles found",
        "none_found": "No articles found",
        "no_results": "No articles were found. Check that the ID is correct.",
        "no_match": "No articles match the search.",
        "prompt": "Enter an ID and fetch to list articles",
        "copied": "Copied {count} rows.",
        "copy_failed": "Copy failed.",
        "saved": "Saved {count} articles to {path}.",
    },
}

DEFAULT_LANGUAGE = "en"


def language_for(tag: str) -> str:
    """Map a locale tag like 'ja-JP' to a label language."""
    lang = tag.split("-")[0].lower()
    return lang if lang in LABELS else DEFAULT_LANGUAGE


def get_labels(config: dict) -> dict[str, str]:
    return LABELS[language_for(get_locale_tag(config))]


def export_header(labels: dict[str, str]) -> list[str]:
    """Column labels in export order: service, title, date, url."""
    return [labels["service"], labels["title"], labels["date"], labels["url"]]
