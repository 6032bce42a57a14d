"""Parse source timestamps and render them as localized calendar dates."""

from __future__ import annotations

import logging
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

# Numeric short-date layouts, unpadded like browser toLocaleDateString()
LOCALE_DATE_FORMATS = {
    "ja-JP": "{y}/{m}/{d}",
    "zh-CN": "{y}/{m}/{d}",
    "ko-KR": "{y}. {m}. {d}.",
    "en-US": "{m}/{d}/{y}",
    "en-GB": "{d:02d}/{m:02d}/{y}",
    "de-DE": "{d}.{m}.{y}",
    "fr-FR": "{d:02d}/{m:02d}/{y}",
}

ISO_DATE_FORMAT = "{y:04d}-{m:02d}-{d:02d}"


# Shapes datetime.fromisoformat() rejects before Python 3.11
FALLBACK_TIMESTAMP_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f",
)


def parse_date(raw: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp; None if missing or unparseable."""
    if not raw or not isinstance(raw, str):
        return None
    text = raw.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass
    for fmt in FALLBACK_TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def _date_format_for(locale_tag: str) -> str:
    if locale_tag in LOCALE_DATE_FORMATS:
        return LOCALE_DATE_FORMATS[locale_tag]
    lang = locale_tag.split("-")[0].lower()
    for tag, fmt in LOCALE_DATE_FORMATS.items():
        if tag.split("-")[0].lower() == lang:
            return fmt
    return ISO_DATE_FORMAT


def format_date(
    raw: str | None,
    locale_tag: str,
    unknown: str,
    timezone: str | None = None,
) -> str:
    """Render raw as a localized date string, or return the unknown sentinel.

    Aware timestamps are converted to timezone when one is given; otherwise
    the calendar date is taken in the offset the source supplied.
    """
    parsed = parse_date(raw)
    if parsed is None:
        return unknown

    if timezone and parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone(ZoneInfo(timezone))
        except ZoneInfoNotFoundError:
            logger.warning("Unknown timezone '%s', keeping source offset", timezone)

    return _date_format_for(locale_tag).format(
        y=parsed.year, m=parsed.month, d=parsed.day,
    )
