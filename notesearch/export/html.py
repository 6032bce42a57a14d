"""Render the result list as a self-contained HTML page."""

from __future__ import annotations

import html
import logging
from urllib.parse import urlsplit

from notesearch.config import get_locale_tag
from notesearch.export import register_exporter
from notesearch.export.base import BaseExporter
from notesearch.labels import language_for
from notesearch.models import ArticleRecord

logger = logging.getLogger(__name__)

LINKABLE_SCHEMES = ("http", "https")

SERVICE_COLOR = {
    "note": "#41c9b4",
    "zenn": "#3ea8ff",
    "qiita": "#55c500",
}


def _e(text: str | None) -> str:
    """Escape text for safe HTML output."""
    return html.escape(text or "", quote=True)


def _safe_href(url: str | None) -> str:
    """Escaped url for an href, or "#" unless it is plain http(s)."""
    try:
        scheme = urlsplit((url or "").strip()).scheme.lower()
    except ValueError:
        return "#"
    if scheme not in LINKABLE_SCHEMES:
        return "#"
    return _e(url)


def render_article_list(
    records: list[ArticleRecord],
    labels: dict[str, str],
    lang: str = "en",
) -> str:
    """Render records as an HTML page.

    Titles and URLs are escaped. Only http(s) URLs are emitted as links.
    """
    items_html = []
    for record in records:
        color = SERVICE_COLOR.get(record.service, "#505050")
        items_html.append(
            f'<div class="article-item">'
            f'<span class="badge" style="background:{color}">{_e(record.service)}</span>'
            f'<a class="article-title" href="{_safe_href(record.url)}" target="_blank" '
            f'rel="noopener">{_e(record.title)}</a>'
            f'<p class="article-date">{_e(record.formatted_date)}</p>'
            f'</div>'
        )

    if items_html:
        body = "".join(items_html)
    else:
        body = f'<div class="empty-state"><p>{_e(labels["no_results"])}</p></div>'

    count_text = labels["found"] if records else labels["none_found"]
    return _TEMPLATE.format(
        lang=_e(lang),
        title=_e(count_text.format(count=len(records))),
        body=body,
    )


@register_exporter("html")
class HtmlExporter(BaseExporter):

    @property
    def name(self) -> str:
        return "html"

    async def export(self, records: list[ArticleRecord]) -> str:
        page = render_article_list(
            records, self.labels, lang=language_for(get_locale_tag(self.config)),
        )
        path = self._output_path("html")
        path.write_text(page, encoding="utf-8")
        logger.info("Wrote %d articles to %s", len(records), path)
        return str(path)


_TEMPLATE = """\
<!DOCTYPE html>
<html lang="{lang}">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{title}</title>
<style>
body {{
  font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
  font-size: 15px;
  line-height: 1.5;
  color: #1a1a1a;
  background: #ffffff;
  max-width: 760px;
  margin: 0 auto;
  padding: 0 12px 24px;
}}
.header {{
  font-weight: 700;
  padding: 16px 0;
  border-bottom: 2px solid #14213d;
  margin-bottom: 12px;
}}
.article-item {{
  background: #f5f5f5;
  border: 1px solid #e0e0e0;
  border-radius: 6px;
  padding: 10px 12px;
  margin-bottom: 8px;
}}
.badge {{
  color: #ffffff;
  font-size: 11px;
  font-weight: 700;
  padding: 1px 6px;
  border-radius: 3px;
  margin-right: 8px;
}}
.article-title {{ color: #0066cc; text-decoration: none; font-weight: 600; }}
.article-date {{ color: #505050; font-size: 13px; margin: 4px 0 0; }}
.empty-state {{ color: #505050; text-align: center; padding: 24px 0; }}
</style>
</head>
<body>
<div class="header">{title}</div>
{body}
</body>
</html>"""
