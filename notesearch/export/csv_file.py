"""Write the result list to a CSV file Excel opens as UTF-8."""

from __future__ import annotations

import csv
import io
import logging

from notesearch.export import register_exporter
from notesearch.export.base import BaseExporter
from notesearch.labels import export_header
from notesearch.models import ArticleRecord

logger = logging.getLogger(__name__)


def format_csv(records: list[ArticleRecord], labels: dict[str, str]) -> str:
    """Unquoted header row, then rows with every field double-quoted.

    Embedded quotes are doubled and rows end with '\\n'.
    """
    buf = io.StringIO()
    buf.write(",".join(export_header(labels)) + "\n")
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for r in records:
        writer.writerow([r.service, r.title, r.formatted_date, r.url])
    return buf.getvalue().rstrip("\n")


@register_exporter("csv")
class CsvExporter(BaseExporter):

    @property
    def name(self) -> str:
        return "csv"

    async def export(self, records: list[ArticleRecord]) -> str:
        path = self._output_path("csv")
        # utf-8-sig writes the byte-order mark
        with path.open("w", newline="", encoding="utf-8-sig") as f:
            f.write(format_csv(records, self.labels))
        logger.info("Wrote %d rows to %s", len(records), path)
        return str(path)
