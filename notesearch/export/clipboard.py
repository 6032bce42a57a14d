"""Copy the result list to the system clipboard as tab-separated values."""

from __future__ import annotations

import asyncio
import logging
import shlex
import shutil
import webbrowser

from notesearch.errors import ExportError
from notesearch.export import register_exporter
from notesearch.export.base import BaseExporter
from notesearch.labels import export_header
from notesearch.models import ArticleRecord

logger = logging.getLogger(__name__)

SHEETS_NEW_URL = "https://sheets.new"

# First available wins
CLIPBOARD_COMMANDS = [
    ["pbcopy"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
    ["clip"],
]


def format_tsv(records: list[ArticleRecord], labels: dict[str, str]) -> str:
    """Header plus one row per record; tabs and newlines are not escaped."""
    lines = ["\t".join(export_header(labels))]
    for r in records:
        lines.append(f"{r.service}\t{r.title}\t{r.formatted_date}\t{r.url}")
    return "\n".join(lines)


def find_clipboard_command(configured: str | list | None = None) -> list[str] | None:
    """Configured command, else the first clipboard tool found on PATH."""
    if configured:
        if isinstance(configured, str):
            return shlex.split(configured)
        return [str(part) for part in configured]
    for cmd in CLIPBOARD_COMMANDS:
        if shutil.which(cmd[0]):
            return cmd
    return None


@register_exporter("clipboard")
class ClipboardExporter(BaseExporter):
    """Paste-ready TSV for spreadsheets."""

    @property
    def name(self) -> str:
        return "clipboard"

    async def export(self, records: list[ArticleRecord]) -> str:
        settings = self.settings
        cmd = find_clipboard_command(settings.get("command"))
        if not cmd:
            raise ExportError(
                "No clipboard command found; set export.clipboard.command",
            )

        payload = format_tsv(records, self.labels)
        await self._copy(cmd, payload)
        logger.info("Copied %d rows to clipboard via %s", len(records), cmd[0])

        if settings.get("open_sheet", False):
            webbrowser.open(SHEETS_NEW_URL)
        return "clipboard"

    @staticmethod
    async def _copy(cmd: list[str], text: str) -> None:
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise ExportError(f"Could not run {cmd[0]}: {exc}") from exc

        _, stderr = await proc.communicate(input=text.encode("utf-8"))
        if proc.returncode != 0:
            err = stderr.decode(errors="replace").strip()
            raise ExportError(
                f"{cmd[0]} exited with code {proc.returncode}: {err[:200]}",
            )
