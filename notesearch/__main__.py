"""CLI entrypoint: python -m notesearch {fetch|sources}."""

from __future__ import annotations

import argparse
import asyncio
import logging
import logging.handlers
import sys
from pathlib import Path

from notesearch.config import get_log_level, get_log_path, load_config_or_default


def setup_logging(config: dict) -> None:
    """Configure logging with console + rotating file output."""
    root = logging.getLogger()
    root.setLevel(get_log_level(config))

    fmt = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler()
    console.setFormatter(fmt)
    root.addHandler(console)

    # File handler (rotate at 5MB, keep 3 backups)
    log_file = Path(get_log_path(config))
    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.handlers.RotatingFileHandler(
        str(log_file), maxBytes=5 * 1024 * 1024, backupCount=3,
    )
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def cmd_sources(config: dict, args: argparse.Namespace) -> int:
    """List registered sources."""
    from notesearch.sources import SOURCES

    header = f"{'Key':<8} {'Name':<8} {'Profile URL':<14} {'ID':<10} {'Example'}"
    print(header)
    print("-" * 60)
    for key, cls in SOURCES.items():
        print(
            f"{key:<8} {cls.display_name:<8} {cls.url_prefix:<14} "
            f"{cls.id_label:<10} {cls.placeholder}"
        )
    return 0


async def cmd_fetch(config: dict, args: argparse.Namespace) -> int:
    """Fetch all of a user's articles, print them and run exports."""
    from notesearch.browser import ArticleBrowser
    from notesearch.errors import FetchError
    from notesearch.labels import get_labels
    from notesearch.present import ConsolePresenter

    presenter = ConsolePresenter(get_labels(config))
    browser = ArticleBrowser(config, presenter, source_key=args.source)

    try:
        records = await browser.fetch(args.user_id, query=args.query)
    except FetchError:
        return 1
    if records is None:
        print("Error: user ID must not be blank", file=sys.stderr)
        return 1

    failed = 0
    for kind in args.export or []:
        ok = await browser.export(
            kind,
            output_dir=args.output_dir,
            open_sheet=args.open_sheet or None,
        )
        if not ok and records:
            failed += 1
    return 1 if failed else 0


COMMANDS = {
    "fetch": cmd_fetch,
    "sources": cmd_sources,
}


def build_parser() -> argparse.ArgumentParser:
    from notesearch.export import EXPORTERS
    from notesearch.sources import SOURCES

    parser = argparse.ArgumentParser(
        prog="notesearch",
        description="List and export a user's articles from note, Zenn or Qiita",
    )
    parser.add_argument(
        "--config", default=None,
        help="Config file path (default: config.yaml or CONFIG_PATH env)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("sources", help="List supported sources")

    fetch = sub.add_parser("fetch", help="Fetch every page of a user's articles")
    fetch.add_argument("source", choices=sorted(SOURCES), help="Source key")
    fetch.add_argument("user_id", help="User ID on the source")
    fetch.add_argument(
        "-q", "--query", default="",
        help="Only show titles containing this text (case-insensitive)",
    )
    fetch.add_argument(
        "-e", "--export", action="append", choices=sorted(EXPORTERS),
        help="Export format; repeat for several",
    )
    fetch.add_argument(
        "-o", "--output-dir", default=None,
        help="Directory for exported files (default: export.output_dir)",
    )
    fetch.add_argument(
        "--open-sheet", action="store_true",
        help="Open a new Google Sheet after copying to the clipboard",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    config = load_config_or_default(args.config)
    setup_logging(config)
    handler = COMMANDS[args.command]

    if asyncio.iscoroutinefunction(handler):
        code = asyncio.run(handler(config, args))
    else:
        code = handler(config, args)
    sys.exit(code)


if __name__ == "__main__":
    main()
