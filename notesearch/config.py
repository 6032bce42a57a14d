"""Load configuration from YAML and read settings with built-in defaults."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from notesearch.models import PaginationPolicy

DEFAULT_CONFIG_PATH = "config.yaml"

DEFAULT_PROXY_URL = "https://corsproxy.io/?"
DEFAULT_TIMEOUT = 30
DEFAULT_USER_AGENT = "notesearch/0.1 (article list exporter)"
DEFAULT_LOCALE = "ja-JP"


def load_config(path: str | Path = DEFAULT_CONFIG_PATH) -> dict[str, Any]:
    """Load config from a YAML file. Values are taken literally."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    return raw or {}


def load_config_or_default(path: str | Path | None = None) -> dict[str, Any]:
    """Load an explicitly named config, or config.yaml if it exists.

    An explicit path that does not exist is an error; a missing default
    file just means built-in defaults.
    """
    if path:
        return load_config(path)
    env_path = os.environ.get("CONFIG_PATH")
    if env_path:
        return load_config(env_path)
    if Path(DEFAULT_CONFIG_PATH).is_file():
        return load_config(DEFAULT_CONFIG_PATH)
    return {}


def get_proxy_config(config: dict) -> dict:
    """Proxy prefix applied to every outbound source URL."""
    cfg = config.get("proxy", {})
    return {
        "enabled": cfg.get("enabled", True),
        "url": cfg.get("url") or DEFAULT_PROXY_URL,
    }


def get_http_config(config: dict) -> dict:
    cfg = config.get("http", {})
    return {
        "timeout": cfg.get("timeout", DEFAULT_TIMEOUT),
        "user_agent": cfg.get("user_agent", DEFAULT_USER_AGENT),
    }


def get_pagination_policy(config: dict) -> PaginationPolicy:
    """Build the pagination stop policy from config."""
    cfg = config.get("pagination", {})
    return PaginationPolicy(
        min_batch_size=int(cfg.get("min_batch_size", 5)),
        max_pages=int(cfg.get("max_pages", 100)),
        stop_on_http_error=bool(cfg.get("stop_on_http_error", True)),
    )


def get_locale_tag(config: dict) -> str:
    return config.get("locale", {}).get("tag") or DEFAULT_LOCALE


def get_timezone(config: dict) -> str | None:
    """IANA timezone for displayed dates, or None to keep the source offset."""
    return config.get("locale", {}).get("timezone") or None


def get_export_config(config: dict, name: str) -> dict:
    """Settings for one exporter, with the shared output_dir filled in."""
    export_cfg = config.get("export", {})
    cfg = dict(export_cfg.get(name, {}) or {})
    cfg.setdefault("output_dir", export_cfg.get("output_dir", "."))
    return cfg


def get_log_path(config: dict) -> str:
    return config.get("logging", {}).get("path", "data/notesearch.log")


def get_log_level(config: dict) -> str:
    return str(config.get("logging", {}).get("level", "INFO")).upper()
