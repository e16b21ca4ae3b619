"""Shared constants and helpers for Playwright driver modules."""

from __future__ import annotations

import os
import re
from typing import Any, List, Optional


DEFAULT_BROWSER = "chromium"
DEFAULT_COOKIE_URL = "http://localhost/"
MAXIMIZED_VIEWPORT = {"width": 1920, "height": 1080}

# Window discovery: short interval, short deadline.
POLL_INTERVAL_MS = 50
WINDOW_DISCOVERY_TIMEOUT_S = 1.0

# User supplied condition waits.
WAIT_POLL_INTERVAL_S = 0.1


def _safe_title(value: Any) -> str:
    try:
        return str(value) if value is not None else ""
    except Exception:
        return ""


def _normalize_visible_text(value: Any) -> str:
    text = _safe_title(value).replace("\u00A0", " ")
    return re.sub(r"\s+", " ", text).strip()


def _parse_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    text = raw.strip().lower()
    if text in {"1", "true", "yes", "on"}:
        return True
    if text in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_int_env(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _split_csv_env(name: str) -> List[str]:
    raw = os.getenv(name, "")
    return [item.strip() for item in raw.split(",") if item.strip()]


def _xpath_selector(xpath: str) -> str:
    return xpath if xpath.startswith("xpath=") else f"xpath={xpath}"


def _xpath_literal(value: str) -> str:
    """Quote ``value`` for use inside an XPath expression."""
    if '"' not in value:
        return f'"{value}"'
    if "'" not in value:
        return f"'{value}'"
    parts = value.split('"')
    return "concat(" + ", '\"', ".join(f'"{part}"' for part in parts) + ")"
