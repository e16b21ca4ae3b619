"""
Structured logging helpers for driver modules.

Every record reads ``driver session=<n> event=<name> key=value ...``.
Playwright error messages span several lines and carry call logs, so values
are folded onto one line, clipped, and quoted when they contain spaces.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any, Mapping, Optional

_MAX_VALUE_CHARS = 200


def _normalize_log_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        value = value.value
    text = " ".join(str(value).split())
    if len(text) > _MAX_VALUE_CHARS:
        text = text[:_MAX_VALUE_CHARS] + "..."
    if not text or " " in text or '"' in text or "=" in text:
        return json.dumps(text, ensure_ascii=False)
    return text


def _render_log_kv(fields: Mapping[str, Any]) -> str:
    parts: list[str] = []
    for key, value in fields.items():
        if value is None:
            continue
        clean_key = str(key).strip()
        if not clean_key:
            continue
        parts.append(f"{clean_key}={_normalize_log_value(value)}")
    return " ".join(parts)


def _log_driver_event(
    logger: logging.Logger,
    *,
    level: int,
    event: str,
    session: Optional[int] = None,
    **fields: Any,
) -> None:
    if not logger.isEnabledFor(level):
        return
    payload = {"session": session, "event": event}
    payload.update(fields)
    logger.log(level, "driver %s", _render_log_kv(payload))
