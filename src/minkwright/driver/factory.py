"""Build a PlaywrightDriver from explicit params with environment fallbacks."""

from __future__ import annotations

import os
from typing import Any, Dict, Mapping, Optional

from .driver_common import DEFAULT_BROWSER, _parse_bool_env, _parse_int_env, _split_csv_env
from .playwright_driver import PlaywrightDriver


def _mapping_param(params: Mapping[str, Any], key: str) -> Dict[str, Any]:
    value = params.get(key)
    return dict(value) if isinstance(value, Mapping) else {}


def launch_options_from_env() -> Dict[str, Any]:
    options: Dict[str, Any] = {}
    slow_mo = _parse_int_env("PLAYWRIGHT_SLOW_MO", None)
    if slow_mo is not None:
        options["slow_mo"] = max(0, slow_mo)
    args = _split_csv_env("PLAYWRIGHT_LAUNCH_ARGS")
    if args:
        options["args"] = args
    return options


def create_driver(params: Optional[Mapping[str, Any]] = None) -> PlaywrightDriver:
    """
    Create a driver the way the driver test-suite configuration does.

    Recognised params: ``browser``, ``headless``, ``launch`` and ``context``.
    Missing values fall back to ``PLAYWRIGHT_BROWSER``, ``PLAYWRIGHT_HEADLESS``,
    ``PLAYWRIGHT_SLOW_MO`` and ``PLAYWRIGHT_LAUNCH_ARGS``.
    """
    params = dict(params or {})

    browser = params.get("browser")
    if not isinstance(browser, str) or not browser.strip():
        browser = os.getenv("PLAYWRIGHT_BROWSER", "").strip() or DEFAULT_BROWSER

    headless = params.get("headless")
    if headless is None:
        headless = _parse_bool_env("PLAYWRIGHT_HEADLESS", True)

    launch = launch_options_from_env()
    launch.update(_mapping_param(params, "launch"))

    return PlaywrightDriver(
        browser_type=browser,
        headless=bool(headless),
        launch_options=launch,
        context_options=_mapping_param(params, "context"),
    )
