"""Browser engine selection and launch mixin for PlaywrightDriver."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, List, Mapping

from .driver_common import DEFAULT_BROWSER
from .logging_utils import _log_driver_event

logger = logging.getLogger(__name__)


class BrowserEngine(str, Enum):
    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    WEBKIT = "webkit"

    @classmethod
    def resolve(cls, name: Any) -> "BrowserEngine":
        normalized = str(name or "").strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            return cls(DEFAULT_BROWSER)

    def browser_type(self, playwright: Any) -> Any:
        return getattr(playwright, self.value)


class DriverLaunchMixin:
    def _build_launch_kwargs(self) -> Dict[str, Any]:
        options: Mapping[str, Any] = self.launch_options
        kwargs: Dict[str, Any] = {"headless": bool(self.headless)}

        slow_mo = options.get("slow_mo", options.get("slowMo"))
        if isinstance(slow_mo, int) and not isinstance(slow_mo, bool):
            kwargs["slow_mo"] = slow_mo

        raw_args = options.get("args")
        if isinstance(raw_args, (list, tuple)):
            args: List[str] = [item for item in raw_args if isinstance(item, str)]
            kwargs["args"] = args

        for key, value in options.items():
            if key in {"slow_mo", "slowMo", "args", "headless"}:
                continue
            kwargs[key] = value
        return kwargs

    def _launch_browser(self, playwright: Any) -> Any:
        engine = BrowserEngine.resolve(self.browser_type)
        kwargs = self._build_launch_kwargs()
        browser = engine.browser_type(playwright).launch(**kwargs)
        _log_driver_event(
            logger,
            level=logging.INFO,
            event="browser_launched",
            session=self._session_id,
            engine=engine.value,
            headless=kwargs["headless"],
            slow_mo=kwargs.get("slow_mo"),
        )
        return browser

    def _new_context(self, browser: Any) -> Any:
        return browser.new_context(**dict(self.context_options))

    @staticmethod
    def _compact_exception_message(exc: BaseException) -> str:
        text = str(exc).strip()
        if not text:
            return exc.__class__.__name__
        lowered = text.lower()
        if "executable doesn't exist" in lowered:
            return "browser executable not found (run `playwright install`)"
        if len(text) > 220:
            return text[:220] + "..."
        return text
