"""Window and frame switching mixin for PlaywrightDriver."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, List, Optional

from .driver_common import (
    MAXIMIZED_VIEWPORT,
    POLL_INTERVAL_MS,
    WINDOW_DISCOVERY_TIMEOUT_S,
    _safe_title,
    _xpath_literal,
)
from .driver_scripts import WINDOW_NAME_JS
from .errors import DriverException

logger = logging.getLogger(__name__)


def _window_name_of(page: Any) -> str:
    try:
        value = page.evaluate(WINDOW_NAME_JS)
    except Exception:
        return ""
    return value if isinstance(value, str) else ""


class DriverWindowsMixin:
    def _poll_for_windows(self, until: Optional[Callable[[], bool]] = None) -> None:
        """
        Give pending page events a chance to arrive.

        Playwright's sync API only delivers events while a call is in
        flight, so this keeps the active page busy in short sleeps until the
        discovery deadline or until ``until`` holds.
        """
        deadline = time.monotonic() + WINDOW_DISCOVERY_TIMEOUT_S
        while time.monotonic() < deadline:
            try:
                self._state.page.wait_for_timeout(POLL_INTERVAL_MS)
            except Exception:
                time.sleep(POLL_INTERVAL_MS / 1000.0)
            if until is not None and until():
                return

    def _context_pages(self) -> List[Any]:
        self._live_page()
        return list(self._safe(lambda: self._state.context.pages))

    def switch_to_window(self, name: Optional[str] = None) -> None:
        pages = self._context_pages()
        if name is None:
            target = pages[0] if pages else self._state.page
            self._activate_page(target, keep_response=True)
            return

        if len(pages) < 2:
            self._poll_for_windows(until=lambda: len(self._state.context.pages) > 1)
            pages = self._context_pages()

        for page in pages:
            if _window_name_of(page) == name:
                self._activate_page(page, keep_response=True)
                return
            title = self._safe(page.title)
            if title == name or name in _safe_title(page.url):
                self._activate_page(page, keep_response=True)
                return

        raise DriverException(f"Window not found: {name}")

    def switch_to_iframe(self, name: Optional[str] = None) -> None:
        if name is None:
            self._state = self._state.with_frame_scope(None)
            return

        page = self._live_page("switchToIFrame")
        if name.startswith(("//", ".//", "xpath=")):
            selector = name if name.startswith("xpath=") else f"xpath={name}"
        elif name[:1] in {"#", "."}:
            selector = name
        else:
            literal = _xpath_literal(name)
            selector = f"xpath=//iframe[@name={literal}] | //iframe[@id={literal}]"
        self._state = self._state.with_frame_scope(self._safe(lambda: page.frame_locator(selector)))

    def get_window_names(self) -> List[str]:
        self._live_page("getWindowNames")
        self._poll_for_windows()

        names: List[str] = []
        for index, page in enumerate(self._context_pages()):
            name = _window_name_of(page)
            if not name:
                title = self._safe(page.title)
                name = title or page.url or f"window#{index}"
            names.append(name)
        return names

    def get_window_name(self) -> str:
        page = self._live_page("getWindowName")
        title = self._safe(page.title)
        return title or page.url or "window#0"

    def resize_window(self, width: int, height: int, name: Optional[str] = None) -> None:
        if name is not None:
            self.switch_to_window(name)
        page = self._live_page("resizeWindow")
        self._safe(lambda: page.set_viewport_size({"width": int(width), "height": int(height)}))

    def maximize_window(self, name: Optional[str] = None) -> None:
        if name is not None:
            self.switch_to_window(name)
        page = self._live_page("maximizeWindow")
        self._safe(lambda: page.set_viewport_size(dict(MAXIMIZED_VIEWPORT)))
