"""
Playwright powered Mink style driver.

``PlaywrightDriver`` maps the driver contract from ``core_driver`` onto
Playwright's synchronous API. All session handles live in one
``SessionState`` value; page-level operations go through
``_run_with_recovery`` so a closed page or context is replaced once before
the operation is retried. Element, window and cookie operations resolve the
page through ``_live_page`` and recover a closed page before they start.
"""

from __future__ import annotations

import base64
import logging
import time
import weakref
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, TypeVar, Union
from urllib.parse import quote, unquote

from playwright.sync_api import sync_playwright

from .core_driver import CoreDriver
from .driver_common import DEFAULT_BROWSER, DEFAULT_COOKIE_URL, WAIT_POLL_INTERVAL_S
from .driver_elements import DriverElementsMixin
from .driver_launch import DriverLaunchMixin
from .driver_windows import DriverWindowsMixin
from .errors import DriverException, ErrorKind, classify_error
from .logging_utils import _log_driver_event
from .recovery import PageRecovery, RecoveryState, SessionState
from .script_normalizer import ScriptMode, normalize_script, wait_condition_expression

logger = logging.getLogger(__name__)

T = TypeVar("T")

_ROUTE_PATTERN = "**/*"


class PlaywrightDriver(DriverLaunchMixin, DriverElementsMixin, DriverWindowsMixin, CoreDriver):
    """Mink style driver backed by one Playwright browser, context and page."""

    def __init__(
        self,
        browser_type: str = DEFAULT_BROWSER,
        headless: bool = True,
        launch_options: Optional[Mapping[str, Any]] = None,
        context_options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.browser_type = browser_type
        self.headless = bool(headless)
        self.launch_options: Dict[str, Any] = dict(launch_options or {})
        self.context_options: Dict[str, Any] = dict(context_options or {})

        self._playwright: Any = None
        self._browser: Any = None
        self._state = SessionState()
        self._headers: Dict[str, str] = {}
        self._basic_auth: Optional[Tuple[str, str]] = None
        self._adopted_pages: "weakref.WeakSet[Any]" = weakref.WeakSet()
        self._session_id = 0
        self._recovery = PageRecovery(
            open_context=self._open_context,
            bootstrap=self._bootstrap_session,
            adopt_page=self._adopt_page,
            rearm=self._install_header_routing,
            session_id=lambda: self._session_id,
        )

    # Session lifecycle

    def start(self) -> None:
        try:
            self._state = self._bootstrap_session()
        except Exception as exc:
            self._shutdown_quietly()
            message = self._compact_exception_message(exc)
            raise DriverException(f"Unable to start Playwright driver: {message}") from exc
        self._recovery.reset()
        self._log_event(logging.INFO, "started", engine=self.browser_type)

    def is_started(self) -> bool:
        return self._browser is not None and self._state.is_open

    def stop(self) -> None:
        try:
            self._shutdown_quietly()
        finally:
            self._headers = {}
            self._basic_auth = None
            self._state = SessionState()
            self._adopted_pages.clear()
            self._recovery.reset()
        self._log_event(logging.INFO, "stopped")

    def reset(self) -> None:
        self._ensure_usable()
        try:
            context = self._state.context
            for page in list(context.pages)[1:]:
                try:
                    page.close()
                except Exception:
                    logger.debug("Ignoring failure while closing extra window", exc_info=True)

            try:
                pages = context.pages
                self._activate_page(pages[0] if pages else context.new_page())
            except Exception as exc:
                self._replace_session(self._recovery.recover(self._state, cause=exc), "reset")

            self._remove_header_routing()
            self._state.page.goto("about:blank")
            self._state.context.clear_cookies()
            self._headers = {}
            self._basic_auth = None
            self._state = SessionState(context=self._state.context, page=self._state.page)
        except DriverException:
            raise
        except Exception as exc:
            raise DriverException(f"Unable to reset Playwright driver: {exc}") from exc

    def _bootstrap_session(self) -> SessionState:
        self._shutdown_quietly()
        self._session_id += 1
        self._playwright = sync_playwright().start()
        self._browser = self._launch_browser(self._playwright)
        context = self._open_context()
        page = context.new_page()
        self._adopted_pages.clear()
        self._adopt_page(page)
        return self._install_header_routing(SessionState(context=context, page=page))

    def _open_context(self) -> Any:
        return self._new_context(self._browser)

    def _shutdown_quietly(self) -> None:
        browser, playwright = self._browser, self._playwright
        self._browser = None
        self._playwright = None
        if browser is not None:
            try:
                browser.close()
            except Exception:
                logger.debug("Ignoring failure while closing browser", exc_info=True)
        if playwright is not None:
            try:
                playwright.stop()
            except Exception:
                logger.debug("Ignoring failure while stopping playwright", exc_info=True)

    # Page state

    def _adopt_page(self, page: Any) -> None:
        if page in self._adopted_pages:
            return
        self._adopted_pages.add(page)
        page.on("response", lambda response, owner=page: self._record_response(owner, response))

    def _record_response(self, page: Any, response: Any) -> None:
        if page is not self._state.page:
            return
        try:
            is_document = response.request.is_navigation_request() and response.frame.parent_frame is None
        except Exception:
            is_document = False
        if is_document:
            self._state = self._state.with_last_response(response)

    def _activate_page(self, page: Any, *, keep_response: bool = False) -> None:
        self._adopt_page(page)
        self._state = self._state.with_page(page, keep_response=keep_response)

    def _ensure_usable(self) -> None:
        if self._recovery.state is RecoveryState.FATAL:
            raise DriverException("Playwright session could not be recovered; call start() again")
        if not self._state.is_open:
            raise DriverException("Playwright driver is not started")

    def _live_page(self, label: str = "resolvePage") -> Any:
        """Active page, replaced through recovery first when it has been closed."""
        self._ensure_usable()
        if self._state.page.is_closed():
            self._replace_session(self._recovery.recover(self._state), label)
        return self._state.page

    def _log_event(self, level: int, event: str, **fields: Any) -> None:
        _log_driver_event(logger, level=level, event=event, session=self._session_id, **fields)

    def _safe(self, fn: Callable[[], T]) -> T:
        try:
            return fn()
        except DriverException:
            raise
        except Exception as exc:
            raise DriverException(str(exc)) from exc

    def _replace_session(self, outcome: Any, label: str) -> None:
        if outcome.is_fatal:
            raise DriverException(
                f"{label}() failed: session could not be recovered: {outcome.cause}"
            ) from outcome.cause
        self._state = outcome.session

    def _run_with_recovery(self, label: str, fn: Callable[[], T]) -> T:
        self._ensure_usable()
        if self._state.page.is_closed():
            self._live_page(label)
        else:
            try:
                return fn()
            except Exception as exc:
                if classify_error(exc) is not ErrorKind.STALE:
                    if isinstance(exc, DriverException):
                        raise
                    raise DriverException(f"{label}() failed: {exc}") from exc
                self._replace_session(self._recovery.recover(self._state, cause=exc), label)

        try:
            return fn()
        except Exception as exc:
            raise DriverException(f"{label}() failed after recovery: {exc}") from exc

    # Navigation

    def visit(self, url: str) -> None:
        self._run_with_recovery("visit", lambda: self._navigate_to(url))

    def _navigate_to(self, url: str) -> None:
        self._state = self._state.with_frame_scope(None)
        response = self._state.page.goto(url)
        if response is not None:
            self._state = self._state.with_last_response(response)

    def get_current_url(self) -> str:
        return self._live_page("getCurrentUrl").url

    def reload(self) -> None:
        def reload_page() -> None:
            self._state = self._state.with_frame_scope(None)
            self._state.page.reload()

        self._run_with_recovery("reload", reload_page)

    def forward(self) -> None:
        self._run_with_recovery("forward", lambda: self._state.page.go_forward())

    def back(self) -> None:
        self._run_with_recovery("back", lambda: self._state.page.go_back())

    # Headers and basic auth

    def set_basic_auth(self, user: Union[str, bool], password: str) -> None:
        if user is False or user is None:
            self._basic_auth = None
            return
        self._basic_auth = (str(user), password)
        self._state = self._install_header_routing(self._state)

    def set_request_header(self, name: str, value: str) -> None:
        self._headers[name] = value
        self._state = self._install_header_routing(self._state)

    def get_response_headers(self) -> Dict[str, str]:
        response = self._state.last_response
        if response is None:
            return {}
        return dict(response.headers)

    def _build_sticky_headers(self, request_headers: Mapping[str, str]) -> Dict[str, str]:
        merged = dict(request_headers)
        merged.update(self._headers)
        if self._basic_auth is not None:
            username, password = self._basic_auth
            token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
            merged["Authorization"] = f"Basic {token}"
        return merged

    def _route_with_sticky_headers(self, route: Any) -> None:
        route.continue_(headers=self._build_sticky_headers(route.request.headers))

    def _install_header_routing(self, state: SessionState) -> SessionState:
        if state.header_routing_installed or state.context is None:
            return state
        if not self._headers and self._basic_auth is None:
            return state
        state.context.route(_ROUTE_PATTERN, self._route_with_sticky_headers)
        self._log_event(
            logging.DEBUG,
            "header_routing_installed",
            headers=len(self._headers),
            basic_auth=self._basic_auth is not None,
        )
        return state.with_header_routing(True)

    def _remove_header_routing(self) -> None:
        if not self._state.header_routing_installed:
            return
        try:
            self._state.context.unroute(_ROUTE_PATTERN, self._route_with_sticky_headers)
        except Exception:
            logger.debug("Ignoring failure while removing header routing", exc_info=True)
        self._state = self._state.with_header_routing(False)

    # Cookies

    def set_cookie(self, name: str, value: Optional[str] = None) -> None:
        page = self._live_page("setCookie")
        context = self._state.context
        if value is None:
            self._safe(lambda: context.clear_cookies(name=name))
            return
        url = page.url
        if not url.startswith(("http://", "https://")):
            url = DEFAULT_COOKIE_URL
        cookie = {"name": name, "value": quote(value, safe=""), "url": url}
        self._safe(lambda: context.add_cookies([cookie]))

    def get_cookie(self, name: str) -> Optional[str]:
        self._live_page("getCookie")
        for cookie in self._safe(self._state.context.cookies):
            if cookie.get("name") == name:
                return unquote(cookie.get("value", ""))
        return None

    # Page content

    def get_status_code(self) -> int:
        response = self._state.last_response
        if response is None:
            return 200
        return int(response.status)

    def get_content(self) -> str:
        content = self._run_with_recovery("getContent", lambda: self._state.page.content())
        return content or ""

    def get_screenshot(self) -> bytes:
        def capture() -> Any:
            scope = self._state.frame_scope
            if scope is not None:
                return scope.locator(":root").screenshot()
            return self._state.page.screenshot(full_page=True)

        data = self._run_with_recovery("getScreenshot", capture)
        return data if isinstance(data, bytes) else b""

    # Scripts

    def _page_or_frame_evaluate(self, expression: str, arg: Any = None) -> Any:
        scope = self._state.frame_scope
        if scope is not None:
            return scope.locator(":root").evaluate(expression, arg)
        return self._state.page.evaluate(expression, arg)

    def execute_script(self, script: str) -> None:
        expression = normalize_script(script, ScriptMode.EXECUTE)
        self._run_with_recovery("executeScript", lambda: self._page_or_frame_evaluate(expression))

    def evaluate_script(self, script: str) -> Any:
        expression = normalize_script(script, ScriptMode.EVALUATE)
        return self._run_with_recovery("evaluateScript", lambda: self._page_or_frame_evaluate(expression))

    def wait(self, timeout: int, condition: str) -> bool:
        self._live_page("wait")
        expression = wait_condition_expression(condition)
        deadline = time.monotonic() + (timeout / 1000.0)
        while time.monotonic() < deadline:
            try:
                if self._page_or_frame_evaluate(expression) is True:
                    return True
            except Exception as exc:
                logger.debug("Wait condition raised, polling again: %s", exc)
            time.sleep(WAIT_POLL_INTERVAL_S)
        return False
