"""
Page and context recovery for a driver session.

When an operation fails because the active page (or its context) is gone,
``PageRecovery.recover`` walks the fallbacks in order:

1. reuse the first open page of the current context,
2. open a fresh page in the current context,
3. build a new context and page, re-arming header routing on it and
   closing the old context,
4. run the full session bootstrap again.

Each successful step returns a new ``SessionState``; the caller swaps it in
and retries the failed operation once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Optional

from .logging_utils import _log_driver_event

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionState:
    context: Any = None
    page: Any = None
    frame_scope: Any = None
    last_response: Any = None
    header_routing_installed: bool = False

    @property
    def is_open(self) -> bool:
        return self.context is not None and self.page is not None

    def with_page(self, page: Any, *, keep_response: bool = False) -> "SessionState":
        if keep_response:
            return replace(self, page=page, frame_scope=None)
        return replace(self, page=page, frame_scope=None, last_response=None)

    def with_context(self, context: Any, page: Any) -> "SessionState":
        return SessionState(context=context, page=page)

    def with_frame_scope(self, frame_scope: Any) -> "SessionState":
        return replace(self, frame_scope=frame_scope)

    def with_last_response(self, response: Any) -> "SessionState":
        return replace(self, last_response=response)

    def with_header_routing(self, installed: bool = True) -> "SessionState":
        return replace(self, header_routing_installed=installed)


class RecoveryState(str, Enum):
    LIVE = "live"
    SUSPECT = "suspect"
    RECOVERING = "recovering"
    FATAL = "fatal"


class OutcomeKind(str, Enum):
    RECOVERED = "recovered"
    CONTEXT_REBUILT = "context_rebuilt"
    FATAL = "fatal"


@dataclass(frozen=True)
class RecoveryOutcome:
    kind: OutcomeKind
    session: Optional[SessionState] = None
    cause: Optional[BaseException] = None
    restarted: bool = False

    @property
    def is_fatal(self) -> bool:
        return self.kind is OutcomeKind.FATAL


def _is_page_open(page: Any) -> bool:
    try:
        return not page.is_closed()
    except Exception:
        return False


def _close_quietly(context: Any) -> None:
    try:
        context.close()
    except Exception:
        logger.debug("Ignoring failure while closing stale context", exc_info=True)


class PageRecovery:
    """
    Drives a session from a stale page back to a live one.

    Args:
        open_context: creates a new browser context in the running browser.
        bootstrap: restarts the whole session and returns its fresh state.
        adopt_page: called for every page that becomes active, e.g. to
            subscribe to its responses.
        rearm: re-installs cross-cutting behaviour (header routing) on a
            rebuilt context and returns the updated state.
        session_id: returns the id stamped on recovery log records.
    """

    def __init__(
        self,
        *,
        open_context: Callable[[], Any],
        bootstrap: Callable[[], SessionState],
        adopt_page: Optional[Callable[[Any], None]] = None,
        rearm: Optional[Callable[[SessionState], SessionState]] = None,
        session_id: Optional[Callable[[], Optional[int]]] = None,
    ) -> None:
        self._open_context = open_context
        self._bootstrap = bootstrap
        self._adopt_page = adopt_page or (lambda page: None)
        self._rearm = rearm or (lambda session: session)
        self._session_id = session_id or (lambda: None)
        self.state = RecoveryState.LIVE

    def reset(self) -> None:
        self.state = RecoveryState.LIVE

    def _log(self, *, level: int, event: str, **fields: Any) -> None:
        _log_driver_event(logger, level=level, event=event, session=self._session_id(), **fields)

    def recover(self, session: SessionState, cause: Optional[BaseException] = None) -> RecoveryOutcome:
        self.state = RecoveryState.SUSPECT
        self._log(
            level=logging.WARNING,
            event="page_suspect",
            cause=str(cause) if cause is not None else None,
        )

        try:
            page = self._reuse_or_open_page(session.context)
        except Exception as exc:
            self._log(
                level=logging.WARNING,
                event="page_recovery_failed",
                error=str(exc),
            )
        else:
            self.state = RecoveryState.LIVE
            return RecoveryOutcome(kind=OutcomeKind.RECOVERED, session=session.with_page(page))

        self.state = RecoveryState.RECOVERING
        try:
            context = self._open_context()
            page = context.new_page()
            self._adopt_page(page)
            rebuilt = self._rearm(session.with_context(context, page))
        except Exception as exc:
            self._log(
                level=logging.WARNING,
                event="context_rebuild_failed",
                error=str(exc),
            )
        else:
            self.state = RecoveryState.LIVE
            if session.context is not None and session.context is not context:
                _close_quietly(session.context)
            self._log(level=logging.INFO, event="context_rebuilt")
            return RecoveryOutcome(kind=OutcomeKind.CONTEXT_REBUILT, session=rebuilt)

        try:
            restarted = self._bootstrap()
        except Exception as exc:
            self.state = RecoveryState.FATAL
            self._log(
                level=logging.ERROR,
                event="session_fatal",
                error=str(exc),
            )
            return RecoveryOutcome(kind=OutcomeKind.FATAL, cause=exc)

        self.state = RecoveryState.LIVE
        self._log(level=logging.INFO, event="session_restarted")
        return RecoveryOutcome(
            kind=OutcomeKind.CONTEXT_REBUILT,
            session=restarted,
            restarted=True,
        )

    def _reuse_or_open_page(self, context: Any) -> Any:
        if context is None:
            raise RuntimeError("no browser context to recover from")
        for page in context.pages:
            if _is_page_open(page):
                self._adopt_page(page)
                self._log(level=logging.INFO, event="page_reused", url=page.url)
                return page
        page = context.new_page()
        self._adopt_page(page)
        self._log(level=logging.INFO, event="page_opened")
        return page
