"""
Playwright driver stack.

The driver itself lives in ``playwright_driver``; the script normalizer,
page recovery and error classification are kept in their own modules so
they can be used and tested without a browser.
"""

from .core_driver import CoreDriver, KeyModifier
from .driver_launch import BrowserEngine
from .errors import (
    DriverException,
    DriverUsageException,
    ElementNotFoundException,
    ErrorKind,
    UnsupportedDriverActionException,
    classify_error,
)
from .factory import create_driver
from .playwright_driver import PlaywrightDriver
from .recovery import OutcomeKind, PageRecovery, RecoveryOutcome, RecoveryState, SessionState
from .script_normalizer import (
    ScriptMode,
    ScriptShape,
    classify_script,
    normalize_script,
    wait_condition_expression,
)

__all__ = [
    "BrowserEngine",
    "CoreDriver",
    "DriverException",
    "DriverUsageException",
    "ElementNotFoundException",
    "ErrorKind",
    "KeyModifier",
    "OutcomeKind",
    "PageRecovery",
    "PlaywrightDriver",
    "RecoveryOutcome",
    "RecoveryState",
    "ScriptMode",
    "ScriptShape",
    "SessionState",
    "UnsupportedDriverActionException",
    "classify_error",
    "classify_script",
    "create_driver",
    "normalize_script",
    "wait_condition_expression",
]
