"""Driver exception types and boundary classification of Playwright failures."""

from __future__ import annotations

from enum import Enum


class DriverException(Exception):
    """Uniform driver-level failure raised for every failed operation."""


class ElementNotFoundException(DriverException):
    """Raised when a locator resolves to no element."""


class DriverUsageException(DriverException):
    """Raised when an operation does not apply to the targeted element."""


class UnsupportedDriverActionException(DriverException):
    """Raised for contract operations the driver does not implement."""


class ErrorKind(str, Enum):
    STALE = "stale"
    ELEMENT_MISSING = "element_missing"
    TYPE_MISMATCH = "type_mismatch"
    OTHER = "other"


_STALE_SIGNATURES = (
    "has been closed",
    "target closed",
    "page not found",
    "context not found",
)


def is_stale_handle_message(message: str) -> bool:
    lowered = str(message or "").lower()
    return any(signature in lowered for signature in _STALE_SIGNATURES)


def classify_error(exc: BaseException) -> ErrorKind:
    """
    Map a failure to the category that decides how the driver reacts.

    Only ``STALE`` failures may trigger page/context recovery; the other
    kinds are surfaced to the caller as they are.
    """
    if isinstance(exc, ElementNotFoundException):
        return ErrorKind.ELEMENT_MISSING
    if isinstance(exc, DriverUsageException):
        return ErrorKind.TYPE_MISMATCH
    if is_stale_handle_message(str(exc)):
        return ErrorKind.STALE
    return ErrorKind.OTHER
