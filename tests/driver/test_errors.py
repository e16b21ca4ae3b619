import pytest
from playwright.sync_api import Error as PlaywrightError

from minkwright.driver.errors import (
    DriverException,
    DriverUsageException,
    ElementNotFoundException,
    ErrorKind,
    UnsupportedDriverActionException,
    classify_error,
    is_stale_handle_message,
)


@pytest.mark.parametrize(
    "message",
    [
        "Target page, context or browser has been closed",
        "Protocol error: Target closed.",
        "Page not found",
        "Browser context not found",
    ],
)
def test_stale_messages_are_classified_as_stale(message):
    assert is_stale_handle_message(message)
    assert classify_error(PlaywrightError(message)) is ErrorKind.STALE


def test_driver_exception_types_have_their_own_kind():
    assert classify_error(ElementNotFoundException("No element")) is ErrorKind.ELEMENT_MISSING
    assert classify_error(DriverUsageException("not a checkbox")) is ErrorKind.TYPE_MISMATCH


def test_other_failures():
    assert classify_error(PlaywrightError("Timeout 30000ms exceeded.")) is ErrorKind.OTHER
    assert classify_error(ValueError("bad")) is ErrorKind.OTHER
    assert not is_stale_handle_message("")


def test_all_driver_errors_share_a_base():
    for exc_type in (ElementNotFoundException, DriverUsageException, UnsupportedDriverActionException):
        assert issubclass(exc_type, DriverException)
