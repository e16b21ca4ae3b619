"""minkwright: a Playwright backed driver for Mink style browser automation."""

from minkwright.driver import (
    DriverException,
    PlaywrightDriver,
    ScriptMode,
    create_driver,
    normalize_script,
)

__version__ = "0.1.0"

__all__ = [
    "DriverException",
    "PlaywrightDriver",
    "ScriptMode",
    "create_driver",
    "normalize_script",
]
