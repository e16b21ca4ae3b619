import pytest

from minkwright.driver import driver_windows
from minkwright.driver import playwright_driver as playwright_driver_module
from minkwright.driver.playwright_driver import PlaywrightDriver

from fakes import FakePlaywrightHub


@pytest.fixture
def playwright_hub(monkeypatch):
    hub = FakePlaywrightHub()
    monkeypatch.setattr(playwright_driver_module, "sync_playwright", hub.sync_playwright)
    monkeypatch.setattr(driver_windows, "WINDOW_DISCOVERY_TIMEOUT_S", 0.05)
    return hub


@pytest.fixture
def driver(playwright_hub):
    instance = PlaywrightDriver()
    instance.start()
    yield instance
    instance.stop()
