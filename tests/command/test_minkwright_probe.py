import logging

import pytest
from click.testing import CliRunner

from minkwright.command import minkwright_probe
from minkwright.driver.errors import DriverException


class RecordingDriver:
    def __init__(self, fail_on_visit=False):
        self.fail_on_visit = fail_on_visit
        self.calls = []

    def start(self):
        self.calls.append("start")

    def visit(self, url):
        self.calls.append(("visit", url))
        if self.fail_on_visit:
            raise DriverException("visit() failed: net::ERR_NAME_NOT_RESOLVED")

    def get_status_code(self):
        return 200

    def get_current_url(self):
        return "https://example.com/"

    def get_window_name(self):
        return "Example Domain"

    def evaluate_script(self, script):
        self.calls.append(("evaluate", script))
        return {"title": "Example Domain"}

    def get_screenshot(self):
        return b"\x89PNG"

    def stop(self):
        self.calls.append("stop")


@pytest.fixture
def probe(monkeypatch):
    created = {}

    def fake_create_driver(params):
        created["params"] = params
        created["driver"] = RecordingDriver(**created.get("driver_kwargs", {}))
        return created["driver"]

    monkeypatch.setattr(minkwright_probe, "create_driver", fake_create_driver)
    monkeypatch.setattr(
        minkwright_probe,
        "setup_logging",
        lambda **kwargs: logging.getLogger("minkwright.test"),
    )
    return created


def test_probe_reports_page_details(probe):
    runner = CliRunner()
    with runner.isolated_filesystem():
        result = runner.invoke(
            minkwright_probe.run,
            ["https://example.com/", "-b", "firefox", "--headed", "-s", "return {title: document.title}",
             "--screenshot", "shots/page.png"],
        )
        with open("shots/page.png", "rb") as handle:
            assert handle.read() == b"\x89PNG"

    assert result.exit_code == 0, result.output
    assert "status_code: 200" in result.output
    assert "current_url: https://example.com/" in result.output
    assert "window_name: Example Domain" in result.output
    assert 'script_result: {"title": "Example Domain"}' in result.output
    assert probe["params"] == {"browser": "firefox", "headless": False}
    assert probe["driver"].calls[-1] == "stop"


def test_probe_exits_non_zero_on_driver_error(probe):
    probe["driver_kwargs"] = {"fail_on_visit": True}
    runner = CliRunner()
    with runner.isolated_filesystem():
        result = runner.invoke(minkwright_probe.run, ["https://nowhere.invalid/"])

    assert result.exit_code == 1
    assert "Error: visit() failed" in result.output
    assert probe["params"] == {}
    assert probe["driver"].calls == ["start", ("visit", "https://nowhere.invalid/"), "stop"]
