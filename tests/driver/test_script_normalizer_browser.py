"""Run normalized scripts in a real Chromium page; skipped when none can launch."""

import pytest
from playwright.sync_api import sync_playwright

from minkwright.driver.script_normalizer import ScriptMode, normalize_script


@pytest.fixture(scope="module")
def page():
    try:
        manager = sync_playwright().start()
    except Exception as exc:
        pytest.skip(f"Playwright is not available: {exc}")
    try:
        browser = manager.chromium.launch(headless=True)
    except Exception as exc:
        manager.stop()
        pytest.skip(f"Chromium is not available: {exc}")
    page = browser.new_page()
    page.set_content("<html><head><title>Normalizer</title></head><body></body></html>")
    yield page
    browser.close()
    manager.stop()


def run(page, script, mode=ScriptMode.EVALUATE):
    return page.evaluate(normalize_script(script, mode))


def test_return_statement_yields_value(page):
    assert run(page, "return 1 + 1;") == 2
    assert run(page, "return 1 + 1;", ScriptMode.EXECUTE) is None


def test_iife_yields_value_once(page):
    assert run(page, "(function(){ return 1; })()") == 1
    assert run(page, "(function(){ return 1; })()", ScriptMode.EXECUTE) is None


def test_uninvoked_arrow_is_called(page):
    assert run(page, "() => 42") == 42
    assert run(page, "function () { return 'fn'; }") == "fn"


def test_plain_expression_yields_value(page):
    assert run(page, "document.title") == "Normalizer"


def test_execute_keeps_side_effects(page):
    run(page, "window.__counter = (window.__counter || 0) + 1", ScriptMode.EXECUTE)
    run(page, "() => { window.__counter += 1; }", ScriptMode.EXECUTE)
    assert run(page, "window.__counter") == 2
