"""
Open a page through the Playwright driver and report what it sees.

Example:
    minkwright-probe https://example.com --script "document.title" --screenshot page.png
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

from minkwright.common.logger import setup_logging
from minkwright.driver.errors import DriverException
from minkwright.driver.factory import create_driver


@click.command(name="minkwright-probe")
@click.argument("url")
@click.option(
    "--browser",
    "-b",
    default=None,
    type=click.Choice(["chromium", "firefox", "webkit"]),
    help="Browser engine (defaults to PLAYWRIGHT_BROWSER or chromium).",
)
@click.option(
    "--headed",
    is_flag=True,
    help="Show the browser window instead of running headless.",
)
@click.option(
    "--script",
    "-s",
    default=None,
    help="Script to evaluate on the page after it loads.",
)
@click.option(
    "--screenshot",
    default=None,
    type=click.Path(dir_okay=False),
    help="Optional path for a full page PNG screenshot.",
)
@click.option(
    "--log-config",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Logging config (JSON/YAML); defaults to the bundled one.",
)
@click.option(
    "--log-file",
    default=None,
    type=click.Path(dir_okay=False),
    help="Also write logs to this file.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
def run(
    url: str,
    browser: Optional[str],
    headed: bool,
    script: Optional[str],
    screenshot: Optional[str],
    log_config: Optional[str],
    log_file: Optional[str],
    verbose: bool,
) -> None:
    load_dotenv()
    logger = setup_logging(
        config_file_path=log_config,
        log_file_path=log_file,
        verbose=verbose,
    )

    params = {}
    if browser:
        params["browser"] = browser
    if headed:
        params["headless"] = False
    driver = create_driver(params)

    try:
        driver.start()
        driver.visit(url)
        click.echo(f"status_code: {driver.get_status_code()}")
        click.echo(f"current_url: {driver.get_current_url()}")
        click.echo(f"window_name: {driver.get_window_name()}")
        if script:
            result = driver.evaluate_script(script)
            click.echo(f"script_result: {json.dumps(result, ensure_ascii=False, default=str)}")
        if screenshot:
            output_path = Path(screenshot)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_bytes(driver.get_screenshot())
            click.echo(f"screenshot: {output_path}")
    except DriverException as exc:
        logger.error("Probe failed: %s", exc)
        click.echo(f"Error: {exc}")
        raise SystemExit(1)
    finally:
        driver.stop()


if __name__ == "__main__":
    run()
