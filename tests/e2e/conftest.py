"""
Playwright fixtures for browser tests.

Tests here drive a real Chromium and are marked ``browser``. They are
skipped when Chromium cannot be launched, e.g. before running
``playwright install chromium``. Deselect them with ``-m "not browser"``.
"""
import os
from typing import Any, Dict, Generator

import pytest

# Skip entire module if playwright not installed
pytest.importorskip("playwright")

from playwright.sync_api import Browser, BrowserContext, Error, Page, sync_playwright

HEADLESS = os.environ.get("E2E_HEADLESS", "true").lower() == "true"
DEFAULT_TIMEOUT = 10000  # ms

VIEWPORT: Dict[str, Any] = {"width": 800, "height": 600}


@pytest.fixture(scope="module")
def browser() -> Generator[Browser, None, None]:
    """Launch Chromium once per test module."""
    with sync_playwright() as playwright:
        try:
            browser = playwright.chromium.launch(headless=HEADLESS)
        except Error as e:
            pytest.skip(f"Chromium could not be launched: {e}")

        yield browser

        browser.close()


@pytest.fixture
def context(browser: Browser) -> Generator[BrowserContext, None, None]:
    """Create a new browser context with a fixed viewport for each test."""
    context = browser.new_context(viewport=VIEWPORT)
    context.set_default_timeout(DEFAULT_TIMEOUT)

    yield context

    context.close()


@pytest.fixture
def page(context: BrowserContext) -> Generator[Page, None, None]:
    """Create a new page for each test."""
    page = context.new_page()

    yield page

    page.close()


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "browser: runs against a real Chromium through Playwright")


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(config, items):
    """Mark every test using the page fixture as a browser test."""
    for item in items:
        if "page" in getattr(item, "fixturenames", ()):
            item.add_marker(pytest.mark.browser)
