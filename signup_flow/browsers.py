"""Browser session factories for both automation frameworks."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from playwright.sync_api import sync_playwright
from selenium import webdriver

from signup_flow.config import SuiteSettings
from signup_flow.errors import ConfigurationError
from signup_flow.interaction import BrowserInteraction
from signup_flow.playwright_interaction import PlaywrightInteraction
from signup_flow.selenium_interaction import SeleniumInteraction

logger = logging.getLogger(__name__)

PLAYWRIGHT_BROWSERS = ("chromium", "firefox", "webkit")
SELENIUM_BROWSERS = ("chrome", "firefox", "edge")


@contextmanager
def playwright_session(settings: SuiteSettings) -> Iterator[PlaywrightInteraction]:
    """Launch a Playwright browser with one fresh context and page."""
    name = settings.browser_name
    if name not in PLAYWRIGHT_BROWSERS:
        raise ConfigurationError(
            f"Playwright cannot launch '{name}', expected one of {', '.join(PLAYWRIGHT_BROWSERS)}"
        )

    with sync_playwright() as p:
        browser = getattr(p, name).launch(headless=settings.headless)
        context = browser.new_context(base_url=settings.base_url)
        page = context.new_page()
        page.set_default_timeout(settings.timeout_ms)
        logger.info("Started Playwright %s (headless=%s)", name, settings.headless)
        try:
            yield PlaywrightInteraction(page, timeout_ms=settings.timeout_ms)
        finally:
            context.close()
            browser.close()


def _selenium_driver(settings: SuiteSettings) -> webdriver.Remote:
    name = settings.browser_name
    if name == "chrome":
        options = webdriver.ChromeOptions()
        if settings.headless:
            options.add_argument("--headless=new")
        options.add_argument("--window-size=1400,1000")
        return webdriver.Chrome(options=options)
    if name == "firefox":
        options = webdriver.FirefoxOptions()
        if settings.headless:
            options.add_argument("-headless")
        return webdriver.Firefox(options=options)
    if name == "edge":
        options = webdriver.EdgeOptions()
        if settings.headless:
            options.add_argument("--headless=new")
        return webdriver.Edge(options=options)
    raise ConfigurationError(
        f"Selenium cannot launch '{name}', expected one of {', '.join(SELENIUM_BROWSERS)}"
    )


@contextmanager
def selenium_session(settings: SuiteSettings) -> Iterator[SeleniumInteraction]:
    """Start a WebDriver session; Selenium Manager resolves the driver binary."""
    driver = _selenium_driver(settings)
    logger.info("Started Selenium %s (headless=%s)", settings.browser_name, settings.headless)
    try:
        yield SeleniumInteraction(driver, timeout_ms=settings.timeout_ms)
    finally:
        driver.quit()


@contextmanager
def browser_session(settings: SuiteSettings) -> Iterator[BrowserInteraction]:
    """Open a session with the framework selected in ``settings``."""
    factory = playwright_session if settings.framework == "playwright" else selenium_session
    with factory(settings) as interaction:
        yield interaction
