"""BrowserInteraction backed by the Playwright sync API."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator, Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from signup_flow.errors import ElementInteractionError, ElementInteractionTimeout
from signup_flow.interaction import DEFAULT_TIMEOUT_MS, VISIBLE, BrowserInteraction
from signup_flow.locators import ByCss, ByText, ByXPath, SelectorStrategy

logger = logging.getLogger(__name__)


class PlaywrightInteraction(BrowserInteraction):
    """Drive a Playwright ``Page``.

    Handles are Playwright ``Locator`` objects, which are lazy by nature.
    """

    def __init__(self, page: Page, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> None:
        super().__init__(timeout_ms)
        self.page = page

    def _to_locator(self, scope, selector: SelectorStrategy) -> Locator:
        if isinstance(selector, ByCss):
            return scope.locator(f"css={selector.css}")
        if isinstance(selector, ByXPath):
            return scope.locator(f"xpath={selector.xpath}")
        if isinstance(selector, ByText):
            return scope.get_by_text(selector.text)
        raise TypeError(f"Unsupported selector {selector!r}")

    def goto(self, url: str) -> None:
        logger.debug("Navigating to %s", url)
        try:
            self.page.goto(url)
        except PlaywrightError as e:
            raise ElementInteractionError(f"Navigation to {url} failed: {e}") from e

    def current_url(self) -> str:
        return self.page.url

    def locate(self, selector: SelectorStrategy) -> Locator:
        return self._to_locator(self.page, selector)

    def locate_within(self, parent: Locator, selector: SelectorStrategy) -> Locator:
        return self._to_locator(parent, selector)

    def _act(self, description: str, action, *args, **kwargs):
        """Run a locator action, translating Playwright errors."""
        try:
            return action(*args, timeout=self.timeout_ms, **kwargs)
        except PlaywrightTimeoutError as e:
            raise ElementInteractionTimeout(
                f"{description} timed out after {self.timeout_ms} ms"
            ) from e
        except PlaywrightError as e:
            raise ElementInteractionError(f"{description} failed: {e}") from e

    def click(self, handle: Locator, force: bool = False) -> None:
        self._act("click", handle.click, force=force)

    def raw_click(self, handle: Locator) -> None:
        try:
            handle.evaluate("el => el.click()")
        except PlaywrightError as e:
            raise ElementInteractionError(f"DOM click failed: {e}") from e

    def hover(self, handle: Locator) -> None:
        self._act("hover", handle.hover)

    def fill(self, handle: Locator, text: str) -> None:
        self._act("fill", handle.fill, text)

    def check(self, handle: Locator, force: bool = False) -> None:
        self._act("check", handle.check, force=force)

    def is_visible(self, handle: Locator) -> bool:
        return handle.is_visible()

    def is_enabled(self, handle: Locator) -> bool:
        try:
            return handle.is_enabled(timeout=self.timeout_ms)
        except PlaywrightTimeoutError:
            return False

    def input_value(self, handle: Locator) -> str:
        return self._act("input_value", handle.input_value)

    def scroll_into_view(self, handle: Locator) -> None:
        self._act("scroll", handle.scroll_into_view_if_needed)

    def wait_for(self, handle: Locator, state: str = VISIBLE,
                 timeout_ms: Optional[int] = None) -> None:
        self._check_state(state)
        timeout = timeout_ms if timeout_ms is not None else self.timeout_ms
        try:
            handle.first.wait_for(state=state, timeout=timeout)
        except PlaywrightTimeoutError as e:
            raise ElementInteractionTimeout(
                f"Element did not become {state} within {timeout} ms"
            ) from e

    def screenshot(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        self.page.screenshot(path=str(path))
