"""BrowserInteraction backed by Selenium WebDriver."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from selenium.common.exceptions import (
    StaleElementReferenceException,
    TimeoutException,
    WebDriverException,
)
from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support.ui import WebDriverWait

from signup_flow.errors import ElementInteractionError, ElementInteractionTimeout
from signup_flow.interaction import DEFAULT_TIMEOUT_MS, VISIBLE, BrowserInteraction
from signup_flow.locators import (
    ByCss,
    ByText,
    ByXPath,
    SelectorStrategy,
    xpath_literal,
)

logger = logging.getLogger(__name__)

# Checked state of the element itself, or of the checkbox input it styles
# (a preceding sibling or an input inside the same label).
_IS_CHECKED = """
const el = arguments[0];
let box = el.matches("input[type='checkbox']") ? el : null;
for (let s = el.previousElementSibling; !box && s; s = s.previousElementSibling) {
    if (s.matches("input[type='checkbox']")) { box = s; }
}
if (!box) {
    const label = el.closest("label");
    box = label ? label.querySelector("input[type='checkbox']") : null;
}
return box ? box.checked : false;
"""


@dataclass(frozen=True)
class ElementRef:
    """Lazy element reference, resolved against the DOM on every action.

    Selenium ``WebElement`` objects go stale when the page re-renders, and
    dropdown options do not exist until the dropdown is opened, so the
    selector is kept instead of the element.
    """

    selector: SelectorStrategy
    parent: Optional["ElementRef"] = None


def _to_by(selector: SelectorStrategy, relative: bool) -> Tuple[str, str]:
    """Translate a selector strategy into a Selenium locator tuple."""
    if isinstance(selector, ByCss):
        return (By.CSS_SELECTOR, selector.css)
    if isinstance(selector, ByXPath):
        xpath = selector.xpath
        if relative and xpath.startswith("/"):
            xpath = "." + xpath
        return (By.XPATH, xpath)
    if isinstance(selector, ByText):
        prefix = ".//" if relative else "//"
        return (
            By.XPATH,
            f"{prefix}*[contains(normalize-space(text()), {xpath_literal(selector.text)})]",
        )
    raise TypeError(f"Unsupported selector {selector!r}")


class SeleniumInteraction(BrowserInteraction):
    """Drive a Selenium ``WebDriver``."""

    def __init__(self, driver: WebDriver, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> None:
        super().__init__(timeout_ms)
        self.driver = driver

    def _wait(self, timeout_ms: Optional[int] = None) -> WebDriverWait:
        timeout = timeout_ms if timeout_ms is not None else self.timeout_ms
        return WebDriverWait(
            self.driver,
            timeout / 1000,
            ignored_exceptions=[StaleElementReferenceException],
        )

    def _find_all(self, ref: ElementRef) -> List[WebElement]:
        if ref.parent is None:
            return self.driver.find_elements(*_to_by(ref.selector, relative=False))
        by = _to_by(ref.selector, relative=True)
        found: List[WebElement] = []
        for parent in self._find_all(ref.parent):
            found.extend(parent.find_elements(*by))
        return found

    def _first(self, ref: ElementRef, displayed: bool = False) -> WebElement:
        """Wait for the first matching element, optionally until displayed."""

        def _condition(_driver):
            elements = self._find_all(ref)
            if not elements:
                return False
            if displayed and not elements[0].is_displayed():
                return False
            return elements[0]

        try:
            return self._wait().until(_condition)
        except TimeoutException as e:
            raise ElementInteractionTimeout(
                f"Element {ref.selector} not available within {self.timeout_ms} ms"
            ) from e

    def goto(self, url: str) -> None:
        logger.debug("Navigating to %s", url)
        try:
            self.driver.get(url)
        except WebDriverException as e:
            raise ElementInteractionError(f"Navigation to {url} failed: {e}") from e

    def current_url(self) -> str:
        return self.driver.current_url

    def locate(self, selector: SelectorStrategy) -> ElementRef:
        return ElementRef(selector)

    def locate_within(self, parent: ElementRef, selector: SelectorStrategy) -> ElementRef:
        return ElementRef(selector, parent)

    def _script(self, script: str, ref: ElementRef):
        element = self._first(ref)
        try:
            return self.driver.execute_script(script, element)
        except WebDriverException as e:
            raise ElementInteractionError(f"Script on {ref.selector} failed: {e}") from e

    def click(self, handle: ElementRef, force: bool = False) -> None:
        element = self._first(handle, displayed=not force)
        try:
            element.click()
        except WebDriverException as e:
            raise ElementInteractionError(f"click on {handle.selector} failed: {e}") from e

    def raw_click(self, handle: ElementRef) -> None:
        self._script("arguments[0].click();", handle)

    def hover(self, handle: ElementRef) -> None:
        element = self._first(handle, displayed=True)
        try:
            ActionChains(self.driver).move_to_element(element).perform()
        except WebDriverException as e:
            raise ElementInteractionError(f"hover on {handle.selector} failed: {e}") from e

    def fill(self, handle: ElementRef, text: str) -> None:
        element = self._first(handle, displayed=True)
        try:
            element.clear()
            element.send_keys(text)
        except WebDriverException as e:
            raise ElementInteractionError(f"fill on {handle.selector} failed: {e}") from e

    def check(self, handle: ElementRef, force: bool = False) -> None:
        if force:
            if not self._script(_IS_CHECKED, handle):
                self.raw_click(handle)
            return
        element = self._first(handle, displayed=True)
        try:
            if not element.is_selected():
                element.click()
        except WebDriverException as e:
            raise ElementInteractionError(f"check on {handle.selector} failed: {e}") from e

    def is_visible(self, handle: ElementRef) -> bool:
        try:
            elements = self._find_all(handle)
            return bool(elements) and elements[0].is_displayed()
        except StaleElementReferenceException:
            return False

    def is_enabled(self, handle: ElementRef) -> bool:
        try:
            return self._first(handle).is_enabled()
        except ElementInteractionTimeout:
            return False

    def input_value(self, handle: ElementRef) -> str:
        return self._first(handle).get_attribute("value") or ""

    def scroll_into_view(self, handle: ElementRef) -> None:
        self._script("arguments[0].scrollIntoView({block: 'center'});", handle)

    def wait_for(self, handle: ElementRef, state: str = VISIBLE,
                 timeout_ms: Optional[int] = None) -> None:
        self._check_state(state)
        timeout = timeout_ms if timeout_ms is not None else self.timeout_ms
        want_visible = state == VISIBLE

        def _condition(_driver) -> bool:
            elements = self._find_all(handle)
            shown = bool(elements) and elements[0].is_displayed()
            return shown if want_visible else not shown

        try:
            self._wait(timeout).until(_condition)
        except TimeoutException as e:
            raise ElementInteractionTimeout(
                f"Element {handle.selector} did not become {state} within {timeout} ms"
            ) from e

    def screenshot(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        self.driver.save_screenshot(str(path))
