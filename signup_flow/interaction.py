"""Browser interaction capability consumed by the page objects.

Page objects never talk to Playwright or Selenium directly. They receive a
``BrowserInteraction`` and call its primitives with selector strategies, so
the same page objects serve both frameworks and can be driven by an
in-memory fake in unit tests.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from signup_flow.errors import (
    ElementInteractionError,
    ElementInteractionTimeout,
    OptionSelectionError,
)
from signup_flow.locators import ByText, SelectorStrategy

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 5000

# Element states accepted by wait_for().
VISIBLE = "visible"
HIDDEN = "hidden"
WAIT_STATES = (VISIBLE, HIDDEN)


class BrowserInteraction(ABC):
    """Primitives the signup page objects need from a browser.

    Handles returned by ``locate`` are opaque to callers and are resolved
    lazily by the implementation, so an element may be located before it
    is rendered.
    """

    def __init__(self, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> None:
        self.timeout_ms = timeout_ms

    @abstractmethod
    def goto(self, url: str) -> None:
        """Navigate to ``url``."""

    @abstractmethod
    def current_url(self) -> str:
        """Return the URL of the current page."""

    @abstractmethod
    def locate(self, selector: SelectorStrategy) -> Any:
        """Return a handle for the element(s) matching ``selector``."""

    @abstractmethod
    def locate_within(self, parent: Any, selector: SelectorStrategy) -> Any:
        """Return a handle for matches of ``selector`` inside ``parent``."""

    @abstractmethod
    def click(self, handle: Any, force: bool = False) -> None:
        """Click the element."""

    @abstractmethod
    def raw_click(self, handle: Any) -> None:
        """Dispatch a DOM click on the element, bypassing actionability checks."""

    @abstractmethod
    def hover(self, handle: Any) -> None:
        """Move the pointer over the element."""

    @abstractmethod
    def fill(self, handle: Any, text: str) -> None:
        """Replace the content of an input with ``text``."""

    @abstractmethod
    def check(self, handle: Any, force: bool = False) -> None:
        """Tick a checkbox."""

    @abstractmethod
    def is_visible(self, handle: Any) -> bool:
        """Return True if the element is rendered and visible right now."""

    @abstractmethod
    def is_enabled(self, handle: Any) -> bool:
        """Return True if the element is enabled right now."""

    @abstractmethod
    def input_value(self, handle: Any) -> str:
        """Return the current value of an input element."""

    @abstractmethod
    def scroll_into_view(self, handle: Any) -> None:
        """Scroll the element into the viewport if needed."""

    @abstractmethod
    def wait_for(self, handle: Any, state: str = VISIBLE,
                 timeout_ms: Optional[int] = None) -> None:
        """Wait until the (first) element reaches ``state``.

        Raises:
            ElementInteractionTimeout: If the state is not reached in time
        """

    @abstractmethod
    def screenshot(self, path: Path) -> None:
        """Save a screenshot of the current page."""

    def is_clickable(self, handle: Any) -> bool:
        """Return True if the element is both visible and enabled."""
        return self.is_visible(handle) and self.is_enabled(handle)

    def _check_state(self, state: str) -> None:
        if state not in WAIT_STATES:
            raise ValueError(f"Unsupported wait state '{state}'")


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry settings for flaky UI actions."""

    attempts: int = 3
    delay: float = 0.2

    def __post_init__(self) -> None:
        if self.attempts < 1:
            raise ValueError("RetryPolicy needs at least one attempt")

    def pause(self) -> None:
        if self.delay:
            time.sleep(self.delay)


DROPDOWN_RETRY = RetryPolicy()


def select_dynamic_option(
    interaction: BrowserInteraction,
    dropdown: Any,
    options: Any,
    text: str,
    policy: RetryPolicy = DROPDOWN_RETRY,
    timeout_ms: Optional[int] = None,
) -> None:
    """Open a dynamic dropdown and click the option labelled ``text``.

    The options are only rendered once the dropdown is open, and the option
    list tends to re-render under the pointer. Each attempt hovers and
    clicks the option; a failed attempt falls back to a raw DOM click.

    Args:
        interaction: Browser capability to act through
        dropdown: Handle of the control that opens the option list
        options: Handle matching the option entries
        text: Visible text of the option to select
        policy: Retry bound for the click
        timeout_ms: Wait bound for the options to appear

    Raises:
        OptionSelectionError: If the option never appears or every
            attempt fails
    """
    timeout = timeout_ms if timeout_ms is not None else interaction.timeout_ms

    interaction.click(dropdown)
    option = interaction.locate_within(options, ByText(text))
    try:
        interaction.wait_for(options, VISIBLE, timeout)
        interaction.wait_for(option, VISIBLE, timeout)
    except ElementInteractionTimeout as e:
        raise OptionSelectionError(text) from e
    interaction.scroll_into_view(option)

    for attempt in range(1, policy.attempts + 1):
        try:
            interaction.hover(option)
            policy.pause()
            interaction.click(option, force=True)
            logger.debug("Selected dropdown option '%s' (attempt %d)", text, attempt)
            return
        except ElementInteractionError as e:
            logger.warning(
                "Retry clicking '%s' (attempt %d/%d): %s",
                text, attempt, policy.attempts, e,
            )

        try:
            interaction.raw_click(option)
            policy.pause()
            logger.debug("Selected dropdown option '%s' via DOM click", text)
            return
        except ElementInteractionError as e:
            logger.debug("DOM click on '%s' failed: %s", text, e)

    raise OptionSelectionError(text, policy.attempts)
