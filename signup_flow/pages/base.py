"""Shared wiring for page objects."""

from __future__ import annotations

import logging
from typing import Any, Optional

from signup_flow.errors import ElementInteractionTimeout
from signup_flow.interaction import VISIBLE, BrowserInteraction
from signup_flow.locators import SelectorCatalog

logger = logging.getLogger(__name__)

COOKIE_BANNER_TIMEOUT_MS = 5000


class PageComponent:
    """Holds the interaction capability and selector section for one page.

    Page objects own a ``PageComponent`` rather than extending it, so a
    page can be built around any BrowserInteraction, including fakes.
    """

    def __init__(
        self,
        interaction: BrowserInteraction,
        section: str,
        selectors: Optional[SelectorCatalog] = None,
    ) -> None:
        self.interaction = interaction
        self.section = section
        self.selectors = selectors or SelectorCatalog.load()

    def element(self, name: str, section: Optional[str] = None) -> Any:
        """Locate an element by its name in the selector catalog."""
        return self.interaction.locate(
            self.selectors.get(f"{section or self.section}.{name}")
        )

    def is_visible(self, name: str) -> bool:
        return self.interaction.is_visible(self.element(name))

    def accept_cookies_if_present(self, timeout_ms: int = COOKIE_BANNER_TIMEOUT_MS) -> bool:
        """Click "accept all" on the cookie banner if it shows up in time.

        Returns:
            True if the banner was dismissed, False if it never appeared
        """
        button = self.element("cookie_accept_button", section="common")
        try:
            self.interaction.wait_for(button, VISIBLE, timeout_ms)
        except ElementInteractionTimeout:
            logger.info("Cookie banner not shown within %d ms", timeout_ms)
            return False
        self.interaction.click(button)
        logger.debug("Accepted cookies")
        return True
