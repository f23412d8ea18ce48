"""Login page, entry point of the signup flow."""

from typing import Optional

from signup_flow.interaction import BrowserInteraction
from signup_flow.locators import SelectorCatalog
from signup_flow.pages.base import PageComponent


class LoginPage:
    """Login page with the "Start a free trial" link."""

    def __init__(self, interaction: BrowserInteraction,
                 selectors: Optional[SelectorCatalog] = None) -> None:
        self.component = PageComponent(interaction, "login", selectors)
        self.interaction = interaction

    def open(self, base_url: str) -> None:
        self.interaction.goto(base_url)

    def click_start_free_trial(self) -> None:
        """Dismiss the cookie banner, then click "Start a free trial"."""
        self.component.accept_cookies_if_present()
        self.interaction.click(self.component.element("start_free_trial_button"))
