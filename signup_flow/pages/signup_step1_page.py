"""Signup step 1: work email, password and terms acceptance."""

from typing import Optional

from signup_flow.interaction import BrowserInteraction
from signup_flow.locators import SelectorCatalog
from signup_flow.pages.base import PageComponent


class SignupStep1Page:
    """Credentials form."""

    ERRORS = {
        "email": "email_error",
        "password": "password_error",
        "terms": "terms_error",
    }

    def __init__(self, interaction: BrowserInteraction,
                 selectors: Optional[SelectorCatalog] = None) -> None:
        self.component = PageComponent(interaction, "step1", selectors)
        self.interaction = interaction

    def is_loaded(self) -> bool:
        return self.component.is_visible("email_field")

    def enter_email(self, email: str) -> None:
        self.interaction.fill(self.component.element("email_field"), email)

    def enter_password(self, password: str) -> None:
        self.interaction.fill(self.component.element("password_field"), password)

    def select_terms_checkbox(self) -> None:
        # The real checkbox is hidden behind a styled sibling div.
        self.interaction.check(self.component.element("terms_checkbox"), force=True)

    def click_try_for_free(self, accept_cookies: bool = True) -> None:
        if accept_cookies:
            self.component.accept_cookies_if_present()
        self.interaction.click(self.component.element("try_for_free_button"))

    def fill_signup_form(self, email: str, password: str, accept_terms: bool = True,
                         accept_cookies: bool = True) -> None:
        """Fill email and password and tick the terms box; does not submit."""
        if accept_cookies:
            self.component.accept_cookies_if_present()
        self.enter_email(email)
        self.enter_password(password)
        if accept_terms:
            self.select_terms_checkbox()

    def read_email(self) -> str:
        return self.interaction.input_value(self.component.element("email_field"))

    def read_password(self) -> str:
        return self.interaction.input_value(self.component.element("password_field"))

    def is_error_visible(self, field: str) -> bool:
        return self.component.is_visible(self.ERRORS[field])

    def is_email_error_visible(self) -> bool:
        return self.is_error_visible("email")

    def is_password_error_visible(self) -> bool:
        return self.is_error_visible("password")

    def is_terms_error_visible(self) -> bool:
        return self.is_error_visible("terms")
