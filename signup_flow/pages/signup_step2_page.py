"""Signup step 2: personal details."""

from typing import Optional

from signup_flow.interaction import BrowserInteraction
from signup_flow.locators import SelectorCatalog
from signup_flow.pages.base import PageComponent


class SignupStep2Page:
    """First name, last name and phone number form."""

    ERRORS = {
        "first_name": "first_name_error",
        "last_name": "last_name_error",
    }

    def __init__(self, interaction: BrowserInteraction,
                 selectors: Optional[SelectorCatalog] = None) -> None:
        self.component = PageComponent(interaction, "step2", selectors)
        self.interaction = interaction

    def is_loaded(self) -> bool:
        return self.component.is_visible("first_name_field")

    def enter_first_name(self, first_name: str) -> None:
        self.interaction.fill(self.component.element("first_name_field"), first_name)

    def enter_last_name(self, last_name: str) -> None:
        self.interaction.fill(self.component.element("last_name_field"), last_name)

    def enter_phone_number(self, phone_number: str) -> None:
        self.interaction.fill(self.component.element("phone_number_field"), phone_number)

    def fill_personal_details(self, first_name: str, last_name: str, phone_number: str) -> None:
        self.enter_first_name(first_name)
        self.enter_last_name(last_name)
        self.enter_phone_number(phone_number)

    def click_next_button(self) -> None:
        self.interaction.click(self.component.element("next_button"))

    def click_back_button(self) -> None:
        self.interaction.click(self.component.element("back_button"))

    def read_first_name(self) -> str:
        return self.interaction.input_value(self.component.element("first_name_field"))

    def read_last_name(self) -> str:
        return self.interaction.input_value(self.component.element("last_name_field"))

    def read_phone_number(self) -> str:
        return self.interaction.input_value(self.component.element("phone_number_field"))

    def is_error_visible(self, field: str) -> bool:
        return self.component.is_visible(self.ERRORS[field])

    def is_first_name_error_visible(self) -> bool:
        return self.is_error_visible("first_name")

    def is_last_name_error_visible(self) -> bool:
        return self.is_error_visible("last_name")
