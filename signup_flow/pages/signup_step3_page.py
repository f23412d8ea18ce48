"""Signup step 3: company details and account creation."""

from typing import Optional

from signup_flow.interaction import (
    DROPDOWN_RETRY,
    BrowserInteraction,
    RetryPolicy,
    select_dynamic_option,
)
from signup_flow.locators import SelectorCatalog
from signup_flow.pages.base import PageComponent


class SignupStep3Page:
    """Company name, country and referral channel form."""

    ERRORS = {
        "company_name": "company_name_error",
        "hear_about_us": "hear_about_us_error",
    }

    # selection field -> (dropdown, options, value readback)
    DROPDOWNS = {
        "country": ("country_dropdown", "country_options", "country_dropdown"),
        "hear_about_us": (
            "hear_about_us_dropdown",
            "hear_about_us_options",
            "hear_about_us_value",
        ),
    }

    def __init__(self, interaction: BrowserInteraction,
                 selectors: Optional[SelectorCatalog] = None,
                 retry_policy: RetryPolicy = DROPDOWN_RETRY) -> None:
        self.component = PageComponent(interaction, "step3", selectors)
        self.interaction = interaction
        self.retry_policy = retry_policy

    def is_loaded(self) -> bool:
        return self.component.is_visible("company_name_field")

    def enter_company_name(self, company_name: str) -> None:
        self.interaction.fill(self.component.element("company_name_field"), company_name)

    def select_option(self, field: str, value: str) -> None:
        """Pick ``value`` from the dynamic dropdown of ``field``."""
        dropdown, options, _ = self.DROPDOWNS[field]
        select_dynamic_option(
            self.interaction,
            self.component.element(dropdown),
            self.component.element(options),
            value,
            policy=self.retry_policy,
        )

    def select_country(self, country: str) -> None:
        self.select_option("country", country)

    def select_hear_about_us(self, channel: str) -> None:
        self.select_option("hear_about_us", channel)

    def get_selected_value(self, field: str) -> str:
        _, _, readback = self.DROPDOWNS[field]
        return self.interaction.input_value(self.component.element(readback))

    def get_selected_country(self) -> str:
        return self.get_selected_value("country")

    def fill_company_details(self, company_name: str, country: str, hear_about_us: str) -> None:
        self.enter_company_name(company_name)
        self.select_country(country)
        self.select_hear_about_us(hear_about_us)

    def read_company_name(self) -> str:
        return self.interaction.input_value(self.component.element("company_name_field"))

    def click_create_account(self) -> None:
        self.interaction.click(self.component.element("create_account_button"))

    def click_back_button(self) -> None:
        self.interaction.click(self.component.element("back_button"))

    def is_submit_button_enabled(self) -> bool:
        return self.interaction.is_clickable(self.component.element("create_account_button"))

    def is_error_visible(self, field: str) -> bool:
        return self.component.is_visible(self.ERRORS[field])

    def is_company_name_error_visible(self) -> bool:
        return self.is_error_visible("company_name")

    def is_hear_about_us_error_visible(self) -> bool:
        return self.is_error_visible("hear_about_us")
