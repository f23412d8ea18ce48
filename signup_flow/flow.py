"""Signup wizard contract.

The signup flow is a three step wizard reached from the login page::

    LOGIN -> STEP1 -> STEP2 -> STEP3 -> COMPLETED
              ^        |  ^      |
              +- back -+  +-back-+

``SignupFlowModel`` tracks which step the browser should be on and the
values entered so far. Advancing from a step is only possible when every
required field of that step is valid; otherwise the state is kept and the
matching validation messages are expected on the page. Validation messages
are an assertable state, not an exception. Calling an action from a state
where it is not available raises InvalidTransitionError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Optional

from signup_flow.config import AllowLists, SuiteSettings
from signup_flow.errors import InvalidTransitionError
from signup_flow.interaction import DROPDOWN_RETRY, VISIBLE, BrowserInteraction, RetryPolicy
from signup_flow.locators import SelectorCatalog
from signup_flow.pages import LoginPage, SignupStep1Page, SignupStep2Page, SignupStep3Page
from signup_flow.signup_data import (
    SignupProfile,
    is_secure_password,
    is_valid_phone_number,
)

logger = logging.getLogger(__name__)


class SignupFlowState(Enum):
    LOGIN = "login"
    STEP1 = "step1"
    STEP2 = "step2"
    STEP3 = "step3"
    COMPLETED = "completed"


class ValidationErrorKind(str, Enum):
    """Field-level validation failures, one per offending field."""

    EMAIL = "email"
    PASSWORD = "password"
    TERMS = "terms"
    FIRST_NAME = "first_name"
    LAST_NAME = "last_name"
    PHONE_NUMBER = "phone_number"
    COMPANY_NAME = "company_name"
    COUNTRY = "country"
    HEAR_ABOUT_US = "hear_about_us"

    @property
    def displayed(self) -> bool:
        """Whether the application renders a message for this error."""
        return self not in (ValidationErrorKind.PHONE_NUMBER, ValidationErrorKind.COUNTRY)


STEP_ORDER = (
    SignupFlowState.LOGIN,
    SignupFlowState.STEP1,
    SignupFlowState.STEP2,
    SignupFlowState.STEP3,
    SignupFlowState.COMPLETED,
)


def _blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def validate_step(
    state: SignupFlowState,
    values: Dict[str, Any],
    allow_lists: AllowLists,
) -> FrozenSet[ValidationErrorKind]:
    """Return the validation errors ``values`` would produce on ``state``.

    Every rule is evaluated independently so several errors can be
    reported at once. States without a form never have errors.
    """
    errors = set()
    if state is SignupFlowState.STEP1:
        if _blank(values.get("email")):
            errors.add(ValidationErrorKind.EMAIL)
        if not is_secure_password(values.get("password", "")):
            errors.add(ValidationErrorKind.PASSWORD)
        if not values.get("terms_accepted"):
            errors.add(ValidationErrorKind.TERMS)
    elif state is SignupFlowState.STEP2:
        if _blank(values.get("first_name")):
            errors.add(ValidationErrorKind.FIRST_NAME)
        if _blank(values.get("last_name")):
            errors.add(ValidationErrorKind.LAST_NAME)
        if not is_valid_phone_number(values.get("phone_number", "")):
            errors.add(ValidationErrorKind.PHONE_NUMBER)
    elif state is SignupFlowState.STEP3:
        if _blank(values.get("company_name")):
            errors.add(ValidationErrorKind.COMPANY_NAME)
        if values.get("country") not in allow_lists.countries:
            errors.add(ValidationErrorKind.COUNTRY)
        if values.get("hear_about_us") not in allow_lists.hear_about_us:
            errors.add(ValidationErrorKind.HEAR_ABOUT_US)
    return frozenset(errors)


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of a next/submit action."""

    state: SignupFlowState
    advanced: bool
    errors: FrozenSet[ValidationErrorKind] = frozenset()

    @property
    def displayed_errors(self) -> FrozenSet[ValidationErrorKind]:
        return frozenset(e for e in self.errors if e.displayed)


class SignupFlowModel:
    """Drive the signup wizard while enforcing its step contract.

    One model is created per test case around that test's browser
    session. It must not be shared between tests or threads.

    Example:
        flow = SignupFlowModel(PlaywrightInteraction(page), settings)
        flow.open_signup()
        flow.complete_step1(profile)
        assert flow.state is SignupFlowState.STEP2
    """

    def __init__(
        self,
        interaction: BrowserInteraction,
        settings: Optional[SuiteSettings] = None,
        selectors: Optional[SelectorCatalog] = None,
        allow_lists: Optional[AllowLists] = None,
        retry_policy: RetryPolicy = DROPDOWN_RETRY,
    ) -> None:
        self.interaction = interaction
        self.settings = settings or SuiteSettings()
        self.allow_lists = allow_lists or AllowLists.load()
        selectors = selectors or SelectorCatalog.load()

        self.login_page = LoginPage(interaction, selectors)
        self.step1 = SignupStep1Page(interaction, selectors)
        self.step2 = SignupStep2Page(interaction, selectors)
        self.step3 = SignupStep3Page(interaction, selectors, retry_policy)

        self.state = SignupFlowState.LOGIN
        self.values: Dict[str, Any] = {
            "email": "",
            "password": "",
            "terms_accepted": False,
            "first_name": "",
            "last_name": "",
            "phone_number": "",
            "company_name": "",
            "country": "",
            "hear_about_us": "",
        }
        self.last_outcome: Optional[ValidationOutcome] = None
        self._cookies_handled = False
        self._account_submitted = False

    # ------------------------------------------------------------------
    # State bookkeeping
    # ------------------------------------------------------------------

    def _require(self, action: str, *states: SignupFlowState) -> None:
        if self.state not in states:
            raise InvalidTransitionError(action, self.state)

    def _move(self, new_state: SignupFlowState) -> None:
        logger.info("Signup flow: %s -> %s", self.state.name, new_state.name)
        self.state = new_state

    def _page_for(self, state: SignupFlowState):
        return {
            SignupFlowState.STEP1: self.step1,
            SignupFlowState.STEP2: self.step2,
            SignupFlowState.STEP3: self.step3,
        }[state]

    def _wait_until_loaded(self, state: SignupFlowState) -> None:
        """Wait for the first field of the step page to be visible."""
        page = self._page_for(state)
        first_field = {
            SignupFlowState.STEP1: "email_field",
            SignupFlowState.STEP2: "first_name_field",
            SignupFlowState.STEP3: "company_name_field",
        }[state]
        self.interaction.wait_for(page.component.element(first_field), VISIBLE)

    def _wait_for_errors(self, errors: Iterable[ValidationErrorKind]) -> None:
        """Wait until the messages for ``errors`` are rendered."""
        page = self._page_for(self.state)
        for error in errors:
            if error.displayed:
                self.interaction.wait_for(
                    page.component.element(page.ERRORS[error.value]), VISIBLE
                )

    def _handle_cookies(self) -> bool:
        """Return True the first time, so only one action waits for the banner."""
        first = not self._cookies_handled
        self._cookies_handled = True
        return first

    # ------------------------------------------------------------------
    # Entry
    # ------------------------------------------------------------------

    def open_login(self) -> None:
        """Open the login page (base URL)."""
        self._require("open_login", SignupFlowState.LOGIN)
        self.login_page.open(self.settings.base_url)

    def start_signup(self) -> None:
        """Click "Start a free trial" on the login page and land on step 1."""
        self._require("start_signup", SignupFlowState.LOGIN)
        self.login_page.click_start_free_trial()
        self._cookies_handled = True
        self._wait_until_loaded(SignupFlowState.STEP1)
        self._move(SignupFlowState.STEP1)

    def open_signup(self) -> None:
        """Navigate straight to the signup entry URL."""
        self._require("open_signup", SignupFlowState.LOGIN)
        self.interaction.goto(self.settings.signup_url)
        self._wait_until_loaded(SignupFlowState.STEP1)
        self._move(SignupFlowState.STEP1)

    # ------------------------------------------------------------------
    # Field entry
    # ------------------------------------------------------------------

    def fill_credentials(self, email: str, password: str, accept_terms: bool = True) -> None:
        self._require("fill_credentials", SignupFlowState.STEP1)
        self.step1.fill_signup_form(
            email, password, accept_terms, accept_cookies=self._handle_cookies()
        )
        self.values["email"] = email
        self.values["password"] = password
        self.values["terms_accepted"] = self.values["terms_accepted"] or accept_terms

    def fill_personal_details(self, first_name: str, last_name: str, phone_number: str) -> None:
        self._require("fill_personal_details", SignupFlowState.STEP2)
        self.step2.fill_personal_details(first_name, last_name, phone_number)
        self.values.update(
            first_name=first_name, last_name=last_name, phone_number=phone_number
        )

    def fill_company_details(self, company_name: str, country: str = "",
                             hear_about_us: str = "") -> None:
        """Fill step 3. Empty selections leave the dropdown untouched."""
        self._require("fill_company_details", SignupFlowState.STEP3)
        self.step3.enter_company_name(company_name)
        self.values["company_name"] = company_name
        if country:
            self.select_country(country)
        if hear_about_us:
            self.select_hear_about_us(hear_about_us)

    def select_country(self, country: str) -> None:
        self._require("select_country", SignupFlowState.STEP3)
        self.step3.select_country(country)
        self.values["country"] = country

    def select_hear_about_us(self, channel: str) -> None:
        self._require("select_hear_about_us", SignupFlowState.STEP3)
        self.step3.select_hear_about_us(channel)
        self.values["hear_about_us"] = channel

    def get_selected_value(self, field: str) -> str:
        """Read back the value shown by a selection field on step 3.

        After completion the form is only still on screen when the create
        account button was not clicked.
        """
        self._require("get_selected_value", SignupFlowState.STEP3, SignupFlowState.COMPLETED)
        if self._account_submitted:
            raise InvalidTransitionError("get_selected_value", self.state)
        if field not in SignupStep3Page.DROPDOWNS:
            raise ValueError(f"'{field}' is not a selection field")
        return self.step3.get_selected_value(field)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def validation_errors(
        self, state: Optional[SignupFlowState] = None
    ) -> FrozenSet[ValidationErrorKind]:
        """Errors ``state`` (default: the current step) would report if advanced now."""
        return validate_step(state or self.state, self.values, self.allow_lists)

    def is_submit_enabled(self) -> bool:
        """True exactly when every step 3 field is valid."""
        return not self.validation_errors(SignupFlowState.STEP3)

    def _advance(self, click) -> ValidationOutcome:
        errors = self.validation_errors()
        click()
        if errors:
            logger.info(
                "Signup flow stays on %s: %s",
                self.state.name, ", ".join(sorted(e.value for e in errors)),
            )
            self._wait_for_errors(errors)
            outcome = ValidationOutcome(self.state, advanced=False, errors=errors)
        else:
            target = STEP_ORDER[STEP_ORDER.index(self.state) + 1]
            self._wait_until_loaded(target)
            self._move(target)
            outcome = ValidationOutcome(self.state, advanced=True)
        self.last_outcome = outcome
        return outcome

    def next(self) -> ValidationOutcome:
        """Click the advance button of step 1 or step 2."""
        self._require("next", SignupFlowState.STEP1, SignupFlowState.STEP2)
        if self.state is SignupFlowState.STEP1:
            accept = self._handle_cookies()
            return self._advance(lambda: self.step1.click_try_for_free(accept_cookies=accept))
        return self._advance(self.step2.click_next_button)

    def submit(self) -> ValidationOutcome:
        """Submit step 3.

        With invalid fields the create-account button is clicked so the
        application shows its messages, and the state stays on STEP3. With
        valid fields the flow completes; the account is only really created
        when ``settings.create_accounts`` is set.
        """
        self._require("submit", SignupFlowState.STEP3)
        errors = self.validation_errors()
        if errors:
            return self._advance(self.step3.click_create_account)

        if self.settings.create_accounts:
            self.step3.click_create_account()
            self._account_submitted = True
        else:
            logger.info("Account creation disabled, not clicking create account")
        self._move(SignupFlowState.COMPLETED)
        self.last_outcome = ValidationOutcome(self.state, advanced=True)
        return self.last_outcome

    def advance(self) -> ValidationOutcome:
        """``next()`` on steps 1 and 2, ``submit()`` on step 3."""
        if self.state is SignupFlowState.STEP3:
            return self.submit()
        return self.next()

    def back(self) -> None:
        """Return to the previous step. Entered values are kept."""
        self._require("back", SignupFlowState.STEP2, SignupFlowState.STEP3)
        self._page_for(self.state).click_back_button()
        target = STEP_ORDER[STEP_ORDER.index(self.state) - 1]
        self._wait_until_loaded(target)
        self._move(target)

    # ------------------------------------------------------------------
    # Observations
    # ------------------------------------------------------------------

    def visible_errors(self) -> FrozenSet[ValidationErrorKind]:
        """Validation messages currently rendered on the step page."""
        self._require(
            "visible_errors",
            SignupFlowState.STEP1, SignupFlowState.STEP2, SignupFlowState.STEP3,
        )
        page = self._page_for(self.state)
        return frozenset(
            ValidationErrorKind(field) for field in page.ERRORS if page.is_error_visible(field)
        )

    def is_on_step(self, state: SignupFlowState) -> bool:
        """Check the page for ``state`` is rendered right now."""
        return self._page_for(state).is_loaded()

    def displayed_values(self) -> Dict[str, str]:
        """Read the field values shown on the current step page."""
        if self.state is SignupFlowState.STEP1:
            return {"email": self.step1.read_email(), "password": self.step1.read_password()}
        if self.state is SignupFlowState.STEP2:
            return {
                "first_name": self.step2.read_first_name(),
                "last_name": self.step2.read_last_name(),
                "phone_number": self.step2.read_phone_number(),
            }
        if self.state is SignupFlowState.STEP3:
            return {
                "company_name": self.step3.read_company_name(),
                "country": self.step3.get_selected_value("country"),
                "hear_about_us": self.step3.get_selected_value("hear_about_us"),
            }
        raise InvalidTransitionError("displayed_values", self.state)

    # ------------------------------------------------------------------
    # Profile helpers
    # ------------------------------------------------------------------

    def complete_step1(self, profile: SignupProfile) -> ValidationOutcome:
        self.fill_credentials(profile.email, profile.password)
        return self.next()

    def complete_step2(self, profile: SignupProfile) -> ValidationOutcome:
        self.fill_personal_details(profile.first_name, profile.last_name, profile.phone_number)
        return self.next()

    def complete_step3(self, profile: SignupProfile) -> ValidationOutcome:
        self.fill_company_details(profile.company_name, profile.country, profile.hear_about_us)
        return self.submit()
