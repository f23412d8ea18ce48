"""Signup Keywords for Robot Framework.

Keywords for the signup flow, aligned with the BDD scenario steps.
Uses @keyword decorator to map clean function names to scenario step text.

Mirrors: tests/step_defs/signup_steps.py
"""

from contextlib import ExitStack
from pathlib import Path
from typing import Dict, Optional

from robot.api import logger
from robot.api.deco import keyword

from signup_flow.browsers import browser_session
from signup_flow.config import SuiteSettings
from signup_flow.flow import SignupFlowModel, SignupFlowState, ValidationErrorKind, ValidationOutcome
from signup_flow.interaction import BrowserInteraction
from signup_flow.signup_data import SignupProfile, TestDataProvider

STEPS = {
    "1": SignupFlowState.STEP1,
    "2": SignupFlowState.STEP2,
    "3": SignupFlowState.STEP3,
}
STEP_NUMBERS = {state: number for number, state in STEPS.items()}


class SignupKeywords:
    """Keywords driving the signup wizard through the signup flow model."""

    ROBOT_LIBRARY_SCOPE = "SUITE"
    ROBOT_LIBRARY_DOC_FORMAT = "TEXT"

    def __init__(self) -> None:
        """Initialize SignupKeywords."""
        self._session = ExitStack()
        self._flow: Optional[SignupFlowModel] = None
        self._provider: Optional[TestDataProvider] = None
        self._profile: Optional[SignupProfile] = None
        self._outcome: Optional[ValidationOutcome] = None

    # =========================================================================
    # Session Keywords
    # =========================================================================

    @keyword("Open Signup Browser")
    def open_signup_browser(self, framework: Optional[str] = None,
                            headless: Optional[bool] = None) -> None:
        """Start a browser session configured from the SIGNUP_* environment.

        Arguments:
            framework: "playwright" or "selenium", overrides the environment
            headless: Overrides SIGNUP_HEADLESS
        """
        settings = SuiteSettings.from_env().with_overrides(framework=framework, headless=headless)
        interaction = self._session.enter_context(browser_session(settings))
        self._start(interaction, settings)
        print(f"✓ Opened {settings.framework} browser ({settings.browser_name})")

    @keyword("Close Signup Browser")
    def close_signup_browser(self) -> None:
        """Close the browser session opened by Open Signup Browser."""
        self._session.close()
        self._session = ExitStack()
        self._flow = None
        self._profile = None
        print("✓ Closed signup browser")

    @keyword("Take Signup Screenshot")
    def take_screenshot(self, path: str) -> None:
        self._current_flow().interaction.screenshot(Path(path))
        logger.info(f"Saved screenshot to {path}")

    # =========================================================================
    # Test Data Keywords
    # =========================================================================

    @keyword("A fresh signup profile")
    def fresh_signup_profile(self) -> Dict[str, str]:
        """Generate a new profile and return it keyed like the fixture record.

        Maps to scenario step:
        - "Given a fresh signup profile"
        """
        self._profile = self._data_provider().get_test_data()
        print(f"✓ Generated signup profile for {self._profile.email}")
        return self._profile.as_dict()

    @keyword("Use signup profile")
    def use_signup_profile(self, email: str, password: str, first_name: str, last_name: str,
                           phone_number: str, company_name: str, country: str = "Germany",
                           hear_about_us: str = "Google") -> None:
        """Use explicit values instead of a generated profile."""
        self._profile = SignupProfile(
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            phone_number=phone_number,
            company_name=company_name,
            country=country,
            hear_about_us=hear_about_us,
        )
        print(f"✓ Using signup profile for {email}")

    # =========================================================================
    # Navigation Keywords
    # =========================================================================

    @keyword("The user is on the login page")
    def on_login_page(self) -> None:
        flow = self._current_flow()
        flow.open_login()
        print(f"✓ Opened login page {flow.settings.base_url}")

    @keyword('The user clicks "Start a free trial"')
    def click_start_free_trial(self) -> None:
        self._current_flow().start_signup()
        print("✓ Clicked 'Start a free trial'")

    @keyword("The user is on signup step ${number}")
    def on_signup_step(self, number: str) -> None:
        """Open the signup page and complete every step before ``number``.

        Maps to scenario step:
        - "Given the user is on signup step 2"
        """
        target = self._step(number)
        flow = self._current_flow()
        flow.open_signup()
        while flow.state is not target:
            self.complete_step(STEP_NUMBERS[flow.state])
        print(f"✓ User is on signup step {number}")

    @keyword("The user completes signup step ${number}")
    def complete_step(self, number: str) -> None:
        """Fill every field of the step from the profile and advance."""
        flow = self._expect_step(number)
        complete = {
            SignupFlowState.STEP1: flow.complete_step1,
            SignupFlowState.STEP2: flow.complete_step2,
            SignupFlowState.STEP3: flow.complete_step3,
        }[flow.state]
        self._outcome = complete(self._current_profile())
        if not self._outcome.advanced:
            errors = ", ".join(sorted(e.value for e in self._outcome.errors))
            raise AssertionError(f"Signup step {number} did not advance: {errors}")
        print(f"✓ Completed signup step {number}")

    @keyword("The user goes back")
    def go_back(self) -> None:
        flow = self._current_flow()
        flow.back()
        print(f"✓ Went back to {flow.state.name}")

    @keyword("The user submits signup step ${number} without any input")
    def submit_empty_step(self, number: str) -> None:
        self._outcome = self._expect_step(number).advance()
        print(f"✓ Submitted empty signup step {number}")

    @keyword("The user submits signup step 3 without company name or channel")
    def submit_step3_without_company(self) -> None:
        flow = self._expect_step("3")
        flow.fill_company_details("", country=self._current_profile().country)
        self._outcome = flow.submit()
        print("✓ Submitted signup step 3 without company name and channel")

    @keyword("The user fills signup step 3")
    def fill_step3(self) -> None:
        profile = self._current_profile()
        self._current_flow().fill_company_details(
            profile.company_name, profile.country, profile.hear_about_us
        )
        print(f"✓ Filled company details for {profile.company_name}")

    @keyword("The user submits signup step 3")
    def submit_step3(self) -> None:
        self._outcome = self._current_flow().submit()
        print("✓ Submitted signup step 3")

    # =========================================================================
    # Verification Keywords
    # =========================================================================

    @keyword("Signup step ${number} is displayed")
    def step_displayed(self, number: str) -> None:
        flow = self._expect_step(number)
        if not flow.is_on_step(flow.state):
            raise AssertionError(f"Signup step {number} is not rendered")
        print(f"✓ Signup step {number} is displayed")

    @keyword("The flow stays on signup step ${number}")
    def stays_on_step(self, number: str) -> None:
        if self._outcome is None or self._outcome.advanced:
            raise AssertionError(f"Expected the last submit to stay on signup step {number}")
        self._expect_step(number)
        print(f"✓ Flow stayed on signup step {number}")

    @keyword('The "${error}" validation error is displayed')
    def validation_error_displayed(self, error: str) -> None:
        try:
            kind = ValidationErrorKind(error)
        except ValueError:
            raise AssertionError(f"Unknown validation error '{error}'") from None
        if kind not in self._current_flow().visible_errors():
            raise AssertionError(f"Validation message for '{error}' is not displayed")
        print(f"✓ Validation error '{error}' is displayed")

    @keyword('The selected "${field}" is "${value}"')
    def selected_value_is(self, field: str, value: str) -> None:
        selected = self._current_flow().get_selected_value(field)
        if selected != value:
            raise AssertionError(f"Selected {field} is {selected!r}, expected {value!r}")
        print(f"✓ Selected {field} is '{value}'")

    @keyword("The create account button is enabled")
    def create_account_enabled(self) -> None:
        flow = self._current_flow()
        if not (flow.is_submit_enabled() and flow.step3.is_submit_button_enabled()):
            raise AssertionError("Create account button is not enabled")
        print("✓ Create account button is enabled")

    @keyword("The signup flow is completed")
    def signup_completed(self) -> None:
        flow = self._current_flow()
        if flow.state is not SignupFlowState.COMPLETED:
            raise AssertionError(f"Signup flow ended on {flow.state.name}")
        print(f"✓ Signup completed for {self._current_profile().email}")

    @keyword("The entered email and password are unchanged")
    def credentials_unchanged(self) -> None:
        self._assert_displayed_match("email", "password")
        print("✓ Email and password were preserved")

    @keyword("The entered personal details are unchanged")
    def personal_details_unchanged(self) -> None:
        self._assert_displayed_match("first_name", "last_name", "phone_number")
        print("✓ Personal details were preserved")

    # =========================================================================
    # Helpers
    # =========================================================================

    def _start(self, interaction: BrowserInteraction, settings: SuiteSettings) -> None:
        self._flow = SignupFlowModel(interaction, settings)
        if self._provider is None:
            self._provider = TestDataProvider(fixture_path=settings.test_data_path)
        self._outcome = None

    def _current_flow(self) -> SignupFlowModel:
        if self._flow is None:
            raise AssertionError("No signup browser is open, use 'Open Signup Browser' first")
        return self._flow

    def _current_profile(self) -> SignupProfile:
        if self._profile is None:
            self._profile = self._data_provider().get_test_data()
        return self._profile

    def _data_provider(self) -> TestDataProvider:
        """Return the suite's provider, created from the environment on first use."""
        if self._provider is None:
            settings = SuiteSettings.from_env()
            self._provider = TestDataProvider(fixture_path=settings.test_data_path)
        return self._provider

    def _assert_displayed_match(self, *fields: str) -> None:
        shown = self._current_flow().displayed_values()
        profile = self._current_profile()
        for field in fields:
            expected = getattr(profile, field)
            if shown.get(field) != expected:
                raise AssertionError(
                    f"Field '{field}' shows {shown.get(field)!r}, expected {expected!r}"
                )

    def _step(self, number: str) -> SignupFlowState:
        try:
            return STEPS[str(number)]
        except KeyError:
            raise AssertionError(f"There is no signup step {number}") from None

    def _expect_step(self, number: str) -> SignupFlowModel:
        """Return the flow, failing unless it is on signup step ``number``."""
        flow = self._current_flow()
        if flow.state is not self._step(number):
            raise AssertionError(f"Expected signup step {number}, flow is on {flow.state.name}")
        return flow
