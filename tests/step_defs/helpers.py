"""Shared helpers for signup step definitions."""

from typing import Dict, Optional

from signup_flow.flow import SignupFlowModel, SignupFlowState, ValidationErrorKind, ValidationOutcome
from signup_flow.signup_data import SignupProfile

# Known-good profile used by the reference end-to-end scenario.
REFERENCE_PROFILE = SignupProfile(
    email="a@check.de",
    password="Passw0rdA!",
    first_name="Jane",
    last_name="Doe",
    phone_number="+49 123 456 7890",
    company_name="Acme",
    country="Germany",
    hear_about_us="Google",
)

STEP_NAMES = {
    "1": SignupFlowState.STEP1,
    "2": SignupFlowState.STEP2,
    "3": SignupFlowState.STEP3,
}


class SignupContext:
    """Scenario state shared between signup step definitions.

    One context is created per scenario; it carries the flow under test,
    the profile being entered and the values seen before a navigation so
    later steps can compare against them.
    """

    def __init__(self, flow: SignupFlowModel, profile: SignupProfile) -> None:
        self.flow = flow
        self.profile = profile
        self.last_outcome: Optional[ValidationOutcome] = None
        self.remembered: Dict[str, str] = {}

    def remember_displayed_values(self) -> None:
        """Store what the current step page shows right now."""
        self.remembered = self.flow.displayed_values()


def step_state(number: str) -> SignupFlowState:
    """Map "1", "2" or "3" to the flow state of that signup step."""
    try:
        return STEP_NAMES[number]
    except KeyError:
        raise AssertionError(f"There is no signup step {number}") from None


def error_kind(name: str) -> ValidationErrorKind:
    """Map a feature-file error name (e.g. "first_name") to its kind."""
    try:
        return ValidationErrorKind(name)
    except ValueError:
        known = ", ".join(kind.value for kind in ValidationErrorKind)
        raise AssertionError(f"Unknown validation error '{name}', expected one of: {known}") from None


def profile_value(profile: SignupProfile, field: str) -> str:
    """Return ``field`` of ``profile`` (snake_case attribute name)."""
    if not hasattr(profile, field):
        raise AssertionError(f"Signup profile has no field '{field}'")
    return getattr(profile, field)
