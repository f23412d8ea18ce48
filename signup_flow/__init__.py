"""Signup flow end-to-end test support.

Test data generation, the signup wizard contract and page objects shared
by the Playwright and Selenium suites.
"""

from signup_flow.config import AllowLists, SuiteSettings
from signup_flow.errors import (
    ConfigurationError,
    ElementInteractionError,
    ElementInteractionTimeout,
    GenerationError,
    InvalidTransitionError,
    OptionSelectionError,
    SignupSuiteError,
)
from signup_flow.flow import (
    SignupFlowModel,
    SignupFlowState,
    ValidationErrorKind,
    ValidationOutcome,
)
from signup_flow.signup_data import (
    DYNAMIC,
    SignupProfile,
    TestDataProvider,
    generate_secure_password,
    is_secure_password,
)

__all__ = [
    "AllowLists",
    "SuiteSettings",
    "ConfigurationError",
    "ElementInteractionError",
    "ElementInteractionTimeout",
    "GenerationError",
    "InvalidTransitionError",
    "OptionSelectionError",
    "SignupSuiteError",
    "SignupFlowModel",
    "SignupFlowState",
    "ValidationErrorKind",
    "ValidationOutcome",
    "DYNAMIC",
    "SignupProfile",
    "TestDataProvider",
    "generate_secure_password",
    "is_secure_password",
]
