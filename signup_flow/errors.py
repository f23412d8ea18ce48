"""Exceptions raised by the signup flow test suite."""


class SignupSuiteError(Exception):
    """Base exception for all signup suite failures."""


class ConfigurationError(SignupSuiteError):
    """Fixture or settings are missing or malformed.

    Raised before any browser interaction takes place.
    """


class GenerationError(SignupSuiteError):
    """A synthetic value generator exceeded its retry bound."""


class InvalidTransitionError(SignupSuiteError):
    """An action was attempted that is not legal in the current flow state."""

    def __init__(self, action: str, state) -> None:
        self.action = action
        self.state = state
        super().__init__(f"'{action}' is not allowed in state {state.name}")


class ElementInteractionError(SignupSuiteError):
    """The browser could not locate or act on an element."""


class ElementInteractionTimeout(ElementInteractionError):
    """An element did not reach the expected state within the wait bound."""


class OptionSelectionError(ElementInteractionError):
    """A dynamic dropdown option could not be selected."""

    def __init__(self, option: str, attempts: int = 0) -> None:
        self.option = option
        self.attempts = attempts
        if attempts:
            message = f"Failed to select option '{option}' after {attempts} attempts"
        else:
            message = f"Option '{option}' did not appear in the dropdown"
        super().__init__(message)
