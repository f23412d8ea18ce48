"""Mock classes for unit testing the signup flow without a browser."""

from .mock_browser import BASE_URL, NO_DELAY, SIGNUP_URL, MockBrowser, MockHandle

__all__ = [
    "BASE_URL",
    "NO_DELAY",
    "SIGNUP_URL",
    "MockBrowser",
    "MockHandle",
]
