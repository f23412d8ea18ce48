"""Unit test conftest.

Overrides the browser fixtures from the root conftest.py with an
in-memory MockBrowser so the flow, page objects and step definitions can
be tested without a real browser.
"""

from pathlib import Path

import pytest

from signup_flow.config import AllowLists, SuiteSettings
from signup_flow.flow import SignupFlowModel
from signup_flow.locators import SelectorCatalog
from signup_flow.signup_data import TestDataProvider
from tests.unit.mocks import BASE_URL, NO_DELAY, SIGNUP_URL, MockBrowser


@pytest.fixture(scope="session")
def selectors() -> SelectorCatalog:
    return SelectorCatalog.load()


@pytest.fixture(scope="session")
def allow_lists() -> AllowLists:
    return AllowLists.load()


@pytest.fixture(scope="session")
def settings() -> SuiteSettings:
    """Default settings, independent of the SIGNUP_* environment."""
    return SuiteSettings(base_url=BASE_URL, signup_url=SIGNUP_URL)


@pytest.fixture(scope="session")
def data_provider(allow_lists: AllowLists) -> TestDataProvider:
    return TestDataProvider(seed=1234, allow_lists=allow_lists)


@pytest.fixture
def browser(selectors: SelectorCatalog, allow_lists: AllowLists) -> MockBrowser:
    """Mock browser showing the login page."""
    return MockBrowser(selectors=selectors, allow_lists=allow_lists)


@pytest.fixture
def signup_flow(browser: MockBrowser, settings: SuiteSettings,
                selectors: SelectorCatalog, allow_lists: AllowLists) -> SignupFlowModel:
    return SignupFlowModel(
        browser, settings, selectors=selectors, allow_lists=allow_lists, retry_policy=NO_DELAY
    )


@pytest.fixture
def fixture_file(tmp_path: Path):
    """Write a JSON test data record and return its path."""
    def _write(content: str) -> Path:
        path = tmp_path / "signup_test_data.json"
        path.write_text(content, encoding="utf-8")
        return path
    return _write
