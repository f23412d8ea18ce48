"""Root conftest.py - fixtures and options for the signup flow suite.

Browser-backed scenarios are tagged ``@e2e`` and only run with
``--run-e2e``; everything else runs against in-memory fakes.
"""

import logging
import re
from typing import Iterator

import pytest

from signup_flow.browsers import browser_session
from signup_flow.config import FRAMEWORKS, SuiteSettings
from signup_flow.flow import SignupFlowModel
from signup_flow.interaction import BrowserInteraction
from signup_flow.signup_data import SignupProfile, TestDataProvider
from tests.step_defs.helpers import SignupContext

# Register the step definitions with pytest-bdd for every feature file.
pytest_plugins = ["tests.step_defs.signup_steps"]

logger = logging.getLogger(__name__)


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("signup", "signup flow suite")
    group.addoption(
        "--browser-framework",
        choices=FRAMEWORKS,
        default=None,
        help="Browser automation framework (overrides SIGNUP_BROWSER_FRAMEWORK)",
    )
    group.addoption(
        "--headed",
        action="store_true",
        default=False,
        help="Show the browser window",
    )
    group.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run scenarios tagged @e2e against the live application",
    )


def pytest_collection_modifyitems(config: pytest.Config, items) -> None:
    if config.getoption("--run-e2e"):
        return
    skip_e2e = pytest.mark.skip(reason="needs --run-e2e")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


@pytest.hookimpl(hookwrapper=True, tryfirst=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase's report on the item as ``rep_<phase>``."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


@pytest.fixture(scope="session")
def settings(pytestconfig: pytest.Config) -> SuiteSettings:
    """Suite settings from SIGNUP_* environment variables and CLI options."""
    return SuiteSettings.from_env().with_overrides(
        framework=pytestconfig.getoption("--browser-framework"),
        headless=False if pytestconfig.getoption("--headed") else None,
    )


@pytest.fixture(scope="session")
def data_provider(settings: SuiteSettings) -> TestDataProvider:
    return TestDataProvider(fixture_path=settings.test_data_path)


@pytest.fixture
def signup_profile(data_provider: TestDataProvider) -> SignupProfile:
    """A freshly generated profile for one test."""
    return data_provider.get_test_data()


@pytest.fixture
def browser(request: pytest.FixtureRequest, settings: SuiteSettings) -> Iterator[BrowserInteraction]:
    """Browser session for one test; screenshots the page if the test fails."""
    with browser_session(settings) as interaction:
        yield interaction

        report = getattr(request.node, "rep_call", None)
        if report is not None and report.failed:
            name = re.sub(r"[^\w.-]+", "_", request.node.name)
            path = settings.screenshot_dir / f"{name}.png"
            try:
                interaction.screenshot(path)
                print(f"Saved failure screenshot to {path}")
            except Exception as e:  # noqa: BLE001
                logger.warning("Could not save failure screenshot: %s", e)


@pytest.fixture
def signup_flow(browser: BrowserInteraction, settings: SuiteSettings) -> SignupFlowModel:
    return SignupFlowModel(browser, settings)


@pytest.fixture
def signup_context(signup_flow: SignupFlowModel, signup_profile: SignupProfile) -> SignupContext:
    """Scenario state shared by the signup step definitions."""
    return SignupContext(signup_flow, signup_profile)
