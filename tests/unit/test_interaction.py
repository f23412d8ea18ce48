"""Unit tests for the dynamic dropdown selection and retry policy."""

from unittest.mock import MagicMock, call, patch

import pytest

from signup_flow.errors import (
    ElementInteractionError,
    ElementInteractionTimeout,
    OptionSelectionError,
)
from signup_flow.interaction import (
    DROPDOWN_RETRY,
    HIDDEN,
    VISIBLE,
    RetryPolicy,
    select_dynamic_option,
)
from signup_flow.locators import ByText
from tests.unit.mocks import NO_DELAY


@pytest.fixture
def step3_browser(browser):
    browser.page = "step3"
    return browser


def select_country(browser, selectors, country, policy=NO_DELAY):
    select_dynamic_option(
        browser,
        browser.locate(selectors.get("step3.country_dropdown")),
        browser.locate(selectors.get("step3.country_options")),
        country,
        policy=policy,
    )


def test_default_dropdown_retry_policy():
    assert DROPDOWN_RETRY.attempts == 3
    assert DROPDOWN_RETRY.delay == pytest.approx(0.2)


def test_retry_policy_requires_an_attempt():
    with pytest.raises(ValueError):
        RetryPolicy(attempts=0)


def test_retry_policy_pause_sleeps_for_delay():
    with patch("signup_flow.interaction.time.sleep") as sleep:
        RetryPolicy(delay=0.5).pause()
        RetryPolicy(delay=0).pause()

    sleep.assert_called_once_with(0.5)


def test_select_option_first_try(step3_browser, selectors):
    select_country(step3_browser, selectors, "Austria")

    assert step3_browser.inputs["country"] == "Austria"
    assert step3_browser.actions.count("click step3.country_options:Austria") == 1
    assert step3_browser.open_dropdown is None


def test_select_option_falls_back_to_raw_click(step3_browser, selectors):
    step3_browser.failing_option_clicks = 1

    select_country(step3_browser, selectors, "Germany")

    assert step3_browser.inputs["country"] == "Germany"
    assert "raw_click step3.country_options:Germany" in step3_browser.actions


def test_select_option_retries_until_click_succeeds(step3_browser, selectors):
    step3_browser.failing_option_clicks = 2
    step3_browser.raw_click_fails = True

    select_country(step3_browser, selectors, "Germany")

    assert step3_browser.inputs["country"] == "Germany"
    assert step3_browser.actions.count("click step3.country_options:Germany") == 3
    assert step3_browser.actions.count("raw_click step3.country_options:Germany") == 2


def test_select_option_gives_up_after_three_attempts(step3_browser, selectors):
    step3_browser.failing_option_clicks = 10
    step3_browser.raw_click_fails = True

    with pytest.raises(OptionSelectionError) as exc_info:
        select_country(step3_browser, selectors, "Germany")

    assert exc_info.value.option == "Germany"
    assert exc_info.value.attempts == 3
    assert "Germany" in str(exc_info.value)
    assert step3_browser.actions.count("click step3.country_options:Germany") == 3
    assert "country" not in step3_browser.inputs


def test_select_option_not_in_list(step3_browser, selectors):
    with pytest.raises(OptionSelectionError, match="'Atlantis' did not appear"):
        select_country(step3_browser, selectors, "Atlantis")

    assert "country" not in step3_browser.inputs


def test_select_option_pauses_between_hover_and_click():
    interaction = MagicMock(timeout_ms=5000)
    policy = MagicMock(attempts=3)

    select_dynamic_option(interaction, "dropdown", "options", "Google", policy=policy)

    option = interaction.locate_within.return_value
    interaction.locate_within.assert_called_once_with("options", ByText("Google"))
    interaction.wait_for.assert_has_calls(
        [call("options", VISIBLE, 5000), call(option, VISIBLE, 5000)]
    )
    interaction.hover.assert_called_once_with(option)
    policy.pause.assert_called_once_with()
    interaction.click.assert_has_calls([call("dropdown"), call(option, force=True)])
    interaction.raw_click.assert_not_called()


def test_select_option_uses_explicit_timeout():
    interaction = MagicMock(timeout_ms=5000)

    select_dynamic_option(interaction, "dropdown", "options", "Google",
                          policy=NO_DELAY, timeout_ms=100)

    interaction.wait_for.assert_any_call("options", VISIBLE, 100)


def test_select_option_wraps_wait_timeout():
    interaction = MagicMock(timeout_ms=5000)
    interaction.wait_for.side_effect = ElementInteractionTimeout("not rendered")

    with pytest.raises(OptionSelectionError) as exc_info:
        select_dynamic_option(interaction, "dropdown", "options", "Google", policy=NO_DELAY)

    assert isinstance(exc_info.value.__cause__, ElementInteractionTimeout)
    interaction.hover.assert_not_called()


def test_select_option_treats_hover_failure_as_failed_attempt():
    interaction = MagicMock(timeout_ms=5000)
    interaction.hover.side_effect = ElementInteractionError("detached")

    select_dynamic_option(interaction, "dropdown", "options", "Google", policy=NO_DELAY)

    interaction.raw_click.assert_called_once()


def test_wait_for_rejects_unknown_state(browser, selectors):
    handle = browser.locate(selectors.get("login.start_free_trial_button"))

    with pytest.raises(ValueError):
        browser.wait_for(handle, "attached")


def test_wait_for_hidden(browser, selectors):
    cookie_button = browser.locate(selectors.get("common.cookie_accept_button"))

    browser.wait_for(cookie_button, HIDDEN)
    with pytest.raises(ElementInteractionTimeout):
        browser.wait_for(cookie_button, VISIBLE)


def test_is_clickable_needs_visible_and_enabled(step3_browser, selectors):
    button = step3_browser.locate(selectors.get("step3.create_account_button"))
    assert step3_browser.is_clickable(button)

    step3_browser.submit_enabled = False
    assert not step3_browser.is_clickable(button)
