"""Suite settings and packaged configuration files.

Settings are read from ``SIGNUP_*`` environment variables. Selectors and
allow-lists are kept in YAML files next to this module so they can be
updated when the UI changes without modifying code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from signup_flow.errors import ConfigurationError

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_TEST_DATA = DATA_DIR / "signup_test_data.json"
DEFAULT_SELECTORS = DATA_DIR / "signup_selectors.yaml"
DEFAULT_OPTIONS = DATA_DIR / "signup_options.yaml"

FRAMEWORKS = ("playwright", "selenium")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got '{raw}'")


@dataclass(frozen=True)
class SuiteSettings:
    """Runtime settings shared by the pytest and Robot Framework suites."""

    base_url: str = "https://www.circula.com"
    signup_url: str = "https://app.circula.com/users/sign_up"
    framework: str = "playwright"
    browser: Optional[str] = None
    headless: bool = True
    create_accounts: bool = False
    timeout_ms: int = 5000
    test_data_path: Path = DEFAULT_TEST_DATA
    screenshot_dir: Path = Path("artifacts/screenshots")

    def __post_init__(self) -> None:
        if self.framework not in FRAMEWORKS:
            raise ConfigurationError(
                f"Unknown browser framework '{self.framework}', "
                f"expected one of {', '.join(FRAMEWORKS)}"
            )
        if self.timeout_ms <= 0:
            raise ConfigurationError("Timeout must be a positive number of ms")

    @property
    def browser_name(self) -> str:
        """Browser to launch, with a per-framework default."""
        if self.browser:
            return self.browser
        return "chromium" if self.framework == "playwright" else "chrome"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> SuiteSettings:
        """Build settings from ``SIGNUP_*`` environment variables."""
        env = os.environ if environ is None else environ
        kwargs: Dict[str, Any] = {}

        if "SIGNUP_BASE_URL" in env:
            kwargs["base_url"] = env["SIGNUP_BASE_URL"].rstrip("/")
        if "SIGNUP_ENTRY_URL" in env:
            kwargs["signup_url"] = env["SIGNUP_ENTRY_URL"]
        if "SIGNUP_BROWSER_FRAMEWORK" in env:
            kwargs["framework"] = env["SIGNUP_BROWSER_FRAMEWORK"].strip().lower()
        if "SIGNUP_BROWSER" in env:
            kwargs["browser"] = env["SIGNUP_BROWSER"].strip().lower()
        if "SIGNUP_HEADLESS" in env:
            kwargs["headless"] = _parse_bool("SIGNUP_HEADLESS", env["SIGNUP_HEADLESS"])
        if "SIGNUP_CREATE_ACCOUNTS" in env:
            kwargs["create_accounts"] = _parse_bool(
                "SIGNUP_CREATE_ACCOUNTS", env["SIGNUP_CREATE_ACCOUNTS"]
            )
        if "SIGNUP_TIMEOUT_MS" in env:
            try:
                kwargs["timeout_ms"] = int(env["SIGNUP_TIMEOUT_MS"])
            except ValueError as e:
                raise ConfigurationError(
                    f"SIGNUP_TIMEOUT_MS must be an integer, got '{env['SIGNUP_TIMEOUT_MS']}'"
                ) from e
        if "SIGNUP_TEST_DATA" in env:
            kwargs["test_data_path"] = Path(env["SIGNUP_TEST_DATA"])
        if "SIGNUP_SCREENSHOT_DIR" in env:
            kwargs["screenshot_dir"] = Path(env["SIGNUP_SCREENSHOT_DIR"])

        return cls(**kwargs)

    def with_overrides(self, **changes: Any) -> SuiteSettings:
        """Return a copy with the non-None ``changes`` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML mapping, raising ConfigurationError on any problem."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Configuration file not found: {path}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a mapping at top level")
    return data


@dataclass(frozen=True)
class AllowLists:
    """Accepted values for the selection fields on signup step 3."""

    countries: List[str]
    hear_about_us: List[str]

    @classmethod
    def load(cls, path: Path = DEFAULT_OPTIONS) -> AllowLists:
        data = load_yaml(path)
        try:
            countries = [str(c) for c in data["countries"]]
            channels = [str(c) for c in data["hear_about_us"]]
        except (KeyError, TypeError) as e:
            raise ConfigurationError(
                f"{path} must define 'countries' and 'hear_about_us' lists"
            ) from e
        if not countries or not channels:
            raise ConfigurationError(f"{path} contains an empty allow-list")
        return cls(countries=countries, hear_about_us=channels)
