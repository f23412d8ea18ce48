"""Test data for the signup flow.

Static values come from a JSON fixture record. Any value set to the
``"DYNAMIC"`` sentinel is replaced by a synthetic one generated with Faker:

- email: random user name at the ``check.de`` test domain (no real mail)
- password: see ``TestDataProvider.generate_secure_password``
- firstName / lastName / companyName: realistic Faker values
- phoneNumber: German format, ``+49 XXX XXX XXXX``
- country / hearAboutUs: random entry of the allow-list

``country`` and ``hearAboutUs`` fall back to ``"Germany"`` and ``"Google"``
when the record leaves them out.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

from faker import Faker

from signup_flow.config import DEFAULT_TEST_DATA, AllowLists
from signup_flow.errors import ConfigurationError, GenerationError

logger = logging.getLogger(__name__)

DYNAMIC = "DYNAMIC"
TEST_EMAIL_DOMAIN = "check.de"
PHONE_COUNTRY_CODE = "+49"
PASSWORD_SUFFIX = "A!"
MAX_PASSWORD_ATTEMPTS = 1000

FIELD_DEFAULTS = {
    "country": "Germany",
    "hearAboutUs": "Google",
}

_PASSWORD_RE = re.compile(r"^(?=.*[A-Za-z])(?=.*\d).{8,}$")
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_PHONE_RE = re.compile(r"^\+\d{1,3} \d{3} \d{3} \d{4}$")


def is_secure_password(value: str) -> bool:
    """At least 8 characters with at least one letter and one digit."""
    return bool(value) and _PASSWORD_RE.match(value) is not None


def is_valid_email(value: str) -> bool:
    return bool(value) and _EMAIL_RE.match(value) is not None


def is_valid_phone_number(value: str) -> bool:
    """Country calling code followed by 3-3-4 digit groups."""
    return bool(value) and _PHONE_RE.match(value) is not None


@dataclass(frozen=True)
class SignupProfile:
    """One complete set of signup form values."""

    email: str
    password: str
    first_name: str
    last_name: str
    phone_number: str
    company_name: str
    country: str
    hear_about_us: str

    # dataclass field name -> fixture record key
    FIXTURE_KEYS = {
        "email": "email",
        "password": "password",
        "first_name": "firstName",
        "last_name": "lastName",
        "phone_number": "phoneNumber",
        "company_name": "companyName",
        "country": "country",
        "hear_about_us": "hearAboutUs",
    }

    def as_dict(self) -> Dict[str, str]:
        """Return the profile keyed like the fixture record."""
        return {
            self.FIXTURE_KEYS[f.name]: getattr(self, f.name) for f in fields(self)
        }


def load_fixture(path: Path = DEFAULT_TEST_DATA) -> Dict[str, Any]:
    """Read the static test data record.

    Raises:
        ConfigurationError: If the file is missing, unreadable or not a
            JSON object
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Test data fixture not found: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read test data fixture {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Test data fixture {path} must be a JSON object")
    return data


class TestDataProvider:
    """Build SignupProfile instances from a fixture record.

    Create one provider per test session and call ``get_test_data()`` once
    per test case; profiles are never shared between tests.
    """

    __test__ = False  # not a pytest test class

    def __init__(
        self,
        fixture_path: Path = DEFAULT_TEST_DATA,
        faker: Optional[Faker] = None,
        seed: Optional[int] = None,
        allow_lists: Optional[AllowLists] = None,
    ) -> None:
        self.fixture_path = Path(fixture_path)
        self.faker = faker or Faker()
        if seed is not None:
            self.faker.seed_instance(seed)
        self._allow_lists = allow_lists

    @property
    def allow_lists(self) -> AllowLists:
        if self._allow_lists is None:
            self._allow_lists = AllowLists.load()
        return self._allow_lists

    def get_test_data(self, config: Optional[Mapping[str, Any]] = None) -> SignupProfile:
        """Return a fully populated profile.

        Args:
            config: Fixture record; read from ``fixture_path`` when omitted

        Raises:
            ConfigurationError: If the record is malformed
        """
        record = load_fixture(self.fixture_path) if config is None else config
        if not isinstance(record, Mapping):
            raise ConfigurationError("Test data record must be a mapping")

        generators: Dict[str, Callable[[], str]] = {
            "email": self._generate_email,
            "password": self.generate_secure_password,
            "firstName": self.faker.first_name,
            "lastName": self.faker.last_name,
            "phoneNumber": self._generate_phone_number,
            "companyName": self.faker.company,
            "country": lambda: self.faker.random_element(self.allow_lists.countries),
            "hearAboutUs": lambda: self.faker.random_element(self.allow_lists.hear_about_us),
        }

        unknown = set(record) - set(generators)
        if unknown:
            logger.warning("Ignoring unknown test data keys: %s", ", ".join(sorted(unknown)))

        values: Dict[str, str] = {}
        for attr, key in SignupProfile.FIXTURE_KEYS.items():
            raw = record.get(key)
            if raw is None or raw == "":
                if key not in FIELD_DEFAULTS:
                    raise ConfigurationError(f"Test data is missing a value for '{key}'")
                raw = FIELD_DEFAULTS[key]
            if not isinstance(raw, str):
                raise ConfigurationError(
                    f"Test data value for '{key}' must be a string, got {type(raw).__name__}"
                )
            values[attr] = generators[key]() if raw == DYNAMIC else raw

        profile = SignupProfile(**values)
        logger.info("Test data: %s", {k: v for k, v in profile.as_dict().items() if k != "password"})
        return profile

    def generate_secure_password(self, max_attempts: int = MAX_PASSWORD_ATTEMPTS) -> str:
        """Generate a password accepted by ``is_secure_password``.

        Candidates are drawn until one passes the same predicate that the
        signup flow applies to step 1, so generator and checker cannot
        drift apart.

        Raises:
            GenerationError: If ``max_attempts`` candidates are rejected
        """
        for _ in range(max_attempts):
            candidate = self._password_candidate()
            if is_secure_password(candidate):
                return candidate
        raise GenerationError(
            f"No valid password generated after {max_attempts} attempts"
        )

    def _password_candidate(self) -> str:
        return (
            self.faker.password(length=8, special_chars=False)
            + self.faker.numerify("#")
            + PASSWORD_SUFFIX
        )

    def _generate_email(self) -> str:
        return f"{self.faker.user_name().lower()}@{TEST_EMAIL_DOMAIN}"

    def _generate_phone_number(self) -> str:
        return (
            f"{PHONE_COUNTRY_CODE} {self.faker.numerify('###')} "
            f"{self.faker.numerify('###')} {self.faker.numerify('####')}"
        )


def generate_secure_password(max_attempts: int = MAX_PASSWORD_ATTEMPTS) -> str:
    """Module-level shortcut using a fresh provider."""
    return TestDataProvider().generate_secure_password(max_attempts)
