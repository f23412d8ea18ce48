"""Robot Framework keyword libraries for the signup flow suite.

The keywords mirror the pytest-bdd step definitions in tests/step_defs/
so the same scenarios can be written as Robot test cases.

Usage:
    *** Settings ***
    Library    ../libraries/signup_keywords.py

    *** Test Cases ***
    Example Test
        Open Signup Browser
        The user is on the login page
        The user clicks "Start a free trial"
"""

from robot_suites.libraries.signup_keywords import SignupKeywords

__all__ = [
    "SignupKeywords",
]
