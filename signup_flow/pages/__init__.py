"""Page objects for the login page and the three signup steps.

Each page is composed with a BrowserInteraction and a SelectorCatalog
instead of inheriting a shared base page.
"""

from signup_flow.pages.base import PageComponent
from signup_flow.pages.login_page import LoginPage
from signup_flow.pages.signup_step1_page import SignupStep1Page
from signup_flow.pages.signup_step2_page import SignupStep2Page
from signup_flow.pages.signup_step3_page import SignupStep3Page

__all__ = [
    "PageComponent",
    "LoginPage",
    "SignupStep1Page",
    "SignupStep2Page",
    "SignupStep3Page",
]
