"""
================================================================================
Authentication UI Tests (Async / Playwright)
================================================================================

Sign in and account creation against the live storefront.

Requires E2E_ENABLED=true and a reachable BASE_URL. The pre-registered
account comes from TEST_USER1_EMAIL / TEST_USER1_PASSWORD.

================================================================================
"""

import allure
import pytest

from storefront_tools.common import Credentials
from storefront_tools.report_tools import attach_json
from testsuites.ui_testing.framework import DataFactory, ElementActions, UIAssertions
from testsuites.ui_testing.framework.data_builder import as_dict
from testsuites.ui_testing.pages import AuthenticationPage


@allure.epic("UI Testing")
@allure.feature("Authentication")
class TestAuthentication:
    """Sign in / create account suite."""

    @allure.story("Happy Path")
    @allure.title("Sign in succeeds with valid credentials")
    @allure.severity(allure.severity_level.BLOCKER)
    @pytest.mark.P0
    @pytest.mark.smoke
    async def test_sign_in_success(self, auth_page: AuthenticationPage, registered_user: Credentials):
        """Registered user reaches My Account."""
        with allure.step("Open authentication page"):
            await auth_page.open()

        with allure.step("Sign in"):
            await auth_page.sign_in_with(registered_user)

        with allure.step("Verify account page"):
            await auth_page.assert_signed_in()

    @allure.story("Negative Path")
    @allure.title("Sign in fails with a wrong password")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P0
    @pytest.mark.smoke
    async def test_sign_in_wrong_password(
        self,
        auth_page: AuthenticationPage,
        registered_user: Credentials,
        data_factory: DataFactory,
    ):
        await auth_page.open()
        await auth_page.sign_in(registered_user.email, data_factory.password())

        await auth_page.assert_sign_in_error("Authentication failed.")

    @allure.story("Form Validation")
    @allure.title("Sign in fails with empty e-mail")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    @pytest.mark.regression
    async def test_sign_in_empty_email(self, auth_page: AuthenticationPage, data_factory: DataFactory):
        await auth_page.open()
        await auth_page.sign_in("", data_factory.password())

        await auth_page.assert_sign_in_error("An email address required.")

    @allure.story("Form Validation")
    @allure.title("Account creation rejects a malformed e-mail")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    @pytest.mark.regression
    async def test_create_account_invalid_email(
        self,
        auth_page: AuthenticationPage,
        actions: ElementActions,
        check: UIAssertions,
        data_factory: DataFactory,
    ):
        await auth_page.open()
        await actions.type_text_clear(
            auth_page.element(auth_page.CREATE_EMAIL_INPUT, "Create account email field"),
            data_factory.random_string(8),
        )
        await actions.click_with_retry(
            auth_page.element(auth_page.CREATE_ACCOUNT_BUTTON, "Create an account button")
        )

        error = auth_page.element(auth_page.CREATE_ACCOUNT_ERROR, "Create account error")
        await check.assert_element_visible(error)
        await check.assert_text_contains(error, "Invalid email address.")

    @allure.story("Registration")
    @allure.title("New customer can create an account")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P1
    @pytest.mark.regression
    async def test_create_account(self, auth_page: AuthenticationPage, data_factory: DataFactory):
        """Register a freshly generated customer and land signed in."""
        user = data_factory.user()
        attach_json({**as_dict(user), "password": "***"}, name="Generated customer")

        await auth_page.open()
        await auth_page.register(user)

        await auth_page.assert_signed_in_as(user.first_name, user.last_name)
