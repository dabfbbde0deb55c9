"""
================================================================================
Authentication Page Object
================================================================================

Sign-in and account-creation flows of the storefront
(`index.php?controller=authentication`).

The registration form is split over two screens: the e-mail entry on the
authentication page and the personal-information form it leads to.

================================================================================
"""

from __future__ import annotations

import allure

from storefront_tools.common import Credentials
from testsuites.ui_testing.framework.data_builder import UserData
from testsuites.ui_testing.framework.page_base import BasePage


class AuthenticationPage(BasePage):
    """Sign in / create account page object."""

    URL_PATH = "?controller=authentication&back=my-account"
    PAGE_TITLE = "Authentication"

    # Sign in
    EMAIL_INPUT = "#email"
    PASSWORD_INPUT = "#passwd"
    SIGN_IN_BUTTON = "#SubmitLogin"
    ERROR_ALERT = ".alert-danger"

    # Create account
    CREATE_EMAIL_INPUT = "#email_create"
    CREATE_ACCOUNT_BUTTON = "#SubmitCreate"
    CREATE_ACCOUNT_ERROR = "#create_account_error"
    ACCOUNT_FORM = "#account-creation_form"
    TITLE_MR = "#id_gender1"
    CUSTOMER_FIRST_NAME = "#customer_firstname"
    CUSTOMER_LAST_NAME = "#customer_lastname"
    ACCOUNT_PASSWORD = "#passwd"
    BIRTH_DAY = "#days"
    BIRTH_MONTH = "#months"
    BIRTH_YEAR = "#years"
    NEWSLETTER = "#newsletter"
    COMPANY = "#company"
    ADDRESS = "#address1"
    ADDRESS2 = "#address2"
    CITY = "#city"
    STATE = "#id_state"
    POSTCODE = "#postcode"
    MOBILE_PHONE = "#phone_mobile"
    ALIAS = "#alias"
    REGISTER_BUTTON = "#submitAccount"

    # Landing
    ACCOUNT_LINK = ".header_user_info .account"
    SIGN_OUT_LINK = ".header_user_info .logout"
    PAGE_HEADING = "h1.page-heading"

    MY_ACCOUNT_URL_PART = "controller=my-account"

    @allure.step("Open authentication page")
    async def open(self) -> "AuthenticationPage":
        await self.navigate()
        await self.actions.wait_for_element(self.element(self.EMAIL_INPUT, "Email field"))
        return self

    @allure.step("Sign in as {email}")
    async def sign_in(self, email: str, password: str) -> None:
        """Fill the sign-in form and submit it."""
        self.log.step("Sign in", email=email)
        await self.actions.type_text_clear(self.element(self.EMAIL_INPUT, "Email field"), email)
        await self.actions.type_text_clear(self.element(self.PASSWORD_INPUT, "Password field"), password)
        await self.actions.click_with_retry(self.element(self.SIGN_IN_BUTTON, "Sign in button"))

    async def sign_in_with(self, credentials: Credentials) -> None:
        await self.sign_in(credentials.email, credentials.password)

    async def sign_out(self) -> None:
        self.log.step("Sign out")
        await self.actions.click_with_retry(self.element(self.SIGN_OUT_LINK, "Sign out link"))

    # =========================================================================
    # Account creation
    # =========================================================================

    @allure.step("Start account creation for {email}")
    async def start_account_creation(self, email: str) -> None:
        self.log.step("Start account creation", email=email)
        await self.actions.type_text_clear(
            self.element(self.CREATE_EMAIL_INPUT, "Create account email field"), email
        )
        await self.actions.click_with_retry(
            self.element(self.CREATE_ACCOUNT_BUTTON, "Create an account button")
        )
        await self.actions.wait_for_element(
            self.element(self.ACCOUNT_FORM, "Account creation form"),
            timeout_ms=self.settings.page_request_timeout_ms,
        )

    @allure.step("Fill personal information")
    async def fill_personal_information(
        self,
        user: UserData,
        birth_day: str = "1",
        birth_month: str = "1",
        birth_year: str = "1990",
    ) -> None:
        """
        Fill the personal-information form from a UserData record.

        Args:
            user: Customer details
            birth_day: Value of the day option
            birth_month: Value of the month option
            birth_year: Value of the year option
        """
        self.log.step("Fill personal information", email=user.email)
        actions = self.actions

        await actions.click_with_retry(self.element(self.TITLE_MR, "Title Mr. radio"))
        await actions.type_text_clear(self.element(self.CUSTOMER_FIRST_NAME, "First name field"), user.first_name)
        await actions.type_text_clear(self.element(self.CUSTOMER_LAST_NAME, "Last name field"), user.last_name)
        await actions.type_text_clear(self.element(self.ACCOUNT_PASSWORD, "Password field"), user.password)

        await actions.select_dropdown_by_value(self.element(self.BIRTH_DAY, "Birth day"), birth_day)
        await actions.select_dropdown_by_value(self.element(self.BIRTH_MONTH, "Birth month"), birth_month)
        await actions.select_dropdown_by_value(self.element(self.BIRTH_YEAR, "Birth year"), birth_year)

        # The address block is only rendered by older storefront themes
        if await actions.element_exists(self.element(self.ADDRESS, "Address field")):
            await self._fill_address(user)

    async def _fill_address(self, user: UserData) -> None:
        actions = self.actions
        await actions.type_text_clear(self.element(self.COMPANY, "Company field"), user.company)
        await actions.type_text_clear(self.element(self.ADDRESS, "Address field"), user.address)
        await actions.type_text_clear(self.element(self.ADDRESS2, "Address line 2 field"), user.address2)
        await actions.type_text_clear(self.element(self.CITY, "City field"), user.city)
        await actions.select_dropdown_by_text(self.element(self.STATE, "State dropdown"), user.state)
        await actions.type_text_clear(self.element(self.POSTCODE, "Postcode field"), user.zip_code[:5])
        await actions.type_text_clear(self.element(self.MOBILE_PHONE, "Mobile phone field"), user.mobile_phone)
        await actions.type_text_clear(self.element(self.ALIAS, "Address alias field"), user.alias)

    async def submit_registration(self) -> None:
        await self.actions.click_with_retry(self.element(self.REGISTER_BUTTON, "Register button"))

    async def register(self, user: UserData) -> None:
        """Full account creation flow for `user`."""
        await self.start_account_creation(user.email)
        await self.fill_personal_information(user)
        await self.submit_registration()

    # =========================================================================
    # Verifications
    # =========================================================================

    async def assert_signed_in(self) -> None:
        await self.check.assert_url_contains(self.MY_ACCOUNT_URL_PART, "User should land on My Account")
        await self.check.assert_element_visible(
            self.element(self.SIGN_OUT_LINK, "Sign out link"), "Sign out link should be visible"
        )

    async def assert_signed_in_as(self, first_name: str, last_name: str) -> None:
        await self.assert_signed_in()
        await self.check.assert_text_contains(
            self.element(self.ACCOUNT_LINK, "Account link"), f"{first_name} {last_name}"
        )

    async def assert_sign_in_error(self, expected_text: str) -> None:
        alert = self.element(self.ERROR_ALERT, "Error alert")
        await self.check.assert_element_visible(alert, "Sign in error should be displayed")
        await self.check.assert_text_contains(alert, expected_text)


__all__ = [
    "AuthenticationPage",
]
