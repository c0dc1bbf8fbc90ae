import re

import pytest

from uiflow.constants.validation import ERROR_CLASS, VALIDATION_ATTRIBUTE, ValidationRules
from uiflow.core.models import RegistrationData
from uiflow.utils.assertions import expect_attribute, expect_class, expect_contains_text, expect_text
from uiflow.utils.test_data import generate_test_user

pytestmark = pytest.mark.e2e


@pytest.fixture(scope="module")
def new_user():
    """中文：本模块共享的新用户，注册与登录用例使用同一份数据。"""

    return generate_test_user()


@pytest.mark.xdist_group("positive_auth_flow")
class TestPositiveAuthenticationFlow:
    """注册后立即用同一用户登录，两个用例按顺序执行。"""

    def test_register_new_user(self, register_page, new_user):
        register_page.register_user(new_user)

        expect_text(register_page.get_alert, "User created", context="RegisterPage")

    def test_login_with_newly_created_user(self, login_page, welcome_page, new_user):
        login_page.login(new_user.email, new_user.password)

        welcome_page.await_location(welcome_page.url)
        expect_contains_text(welcome_page.get_menu, "GAD", context="WelcomePage")


class TestRegistrationValidation:
    def test_empty_form_fields(self, register_page):
        register_page.goto()
        register_page.submit()

        for field in (
            register_page.get_first_name_input,
            register_page.get_last_name_input,
            register_page.get_email_input,
            register_page.get_password_input,
        ):
            expect_class(field, ERROR_CLASS, context="RegisterPage")

    def test_invalid_email_format(self, register_page):
        data = RegistrationData(
            first_name="John",
            last_name="Doe",
            email="invalid-email",
            password="Password123!",
        )

        register_page.register_user(data)

        email = register_page.get_email_input
        expect_attribute(email, VALIDATION_ATTRIBUTE, re.compile("EMAIL"), context="RegisterPage")
        expect_class(email, ERROR_CLASS, context="RegisterPage")

    def test_non_alpha_characters_in_names(self, register_page):
        data = RegistrationData(
            first_name="John123",
            last_name="Doe456",
            email="test@example.com",
            password="Password123!",
        )

        register_page.register_user(data)

        expect_attribute(
            register_page.get_first_name_input,
            VALIDATION_ATTRIBUTE,
            ValidationRules.ALPHA_ONLY,
            context="RegisterPage",
        )
        expect_class(register_page.get_first_name_input, ERROR_CLASS, context="RegisterPage")
        expect_attribute(
            register_page.get_last_name_input,
            VALIDATION_ATTRIBUTE,
            ValidationRules.SURNAME,
            context="RegisterPage",
        )
        expect_class(register_page.get_last_name_input, ERROR_CLASS, context="RegisterPage")
