from uiflow.core.base_page import BasePage
from uiflow.core.models import RegistrationData


class RegisterPage(BasePage):
    """中文：注册页面对象，封装注册表单的填写与提交。
    English: Registration page object.
    """

    ELEMENTS = (
        "first_name_input",
        "last_name_input",
        "email_input",
        "password_input",
        "register_button",
    )

    def __init__(self, driver, config):
        super().__init__(driver, config, page_name="RegisterPage", endpoint="register")

    def goto(self):
        self.navigate_to(self.url)

    def fill_first_name(self, first_name: str):
        self._fill("first_name_input", first_name)

    def fill_last_name(self, last_name: str):
        self._fill("last_name_input", last_name)

    def fill_email(self, email: str):
        self._fill("email_input", email)

    def fill_password(self, password: str):
        self._fill("password_input", password, sensitive=True)

    def fill_form(self, data: RegistrationData):
        """中文：按 名、姓、邮箱、密码 的固定顺序填写表单。
        参数:
            data: 注册表单数据。
        """

        self.fill_first_name(data.first_name)
        self.fill_last_name(data.last_name)
        self.fill_email(data.email)
        self.fill_password(data.password)

    def submit(self):
        self._click("register_button")

    def register_user(self, data: RegistrationData):
        """中文：打开注册页、填写表单并提交。任一步失败即中止，不做断言。
        参数:
            data: 注册表单数据。
        """

        self.goto()
        self.fill_form(data)
        self.submit()

    def get_first_name_input(self):
        return self.get_element("first_name_input")

    def get_last_name_input(self):
        return self.get_element("last_name_input")

    def get_email_input(self):
        return self.get_element("email_input")

    def get_password_input(self):
        return self.get_element("password_input")
