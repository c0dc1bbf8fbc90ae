from uiflow.core.base_page import BasePage


class LoginPage(BasePage):
    """中文：登录页面对象，封装登录流程相关操作。
    English: Login page object that encapsulates login flow operations.
    """

    ELEMENTS = ("email_input", "password_input", "login_button")

    def __init__(self, driver, config):
        super().__init__(driver, config, page_name="LoginPage", endpoint="login")

    def goto(self):
        self.navigate_to(self.url)

    def fill_email(self, email: str):
        self._fill("email_input", email)

    def fill_password(self, password: str):
        self._fill("password_input", password, sensitive=True)

    def submit(self):
        self._click("login_button")

    def login(self, email: str, password: str):
        """中文：打开登录页，依次输入邮箱、密码并提交。
        参数:
            email: 登录邮箱。
            password: 登录密码。
        """

        self.goto()
        self.fill_email(email)
        self.fill_password(password)
        self.submit()
