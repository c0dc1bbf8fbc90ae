from uiflow.core.base_page import BasePage


class WelcomePage(BasePage):
    """中文：登录后的欢迎页。
    English: Landing page shown after a successful login.
    """

    ELEMENTS = ("menu",)

    def __init__(self, driver, config):
        super().__init__(driver, config, page_name="WelcomePage", endpoint="welcome")

    def navigate_and_wait_for(self):
        self.navigate_to(self.url)
        self.await_location(self.url)
        self.wait_page_ready()

    def get_menu(self):
        return self.get_element("menu")
