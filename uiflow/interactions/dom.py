from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from uiflow.errors import ElementInteractionError, describe_exception
from uiflow.utils.locator_loader import describe_locator
from uiflow.utils.logger import log_element_action, log_error
from uiflow.utils.screenshot import take_screenshot

MASK = "****"
SENSITIVE_KEYWORDS = ("password", "passwd", "pwd", "otp", "token", "secret")


def mask_if_sensitive(name: str, text: str) -> str:
    """中文：名称包含敏感关键字时返回掩码。
    参数:
        name: 元素名称。
        text: 原始文本。
    """

    n = (name or "").lower()
    if any(k in n for k in SENSITIVE_KEYWORDS):
        return MASK
    return text


class DomMixin:
    """中文：DOM 交互混入类，提供元素查找、输入与点击。
    English: DOM interaction mixin providing lookup, fill and click.
    """

    def _get_locator(self, name):
        """中文：获取定位器 (By, value)，优先使用构造时解析的元素表。"""

        if name in self._elements:
            return self._elements[name]
        return self._locators.get(name)

    def _log_element_action(self, action, element_name, selector, value=None):
        """中文：以当前页面名记录元素动作。"""

        log_element_action(self._page_name, action, element_name, selector, value)

    def _interaction_error(self, action, name, exc, screenshot=True):
        """中文：构造 ElementInteractionError，按需截图并写入 error 日志。"""

        shot = None
        if screenshot:
            shot = take_screenshot(self.__driver, self._screenshot_dir, f"{self._page_name}.{name}")
        error = ElementInteractionError(
            f"{action} failed: {self._page_name}.{name}, err={describe_exception(exc)}, screenshot={shot}",
            element_name=name,
            action=action,
        )
        log_error(error, f"{self._page_name}.{action}")
        return error

    def _find_visible(self, name, timeout=None):
        """中文：等待元素可见并返回。
        参数:
            name: 定位器名称。
            timeout: 最大等待时间（秒），默认取 selenium.explicit_wait。
        """

        by, value = self._get_locator(name)
        if timeout is None:
            timeout = self._explicit_wait
        try:
            return WebDriverWait(
                self.__driver, timeout, poll_frequency=self._poll_frequency
            ).until(EC.visibility_of_element_located((by, value)))
        except TimeoutException as exc:
            raise self._interaction_error("find", name, exc) from exc
        except WebDriverException as exc:
            raise self._interaction_error("find", name, exc, screenshot=False) from exc

    def _locate(self, name):
        """中文：立即查找元素，不等待、不截图、不写 error 日志。
        供断言轮询使用，等待时间由调用方控制。
        参数:
            name: 定位器名称。
        """

        by, value = self._get_locator(name)
        try:
            return self.__driver.find_element(by, value)
        except WebDriverException as exc:
            raise ElementInteractionError(
                f"find failed: {self._page_name}.{name}, err={describe_exception(exc)}",
                element_name=name,
                action="find",
            ) from exc

    def get_element(self, name):
        """中文：返回元素当前的句柄（不等待可见）；页面刷新后需重新获取。
        参数:
            name: 定位器名称。
        """

        return self._locate(name)

    def get_alert(self):
        """中文：返回页面通用的提示区域（role=alert）。"""

        return self._locate("alert")

    def _fill(self, name, text, sensitive=None):
        """中文：清空后输入文本，日志中敏感字段只记录掩码。
        参数:
            name: 定位器名称。
            text: 需要输入的文本。
            sensitive: True 强制掩码，False 不掩码，None 按名称判断。
        """

        if sensitive is None:
            shown = mask_if_sensitive(name, text)
        else:
            shown = MASK if sensitive else text
        self._log_element_action("fill", name, describe_locator(self._get_locator(name)), shown)
        el = self._find_visible(name)
        try:
            el.clear()
            el.send_keys(text)
        except WebDriverException as exc:
            raise self._interaction_error("fill", name, exc) from exc

    def _click(self, name):
        """中文：等待元素可见后点击。
        参数:
            name: 定位器名称。
        """

        self._log_element_action("click", name, describe_locator(self._get_locator(name)))
        el = self._find_visible(name)
        try:
            el.click()
        except WebDriverException as exc:
            raise self._interaction_error("click", name, exc) from exc
