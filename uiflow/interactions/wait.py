import re

from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from uiflow.errors import DriverUnavailable, NavigationError, NavigationTimeout, describe_exception
from uiflow.utils.logger import log_error, log_page_action


class WaitMixin:
    """中文：等待混入类，提供地址等待与页面就绪等待。
    English: Wait mixin; the only blocking points of a page object.
    """

    def _last_location(self):
        try:
            return self.__driver.current_url
        except WebDriverException:
            return None

    def await_location(self, target, timeout=None) -> None:
        """中文：等待当前地址等于目标地址（或匹配正则），超时抛出 NavigationTimeout。
        参数:
            target: 目标地址（相对路径基于 base_url）或已编译的正则。
            timeout: 最大等待时间（秒），默认取 selenium.url_wait。
        """

        if timeout is None:
            timeout = self._url_wait

        if isinstance(target, re.Pattern):
            shown = target.pattern
            condition = lambda d: target.search(d.current_url) is not None  # noqa: E731
        else:
            shown = self._resolve_url(target)
            condition = EC.url_to_be(shown)

        log_page_action(self._page_name, "Wait for URL", shown)
        try:
            WebDriverWait(self.__driver, timeout, poll_frequency=self._poll_frequency).until(condition)
        except TimeoutException as exc:
            last = self._last_location()
            error = NavigationTimeout(
                f"{self._page_name}: URL did not become {shown} within {timeout}s (current: {last})",
                target=shown,
                last_location=last,
                timeout=timeout,
            )
            log_error(error, f"{self._page_name}.await_location")
            raise error from exc
        except WebDriverException as exc:
            error = DriverUnavailable(
                f"{self._page_name}: browser session lost while waiting for {shown}, err={describe_exception(exc)}"
            )
            log_error(error, f"{self._page_name}.await_location")
            raise error from exc

    def wait_page_ready(self, timeout=None) -> None:
        """中文：等待 document.readyState 为 complete。"""

        if timeout is None:
            timeout = self._page_load_timeout
        try:
            WebDriverWait(self.__driver, timeout, poll_frequency=self._poll_frequency).until(
                lambda d: d.execute_script("return document.readyState") == "complete"
            )
        except TimeoutException as exc:
            error = NavigationError(f"{self._page_name}: page not ready within {timeout}s")
            log_error(error, f"{self._page_name}.wait_page_ready")
            raise error from exc
