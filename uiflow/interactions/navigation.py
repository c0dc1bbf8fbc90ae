from urllib.parse import urljoin

from selenium.common.exceptions import WebDriverException

from uiflow.errors import DriverUnavailable, NavigationError, describe_exception
from uiflow.utils.logger import log_error, log_page_action


class NavigationMixin:
    """中文：导航混入类，提供打开页面与读取当前地址。
    English: Navigation mixin; failures propagate without retry.
    """

    def _resolve_url(self, target: str) -> str:
        """中文：相对路径基于 base_url 解析，绝对地址原样返回。"""

        if not self._base_url:
            return target
        return urljoin(self._base_url, target)

    def get_current_location(self) -> str:
        try:
            return self.__driver.current_url
        except WebDriverException as exc:
            error = DriverUnavailable(
                f"{self._page_name}: browser session cannot report its location, err={describe_exception(exc)}"
            )
            log_error(error, f"{self._page_name}.get_current_location")
            raise error from exc

    def navigate_to(self, target: str) -> None:
        """中文：打开指定地址，打开前记录页面动作。
        参数:
            target: 目标地址，可为相对路径。
        """

        url = self._resolve_url(target)
        log_page_action(self._page_name, "Navigate to page", url)
        try:
            self.__driver.get(url)
        except WebDriverException as exc:
            error = NavigationError(f"Navigation to {url} failed, err={describe_exception(exc)}")
            log_error(error, f"{self._page_name}.navigate_to")
            raise error from exc
