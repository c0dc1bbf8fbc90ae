from types import MappingProxyType
from urllib.parse import urljoin

from uiflow.interactions.dom import DomMixin
from uiflow.interactions.navigation import NavigationMixin
from uiflow.interactions.wait import WaitMixin
from uiflow.utils.config_loader import load_endpoints, safe_cfg_get
from uiflow.utils.locator_loader import build_page_locators


class BasePage(
    NavigationMixin,
    DomMixin,
    WaitMixin,
):
    """中文：页面基类，组合导航、DOM 与等待能力，并统一记录动作日志。
    English: Base page composing navigation, DOM and wait capabilities.

    Subclasses set ``ELEMENTS`` to the locator names they use; those are
    resolved against the locator file at construction so a missing locator
    fails before any browser interaction.
    """

    ELEMENTS = ()

    def __init__(self, driver, config, page_name, endpoint):
        """中文：初始化页面基类并绑定驱动与定位器。
        参数:
            driver: WebDriver 实例。
            config: 全局配置字典，需包含 locator_loader。
            page_name: 页面名称（日志标签）。
            endpoint: endpoints 中的页面逻辑名。
        """

        self.__driver = driver
        self._page_name = page_name
        self._locators = build_page_locators(config["locator_loader"], page_name)
        self._elements = MappingProxyType(
            {name: self._locators.get(name) for name in ("alert",) + tuple(self.ELEMENTS)}
        )

        endpoints = load_endpoints(config)
        if endpoint not in endpoints:
            raise KeyError(f"Endpoint not configured: {endpoint}")
        self._base_url = safe_cfg_get(config, ["project", "base_url"], "")
        self._url = urljoin(self._base_url, endpoints[endpoint]) if self._base_url else endpoints[endpoint]

        self._explicit_wait = float(safe_cfg_get(config, ["selenium", "explicit_wait"], 10))
        self._url_wait = float(safe_cfg_get(config, ["selenium", "url_wait"], 10))
        self._page_load_timeout = float(safe_cfg_get(config, ["selenium", "page_load_timeout"], 30))
        self._poll_frequency = float(safe_cfg_get(config, ["selenium", "poll_frequency"], 0.05))
        self._screenshot_dir = safe_cfg_get(config, ["paths", "screenshots"], "test-results/screenshots")

        self._bind_driver_to_mixins(driver)

    def _bind_driver_to_mixins(self, driver):
        """中文：将 WebDriver 绑定到各交互混入类。"""

        for mixin in (NavigationMixin, DomMixin, WaitMixin):
            setattr(self, f"_{mixin.__name__}__driver", driver)

    @property
    def driver(self):
        raise RuntimeError("Page objects do not expose the driver; use the BasePage API")

    @property
    def url(self) -> str:
        return self._url

    @property
    def page_name(self) -> str:
        return self._page_name

    def __repr__(self):
        return f"<{type(self).__name__} url={self._url!r}>"
