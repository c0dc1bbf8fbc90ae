import os

import yaml
from selenium.webdriver.common.by import By


COMMON_SECTION = "Common"


class LocatorLoader:
    """中文：定位器加载器，负责读取并校验定位器配置。
    English: Locator loader that reads and validates locator configurations.
    """

    def __init__(self, yaml_path):
        """中文：初始化定位器加载器。
        参数:
            yaml_path: 定位器 YAML 文件路径。
        """

        if not os.path.exists(yaml_path):
            raise FileNotFoundError(f"Locator file not found: {yaml_path}")
        with open(yaml_path, "r", encoding="utf-8") as f:
            self.data = yaml.safe_load(f)

    @classmethod
    def from_dict(cls, data: dict) -> "LocatorLoader":
        loader = cls.__new__(cls)
        loader.data = data
        return loader

    def validate_all(self):
        """中文：校验定位器配置结构。"""

        if not isinstance(self.data, dict):
            raise ValueError("Locator root must be a dict")

        for page, locators in self.data.items():
            if not isinstance(locators, dict):
                raise ValueError(f"Page {page} must be a dict")
            for name, locator in locators.items():
                if not isinstance(locator, dict) or "by" not in locator or "value" not in locator:
                    raise ValueError(f"{page}.{name} missing by/value")
                _convert_locator(locator["by"], locator["value"])

    def get(self, page, name):
        """中文：获取指定页面的定位器配置，页面未定义时回退到 Common。
        参数:
            page: 页面名称。
            name: 定位器名称。
        """

        page_locators = self.data.get(page) or {}
        if name in page_locators:
            return page_locators[name]
        common = self.data.get(COMMON_SECTION) or {}
        if name in common:
            return common[name]
        raise KeyError(f"Locator not found: {page}.{name}")


class PageLocators:
    """中文：页面定位器代理，转换为 Selenium 定位器。
    English: Page locator proxy that converts to Selenium locators.
    """

    def __init__(self, loader: LocatorLoader, page_name: str):
        self._loader = loader
        self._page_name = page_name

    def get(self, name):
        """中文：获取页面定位器并转换为 Selenium (By, value)。"""

        locator = self._loader.get(self._page_name, name)
        return _convert_locator(locator["by"], locator["value"])


def _convert_locator(locator_type: str, locator_value: str):
    """中文：将定位器类型转换为 Selenium By。
    参数:
        locator_type: 定位器类型字符串。
        locator_value: 定位器值。
    """

    locator_type = (locator_type or "").lower()
    if locator_type == "id":
        return By.ID, locator_value
    if locator_type == "xpath":
        return By.XPATH, locator_value
    if locator_type == "name":
        return By.NAME, locator_value
    if locator_type == "css":
        return By.CSS_SELECTOR, locator_value
    if locator_type == "class":
        return By.CLASS_NAME, locator_value
    if locator_type == "tag":
        return By.TAG_NAME, locator_value
    if locator_type == "testid":
        return By.CSS_SELECTOR, f'[data-testid="{locator_value}"]'
    raise ValueError(f"Unsupported locator type: {locator_type}")


def describe_locator(locator) -> str:
    """中文：元素动作日志中使用的定位器文本，例如 ``css selector=h1``。
    参数:
        locator: (By, value) 元组。
    """

    by, value = locator
    return f"{by}={value}"


def build_page_locators(locator_loader, page_name: str):
    """中文：构建页面定位器代理。
    参数:
        locator_loader: 定位器加载器或代理。
        page_name: 页面名称。
    """

    if isinstance(locator_loader, PageLocators):
        return locator_loader
    if page_name is None:
        raise ValueError("page_name is required to build page locators")
    return PageLocators(locator_loader, page_name)
