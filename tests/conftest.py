import pytest
from selenium.common.exceptions import WebDriverException

from uiflow.core.fixtures import build_pages, execution_context_for
from uiflow.driver.driver_factory import apply_driver_timeouts, create_driver
from uiflow.utils.locator_loader import LocatorLoader
from uiflow.utils.logger import log_error, set_execution_context


@pytest.fixture(scope="session")
def config(pytestconfig):
    """加载全局配置并挂载已校验的定位器加载器。"""

    cfg = pytestconfig._ui_cfg
    loader = LocatorLoader(cfg["paths"]["locator"])
    loader.validate_all()
    cfg["locator_loader"] = loader
    return cfg


@pytest.fixture
def driver(config):
    """每个用例独占一个浏览器会话，用例结束后关闭。"""

    project = config.get("project", {}) or {}
    driver = create_driver(
        project.get("browser", "chrome"),
        bool(project.get("headless", True)),
        project.get("window_size", [1280, 720]),
    )
    apply_driver_timeouts(driver, config)

    yield driver

    try:
        driver.quit()
    except WebDriverException as exc:
        log_error(exc, "driver.quit")


@pytest.fixture
def execution_context(request):
    ctx = execution_context_for(request.config)
    set_execution_context(ctx)
    return ctx


@pytest.fixture
def pages(driver, config, execution_context):
    """页面名 -> 本用例的页面对象，仅在当前用例内有效。"""

    page_map = build_pages(driver, config, execution_context)
    yield page_map
    page_map.clear()


@pytest.fixture
def register_page(pages):
    return pages["register_page"]


@pytest.fixture
def login_page(pages):
    return pages["login_page"]


@pytest.fixture
def welcome_page(pages):
    return pages["welcome_page"]


pytest_plugins = ["tests.pytest_hooks"]
