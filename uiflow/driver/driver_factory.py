from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.edge.options import Options as EdgeOptions
from selenium.webdriver.firefox.options import Options as FirefoxOptions

from uiflow.utils.config_loader import load_config, safe_cfg_get


def create_driver(browser: str | None = None, headless: bool | None = None, window_size=None):
    """中文：根据配置创建并返回浏览器驱动。
    参数:
        browser: 浏览器类型，可为 chrome、edge、firefox，未传则读取配置。
        headless: 是否无头模式，未传则读取配置。
        window_size: (宽, 高)，默认 1280x720。
    """

    if browser is None or headless is None or window_size is None:
        cfg = load_config()
        if browser is None:
            browser = safe_cfg_get(cfg, ["project", "browser"], "chrome")
        if headless is None:
            headless = bool(safe_cfg_get(cfg, ["project", "headless"], True))
        if window_size is None:
            window_size = safe_cfg_get(cfg, ["project", "window_size"], [1280, 720])

    width, height = (int(v) for v in window_size)
    browser = browser.lower()

    if browser == "chrome":
        options = ChromeOptions()
        if headless:
            options.add_argument("--headless=new")
        options.add_argument(f"--window-size={width},{height}")
        return webdriver.Chrome(options=options)

    if browser == "edge":
        options = EdgeOptions()
        if headless:
            options.add_argument("--headless=new")
        options.add_argument(f"--window-size={width},{height}")
        return webdriver.Edge(options=options)

    if browser == "firefox":
        options = FirefoxOptions()
        if headless:
            options.add_argument("-headless")
        driver = webdriver.Firefox(options=options)
        driver.set_window_size(width, height)
        return driver

    raise ValueError(f"Unsupported browser: {browser}")


def apply_driver_timeouts(driver, cfg: dict) -> None:
    """中文：按配置设置页面加载超时。"""

    page_load = safe_cfg_get(cfg, ["selenium", "page_load_timeout"])
    if page_load is not None:
        driver.set_page_load_timeout(float(page_load))
