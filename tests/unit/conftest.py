import copy
import logging

import pytest
from selenium.common.exceptions import InvalidSessionIdException, NoSuchElementException

from uiflow.utils.locator_loader import LocatorLoader
from uiflow.utils.logger import ELEMENT, get_logger


class FakeElement:
    def __init__(self, driver, locator, text="", attributes=None):
        self._driver = driver
        self.locator = locator
        self.text = text
        self.attributes = dict(attributes or {})
        self.displayed = True
        self.value = ""
        self.fail_with = None

    def is_displayed(self):
        return self.displayed

    def get_attribute(self, name):
        if name == "value":
            return self.value
        return self.attributes.get(name)

    def clear(self):
        self._driver.calls.append(("clear", self.locator[1]))
        self.value = ""

    def send_keys(self, text):
        if self.fail_with is not None:
            raise self.fail_with
        self._driver.calls.append(("fill", self.locator[1], text))
        self.value += text

    def click(self):
        if self.fail_with is not None:
            raise self.fail_with
        self._driver.calls.append(("click", self.locator[1]))


class FakeDriver:
    """In-memory stand-in for a Selenium WebDriver session."""

    def __init__(self):
        self._url = "about:blank"
        self.calls = []
        self.elements = {}
        self.missing = set()
        self.screenshots = []
        self.navigation_error = None
        self.closed = False
        self.quit_called = False

    @property
    def current_url(self):
        if self.closed:
            raise InvalidSessionIdException("invalid session id")
        return self._url

    def get(self, url):
        if self.navigation_error is not None:
            raise self.navigation_error
        self.calls.append(("get", url))
        self._url = url

    def find_element(self, by, value):
        if value in self.missing:
            raise NoSuchElementException(f"no such element: {by}={value}")
        return self.element(by, value)

    def element(self, by, value):
        key = (by, value)
        if key not in self.elements:
            self.elements[key] = FakeElement(self, key)
        return self.elements[key]

    def execute_script(self, script, *args):
        return "complete"

    def save_screenshot(self, path):
        self.screenshots.append(path)
        return True

    def set_page_load_timeout(self, seconds):
        self.page_load_timeout = seconds

    def quit(self):
        self.quit_called = True

    def actions(self, *kinds):
        return [c for c in self.calls if c[0] in kinds]


class ListHandler(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.NOTSET)
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def config(pytestconfig, tmp_path):
    cfg = copy.deepcopy(pytestconfig._ui_cfg)
    cfg["project"]["base_url"] = "http://app.test"
    cfg["selenium"].update(explicit_wait=0.3, url_wait=0.3, poll_frequency=0.01)
    cfg["paths"]["screenshots"] = str(tmp_path / "screenshots")
    cfg["locator_loader"] = LocatorLoader(cfg["paths"]["locator"])
    return cfg


@pytest.fixture
def driver():
    return FakeDriver()


@pytest.fixture
def log_records():
    logger = get_logger()
    handler = ListHandler()
    previous = logger.level
    logger.addHandler(handler)
    logger.setLevel(ELEMENT)
    yield handler.records
    logger.removeHandler(handler)
    logger.setLevel(previous)


@pytest.fixture
def trail(log_records):
    """(levelname, message) pairs for page and element actions only."""

    def _trail():
        return [
            (r.levelname, r.getMessage())
            for r in log_records
            if r.levelname in ("METHOD", "ELEMENT")
        ]

    return _trail
