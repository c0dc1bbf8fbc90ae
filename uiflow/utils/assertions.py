import re
import time

from selenium.common.exceptions import WebDriverException

from uiflow.errors import UiFlowError
from uiflow.utils.logger import log_assertion

DEFAULT_TIMEOUT = 5
POLL_INTERVAL = 0.1


def _resolve(target):
    """中文：解析断言目标：元素直接返回；
    无参可调用对象（如 register_page.get_email_input）每次轮询重新调用，以获取重新渲染后的元素。
    """

    return target() if callable(target) else target


def _matches(expected, actual) -> bool:
    """中文：字符串精确比较，正则使用 search。"""

    if isinstance(expected, re.Pattern):
        return expected.search(actual or "") is not None
    return actual == expected


def _shown(expected) -> str:
    """中文：断言描述中展示期望值（正则显示为 /pattern/）。"""

    return f"/{expected.pattern}/" if isinstance(expected, re.Pattern) else repr(expected)


def _poll(description, context, target, read, check, timeout):
    """中文：记录断言后轮询目标，直到 check 通过或超时。
    等待时间只由 timeout 控制，元素查找本身不等待。
    参数:
        description: 断言描述（写入 assert 日志）。
        context: 日志上下文，通常为页面名。
        target: 元素或返回元素的可调用对象。
        read: 从元素读取观察值。
        check: 判断观察值是否满足。
        timeout: 最大等待时间（秒）。
    """

    log_assertion(description, context)
    deadline = time.monotonic() + timeout
    observed = None
    while True:
        try:
            observed = read(_resolve(target))
            if check(observed):
                return observed
        except (WebDriverException, UiFlowError) as exc:
            observed = exc
        if time.monotonic() >= deadline:
            raise AssertionError(f"{description}: last observed {observed!r} after {timeout}s")
        time.sleep(POLL_INTERVAL)


def expect_text(target, expected, timeout=DEFAULT_TIMEOUT, context=None):
    """中文：等待元素文本等于 expected（或匹配正则）。"""

    return _poll(
        f"text is {_shown(expected)}",
        context,
        target,
        lambda el: (el.text or "").strip(),
        lambda text: _matches(expected, text),
        timeout,
    )


def expect_contains_text(target, expected: str, timeout=DEFAULT_TIMEOUT, context=None):
    """中文：等待元素文本包含 expected。"""

    return _poll(
        f"text contains {expected!r}",
        context,
        target,
        lambda el: el.text or "",
        lambda text: expected in text,
        timeout,
    )


def expect_class(target, expected, timeout=DEFAULT_TIMEOUT, context=None):
    """中文：等待元素 class 属性匹配 expected。"""

    return _poll(
        f"class matches {_shown(expected)}",
        context,
        target,
        lambda el: el.get_attribute("class") or "",
        lambda value: _matches(expected, value),
        timeout,
    )


def expect_attribute(target, name: str, expected, timeout=DEFAULT_TIMEOUT, context=None):
    """中文：等待元素属性等于 expected（字符串精确匹配，正则为 search）。"""

    return _poll(
        f"attribute {name} matches {_shown(expected)}",
        context,
        target,
        lambda el: el.get_attribute(name),
        lambda value: value is not None and _matches(expected, value),
        timeout,
    )
