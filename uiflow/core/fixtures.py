import os
import re

from pages.login_page import LoginPage
from pages.register_page import RegisterPage
from pages.welcome_page import WelcomePage
from uiflow.utils.logger import ExecutionContext, set_execution_context

PAGE_VARIANTS = {
    "register_page": RegisterPage,
    "login_page": LoginPage,
    "welcome_page": WelcomePage,
}

_WORKER_ID = re.compile(r"(\d+)$")


def worker_index_for(pytest_config=None) -> int:
    """中文：返回当前 worker 序号（pytest-xdist 的 gwN -> N，单进程为 0）。"""

    worker_id = None
    workerinput = getattr(pytest_config, "workerinput", None)
    if isinstance(workerinput, dict):
        worker_id = workerinput.get("workerid")
    if not worker_id:
        worker_id = os.environ.get("PYTEST_XDIST_WORKER")
    if not worker_id:
        return 0
    match = _WORKER_ID.search(str(worker_id))
    return int(match.group(1)) if match else 0


def execution_context_for(pytest_config=None) -> ExecutionContext:
    """中文：根据 pytest 配置构造当前 worker 的执行上下文。
    参数:
        pytest_config: pytest 的 Config 对象（xdist worker 带 workerinput）。
    """

    index = worker_index_for(pytest_config)
    return ExecutionContext(worker_id=str(index), worker_index=index)


def build_pages(driver, config, context: ExecutionContext, variants=None) -> dict:
    """中文：注册执行上下文后，为本次用例构造每个页面对象。
    上下文在任何页面构造前注册，保证构造与使用页面时的日志都带有当前 worker 前缀。
    参数:
        driver: 本次用例独占的 WebDriver 会话。
        config: 全局配置字典（含 locator_loader）。
        context: 当前 worker 的执行上下文。
        variants: 页面名 -> 页面类，默认 PAGE_VARIANTS。
    """

    set_execution_context(context)
    variants = PAGE_VARIANTS if variants is None else variants
    return {name: page_cls(driver, config) for name, page_cls in variants.items()}
