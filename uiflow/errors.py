class UiFlowError(Exception):
    """中文：页面对象与浏览器交互失败的基类。所有子类都以 ``raise ... from`` 保留原始 Selenium 异常，不做重试。
    English: Base class for driver-facing page-object failures.
    """


class DriverUnavailable(UiFlowError):
    """中文：浏览器会话无法返回状态（窗口已关闭、会话失效）。
    English: The browser session cannot report its state.
    """


class NavigationError(UiFlowError):
    """中文：页面加载失败（无效 URL、网络错误或页面加载超时）。
    English: A page load failed.
    """


class NavigationTimeout(UiFlowError):
    """中文：超时前浏览器未到达期望地址。
    English: The browser did not reach the expected location before the timeout.
    """

    def __init__(self, message: str, target=None, last_location=None, timeout=None):
        """中文：初始化超时错误。
        参数:
            message: 错误描述。
            target: 期望的地址或正则。
            last_location: 超时时最后观察到的地址。
            timeout: 等待时间（秒）。
        """

        super().__init__(message)
        self.target = target
        self.last_location = last_location
        self.timeout = timeout


class ElementInteractionError(UiFlowError):
    """中文：元素查找、输入或点击失败。
    English: Lookup, fill or click against a page element failed.
    """

    def __init__(self, message: str, element_name=None, action=None):
        """中文：初始化元素交互错误。
        参数:
            message: 错误描述（含截图路径）。
            element_name: 定位器名称。
            action: 失败的动作（find/fill/click）。
        """

        super().__init__(message)
        self.element_name = element_name
        self.action = action


def describe_exception(exc: BaseException) -> str:
    """中文：生成 Selenium 异常的简短描述（去掉 ``Message:`` 包装）。
    参数:
        exc: 原始异常。
    """

    text = getattr(exc, "msg", None) or str(exc) or type(exc).__name__
    return f"{type(exc).__name__}: {str(text).strip()}"
