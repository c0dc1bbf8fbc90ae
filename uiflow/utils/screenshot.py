import os
import re
from datetime import datetime
from typing import Optional

from uiflow.utils.logger import log_error


def _safe_name(s: str) -> str:
    """中文：将测试名转换为安全的文件名。"""

    return re.sub(r"[^A-Za-z0-9_.=-]+", "_", s)


def take_screenshot(driver, folder: str, prefix: str = "case") -> Optional[str]:
    """中文：保存截图并返回文件路径，失败时记录错误并返回 None。
    参数:
        driver: WebDriver 实例。
        folder: 截图输出目录。
        prefix: 文件名前缀。
    """

    ts = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    path = os.path.join(folder, f"{_safe_name(prefix)}_{ts}_{os.getpid()}.png")
    try:
        os.makedirs(folder, exist_ok=True)
        if not driver.save_screenshot(path):
            return None
    except Exception as exc:
        log_error(exc, "take_screenshot")
        return None
    return path
