import json
import logging
import os
import sys
import traceback
from contextvars import ContextVar
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from uiflow.utils.config_loader import is_ci, safe_cfg_get

# Severity, highest first: error > test > assert > method > element
ERROR = logging.ERROR
TEST = 25
ASSERT = 23
METHOD = 15
ELEMENT = 13

LEVELS = {
    "error": ERROR,
    "test": TEST,
    "assert": ASSERT,
    "method": METHOD,
    "element": ELEMENT,
}
_LEVEL_ALIASES = {"meth": "method", "elem": "element"}
_LEVEL_NAMES = {v: k for k, v in LEVELS.items()}

for _name, _value in LEVELS.items():
    if _value != ERROR:
        logging.addLevelName(_value, _name.upper())

LOGGER_NAME = "uiflow"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
TEST_LOG_FILE = "test-logs.log"
ERROR_LOG_FILE = "error-logs.log"


@dataclass(frozen=True)
class ExecutionContext:
    """中文：当前执行槽位（worker）标识。
    English: Identifies the parallel slot running the current test.
    """

    worker_id: Optional[str] = None
    worker_index: Optional[int] = None

    @property
    def prefix(self) -> str:
        """中文：日志行前缀，如 "[Worker-0] "；无上下文时为空字符串。"""

        if self.worker_id:
            return f"[Worker-{self.worker_id}] "
        if self.worker_index is not None:
            return f"[Worker-{self.worker_index}] "
        return ""


_EXECUTION_CONTEXT: ContextVar[ExecutionContext] = ContextVar(
    "EXECUTION_CONTEXT", default=ExecutionContext()
)
_CURRENT_TEST: ContextVar[str] = ContextVar("CURRENT_TEST", default="-")


def set_execution_context(ctx: Optional[ExecutionContext]) -> None:
    """中文：整体替换当前执行上下文（不做合并），传 None 清空。"""

    _EXECUTION_CONTEXT.set(ctx if ctx is not None else ExecutionContext())


def get_execution_context() -> ExecutionContext:
    """中文：返回当前线程/任务的执行上下文。"""

    return _EXECUTION_CONTEXT.get()


def set_current_test(name: str) -> None:
    """中文：设置当前测试名称上下文。
    参数:
        name: 当前测试名称。
    """

    _CURRENT_TEST.set(name or "-")


def parse_level(level: Union[str, int]) -> int:
    """中文：将级别名称（error/test/assert/method/element）转换为数值。"""

    if isinstance(level, int):
        return level
    key = str(level).strip().lower()
    key = _LEVEL_ALIASES.get(key, key)
    if key not in LEVELS:
        raise ValueError(f"Unknown log level: {level!r}")
    return LEVELS[key]


def level_name(levelno: int) -> str:
    """中文：将级别数值转换为小写名称。
    参数:
        levelno: 日志级别数值。
    """

    return _LEVEL_NAMES.get(levelno, logging.getLevelName(levelno).lower())


class _InjectContextFilter(logging.Filter):
    """中文：日志过滤器，在发出时注入 worker 前缀与测试名称。
    English: Logger filter stamping the active worker prefix and test name.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "worker"):
            record.worker = _EXECUTION_CONTEXT.get().prefix
        if not hasattr(record, "test"):
            record.test = _CURRENT_TEST.get()
        if not hasattr(record, "stack"):
            record.stack = None
        return True


class ConsoleFormatter(logging.Formatter):
    """中文：控制台格式化器，输出 [时间] [Worker-N] 级别: 消息，附带可选堆栈。
    English: Console formatter, `[2024-01-01 10:00:00] [Worker-0] method: message`.
    """

    COLORS = {
        ERROR: "\033[31m",
        TEST: "\033[1;36m",
        ASSERT: "\033[1;35m",
        METHOD: "\033[32m",
        ELEMENT: "\033[33m",
    }
    RESET = "\033[0m"

    def __init__(self, colorize: bool = False):
        super().__init__(datefmt=DATE_FORMAT)
        self._colorize = colorize

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, self.datefmt)
        worker = getattr(record, "worker", "")
        line = f"[{timestamp}] {worker}{level_name(record.levelno)}: {record.getMessage()}"
        stack = getattr(record, "stack", None)
        if stack:
            line = f"{line}\n{stack}"
        if self._colorize and record.levelno in self.COLORS:
            line = f"{self.COLORS[record.levelno]}{line}{self.RESET}"
        return line


class JsonFormatter(logging.Formatter):
    """中文：文件输出使用的 JSON 格式化器，每行一个对象。
    English: One JSON object per line for the durable file sinks.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(timespec="milliseconds"),
            "level": level_name(record.levelno),
            "worker": getattr(record, "worker", "").strip(),
            "test": getattr(record, "test", "-"),
            "message": record.getMessage(),
        }
        stack = getattr(record, "stack", None)
        if stack:
            payload["stack"] = stack
        return json.dumps(payload, ensure_ascii=False)


def _fallback(message: str, exc: BaseException) -> None:
    """中文：日志输出失败时写入 stderr 的兜底提示。"""

    try:
        sys.stderr.write(f"[uiflow-logger] dropped record ({type(exc).__name__}: {exc}): {message}\n")
    except Exception:
        pass


def resolve_level(cfg: Optional[dict] = None, ci: Optional[bool] = None) -> int:
    """中文：解析最低日志级别：配置/LOG_LEVEL 优先，否则本地为 element、CI 为 test。"""

    ci = is_ci() if ci is None else ci
    default = "test" if ci else "element"
    name = safe_cfg_get(cfg or {}, ["logging", "level"]) or os.environ.get("LOG_LEVEL") or default
    try:
        return parse_level(name)
    except ValueError as exc:
        _fallback(f"falling back to level {default!r}", exc)
        return parse_level(default)


def _remove_sinks(logger: logging.Logger) -> None:
    """中文：移除并关闭之前由 configure_logging 添加的 handler。"""

    for handler in list(logger.handlers):
        if getattr(handler, "_uiflow_sink", False):
            logger.removeHandler(handler)
            handler.close()


def configure_logging(cfg: Optional[dict] = None) -> logging.Logger:
    """中文：进程启动时配置日志：最低级别、控制台与文件输出。
    English: Console sink plus JSON file sinks under ``paths.logs``.
    """

    cfg = cfg or {}
    ci = is_ci()
    logger = logging.getLogger(LOGGER_NAME)
    _remove_sinks(logger)

    logger.setLevel(resolve_level(cfg, ci))
    logger.propagate = False
    if not any(isinstance(f, _InjectContextFilter) for f in logger.filters):
        logger.addFilter(_InjectContextFilter())

    if safe_cfg_get(cfg, ["logging", "console"], True):
        console_handler = logging.StreamHandler()
        stream_is_tty = getattr(console_handler.stream, "isatty", lambda: False)()
        console_handler.setFormatter(ConsoleFormatter(colorize=not ci and stream_is_tty))
        console_handler._uiflow_sink = True
        logger.addHandler(console_handler)

    log_dir = safe_cfg_get(cfg, ["paths", "logs"]) or os.path.join(os.getcwd(), "test-results")
    try:
        os.makedirs(log_dir, exist_ok=True)
        for filename, level in ((TEST_LOG_FILE, TEST), (ERROR_LOG_FILE, ERROR)):
            file_handler = logging.FileHandler(
                os.path.join(log_dir, filename), encoding="utf-8", delay=True
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(JsonFormatter())
            file_handler._uiflow_sink = True
            logger.addHandler(file_handler)
    except OSError as exc:
        _fallback(f"file sinks disabled for {log_dir}", exc)

    logger._inited = True
    return logger


def get_logger() -> logging.Logger:
    """中文：获取全局日志记录器，未初始化时按默认配置初始化。"""

    logger = logging.getLogger(LOGGER_NAME)
    if getattr(logger, "_inited", False):
        return logger
    return configure_logging()


def set_log_level(level: Union[str, int]) -> None:
    """中文：覆盖最低日志级别。"""

    get_logger().setLevel(parse_level(level))


def _dispatch(logger: logging.Logger, record: logging.LogRecord) -> None:
    """中文：逐个 handler 分发记录，单个输出失败不影响其它输出。
    参数:
        logger: 已配置的日志记录器。
        record: 已注入上下文的日志记录。
    """

    for handler in logger.handlers:
        if record.levelno < handler.level:
            continue
        try:
            handler.handle(record)
        except Exception as exc:
            _fallback(f"{type(handler).__name__}: {record.msg}", exc)


def log(level: Union[str, int], message: str, stack: Optional[str] = None) -> None:
    """中文：写入一条日志，任何输出异常都不会抛给调用方。
    参数:
        level: 级别名称或数值。
        message: 日志内容。
        stack: 可选堆栈文本。
    """

    try:
        levelno = parse_level(level)
        logger = get_logger()
        if not logger.isEnabledFor(levelno):
            return
        extra = {"stack": stack} if stack else None
        record = logger.makeRecord(logger.name, levelno, __file__, 0, message, None, None, extra=extra)
        if not logger.filter(record):
            return
    except Exception as exc:
        _fallback(str(message), exc)
        return
    _dispatch(logger, record)


def log_test(message: str) -> None:
    """中文：记录测试级别（test）日志。"""

    log(TEST, message)


def log_assertion(description: str, context: Optional[str] = None) -> None:
    """中文：记录断言/校验。"""

    message = f"[{context}] {description}" if context else description
    log(ASSERT, message)


def log_page_action(page_name: str, action: str, details: Optional[str] = None) -> None:
    """中文：记录页面对象动作。"""

    message = f"[{page_name}] {action} - {details}" if details else f"[{page_name}] {action}"
    log(METHOD, message)


def log_element_action(
    page_name: str,
    action: str,
    element_name: str,
    selector: str,
    value: Optional[str] = None,
) -> None:
    """中文：记录元素交互及其定位器。不做脱敏，敏感值需由调用方处理。"""

    if value:
        message = f'[{page_name}] {action} on "{element_name}" ({selector}) with value: "{value}"'
    else:
        message = f'[{page_name}] {action} on "{element_name}" ({selector})'
    log(ELEMENT, message)


def log_error(error: BaseException, context: Optional[str] = None) -> None:
    """中文：记录错误及堆栈。"""

    try:
        message = f"Error in {context}: {error}" if context else f"Error: {error}"
        stack = None
        if error.__traceback__ is not None:
            stack = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    except Exception as exc:
        _fallback(repr(error), exc)
        return
    log(ERROR, message, stack=stack)
