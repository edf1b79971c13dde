"""
日誌與計時工具

所有模組透過 get_logger() 取得 "segrecon" 底下的子 logger。
函式庫預設不輸出任何訊息（根 logger 只掛 NullHandler），
需要時由使用者呼叫 setup_logger() / enable_debug_logging() 開啟。

使用方式:
    from segrecon.utils.logger import get_logger, TimingContext

    logger = get_logger("converter")
    with TimingContext("convert", logger):
        ...
"""

import logging
import time
from functools import wraps
from typing import Callable, Optional

ROOT_LOGGER_NAME = "segrecon"
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())

_handler: Optional[logging.Handler] = None


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    取得 segrecon 的子 logger

    Args:
        name: 子模組名稱，可傳入 __name__ 或簡短名稱 (例如 "converter")

    Returns:
        logging.Logger: 名為 "segrecon.<name>" 的 logger
    """
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logger(level: int = logging.INFO, fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """
    為根 logger 掛上一個 StreamHandler (重複呼叫只會更新等級)

    Args:
        level: 日誌等級
        fmt: 輸出格式

    Returns:
        logging.Logger: segrecon 根 logger
    """
    global _handler
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(fmt))
        root.addHandler(_handler)
    _handler.setLevel(level)
    root.setLevel(level)
    return root


def enable_debug_logging() -> None:
    """開啟 DEBUG 等級輸出"""
    setup_logger(level=logging.DEBUG)


def enable_timing_logging() -> None:
    """只開啟計時相關輸出 (計時訊息以 DEBUG 等級記錄)"""
    setup_logger(level=logging.DEBUG)
    get_logger("timing").setLevel(logging.DEBUG)


class TimingContext:
    """
    計時上下文管理器

    離開區塊時記錄耗時，並呼叫 callback(operation, elapsed)。
    callback 拋出的例外只會被記錄，不會中斷呼叫端。
    """

    def __init__(
        self,
        operation: str,
        logger: Optional[logging.Logger] = None,
        level: int = logging.DEBUG,
        callback: Optional[Callable[[str, float], None]] = None,
    ):
        self.operation = operation
        self.logger = logger or get_logger("timing")
        self.level = level
        self.callback = callback
        self.elapsed = 0.0
        self._start = 0.0

    def __enter__(self) -> "TimingContext":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.elapsed = time.perf_counter() - self._start
        self.logger.log(self.level, f"[Timing] {self.operation}: {self.elapsed * 1000:.2f}ms")
        if self.callback is not None:
            try:
                self.callback(self.operation, self.elapsed)
            except Exception:
                self.logger.exception("on_timing 回呼執行失敗")
        return False


def log_timing(operation: Optional[str] = None, level: int = logging.DEBUG):
    """
    計時裝飾器

    範例:
        >>> @log_timing("parse")
        ... def parse(blob):
        ...     ...
    """

    def decorator(func: Callable) -> Callable:
        name = operation or func.__qualname__

        @wraps(func)
        def wrapper(*args, **kwargs):
            with TimingContext(name, get_logger("timing"), level):
                return func(*args, **kwargs)

        return wrapper

    return decorator
