"""
工具模組

提供日誌與計時等通用工具。
"""

from .logger import (
    TimingContext,
    enable_debug_logging,
    enable_timing_logging,
    get_logger,
    log_timing,
    setup_logger,
)

__all__ = [
    # 日誌工具
    "get_logger",
    "setup_logger",
    "enable_debug_logging",
    "enable_timing_logging",

    # 計時
    "log_timing",
    "TimingContext",
]
