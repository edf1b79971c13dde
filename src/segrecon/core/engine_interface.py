"""
轉換器抽象基類

定義所有段落轉換器必須實作的介面。
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from segrecon.core.types import ReconcileMode
from segrecon.utils.logger import TimingContext, get_logger, setup_logger

if TYPE_CHECKING:
    from segrecon.core.types import Segments


class ConverterEngine(ABC):
    """
    轉換器抽象基類 (Abstract Base Class)

    職責:
    - 持有外部轉換引擎的 session
    - 把引擎結果整合後寫入段落
    - 提供日誌與計時功能

    生命週期:
    - 轉換器應在應用程式啟動時建立一次 (一個引擎 session)
    - 結束時呼叫 shutdown() 或使用 with 區塊
    """

    _converter_name: str = "base"

    def _init_logger(
        self,
        verbose: bool = False,
        on_timing: Optional[Callable[[str, float], None]] = None,
    ) -> None:
        self._verbose = verbose
        self._timing_callback = on_timing

        if verbose:
            setup_logger(level=logging.DEBUG)

        self._logger = get_logger(f"converter.{self._converter_name}")

    def _log_timing(self, operation: str) -> TimingContext:
        return TimingContext(
            operation=operation,
            logger=self._logger,
            level=logging.DEBUG,
            callback=self._timing_callback,
        )

    @abstractmethod
    def convert(
        self,
        segments: Optional["Segments"],
        mode: ReconcileMode = ReconcileMode.FULL_SEGMENT,
        reading: Optional[str] = None,
    ) -> bool:
        pass

    @abstractmethod
    def is_initialized(self) -> bool:
        pass

    @abstractmethod
    def get_backend_stats(self) -> Dict[str, Any]:
        pass

    @abstractmethod
    def shutdown(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.shutdown()
        return False
