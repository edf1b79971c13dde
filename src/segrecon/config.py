"""
全域配置模組

提供引擎 session 的配置類別，以及日誌開關。

使用方式:
    from segrecon import SegmentConverter, EngineConfig

    config = EngineConfig(zenzai_enabled=True, zenzai_weight_path="/models/ggml-model-Q5_K_M.gguf")
    converter = SegmentConverter(engine, config)

    # 進階: 使用標準 logging 控制
    import logging
    logging.getLogger("segrecon").setLevel(logging.DEBUG)
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from .core.types import ResponseFormat
from .utils.logger import setup_logger

# Zenzai 推論模型 (由安裝程式放置，這裡只記錄名稱與版本)
ZENZAI_MODEL_NAME = "ggml-model-Q5_K_M.gguf"
ZENZAI_MODEL_VERSION = "zenz-v3.1-small"
DEFAULT_ZENZAI_INFERENCE_LIMIT = 10


def configure_logging(verbose: bool = False) -> None:
    """
    根據 verbose 設定配置 logging

    Args:
        verbose: 是否開啟詳細日誌
    """
    if verbose:
        setup_logger(level=logging.DEBUG)


@dataclass
class EngineConfig:
    """
    引擎 session 配置

    屬性:
        dictionary_path: 使用者辭書路徑；None 表示使用引擎內建辭書
        memory_path: 學習記憶路徑；None 表示不保存
        zenzai_enabled: 是否開啟 Zenzai 推論
        zenzai_inference_limit: Zenzai 推論次數上限
        zenzai_weight_path: Zenzai 模型檔路徑；None 表示不設定
        response_format: 引擎回傳格式 (STRUCTURED 或 LEGACY)
        verbose: 是否開啟詳細日誌
        on_timing: 計時回呼函數 (operation: str, elapsed: float) -> None
    """

    dictionary_path: Optional[str] = None
    memory_path: Optional[str] = None
    zenzai_enabled: bool = False
    zenzai_inference_limit: int = DEFAULT_ZENZAI_INFERENCE_LIMIT
    zenzai_weight_path: Optional[str] = None
    response_format: ResponseFormat = ResponseFormat.STRUCTURED
    verbose: bool = False
    on_timing: Optional[Callable[[str, float], None]] = field(default=None, repr=False)

    def __post_init__(self):
        # 空字串與 None 同義
        self.dictionary_path = self.dictionary_path or None
        self.memory_path = self.memory_path or None
        self.zenzai_weight_path = self.zenzai_weight_path or None

        if isinstance(self.zenzai_inference_limit, bool) or not isinstance(self.zenzai_inference_limit, int):
            raise TypeError(
                f"zenzai_inference_limit must be int, got {type(self.zenzai_inference_limit).__name__}"
            )
        if self.zenzai_inference_limit <= 0:
            raise ValueError(f"zenzai_inference_limit must be positive, got {self.zenzai_inference_limit}")

        self.response_format = ResponseFormat(self.response_format)
        configure_logging(self.verbose)

    @property
    def zenzai_active(self) -> bool:
        """Zenzai 開啟且已指定模型檔"""
        return self.zenzai_enabled and self.zenzai_weight_path is not None


# 預設配置實例 (內建辭書、Zenzai 關閉、靜默模式)
DEFAULT_CONFIG = EngineConfig()
