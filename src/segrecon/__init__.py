"""
segrecon - 分段轉換候選整合器 (Segment Candidate Reconciler)

核心概念：
- 使用者輸入的讀音 (例如平假名) 交給外部轉換引擎，引擎回傳候選與「涵蓋字數」
- 本套件把候選正規化成「完整涵蓋讀音」的清單 (不足補上剩餘讀音、過長丟棄)
- 依引擎排名給定 cost，寫入呼叫端持有的段落

官方入口（穩定 API）：
- `segrecon.SegmentConverter`
- `segrecon.reconcile`
- `segrecon.parse_candidate_array`
"""

# =============================================================================
# Converter 層（官方入口）
# =============================================================================
from segrecon.config import DEFAULT_CONFIG, EngineConfig
from segrecon.converter import SegmentConverter

# =============================================================================
# 資料模型
# =============================================================================
from segrecon.core.types import (
    CandidateRecord,
    NormalizedCandidate,
    RawCandidate,
    ReconcileMode,
    ResponseFormat,
    Segment,
    Segments,
    SegmentType,
)

# =============================================================================
# 例外與事件
# =============================================================================
from segrecon.core.errors import EngineUnavailableError, InvalidStateError, SegreconError
from segrecon.core.events import ReconcileEvent, ReconcileEventHandler

# =============================================================================
# 演算法層（進階用途）
# =============================================================================
from segrecon.parsing.candidate_parser import parse_candidate_array, parse_response, parse_string_array
from segrecon.reconciliation.algorithm import reconcile
from segrecon.segments.writer import write_candidates
from segrecon.text.indexer import character_count, prefix, suffix

# =============================================================================
# Protocol（進階用途）
# =============================================================================
from segrecon.core.protocols.engine import ConversionEngineProtocol

# =============================================================================
# 日誌工具
# =============================================================================
from segrecon.utils.logger import enable_debug_logging, enable_timing_logging, get_logger

__all__ = [
    # Converter
    "SegmentConverter",
    "EngineConfig",
    "DEFAULT_CONFIG",
    # Data model
    "RawCandidate",
    "NormalizedCandidate",
    "CandidateRecord",
    "Segment",
    "Segments",
    "SegmentType",
    "ReconcileMode",
    "ResponseFormat",
    # Errors / events
    "SegreconError",
    "EngineUnavailableError",
    "InvalidStateError",
    "ReconcileEvent",
    "ReconcileEventHandler",
    # Algorithms
    "character_count",
    "prefix",
    "suffix",
    "parse_candidate_array",
    "parse_string_array",
    "parse_response",
    "reconcile",
    "write_candidates",
    # Protocols
    "ConversionEngineProtocol",
    # Logging
    "get_logger",
    "enable_debug_logging",
    "enable_timing_logging",
]

__version__ = "0.1.0"
