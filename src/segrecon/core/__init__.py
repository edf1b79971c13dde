"""
核心抽象層

資料模型、例外、事件與外部引擎的 Protocol。
"""

from .engine_interface import ConverterEngine
from .errors import EngineUnavailableError, InvalidStateError, SegreconError
from .events import ReconcileEvent, ReconcileEventHandler
from .protocols.engine import ConversionEngineProtocol
from .types import (
    CandidateRecord,
    NormalizedCandidate,
    RawCandidate,
    ReconcileMode,
    ResponseFormat,
    Segment,
    Segments,
    SegmentType,
)

__all__ = [
    "ConverterEngine",
    "ConversionEngineProtocol",
    "SegreconError",
    "EngineUnavailableError",
    "InvalidStateError",
    "ReconcileEvent",
    "ReconcileEventHandler",
    "RawCandidate",
    "NormalizedCandidate",
    "CandidateRecord",
    "Segment",
    "Segments",
    "SegmentType",
    "ReconcileMode",
    "ResponseFormat",
]
