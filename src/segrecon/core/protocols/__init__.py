"""
Protocol 定義

以 typing.Protocol 描述可替換的外部元件。
"""

from .engine import (
    ESSENTIAL_OPERATIONS,
    OPTIONAL_OPERATIONS,
    CandidateBlob,
    ConversionEngineProtocol,
    missing_operations,
    optional_operation,
)

__all__ = [
    "ConversionEngineProtocol",
    "CandidateBlob",
    "ESSENTIAL_OPERATIONS",
    "OPTIONAL_OPERATIONS",
    "missing_operations",
    "optional_operation",
]
