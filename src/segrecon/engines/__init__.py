"""
轉換引擎實作

目前只提供記憶體內引擎 (測試與範例用)。
"""

from .memory import InMemoryEngine, encode_candidates, encode_legacy_candidates

__all__ = [
    "InMemoryEngine",
    "encode_candidates",
    "encode_legacy_candidates",
]
