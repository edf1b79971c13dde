"""
文字處理模組

提供以字元為單位的 UTF-8 計數與切割。
"""

from .indexer import character_count, prefix, suffix

__all__ = [
    "character_count",
    "prefix",
    "suffix",
]
