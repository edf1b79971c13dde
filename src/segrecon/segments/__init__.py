"""
段落模組

把整合後的候選寫入段落。
"""

from .writer import COST_STEP, build_records, write_candidates

__all__ = [
    "write_candidates",
    "build_records",
    "COST_STEP",
]
