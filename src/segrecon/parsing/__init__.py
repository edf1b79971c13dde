"""
解析模組

寬容的候選資料掃描器 (物件陣列與舊版字串陣列)。
"""

from .candidate_parser import (
    CandidateArrayScanner,
    ScanState,
    StringArrayScanner,
    parse_candidate_array,
    parse_response,
    parse_string_array,
)

__all__ = [
    "parse_candidate_array",
    "parse_string_array",
    "parse_response",
    "CandidateArrayScanner",
    "StringArrayScanner",
    "ScanState",
]
