"""
整合模組

單一、以模式參數化的候選整合演算法。
"""

from .algorithm import (
    MODE_POLICIES,
    CoverageAction,
    CoveragePolicy,
    fallback_candidate,
    reconcile,
    resolve_coverage,
)

__all__ = [
    "reconcile",
    "resolve_coverage",
    "fallback_candidate",
    "CoverageAction",
    "CoveragePolicy",
    "MODE_POLICIES",
]
