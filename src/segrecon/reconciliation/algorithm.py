"""
候選整合演算法

把引擎回傳的 RawCandidate 與讀音 (key) 整合成「完整涵蓋讀音」的候選清單。

K = 讀音字數，c = 候選涵蓋字數 (coverage 為 0 時視為 K)：

    mode             c == K   c < K                   c > K
    FULL_SEGMENT     保留     延伸 text + suffix(key,c)  丟棄 (warning)
    SINGLE_KEY       保留     延伸                     接受並延伸 (suffix 為空，text 不變)
    RESIZED_SEGMENT  保留     丟棄                     丟棄

共同規則：
- 輸出保持輸入順序 (引擎的排序即信心排名，絕不重新排序)
- 過濾後為空時，補上一個 text == key 的 fallback 候選
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from segrecon.core.events import ReconcileEvent, ReconcileEventHandler
from segrecon.core.types import NormalizedCandidate, RawCandidate, ReconcileMode
from segrecon.text.indexer import character_count, suffix
from segrecon.utils.logger import get_logger

logger = get_logger("reconcile")


class CoverageAction(str, Enum):
    KEEP = "keep"
    EXTEND = "extend"
    DROP = "drop"


@dataclass(frozen=True)
class CoveragePolicy:
    """涵蓋字數不等於讀音字數時的處理方式"""

    under: CoverageAction
    over: CoverageAction

    def action_for(self, coverage: int, key_length: int) -> CoverageAction:
        if coverage == key_length:
            return CoverageAction.KEEP
        if coverage < key_length:
            return self.under
        return self.over


MODE_POLICIES = {
    ReconcileMode.FULL_SEGMENT: CoveragePolicy(under=CoverageAction.EXTEND, over=CoverageAction.DROP),
    ReconcileMode.SINGLE_KEY: CoveragePolicy(under=CoverageAction.EXTEND, over=CoverageAction.EXTEND),
    ReconcileMode.RESIZED_SEGMENT: CoveragePolicy(under=CoverageAction.DROP, over=CoverageAction.DROP),
}


def resolve_coverage(candidate: RawCandidate, key_length: int) -> int:
    """coverage 為 0 (未指定) 時視為完整涵蓋"""
    return candidate.coverage if candidate.coverage > 0 else key_length


def fallback_candidate(key: str) -> NormalizedCandidate:
    return NormalizedCandidate(text=key, coverage=character_count(key))


def _emit(on_event: Optional[ReconcileEventHandler], event: ReconcileEvent) -> None:
    if on_event is None:
        return
    try:
        on_event(event)
    except Exception:
        logger.exception("on_event 回呼執行失敗")


def reconcile(
    key: str,
    raw: Iterable[RawCandidate],
    mode: ReconcileMode = ReconcileMode.FULL_SEGMENT,
    *,
    on_event: Optional[ReconcileEventHandler] = None,
    trace_id: Optional[str] = None,
) -> List[NormalizedCandidate]:
    """
    整合候選

    Args:
        key: 讀音
        raw: 引擎回傳的候選 (依引擎排名排序)
        mode: 整合模式
        on_event: 事件回呼 (丟棄/延伸/fallback)
        trace_id: 事件追蹤 id，未提供時自動產生

    Returns:
        List[NormalizedCandidate]: 至少一個候選，每個 coverage 都等於讀音字數
    """
    mode = ReconcileMode(mode)
    policy = MODE_POLICIES[mode]
    key_length = character_count(key)
    trace_id_value = trace_id or uuid.uuid4().hex

    def event(kind: str, **fields) -> ReconcileEvent:
        return {"type": kind, "mode": mode.value, "trace_id": trace_id_value, "key": key,
                "key_length": key_length, **fields}

    results: List[NormalizedCandidate] = []
    for candidate in raw:
        coverage = resolve_coverage(candidate, key_length)
        action = policy.action_for(coverage, key_length)

        if action is CoverageAction.KEEP:
            results.append(NormalizedCandidate(text=candidate.text, coverage=key_length))
        elif action is CoverageAction.EXTEND:
            text = candidate.text + suffix(key, coverage)
            results.append(NormalizedCandidate(text=text, coverage=key_length))
            _emit(on_event, event("extended", text=text, coverage=coverage))
        elif coverage > key_length:
            logger.warning(
                f"[OverCoverage] '{candidate.text}' covers {coverage} chars, "
                f"key '{key}' has {key_length}; dropped"
            )
            _emit(on_event, event("over_coverage", text=candidate.text, coverage=coverage))
        else:
            logger.debug(f"[Mismatch] '{candidate.text}' covers {coverage}/{key_length}; dropped")
            _emit(on_event, event("mismatch_dropped", text=candidate.text, coverage=coverage))

    if not results:
        logger.debug(f"[Fallback] no usable candidate for '{key}' ({mode.value})")
        results.append(fallback_candidate(key))
        _emit(on_event, event("fallback", text=key, coverage=key_length, reason="no_candidates"))

    return results
