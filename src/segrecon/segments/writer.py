"""
段落寫入模組

把整合後的候選寫入呼叫端持有的段落：

- FULL_SEGMENT: 改寫指定段落的候選
- SINGLE_KEY: 清除所有轉換段落，建立一個以完整讀音為 key 的 FREE 段落
- RESIZED_SEGMENT: 只改寫第一個轉換段落，其他段落不動

寫入前一律清空既有候選 (含 meta candidates)，不與舊狀態合併。
cost 依排名遞增：0, 100, 200, ...
"""

from typing import List, Optional, Sequence

from segrecon.core.errors import InvalidStateError
from segrecon.core.types import (
    CandidateRecord,
    NormalizedCandidate,
    ReconcileMode,
    Segment,
    Segments,
    SegmentType,
)
from segrecon.text.indexer import character_count
from segrecon.utils.logger import get_logger

logger = get_logger("writer")

COST_STEP = 100


def build_records(key: str, candidates: Sequence[NormalizedCandidate]) -> List[CandidateRecord]:
    """依排名建立候選紀錄 (cost = wcost = 100 * rank)"""
    key_length = character_count(key)
    records = []
    for rank, candidate in enumerate(candidates):
        cost = COST_STEP * rank
        records.append(
            CandidateRecord(
                key=key,
                value=candidate.text,
                content_key=key,
                content_value=candidate.text,
                cost=cost,
                wcost=cost,
                structure_cost=0,
                consumed_key_size=key_length,
            )
        )
    return records


def _rewrite(segment: Segment, key: str, candidates: Sequence[NormalizedCandidate]) -> Segment:
    segment.clear_candidates()
    segment.clear_meta_candidates()
    for record in build_records(key, candidates):
        segment.add_candidate(record)
    return segment


def write_candidates(
    segments: Segments,
    key: str,
    candidates: Sequence[NormalizedCandidate],
    mode: ReconcileMode = ReconcileMode.FULL_SEGMENT,
    *,
    segment: Optional[Segment] = None,
) -> Segment:
    """
    依模式寫入候選

    Args:
        segments: 段落集合
        key: 讀音
        candidates: 已整合的候選
        mode: 寫入模式
        segment: FULL_SEGMENT 模式的目標段落；未指定時取 key 相同的第一個轉換段落

    Returns:
        Segment: 被改寫的段落

    Raises:
        InvalidStateError: 找不到可寫入的段落 (拋出前不修改任何段落)
    """
    mode = ReconcileMode(mode)

    if mode is ReconcileMode.SINGLE_KEY:
        segments.clear_conversion_segments()
        target = segments.add_segment(key=key, segment_type=SegmentType.FREE)
        return _rewrite(target, key, candidates)

    if mode is ReconcileMode.RESIZED_SEGMENT:
        if segments.conversion_segments_size() == 0:
            raise InvalidStateError("resized segment requires at least one conversion segment")
        return _rewrite(segments.conversion_segment(0), key, candidates)

    if segment is None:
        segment = next((s for s in segments.conversion_segments if s.key == key), None)
        if segment is None:
            raise InvalidStateError(f"no conversion segment for key '{key}'")
    return _rewrite(segment, key, candidates)
