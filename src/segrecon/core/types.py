"""
資料模型

- RawCandidate: 引擎回傳、尚未正規化的候選 (text + 涵蓋字數)
- NormalizedCandidate: 已完整涵蓋讀音的候選
- CandidateRecord: 寫入段落的最終候選紀錄
- Segment / Segments: 由呼叫端持有的段落結構

長度一律以「字元數」計算 (不是 UTF-8 位元組數)。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional


class ReconcileMode(str, Enum):
    """
    候選整合模式

    - FULL_SEGMENT: 以單一段落的讀音整合，過長候選丟棄
    - SINGLE_KEY: 以整串讀音整合並收斂成單一段落，過長候選也接受
    - RESIZED_SEGMENT: 段落邊界剛被調整，只保留剛好涵蓋的候選並只改寫第一段
    """

    FULL_SEGMENT = "full_segment"
    SINGLE_KEY = "single_key"
    RESIZED_SEGMENT = "resized_segment"


class ResponseFormat(str, Enum):
    """引擎回傳格式：物件陣列 (STRUCTURED) 或舊版字串陣列 (LEGACY)"""

    STRUCTURED = "structured"
    LEGACY = "legacy"


class SegmentType(str, Enum):
    FREE = "free"
    FIXED_BOUNDARY = "fixed_boundary"
    FIXED_VALUE = "fixed_value"
    SUBMITTED = "submitted"
    HISTORY = "history"


HISTORY_SEGMENT_TYPES = frozenset({SegmentType.SUBMITTED, SegmentType.HISTORY})


@dataclass(frozen=True)
class RawCandidate:
    """
    引擎回傳的原始候選

    Attributes:
        text: 候選文字
        coverage: 此候選取代的讀音前綴字數；0 表示「未指定，視為完整涵蓋」
    """

    text: str
    coverage: int = 0


@dataclass(frozen=True)
class NormalizedCandidate:
    """完整涵蓋讀音的候選 (coverage 必等於讀音字數)"""

    text: str
    coverage: int


@dataclass
class CandidateRecord:
    """
    寫入段落的候選紀錄

    key/content_key 為讀音，value/content_value 為候選文字。
    lid/rid 為 0 表示詞性 id 交由下游補上。
    """

    key: str
    value: str
    content_key: str
    content_value: str
    cost: int = 0
    wcost: int = 0
    structure_cost: int = 0
    consumed_key_size: int = 0
    lid: int = 0
    rid: int = 0


@dataclass
class Segment:
    key: str = ""
    segment_type: SegmentType = SegmentType.FREE
    candidates: List[CandidateRecord] = field(default_factory=list)
    meta_candidates: List[CandidateRecord] = field(default_factory=list)

    @property
    def is_history(self) -> bool:
        return self.segment_type in HISTORY_SEGMENT_TYPES

    def add_candidate(self, record: CandidateRecord) -> CandidateRecord:
        self.candidates.append(record)
        return record

    def candidate(self, index: int) -> CandidateRecord:
        return self.candidates[index]

    def candidates_size(self) -> int:
        return len(self.candidates)

    def clear_candidates(self) -> None:
        self.candidates.clear()

    def clear_meta_candidates(self) -> None:
        self.meta_candidates.clear()

    @property
    def values(self) -> List[str]:
        return [c.value for c in self.candidates]


class Segments:
    """
    段落集合 (由呼叫端持有)

    集合中 HISTORY / SUBMITTED 類型的段落為歷史段落，其餘為轉換段落。
    本套件只會修改轉換段落。
    """

    def __init__(self, segments: Optional[List[Segment]] = None):
        self._segments: List[Segment] = list(segments or [])

    @classmethod
    def from_keys(cls, *keys: str) -> "Segments":
        """由讀音建立只含轉換段落的集合"""
        return cls([Segment(key=k) for k in keys])

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    @property
    def segments(self) -> List[Segment]:
        return list(self._segments)

    @property
    def history_segments(self) -> List[Segment]:
        return [s for s in self._segments if s.is_history]

    @property
    def conversion_segments(self) -> List[Segment]:
        return [s for s in self._segments if not s.is_history]

    def conversion_segments_size(self) -> int:
        return len(self.conversion_segments)

    def conversion_segment(self, index: int) -> Segment:
        return self.conversion_segments[index]

    def add_segment(self, key: str = "", segment_type: SegmentType = SegmentType.FREE) -> Segment:
        segment = Segment(key=key, segment_type=segment_type)
        self._segments.append(segment)
        return segment

    def clear_conversion_segments(self) -> None:
        self._segments = [s for s in self._segments if s.is_history]

    def joined_conversion_key(self) -> str:
        return "".join(s.key for s in self.conversion_segments)
