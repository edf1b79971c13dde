"""
段落寫入測試
"""

import pytest

from segrecon.core.errors import InvalidStateError
from segrecon.core.types import (
    CandidateRecord,
    NormalizedCandidate,
    ReconcileMode,
    Segment,
    Segments,
    SegmentType,
)
from segrecon.segments.writer import COST_STEP, build_records, write_candidates


def stale_record(key):
    return CandidateRecord(key=key, value="stale", content_key=key, content_value="stale", cost=999)


@pytest.fixture
def two_segments():
    segments = Segments.from_keys("きょう", "は")
    for segment in segments:
        segment.add_candidate(stale_record(segment.key))
        segment.meta_candidates.append(stale_record(segment.key))
    return segments


class TestBuildRecords:
    """測試候選紀錄欄位"""

    def test_fields(self):
        records = build_records("とうきょう", [NormalizedCandidate("東京", 5), NormalizedCandidate("トウキョウ", 5)])
        first = records[0]
        assert first.key == first.content_key == "とうきょう"
        assert first.value == first.content_value == "東京"
        assert first.cost == first.wcost == 0
        assert first.structure_cost == 0
        assert first.consumed_key_size == 5
        assert (first.lid, first.rid) == (0, 0)
        assert [r.cost for r in records] == [0, COST_STEP]

    def test_consumed_size_counts_characters(self):
        (record,) = build_records("東京", [NormalizedCandidate("x", 2)])
        assert record.consumed_key_size == 2

    def test_costs_strictly_increasing(self):
        records = build_records("a", [NormalizedCandidate(str(i), 1) for i in range(5)])
        assert [r.cost for r in records] == [0, 100, 200, 300, 400]


class TestFullSegment:
    """FULL_SEGMENT：只改寫指定段落"""

    def test_rewrites_target_only(self, two_segments):
        target = two_segments.conversion_segment(0)
        write_candidates(two_segments, "きょう", [NormalizedCandidate("今日", 3)], segment=target)

        assert target.values == ["今日"]
        assert target.meta_candidates == []
        other = two_segments.conversion_segment(1)
        assert other.values == ["stale"]

    def test_looks_up_segment_by_key(self, two_segments):
        segment = write_candidates(two_segments, "は", [NormalizedCandidate("葉", 1)])
        assert segment is two_segments.conversion_segment(1)
        assert segment.values == ["葉"]

    def test_unknown_key_raises_without_mutation(self, two_segments):
        with pytest.raises(InvalidStateError):
            write_candidates(two_segments, "ない", [NormalizedCandidate("無い", 2)])
        assert [s.values for s in two_segments] == [["stale"], ["stale"]]


class TestSingleKey:
    """SINGLE_KEY：收斂成單一 FREE 段落"""

    def test_collapses_conversion_segments(self, two_segments):
        segment = write_candidates(
            two_segments, "きょうは", [NormalizedCandidate("今日は", 4)], ReconcileMode.SINGLE_KEY
        )
        assert two_segments.conversion_segments_size() == 1
        assert segment.key == "きょうは"
        assert segment.segment_type is SegmentType.FREE
        assert segment.values == ["今日は"]

    def test_history_segments_survive(self):
        history = Segment(key="わたし", segment_type=SegmentType.HISTORY)
        segments = Segments([history, Segment(key="は")])
        write_candidates(segments, "は", [NormalizedCandidate("は", 1)], ReconcileMode.SINGLE_KEY)
        assert segments.history_segments == [history]
        assert segments.conversion_segments_size() == 1


class TestResizedSegment:
    """RESIZED_SEGMENT：只改寫第一個轉換段落"""

    def test_rewrites_first_only(self, two_segments):
        write_candidates(
            two_segments,
            "きょう",
            [NormalizedCandidate("今日", 3), NormalizedCandidate("京", 3)],
            ReconcileMode.RESIZED_SEGMENT,
        )
        first, second = two_segments.conversion_segments
        assert first.values == ["今日", "京"]
        assert [c.cost for c in first.candidates] == [0, 100]
        assert second.values == ["stale"]
        assert second.candidates[0].cost == 999

    def test_requires_existing_segment(self):
        segments = Segments()
        with pytest.raises(InvalidStateError):
            write_candidates(segments, "a", [NormalizedCandidate("a", 1)], ReconcileMode.RESIZED_SEGMENT)
        assert len(segments) == 0
