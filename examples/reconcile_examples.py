"""
候選整合範例 (Candidate Reconciliation Examples)

本檔案展示 SegmentConverter 的核心功能：
1. 基礎用法 - 每個段落各自轉換 (FULL_SEGMENT)
2. 部分涵蓋 - 補上剩餘讀音
3. 整串轉換 - 收斂成單一段落 (SINGLE_KEY)
4. 邊界調整 - 只改寫第一段 (RESIZED_SEGMENT)
5. 損毀資料 - fallback 候選
6. 事件回呼
"""

import sys
from pathlib import Path

root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir / "src"))

from segrecon import ReconcileMode, SegmentConverter, Segments
from segrecon.engines import InMemoryEngine, encode_candidates

engine = InMemoryEngine(
    {
        "とうきょう": encode_candidates([("東京", 5), ("トウキョウ", 5)]),
        "とうきょうと": encode_candidates([("東京都", 6), ("東京", 5), ("東", 1), ("x", 9)]),
        "と": encode_candidates([("都", 1), ("戸", 1)]),
        "こわれた": b'[{"te',
    }
)
events = []
converter = SegmentConverter(engine, on_event=events.append)


def print_segments(title, segments):
    print(f"--- {title} ---")
    for i, segment in enumerate(segments.conversion_segments):
        ranked = ", ".join(f"{c.value}({c.cost})" for c in segment.candidates)
        print(f"  [{i}] {segment.key}: {ranked}")
    print()


# =============================================================================
# 範例 1: 基礎用法
# =============================================================================
def example_1_basic_usage():
    """每個段落各自向引擎取得候選，cost 依引擎排名 0, 100, 200..."""
    segments = Segments.from_keys("とうきょう", "と")
    converter.convert(segments)
    print_segments("FULL_SEGMENT", segments)


# =============================================================================
# 範例 2: 部分涵蓋
# =============================================================================
def example_2_partial_coverage():
    """
    「東京」只涵蓋「とうきょうと」的前 5 字，剩下的「と」原樣接在後面。
    涵蓋 9 字的 "x" 超過讀音長度，被丟棄。
    """
    segments = Segments.from_keys("とうきょうと")
    converter.convert(segments)
    print_segments("Partial coverage", segments)


# =============================================================================
# 範例 3: 整串轉換
# =============================================================================
def example_3_single_key():
    """所有轉換段落合併成一段；SINGLE_KEY 不丟棄過長候選"""
    segments = Segments.from_keys("とうきょう", "と")
    converter.convert(segments, ReconcileMode.SINGLE_KEY)
    print_segments("SINGLE_KEY", segments)


# =============================================================================
# 範例 4: 邊界調整
# =============================================================================
def example_4_resized():
    """只保留剛好涵蓋的候選，第二段不受影響"""
    segments = Segments.from_keys("とうきょうと", "が")
    converter.convert_resized("とうきょうと", segments)
    print_segments("RESIZED_SEGMENT", segments)


# =============================================================================
# 範例 5: 損毀資料
# =============================================================================
def example_5_malformed():
    """解析不到任何候選時，讀音本身成為唯一候選"""
    segments = Segments.from_keys("こわれた", "ぬ")
    converter.convert(segments)
    print_segments("Malformed / unknown", segments)


# =============================================================================
# 範例 6: 事件回呼
# =============================================================================
def example_6_events():
    for event in events:
        print(f"  {event['type']}: key={event.get('key')} text={event.get('text')} coverage={event.get('coverage')}")
    print()


if __name__ == "__main__":
    example_1_basic_usage()
    example_2_partial_coverage()
    example_3_single_key()
    example_4_resized()
    example_5_malformed()
    example_6_events()
    converter.shutdown()
