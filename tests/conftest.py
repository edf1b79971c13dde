"""
共用 fixtures
"""

import pytest

from segrecon.engines import InMemoryEngine, encode_candidates


@pytest.fixture
def events():
    """收集事件回呼的 list"""
    return []


@pytest.fixture
def on_event(events):
    return events.append


@pytest.fixture
def tokyo_engine():
    """
    「とうきょう」「と」系列讀音的記憶體內引擎

    - とうきょう: 完整涵蓋的候選
    - とうきょうと: 只涵蓋前 5 字的候選與完整候選混合
    """
    return InMemoryEngine(
        {
            "とうきょう": encode_candidates([("東京", 5), ("東京", 0), ("トウキョウ", 5)]),
            "とうきょうと": encode_candidates([("東京都", 6), ("東京", 5), ("x", 9)]),
            "と": encode_candidates([("都", 1), ("戸", 1)]),
        }
    )
