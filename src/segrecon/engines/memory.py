"""
記憶體內轉換引擎

以讀音對應預先準備好的候選資料，實作 ConversionEngineProtocol。
用於測試與範例，也可在正式引擎無法載入時作為替身。

使用方式:
    from segrecon.engines import InMemoryEngine, encode_candidates

    engine = InMemoryEngine({
        "とうきょう": encode_candidates([("東京", 5), ("東京", 3)]),
    })
"""

import json
from typing import Dict, Iterable, List, Optional, Tuple, Union

from segrecon.core.protocols.engine import CandidateBlob


def encode_candidates(candidates: Iterable[Union[str, Tuple[str, int]]]) -> bytes:
    """
    把候選編碼成引擎的物件陣列格式

    Args:
        candidates: 候選文字，或 (文字, 涵蓋字數) 的 tuple

    Returns:
        bytes: UTF-8 編碼的 [{"text": ..., "correspondingCount": ...}, ...]
    """
    items = []
    for candidate in candidates:
        if isinstance(candidate, str):
            items.append({"text": candidate, "correspondingCount": 0})
        else:
            text, count = candidate
            items.append({"text": text, "correspondingCount": int(count)})
    return json.dumps(items, ensure_ascii=False).encode("utf-8")


def encode_legacy_candidates(candidates: Iterable[str]) -> bytes:
    """編碼成舊版字串陣列格式"""
    return json.dumps(list(candidates), ensure_ascii=False).encode("utf-8")


class InMemoryEngine:
    """
    記憶體內引擎

    - 單一 session：append_text 累積到緩衝，clear_text 清空
    - get_candidates 依目前緩衝查表；查不到時回傳 default
    - 所有呼叫依序記錄在 calls，方便測試檢查呼叫順序
    """

    def __init__(
        self,
        responses: Optional[Dict[str, Optional[CandidateBlob]]] = None,
        *,
        default: Optional[CandidateBlob] = b"[]",
    ):
        self._responses: Dict[str, Optional[CandidateBlob]] = dict(responses or {})
        self.default = default
        self.buffer = ""
        self.calls: List[Tuple] = []
        self.freed: List[CandidateBlob] = []

        self.initialized = False
        self.dictionary_path: Optional[str] = None
        self.memory_path: Optional[str] = None
        self.zenzai_enabled = False
        self.zenzai_inference_limit: Optional[int] = None
        self.zenzai_weight_path: Optional[str] = None

    def add_response(self, reading: str, blob: Optional[CandidateBlob]) -> None:
        self._responses[reading] = blob

    def initialize(self, dictionary_path: Optional[str], memory_path: Optional[str]) -> None:
        self.calls.append(("initialize", dictionary_path, memory_path))
        self.dictionary_path = dictionary_path
        self.memory_path = memory_path
        self.initialized = True

    def shutdown(self) -> None:
        self.calls.append(("shutdown",))
        self.initialized = False
        self.buffer = ""

    def clear_text(self) -> None:
        self.calls.append(("clear_text",))
        self.buffer = ""

    def append_text(self, text: str) -> None:
        self.calls.append(("append_text", text))
        self.buffer += text

    def get_candidates(self) -> Optional[CandidateBlob]:
        self.calls.append(("get_candidates", self.buffer))
        return self._responses.get(self.buffer, self.default)

    def free_string(self, buffer: CandidateBlob) -> None:
        self.calls.append(("free_string",))
        self.freed.append(buffer)

    def set_zenzai_enabled(self, enabled: bool) -> None:
        self.calls.append(("set_zenzai_enabled", enabled))
        self.zenzai_enabled = enabled

    def set_zenzai_inference_limit(self, limit: int) -> None:
        self.calls.append(("set_zenzai_inference_limit", limit))
        self.zenzai_inference_limit = limit

    def set_zenzai_weight_path(self, path: str) -> None:
        self.calls.append(("set_zenzai_weight_path", path))
        self.zenzai_weight_path = path

    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]
