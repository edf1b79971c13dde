"""
Conversion Engine Protocol

定義外部轉換引擎的最小介面 (一個 session、有狀態)。

必要操作 (Protocol 成員)：initialize / append_text / get_candidates
選用操作 (以 getattr 偵測，缺少時功能直接停用，不視為錯誤)：
- clear_text()
- shutdown()
- free_string(buffer)
- set_zenzai_enabled(enabled)
- set_zenzai_inference_limit(limit)
- set_zenzai_weight_path(path)
"""

from typing import Any, Optional, Protocol, Union, runtime_checkable

CandidateBlob = Union[bytes, str]

ESSENTIAL_OPERATIONS = ("initialize", "append_text", "get_candidates")
OPTIONAL_OPERATIONS = (
    "clear_text",
    "shutdown",
    "free_string",
    "set_zenzai_enabled",
    "set_zenzai_inference_limit",
    "set_zenzai_weight_path",
)


@runtime_checkable
class ConversionEngineProtocol(Protocol):
    def initialize(self, dictionary_path: Optional[str], memory_path: Optional[str]) -> None:
        """建立 session"""
        ...

    def append_text(self, text: str) -> None:
        """把讀音送進 session (有 clear_text 時先清空)"""
        ...

    def get_candidates(self) -> Optional[CandidateBlob]:
        """取得目前輸入的原始候選資料"""
        ...


def missing_operations(engine: Any) -> list[str]:
    """回傳 engine 缺少 (或不可呼叫) 的必要操作名稱"""
    if engine is None:
        return list(ESSENTIAL_OPERATIONS)
    return [name for name in ESSENTIAL_OPERATIONS if not callable(getattr(engine, name, None))]


def optional_operation(engine: Any, name: str):
    """取得選用操作；不存在時回傳 None"""
    if name not in OPTIONAL_OPERATIONS:
        raise ValueError(f"unknown optional operation: {name}")
    op = getattr(engine, name, None)
    return op if callable(op) else None
