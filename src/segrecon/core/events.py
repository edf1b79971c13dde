"""
事件模型（Event Model）

reconcile 與 converter 不直接輸出到 stdout。
若需要知道「哪些候選被丟棄、哪些被延伸、是否退回 fallback」，請使用事件回呼。

設計原則：
- 允許降級（fallback 候選），但不允許「默默」降級：每次降級都會發出事件。
"""

from __future__ import annotations

from typing import Callable, Literal, TypedDict


class ReconcileEvent(TypedDict, total=False):
    type: Literal[
        "over_coverage",
        "extended",
        "mismatch_dropped",
        "fallback",
        "engine_unavailable",
        "invalid_state",
    ]
    mode: str
    trace_id: str

    # candidate
    key: str
    text: str
    coverage: int
    key_length: int

    # diagnostics
    reason: str
    exception_type: str
    exception_message: str


ReconcileEventHandler = Callable[[ReconcileEvent], None]
