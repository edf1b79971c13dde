"""
段落轉換器 (SegmentConverter)

持有一個外部轉換引擎 session，負責：
清空輸入 -> 送入讀音 -> 取得候選 -> 解析 -> 整合 -> 寫入段落。

使用方式:
    from segrecon import SegmentConverter, Segments
    from segrecon.engines import InMemoryEngine, encode_candidates

    engine = InMemoryEngine({"とうきょう": encode_candidates([("東京", 5)])})
    with SegmentConverter(engine) as converter:
        segments = Segments.from_keys("とうきょう")
        converter.convert(segments)
        segments.conversion_segment(0).values  # ['東京']

引擎是有狀態的單一 session，同一個轉換器不可在多個執行緒同時使用。
"""

import uuid
from typing import Any, Callable, Dict, Optional

from segrecon.config import DEFAULT_CONFIG, EngineConfig
from segrecon.core.engine_interface import ConverterEngine
from segrecon.core.errors import EngineUnavailableError, InvalidStateError
from segrecon.core.events import ReconcileEvent, ReconcileEventHandler
from segrecon.core.protocols.engine import (
    CandidateBlob,
    ConversionEngineProtocol,
    missing_operations,
    optional_operation,
)
from segrecon.core.types import ReconcileMode, Segment, Segments
from segrecon.parsing.candidate_parser import parse_response
from segrecon.reconciliation.algorithm import reconcile
from segrecon.segments.writer import write_candidates


class SegmentConverter(ConverterEngine):
    _converter_name = "segment"

    def __init__(
        self,
        engine: Optional[ConversionEngineProtocol],
        config: Optional[EngineConfig] = None,
        *,
        on_event: Optional[ReconcileEventHandler] = None,
        verbose: bool = False,
        on_timing: Optional[Callable[[str, float], None]] = None,
    ):
        self._config = config or DEFAULT_CONFIG
        self._init_logger(
            verbose=verbose or self._config.verbose,
            on_timing=on_timing or self._config.on_timing,
        )
        self._engine = engine
        self._on_event = on_event
        self._initialized = False

        with self._log_timing("SegmentConverter.__init__"):
            try:
                self._start_session()
            except EngineUnavailableError as exc:
                self._logger.error(f"轉換引擎無法使用，轉換器停用: {exc}")
                self._emit({"type": "engine_unavailable", "reason": str(exc)})

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def engine(self) -> Optional[ConversionEngineProtocol]:
        return self._engine

    def is_initialized(self) -> bool:
        return self._initialized

    def get_backend_stats(self) -> Dict[str, Any]:
        return {
            "converter": self._converter_name,
            "engine": type(self._engine).__name__ if self._engine is not None else None,
            "initialized": self._initialized,
            "zenzai_enabled": self._config.zenzai_enabled,
            "zenzai_active": self._config.zenzai_active,
            "zenzai_inference_limit": self._config.zenzai_inference_limit,
            "response_format": self._config.response_format.value,
        }

    # =========================================================================
    # Session
    # =========================================================================

    def _start_session(self) -> None:
        missing = missing_operations(self._engine)
        if missing:
            raise EngineUnavailableError(f"missing operations: {', '.join(missing)}")

        try:
            self._engine.initialize(self._config.dictionary_path, self._config.memory_path)
        except Exception as exc:
            raise EngineUnavailableError(f"initialize failed: {exc}") from exc

        self._apply_zenzai_settings()
        self._initialized = True
        self._logger.info(
            f"SegmentConverter initialized with Zenzai="
            f"{'enabled' if self._config.zenzai_enabled else 'disabled'}"
        )

    def _apply_zenzai_settings(self) -> None:
        config = self._config

        if optional_operation(self._engine, "set_zenzai_enabled") is None and config.zenzai_enabled:
            self._logger.info("engine has no Zenzai toggle; option ignored")

        settings = [
            ("set_zenzai_enabled", config.zenzai_enabled),
            ("set_zenzai_inference_limit", config.zenzai_inference_limit),
        ]
        if config.zenzai_weight_path:
            settings.append(("set_zenzai_weight_path", config.zenzai_weight_path))

        # 每個設定各自偵測、各自失敗，互不影響
        for name, value in settings:
            setter = optional_operation(self._engine, name)
            if setter is None:
                continue
            try:
                setter(value)
            except Exception as exc:
                self._logger.warning(f"{name}({value!r}) 失敗，略過此設定: {exc}", exc_info=True)

    def shutdown(self) -> None:
        if not self._initialized:
            return
        self._initialized = False
        shutdown = optional_operation(self._engine, "shutdown")
        if shutdown is not None:
            shutdown()
        self._logger.info("SegmentConverter shut down")

    # =========================================================================
    # Convert
    # =========================================================================

    def convert(
        self,
        segments: Optional[Segments],
        mode: ReconcileMode = ReconcileMode.FULL_SEGMENT,
        reading: Optional[str] = None,
    ) -> bool:
        """
        轉換段落

        Args:
            segments: 呼叫端持有的段落集合
            mode: 整合模式
                - FULL_SEGMENT: 每個轉換段落各自轉換
                - SINGLE_KEY: 整串讀音轉換成單一段落 (reading 預設為所有轉換段落讀音相接)
                - RESIZED_SEGMENT: 只改寫第一個轉換段落 (reading 預設為該段落讀音)
            reading: 指定讀音 (FULL_SEGMENT 模式忽略)

        Returns:
            bool: 引擎無法使用、segments 為 None 或沒有轉換段落時為 False；
                  其餘情況為 True (即使部分段落退回 fallback 候選)
        """
        if not self._initialized:
            self._logger.debug("convert skipped: engine not initialized")
            return False
        if segments is None or segments.conversion_segments_size() == 0:
            return False

        mode = ReconcileMode(mode)
        trace_id = uuid.uuid4().hex

        with self._log_timing(f"SegmentConverter.convert({mode.value})"):
            if mode is ReconcileMode.FULL_SEGMENT:
                return self._convert_each(segments, trace_id)

            if reading is None:
                if mode is ReconcileMode.SINGLE_KEY:
                    reading = segments.joined_conversion_key()
                else:
                    reading = segments.conversion_segment(0).key
            return self._convert_whole(reading, segments, mode, trace_id)

    def convert_key(self, key: str, segments: Optional[Segments]) -> bool:
        """以整串讀音轉換，結果收斂成單一段落"""
        return self.convert(segments, ReconcileMode.SINGLE_KEY, reading=key)

    def convert_resized(self, key: str, segments: Optional[Segments]) -> bool:
        """段落邊界調整後，只改寫第一個轉換段落"""
        return self.convert(segments, ReconcileMode.RESIZED_SEGMENT, reading=key)

    def _convert_each(self, segments: Segments, trace_id: str) -> bool:
        # 先取出所有 (key, segment)，避免寫入過程影響迭代
        pending = [(segment.key, segment) for segment in segments.conversion_segments]

        for key, segment in pending:
            if not key:
                continue
            blob = self._fetch(key, trace_id)
            if blob is None:
                continue
            self._apply(key, blob, segments, ReconcileMode.FULL_SEGMENT, trace_id, segment=segment)
        return True

    def _convert_whole(self, key: str, segments: Segments, mode: ReconcileMode, trace_id: str) -> bool:
        if not key:
            self._logger.debug(f"convert skipped: empty reading ({mode.value})")
            return False

        blob = self._fetch(key, trace_id)
        try:
            self._apply(key, blob, segments, mode, trace_id)
        except InvalidStateError as exc:
            return self._invalid_state(exc, mode, trace_id)
        return True

    def _apply(
        self,
        key: str,
        blob: Optional[CandidateBlob],
        segments: Segments,
        mode: ReconcileMode,
        trace_id: str,
        *,
        segment: Optional[Segment] = None,
    ) -> Segment:
        raw = parse_response(blob, self._config.response_format)
        candidates = reconcile(key, raw, mode, on_event=self._on_event, trace_id=trace_id)
        self._logger.debug(
            f"[{mode.value}] key='{key}' raw={len(raw)} candidates={len(candidates)}"
        )
        return write_candidates(segments, key, candidates, mode, segment=segment)

    def _fetch(self, key: str, trace_id: str) -> Optional[CandidateBlob]:
        """
        向引擎取得 key 的原始候選

        回傳的是複本；引擎提供 free_string 時複製後立即釋放原緩衝。
        """
        engine = self._engine
        try:
            clear_text = optional_operation(engine, "clear_text")
            if clear_text is not None:
                clear_text()
            engine.append_text(key)
            blob = engine.get_candidates()
        except Exception as exc:
            self._logger.exception(f"向引擎取得候選失敗: key='{key}'")
            self._emit(
                {
                    "type": "engine_unavailable",
                    "trace_id": trace_id,
                    "key": key,
                    "reason": "fetch_failed",
                    "exception_type": type(exc).__name__,
                    "exception_message": str(exc),
                }
            )
            return None

        if blob is None:
            return None

        data = blob if isinstance(blob, str) else bytes(blob)
        free_string = optional_operation(engine, "free_string")
        if free_string is not None:
            free_string(blob)
        return data

    def _invalid_state(self, exc: InvalidStateError, mode: ReconcileMode, trace_id: str) -> bool:
        self._logger.warning(f"convert rejected ({mode.value}): {exc}")
        self._emit({"type": "invalid_state", "mode": mode.value, "trace_id": trace_id, "reason": str(exc)})
        return False

    def _emit(self, event: ReconcileEvent) -> None:
        try:
            if self._on_event is not None:
                self._on_event(event)
        except Exception:
            self._logger.exception("on_event 回呼執行失敗")
