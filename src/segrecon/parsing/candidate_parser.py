"""
候選資料解析模組

引擎回傳的候選是「類 JSON」的位元組資料：

    [{"text": "東京", "correspondingCount": 5}, ...]   (STRUCTURED)
    ["東京", "東教", ...]                               (LEGACY)

這裡不做嚴格的 JSON 驗證，而是單次由左到右掃描的寬容解析器：
遇到任何非預期的字元就停止，回傳目前已累積的結果，絕不拋出例外。

掃描器是一個明確的狀態機 (游標 + ScanState)：

    EXPECT_ARRAY_OPEN -> EXPECT_OBJECT_OR_CLOSE -> EXPECT_KEY <-> EXPECT_VALUE

已知的簡化：字串中的 \\uXXXX 只會被跳過 (消耗 u 與四個字元)，不會解碼成字元。
"""

from enum import Enum, auto
from typing import List, Optional, Union

from segrecon.core.types import RawCandidate, ResponseFormat
from segrecon.utils.logger import get_logger

logger = get_logger("parser")

BlobInput = Union[bytes, bytearray, memoryview, str, None]

WHITESPACE = " \t\n\r"
# key 之後只跳過空格與冒號
KEY_SEPARATORS = " :"

TEXT_KEY = "text"
COVERAGE_KEY = "correspondingCount"

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    '"': '"',
}


class ScanState(Enum):
    EXPECT_ARRAY_OPEN = auto()
    EXPECT_OBJECT_OR_CLOSE = auto()
    EXPECT_KEY = auto()
    EXPECT_VALUE = auto()


def _decode(blob: BlobInput) -> str:
    if blob is None:
        return ""
    if isinstance(blob, str):
        return blob
    return bytes(blob).decode("utf-8", errors="replace")


class _Cursor:
    """掃描游標：只往前移動，所有讀取在資料結尾時安全停止"""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.size = len(text)

    def at_end(self) -> bool:
        return self.pos >= self.size

    def peek(self) -> str:
        if self.pos >= self.size:
            return ""
        return self.text[self.pos]

    def advance(self, count: int = 1) -> None:
        self.pos += count

    def skip_chars(self, chars: str) -> None:
        while self.pos < self.size and self.text[self.pos] in chars:
            self.pos += 1

    def read_quoted(self) -> str:
        """
        讀取字串內容 (游標位於開頭的 '"')

        支援 \\n \\t \\r \\\\ \\" ；\\uXXXX 被跳過；其他跳脫字元原樣輸出。
        沒有結尾引號時讀到資料結尾為止。
        """
        self.pos += 1
        out: List[str] = []
        text = self.text
        while self.pos < self.size and text[self.pos] != '"':
            ch = text[self.pos]
            if ch == "\\" and self.pos + 1 < self.size:
                self.pos += 1
                escaped = text[self.pos]
                if escaped in _SIMPLE_ESCAPES:
                    out.append(_SIMPLE_ESCAPES[escaped])
                elif escaped == "u":
                    if self.pos + 4 < self.size:
                        self.pos += 4
                else:
                    out.append(escaped)
            else:
                out.append(ch)
            self.pos += 1
        if self.pos < self.size:
            self.pos += 1
        return "".join(out)

    def skip_quoted(self) -> None:
        self.pos += 1
        text = self.text
        while self.pos < self.size and text[self.pos] != '"':
            if text[self.pos] == "\\" and self.pos + 1 < self.size:
                self.pos += 1
            self.pos += 1
        if self.pos < self.size:
            self.pos += 1

    def read_raw_key(self) -> str:
        """讀取物件 key (游標位於 '"')，key 內不處理跳脫"""
        self.pos += 1
        start = self.pos
        while self.pos < self.size and self.text[self.pos] != '"':
            self.pos += 1
        key = self.text[start:self.pos]
        if self.pos < self.size:
            self.pos += 1
        return key

    def read_digits(self) -> int:
        """讀取連續 ASCII 數字；沒有數字時回傳 0"""
        value = 0
        while self.pos < self.size and "0" <= self.text[self.pos] <= "9":
            value = value * 10 + (ord(self.text[self.pos]) - ord("0"))
            self.pos += 1
        return value

    def skip_bare_token(self) -> None:
        while self.pos < self.size and self.text[self.pos] not in ",}":
            self.pos += 1


class _RecordDraft:
    __slots__ = ("text", "coverage")

    def __init__(self):
        self.text = ""
        self.coverage = 0


class CandidateArrayScanner:
    """
    物件陣列掃描器

    每個物件讀取 "text" 與 "correspondingCount"，其他 key 的值整段跳過。
    text 缺少或為空字串的物件直接捨棄。
    """

    def __init__(self, text: str):
        self._cursor = _Cursor(text)
        self._state = ScanState.EXPECT_ARRAY_OPEN
        self._record: Optional[_RecordDraft] = None
        self._key = ""
        self._results: List[RawCandidate] = []

    @property
    def state(self) -> ScanState:
        return self._state

    def run(self) -> List[RawCandidate]:
        cursor = self._cursor
        while True:
            if self._state is ScanState.EXPECT_ARRAY_OPEN:
                if cursor.peek() != "[":
                    return self._stop("not an array")
                cursor.advance()
                self._state = ScanState.EXPECT_OBJECT_OR_CLOSE

            elif self._state is ScanState.EXPECT_OBJECT_OR_CLOSE:
                cursor.skip_chars(WHITESPACE)
                ch = cursor.peek()
                if not ch:
                    return self._stop("missing closing bracket")
                if ch == "]":
                    return self._results
                if ch == ",":
                    cursor.advance()
                    continue
                if ch != "{":
                    return self._stop(f"unexpected {ch!r}")
                cursor.advance()
                self._record = _RecordDraft()
                self._state = ScanState.EXPECT_KEY

            elif self._state is ScanState.EXPECT_KEY:
                cursor.skip_chars(WHITESPACE)
                ch = cursor.peek()
                if not ch:
                    self._close_record()
                    return self._stop("truncated record")
                if ch == ",":
                    cursor.advance()
                    continue
                if ch == "}":
                    cursor.advance()
                    self._close_record()
                    self._state = ScanState.EXPECT_OBJECT_OR_CLOSE
                    continue
                if ch != '"':
                    # 不是 key：結束此物件，交給陣列層決定是否繼續
                    self._close_record()
                    self._state = ScanState.EXPECT_OBJECT_OR_CLOSE
                    continue
                self._key = cursor.read_raw_key()
                cursor.skip_chars(KEY_SEPARATORS)
                self._state = ScanState.EXPECT_VALUE

            elif self._state is ScanState.EXPECT_VALUE:
                self._read_value()
                self._state = ScanState.EXPECT_KEY

    def _read_value(self) -> None:
        cursor = self._cursor
        record = self._record
        if self._key == TEXT_KEY:
            if cursor.peek() == '"':
                record.text = cursor.read_quoted()
        elif self._key == COVERAGE_KEY:
            record.coverage = cursor.read_digits()
        elif cursor.peek() == '"':
            cursor.skip_quoted()
        else:
            cursor.skip_bare_token()

    def _close_record(self) -> None:
        record = self._record
        self._record = None
        if record is not None and record.text:
            self._results.append(RawCandidate(text=record.text, coverage=record.coverage))

    def _stop(self, reason: str) -> List[RawCandidate]:
        logger.debug(
            f"candidate scan stopped at {self._cursor.pos}/{self._cursor.size}: {reason} "
            f"(records={len(self._results)})"
        )
        return self._results


class StringArrayScanner:
    """舊版字串陣列掃描器：["a", "b", ...]，空字串捨棄"""

    def __init__(self, text: str):
        self._cursor = _Cursor(text)
        self._results: List[str] = []

    def run(self) -> List[str]:
        cursor = self._cursor
        if cursor.peek() != "[":
            return self._stop("not an array")
        cursor.advance()
        while True:
            cursor.skip_chars(WHITESPACE)
            ch = cursor.peek()
            if not ch:
                return self._stop("missing closing bracket")
            if ch == "]":
                return self._results
            if ch == ",":
                cursor.advance()
                continue
            if ch != '"':
                return self._stop(f"unexpected {ch!r}")
            value = cursor.read_quoted()
            if value:
                self._results.append(value)

    def _stop(self, reason: str) -> List[str]:
        logger.debug(
            f"string array scan stopped at {self._cursor.pos}/{self._cursor.size}: {reason} "
            f"(values={len(self._results)})"
        )
        return self._results


def parse_candidate_array(blob: BlobInput) -> List[RawCandidate]:
    """
    解析物件陣列格式的候選資料

    Args:
        blob: 引擎回傳的位元組資料 (或已解碼的 str)

    Returns:
        List[RawCandidate]: 依原順序排列的候選；資料損毀時回傳已解析的部分 (可能為空)
    """
    return CandidateArrayScanner(_decode(blob)).run()


def parse_string_array(blob: BlobInput) -> List[str]:
    """解析舊版字串陣列格式"""
    return StringArrayScanner(_decode(blob)).run()


def parse_response(
    blob: BlobInput,
    response_format: ResponseFormat = ResponseFormat.STRUCTURED,
) -> List[RawCandidate]:
    """
    依格式選擇一種解析器 (同一次呼叫不會混用兩種解析結果)

    舊版字串沒有涵蓋字數，一律以 coverage=0 (完整涵蓋) 表示。
    """
    if ResponseFormat(response_format) is ResponseFormat.LEGACY:
        return [RawCandidate(text=value, coverage=0) for value in parse_string_array(blob)]
    return parse_candidate_array(blob)
