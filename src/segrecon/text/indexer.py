"""
字元索引模組

在 UTF-8 位元組序列上以「字元」為單位計數與切割。
依照每個字元的首位元組判斷長度：

    0xxxxxxx -> 1 byte (ASCII)
    110xxxxx -> 2 bytes
    1110xxxx -> 3 bytes (平假名、片假名、漢字都在這裡)
    11110xxx -> 4 bytes
    其他     -> 視為 1 byte 的字元 (不合法的首位元組不拋例外)

三個函式都接受 bytes 或 str：str 會先編碼成 UTF-8，結果再解碼回 str。
單獨的 surrogate 以 surrogatepass 編碼，算一個 3 位元組字元。
對任何 s 與 n 皆成立：prefix(s, n) + suffix(s, n) == s
"""

from typing import TypeVar, Union

TextLike = TypeVar("TextLike", bytes, str)


def _sequence_length(lead: int) -> int:
    """依首位元組回傳該字元佔用的位元組數"""
    if lead & 0x80 == 0:
        return 1
    if lead & 0xE0 == 0xC0:
        return 2
    if lead & 0xF0 == 0xE0:
        return 3
    if lead & 0xF8 == 0xF0:
        return 4
    return 1


def _to_bytes(s: Union[bytes, str]) -> bytes:
    if isinstance(s, str):
        return s.encode("utf-8", "surrogatepass")
    return bytes(s)


def _byte_offset(data: bytes, char_count: int) -> int:
    """前 char_count 個字元結束處的位元組位置 (不超過 len(data))"""
    if char_count < 0:
        raise ValueError(f"char_count must be >= 0, got {char_count}")
    pos = 0
    processed = 0
    size = len(data)
    while pos < size and processed < char_count:
        pos += _sequence_length(data[pos])
        processed += 1
    return min(pos, size)


def character_count(s: Union[bytes, str]) -> int:
    """
    計算字元數

    Args:
        s: UTF-8 位元組序列或 str

    Returns:
        int: 字元數；截斷在結尾的多位元組字元算一個字元
    """
    data = _to_bytes(s)
    count = 0
    pos = 0
    size = len(data)
    while pos < size:
        pos += _sequence_length(data[pos])
        count += 1
    return count


def prefix(s: TextLike, n: int) -> TextLike:
    """
    取前 n 個字元

    n 大於等於字元數時原樣回傳。
    """
    data = _to_bytes(s)
    head = data[: _byte_offset(data, n)]
    if isinstance(s, str):
        return head.decode("utf-8", "surrogatepass")
    return head


def suffix(s: TextLike, skip: int) -> TextLike:
    """跳過前 skip 個字元，回傳其餘部分"""
    data = _to_bytes(s)
    tail = data[_byte_offset(data, skip):]
    if isinstance(s, str):
        return tail.decode("utf-8", "surrogatepass")
    return tail
