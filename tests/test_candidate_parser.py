"""
候選資料解析器測試

驗證：
1. 正常的物件陣列
2. 跳脫字元與 \\uXXXX 的簡化處理
3. 損毀 / 截斷資料不拋例外
4. 舊版字串陣列
"""

from segrecon.core.types import RawCandidate, ResponseFormat
from segrecon.parsing.candidate_parser import (
    CandidateArrayScanner,
    ScanState,
    parse_candidate_array,
    parse_response,
    parse_string_array,
)


class TestCandidateArray:
    """測試物件陣列解析"""

    def test_basic(self):
        blob = '[{"text": "東京", "correspondingCount": 5}, {"text": "東京都", "correspondingCount": 6}]'
        assert parse_candidate_array(blob.encode("utf-8")) == [
            RawCandidate("東京", 5),
            RawCandidate("東京都", 6),
        ]

    def test_key_order_and_whitespace(self):
        blob = '[\n  {"correspondingCount":3,\t"text":"今日"} ,\r\n {"text":"京"}\n]'
        assert parse_candidate_array(blob) == [RawCandidate("今日", 3), RawCandidate("京", 0)]

    def test_missing_count_is_zero(self):
        assert parse_candidate_array('[{"text": "a"}]') == [RawCandidate("a", 0)]

    def test_non_digit_count_is_zero(self):
        assert parse_candidate_array('[{"text": "a", "correspondingCount": null}]') == [RawCandidate("a", 0)]

    def test_empty_or_missing_text_discarded(self):
        blob = '[{"text": ""}, {"correspondingCount": 2}, {"text": "ok", "correspondingCount": 2}]'
        assert parse_candidate_array(blob) == [RawCandidate("ok", 2)]

    def test_unknown_keys_skipped(self):
        blob = (
            '[{"rank": 1, "text": "東京", "note": "he said \\"hi\\", ok", '
            '"correspondingCount": 5, "flag": true}]'
        )
        assert parse_candidate_array(blob) == [RawCandidate("東京", 5)]

    def test_escapes(self):
        blob = r'[{"text": "a\nb\tc\rd\\e\"f\/g"}]'
        assert parse_candidate_array(blob) == [RawCandidate('a\nb\tc\rd\\e"f/g', 0)]

    def test_only_space_and_colon_skipped_after_key(self):
        """key 之後的 tab / 換行不會被跳過，該值讀不到"""
        blob = '[{"text":\t"a"}, {"text" : "b", "correspondingCount":\n1}]'
        assert parse_candidate_array(blob) == [RawCandidate("b", 0)]

    def test_unicode_escape_is_consumed_not_decoded(self):
        """\\uXXXX 只被跳過，不會產生字元"""
        blob = r'[{"text": "A\u6771B"}]'
        assert parse_candidate_array(blob) == [RawCandidate("AB", 0)]

    def test_consecutive_commas_tolerated(self):
        blob = '[,,{"text": "a"},,{"text": "b"},]'
        assert parse_candidate_array(blob) == [RawCandidate("a", 0), RawCandidate("b", 0)]

    def test_empty_array(self):
        assert parse_candidate_array(b"[]") == []


class TestMalformedInput:
    """測試損毀資料：不拋例外，回傳已解析的部分"""

    def test_not_an_array(self):
        assert parse_candidate_array(b'{"text": "a"}') == []
        assert parse_candidate_array(b" [") == []
        assert parse_candidate_array(b"") == []
        assert parse_candidate_array(None) == []

    def test_truncated_inside_text(self):
        """字串沒有結尾引號時讀到資料結尾，已讀到的 text 仍保留"""
        assert parse_candidate_array(b'[{"text": "abc') == [RawCandidate("abc", 0)]

    def test_truncated_inside_key(self):
        assert parse_candidate_array(b'[{"te') == []

    def test_stops_at_garbage_keeps_previous(self):
        blob = b'[{"text": "a", "correspondingCount": 1}, garbage, {"text": "b"}]'
        assert parse_candidate_array(blob) == [RawCandidate("a", 1)]

    def test_missing_closing_bracket(self):
        assert parse_candidate_array(b'[{"text": "a"}') == [RawCandidate("a", 0)]

    def test_invalid_utf8_does_not_raise(self):
        blob = b'[{"text": "\xff\xfeok"}]'
        result = parse_candidate_array(blob)
        assert len(result) == 1
        assert result[0].text.endswith("ok")

    def test_negative_count_stops_record(self):
        """負數不是數字：coverage 為 0，物件在 '-' 處結束"""
        assert parse_candidate_array(b'[{"text": "a", "correspondingCount": -3}]') == [RawCandidate("a", 0)]

    def test_scanner_starts_expecting_array(self):
        scanner = CandidateArrayScanner("[]")
        assert scanner.state is ScanState.EXPECT_ARRAY_OPEN
        assert scanner.run() == []
        assert scanner.state is ScanState.EXPECT_OBJECT_OR_CLOSE


class TestStringArray:
    """測試舊版字串陣列"""

    def test_basic(self):
        assert parse_string_array('["東京", "東教", "トウキョウ"]'.encode("utf-8")) == ["東京", "東教", "トウキョウ"]

    def test_empty_strings_dropped(self):
        assert parse_string_array('["", "a", ""]') == ["a"]

    def test_escapes(self):
        assert parse_string_array(r'["a\"b", "c\u0041d"]') == ['a"b', "cd"]

    def test_stops_at_object(self):
        assert parse_string_array('["a", {"text": "b"}, "c"]') == ["a"]

    def test_not_an_array(self):
        assert parse_string_array('"a"') == []


class TestParseResponse:
    """測試格式選擇"""

    def test_structured(self):
        blob = '[{"text": "東京", "correspondingCount": 5}]'
        assert parse_response(blob, ResponseFormat.STRUCTURED) == [RawCandidate("東京", 5)]

    def test_legacy_strings_get_zero_coverage(self):
        assert parse_response('["東京", "都"]', ResponseFormat.LEGACY) == [
            RawCandidate("東京", 0),
            RawCandidate("都", 0),
        ]

    def test_formats_are_not_mixed(self):
        """物件陣列交給舊版解析器時不會得到任何候選"""
        blob = '[{"text": "東京"}]'
        assert parse_response(blob, ResponseFormat.LEGACY) == []
        assert parse_response('["東京"]', ResponseFormat.STRUCTURED) == []

    def test_accepts_string_value(self):
        assert parse_response('["a"]', "legacy") == [RawCandidate("a", 0)]
