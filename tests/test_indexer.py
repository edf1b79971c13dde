"""
字元索引測試

驗證 character_count / prefix / suffix 以字元 (而非位元組) 為單位運作。
"""

import pytest

from segrecon.text.indexer import character_count, prefix, suffix

SAMPLES = [
    "",
    "abc",
    "とうきょう",
    "東京タワーへ",
    "mixed かな and 漢字",
    "😀絵文字😀",
    "é̃",
]


class TestCharacterCount:
    """測試字元計數"""

    def test_ascii(self):
        assert character_count("hello") == 5

    def test_japanese(self):
        """平假名每字 3 bytes，但只算一個字元"""
        assert character_count("とうきょう") == 5
        assert len("とうきょう".encode("utf-8")) == 15

    def test_four_byte(self):
        assert character_count("😀a") == 2

    def test_bytes_and_str_agree(self):
        for s in SAMPLES:
            assert character_count(s) == character_count(s.encode("utf-8")) == len(s)

    def test_invalid_lead_byte_is_one_char(self):
        """不合法的首位元組 (接續位元組) 視為一個字元，不拋例外"""
        assert character_count(b"\x80\x80a") == 3
        assert character_count(b"\xff") == 1

    def test_truncated_sequence(self):
        """結尾截斷的多位元組字元算一個字元"""
        data = "と".encode("utf-8")[:2]
        assert character_count(b"a" + data) == 2


class TestPrefixSuffix:
    """測試前綴 / 後綴切割"""

    def test_prefix_basic(self):
        assert prefix("とうきょうと", 5) == "とうきょう"
        assert prefix("とうきょうと", 0) == ""

    def test_prefix_beyond_length_returns_input(self):
        assert prefix("とうきょう", 10) == "とうきょう"

    def test_suffix_basic(self):
        assert suffix("とうきょうと", 5) == "と"
        assert suffix("とうきょう", 0) == "とうきょう"
        assert suffix("とうきょう", 9) == ""

    def test_bytes_in_bytes_out(self):
        data = "東京と".encode("utf-8")
        assert prefix(data, 2) == "東京".encode("utf-8")
        assert suffix(data, 2) == "と".encode("utf-8")

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError):
            prefix("abc", -1)

    @pytest.mark.parametrize("s", SAMPLES)
    def test_prefix_plus_suffix_is_identity(self, s):
        for n in range(len(s) + 3):
            assert prefix(s, n) + suffix(s, n) == s

    @pytest.mark.parametrize("s", SAMPLES)
    def test_prefix_length_law(self, s):
        total = character_count(s)
        for n in range(total + 3):
            assert character_count(prefix(s, n)) == min(n, total)

    def test_identity_on_invalid_bytes(self):
        data = b"\xe3\x81a\xff\xf0\x9f"
        for n in range(8):
            assert prefix(data, n) + suffix(data, n) == data

    def test_lone_surrogate_is_one_char(self):
        s = "a\ud800b"
        assert character_count(s) == 3
        assert prefix(s, 2) == "a\ud800"
        assert suffix(s, 2) == "b"
        assert prefix(s, 1) + suffix(s, 1) == s
