"""Tests for percent-encoding, decoding and normalization."""

import pytest

from nuri import PATH_SEGMENT_ALLOWED, QUERY_ALLOWED, normalize_percent_encoding, percent_decode, percent_encode

PRINTABLE_ASCII: str = "".join(chr(c) for c in range(0x20, 0x7F))


class TestEncode:
    def test_space(self) -> None:
        assert percent_encode("hello world") == "hello%20world"

    def test_uppercase_hex(self) -> None:
        encoded = percent_encode("hello?world#x")
        assert "%3F" in encoded
        assert "%23" in encoded
        assert "%3f" not in encoded

    def test_unreserved_untouched(self) -> None:
        assert percent_encode("abc-XYZ_0.9~") == "abc-XYZ_0.9~"

    def test_path_segment_set(self) -> None:
        assert percent_encode("a:b@c", PATH_SEGMENT_ALLOWED) == "a:b@c"
        assert percent_encode("a/b", PATH_SEGMENT_ALLOWED) == "a%2Fb"

    def test_query_set(self) -> None:
        assert percent_encode("k=v&x=/?", QUERY_ALLOWED) == "k=v&x=/?"

    def test_percent_is_encoded(self) -> None:
        assert percent_encode("100%") == "100%25"

    def test_non_ascii_encodes_each_utf8_byte(self) -> None:
        assert percent_encode("é") == "%C3%A9"

    def test_bytes(self) -> None:
        assert percent_encode(b"a\xff") == "a%FF"


class TestDecode:
    def test_basic(self) -> None:
        assert percent_decode("hello%20world%3Ftest") == "hello world?test"

    def test_multibyte_utf8(self) -> None:
        assert percent_decode("caf%C3%A9") == "café"

    def test_lowercase_hex(self) -> None:
        assert percent_decode("%2f") == "/"

    @pytest.mark.parametrize("data", ["100%", "%", "%z1", "%4", "50%-off"])
    def test_malformed_passes_through(self, data: str) -> None:
        assert percent_decode(data) == data

    def test_invalid_utf8_run_is_literal(self) -> None:
        # 0xC3 0x28 is not UTF-8; the lone %28 still decodes
        assert percent_decode("%C3%28") == "%C3("

    def test_encode_then_decode_recovers_printable_ascii(self) -> None:
        assert percent_decode(percent_encode(PRINTABLE_ASCII)) == PRINTABLE_ASCII
        assert percent_decode(percent_encode(PRINTABLE_ASCII, QUERY_ALLOWED)) == PRINTABLE_ASCII


class TestNormalize:
    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            ("hello%2Dworld", "hello-world"),
            ("hello%2dworld", "hello-world"),
            ("hello%2fworld", "hello%2Fworld"),
            ("%7e%7E", "~~"),
            ("%41%62%30", "Ab0"),
            ("%e9", "%E9"),
            ("a%3ab", "a%3Ab"),
            ("plain", "plain"),
            ("%zz", "%zz"),
            ("%", "%"),
        ],
    )
    def test_golden(self, data: str, expected: str) -> None:
        assert normalize_percent_encoding(data) == expected

    def test_stray_percent_does_not_form_new_triple(self) -> None:
        assert normalize_percent_encoding("%%34%31") == "%%341"
        assert normalize_percent_encoding("%4%31") == "%4%31"

    @pytest.mark.parametrize(
        "data",
        [
            "hello%2dworld",
            "%%34%31",
            "%4%31",
            "%25%32%35",
            "a%2F%2f%7e%zz%",
            "%%%41%41",
            PRINTABLE_ASCII,
        ],
    )
    def test_idempotent(self, data: str) -> None:
        once = normalize_percent_encoding(data)
        assert normalize_percent_encoding(once) == once
