"""Tests for the scheme, port, userinfo, path, query and fragment parsers."""

import pytest

from nuri import (
    Authority,
    InvalidComponent,
    Port,
    Scheme,
    Userinfo,
    parse_fragment,
    parse_host,
    parse_path,
    parse_port,
    parse_query,
    parse_scheme,
    parse_userinfo,
)


class TestScheme:
    @pytest.mark.parametrize(("data", "expected"), [("HTTP", "http"), ("svn+ssh", "svn+ssh"), ("a1.b-c", "a1.b-c")])
    def test_valid(self, data: str, expected: str) -> None:
        assert parse_scheme(data).value == expected

    def test_must_start_with_letter(self) -> None:
        with pytest.raises(InvalidComponent) as exc_info:
            parse_scheme("1http")
        assert exc_info.value.component == "scheme"
        assert exc_info.value.byte == ord("1")

    @pytest.mark.parametrize("data", ["", "ht tp", "http_s", "a%41"])
    def test_invalid(self, data: str) -> None:
        with pytest.raises(InvalidComponent):
            parse_scheme(data)

    def test_equality_after_case_folding(self) -> None:
        assert Scheme("HTTPS") == Scheme("https")

    def test_bytes(self) -> None:
        assert parse_scheme(b"FTP").value == "ftp"


class TestPort:
    def test_valid(self) -> None:
        assert parse_port("8080") == 8080
        assert parse_port(b"443") == 443

    def test_zero_is_not_absent(self) -> None:
        port = parse_port("0")
        assert port is not None
        assert port == 0

    def test_empty_is_absent(self) -> None:
        assert parse_port("") is None

    @pytest.mark.parametrize("data", ["65536", "80a", "-1", " 80"])
    def test_invalid(self, data: str) -> None:
        with pytest.raises(InvalidComponent):
            parse_port(data)

    def test_constructor_range(self) -> None:
        assert Port(65535).value == 65535
        with pytest.raises(InvalidComponent):
            Port(70000)


class TestUserinfo:
    def test_user_and_password(self) -> None:
        userinfo = parse_userinfo("user:pass")
        assert userinfo.user == "user"
        assert userinfo.password == "pass"

    def test_user_only(self) -> None:
        userinfo = parse_userinfo("john")
        assert userinfo.user == "john"
        assert userinfo.password is None

    def test_empty_password(self) -> None:
        assert parse_userinfo("john:").password == ""

    @pytest.mark.parametrize("data", ["a@b", "a/b", "a b"])
    def test_invalid(self, data: str) -> None:
        with pytest.raises(InvalidComponent):
            parse_userinfo(data)


class TestPath:
    def test_segments(self) -> None:
        path = parse_path("/a/b/")
        assert path.is_absolute
        assert path.segments == ["a", "b", ""]

    def test_rootless(self) -> None:
        path = parse_path("a:b/c@d")
        assert not path.is_absolute
        assert path.segments == ["a:b", "c@d"]

    def test_empty(self) -> None:
        path = parse_path("")
        assert path.is_empty
        assert path.segments == []

    def test_case_preserved(self) -> None:
        assert parse_path("/A/%7e").value == "/A/%7e"

    @pytest.mark.parametrize(("data", "bad"), [("/a b", " "), ("/a?b", "?"), ("/a#b", "#"), ("/[x]", "[")])
    def test_reports_first_bad_character(self, data: str, bad: str) -> None:
        with pytest.raises(InvalidComponent) as exc_info:
            parse_path(data)
        assert exc_info.value.byte == ord(bad)
        assert exc_info.value.value == data


class TestQueryAndFragment:
    def test_query_items(self) -> None:
        assert list(parse_query("a=1&b&c=").items()) == [("a", "1"), ("b", None), ("c", "")]

    def test_empty_query_has_no_items(self) -> None:
        assert list(parse_query("").items()) == []

    def test_slash_and_question_mark(self) -> None:
        assert parse_query("/?x").value == "/?x"
        assert parse_fragment("/?x").value == "/?x"

    @pytest.mark.parametrize("data", ["a#b", "a b", "a[b"])
    def test_invalid(self, data: str) -> None:
        with pytest.raises(InvalidComponent):
            parse_query(data)
        with pytest.raises(InvalidComponent):
            parse_fragment(data)


class TestAuthority:
    def test_str(self) -> None:
        authority = Authority(host=parse_host("Example.com"), userinfo=Userinfo("u:p"), port=Port(8080))
        assert str(authority) == "u:p@example.com:8080"

    def test_ipv6_gets_brackets(self) -> None:
        assert str(Authority(host=parse_host("[::1]"), port=Port(80))) == "[::1]:80"
