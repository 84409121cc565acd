"""nuri.components
Typed URI components (RFC 3986 section 3) and the parsers that build them.

Every component validates itself on construction, so holding one means holding a valid one.
The parse_* functions additionally accept ASCII bytes.
"""

import dataclasses

from typing import Iterator, Self

from .charsets import ALPHA, DIGIT, PATH_ALLOWED, QUERY_ALLOWED, FRAGMENT_ALLOWED, SCHEME_ALLOWED, USERINFO_ALLOWED
from .errors import InvalidComponent
from .host import Host


def _as_text(component: str, data: str | bytes) -> str:
    if isinstance(data, str):
        return data
    try:
        return data.decode("ascii")
    except UnicodeDecodeError as e:
        raise InvalidComponent(component, repr(data), "non-ASCII byte", data[e.start]) from e


def _check_chars(component: str, value: str, allowed: frozenset[str], percent: bool = True) -> None:
    """Raises on the first character of value outside allowed."""
    for c in value:
        if c in allowed or (percent and c == "%"):
            continue
        raise InvalidComponent(component, value, f"disallowed character {c!r}", ord(c))


@dataclasses.dataclass(frozen=True)
class Scheme:
    """scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." ), stored lowercased."""

    value: str

    def __post_init__(self: Self) -> None:
        if len(self.value) == 0:
            raise InvalidComponent("scheme", self.value, "scheme is empty")
        if self.value[0] not in ALPHA:
            raise InvalidComponent("scheme", self.value, "scheme must start with a letter", ord(self.value[0]))
        _check_chars("scheme", self.value, SCHEME_ALLOWED, percent=False)
        # RFC 3986 section 6.2.2.1
        object.__setattr__(self, "value", self.value.lower())

    def __str__(self: Self) -> str:
        return self.value


class Port(int):
    """port = *DIGIT, limited to an unsigned 16-bit value."""

    def __new__(cls: type[Self], value: int) -> Self:
        if not 0 <= value <= 0xFFFF:
            raise InvalidComponent("port", str(value), "port out of range 0-65535")
        return super().__new__(cls, value)

    @property
    def value(self: Self) -> int:
        return int(self)

    def __str__(self: Self) -> str:
        return str(int(self))

    def __repr__(self: Self) -> str:
        return f"Port({int(self)})"


@dataclasses.dataclass(frozen=True)
class Userinfo:
    """userinfo = *( unreserved / pct-encoded / sub-delims / ":" )"""

    value: str

    def __post_init__(self: Self) -> None:
        _check_chars("userinfo", self.value, USERINFO_ALLOWED)

    @property
    def user(self: Self) -> str:
        return self.value.partition(":")[0]

    @property
    def password(self: Self) -> str | None:
        _, colon, password = self.value.partition(":")
        if len(colon) == 0:
            return None
        return password

    def __str__(self: Self) -> str:
        return self.value


@dataclasses.dataclass(frozen=True)
class Path:
    """A path of "/"-separated segments of pchar. Case-sensitive; may be empty."""

    value: str

    def __post_init__(self: Self) -> None:
        _check_chars("path", self.value, PATH_ALLOWED)

    @property
    def is_empty(self: Self) -> bool:
        return len(self.value) == 0

    @property
    def is_absolute(self: Self) -> bool:
        return self.value.startswith("/")

    @property
    def segments(self: Self) -> list[str]:
        if self.is_empty:
            return []
        value: str = self.value[1:] if self.is_absolute else self.value
        return value.split("/")

    def __str__(self: Self) -> str:
        return self.value


@dataclasses.dataclass(frozen=True)
class Query:
    """query = *( pchar / "/" / "?" )"""

    value: str

    def __post_init__(self: Self) -> None:
        _check_chars("query", self.value, QUERY_ALLOWED)

    def items(self: Self) -> Iterator[tuple[str, str | None]]:
        """Yields (name, value) pairs split on "&" and "=". Nothing is decoded."""
        if len(self.value) == 0:
            return
        for item in self.value.split("&"):
            name, eq, value = item.partition("=")
            yield name, (value if eq else None)

    def __str__(self: Self) -> str:
        return self.value


@dataclasses.dataclass(frozen=True)
class Fragment:
    """fragment = *( pchar / "/" / "?" )"""

    value: str

    def __post_init__(self: Self) -> None:
        _check_chars("fragment", self.value, FRAGMENT_ALLOWED)

    def __str__(self: Self) -> str:
        return self.value


@dataclasses.dataclass(frozen=True)
class Authority:
    """authority = [ userinfo "@" ] host [ ":" port ]"""

    host: Host
    userinfo: Userinfo | None = None
    port: Port | None = None

    def __str__(self: Self) -> str:
        result: str = ""
        if self.userinfo is not None:
            result += f"{self.userinfo.value}@"
        result += self.host.raw_value
        if self.port is not None:
            result += f":{int(self.port)}"
        return result


def parse_scheme(data: str | bytes) -> Scheme:
    return Scheme(_as_text("scheme", data))


def parse_port(data: str | bytes) -> Port | None:
    """Parses a port. The empty string means "no port", which is not the same as port 0."""
    text: str = _as_text("port", data)
    if len(text) == 0:
        return None
    _check_chars("port", text, DIGIT, percent=False)
    return Port(int(text, base=10))


def parse_userinfo(data: str | bytes) -> Userinfo:
    return Userinfo(_as_text("userinfo", data))


def parse_path(data: str | bytes) -> Path:
    return Path(_as_text("path", data))


def parse_query(data: str | bytes) -> Query:
    return Query(_as_text("query", data))


def parse_fragment(data: str | bytes) -> Fragment:
    return Fragment(_as_text("fragment", data))
