"""nuri.uri
The URI value type: validation, component access, normalization (RFC 3986 section 6)
and reference resolution (section 5.2).
"""

import dataclasses
import logging
import re

from typing import Self

from .charsets import ALWAYS_ILLEGAL, PATH_ALLOWED, QUERY_ALLOWED
from .components import (
    Authority,
    Fragment,
    Path,
    Port,
    Query,
    Scheme,
    Userinfo,
    parse_fragment,
    parse_path,
    parse_port,
    parse_query,
    parse_scheme,
    parse_userinfo,
)
from .errors import ConversionFailed, InvalidComponent, InvalidUri, UriError
from .host import Host, HostKind, parse_host
from .paths import merge_paths, remove_dot_segments
from .percent import normalize_percent_encoding, percent_encode

_log = logging.getLogger(__name__)

# Ports dropped by URI.normalized() when they match the scheme.
DEFAULT_PORTS: dict[str, int] = {
    "http": 80,
    "https": 443,
    "ftp": 21,
}

SECURE_SCHEMES: frozenset[str] = frozenset({"https", "wss", "ftps"})

HTTP_SCHEMES: frozenset[str] = frozenset({"http", "https"})

# The regular expression from RFC 3986 Appendix B, with named groups.
# It splits any string; the component parsers decide whether the pieces are valid.
_URI_REFERENCE_PAT: re.Pattern[str] = re.compile(
    r"\A(?:(?P<scheme>[^:/?#]+):)?(?://(?P<authority>[^/?#]*))?(?P<path>[^?#]*)(?:\?(?P<query>[^#]*))?(?:#(?P<fragment>.*))?\Z",
    re.DOTALL,
)

# authority = [ userinfo "@" ] host [ ":" port ]
# An IP-literal may itself contain ":", so a leading "[" extends the host to the next "]".
_AUTHORITY_PAT: re.Pattern[str] = re.compile(
    r"\A(?:(?P<userinfo>[^@]*)@)?(?P<host>\[[^\]]*\]?|[^:]*)(?::(?P<port>.*))?\Z",
    re.DOTALL,
)

# Characters a query item's name or value may carry unencoded.
_QUERY_ITEM_ALLOWED: frozenset[str] = QUERY_ALLOWED - frozenset("&=+")

_Parts = tuple[Scheme | None, Authority | None, Path, Query | None, Fragment | None]


def _check_characters(value: str) -> None:
    if not value.isascii():
        raise InvalidUri(value, "non-ASCII character")
    for c in value:
        if c == " ":
            raise InvalidUri(value, "unencoded space")
        if ord(c) < 0x20 or ord(c) == 0x7F:
            raise InvalidUri(value, f"control character 0x{ord(c):02X}")
        if c in ALWAYS_ILLEGAL:
            raise InvalidUri(value, f"illegal character {c!r}")


def _parse_authority(data: str) -> Authority:
    m: re.Match[str] | None = _AUTHORITY_PAT.match(data)
    if m is None:
        raise InvalidComponent("authority", data, "unexpected characters after host")

    userinfo: Userinfo | None = None
    if m["userinfo"] is not None:
        userinfo = parse_userinfo(m["userinfo"])

    host: Host
    if len(m["host"]) == 0:
        # reg-name may be empty, e.g. file:///etc/hosts
        host = Host(HostKind.REGISTERED_NAME, "")
    else:
        host = parse_host(m["host"])

    port: Port | None = None
    if m["port"] is not None:
        port = parse_port(m["port"])

    return Authority(host=host, userinfo=userinfo, port=port)


def _split(value: str) -> _Parts:
    """Splits a URI-reference and parses each component, raising on the first invalid one."""
    m: re.Match[str] | None = _URI_REFERENCE_PAT.match(value)
    if m is None:
        raise InvalidUri(value, "parse failed")

    scheme: Scheme | None = None
    if m["scheme"] is not None:
        scheme = parse_scheme(m["scheme"])

    authority: Authority | None = None
    if m["authority"] is not None:
        authority = _parse_authority(m["authority"])

    path: Path = parse_path(m["path"])
    if authority is None and path.value.startswith("//"):
        raise InvalidComponent("path", path.value, "path cannot begin with '//' without an authority")
    if scheme is None and authority is None and ":" in path.value.partition("/")[0]:
        # path-noscheme: otherwise the first segment would read as a scheme
        raise InvalidComponent("path", path.value, "first segment of a relative path cannot contain ':'")

    query: Query | None = None
    if m["query"] is not None:
        query = parse_query(m["query"])

    fragment: Fragment | None = None
    if m["fragment"] is not None:
        fragment = parse_fragment(m["fragment"])

    return scheme, authority, path, query, fragment


def _serialize(
    scheme: Scheme | None,
    authority: Authority | str | None,
    path: str,
    query: Query | str | None,
    fragment: Fragment | str | None,
) -> str:
    """Direct translation of RFC 3986 section 5.3"""
    result: str = ""
    if scheme is not None:
        result += f"{scheme}:"
    if authority is not None:
        result += f"//{authority}"
    result += path
    if query is not None:
        result += f"?{query}"
    if fragment is not None:
        result += f"#{fragment}"
    return result


@dataclasses.dataclass(frozen=True, order=True, repr=False)
class URI:
    """A URI-reference (RFC 3986 section 4.1): an absolute URI or a relative reference.

    Construct with URI(value), which validates, or URI.from_components(...).
    Components are parsed once, at construction. Equality, hashing and ordering
    use the string alone, so URI("HTTP://A") != URI("http://a") until both are normalized().
    """

    value: str
    checked: dataclasses.InitVar[bool] = True

    scheme: Scheme | None = dataclasses.field(init=False, compare=False)
    authority: Authority | None = dataclasses.field(init=False, compare=False)
    path: Path | None = dataclasses.field(init=False, compare=False)
    query: Query | None = dataclasses.field(init=False, compare=False)
    fragment: Fragment | None = dataclasses.field(init=False, compare=False)

    def __post_init__(self: Self, checked: bool) -> None:
        parts: _Parts | tuple[None, None, None, None, None]
        if checked:
            _check_characters(self.value)
            parts = _split(self.value)
        else:
            try:
                parts = _split(self.value)
            except UriError as e:
                _log.debug("no component structure for %r: %s", self.value, e)
                parts = (None, None, None, None, None)
        for name, component in zip(("scheme", "authority", "path", "query", "fragment"), parts):
            object.__setattr__(self, name, component)

    @classmethod
    def parse(cls: type[Self], value: str) -> Self:
        return cls(value)

    @classmethod
    def unchecked(cls: type[Self], value: str) -> Self:
        """Builds a URI without validating value.
        Only for strings that are valid by construction, such as the output of resolve().
        """
        return cls(value, checked=False)

    @classmethod
    def from_components(
        cls: type[Self],
        scheme: Scheme,
        authority: Authority,
        path: Path,
        query: Query | None = None,
        fragment: Fragment | None = None,
    ) -> Self:
        """Serializes already-validated components as scheme "://" authority path ["?" query] ["#" fragment].
        A rootless path gets a leading "/", since a path after an authority must be empty or absolute.
        """
        path_value: str = path.value
        if len(path_value) > 0 and not path.is_absolute:
            path_value = f"/{path_value}"
        return cls.unchecked(_serialize(scheme, authority, path_value, query, fragment))

    @property
    def userinfo(self: Self) -> Userinfo | None:
        return self.authority.userinfo if self.authority is not None else None

    @property
    def host(self: Self) -> Host | None:
        return self.authority.host if self.authority is not None else None

    @property
    def port(self: Self) -> Port | None:
        return self.authority.port if self.authority is not None else None

    @property
    def is_relative(self: Self) -> bool:
        return self.scheme is None

    @property
    def is_secure(self: Self) -> bool:
        return self.scheme is not None and self.scheme.value in SECURE_SCHEMES

    @property
    def is_http(self: Self) -> bool:
        return self.scheme is not None and self.scheme.value in HTTP_SCHEMES

    @property
    def base(self: Self) -> Self | None:
        """scheme://host[:port], without userinfo, path, query or fragment."""
        if self.scheme is None or self.authority is None:
            return None
        authority: Authority = Authority(host=self.authority.host, port=self.authority.port)
        return self.__class__.unchecked(_serialize(self.scheme, authority, "", None, None))

    @property
    def path_and_query(self: Self) -> str | None:
        if self.path is None:
            return None
        if self.query is not None:
            return f"{self.path}?{self.query}"
        return self.path.value

    def normalized(self: Self) -> Self:
        """Case, port and path normalization (RFC 3986 sections 6.2.2.1, 6.2.2.3 and 6.2.3).
        Scheme and host are already lowercase once parsed; the default port is dropped
        and dot segments are removed. Everything else is kept as it is.
        """
        if self.path is None:
            return self

        authority: Authority | None = self.authority
        if authority is not None and authority.port is not None and self.scheme is not None:
            if DEFAULT_PORTS.get(self.scheme.value) == authority.port:
                authority = dataclasses.replace(authority, port=None)

        path: str = self.path.value
        if len(path) > 0 and (self.scheme is not None or self.path.is_absolute):
            path = remove_dot_segments(path)
            if authority is None and path.startswith("//"):
                path = f"/.{path}"

        return self.__class__.unchecked(_serialize(self.scheme, authority, path, self.query, self.fragment))

    def normalize_percent_encoding(self: Self) -> Self:
        """Percent-encoding normalization (RFC 3986 section 6.2.2.2) of the whole string."""
        return self.__class__.unchecked(normalize_percent_encoding(self.value))

    def resolve(self: Self, reference: "str | URI") -> Self:
        """Implementation of the "Transform References" algorithm from RFC 3986 section 5.2.2"""
        if self.path is None:
            raise InvalidUri(self.value, "base has no component structure")
        r: URI = reference if isinstance(reference, URI) else URI(reference)
        if r.path is None:
            raise InvalidUri(r.value, "reference has no component structure")

        scheme: Scheme | None
        authority: Authority | None
        path: str
        query: Query | None

        # This follows the pseudocode in the RFC line by line.
        if r.scheme is not None:
            scheme = r.scheme
            authority = r.authority
            path = remove_dot_segments(r.path.value)
            query = r.query
        else:
            if r.authority is not None:
                authority = r.authority
                path = remove_dot_segments(r.path.value)
                query = r.query
            else:
                if r.path.is_empty:
                    path = self.path.value
                    if r.query is not None:
                        query = r.query
                    else:
                        query = self.query
                else:
                    if r.path.is_absolute:
                        path = remove_dot_segments(r.path.value)
                    else:
                        path = merge_paths(self.path.value, r.path.value, self.authority is not None)
                        path = remove_dot_segments(path)
                    query = r.query
                authority = self.authority
            scheme = self.scheme

        if authority is None and path.startswith("//"):
            path = f"/.{path}"
        return self.__class__.unchecked(_serialize(scheme, authority, path, query, r.fragment))

    def _rebuild(self: Self, what: str, **changes: str | Fragment | None) -> Self:
        if self.path is None:
            raise InvalidUri(self.value, "no component structure")
        parts: dict[str, object] = {
            "scheme": self.scheme,
            "authority": self.authority,
            "path": self.path.value,
            "query": self.query,
            "fragment": self.fragment,
        }
        parts.update(changes)
        candidate: str = _serialize(**parts)  # type: ignore[arg-type]
        try:
            rebuilt: Self = self.__class__(candidate)
        except UriError as e:
            raise ConversionFailed(f"could not {what}: {e}") from e
        if rebuilt.authority != self.authority:
            raise ConversionFailed(f"could not {what}: result would change the authority")
        return rebuilt

    def appending_path_component(self: Self, component: str) -> Self:
        """Appends component to the path, adding a "/" separator when the path does not end with one."""
        current: str = self.path.value if self.path is not None else ""
        separator: str = "" if current.endswith("/") else "/"
        return self._rebuild(
            "append path component", path=current + separator + percent_encode(component, PATH_ALLOWED)
        )

    def appending_query_item(self: Self, name: str, value: str | None = None) -> Self:
        item: str = percent_encode(name, _QUERY_ITEM_ALLOWED)
        if value is not None:
            item += f"={percent_encode(value, _QUERY_ITEM_ALLOWED)}"
        query: str = item
        if self.query is not None and len(self.query.value) > 0:
            query = f"{self.query}&{item}"
        return self._rebuild("append query item", query=query)

    def setting_fragment(self: Self, fragment: Fragment | None) -> Self:
        return self._rebuild("set fragment", fragment=fragment)

    def __str__(self: Self) -> str:
        return self.value

    def __repr__(self: Self) -> str:
        fields: list[str] = [repr(self.value)]
        for name in ("scheme", "userinfo", "host", "port", "path", "query", "fragment"):
            component: object = getattr(self, name)
            if component is None or (name == "path" and len(str(component)) == 0):
                continue
            fields.append(f"{name}={str(component)!r}")
        return f"{self.__class__.__name__}({', '.join(fields)})"


def is_valid_uri(data: str) -> bool:
    """True for any RFC 3986 URI-reference, including the empty same-document reference."""
    try:
        URI(data)
    except UriError as e:
        _log.debug("rejected %r: %s", data, e)
        return False
    return True


def is_valid_http(data: "str | URI") -> bool:
    """True for a valid URI whose scheme is http or https."""
    if isinstance(data, URI):
        return data.is_http
    if not is_valid_uri(data):
        return False
    return URI(data).is_http
