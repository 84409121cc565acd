"""nuri.host
The host subcomponent of an authority (RFC 3986 section 3.2.2).

    host       = IP-literal / IPv4address / reg-name
    IP-literal = "[" ( IPv6address / IPvFuture ) "]"

A Host is a tagged value rather than a class hierarchy: the kind is decided once,
by parse_host, from the first character of the input.
"""

import dataclasses
import enum
import re

from typing import Self

from .charsets import DIGIT, HEXDIG, HOST_ALLOWED
from .errors import InvalidComponent, InvalidHost

_PCT_ENCODED_PAT = re.compile(r"%[0-9a-f]{2}")


class HostKind(enum.Enum):
    IPV4 = "ipv4"
    IPV6 = "ipv6"
    REGISTERED_NAME = "registered-name"


def is_valid_ipv4(data: str) -> bool:
    """Strict dotted-decimal check: exactly four octets, each 0-255, no redundant leading zeros.
    e.g. is_valid_ipv4("192.168.1.1") == True, is_valid_ipv4("192.168.001.1") == False
    """
    octet_count: int = 0
    current_octet: int = 0
    digit_count: int = 0
    for c in data:
        if c == ".":
            if not _octet_ok(current_octet, digit_count):
                return False
            octet_count += 1
            current_octet = 0
            digit_count = 0
        elif c in DIGIT:
            current_octet = current_octet * 10 + int(c)
            digit_count += 1
            if current_octet > 255 or digit_count > 3:
                return False
        else:
            return False
    if not _octet_ok(current_octet, digit_count):
        return False
    return octet_count + 1 == 4


def _octet_ok(value: int, digit_count: int) -> bool:
    # dec-octet = DIGIT / %x31-39 DIGIT / "1" 2DIGIT / "2" %x30-34 DIGIT / "25" %x30-35
    if digit_count == 0 or value > 255:
        return False
    if digit_count > 1 and value < 10:
        return False
    if digit_count > 2 and value < 100:
        return False
    return True


def _check_ipv6(address: str) -> None:
    # Only the alphabet and the presence of a colon are checked. Group counts and "::"
    # placement are not, so every valid IPv6address (and some invalid ones) get through.
    for c in address:
        if c not in HEXDIG and c != ":":
            raise InvalidHost(address, "invalid character in IPv6 address", ord(c))
    if ":" not in address:
        raise InvalidHost(address, "IPv6 address must contain colons")


def _check_registered_name(name: str) -> None:
    for c in name:
        if c not in HOST_ALLOWED and c != "%":
            raise InvalidHost(
                name, "only unreserved, sub-delims, and percent-encoded allowed in registered name", ord(c)
            )
    if name and all(c in DIGIT or c == "." for c in name) and "." in name:
        raise InvalidHost(name, "malformed IPv4 address")


@dataclasses.dataclass(frozen=True)
class Host:
    """A parsed host. IPv6 addresses are stored without their brackets; both they and registered names are lowercased."""

    kind: HostKind
    address: str

    def __post_init__(self: Self) -> None:
        if self.kind is HostKind.IPV4:
            if not is_valid_ipv4(self.address):
                raise InvalidHost(self.address, "malformed IPv4 address")
        else:
            if self.kind is HostKind.IPV6:
                _check_ipv6(self.address)
            else:
                _check_registered_name(self.address)
            # RFC 3986 section 6.2.2.1: lowercase the name, uppercase the hex of its triples
            lowered: str = _PCT_ENCODED_PAT.sub(lambda m: m.group().upper(), self.address.lower())
            object.__setattr__(self, "address", lowered)

    @classmethod
    def ipv4(cls: type[Self], address: str) -> Self:
        return cls(HostKind.IPV4, address)

    @classmethod
    def ipv6(cls: type[Self], address: str) -> Self:
        return cls(HostKind.IPV6, address)

    @classmethod
    def registered_name(cls: type[Self], name: str) -> Self:
        return cls(HostKind.REGISTERED_NAME, name)

    @property
    def raw_value(self: Self) -> str:
        """The host as it appears in an authority; IPv6 addresses get their brackets back."""
        if self.kind is HostKind.IPV6:
            return f"[{self.address}]"
        return self.address

    @property
    def is_loopback(self: Self) -> bool:
        if self.kind is HostKind.IPV4:
            return self.address.startswith("127.")
        if self.kind is HostKind.IPV6:
            return self.address in ("::1", "0:0:0:0:0:0:0:1")
        return self.address == "localhost"

    def __str__(self: Self) -> str:
        return self.raw_value


def parse_host(data: str | bytes) -> Host:
    """Parses a host, choosing IP-literal, IPv4address or reg-name by its first character."""
    if isinstance(data, bytes):
        try:
            data = data.decode("ascii")
        except UnicodeDecodeError as e:
            raise InvalidComponent("host", repr(data), "non-ASCII byte", data[e.start]) from e
    if len(data) == 0:
        raise InvalidHost(data, "host is empty")

    if data.startswith("["):
        if not data.endswith("]") or len(data) < 2:
            raise InvalidHost(data, "missing closing bracket")
        return Host(HostKind.IPV6, data[1:-1])

    if is_valid_ipv4(data):
        return Host(HostKind.IPV4, data)

    return Host(HostKind.REGISTERED_NAME, data)
