"""nuri.errors
Exceptions raised while parsing and transforming URI-references.

All of them derive from ValueError, so callers that only care about
"this string is not a URI" can keep catching ValueError.
"""

from typing import Self


class UriError(ValueError):
    """Base class for every error raised by nuri."""


class InvalidUri(UriError):
    """The whole string fails ASCII, character or structural validation."""

    def __init__(self: Self, value: str, reason: str = "") -> None:
        self.value: str = value
        self.reason: str = reason
        message: str = f"Invalid URI: {value!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)

    def __repr__(self: Self) -> str:
        return f"{self.__class__.__name__}(value={self.value!r}, reason={self.reason!r})"


class InvalidComponent(UriError):
    """A single component violates its grammar."""

    def __init__(self: Self, component: str, value: str, reason: str, byte: int | None = None) -> None:
        self.component: str = component
        self.value: str = value
        self.reason: str = reason
        self.byte: int | None = byte
        message: str = f"Invalid {component} {value!r}: {reason}"
        if byte is not None:
            message += f" (byte 0x{byte:02X})"
        super().__init__(message)

    def __repr__(self: Self) -> str:
        return (
            f"{self.__class__.__name__}(component={self.component!r}, value={self.value!r}, "
            f"reason={self.reason!r}, byte={self.byte!r})"
        )


class InvalidHost(InvalidComponent):
    """Host-specific failures: IP-literal brackets and body, malformed IPv4, bad reg-name characters."""

    def __init__(self: Self, value: str, detail: str, byte: int | None = None) -> None:
        self.detail: str = detail
        super().__init__("host", value, detail, byte)


class ConversionFailed(UriError):
    """A derived transform could not produce a valid URI."""

    def __init__(self: Self, reason: str) -> None:
        self.reason: str = reason
        super().__init__(f"URI conversion failed: {reason}")

    def __repr__(self: Self) -> str:
        return f"{self.__class__.__name__}(reason={self.reason!r})"
