"""nuri.percent
Percent-encoding (RFC 3986 section 2.1) and its normalization (section 6.2.2.2).
"""

import re

from .charsets import HEXDIG, UNRESERVED

# pct-encoded = "%" HEXDIG HEXDIG
_PCT_ENCODED_PAT: re.Pattern[str] = re.compile(r"%[0-9A-Fa-f]{2}")

# One or more pct-encoded triples in a row.
_PCT_RUN_PAT: re.Pattern[str] = re.compile(r"(?:%[0-9A-Fa-f]{2})+")


def percent_encode(data: str | bytes, allowed: frozenset[str] = UNRESERVED) -> str:
    """Returns data with every octet outside allowed written as %HH.
    str input is encoded as UTF-8 first, so a non-ASCII character becomes one triple per octet.
    e.g. percent_encode("a b") == "a%20b"
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    result: list[str] = []
    for byte in data:
        c: str = chr(byte)
        if byte < 0x80 and c in allowed:
            result.append(c)
        else:
            result.append(f"%{byte:02X}")
    return "".join(result)


def percent_decode(data: str) -> str:
    """Replaces runs of %HH triples with the UTF-8 text they encode.
    Decoding is best-effort: a stray "%" or a run that is not valid UTF-8 is left as it is.
    """
    result: list[str] = []
    i: int = 0
    while i < len(data):
        m: re.Match[str] | None = _PCT_RUN_PAT.match(data, i)
        if m is not None:
            run: bytes = bytes.fromhex(m.group().replace("%", ""))
            try:
                result.append(run.decode("utf-8"))
                i = m.end()
                continue
            except UnicodeDecodeError:
                # Emit the "%" literally and retry from the next character;
                # later triples in the run may still decode on their own.
                pass
        result.append(data[i])
        i += 1
    return "".join(result)


def _forms_triple_with(out: list[str]) -> bool:
    """True if appending a hex digit to out would complete a new pct-encoded triple."""
    if len(out) >= 1 and out[-1] == "%":
        return True
    return len(out) >= 2 and out[-2] == "%" and out[-1] in HEXDIG


def normalize_percent_encoding(data: str) -> str:
    """Uppercases the hex digits of every %HH triple, and decodes the triples that encode unreserved characters.
    e.g. normalize_percent_encoding("hello%2dworld%2f") == "hello-world%2F"
    """
    out: list[str] = []
    i: int = 0
    while i < len(data):
        m: re.Match[str] | None = _PCT_ENCODED_PAT.match(data, i)
        if m is None:
            out.append(data[i])
            i += 1
            continue
        triple: str = m.group().upper()
        c: str = chr(int(triple[1:], 16))
        if c in UNRESERVED and not (c in HEXDIG and _forms_triple_with(out)):
            out.append(c)
        else:
            out.extend(triple)
        i = m.end()
    return "".join(out)
