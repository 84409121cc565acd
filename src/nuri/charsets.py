"""nuri.charsets
Character classes from RFC 3986 sections 2 and 3.
Every other module validates against these tables, so they are defined exactly once, here.
"""

# Each of these ABNF rules is from RFC 3986 or 5234.

# ALPHA = %x41-5A / %x61-7A
ALPHA: frozenset[str] = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz")

# DIGIT = %x30-39
DIGIT: frozenset[str] = frozenset("0123456789")

# HEXDIG = DIGIT / "A" / "B" / "C" / "D" / "E" / "F"
# (case-insensitive per RFC 5234)
HEXDIG: frozenset[str] = DIGIT | frozenset("ABCDEFabcdef")

# unreserved = ALPHA / DIGIT / "-" / "." / "_" / "~"
UNRESERVED: frozenset[str] = ALPHA | DIGIT | frozenset("-._~")

# gen-delims = ":" / "/" / "?" / "#" / "[" / "]" / "@"
GEN_DELIMS: frozenset[str] = frozenset(":/?#[]@")

# sub-delims = "!" / "$" / "&" / "'" / "(" / ")" / "*" / "+" / "," / ";" / "="
SUB_DELIMS: frozenset[str] = frozenset("!$&'()*+,;=")

# reserved = gen-delims / sub-delims
RESERVED: frozenset[str] = GEN_DELIMS | SUB_DELIMS

# scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
SCHEME_ALLOWED: frozenset[str] = ALPHA | DIGIT | frozenset("+-.")

# userinfo = *( unreserved / pct-encoded / sub-delims / ":" )
USERINFO_ALLOWED: frozenset[str] = UNRESERVED | SUB_DELIMS | frozenset(":")

# reg-name = *( unreserved / pct-encoded / sub-delims )
HOST_ALLOWED: frozenset[str] = UNRESERVED | SUB_DELIMS

# pchar = unreserved / pct-encoded / sub-delims / ":" / "@"
PATH_SEGMENT_ALLOWED: frozenset[str] = UNRESERVED | SUB_DELIMS | frozenset(":@")

# path = segment *( "/" segment )
PATH_ALLOWED: frozenset[str] = PATH_SEGMENT_ALLOWED | frozenset("/")

# query = *( pchar / "/" / "?" )
QUERY_ALLOWED: frozenset[str] = PATH_SEGMENT_ALLOWED | frozenset("/?")

# fragment = *( pchar / "/" / "?" )
FRAGMENT_ALLOWED: frozenset[str] = QUERY_ALLOWED

# Characters that may never appear literally anywhere in a URI-reference.
ALWAYS_ILLEGAL: frozenset[str] = frozenset('<>{}|\\^`"')


def _as_char(c: str | int) -> str:
    if isinstance(c, int):
        return chr(c)
    return c


def is_unreserved(c: str | int) -> bool:
    return _as_char(c) in UNRESERVED


def is_reserved(c: str | int) -> bool:
    return _as_char(c) in RESERVED


def is_gen_delim(c: str | int) -> bool:
    return _as_char(c) in GEN_DELIMS


def is_sub_delim(c: str | int) -> bool:
    return _as_char(c) in SUB_DELIMS


def is_hexdig(c: str | int) -> bool:
    return _as_char(c) in HEXDIG
