__version__ = "0.1"

from .charsets import ALPHA, DIGIT, FRAGMENT_ALLOWED, GEN_DELIMS, HEXDIG, HOST_ALLOWED, PATH_ALLOWED, PATH_SEGMENT_ALLOWED, QUERY_ALLOWED, RESERVED, SCHEME_ALLOWED, SUB_DELIMS, UNRESERVED, USERINFO_ALLOWED, is_gen_delim, is_hexdig, is_reserved, is_sub_delim, is_unreserved
from .components import Authority, Fragment, Path, Port, Query, Scheme, Userinfo, parse_fragment, parse_path, parse_port, parse_query, parse_scheme, parse_userinfo
from .errors import ConversionFailed, InvalidComponent, InvalidHost, InvalidUri, UriError
from .host import Host, HostKind, is_valid_ipv4, parse_host
from .paths import merge_paths, remove_dot_segments
from .percent import normalize_percent_encoding, percent_decode, percent_encode
from .serialization import URIEncoder, dumps, loads_uri
from .uri import DEFAULT_PORTS, HTTP_SCHEMES, SECURE_SCHEMES, URI, is_valid_http, is_valid_uri
