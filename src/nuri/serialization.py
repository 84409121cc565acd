"""nuri.serialization
A URI is persisted as its canonical string and nothing else; these helpers do that for JSON.
"""

import json

from typing import Any, Self

from .components import Authority, Fragment, Path, Port, Query, Scheme, Userinfo
from .host import Host
from .uri import URI


class URIEncoder(json.JSONEncoder):
    def default(self: Self, o: Any) -> Any:
        if isinstance(o, Port):
            return int(o)
        if isinstance(o, (URI, Host, Authority, Scheme, Userinfo, Path, Query, Fragment)):
            return str(o)
        return super().default(o)


def dumps(obj: Any, **kwargs) -> str:
    """json.dumps that writes URI values (and their components) as strings."""
    return json.dumps(obj, cls=URIEncoder, **kwargs)


def loads_uri(text: str) -> URI:
    """Reads a URI back from a JSON string field. The value is validated like any other input."""
    value: Any = json.loads(text)
    if not isinstance(value, str):
        raise TypeError(f"expected a JSON string, got {type(value).__name__}")
    return URI(value)
