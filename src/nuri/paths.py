"""nuri.paths
Path algorithms used by normalization and reference resolution (RFC 3986 section 5.2).
"""


def remove_dot_segments(path: str) -> str:
    """Implementation of the "remove_dot_segments" routine from RFC 3986 section 5.2.4
    e.g. remove_dot_segments("/a/b/c/./../../g") == "/a/g"
    """
    result: str = ""
    # The order of these checks matters; several of the prefixes overlap.
    while len(path) > 0:
        if path.startswith("../") or path.startswith("./"):
            _, _, path = path.partition("/")
        elif path.startswith("/./") or path == "/.":
            path = f"/{path[len('/./') :]}"
        elif path.startswith("/../") or path == "/..":
            path = f"/{path[len('/../') :]}"
            result, _, _ = result.rpartition("/")
        elif path in (".", ".."):
            path = ""
        else:
            slash: str = ""
            if path.startswith("/"):
                slash, path = "/", path[1:]
            first_seg, sep, rest = path.partition("/")
            path = sep + rest
            result += slash + first_seg
    return result


def merge_paths(base_path: str, reference_path: str, base_has_authority: bool) -> str:
    """Implementation of the "merge" routine defined in RFC 3986 section 5.2.3"""
    if base_has_authority and len(base_path) == 0:
        return f"/{reference_path}"
    dirname, slash, _ = base_path.rpartition("/")
    return dirname + slash + reference_path
