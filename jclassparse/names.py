"""Checks for the name forms allowed in class files."""

_UNQUALIFIED_FORBIDDEN = frozenset(".;[/")
_METHOD_FORBIDDEN = frozenset(".;[/<>")


def is_unqualified_name(name: str) -> bool:
    """True if ``name`` is a non-empty unqualified name."""
    return bool(name) and not any(c in _UNQUALIFIED_FORBIDDEN for c in name)


def is_binary_name(name: str) -> bool:
    """True if ``name`` is a '/'-separated sequence of unqualified names."""
    return all(is_unqualified_name(segment) for segment in name.split("/"))


def is_unqualified_method_name(name: str, allow_init: bool, allow_clinit: bool) -> bool:
    """True if ``name`` is a valid method name.

    The special names ``<init>`` and ``<clinit>`` are accepted only when
    allowed by the corresponding flag.
    """
    if not name:
        return False
    if name[0] == "<":
        return (allow_init and name == "<init>") or (allow_clinit and name == "<clinit>")
    return not any(c in _METHOD_FORBIDDEN for c in name)


def is_module_name(name: str) -> bool:
    """True if ``name`` is a valid module name."""
    chars = iter(name)
    for c in chars:
        if c <= "\x1f":
            return False
        if c == "\\":
            escaped = next(chars, None)
            if escaped not in ("\\", ":", "@"):
                return False
        elif c in ":@":
            return False
    return True