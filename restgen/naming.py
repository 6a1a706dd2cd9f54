"""Identifier conversion for generated code."""

from __future__ import annotations

RESERVED_NAMES: tuple[str, ...] = ("Reset", "String", "ProtoMessage", "Descriptor")
"""Names protobuf generates methods for, so they cannot be used as field names."""


def _is_lower(c: str) -> bool:
    return "a" <= c <= "z"


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def camel_case(s: str) -> str:
    """Convert a snake_cased identifier to CamelCase (``hello_world`` -> ``HelloWorld``).

    A leading underscore becomes ``X``; underscores not followed by a lower
    case letter are kept.
    """
    if not s:
        return ""

    out: list[str] = []
    i = 0
    n = len(s)
    if s[0] == "_":
        out.append("X")
        i = 1

    while i < n:
        c = s[i]
        if c == "_" and i + 1 < n and _is_lower(s[i + 1]):
            i += 1
            continue
        if _is_digit(c):
            out.append(c)
            i += 1
            continue
        if _is_lower(c):
            c = c.upper()
        out.append(c)
        while i + 1 < n and _is_lower(s[i + 1]):
            i += 1
            out.append(s[i])
        i += 1

    return "".join(out)


def sanitize(s: str) -> str:
    """CamelCase *s* and append ``_`` if the result is a reserved name."""
    name = camel_case(s)
    if name in RESERVED_NAMES:
        return name + "_"
    return name