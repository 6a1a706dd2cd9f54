"""Query string mapping definitions.

A definition looks like ``key1=<field1:type1>&key2=<field2:type2>``; the
angle brackets may be omitted. The value of ``key1`` is mapped to
``field1`` and is expected to have ``type1``. Supported types are
``string``, ``int``, ``float``, ``bool`` and ``bytes`` (URL-safe Base64).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from restgen.fieldmeta import FieldPath

SUPPORTED_TYPES: tuple[str, ...] = ("string", "int", "float", "bool", "bytes")

_HEX = "0123456789abcdefABCDEF"


class QueryStringError(ValueError):
    """Raised for a malformed query string definition."""


@dataclass
class QSParameter:
    """Maps one query string key to a field of the request."""

    key: str
    field: str
    type: str = ""
    metadata: Optional["FieldPath"] = None

    @classmethod
    def _from_key_values(cls, key: str, values: list[str]) -> "QSParameter":
        if len(values) != 1:
            raise QueryStringError(f"1 value expected, got {len(values)} (key: {key})")
        spec = values[0].strip("<>")
        parts = spec.split(":")
        if len(parts) > 2:
            raise QueryStringError(
                f"invalid format of the parameter definition, at most one : allowed: {spec}"
            )
        param = cls(key=key, field=parts[0])
        if len(parts) == 2:
            if parts[1] not in SUPPORTED_TYPES:
                raise QueryStringError(
                    f"{parts[1]} is not in the supported types {list(SUPPORTED_TYPES)}"
                )
            param.type = parts[1]
        return param


def _unescape(s: str) -> str:
    out = bytearray()
    i = 0
    while i < len(s):
        c = s[i]
        if c == "%":
            code = s[i + 1 : i + 3]
            if len(code) < 2 or any(ch not in _HEX for ch in code):
                raise QueryStringError(f"invalid URL escape {s[i:i + 3]!r}")
            out.append(int(code, 16))
            i += 3
            continue
        out.extend(b" " if c == "+" else c.encode("utf-8"))
        i += 1
    return out.decode("utf-8", "surrogateescape")


def _parse_query(definition: str) -> dict[str, list[str]]:
    values: dict[str, list[str]] = {}
    for pair in definition.split("&"):
        if ";" in pair:
            raise QueryStringError("invalid semicolon separator in query")
        if not pair:
            continue
        key, _, value = pair.partition("=")
        values.setdefault(_unescape(key), []).append(_unescape(value))
    return values


class QueryStringParams(list):
    """The parameters of a query string definition, ordered by key."""

    @classmethod
    def parse(cls, definition: str) -> "QueryStringParams":
        """Parse *definition*; raise QueryStringError if it is malformed."""
        values = _parse_query(definition)
        return cls(QSParameter._from_key_values(key, values[key]) for key in sorted(values))

    def get_param_for_key(self, key: str) -> Optional[QSParameter]:
        """Return the parameter for *key*, or None."""
        return next((p for p in self if p.key == key), None)