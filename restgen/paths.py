"""URL path templates and their parameters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from restgen.naming import sanitize

if TYPE_CHECKING:
    from restgen.fieldmeta import FieldPath


def parse_path(p: str) -> list[str]:
    """Return the parameter names of a router path (``/City/:postal`` -> ``["postal"]``)."""
    return [part[1:] for part in p.split("/") if part.startswith(":")]


def harmonize_path_vars(p: str) -> str:
    """Rename every path parameter to ``:id`` so routes register without conflicts."""
    return "/".join(":id" if part.startswith(":") else part for part in p.split("/"))


@dataclass
class PathParam:
    """A URL path parameter and the request field it maps to."""

    field_raw: str
    field_sanitized: str
    n: int = 0
    metadata: Optional["FieldPath"] = None

    @classmethod
    def from_field(cls, field: str) -> "PathParam":
        """Build a parameter for the raw field name *field*."""
        return cls(field_raw=field, field_sanitized=sanitize(field))