"""Paths to fields in a request's object tree."""

from __future__ import annotations

from dataclasses import dataclass

from restgen.descriptors import FieldType

PROTO_CONVERTERS: dict[FieldType, str] = {
    FieldType.DOUBLE: "ToFloat64",
    FieldType.FLOAT: "ToFloat32",
    FieldType.INT64: "ToInt64",
    FieldType.UINT64: "ToUint64",
    FieldType.INT32: "ToInt32",
    FieldType.FIXED64: "ToUint64",
    FieldType.FIXED32: "ToUint32",
    FieldType.BOOL: "ToBool",
    FieldType.STRING: "ToString",
    FieldType.BYTES: "ToBytes",
    FieldType.UINT32: "ToUint32",
    FieldType.SINT32: "ToInt32",
    FieldType.SINT64: "ToInt64",
    FieldType.SFIXED32: "ToInt32",
    FieldType.SFIXED64: "ToInt64",
}
"""Name of the converter used for values of each field type taken from a URL."""


@dataclass(frozen=True)
class FieldMetadata:
    """One step of a field path: the field's name, kind and message type name."""

    name: str
    proto_kind: FieldType
    type: str = ""

    def go_type(self) -> str:
        """The type name without protobuf's leading dots."""
        return self.type.lstrip(".")


class FieldPath(list):
    """A path of FieldMetadata to a field, such as ``req.User.Name.Firstname``."""

    def generate(self) -> str:
        """Code that instantiates every intermediate message on the path if it is nil."""
        if not self:
            raise ValueError("empty field path")
        target = "req"
        opening: list[str] = []
        for step in self[:-1]:
            target = f"{target}.{step.name}"
            opening.append(f"if {target} == nil {{\n    {target} = &{step.go_type()}{{}}\n")
        return "".join(opening) + "}" * len(opening)

    def get_path(self) -> str:
        """The dotted path with each name's first letter upper-cased."""
        parts = []
        for step in self:
            if not step.name:
                raise ValueError("field path holds an empty name")
            parts.append("." + step.name[0].upper() + step.name[1:])
        return "".join(parts)

    def converter_name(self) -> str:
        """The converter for the final field's type, or ``""`` if there is none."""
        if not self:
            raise ValueError("empty field path")
        return PROTO_CONVERTERS.get(self[-1].proto_kind, "")