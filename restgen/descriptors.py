"""Plain descriptions of protobuf files, messages, enums and services with their REST options."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, TypeVar

_E = TypeVar("_E", bound=enum.IntEnum)


def _parse_enum(cls: type[_E], value: Any, prefix: str) -> _E:
    if isinstance(value, cls):
        return value
    if isinstance(value, int):
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"unknown {cls.__name__} number {value}") from None
    if isinstance(value, str):
        name = value.upper()
        if name.startswith(prefix):
            name = name[len(prefix) :]
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"unknown {cls.__name__} {value!r}") from None
    raise ValueError(f"cannot interpret {value!r} as {cls.__name__}")


def _require(data: Mapping[str, Any], key: str, what: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"{what} requires {key!r}") from None


class FieldType(enum.IntEnum):
    """Protobuf field types, numbered as on the wire format's descriptor."""

    DOUBLE = 1
    FLOAT = 2
    INT64 = 3
    UINT64 = 4
    INT32 = 5
    FIXED64 = 6
    FIXED32 = 7
    BOOL = 8
    STRING = 9
    GROUP = 10
    MESSAGE = 11
    BYTES = 12
    UINT32 = 13
    ENUM = 14
    SFIXED32 = 15
    SFIXED64 = 16
    SINT32 = 17
    SINT64 = 18

    @classmethod
    def parse(cls, value: Any) -> "FieldType":
        """Accept a member, its number, or a name such as ``string`` or ``TYPE_STRING``."""
        return _parse_enum(cls, value, "TYPE_")


class Label(enum.IntEnum):
    """Protobuf field labels."""

    OPTIONAL = 1
    REQUIRED = 2
    REPEATED = 3

    @classmethod
    def parse(cls, value: Any) -> "Label":
        """Accept a member, its number, or a name such as ``repeated`` or ``LABEL_REPEATED``."""
        return _parse_enum(cls, value, "LABEL_")


@dataclass
class ServiceMap:
    """REST options of a service."""

    version: str = ""
    base_uri: str = ""
    target_package: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ServiceMap":
        return cls(
            version=data.get("version", ""),
            base_uri=data.get("base_uri", ""),
            target_package=data.get("target_package", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "base_uri": self.base_uri,
            "target_package": self.target_package,
        }


@dataclass
class MethodMap:
    """REST options of a method."""

    method: str = ""
    path: str = ""
    query_string: str = ""
    body: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MethodMap":
        return cls(
            method=data.get("method", ""),
            path=data.get("path", ""),
            query_string=data.get("query_string", ""),
            body=data.get("body", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "method": self.method,
            "path": self.path,
            "query_string": self.query_string,
            "body": self.body,
        }


@dataclass
class QueryMap:
    """Query string options of a message."""

    query: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "QueryMap":
        return cls(query=data.get("query", ""))

    def to_dict(self) -> dict[str, Any]:
        return {"query": self.query}


@dataclass
class FieldDescriptor:
    """A field of a message."""

    name: str
    type: FieldType
    number: int = 0
    label: Label = Label.OPTIONAL
    type_name: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FieldDescriptor":
        return cls(
            name=_require(data, "name", "field"),
            type=FieldType.parse(_require(data, "type", "field")),
            number=int(data.get("number", 0)),
            label=Label.parse(data.get("label", Label.OPTIONAL)),
            type_name=data.get("type_name", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type.name.lower(),
            "number": self.number,
            "label": self.label.name.lower(),
            "type_name": self.type_name,
        }


@dataclass
class MessageDescriptor:
    """A message type."""

    name: str
    fields: list[FieldDescriptor] = field(default_factory=list)
    query_map: Optional[QueryMap] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MessageDescriptor":
        qm = data.get("query_map")
        return cls(
            name=_require(data, "name", "message"),
            fields=[FieldDescriptor.from_dict(f) for f in data.get("fields", ())],
            query_map=QueryMap.from_dict(qm) if qm is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "fields": [f.to_dict() for f in self.fields]}
        if self.query_map is not None:
            out["query_map"] = self.query_map.to_dict()
        return out


@dataclass
class EnumValueDescriptor:
    """A value of an enum type."""

    name: str
    number: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EnumValueDescriptor":
        return cls(
            name=_require(data, "name", "enum value"),
            number=int(_require(data, "number", "enum value")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "number": self.number}


@dataclass
class EnumDescriptor:
    """An enum type."""

    name: str
    values: list[EnumValueDescriptor] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EnumDescriptor":
        return cls(
            name=_require(data, "name", "enum"),
            values=[EnumValueDescriptor.from_dict(v) for v in data.get("values", ())],
        )

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "values": [v.to_dict() for v in self.values]}


@dataclass
class MethodDescriptor:
    """An RPC method; input and output types are fully qualified (``.pkg.Name``)."""

    name: str
    input_type: str
    output_type: str
    method_map: Optional[MethodMap] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MethodDescriptor":
        mm = data.get("method_map")
        return cls(
            name=_require(data, "name", "method"),
            input_type=_require(data, "input_type", "method"),
            output_type=_require(data, "output_type", "method"),
            method_map=MethodMap.from_dict(mm) if mm is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "name": self.name,
            "input_type": self.input_type,
            "output_type": self.output_type,
        }
        if self.method_map is not None:
            out["method_map"] = self.method_map.to_dict()
        return out


@dataclass
class ServiceDescriptor:
    """An RPC service."""

    name: str
    methods: list[MethodDescriptor] = field(default_factory=list)
    service_map: Optional[ServiceMap] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ServiceDescriptor":
        sm = data.get("service_map")
        return cls(
            name=_require(data, "name", "service"),
            methods=[MethodDescriptor.from_dict(m) for m in data.get("methods", ())],
            service_map=ServiceMap.from_dict(sm) if sm is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "methods": [m.to_dict() for m in self.methods]}
        if self.service_map is not None:
            out["service_map"] = self.service_map.to_dict()
        return out


@dataclass
class FileDescriptor:
    """A .proto file with its types, services and file options."""

    name: str
    package: str = ""
    messages: list[MessageDescriptor] = field(default_factory=list)
    enums: list[EnumDescriptor] = field(default_factory=list)
    services: list[ServiceDescriptor] = field(default_factory=list)
    go_package: Optional[str] = None
    dart_package: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FileDescriptor":
        return cls(
            name=_require(data, "name", "file"),
            package=data.get("package", ""),
            messages=[MessageDescriptor.from_dict(m) for m in data.get("messages", ())],
            enums=[EnumDescriptor.from_dict(e) for e in data.get("enums", ())],
            services=[ServiceDescriptor.from_dict(s) for s in data.get("services", ())],
            go_package=data.get("go_package"),
            dart_package=data.get("dart_package"),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "name": self.name,
            "package": self.package,
            "messages": [m.to_dict() for m in self.messages],
            "enums": [e.to_dict() for e in self.enums],
            "services": [s.to_dict() for s in self.services],
        }
        if self.go_package is not None:
            out["go_package"] = self.go_package
        if self.dart_package is not None:
            out["dart_package"] = self.dart_package
        return out