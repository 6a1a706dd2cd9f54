"""Fields, enums, messages and files of a protobuf description, prepared for code generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from restgen.descriptors import (
    EnumDescriptor,
    FieldDescriptor,
    FieldType,
    FileDescriptor,
    Label,
    MessageDescriptor,
    QueryMap,
)
from restgen.fieldmeta import FieldMetadata, FieldPath

if TYPE_CHECKING:
    from restgen.registry import Registry

OPTION_DART_PACKAGE = "dart_package"


class RegistryError(Exception):
    """Raised when the protobuf description cannot be used for code generation."""


@dataclass(eq=False)
class Field:
    """A field of a message, with a reference back to its message and registry."""

    descriptor: FieldDescriptor
    message: Optional["Message"] = field(default=None, repr=False)
    registry: Optional["Registry"] = field(default=None, repr=False)
    is_complex: bool = False
    name: str = field(init=False)

    def __post_init__(self) -> None:
        self.name = self.descriptor.name

    def is_repeated(self) -> bool:
        """True if the field is repeated."""
        return self.descriptor.label == Label.REPEATED

    def is_bytes(self) -> bool:
        """True if the field holds bytes."""
        return self.descriptor.type == FieldType.BYTES

    def is_message(self) -> bool:
        """True if the field holds a message."""
        return self.descriptor.type == FieldType.MESSAGE

    def is_intermediate_map(self) -> bool:
        """True if the field's type is the entry type protobuf makes for a map."""
        return self.descriptor.type_name.endswith("Entry")

    def is_enum(self) -> bool:
        """True if the field holds an enum value."""
        return self.descriptor.type == FieldType.ENUM


@dataclass(eq=False)
class EnumValue:
    """A value of an enum."""

    descriptor: Any
    enum: Optional["Enum"] = field(default=None, repr=False)
    registry: Optional["Registry"] = field(default=None, repr=False)
    name: str = field(init=False)
    number: int = field(init=False)

    def __post_init__(self) -> None:
        self.name = self.descriptor.name
        self.number = self.descriptor.number


@dataclass(eq=False)
class Enum:
    """An enum type; its values are ordered by number and run without gaps from 0."""

    descriptor: EnumDescriptor
    package: str = ""
    index: int = 0
    file: Optional["File"] = field(default=None, repr=False)
    registry: Optional["Registry"] = field(default=None, repr=False)
    filename: str = ""
    comment: str = ""
    values: list[EnumValue] = field(default_factory=list)
    name: str = field(init=False)

    def __post_init__(self) -> None:
        self.name = self.descriptor.name

    def __str__(self) -> str:
        return f".{self.package}.{self.name}"

    @classmethod
    def from_descriptor(cls, descriptor: EnumDescriptor, file: "File", index: int) -> "Enum":
        """Build the enum of *file*; raise RegistryError if a number from 0 up is missing."""
        enum = cls(
            descriptor=descriptor,
            package=file.package,
            index=index,
            file=file,
            registry=file.registry,
        )
        by_number = {v.number: v for v in descriptor.values}
        count = len(by_number)
        for number in range(count):
            value = by_number.get(number)
            if value is None:
                raise RegistryError(
                    f"error on enum {enum.name}: Values from 0..{count} should be present. "
                    f"Value {number} not found"
                )
            enum.values.append(EnumValue(value, enum, file.registry))
        return enum


@dataclass(eq=False)
class Message:
    """A message type with its fields."""

    descriptor: MessageDescriptor
    package: str = ""
    registry: Optional["Registry"] = field(default=None, repr=False)
    file: Optional["File"] = field(default=None, repr=False)
    index: int = 0
    filename: str = ""
    comment: str = ""
    fields: list[Field] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.fields = [Field(f, self, self.registry) for f in self.descriptor.fields]

    def __str__(self) -> str:
        return f".{self.package}.{self.descriptor.name}"

    @classmethod
    def from_descriptor(cls, descriptor: MessageDescriptor, file: "File", index: int) -> "Message":
        """Build the message of *file* at position *index*."""
        return cls(
            descriptor=descriptor,
            package=file.package,
            registry=file.registry,
            file=file,
            index=index,
        )

    def name(self) -> str:
        """The message's unqualified name."""
        return self.descriptor.name

    def has_query_map(self) -> bool:
        """True if the message carries a query map option."""
        return self.descriptor.query_map is not None

    def query_map(self) -> QueryMap:
        """The message's query map; raise RegistryError if it has none."""
        if self.descriptor.query_map is None:
            raise RegistryError("message does not have a querymap")
        return self.descriptor.query_map

    def get_field_type(self, path: str) -> FieldPath:
        """Resolve the dotted *path* below this message to the chain of fields it names.

        Every step but the last must be a message field and the last must not be
        one; otherwise RegistryError is raised.
        """
        head, _, rest = path.partition(".")
        nested = "." in path
        for fd in self.descriptor.fields:
            if fd.name != head:
                continue
            if not nested:
                if fd.type != FieldType.MESSAGE:
                    return FieldPath([FieldMetadata(name=fd.name, proto_kind=fd.type)])
            elif fd.type == FieldType.MESSAGE:
                if not fd.type_name:
                    raise RegistryError(f"message field {fd.name!r} of {self} has no type name")
                sub = self.registry.get_message(fd.type_name) if self.registry is not None else None
                if sub is not None:
                    try:
                        tail = sub.get_field_type(rest)
                    except RegistryError as err:
                        raise RegistryError(f"{head}.{err}") from err
                    step = FieldMetadata(name=fd.name, proto_kind=fd.type, type=fd.type_name)
                    return FieldPath([step, *tail])
        raise RegistryError(f"'{path}' not found in '{self}' or wrong type")


@dataclass(eq=False)
class File:
    """A .proto file with its messages, enums and additional options."""

    descriptor: FileDescriptor
    registry: Optional["Registry"] = field(default=None, repr=False)
    messages: list[Message] = field(default_factory=list, repr=False)
    enums: list[Enum] = field(default_factory=list, repr=False)
    options: dict[str, str] = field(default_factory=dict)
    name: str = field(init=False)
    package: str = field(init=False)

    def __post_init__(self) -> None:
        self.name = self.descriptor.name
        self.package = self.descriptor.package

    @classmethod
    def from_descriptor(cls, descriptor: FileDescriptor, registry: Optional["Registry"]) -> "File":
        """Build the file with all its messages and enums."""
        file = cls(descriptor=descriptor, registry=registry)
        if descriptor.dart_package is not None:
            file.options[OPTION_DART_PACKAGE] = descriptor.dart_package
        file.messages = [
            Message.from_descriptor(m, file, index) for index, m in enumerate(descriptor.messages)
        ]
        file.enums = [
            Enum.from_descriptor(e, file, index) for index, e in enumerate(descriptor.enums)
        ]
        return file