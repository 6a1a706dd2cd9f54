import pytest

from restgen.descriptors import (
    EnumDescriptor,
    EnumValueDescriptor,
    FieldDescriptor,
    FieldType,
    FileDescriptor,
    Label,
    MessageDescriptor,
    QueryMap,
)
from restgen.model import Enum, Field, File, Message, RegistryError


class _Registry:
    def __init__(self):
        self.messages = []

    def get_message(self, key):
        return next((m for m in self.messages if str(m) == key), None)


def _nested_file():
    desc = FileDescriptor(
        name="svc.proto",
        package="pkg",
        messages=[
            MessageDescriptor(
                name="Outer",
                fields=[
                    FieldDescriptor("inner", FieldType.MESSAGE, type_name=".pkg.Inner"),
                    FieldDescriptor("id", FieldType.INT64),
                ],
            ),
            MessageDescriptor(
                name="Inner",
                fields=[
                    FieldDescriptor("name", FieldType.STRING),
                    FieldDescriptor("deep", FieldType.MESSAGE, type_name=".pkg.Deep"),
                ],
            ),
            MessageDescriptor(name="Deep", fields=[FieldDescriptor("flag", FieldType.BOOL)]),
        ],
    )
    registry = _Registry()
    file = File.from_descriptor(desc, registry)
    registry.messages.extend(file.messages)
    return file


def test_field_predicates():
    repeated_bytes = Field(FieldDescriptor("data", FieldType.BYTES, label=Label.REPEATED))
    assert repeated_bytes.name == "data"
    assert repeated_bytes.is_repeated()
    assert repeated_bytes.is_bytes()
    assert not repeated_bytes.is_message()
    assert not repeated_bytes.is_enum()

    entry = Field(FieldDescriptor("tags", FieldType.MESSAGE, type_name=".pkg.TagsEntry"))
    assert entry.is_message()
    assert entry.is_intermediate_map()
    assert not entry.is_repeated()

    kind = Field(FieldDescriptor("kind", FieldType.ENUM, type_name=".pkg.Kind"))
    assert kind.is_enum()
    assert not kind.is_intermediate_map()


def test_message_fields_refer_back():
    file = _nested_file()
    outer = file.messages[0]
    assert [f.name for f in outer.fields] == ["inner", "id"]
    assert all(f.message is outer for f in outer.fields)
    assert all(f.registry is file.registry for f in outer.fields)


def test_file_from_descriptor_builds_types():
    desc = FileDescriptor(
        name="a.proto",
        package="pkg",
        messages=[MessageDescriptor(name="A"), MessageDescriptor(name="B")],
        enums=[EnumDescriptor(name="E", values=[EnumValueDescriptor("ZERO", 0)])],
        dart_package="dartpkg",
    )
    file = File.from_descriptor(desc, None)
    assert file.name == "a.proto"
    assert file.package == "pkg"
    assert [m.name() for m in file.messages] == ["A", "B"]
    assert [m.index for m in file.messages] == [0, 1]
    assert all(m.file is file for m in file.messages)
    assert [str(m) for m in file.messages] == [".pkg.A", ".pkg.B"]
    assert str(file.enums[0]) == ".pkg.E"
    assert file.options == {"dart_package": "dartpkg"}


def test_file_without_dart_package_has_no_options():
    file = File.from_descriptor(FileDescriptor(name="b.proto"), None)
    assert file.options == {}
    assert file.messages == []


def test_enum_values_ordered_by_number():
    file = File.from_descriptor(FileDescriptor(name="e.proto", package="pkg"), None)
    desc = EnumDescriptor(
        name="Color",
        values=[
            EnumValueDescriptor("BLUE", 2),
            EnumValueDescriptor("RED", 0),
            EnumValueDescriptor("GREEN", 1),
        ],
    )
    enum = Enum.from_descriptor(desc, file, 3)
    assert [v.name for v in enum.values] == ["RED", "GREEN", "BLUE"]
    assert [v.number for v in enum.values] == [0, 1, 2]
    assert all(v.enum is enum for v in enum.values)
    assert enum.index == 3
    assert str(enum) == ".pkg.Color"


def test_enum_with_gap_is_rejected():
    file = File.from_descriptor(FileDescriptor(name="e.proto", package="pkg"), None)
    desc = EnumDescriptor(
        name="Broken",
        values=[EnumValueDescriptor("ZERO", 0), EnumValueDescriptor("TWO", 2)],
    )
    with pytest.raises(RegistryError, match="Value 1 not found"):
        Enum.from_descriptor(desc, file, 0)


def test_get_field_type_scalar():
    outer = _nested_file().messages[0]
    path = outer.get_field_type("id")
    assert [step.name for step in path] == ["id"]
    assert path[0].proto_kind == FieldType.INT64
    assert path.converter_name() == "ToInt64"


def test_get_field_type_nested():
    outer = _nested_file().messages[0]
    path = outer.get_field_type("inner.deep.flag")
    assert [step.name for step in path] == ["inner", "deep", "flag"]
    assert [step.proto_kind for step in path] == [
        FieldType.MESSAGE,
        FieldType.MESSAGE,
        FieldType.BOOL,
    ]
    assert [step.type for step in path] == [".pkg.Inner", ".pkg.Deep", ""]
    assert path.get_path() == ".Inner.Deep.Flag"
    assert path.converter_name() == "ToBool"


def test_get_field_type_message_leaf_rejected():
    outer = _nested_file().messages[0]
    with pytest.raises(RegistryError, match="'inner' not found in '.pkg.Outer' or wrong type"):
        outer.get_field_type("inner")


def test_get_field_type_scalar_with_rest_rejected():
    outer = _nested_file().messages[0]
    with pytest.raises(RegistryError, match="'id.x' not found"):
        outer.get_field_type("id.x")


def test_get_field_type_nested_error_is_prefixed():
    outer = _nested_file().messages[0]
    with pytest.raises(RegistryError) as info:
        outer.get_field_type("inner.missing")
    assert str(info.value) == "inner.'missing' not found in '.pkg.Inner' or wrong type"


def test_get_field_type_unknown_message_type():
    desc = FileDescriptor(
        name="x.proto",
        package="pkg",
        messages=[
            MessageDescriptor(
                name="Lonely",
                fields=[FieldDescriptor("ref", FieldType.MESSAGE, type_name=".pkg.Nowhere")],
            )
        ],
    )
    registry = _Registry()
    file = File.from_descriptor(desc, registry)
    registry.messages.extend(file.messages)
    with pytest.raises(RegistryError, match="'ref.a' not found in '.pkg.Lonely'"):
        file.messages[0].get_field_type("ref.a")


def test_query_map():
    with_map = Message(MessageDescriptor(name="Q", query_map=QueryMap(query="k=f:int")), package="pkg")
    assert with_map.has_query_map()
    assert with_map.query_map().query == "k=f:int"

    without = Message(MessageDescriptor(name="P"), package="pkg")
    assert not without.has_query_map()
    with pytest.raises(RegistryError, match="does not have a querymap"):
        without.query_map()