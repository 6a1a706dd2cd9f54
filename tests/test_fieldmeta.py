import pytest

from restgen.descriptors import FieldType
from restgen.fieldmeta import PROTO_CONVERTERS, FieldMetadata, FieldPath


def _deep_path():
    return FieldPath(
        [
            FieldMetadata("user", FieldType.MESSAGE, ".pkg.User"),
            FieldMetadata("name", FieldType.MESSAGE, ".pkg.Name"),
            FieldMetadata("firstname", FieldType.STRING),
        ]
    )


def test_go_type_strips_leading_dots():
    assert FieldMetadata("user", FieldType.MESSAGE, ".pkg.User").go_type() == "pkg.User"


def test_get_path_worked_example():
    assert _deep_path().get_path() == ".User.Name.Firstname"


def test_get_path_empty():
    assert FieldPath().get_path() == ""


def test_get_path_rejects_empty_name():
    with pytest.raises(ValueError):
        FieldPath([FieldMetadata("", FieldType.STRING)]).get_path()


def test_generate_worked_example():
    expected = (
        "if req.user == nil {\n    req.user = &pkg.User{}\n"
        "if req.user.name == nil {\n    req.user.name = &pkg.Name{}\n"
        "}}"
    )
    assert _deep_path().generate() == expected


def test_generate_single_field_is_empty():
    assert FieldPath([FieldMetadata("id", FieldType.INT32)]).generate() == ""


@pytest.mark.parametrize("depth", [1, 2, 3, 5])
def test_generate_balanced(depth):
    steps = [FieldMetadata(f"f{i}", FieldType.MESSAGE, f".p.T{i}") for i in range(depth)]
    steps.append(FieldMetadata("leaf", FieldType.BOOL))
    code = FieldPath(steps).generate()
    assert code.count("{") == code.count("}")
    assert code.count("== nil") == depth
    assert code.endswith("}" * depth)


def test_generate_empty_path_rejected():
    with pytest.raises(ValueError):
        FieldPath().generate()


def test_converter_uses_last_field():
    assert _deep_path().converter_name() == "ToString"


@pytest.mark.parametrize(
    "kind, name",
    [
        (FieldType.DOUBLE, "ToFloat64"),
        (FieldType.FIXED64, "ToUint64"),
        (FieldType.SINT32, "ToInt32"),
        (FieldType.BYTES, "ToBytes"),
        (FieldType.BOOL, "ToBool"),
    ],
)
def test_converter_names(kind, name):
    assert FieldPath([FieldMetadata("x", kind)]).converter_name() == name


def test_converter_missing_kind_is_empty():
    assert FieldType.MESSAGE not in PROTO_CONVERTERS
    assert FieldPath([FieldMetadata("x", FieldType.MESSAGE)]).converter_name() == ""


def test_converter_empty_path_rejected():
    with pytest.raises(ValueError):
        FieldPath().converter_name()