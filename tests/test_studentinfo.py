import pytest

from teachdesk.studentinfo import (
    FieldSpec,
    StudentInfo,
    StudentStructure,
    read_students_csv,
)


@pytest.fixture
def structure():
    s = StudentStructure()
    s.load(
        {
            "structure": [
                {"id": "hash", "label": "Hash", "defaultValue": "", "showInTable": False},
                {"id": "name", "label": "Name", "defaultValue": "", "showInTable": True},
                {"id": "group", "label": "Group", "defaultValue": "none", "showInTable": True},
                {"id": "variant", "label": "Variant", "defaultValue": "", "showInTable": True},
                {"id": "connected", "label": "Online", "defaultValue": "false", "showInTable": False},
                "not an object",
            ]
        }
    )
    return s


def test_load_keeps_objects_in_order(structure):
    assert [f.id for f in structure] == ["hash", "name", "group", "variant", "connected"]


def test_load_rejects_missing_structure():
    with pytest.raises(ValueError):
        StudentStructure().load({})


def test_load_rejects_non_array_structure():
    with pytest.raises(ValueError):
        StudentStructure().load({"structure": {"id": "name"}})


def test_field_and_label_lookup(structure):
    assert structure.field("group").default_value == "none"
    assert structure.label_of("variant") == "Variant"
    assert structure.label_of("missing") == ""
    with pytest.raises(KeyError):
        structure.field("missing")


def test_field_spec_defaults():
    spec = FieldSpec.from_json({"id": "x"})
    assert spec == FieldSpec(id="x", label="", default_value="", show_in_table=False)


def test_constructor_fills_defaults(structure):
    student = StudentInfo({"name": "Ann"}, structure)
    assert student.data["name"] == "Ann"
    assert student.data["group"] == "none"
    assert student.data["variant"] == ""
    assert student.data["connected"] == "false"
    assert student.connected is False


def test_set_fields_uses_dash_for_absent_without_default(structure):
    student = StudentInfo({"name": "Ann", "group": "G1"}, structure)
    student.set_fields({"name": "Bob"})
    assert student.data["variant"] == "-"
    assert student.data["group"] == "none"
    assert student.data["name"] == "Bob"


def test_non_string_value_falls_back_to_default(structure):
    student = StudentInfo({"name": 5, "group": "G1"}, structure)
    assert student.data["name"] == ""


def test_hash_depends_on_name_and_group(structure):
    a = StudentInfo({"name": "Ann", "group": "G1"}, structure)
    b = StudentInfo({"name": "Ann", "group": "G1", "variant": "4"}, structure)
    c = StudentInfo({"name": "Ann", "group": "G2"}, structure)
    assert a.hash == b.hash == a.data["hash"] == a.generate_hash()
    assert a.hash != c.hash
    assert len(a.hash) == 32
    int(a.hash, 16)


def test_hash_follows_set_fields(structure):
    student = StudentInfo({"name": "Ann", "group": "G1"}, structure)
    before = student.hash
    student.set_fields({"name": "Bob", "group": "G1"})
    assert student.hash != before
    assert student.hash == StudentInfo({"name": "Bob", "group": "G1"}, structure).hash


def test_connected_property(structure):
    student = StudentInfo({"name": "Ann"}, structure)
    student.connected = True
    assert student.data["connected"] == "true"
    assert student.connected is True


def test_set_variant(structure):
    student = StudentInfo({"name": "Ann"}, structure)
    student.set_variant("7-Омега*8*8")
    assert student.data["variant"] == "7-Омега*8*8"


def test_describe_lists_shown_fields(structure):
    student = StudentInfo({"name": "Ann", "group": "G1", "variant": "3"}, structure)
    assert student.describe() == "Name: Ann\nGroup: G1\nVariant: 3\n"


def test_read_students_csv(tmp_path, structure):
    path = tmp_path / "students.csv"
    path.write_text("name,group\nAnn,G1\n//comment\n\nBob,G2\n", encoding="utf-8")
    students = read_students_csv(path, structure)
    assert [(s.data["name"], s.data["group"]) for s in students] == [("Ann", "G1"), ("Bob", "G2")]


def test_read_students_csv_short_row(tmp_path, structure):
    path = tmp_path / "students.csv"
    path.write_text("name,group\nAnn\n", encoding="utf-8")
    with pytest.raises(ValueError):
        read_students_csv(path, structure)