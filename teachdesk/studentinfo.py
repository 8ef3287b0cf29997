"""Student records shaped by a server-provided field structure."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Mapping


def _as_text(value: Any) -> str:
    """Return ``value`` if it is a string, otherwise an empty string."""
    return value if isinstance(value, str) else ""


@dataclass(frozen=True)
class FieldSpec:
    """Description of one student data field."""

    id: str
    label: str = ""
    default_value: str = ""
    show_in_table: bool = False

    @classmethod
    def from_json(cls, obj: Mapping[str, Any]) -> "FieldSpec":
        show = obj.get("showInTable", False)
        return cls(
            id=_as_text(obj.get("id")),
            label=_as_text(obj.get("label")),
            default_value=_as_text(obj.get("defaultValue")),
            show_in_table=show if isinstance(show, bool) else False,
        )


class StudentStructure:
    """Ordered list of field descriptions; the order defines table columns."""

    def __init__(self, fields: list[FieldSpec] | None = None) -> None:
        self.fields: list[FieldSpec] = list(fields or [])

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def load(self, data: Mapping[str, Any]) -> None:
        """Replace the fields with the ``structure`` array of ``data``."""
        structure = data.get("structure")
        if not isinstance(structure, list):
            raise ValueError("student structure is missing or is not an array")
        self.fields = [FieldSpec.from_json(item) for item in structure if isinstance(item, dict)]

    def field(self, field_id: str) -> FieldSpec:
        for spec in self.fields:
            if spec.id == field_id:
                return spec
        raise KeyError(field_id)

    def label_of(self, field_id: str) -> str:
        """Label of the field, or an empty string when there is no such field."""
        try:
            return self.field(field_id).label
        except KeyError:
            return ""


class StudentInfo:
    """One student's data, filled in from the structure's defaults."""

    def __init__(self, fields: Mapping[str, Any], structure: StudentStructure) -> None:
        self.structure = structure
        self.data: dict[str, Any] = {}
        completed = dict(fields)
        for spec in structure:
            completed.setdefault(spec.id, spec.default_value)
        self.set_fields(completed)

    def set_fields(self, fields: Mapping[str, Any]) -> None:
        """Set every structure field from ``fields``, falling back to defaults."""
        for spec in self.structure:
            if spec.id in fields:
                value = _as_text(fields[spec.id])
                self.data[spec.id] = value or spec.default_value
            else:
                self.data[spec.id] = spec.default_value or "-"
        self.data["hash"] = self.generate_hash()

    def generate_hash(self) -> str:
        key = f"{_as_text(self.data.get('name'))}|{_as_text(self.data.get('group'))}"
        return hashlib.md5(key.encode("utf-8")).hexdigest()

    @property
    def hash(self) -> str:
        return _as_text(self.data.get("hash"))

    @property
    def connected(self) -> bool:
        return self.data.get("connected") == "true"

    @connected.setter
    def connected(self, value: bool) -> None:
        self.data["connected"] = "true" if value else "false"

    def set_variant(self, variant: str) -> None:
        self.data["variant"] = variant

    def describe(self) -> str:
        """Text listing every field shown in the table as ``label: value`` lines."""
        return "".join(
            f"{spec.label}: {_as_text(self.data.get(spec.id))}\n"
            for spec in self.structure
            if spec.show_in_table
        )


def read_students_csv(path: str | Path, structure: StudentStructure) -> list[StudentInfo]:
    """Read students from a comma-separated file whose first line names the fields."""
    lines = Path(path).read_text(encoding="utf-8").splitlines()
    if not lines:
        return []
    headers = lines[0].split(",")
    students = []
    for number, line in enumerate(lines[1:], start=2):
        if not line or line.startswith("//"):
            continue
        values = line.split(",")
        if len(values) < len(headers):
            raise ValueError(f"line {number}: expected {len(headers)} values, got {len(values)}")
        students.append(StudentInfo(dict(zip(headers, values)), structure))
    return students