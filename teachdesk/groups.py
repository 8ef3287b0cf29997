"""Student groups and the assignment of students to them, kept in JSON files."""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any, Iterable

UNASSIGNED = "-"


def name_hash(name: str) -> str:
    """Hex SHA-256 of the UTF-8 encoded name, used as a group or student id."""
    return hashlib.sha256(name.encode("utf-8")).hexdigest()


def _as_text(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def _read_array(path: Path) -> list[dict[str, Any]] | None:
    """Objects of the JSON array in ``path``; ``None`` when the file cannot be read."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError:
        return None
    try:
        doc = json.loads(raw)
    except json.JSONDecodeError:
        return []
    if not isinstance(doc, list):
        return []
    return [item if isinstance(item, dict) else {} for item in doc]


def _write_array(path: Path, items: list[dict[str, Any]]) -> None:
    path.write_text(json.dumps(items, ensure_ascii=False, indent=4), encoding="utf-8")


class GroupStore:
    """Groups (id to name) and students (hash to name and group id)."""

    def __init__(
        self,
        groups_file: str | Path = "groups.json",
        students_file: str | Path = "students.json",
    ) -> None:
        self.groups_file = Path(groups_file)
        self.students_file = Path(students_file)
        self.groups: dict[str, str] = {}
        self.student_groups: dict[str, str] = {}
        self.student_names: dict[str, str] = {}
        self.load_groups()
        self.load_students()

    @property
    def group_names(self) -> list[str]:
        """Group names in the order they are listed."""
        return list(self.groups.values())

    def load_groups(self) -> None:
        """Replace the groups with those in the groups file."""
        self.groups.clear()
        items = _read_array(self.groups_file)
        for obj in items or []:
            self.groups[_as_text(obj.get("id"))] = _as_text(obj.get("name"))

    def load_students(self) -> None:
        """Replace the students with those in the students file."""
        self.student_groups.clear()
        self.student_names.clear()
        items = _read_array(self.students_file)
        for obj in items or []:
            student_hash = _as_text(obj.get("hash"))
            self.student_groups[student_hash] = _as_text(obj.get("groupId"), UNASSIGNED)
            self.student_names[student_hash] = _as_text(obj.get("name"))

    def save_groups(self) -> None:
        _write_array(
            self.groups_file,
            [{"id": gid, "name": name} for gid, name in self.groups.items()],
        )

    def save_students(self) -> None:
        _write_array(
            self.students_file,
            [
                {
                    "hash": student_hash,
                    "name": self.student_names.get(student_hash, ""),
                    "groupId": gid,
                }
                for student_hash, gid in self.student_groups.items()
            ],
        )

    def group_id_by_name(self, name: str) -> str | None:
        """Id of the first group with this name, or ``None``."""
        return next((gid for gid, gname in self.groups.items() if gname == name), None)

    def add_group(self, name: str) -> str:
        """Add (or rename onto) the group whose id is the hash of ``name``; return the id."""
        if not name:
            raise ValueError("group name is empty")
        gid = name_hash(name)
        self.groups[gid] = name
        self.save_groups()
        self.load_groups()
        return gid

    def delete_group(self, group_id: str, remove_students: bool) -> None:
        """Delete a group, removing its students or making them unassigned."""
        if not group_id or group_id not in self.groups:
            raise KeyError(group_id)
        members = [h for h, gid in self.student_groups.items() if gid == group_id]
        for student_hash in members:
            if remove_students:
                del self.student_groups[student_hash]
                self.student_names.pop(student_hash, None)
            else:
                self.student_groups[student_hash] = UNASSIGNED
        del self.groups[group_id]
        self.save_groups()
        self.save_students()
        self.load_groups()

    def add_students(self, names: Iterable[str], group_id: str) -> list[str]:
        """Add new students to a group; known names are left alone. Return new hashes."""
        if not group_id:
            raise ValueError("Сначала выберите группу.")
        added = []
        for name in names:
            student_hash = name_hash(name)
            if student_hash not in self.student_names:
                self.student_names[student_hash] = name
                self.student_groups[student_hash] = group_id
                added.append(student_hash)
        self.save_students()
        return added

    def import_students(self, path: str | Path, group_id: str) -> list[str]:
        """Add the non-empty trimmed lines of a text file as students of a group."""
        text = Path(path).read_text(encoding="utf-8")
        names = [line.strip() for line in text.splitlines() if line.strip()]
        return self.add_students(names, group_id)

    def assign(self, hashes: Iterable[str], group_id: str) -> None:
        for student_hash in hashes:
            self.student_groups[student_hash] = group_id
        self.save_students()

    def unassign(self, hashes: Iterable[str]) -> None:
        for student_hash in hashes:
            self.student_groups[student_hash] = UNASSIGNED
        self.save_students()

    def remove_students(self, hashes: Iterable[str]) -> None:
        for student_hash in hashes:
            self.student_names.pop(student_hash, None)
            self.student_groups.pop(student_hash, None)
        self.save_students()

    def assigned(self, group_id: str) -> list[tuple[str, str]]:
        """``(hash, name)`` of every student in the group."""
        return [
            (h, self.student_names.get(h, ""))
            for h, gid in self.student_groups.items()
            if gid == group_id
        ]

    def unassigned(self) -> list[tuple[str, str]]:
        """``(hash, name)`` of every student without a group."""
        return self.assigned(UNASSIGNED)

    def student_names_in_group(self, group_id: str) -> list[str]:
        return [name for _, name in self.assigned(group_id)]