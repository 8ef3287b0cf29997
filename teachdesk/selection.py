"""Choosing students from groups for observation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .groups import GroupStore


@dataclass
class StudentEntry:
    """A student shown in a list, with its check mark."""

    hash: str
    name: str
    checked: bool = False


class StudentSelection:
    """Students of one group offered for selection and the students already chosen."""

    def __init__(self, store: GroupStore) -> None:
        self.store = store
        self.group_id: str | None = None
        self._available: list[StudentEntry] = []
        self.selected: list[StudentEntry] = []

    def show_group(self, group_id: str | None) -> list[StudentEntry]:
        """Offer the students of a group, all unchecked; ``None`` offers nobody."""
        self.group_id = group_id
        if group_id is None:
            self._available = []
        else:
            self._available = [
                StudentEntry(student_hash, name)
                for student_hash, name in self.store.assigned(group_id)
            ]
        return self.available()

    def available(self) -> list[StudentEntry]:
        """The offered students in list order."""
        return list(self._available)

    def _entry(self, student_hash: str) -> StudentEntry:
        for entry in self._available:
            if entry.hash == student_hash:
                return entry
        raise KeyError(student_hash)

    def set_checked(self, student_hash: str, checked: bool) -> None:
        self._entry(student_hash).checked = bool(checked)

    def toggle_all(self, checked: bool) -> None:
        """Check or uncheck every offered student."""
        for entry in self._available:
            entry.checked = bool(checked)

    def add_checked(self) -> list[StudentEntry]:
        """Append copies of the checked students to the chosen list; return the copies."""
        added = [StudentEntry(e.hash, e.name) for e in self._available if e.checked]
        self.selected.extend(added)
        return added

    def remove_selected(self, indices: Iterable[int]) -> None:
        """Remove the chosen students at the given positions."""
        rows = sorted(set(indices), reverse=True)
        for row in rows:
            if not 0 <= row < len(self.selected):
                raise IndexError(f"no selected student at row {row}")
        for row in rows:
            del self.selected[row]

    def apply_group(self, group_id: str) -> tuple[list[str], str]:
        """Names of the group's students and the group's name."""
        if group_id not in self.store.groups:
            raise KeyError(group_id)
        return self.store.student_names_in_group(group_id), self.store.groups[group_id]