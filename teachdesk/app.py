"""The teacher client: student table, settings and requests to the server."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Callable, Iterable, Mapping, Sequence

from .protocol import DEFAULT_HOST, DEFAULT_PORT, TeacherConnection, parse_response
from .studentinfo import StudentInfo, StudentStructure
from .variants import read_variants

logger = logging.getLogger(__name__)

CONNECTED_MARK = "🟢"
DISCONNECTED_MARK = "🔴"


def _text(value: Any) -> str:
    """String value of a JSON value; anything that is not a string gives ``""``."""
    return value if isinstance(value, str) else ""


class TeacherClient:
    """Students known to the teacher, their table rows and their settings."""

    def __init__(
        self,
        connection: Any,
        structure: StudentStructure | None = None,
        variants: Iterable[str] = (),
    ) -> None:
        self.connection = connection
        self.structure = structure if structure is not None else StudentStructure()
        self.variants = list(variants)
        self.students: dict[str, StudentInfo] = {}
        self.student_settings: dict[str, list[Any]] = {}
        self.default_settings: list[Any] = []
        self.confirm_duplicate: Callable[[str], bool] = lambda name: True
        self._rows: dict[str, list[str]] = {}

    def _send(
        self, action: str, data: Mapping[str, Any] | None = None, wait: bool = True
    ) -> None:
        reply = self.connection.send_request(action, data, wait)
        if not reply:
            return
        try:
            self.handle_response(reply)
        except ValueError as exc:
            logger.warning("bad reply to %s: %s", action, exc)

    def on_connected(self) -> None:
        """Ask the server for the student structure and the default settings."""
        self._send("getStudentStructure")
        self._send("getDefaultSettings")

    def handle_response(self, raw: bytes | str) -> None:
        """Apply a server response; raise ``ValueError`` if it is malformed."""
        response = parse_response(raw)
        if not response.has_data:
            return
        action = response.action
        data = response.data
        if action == "getStudentStructure":
            self.structure.load(data)
        elif action == "updateStudentsData":
            students = data.get("studentsData")
            self.update_students_data(students if isinstance(students, list) else [])
        elif action == "getDefaultSettings":
            settings = data.get("defaultSettings")
            self.default_settings = list(settings) if isinstance(settings, list) else []
        elif action == "getStudentList":
            students = response.body.get("StudentList")
            self.update_students_data(students if isinstance(students, list) else [])
        else:
            logger.info("unknown action in server response: %s", action)

    def update_students_data(self, students: Iterable[Any]) -> None:
        """Merge student objects sent by the server into the known students."""
        for obj in students:
            if not isinstance(obj, dict):
                continue
            student_hash = _text(obj.get("hash"))
            student = self.students.get(student_hash)
            if student is None:
                student = StudentInfo(obj, self.structure)
                self.students[student_hash] = student
            student.data = {key: _text(value) for key, value in obj.items()}
            student.connected = obj.get("connected") is True
            self._update_row(student.data)

    def add_students(self, names: Iterable[str], group: str) -> list[StudentInfo]:
        """Add students by name to a group and send them to the server."""
        added = []
        for name in names:
            student = StudentInfo({"name": name, "group": group}, self.structure)
            if student.hash in self.students and not self.confirm_duplicate(name):
                continue
            self.students[student.hash] = student
            self._update_row(student.data)
            added.append(student)
        payload = [
            {key: _text(value) for key, value in student.data.items()} for student in added
        ]
        self._send("addStudent", {"students": payload})
        return added

    def row_for(self, data: Mapping[str, Any]) -> list[str]:
        """Table cells for a student, one per structure field."""
        cells = []
        for spec in self.structure:
            if spec.id == "connected":
                value = CONNECTED_MARK if _text(data.get("connected")) == "true" else DISCONNECTED_MARK
            elif spec.id == "variant":
                parts = [p for p in _text(data.get("variant")).split("-") if p]
                value = parts[0] if parts else ""
            elif spec.id in data:
                value = _text(data[spec.id])
            else:
                value = spec.default_value
            cells.append(value)
        return cells

    def _update_row(self, data: Mapping[str, Any]) -> None:
        if not data:
            return
        student_hash = _text(data.get("hash"))
        if not student_hash:
            logger.warning("student data has no hash")
            return
        self._rows[student_hash] = self.row_for(data)

    def table_rows(self) -> list[list[str]]:
        """All table rows in the order students first appeared."""
        return [list(row) for row in self._rows.values()]

    def _visible_columns(self) -> list[int]:
        return [
            column
            for column, spec in enumerate(self.structure)
            if spec.show_in_table and column != 0
        ]

    def student_description(self, student_hash: str) -> str:
        return self.students[student_hash].describe()

    def edit_variant(self, student_hash: str, variant: str) -> None:
        """Give a student a new variant and send it to the server."""
        if not any(spec.id == "variant" for spec in self.structure):
            raise ValueError("Не удалось найти колонку варианта.")
        student = self.students[student_hash]
        student.set_variant(variant)
        self._update_row(student.data)
        self.update_selected_fields(student_hash, ["variant"])

    def update_selected_fields(self, student_hash: str, field_ids: Iterable[str]) -> None:
        """Send the chosen fields of a student to the server."""
        if student_hash not in self.students:
            raise KeyError(student_hash)
        data = self.students[student_hash].data
        payload = {fid: data[fid] for fid in field_ids if fid in data}
        payload["hash"] = student_hash
        self._send("updateStudentFields", payload)

    def settings_for(self, student_hash: str) -> list[Any]:
        """A student's own settings, or the default settings."""
        return list(self.student_settings.get(student_hash, self.default_settings))

    def edit_student_settings(
        self, student_hashes: Iterable[str], settings: Sequence[Any]
    ) -> list[str]:
        """Store settings for several students and send them; return the hashes sent."""
        hashes = list(dict.fromkeys(student_hashes))
        if not hashes:
            raise ValueError("Выберите студента для изменения настроек.")
        updated = list(settings)
        sent = []
        for student_hash in hashes:
            if student_hash:
                sent.append(student_hash)
                self.student_settings[student_hash] = list(updated)
        self._send("updateStudentSettings", {"studentHashes": sent, "updatedSettings": updated})
        return sent

    def update_default_settings(self, settings: Sequence[Any]) -> None:
        self.default_settings = list(settings)
        self._send("updateDefaultSettings", {"defaultSettings": list(self.default_settings)})

    def request_students(self) -> None:
        self._send("updateStudentsData")

    def shutdown_server(self) -> None:
        self._send("shutdownServer", {}, True)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="teachdesk", description="Teacher client.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--variants", default="variants.txt")
    parser.add_argument("command", nargs="?", choices=("students", "shutdown"), default="students")
    args = parser.parse_args(argv)

    connection = TeacherConnection(args.host, args.port)
    try:
        connection.connect()
    except ConnectionError as exc:
        print(f"Не удалось подключиться к серверу: {exc}", file=sys.stderr)
        return 1
    with connection:
        client = TeacherClient(connection, StudentStructure(), read_variants(args.variants))
        try:
            client.on_connected()
            if args.command == "shutdown":
                client.shutdown_server()
                return 0
            client.request_students()
        except (ConnectionError, OSError) as exc:
            print(f"Ошибка: {exc}", file=sys.stderr)
            return 1
        columns = client._visible_columns()
        print("\t".join(list(client.structure)[c].label for c in columns))
        for row in client.table_rows():
            print("\t".join(row[c] for c in columns))
    return 0