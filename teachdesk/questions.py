"""Test questions and their JSON form."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Any, Iterable, Mapping


class QuestionType(IntEnum):
    SINGLE_CHOICE = 0
    MULTIPLE_CHOICE = 1
    MATCH = 2
    INPUT = 3


_TYPE_LABELS = {
    QuestionType.SINGLE_CHOICE: "Одиночный выбор",
    QuestionType.MULTIPLE_CHOICE: "Множественный выбор",
    QuestionType.MATCH: "Сопоставление",
    QuestionType.INPUT: "Ввод слова",
}


def question_type_label(qtype: int) -> str:
    """Human-readable name of a question type."""
    try:
        return _TYPE_LABELS[QuestionType(qtype)]
    except ValueError:
        return "Неизвестно"


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


def _to_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _to_list(value: Any) -> list:
    return value if isinstance(value, list) else []


@dataclass
class Question:
    """A question; choice types use ``correct_flags``, others ``correct_answers``."""

    id: int = -1
    text: str = ""
    type: QuestionType = QuestionType.SINGLE_CHOICE
    score_correct: int = 10
    score_wrong: int = 0
    options: list[str] = field(default_factory=list)
    correct_flags: list[bool] = field(default_factory=list)
    correct_answers: list[str] = field(default_factory=list)

    @property
    def is_choice(self) -> bool:
        return self.type in (QuestionType.SINGLE_CHOICE, QuestionType.MULTIPLE_CHOICE)

    def to_json(self) -> dict[str, Any]:
        obj: dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "type": int(self.type),
            "scoreCorrect": self.score_correct,
            "scoreWrong": self.score_wrong,
            "options": list(self.options),
        }
        if self.is_choice:
            obj["correctFlags"] = [bool(flag) for flag in self.correct_flags]
        else:
            obj["correctAnswers"] = list(self.correct_answers)
        return obj

    @classmethod
    def from_json(cls, obj: Mapping[str, Any]) -> "Question":
        raw_type = _to_int(obj.get("type"))
        try:
            qtype = QuestionType(raw_type)
        except ValueError:
            raise ValueError(f"unknown question type: {raw_type}") from None
        question = cls(
            id=_to_int(obj.get("id")),
            text=_to_text(obj.get("text")),
            type=qtype,
            score_correct=_to_int(obj.get("scoreCorrect")),
            score_wrong=_to_int(obj.get("scoreWrong")),
            options=[_to_text(v) for v in _to_list(obj.get("options"))],
        )
        if question.is_choice:
            question.correct_flags = [v is True for v in _to_list(obj.get("correctFlags"))]
        else:
            question.correct_answers = [_to_text(v) for v in _to_list(obj.get("correctAnswers"))]
        return question


def save_questions(path: str | Path, questions: Iterable[Question]) -> None:
    """Write the questions to ``path`` as a JSON array."""
    payload = [q.to_json() for q in questions]
    Path(path).write_text(json.dumps(payload, ensure_ascii=False, indent=4), encoding="utf-8")


def load_questions(path: str | Path) -> list[Question]:
    """Read questions from ``path``; a missing or malformed file gives no questions."""
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError:
        return []
    try:
        doc = json.loads(raw)
    except json.JSONDecodeError:
        return []
    if not isinstance(doc, list):
        return []
    return [Question.from_json(item if isinstance(item, dict) else {}) for item in doc]