"""A stored bank of questions and of tests built from them."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from .questions import Question, QuestionType, question_type_label


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


@dataclass
class Test:
    """A test: an id and the ids of its questions in order."""

    __test__ = False

    id: int
    question_ids: list[int] = field(default_factory=list)


def _answers_text(question: Question) -> str:
    if question.is_choice:
        lines = []
        for index, option in enumerate(question.options):
            correct = index < len(question.correct_flags) and question.correct_flags[index]
            lines.append(f"[{'✔' if correct else '✖'}] {option}\n")
        return "".join(lines)
    if question.type == QuestionType.MATCH:
        return "".join(f"→ {answer}\n" for answer in question.correct_answers)
    return "".join(f"{answer}\n" for answer in question.correct_answers)


class TestBank:
    """Questions and tests kept in one JSON file; every change is saved."""

    __test__ = False

    def __init__(self, path: str | Path = "tests.json") -> None:
        self.path = Path(path)
        self.questions: list[Question] = []
        self.tests: list[Test] = []
        self.load()

    def load(self) -> None:
        """Read the file; a missing file leaves the bank as it is."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError:
            return
        try:
            root = json.loads(raw)
        except json.JSONDecodeError:
            root = {}
        if not isinstance(root, dict):
            root = {}
        questions = root.get("questions")
        tests = root.get("tests")
        self.questions = [
            Question.from_json(item if isinstance(item, dict) else {})
            for item in (questions if isinstance(questions, list) else [])
        ]
        self.tests = []
        for item in tests if isinstance(tests, list) else []:
            obj = item if isinstance(item, dict) else {}
            ids = obj.get("questionIds")
            self.tests.append(
                Test(
                    id=_to_int(obj.get("id")),
                    question_ids=[_to_int(v) for v in (ids if isinstance(ids, list) else [])],
                )
            )

    def save(self) -> None:
        root = {
            "questions": [q.to_json() for q in self.questions],
            "tests": [{"id": t.id, "questionIds": list(t.question_ids)} for t in self.tests],
        }
        self.path.write_text(json.dumps(root, ensure_ascii=False, indent=4), encoding="utf-8")

    def next_question_id(self) -> int:
        return max((q.id for q in self.questions), default=0, key=lambda i: i) if False else max(
            [0, *(q.id for q in self.questions)]
        ) + 1

    def next_test_id(self) -> int:
        return max([0, *(t.id for t in self.tests)]) + 1

    def _question_row(self, row: int) -> int:
        if not 0 <= row < len(self.questions):
            raise IndexError(f"no question at row {row}")
        return row

    def _test_row(self, row: int) -> int:
        if not 0 <= row < len(self.tests):
            raise IndexError(f"no test at row {row}")
        return row

    def add_question(self, question: Question) -> int:
        """Store a copy of ``question`` under a fresh id and return the id."""
        new_id = self.next_question_id()
        self.questions.append(replace(question, id=new_id))
        self.save()
        return new_id

    def edit_question(self, row: int, question: Question) -> None:
        """Replace the question at ``row``; it takes the row number as its id."""
        self._question_row(row)
        self.questions[row] = replace(question, id=row)
        self.save()

    def remove_question(self, row: int) -> None:
        """Remove the question at ``row`` and drop its id from every test."""
        removed = self.questions.pop(self._question_row(row))
        for test in self.tests:
            test.question_ids = [qid for qid in test.question_ids if qid != removed.id]
        self.save()

    def add_test(self, question_ids: list[int]) -> Test:
        ids = list(question_ids)
        if not ids:
            raise ValueError("Не выбраны вопросы для теста.")
        test = Test(id=self.next_test_id(), question_ids=ids)
        self.tests.append(test)
        self.save()
        return test

    def remove_test(self, row: int) -> None:
        self.tests.pop(self._test_row(row))
        self.save()

    def question_titles(self) -> list[str]:
        return [f"Вопрос №{q.id}: {q.text[:30]}" for q in self.questions]

    def test_titles(self) -> list[str]:
        return [f"Тест №{t.id}" for t in self.tests]

    def describe_question(self, row: int) -> str:
        q = self.questions[self._question_row(row)]
        text = (
            f"Вопрос №{q.id}\nТип: {question_type_label(q.type)}\n\n{q.text}\n\n"
            f"Баллы: +{q.score_correct} / {q.score_wrong}\n"
        )
        return text + _answers_text(q)

    def describe_test(self, row: int) -> str:
        test = self.tests[self._test_row(row)]
        by_id: dict[int, Question] = {}
        for q in self.questions:
            by_id.setdefault(q.id, q)
        text = f"Тест №{test.id}\n\n"
        number = 1
        for qid in test.question_ids:
            q = by_id.get(qid)
            if q is None:
                continue
            text += f"{number}. ({q.id}) {q.text}\nТип: {question_type_label(q.type)}\n"
            text += f"Баллы: +{q.score_correct} / {q.score_wrong}\n"
            text += _answers_text(q) + "\n"
            number += 1
        return text