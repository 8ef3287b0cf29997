import json

import pytest

from teachdesk.questions import Question, QuestionType
from teachdesk.testbank import Test, TestBank


def _choice(text="Сколько?"):
    return Question(
        text=text,
        type=QuestionType.SINGLE_CHOICE,
        options=["a", "b"],
        correct_flags=[True, False],
    )


def _input(text="Слово"):
    return Question(text=text, type=QuestionType.INPUT, correct_answers=["кот"])


def test_missing_file_gives_empty_bank(tmp_path):
    bank = TestBank(tmp_path / "tests.json")
    assert bank.questions == []
    assert bank.tests == []
    assert bank.next_question_id() == 1
    assert bank.next_test_id() == 1


def test_add_question_saves_and_reloads(tmp_path):
    path = tmp_path / "tests.json"
    bank = TestBank(path)
    assert bank.add_question(_choice()) == 1
    assert bank.add_question(_input()) == 2
    reloaded = TestBank(path)
    assert reloaded.questions == bank.questions
    assert [q.id for q in reloaded.questions] == [1, 2]


def test_add_question_does_not_change_argument(tmp_path):
    bank = TestBank(tmp_path / "tests.json")
    question = _choice()
    bank.add_question(question)
    assert question.id == -1


def test_edit_question_takes_row_as_id(tmp_path):
    bank = TestBank(tmp_path / "tests.json")
    bank.add_question(_choice())
    bank.add_question(_choice())
    bank.edit_question(1, _input("Новый"))
    assert bank.questions[1].id == 1
    assert bank.questions[1].text == "Новый"
    with pytest.raises(IndexError):
        bank.edit_question(5, _input())


def test_remove_question_drops_it_from_tests(tmp_path):
    path = tmp_path / "tests.json"
    bank = TestBank(path)
    bank.add_question(_choice())
    bank.add_question(_input())
    bank.add_test([1, 2])
    bank.remove_question(0)
    assert [q.id for q in bank.questions] == [2]
    assert bank.tests[0].question_ids == [2]
    assert TestBank(path).tests == [Test(1, [2])]


def test_add_and_remove_tests(tmp_path):
    bank = TestBank(tmp_path / "tests.json")
    bank.add_question(_choice())
    first = bank.add_test([1])
    second = bank.add_test([1])
    assert (first.id, second.id) == (1, 2)
    assert bank.test_titles() == ["Тест №1", "Тест №2"]
    bank.remove_test(0)
    assert bank.test_titles() == ["Тест №2"]
    with pytest.raises(IndexError):
        bank.remove_test(3)


def test_add_test_needs_questions(tmp_path):
    bank = TestBank(tmp_path / "tests.json")
    with pytest.raises(ValueError):
        bank.add_test([])


def test_question_titles_truncate_text(tmp_path):
    bank = TestBank(tmp_path / "tests.json")
    long_text = "x" * 50
    bank.add_question(_choice(long_text))
    assert bank.question_titles() == ["Вопрос №1: " + long_text[:30]]


def test_describe_question(tmp_path):
    bank = TestBank(tmp_path / "tests.json")
    bank.add_question(_choice("Вопрос?"))
    text = bank.describe_question(0)
    assert text.startswith("Вопрос №1\nТип: Одиночный выбор\n\nВопрос?\n\n")
    assert text.endswith("[✔] a\n[✖] b\n")


def test_describe_match_question(tmp_path):
    bank = TestBank(tmp_path / "tests.json")
    bank.add_question(
        Question(text="Пары", type=QuestionType.MATCH, options=["l"], correct_answers=["r"])
    )
    assert bank.describe_question(0).endswith("→ r\n")


def test_describe_test_skips_missing_questions(tmp_path):
    bank = TestBank(tmp_path / "tests.json")
    bank.add_question(_input("Первый"))
    bank.add_question(_input("Второй"))
    bank.add_test([2, 9, 1])
    text = bank.describe_test(0)
    assert text.startswith("Тест №1\n\n1. (2) Второй\nТип: Ввод слова\n")
    assert "2. (1) Первый\n" in text
    assert "3." not in text


def test_next_ids_follow_maximum(tmp_path):
    path = tmp_path / "tests.json"
    path.write_text(
        json.dumps(
            {
                "questions": [_input().to_json() | {"id": 7}],
                "tests": [{"id": 4, "questionIds": [7]}],
            }
        ),
        encoding="utf-8",
    )
    bank = TestBank(path)
    assert bank.next_question_id() == 8
    assert bank.next_test_id() == 5


def test_malformed_file_clears_bank(tmp_path):
    path = tmp_path / "tests.json"
    bank = TestBank(path)
    bank.add_question(_choice())
    path.write_text("not json", encoding="utf-8")
    bank.load()
    assert bank.questions == []
    assert bank.tests == []