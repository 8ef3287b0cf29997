# teachdesk

The teacher's side of a classroom testing server. It keeps student groups
in JSON files, reads and describes task variants, maintains a bank of
questions and tests, handles typed settings lists, and talks to the server
through a small JSON request/response protocol over TCP.

Messages and labels are in Russian, as the server and students see them.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## The `teachdesk` command

```
teachdesk [--host HOST] [--port PORT] [--variants FILE] [students|shutdown]
```

The command connects to the server (by default `127.0.0.1`, port `12345`)
and asks for the student record structure and the default settings. It then
does one of two things:

- `students` (the default): asks for the current student data and prints it
  as a tab-separated table. The header row holds the labels of the fields
  marked to be shown in the table. The first field, the student hash, is
  left out.
- `shutdown`: asks the server to shut down.

`--variants` names the variants file to read. The default is `variants.txt`.
A file that is missing gives an empty list. If the connection cannot be made,
or if it fails along the way, the command prints an error and exits with
status 1.

## Modules

- `teachdesk.studentinfo`
  - `FieldSpec` and `StudentStructure` describe the student record fields
    the server sends (`StudentStructure.load` takes the `structure` array).
  - `StudentInfo` is a student record. Missing fields are filled from the
    field defaults, and its `hash` is the MD5 of `name|group`.
    `StudentInfo.describe` lists the fields that are shown in the table.
  - `read_students_csv` reads students from a comma-separated file whose
    first line names the fields.
- `teachdesk.questions`
  - `QuestionType` lists the question kinds: single choice, multiple choice,
    matching and word input. `question_type_label` gives each kind's name.
  - `Question.to_json` and `Question.from_json` convert a question to and
    from its JSON form.
  - `save_questions` and `load_questions` write and read a JSON array of
    questions.
- `teachdesk.variants`
  - `read_variants` reads the non-empty lines of a variants file.
  - `variant_number` gives a variant's number, e.g. `3` for
    `3-Омега*8*8-Дельта*2*4*4`.
  - `format_variant` writes out each topology with named parameters.
  - `VariantSelection` keeps the state of choosing a variant by its number.
- `teachdesk.settings`
  - `coerce_setting_value` and `apply_setting_values` store edited values the
    way the setting's `type` wants them. `int` and `double` become whole
    numbers from 0 to 1000, `bool` becomes a flag, and anything else becomes
    text.
  - `load_settings_txt` reads `key value` lines. It skips `//` comments and
    lines that do not have exactly two parts.
  - `save_settings_txt` writes `settings.txt` into a folder as
    `key = value` lines, with the keys sorted. `load_settings_txt` skips
    lines of that form, so it does not read this file back.
- `teachdesk.tasks`
  - `TaskSpec` holds a topology (`Баньян`, `Омега`, `Бенеша`, `Дельта` or
    `Клоша`), its parameters (1–100, named by `topology_parameters`) and the
    points for each subtask (`SubtaskScore`, −100–100, defaults from
    `default_subtask_scores`).
- `teachdesk.testbank`
  - `TestBank` keeps questions and the tests (`Test`) built from them in one
    JSON file (`tests.json` by default). Every change is saved.
    `describe_question` and `describe_test` produce readable descriptions.
- `teachdesk.groups`
  - `GroupStore` keeps groups in `groups.json` and student assignments in
    `students.json`.
  - Groups and students are identified by the SHA-256 of their name
    (`name_hash`). A student without a group has group id `-`.
- `teachdesk.selection`
  - `StudentSelection` offers the students of one group with check marks and
    collects the checked ones into a chosen list.
  - `apply_group` returns a group's student names and the group's name.
- `teachdesk.protocol`
  - `build_request` encodes a request with role `teacher`.
  - `parse_response` decodes a reply into a `Response`.
  - `TeacherConnection` is the TCP link and can be used as a context
    manager. `send_request` waits up to five seconds for a reply.
- `teachdesk.app`
  - `TeacherClient` keeps the known students, their table rows, per-student
    settings and default settings. It sends the matching requests to the
    server and applies its replies.
  - `main` is the `teachdesk` command.

## Examples

Add a group and two students to it:

```python
from teachdesk.groups import GroupStore

store = GroupStore("groups.json", "students.json")
group_id = store.add_group("Group A")
store.add_students(["Ivanov I.I.", "Petrova A.S."], group_id)
print(store.student_names_in_group(group_id))
```

Add a question to the bank and print its description:

```python
from teachdesk.testbank import TestBank
from teachdesk.questions import Question, QuestionType

bank = TestBank("tests.json")
bank.add_question(Question(text="2 + 2 = ?", type=QuestionType.INPUT,
                           correct_answers=["4"]))
print(bank.describe_question(0))
```

## What it does not do

- There is no graphical interface. Groups, variants, tests and settings are
  edited through the classes above.
- The `teachdesk` command does not stay connected or watch students live. It
  makes its requests, prints the result, and exits.
- Nothing here generates new variants. Variants come from the variants file.