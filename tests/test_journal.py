# tests/test_journal.py

import pytest

from core.response import ErrorCode
from models.grade import CellColor, GradeValue
from models.journal import JournalEditor, JournalState, JournalView

GROUPS = [{"id": 10, "name": "9A", "student_count": 3}]


@pytest.fixture
def editor(http, teacher_client):
    return JournalEditor(teacher_client)


@pytest.fixture
def open_editor(http, editor, journal_payload):
    http.queue(body=GROUPS)
    http.queue(body=journal_payload)

    assert editor.select_course("5").success
    assert editor.select_group("10").success

    return editor


# === grid ===


def test_journal_view_is_dense(journal_payload):
    journal = JournalView.from_payload("5", "10", journal_payload)

    assert journal.shape == (3, 2)
    assert journal.snapshot() == [["", ""], ["5", ""], ["", ""]]

    filled = journal.filled_cells()
    assert len(filled) == 1
    assert filled[0].key == ("2", "101")
    assert filled[0].color is CellColor.HIGH

    blank = journal.cell(1, 102)
    assert blank.is_blank
    assert blank.color is CellColor.NONE


def test_journal_view_keeps_lesson_order(journal_payload):
    journal_payload["lessons"].reverse()

    journal = JournalView.from_payload("5", "10", journal_payload)

    assert [lesson.id for lesson in journal.lessons] == ["102", "101"]


def test_journal_view_drops_duplicates(journal_payload):
    journal_payload["students"].append({"id": 2, "first_name": "Boris", "last_name": "Petrov"})
    journal_payload["grades"].append({"student_id": 2, "lesson_id": 101, "grade": 3})

    journal = JournalView.from_payload("5", "10", journal_payload)

    assert journal.shape == (3, 2)
    assert journal.cell(2, 101).value is GradeValue.FIVE


def test_journal_view_skips_malformed_grades(journal_payload):
    journal_payload["grades"].append({"student_id": 3, "lesson_id": 102, "grade": 9})

    journal = JournalView.from_payload("5", "10", journal_payload)

    assert journal.cell(3, 102).is_blank


def test_journal_view_rejects_missing_lists():
    with pytest.raises(ValueError):
        JournalView.from_payload("5", "10", {"lessons": []})


def test_journal_view_skips_non_object_grades(journal_payload):
    journal_payload["grades"].append(5)

    journal = JournalView.from_payload("5", "10", journal_payload)

    assert journal.cell(2, 101).value is GradeValue.FIVE


def test_journal_view_rejects_non_object_lessons():
    with pytest.raises(ValueError):
        JournalView.from_payload("5", "10", {"lessons": [101], "students": [], "grades": []})


# === selection state ===


def test_initial_state(editor):
    assert editor.state is JournalState.NO_COURSE
    assert not editor.grid_visible


def test_select_group_requires_course(http, editor):
    response = editor.select_group("10")

    assert response.error is ErrorCode.VALIDATION_FAILED
    assert http.calls == []


def test_select_course_then_group(http, editor, journal_payload):
    http.queue(body=GROUPS)

    response = editor.select_course("5")

    assert response.success
    assert editor.state is JournalState.COURSE_SELECTED
    assert [group.name for group in editor.groups] == ["9A"]
    assert not editor.grid_visible
    assert http.calls[0]["path"] == "/teacher/courses/5/groups"

    http.queue(body=journal_payload)

    response = editor.select_group("10")

    assert response.success
    assert editor.state is JournalState.GROUP_SELECTED
    assert editor.grid_visible
    assert http.calls[1]["params"] == {"course_id": "5", "group_id": "10"}


def test_selecting_course_resets_group(http, open_editor):
    http.queue(body=GROUPS)

    open_editor.select_course("6")

    assert open_editor.state is JournalState.COURSE_SELECTED
    assert open_editor.group_id is None
    assert open_editor.journal is None


def test_failed_course_selection_returns_to_no_course(http, open_editor):
    http.queue(status_code=500, body={"error": "db down"})

    response = open_editor.select_course("6")

    assert not response.success
    assert open_editor.state is JournalState.NO_COURSE
    assert not open_editor.grid_visible


def test_failed_journal_load_hides_grid(http, open_editor):
    http.queue(status_code=403, body={"error": "Not your group"})

    response = open_editor.reload()

    assert response.detail == "Not your group"
    assert open_editor.state is JournalState.COURSE_SELECTED
    assert not open_editor.grid_visible


def test_load_journal_twice_is_identical(http, editor, journal_payload):
    http.queue(body=journal_payload)
    http.queue(body=journal_payload)

    first = editor.load_journal("5", "10")
    second = editor.load_journal("5", "10")

    assert first.data["journal"].snapshot() == second.data["journal"].snapshot()
    assert len(first.data["grades"]) == len(second.data["grades"]) == 1


def test_malformed_journal_payload(http, editor):
    http.queue(body={"lessons": [], "grades": []})

    response = editor.load_journal("5", "10")

    assert response.error is ErrorCode.INVALID_INPUT


def test_non_object_grade_entries_are_skipped(http, editor):
    http.queue(body={"lessons": [], "students": [], "grades": [5]})

    response = editor.load_journal("5", "10")

    assert response.success
    assert response.data["journal"].shape == (0, 0)
    assert response.data["grades"] == []


def test_non_object_lesson_is_malformed(http, editor):
    http.queue(body={"lessons": [101], "students": [], "grades": []})

    response = editor.load_journal("5", "10")

    assert not response.success
    assert response.error is ErrorCode.INVALID_INPUT


# === editing ===


@pytest.mark.parametrize(
    "raw, wire", [("2", 2), ("3", 3), ("4", 4), ("5", 5), ("", None), ("Н", 0)]
)
def test_valid_token_issues_exactly_one_call(http, open_editor, raw, wire):
    calls_before = len(http.calls)
    http.queue(text="Grade saved")

    response = open_editor.edit_cell("1", "102", raw)

    assert response.success
    assert len(http.calls) == calls_before + 1
    call = http.calls[-1]
    assert call["method"] == "POST"
    assert call["path"] == "/teacher/grade"
    assert call["body"] == {"student_id": 1, "lesson_id": 102, "grade": wire}


@pytest.mark.parametrize("raw", ["6", "abc", "7"])
def test_invalid_token_makes_no_call_and_keeps_value(http, open_editor, raw):
    calls_before = len(http.calls)

    response = open_editor.edit_cell("2", "101", raw)

    assert response.error is ErrorCode.INVALID_FIELD_VALUE
    assert len(http.calls) == calls_before
    cell = open_editor.journal.cell("2", "101")
    assert cell.display == "5"
    assert cell.color is CellColor.HIGH


def test_successful_edit_updates_cell(http, open_editor):
    http.queue(text="")

    response = open_editor.edit_cell("3", "101", "2")

    assert response.detail == "Grade saved: 2."
    cell = open_editor.journal.cell("3", "101")
    assert cell.display == "2"
    assert cell.color is CellColor.LOW


def test_clearing_a_cell(http, open_editor):
    http.queue(text="")

    open_editor.edit_cell("2", "101", "")

    assert open_editor.journal.cell("2", "101").is_blank


def test_failed_edit_keeps_value_and_marks_error(http, open_editor):
    http.queue(status_code=500, body={"error": "db down"})

    response = open_editor.edit_cell("2", "101", "3")

    assert not response.success
    assert response.detail == "db down"
    cell = open_editor.journal.cell("2", "101")
    assert cell.display == "5"
    assert cell.color is CellColor.ERROR


def test_edit_unknown_cell(http, open_editor):
    response = open_editor.edit_cell("99", "101", "5")

    assert response.error is ErrorCode.NOT_FOUND


def test_edit_without_journal(editor):
    response = editor.edit_cell("1", "101", "5")

    assert response.error is ErrorCode.VALIDATION_FAILED


def test_stale_response_is_dropped(http, open_editor):
    # the first save is still in flight when a second edit of the same cell completes
    def first_save():
        newer = open_editor.edit_cell("1", "101", "3")
        assert newer.success
        return http.make_response(200, "")

    http.queue_handler(first_save)
    http.queue(text="")

    older = open_editor.edit_cell("1", "101", "4")

    assert older.data["stale"]
    assert open_editor.journal.cell("1", "101").display == "3"


# === lessons ===


def test_add_lesson_creates_and_reloads(http, open_editor, journal_payload):
    journal_payload["lessons"].append({"id": 103, "date": "2025-09-05", "homework": "Ex. 4"})
    http.queue(text="Lesson created")
    http.queue(body=journal_payload)

    response = open_editor.add_lesson("2025-09-05", "Ex. 4")

    assert response.success
    create_call = http.calls[-2]
    assert create_call["path"] == "/teacher/lessons"
    assert create_call["body"] == {
        "course_id": 5,
        "group_id": 10,
        "date": "2025-09-05",
        "homework": "Ex. 4",
    }
    assert open_editor.journal.shape == (3, 3)


def test_add_lesson_rejects_bad_date(http, open_editor):
    calls_before = len(http.calls)

    response = open_editor.add_lesson("05.09.2025")

    assert response.error is ErrorCode.INVALID_FIELD_VALUE
    assert len(http.calls) == calls_before


def test_add_lesson_requires_group(editor):
    response = editor.add_lesson("2025-09-05")

    assert response.error is ErrorCode.VALIDATION_FAILED
