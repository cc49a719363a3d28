# tests/test_grade.py

import pytest

from models.grade import (
    INVALID_GRADE_MESSAGE,
    CellColor,
    GradeEntry,
    GradeValue,
    color_for,
    parse_grade_token,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2", GradeValue.TWO),
        ("3", GradeValue.THREE),
        (" 4 ", GradeValue.FOUR),
        ("5", GradeValue.FIVE),
        ("Н", GradeValue.ABSENT),
        ("н", GradeValue.ABSENT),
        ("N", GradeValue.ABSENT),
        ("", None),
        ("   ", None),
    ],
)
def test_parse_grade_token_accepts(raw, expected):
    assert parse_grade_token(raw) is expected


@pytest.mark.parametrize("raw", ["6", "abc", "7", "1", "0", "4.5", "НН", "55"])
def test_parse_grade_token_rejects(raw):
    with pytest.raises(ValueError, match=INVALID_GRADE_MESSAGE):
        parse_grade_token(raw)


def test_absence_travels_as_zero():
    assert GradeValue.ABSENT.wire_value == 0
    assert GradeValue.ABSENT.label == "Н"
    assert GradeValue.from_wire(0) is GradeValue.ABSENT
    assert GradeValue.from_wire("Н") is GradeValue.ABSENT


def test_from_wire_null_is_no_grade():
    assert GradeValue.from_wire(None) is None


def test_from_wire_rejects_unknown_values():
    with pytest.raises(ValueError):
        GradeValue.from_wire(9)


def test_colors():
    assert color_for(GradeValue.FIVE) is CellColor.HIGH
    assert color_for(GradeValue.TWO) is CellColor.LOW
    assert color_for(GradeValue.FOUR) is CellColor.NEUTRAL
    assert color_for(GradeValue.ABSENT) is CellColor.ABSENT
    assert color_for(None) is CellColor.NONE


def test_grade_entry_from_dict():
    entry = GradeEntry.from_dict({"student_id": 2, "lesson_id": 101, "grade": "5"})

    assert entry.key == ("2", "101")
    assert entry.value is GradeValue.FIVE
    assert entry.to_dict() == {"student_id": "2", "lesson_id": "101", "grade": 5}


def test_grade_entry_with_null_grade_is_skipped():
    assert GradeEntry.from_dict({"student_id": 2, "lesson_id": 101, "grade": None}) is None
