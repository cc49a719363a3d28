# tests/test_formatters.py

import core.formatters as formatters
import cli.model_formatters as model_formatters
from models.grade import CellColor
from models.journal import JournalView
from models.prediction import Prediction, PredictionCell, Trend
from models.student import StudentGrade, group_grades_by_course


def test_format_list_with_and():
    assert formatters.format_list_with_and([]) == ""
    assert formatters.format_list_with_and(["a"]) == "a"
    assert formatters.format_list_with_and(["a", "b"]) == "a and b"
    assert formatters.format_list_with_and(["a", "b", "c"]) == "a, b, and c"


def test_lesson_dates():
    assert formatters.format_lesson_date_short("2025-09-01") == "09/01"
    assert formatters.format_lesson_date_short("2025-09-01T08:30:00") == "09/01"
    assert formatters.format_lesson_date_short("someday") == "someday"
    assert formatters.format_lesson_date_long("2025-09-01") == "Monday, September 01, 2025"


def test_truncate():
    assert formatters.truncate("Anna", 10) == "Anna"
    assert formatters.truncate("Konstantinopolskaya", 6) == "Konst…"


def test_paint():
    assert model_formatters.paint("5", CellColor.HIGH) == "\033[32m5\033[0m"
    assert model_formatters.paint("5", CellColor.HIGH, enabled=False) == "5"
    assert model_formatters.paint("4", CellColor.NEUTRAL) == "4"


def test_journal_grid(journal_payload):
    journal = JournalView.from_payload("5", "10", journal_payload)

    lines = model_formatters.format_journal_grid(journal, color=False).splitlines()

    assert lines[0].startswith("Student")
    assert "09/01" in lines[0] and "09/03" in lines[0]
    assert len(lines) == 2 + 3
    assert lines[3].startswith("Boris Petrov")
    assert "5" in lines[3]
    assert lines[2].strip() == "Anna Ivanova"


def test_journal_grid_colors_filled_cell(journal_payload):
    journal = JournalView.from_payload("5", "10", journal_payload)

    rendered = model_formatters.format_journal_grid(journal)

    assert rendered.count("\033[32m") == 1


def test_journal_grid_without_lessons():
    journal = JournalView.from_payload(
        "5", "10", {"lessons": [], "students": [{"id": 1, "first_name": "Anna", "last_name": "I"}]}
    )

    assert "(no lessons yet)" in model_formatters.format_journal_grid(journal)


def test_grades_table_shows_prediction_state():
    grouped = group_grades_by_course(
        [StudentGrade("11", "Algebra", 5, "2025-09-01"), StudentGrade("12", "History", 0)]
    )
    resolved = PredictionCell("11")
    resolved.resolve(Prediction(4.5, Trend.UP))

    table = model_formatters.format_grades_table(
        grouped, {"11": resolved, "12": PredictionCell("12")}
    )

    algebra, history = table.splitlines()
    assert "5(2025-09-01)" in algebra
    assert algebra.endswith("next: 4.5 ↑")
    assert "Н" in history
    assert history.endswith("next: computing…")


def test_grades_table_empty():
    assert model_formatters.format_grades_table({}, {}) == "No grades yet."
