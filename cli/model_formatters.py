# cli/model_formatters.py

from textwrap import dedent

import core.formatters as formatters
from models.course import Course, Group
from models.grade import CellColor
from models.journal import JournalView
from models.lesson import Lesson
from models.prediction import PredictionCell
from models.student import GroupMember, Student, StudentGrade
from models.user import Teacher, TeacherLoad, User

# ANSI escapes for journal cells; NONE and NEUTRAL keep the terminal default
CELL_STYLES: dict[CellColor, str] = {
    CellColor.NONE: "",
    CellColor.NEUTRAL: "",
    CellColor.HIGH: "\033[32m",
    CellColor.LOW: "\033[31m",
    CellColor.ABSENT: "\033[90m",
    CellColor.ERROR: "\033[97;41m",
}
RESET = "\033[0m"

NAME_WIDTH = 22
CELL_WIDTH = 6


def paint(text: str, color: CellColor, enabled: bool = True) -> str:
    style = CELL_STYLES[color]
    return f"{style}{text}{RESET}" if enabled and style else text


# === User formatters ===


def format_user_oneline(user: User) -> str:
    return f"{user.id:>4} | {user.login:<16} | {user.role:<8} | {user.full_name}"


# === Course and Group formatters ===


def format_course_oneline(course: Course) -> str:
    return f"{course.id:>4} | {course.name}"


def format_group_oneline(group: Group) -> str:
    count = f" ({group.student_count} students)" if group.student_count is not None else ""
    return f"{group.id:>4} | {group.name}{count}"


# === Student formatters ===


def format_student_oneline(student: Student) -> str:
    login = student.login or "-"
    return (
        f"{student.id:>4} | {student.full_name:<24} | {login:<12} "
        f"| {student.dob or '':<10} | group {student.group_id or '-'}"
    )


def format_student_profile(student: Student) -> str:
    return dedent(
        f"""\
        ... First name: {student.first_name}
        ... Last name: {student.last_name}
        ... Date of birth: {student.dob or 'not set'}
        ... Group ID: {student.group_id or 'not set'}"""
    )


def format_member_oneline(member: GroupMember) -> str:
    average = f"{member.average_grade:.2f}" if member.average_grade is not None else "-"
    return f"{member.full_name:<24} | {average}"


# === Teacher formatters ===


def format_teacher_oneline(teacher: Teacher) -> str:
    groups = formatters.format_list_with_and(teacher.group_names) or "no groups"
    return f"{teacher.id:>4} | {teacher.full_name:<24} | {teacher.login:<12} | {groups}"


def format_load_oneline(load: TeacherLoad) -> str:
    return (
        f"{load.teacher_name or load.teacher_id:<24} | "
        f"{load.course_name or load.course_id:<20} | {load.group_name or load.group_id}"
    )


# === Journal formatters ===


def format_lesson_oneline(lesson: Lesson) -> str:
    homework = f" | HW: {lesson.homework}" if lesson.homework else ""
    return f"{formatters.format_lesson_date_long(lesson.date)}{homework}"


def format_journal_grid(journal: JournalView, color: bool = True) -> str:
    """
    Renders the dense journal grid as a text table, one row per student and one column per lesson.

    Notes:
        - Columns appear in the order the lessons were received.
        - Cell colors follow `CellColor`; pass color=False for plain text.
    """
    header = f"{'Student':<{NAME_WIDTH}}" + "".join(
        f"{formatters.format_lesson_date_short(lesson.date):^{CELL_WIDTH}}"
        for lesson in journal.lessons
    )
    lines = [header, "-" * len(header)]

    for student, cells in journal.rows():
        name = formatters.truncate(student.full_name, NAME_WIDTH - 1)
        rendered = "".join(
            paint(f"{cell.display:^{CELL_WIDTH}}", cell.color, color) for cell in cells
        )
        lines.append(f"{name:<{NAME_WIDTH}}{rendered}")

    if not journal.lessons:
        lines.append("(no lessons yet)")

    return "\n".join(lines)


# === Student grades formatters ===


def format_grades_table(
    grouped: dict[str, list[StudentGrade]],
    predictions: dict[str, PredictionCell],
) -> str:
    """
    Renders a student's grades grouped by course, with the prediction cell of each course.

    Args:
        grouped (dict[str, list[StudentGrade]]): Grades keyed by course name.
        predictions (dict[str, PredictionCell]): Prediction cells keyed by course id.
    """
    lines = []

    for course_name, grades in grouped.items():
        marks = " ".join(
            grade.label + (f"({grade.date_assigned})" if grade.date_assigned else "")
            for grade in grades
        )
        course_id = grades[0].course_id
        cell = predictions.get(course_id) if course_id is not None else None
        forecast = f" | next: {cell.label}" if cell is not None else ""
        lines.append(f"{course_name:<20} | {marks}{forecast}")

    return "\n".join(lines) if lines else "No grades yet."
