# models/student.py

"""
Represents a student and the student-facing records the portal reads.

`Student` holds the profile fields kept by the backend (name, date of birth, group, login).
`StudentGrade` is one row of a student's own grade list, and `GroupMember` is one classmate row
with the average grade the backend computes.

Includes functionality for:
- Tolerant import from the backend's JSON shapes
- Validating a date of birth before it is sent to the backend
- Grouping a student's grades by course name
"""

from __future__ import annotations

import datetime

from core.utils import first_present
from models.grade import GradeValue

UNKNOWN_COURSE = "Unknown course"


class Student:

    def __init__(
        self,
        id: str,
        first_name: str,
        last_name: str,
        dob: str | None = None,
        group_id: str | None = None,
        login: str | None = None,
    ):
        self._id: str = id
        self._first_name: str = first_name
        self._last_name: str = last_name
        self._dob: str | None = dob
        self._group_id: str | None = group_id
        self._login: str | None = login

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def full_name(self) -> str:
        return f"{self._first_name} {self._last_name}".strip()

    @property
    def dob(self) -> str | None:
        return self._dob

    @property
    def group_id(self) -> str | None:
        return self._group_id

    @property
    def login(self) -> str | None:
        return self._login

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "first_name": self._first_name,
            "last_name": self._last_name,
            "dob": self._dob,
            "group_id": self._group_id,
            "login": self._login,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Student:
        student_id = first_present(data, "id", "student_id")

        if student_id is None:
            raise KeyError("student id")

        first_name = data.get("first_name")
        last_name = data.get("last_name")

        # journal rows sometimes carry a single display name instead of split fields
        if first_name is None and last_name is None:
            first_name = first_present(data, "student_name", "name", default="")
            last_name = ""

        group_id = data.get("group_id")

        return cls(
            id=str(student_id),
            first_name=first_name or "",
            last_name=last_name or "",
            dob=data.get("dob") or None,
            group_id=str(group_id) if group_id not in (None, "", 0) else None,
            login=data.get("login"),
        )

    # === data validators ===

    @staticmethod
    def validate_dob_input(dob: str) -> str:
        """
        Validates a date of birth entered on a student form.

        Args:
            dob: The input string, expected as YYYY-MM-DD.

        Returns:
            The normalized ISO date string.

        Raises:
            ValueError: If the string is not an ISO date or lies in the future.
        """
        try:
            parsed = datetime.date.fromisoformat(dob.strip())
        except ValueError:
            raise ValueError(f"Invalid date of birth '{dob}'. Use the format YYYY-MM-DD.")

        if parsed > datetime.date.today():
            raise ValueError("Date of birth cannot be in the future.")

        return parsed.isoformat()

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Student({self._id}, {self._first_name}, {self._last_name}, {self._group_id})"

    def __str__(self) -> str:
        return f"STUDENT: {self.full_name} (ID: {self._id})"


class StudentGrade:

    def __init__(
        self,
        course_id: str | None,
        course_name: str,
        grade: object,
        date_assigned: str | None = None,
    ):
        self._course_id: str | None = course_id
        self._course_name: str = course_name
        self._grade: object = grade
        self._date_assigned: str | None = date_assigned

    # === properties ===

    @property
    def course_id(self) -> str | None:
        return self._course_id

    @property
    def course_name(self) -> str:
        return self._course_name

    @property
    def grade(self) -> object:
        return self._grade

    @property
    def date_assigned(self) -> str | None:
        return self._date_assigned

    @property
    def label(self) -> str:
        try:
            value = GradeValue.from_wire(self._grade)
        except ValueError:
            return str(self._grade)
        return "" if value is None else value.label

    # === persistence and import ===

    @classmethod
    def from_dict(cls, data: dict) -> StudentGrade:
        course_id = data.get("course_id")

        return cls(
            course_id=str(course_id) if course_id is not None else None,
            course_name=data.get("course_name") or UNKNOWN_COURSE,
            grade=data.get("grade"),
            date_assigned=data.get("date_assigned") or None,
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return (
            f"StudentGrade({self._course_id}, {self._course_name}, "
            f"{self._grade}, {self._date_assigned})"
        )


class GroupMember:

    def __init__(
        self, id: str, first_name: str, last_name: str, average_grade: float | None
    ):
        self._id: str = id
        self._first_name: str = first_name
        self._last_name: str = last_name
        self._average_grade: float | None = average_grade

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def full_name(self) -> str:
        return f"{self._first_name} {self._last_name}".strip()

    @property
    def average_grade(self) -> float | None:
        return self._average_grade

    # === persistence and import ===

    @classmethod
    def from_dict(cls, data: dict) -> GroupMember:
        average = data.get("average_grade")

        return cls(
            id=str(first_present(data, "id", "student_id", default="")),
            first_name=first_present(data, "first_name", "name", default=""),
            last_name=data.get("last_name") or "",
            average_grade=float(average) if average is not None else None,
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"GroupMember({self._id}, {self.full_name}, {self._average_grade})"


def group_grades_by_course(grades: list[StudentGrade]) -> dict[str, list[StudentGrade]]:
    """
    Groups grade rows by course name, preserving the order in which courses first appear.
    """
    grouped: dict[str, list[StudentGrade]] = {}

    for grade in grades:
        grouped.setdefault(grade.course_name, []).append(grade)

    return grouped
