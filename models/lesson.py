# models/lesson.py

"""
Represents one lesson (a journal column) of a course taught to a group.

Lessons are created by a teacher and never edited afterwards. The backend orders them by date;
the portal keeps that order as received.
"""

from __future__ import annotations

import datetime

from core.utils import first_present


class Lesson:

    def __init__(
        self,
        id: str,
        date: str,
        course_id: str | None = None,
        group_id: str | None = None,
        homework: str | None = None,
    ):
        self._id: str = id
        self._date: str = date
        self._course_id: str | None = course_id
        self._group_id: str | None = group_id
        self._homework: str | None = homework

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def date(self) -> str:
        return self._date

    @property
    def course_id(self) -> str | None:
        return self._course_id

    @property
    def group_id(self) -> str | None:
        return self._group_id

    @property
    def homework(self) -> str | None:
        return self._homework

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "date": self._date,
            "course_id": self._course_id,
            "group_id": self._group_id,
            "homework": self._homework,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Lesson:
        lesson_id = first_present(data, "id", "lesson_id")

        if lesson_id is None:
            raise KeyError("lesson id")

        course_id = data.get("course_id")
        group_id = data.get("group_id")

        return cls(
            id=str(lesson_id),
            date=str(first_present(data, "date", "lesson_date", default="")),
            course_id=str(course_id) if course_id is not None else None,
            group_id=str(group_id) if group_id is not None else None,
            homework=first_present(data, "homework", "homework_note"),
        )

    # === data validators ===

    @staticmethod
    def validate_date_input(date_str: str) -> str:
        """
        Validates a lesson date entered by a teacher.

        Args:
            date_str: The input string, expected as YYYY-MM-DD.

        Returns:
            The normalized ISO date string.

        Raises:
            ValueError: If the string is not a valid calendar date in ISO format.
        """
        try:
            return datetime.date.fromisoformat(date_str.strip()).isoformat()
        except ValueError:
            raise ValueError(f"Invalid date '{date_str}'. Use the format YYYY-MM-DD.")

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Lesson({self._id}, {self._date}, {self._course_id}, {self._group_id})"

    def __str__(self) -> str:
        return f"LESSON: {self._date} (ID: {self._id})"
