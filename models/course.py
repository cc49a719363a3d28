# models/course.py

"""
Represents courses and student groups as the portal receives them from the backend.

The backend is not consistent about key names across endpoints (`name` vs `course_name`,
`id` vs `group_id`), so `from_dict()` accepts either spelling.
"""

from __future__ import annotations

from core.utils import first_present


class Course:

    def __init__(self, id: str, name: str):
        self._id: str = id
        self._name: str = name

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {"id": self._id, "name": self._name}

    @classmethod
    def from_dict(cls, data: dict) -> Course:
        course_id = first_present(data, "id", "course_id")

        if course_id is None:
            raise KeyError("course id")

        return cls(
            id=str(course_id),
            name=first_present(data, "name", "course_name", default=""),
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Course) and other.id == self._id

    def __hash__(self) -> int:
        return hash(("course", self._id))

    def __repr__(self) -> str:
        return f"Course({self._id}, {self._name})"

    def __str__(self) -> str:
        return f"COURSE: {self._name} (ID: {self._id})"


class Group:

    def __init__(self, id: str, name: str, student_count: int | None = None):
        self._id: str = id
        self._name: str = name
        self._student_count: int | None = student_count

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def student_count(self) -> int | None:
        return self._student_count

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "student_count": self._student_count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Group:
        group_id = first_present(data, "id", "group_id")

        if group_id is None:
            raise KeyError("group id")

        count = first_present(data, "student_count", "students_count")

        return cls(
            id=str(group_id),
            name=first_present(data, "name", "group_name", default=""),
            student_count=int(count) if count is not None else None,
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Group) and other.id == self._id

    def __hash__(self) -> int:
        return hash(("group", self._id))

    def __repr__(self) -> str:
        return f"Group({self._id}, {self._name}, {self._student_count})"

    def __str__(self) -> str:
        return f"GROUP: {self._name} (ID: {self._id})"
