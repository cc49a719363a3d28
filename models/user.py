# models/user.py

"""
Represents portal accounts and teacher assignments as administered from the admin screens.

`User` is a login account of any role. `Teacher` is a teacher profile with the groups it teaches,
and `TeacherLoad` records which teacher teaches which course to which group.
"""

from __future__ import annotations

from core.utils import first_present


class User:

    def __init__(
        self,
        id: str,
        login: str,
        role: str,
        first_name: str = "",
        last_name: str = "",
    ):
        self._id: str = id
        self._login: str = login
        self._role: str = role
        self._first_name: str = first_name
        self._last_name: str = last_name

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def login(self) -> str:
        return self._login

    @property
    def role(self) -> str:
        return self._role

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def full_name(self) -> str:
        return f"{self._first_name} {self._last_name}".strip()

    # === persistence and import ===

    @classmethod
    def from_dict(cls, data: dict) -> User:
        return cls(
            id=str(data["id"]),
            login=data.get("login") or "",
            role=data.get("role") or "",
            first_name=data.get("first_name") or "",
            last_name=data.get("last_name") or "",
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"User({self._id}, {self._login}, {self._role})"


class Teacher:

    def __init__(
        self,
        id: str,
        first_name: str,
        last_name: str,
        login: str = "",
        group_ids: list[int] | None = None,
        group_names: list[str] | None = None,
    ):
        self._id: str = id
        self._first_name: str = first_name
        self._last_name: str = last_name
        self._login: str = login
        self._group_ids: list[int] = group_ids or []
        self._group_names: list[str] = group_names or []

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
    def login(self) -> str:
        return self._login

    @property
    def group_ids(self) -> list[int]:
        return list(self._group_ids)

    @property
    def group_names(self) -> list[str]:
        return list(self._group_names)

    # === persistence and import ===

    @classmethod
    def from_dict(cls, data: dict) -> Teacher:
        teacher_id = first_present(data, "id", "teacher_id")

        if teacher_id is None:
            raise KeyError("teacher id")

        return cls(
            id=str(teacher_id),
            first_name=data.get("first_name") or "",
            last_name=data.get("last_name") or "",
            login=data.get("login") or "",
            group_ids=[int(g) for g in data.get("group_ids") or []],
            group_names=list(data.get("group_names") or []),
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Teacher({self._id}, {self.full_name}, {self._group_ids})"


class TeacherLoad:

    def __init__(
        self,
        id: str | None,
        teacher_id: str,
        course_id: str,
        group_id: str,
        teacher_name: str = "",
        course_name: str = "",
        group_name: str = "",
    ):
        self._id: str | None = id
        self._teacher_id: str = teacher_id
        self._course_id: str = course_id
        self._group_id: str = group_id
        self._teacher_name: str = teacher_name
        self._course_name: str = course_name
        self._group_name: str = group_name

    # === properties ===

    @property
    def id(self) -> str | None:
        return self._id

    @property
    def teacher_id(self) -> str:
        return self._teacher_id

    @property
    def course_id(self) -> str:
        return self._course_id

    @property
    def group_id(self) -> str:
        return self._group_id

    @property
    def teacher_name(self) -> str:
        return self._teacher_name

    @property
    def course_name(self) -> str:
        return self._course_name

    @property
    def group_name(self) -> str:
        return self._group_name

    # === persistence and import ===

    @classmethod
    def from_dict(cls, data: dict) -> TeacherLoad:
        load_id = data.get("id")

        return cls(
            id=str(load_id) if load_id is not None else None,
            teacher_id=str(data["teacher_id"]),
            course_id=str(data["course_id"]),
            group_id=str(data["group_id"]),
            teacher_name=data.get("teacher_name") or "",
            course_name=data.get("course_name") or "",
            group_name=data.get("group_name") or "",
        )

    # === data manipulators ===

    def resolve_names(
        self,
        teachers: dict[str, str],
        courses: dict[str, str],
        groups: dict[str, str],
    ) -> None:
        """Fills in display names the backend left out, using id → name lookups."""
        self._teacher_name = self._teacher_name or teachers.get(self._teacher_id, "")
        self._course_name = self._course_name or courses.get(self._course_id, "")
        self._group_name = self._group_name or groups.get(self._group_id, "")

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"TeacherLoad({self._teacher_id}, {self._course_id}, {self._group_id})"
