# models/grade.py

"""
Represents a single journal grade and the rules for entering one.

A grade is one of 2, 3, 4, 5 or the absence mark "Н". The absence mark travels over the wire as 0;
a cleared cell travels as null. A missing grade is a normal "not graded yet" state, not an error.

Includes functionality for:
- Validating raw cell input into a `GradeValue` (or None for a cleared cell)
- Mapping grade values to cell colors
- Serializing grade entries to and from the backend's JSON shape
"""

from __future__ import annotations

from enum import Enum

ABSENCE_MARK = "Н"

# Cyrillic and Latin spellings of the absence mark, compared case-insensitively
ABSENCE_TOKENS = frozenset({"н", "n"})

INVALID_GRADE_MESSAGE = f"Grade must be 2-5, '{ABSENCE_MARK}' or blank"


class GradeValue(Enum):
    ABSENT = 0
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5

    @property
    def label(self) -> str:
        return ABSENCE_MARK if self is GradeValue.ABSENT else str(self.value)

    @property
    def wire_value(self) -> int:
        return self.value

    @classmethod
    def from_wire(cls, raw: object) -> GradeValue | None:
        """
        Converts a grade as sent by the backend into a `GradeValue`.

        Returns:
            The matching `GradeValue`, or None if the backend sent null.

        Raises:
            ValueError: If the value is not 0, 2, 3, 4, 5, the absence mark, or null.
        """
        if raw is None:
            return None

        if isinstance(raw, str):
            if raw.strip().lower() in ABSENCE_TOKENS:
                return cls.ABSENT
            raw = raw.strip()

        try:
            return cls(int(raw))
        except (TypeError, ValueError):
            raise ValueError(f"Unrecognized grade value from server: {raw!r}")


class CellColor(str, Enum):
    NONE = "none"
    HIGH = "green"
    LOW = "red"
    NEUTRAL = "neutral"
    ABSENT = "grey"
    ERROR = "error"


GRADE_COLORS: dict[GradeValue, CellColor] = {
    GradeValue.FIVE: CellColor.HIGH,
    GradeValue.FOUR: CellColor.NEUTRAL,
    GradeValue.THREE: CellColor.NEUTRAL,
    GradeValue.TWO: CellColor.LOW,
    GradeValue.ABSENT: CellColor.ABSENT,
}


def color_for(value: GradeValue | None) -> CellColor:
    return CellColor.NONE if value is None else GRADE_COLORS[value]


def parse_grade_token(raw: str) -> GradeValue | None:
    """
    Validates raw cell input.

    Args:
        raw (str): What the user typed into the cell.

    Returns:
        The `GradeValue` for "2".."5" or the absence mark, or None for blank input (clear the cell).

    Raises:
        ValueError: For any other input, including other digits, words, and multi-character marks.
    """
    token = (raw or "").strip()

    if token == "":
        return None

    if token.lower() in ABSENCE_TOKENS:
        return GradeValue.ABSENT

    if token in ("2", "3", "4", "5"):
        return GradeValue(int(token))

    raise ValueError(INVALID_GRADE_MESSAGE)


class GradeEntry:

    def __init__(self, student_id: str, lesson_id: str, value: GradeValue):
        self._student_id: str = student_id
        self._lesson_id: str = lesson_id
        self._value: GradeValue = value

    # === properties ===

    @property
    def student_id(self) -> str:
        return self._student_id

    @property
    def lesson_id(self) -> str:
        return self._lesson_id

    @property
    def key(self) -> tuple[str, str]:
        return (self._student_id, self._lesson_id)

    @property
    def value(self) -> GradeValue:
        return self._value

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "student_id": self._student_id,
            "lesson_id": self._lesson_id,
            "grade": self._value.wire_value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> GradeEntry | None:
        value = GradeValue.from_wire(data.get("grade"))

        if value is None:
            return None

        return cls(
            student_id=str(data["student_id"]),
            lesson_id=str(data["lesson_id"]),
            value=value,
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"GradeEntry({self._student_id}, {self._lesson_id}, {self._value.label})"
