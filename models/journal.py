# models/journal.py

"""
The grade journal of one course taught to one group, and the editor that drives it.

The backend sends the journal sparsely: a list of lessons (columns), a list of students (rows), and
only the grades that exist. `JournalView` materializes that into a dense grid where every
(student, lesson) pair has exactly one `JournalCell`, blank when no grade exists.

`JournalEditor` is the selection state machine used by the teacher screen:

    NO_COURSE -> COURSE_SELECTED -> GROUP_SELECTED (grid visible)

Selecting a course resets the group and hides the grid; selecting a group loads the journal and
shows it. Every load rebuilds the grid from scratch. Each cell edit is validated locally and then
persisted on its own with one upsert call; nothing is batched, cached, or retried.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum

from api import teacher as teacher_api
from api.client import ApiClient
from core.response import ErrorCode, Response
from models.course import Group
from models.grade import (
    CellColor,
    GradeEntry,
    GradeValue,
    color_for,
    parse_grade_token,
)
from models.lesson import Lesson
from models.student import Student

logger = logging.getLogger("portal.journal")


class JournalState(Enum):
    NO_COURSE = "NO_COURSE"
    COURSE_SELECTED = "COURSE_SELECTED"
    GROUP_SELECTED = "GROUP_SELECTED"


class JournalCell:

    def __init__(self, student_id: str, lesson_id: str, value: GradeValue | None = None):
        self._student_id: str = student_id
        self._lesson_id: str = lesson_id
        self._value: GradeValue | None = value
        self._color: CellColor = color_for(value)
        # edit sequence numbers: last one handed out, last one whose response was applied
        self._issued: int = 0
        self._applied: int = 0

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
    def value(self) -> GradeValue | None:
        return self._value

    @property
    def display(self) -> str:
        return "" if self._value is None else self._value.label

    @property
    def color(self) -> CellColor:
        return self._color

    @property
    def is_blank(self) -> bool:
        return self._value is None

    # === sequencing ===

    def next_sequence(self) -> int:
        self._issued += 1
        return self._issued

    def is_stale(self, sequence: int) -> bool:
        return sequence < self._applied

    # === data manipulators ===

    def apply(self, value: GradeValue | None, sequence: int) -> None:
        self._value = value
        self._color = color_for(value)
        self._applied = sequence

    def mark_error(self, sequence: int) -> None:
        self._color = CellColor.ERROR
        self._applied = sequence

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"JournalCell({self._student_id}, {self._lesson_id}, {self.display!r}, {self._color.value})"


class JournalView:

    def __init__(
        self,
        course_id: str,
        group_id: str,
        lessons: list[Lesson],
        students: list[Student],
        grades: list[GradeEntry],
    ):
        self._course_id: str = course_id
        self._group_id: str = group_id
        self._lessons: list[Lesson] = _unique_by_id(lessons)
        self._students: list[Student] = _unique_by_id(students)
        self._cells: dict[tuple[str, str], JournalCell] = {}

        grade_lookup: dict[tuple[str, str], GradeValue] = {}

        for entry in grades:
            if entry.key in grade_lookup:
                logger.warning("duplicate grade for student=%s lesson=%s ignored", *entry.key)
                continue
            grade_lookup[entry.key] = entry.value

        for student in self._students:
            for lesson in self._lessons:
                key = (student.id, lesson.id)
                self._cells[key] = JournalCell(student.id, lesson.id, grade_lookup.get(key))

    # === properties ===

    @property
    def course_id(self) -> str:
        return self._course_id

    @property
    def group_id(self) -> str:
        return self._group_id

    @property
    def lessons(self) -> list[Lesson]:
        return list(self._lessons)

    @property
    def students(self) -> list[Student]:
        return list(self._students)

    @property
    def shape(self) -> tuple[int, int]:
        return (len(self._students), len(self._lessons))

    # === public classmethods ===

    @classmethod
    def from_payload(cls, course_id: str, group_id: str, payload: dict) -> JournalView:
        """
        Builds a dense `JournalView` from the sparse journal payload.

        Args:
            course_id (str): The selected course.
            group_id (str): The selected group.
            payload (dict): The decoded body of `GET /teacher/journal`, with "lessons", "students", and "grades" lists.

        Returns:
            A new `JournalView`.

        Raises:
            ValueError: If the payload is not an object, one of its lists is missing, or a list holds a non-object entry.
            KeyError: If a lesson or student record has no id.

        Notes:
            - Lesson order is kept exactly as received.
            - Grade entries with unrecognized values are skipped with a warning rather than failing the whole load.
        """
        if not isinstance(payload, dict):
            raise ValueError("journal payload must be an object")

        for key in ("lessons", "students"):
            if not isinstance(payload.get(key), list):
                raise ValueError(f"journal payload is missing the '{key}' list")

            if not all(isinstance(item, dict) for item in payload[key]):
                raise ValueError(f"journal payload has a non-object entry in '{key}'")

        grades: list[GradeEntry] = []

        for item in payload.get("grades") or []:
            if not isinstance(item, dict):
                logger.warning("skipping malformed grade entry %r", item)
                continue

            try:
                entry = GradeEntry.from_dict(item)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("skipping malformed grade entry %r: %s", item, e)
                continue

            if entry is not None:
                grades.append(entry)

        return cls(
            course_id=course_id,
            group_id=group_id,
            lessons=[Lesson.from_dict(item) for item in payload["lessons"]],
            students=[Student.from_dict(item) for item in payload["students"]],
            grades=grades,
        )

    # === data accessors ===

    def cell(self, student_id: str, lesson_id: str) -> JournalCell | None:
        return self._cells.get((str(student_id), str(lesson_id)))

    def row(self, student_id: str) -> list[JournalCell]:
        return [self._cells[(str(student_id), lesson.id)] for lesson in self._lessons]

    def rows(self) -> list[tuple[Student, list[JournalCell]]]:
        return [(student, self.row(student.id)) for student in self._students]

    def filled_cells(self) -> list[JournalCell]:
        return [cell for cell in self._cells.values() if not cell.is_blank]

    def snapshot(self) -> list[list[str]]:
        """Returns the displayed grid as text, one list per student row."""
        return [[cell.display for cell in cells] for _, cells in self.rows()]

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"JournalView({self._course_id}, {self._group_id}, {self.shape})"


class JournalEditor:

    def __init__(self, client: ApiClient):
        self._client = client
        self._state: JournalState = JournalState.NO_COURSE
        self._course_id: str | None = None
        self._group_id: str | None = None
        self._groups: list[Group] = []
        self._journal: JournalView | None = None
        self._lock = threading.Lock()

    # === properties ===

    @property
    def state(self) -> JournalState:
        return self._state

    @property
    def course_id(self) -> str | None:
        return self._course_id

    @property
    def group_id(self) -> str | None:
        return self._group_id

    @property
    def groups(self) -> list[Group]:
        return list(self._groups)

    @property
    def journal(self) -> JournalView | None:
        return self._journal

    @property
    def grid_visible(self) -> bool:
        return self._state is JournalState.GROUP_SELECTED and self._journal is not None

    # === selection ===

    def select_course(self, course_id: str) -> Response:
        """
        Selects a course and fetches the groups it is taught to.

        Args:
            course_id (str): The course to select.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the groups were fetched; the editor is then COURSE_SELECTED.
                    - False if the fetch failed; the editor is then NO_COURSE.
                - error (ErrorCode | str | None):
                    - The error of the groups fetch on failure.
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "records" (list[Group]): The groups of the course.
                    - On failure:
                        - None

        Notes:
            - Any previous group selection is dropped and the grid is hidden before the fetch.
        """
        course_id = str(course_id)

        self._group_id = None
        self._journal = None
        self._groups = []
        self._course_id = None
        self._state = JournalState.NO_COURSE

        response = teacher_api.fetch_groups_for_course(self._client, course_id)

        if not response.success:
            return response

        self._course_id = course_id
        self._groups = response.data["records"]
        self._state = JournalState.COURSE_SELECTED

        return response

    def select_group(self, group_id: str) -> Response:
        """
        Selects a group of the current course and loads its journal.

        Args:
            group_id (str): The group to select.

        Returns:
            Response: The result of `load_journal()`, or a `VALIDATION_FAILED` failure if no course is selected.

        Notes:
            - On success the editor is GROUP_SELECTED with a freshly built grid.
            - On failure the editor falls back to COURSE_SELECTED with no grid.
            - Selecting the same group again re-fetches and rebuilds the grid.
        """
        if self._state is JournalState.NO_COURSE or self._course_id is None:
            return Response.fail(
                detail="Select a course before selecting a group.",
                error=ErrorCode.VALIDATION_FAILED,
            )

        group_id = str(group_id)

        self._group_id = group_id
        self._journal = None
        self._state = JournalState.COURSE_SELECTED

        response = self.load_journal(self._course_id, group_id)

        if not response.success:
            return response

        self._journal = response.data["journal"]
        self._state = JournalState.GROUP_SELECTED

        return response

    def reload(self) -> Response:
        if self._group_id is None:
            return Response.fail(
                detail="Select a group before reloading the journal.",
                error=ErrorCode.VALIDATION_FAILED,
            )

        return self.select_group(self._group_id)

    # === journal ===

    def load_journal(self, course_id: str, group_id: str) -> Response:
        """
        Fetches the sparse journal of a course and group and builds a dense grid from it.

        Args:
            course_id (str): The course id.
            group_id (str): The group id.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the journal was fetched and decoded.
                    - False for failed calls or malformed payloads.
                - detail (str | None):
                    - On failure, the server message or a description of the malformed payload.
                - error (ErrorCode | str | None):
                    - The client's error code for failed calls.
                    - `ErrorCode.INVALID_INPUT` for malformed payloads.
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "journal" (JournalView): The dense grid.
                        - "lessons" (list[Lesson]): Columns, in server order.
                        - "students" (list[Student]): Rows, in server order.
                        - "grades" (list[JournalCell]): The cells that hold a grade.
                    - On failure:
                        - None

        Notes:
            - This method is read-only with respect to the editor state.
        """
        course_id, group_id = str(course_id), str(group_id)

        response = teacher_api.fetch_journal(self._client, course_id, group_id)

        if not response.success:
            return response

        try:
            journal = JournalView.from_payload(course_id, group_id, response.payload)

        except (KeyError, TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Malformed journal: {e}",
                error=ErrorCode.INVALID_INPUT,
                status_code=response.status_code,
            )

        return Response.succeed(
            data={
                "journal": journal,
                "lessons": journal.lessons,
                "students": journal.students,
                "grades": journal.filled_cells(),
            }
        )

    def edit_cell(self, student_id: str, lesson_id: str, raw_value: str) -> Response:
        """
        Validates and persists an edit of one journal cell.

        Args:
            student_id (str): The row of the cell.
            lesson_id (str): The column of the cell.
            raw_value (str): What the user typed: "2".."5", "Н"/"N" in either case for an absence, or blank to clear.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the upsert succeeded; the cell shows the new value and its color.
                    - False otherwise; the cell keeps its last known-good value.
                - detail (str | None):
                    - On failure, the validation or server message.
                    - On success, a confirmation message.
                - error (ErrorCode | str | None):
                    - `ErrorCode.VALIDATION_FAILED` if no journal is shown.
                    - `ErrorCode.NOT_FOUND` if the cell is not part of the grid.
                    - `ErrorCode.INVALID_FIELD_VALUE` if the input is not an accepted token; no call is made.
                    - The client's error code if the upsert failed; the cell is colored as an error.
                - data (dict | None): Payload with the following keys:
                    - "cell" (JournalCell): The edited cell, whenever it exists.
                    - "stale" (bool): True if a newer edit of this cell was applied first and this result was dropped.

        Notes:
            - Exactly one upsert is issued per accepted token; none for rejected input.
            - Nothing is retried.
        """
        if self._journal is None:
            return Response.fail(
                detail="Select a course and group before editing grades.",
                error=ErrorCode.VALIDATION_FAILED,
            )

        journal = self._journal
        cell = journal.cell(student_id, lesson_id)

        if cell is None:
            return Response.fail(
                detail=f"No journal cell for student {student_id} and lesson {lesson_id}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        try:
            value = parse_grade_token(raw_value)

        except ValueError as e:
            return Response.fail(
                detail=str(e),
                error=ErrorCode.INVALID_FIELD_VALUE,
                data={"cell": cell, "stale": False},
            )

        with self._lock:
            sequence = cell.next_sequence()

        response = teacher_api.set_grade(
            self._client,
            cell.student_id,
            cell.lesson_id,
            value.wire_value if value is not None else None,
        )

        with self._lock:
            if cell.is_stale(sequence):
                logger.info("dropping stale result for cell %s edit #%s", cell.key, sequence)
                return Response(
                    success=response.success,
                    detail="A newer edit of this cell was already applied.",
                    error=response.error,
                    status_code=response.status_code,
                    data={"cell": cell, "stale": True},
                )

            if not response.success:
                cell.mark_error(sequence)
                return Response.fail(
                    detail=response.detail,
                    error=response.error,
                    status_code=response.status_code,
                    data={"cell": cell, "stale": False},
                )

            cell.apply(value, sequence)

        shown = value.label if value is not None else "blank"

        return Response.succeed(
            detail=f"Grade saved: {shown}.",
            status_code=response.status_code,
            data={"cell": cell, "stale": False},
        )

    def add_lesson(self, date: str, homework: str | None = None) -> Response:
        """
        Creates a lesson for the selected course and group, then reloads the journal.

        Args:
            date (str): Lesson date as YYYY-MM-DD.
            homework (str | None, optional): Homework note for the lesson.

        Returns:
            Response: The reload result on success, the creation failure otherwise.
                - `ErrorCode.VALIDATION_FAILED` if no group is selected.
                - `ErrorCode.INVALID_FIELD_VALUE` if the date is not a valid ISO date.

        Notes:
            - Lessons are immutable once created; there is no edit or delete.
        """
        if self._state is not JournalState.GROUP_SELECTED or self._course_id is None:
            return Response.fail(
                detail="Select a course and group before adding a lesson.",
                error=ErrorCode.VALIDATION_FAILED,
            )

        try:
            date = Lesson.validate_date_input(date)
        except ValueError as e:
            return Response.fail(detail=str(e), error=ErrorCode.INVALID_FIELD_VALUE)

        homework = homework.strip() if homework and homework.strip() else None

        response = teacher_api.create_lesson(
            self._client, self._course_id, self._group_id, date, homework
        )

        if not response.success:
            return response

        return self.reload()


# === helper methods ===


def _unique_by_id(records: list) -> list:
    seen: set[str] = set()
    unique = []

    for record in records:
        if record.id in seen:
            continue
        seen.add(record.id)
        unique.append(record)

    return unique
