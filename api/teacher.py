# api/teacher.py

"""
Endpoint wrappers for the teacher screens.

Each function issues exactly one call and returns a `Response`. List endpoints convert their payload
into model records under `data["records"]`.
"""

from api.client import ApiClient, to_records
from core.response import Response
from core.utils import wire_id
from models.course import Course, Group


def fetch_profile(client: ApiClient) -> Response:
    return client.call("/teacher/profile")


def fetch_courses(client: ApiClient) -> Response:
    return to_records(client.call("/teacher/courses"), Course.from_dict, "courses")


def fetch_groups_for_course(client: ApiClient, course_id: str) -> Response:
    return to_records(
        client.call(f"/teacher/courses/{course_id}/groups"), Group.from_dict, "groups"
    )


def fetch_journal(client: ApiClient, course_id: str, group_id: str) -> Response:
    return client.call(
        "/teacher/journal", params={"course_id": course_id, "group_id": group_id}
    )


def create_lesson(
    client: ApiClient,
    course_id: str,
    group_id: str,
    date: str,
    homework: str | None = None,
) -> Response:
    return client.call(
        "/teacher/lessons",
        "POST",
        {
            "course_id": wire_id(course_id),
            "group_id": wire_id(group_id),
            "date": date,
            "homework": homework,
        },
    )


def set_grade(
    client: ApiClient, student_id: str, lesson_id: str, grade: int | None
) -> Response:
    """Upserts the grade of one (student, lesson) cell; `None` clears it."""
    return client.call(
        "/teacher/grade",
        "POST",
        {
            "student_id": wire_id(student_id),
            "lesson_id": wire_id(lesson_id),
            "grade": grade,
        },
    )
