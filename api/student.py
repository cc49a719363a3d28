# api/student.py

"""
Endpoint wrappers for the student screens.

All routes are scoped by the student id held in the session.
"""

from api.client import ApiClient, to_record, to_records
from core.response import ErrorCode, Response
from models.prediction import Prediction
from models.student import GroupMember, Student, StudentGrade


def fetch_profile(client: ApiClient, student_id: str) -> Response:
    return to_record(
        client.call(f"/students/{student_id}/profile"), Student.from_dict, "profile"
    )


def fetch_grades(client: ApiClient, student_id: str) -> Response:
    return to_records(
        client.call(f"/students/{student_id}/grades"), StudentGrade.from_dict, "grades"
    )


def fetch_group_members(client: ApiClient, student_id: str) -> Response:
    return to_records(
        client.call(f"/students/{student_id}/group"), GroupMember.from_dict, "group"
    )


def fetch_prediction(client: ApiClient, student_id: str, course_id: str) -> Response:
    return to_record(
        client.call(f"/students/{student_id}/predict", params={"course_id": course_id}),
        Prediction.from_dict,
        "prediction",
    )


def change_password(client: ApiClient, student_id: str, new_password: str) -> Response:
    if not new_password.strip():
        return Response.fail(
            detail="The new password cannot be blank.",
            error=ErrorCode.MISSING_REQUIRED_FIELD,
        )

    return client.call(
        f"/students/{student_id}/password", "PUT", {"new_password": new_password}
    )
