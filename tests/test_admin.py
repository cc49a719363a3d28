# tests/test_admin.py

import datetime

from api import admin as admin_api
from core.response import ErrorCode

COURSES = [{"id": 11, "name": "Algebra"}, {"id": 12, "name": "History"}]
GROUPS = [{"id": 10, "name": "9A"}]
TEACHERS = [{"id": 7, "first_name": "Olga", "last_name": "Smirnova", "login": "olga"}]
LOADS = [{"id": 1, "teacher_id": 7, "course_id": 11, "group_id": 10}]


def _route_overview(http, teachers_status=200, teachers_body=TEACHERS):
    http.route("GET", "/admin/courses", body=COURSES)
    http.route("GET", "/admin/groups", body=GROUPS)
    http.route("GET", "/admin/teachers", status_code=teachers_status, body=teachers_body)
    http.route("GET", "/admin/teachers/load", body=LOADS)


# === validation ===


def test_create_course_requires_name(http, admin_client):
    response = admin_api.create_course(admin_client, "  ")

    assert response.error is ErrorCode.MISSING_REQUIRED_FIELD
    assert http.calls == []


def test_create_student_lists_missing_fields(http, admin_client):
    response = admin_api.create_student(
        admin_client, "Anna", "", "2010-04-02", None, "", "pw"
    )

    assert response.error is ErrorCode.MISSING_REQUIRED_FIELD
    assert response.detail == "Fill in the required fields: last_name, login"
    assert http.calls == []


def test_create_student_rejects_future_birth_date(http, admin_client):
    tomorrow = (datetime.date.today() + datetime.timedelta(days=1)).isoformat()

    response = admin_api.create_student(
        admin_client, "Anna", "Ivanova", tomorrow, None, "anna", "pw"
    )

    assert response.error is ErrorCode.INVALID_FIELD_VALUE
    assert http.calls == []


def test_create_student_sends_profile(http, admin_client):
    http.queue(text="Student created")

    response = admin_api.create_student(
        admin_client, " Anna ", "Ivanova", "2010-04-02", "10", "anna", "pw"
    )

    assert response.success
    assert response.detail == "Student created"
    assert http.calls[0]["body"] == {
        "first_name": "Anna",
        "last_name": "Ivanova",
        "dob": "2010-04-02",
        "group_id": 10,
        "login": "anna",
        "password": "pw",
    }


def test_create_user_rejects_unknown_role(http, admin_client):
    response = admin_api.create_user(admin_client, "x", "pw", "JANITOR")

    assert response.error is ErrorCode.INVALID_FIELD_VALUE
    assert http.calls == []


def test_create_user_normalizes_role(http, admin_client):
    http.queue(text="")

    admin_api.create_user(admin_client, "olga", "pw", "teacher", "Olga", "Smirnova")

    assert http.calls[0]["body"]["role"] == "TEACHER"
    assert http.calls[0]["headers"]["role"] == "ADMIN"


def test_update_teacher_sends_group_ids_as_numbers(http, admin_client):
    http.queue(text="")

    admin_api.update_teacher(admin_client, "7", "Olga", "Smirnova", "olga", [10, 12])

    call = http.calls[0]
    assert call["method"] == "PUT"
    assert call["path"] == "/admin/teachers/7"
    assert call["body"]["group_ids"] == [10, 12]


def test_delete_group_surfaces_server_refusal(http, admin_client):
    http.queue(status_code=409, body={"error": "Group still has students"})

    response = admin_api.delete_group(admin_client, "10")

    assert not response.success
    assert response.detail == "Group still has students"
    assert http.calls[0]["method"] == "DELETE"


def test_assign_teacher_load(http, admin_client):
    http.queue(text="Load assigned")

    response = admin_api.assign_teacher_load(admin_client, "7", "11", "10")

    assert response.success
    assert http.calls[0]["body"] == {"teacher_id": 7, "course_id": 11, "group_id": 10}


def test_assign_teacher_load_requires_all_ids(http, admin_client):
    response = admin_api.assign_teacher_load(admin_client, "7", "", "10")

    assert response.error is ErrorCode.MISSING_REQUIRED_FIELD
    assert http.calls == []


# === parallel overview ===


def test_load_overview_resolves_names(http, admin_client):
    _route_overview(http)

    response = admin_api.fetch_load_overview(admin_client)

    assert response.success
    load = response.data["loads"][0]
    assert load.teacher_name == "Olga Smirnova"
    assert load.course_name == "Algebra"
    assert load.group_name == "9A"
    assert len(response.data["courses"]) == 2


def test_load_overview_abandons_on_single_failure(http, admin_client):
    _route_overview(http, teachers_status=500, teachers_body={"error": "teachers unavailable"})

    response = admin_api.fetch_load_overview(admin_client)

    assert not response.success
    assert response.detail == "teachers unavailable"
    assert response.data == {}
    assert len(http.calls) == 4
