# api/admin.py

"""
Endpoint wrappers for the admin screens.

Covers user accounts, courses, students, teachers, groups, and teacher load (which teacher teaches
which course to which group). Every mutation validates its required fields locally first and
issues no call when one is missing.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from api.client import ApiClient, to_records
from core.response import ErrorCode, Response
from core.utils import wire_id
from models.course import Course, Group
from models.session import Role
from models.student import Student
from models.user import Teacher, TeacherLoad, User

# === validation helpers ===


def _missing_fields(**fields: object) -> Response | None:
    missing = [
        name for name, value in fields.items() if value is None or str(value).strip() == ""
    ]

    if not missing:
        return None

    return Response.fail(
        detail=f"Fill in the required fields: {', '.join(missing)}",
        error=ErrorCode.MISSING_REQUIRED_FIELD,
    )


def _invalid_field(detail: str) -> Response:
    return Response.fail(detail=detail, error=ErrorCode.INVALID_FIELD_VALUE)


# === users ===


def fetch_users(client: ApiClient) -> Response:
    return to_records(client.call("/admin/users"), User.from_dict, "users")


def create_user(
    client: ApiClient,
    login: str,
    password: str,
    role: str,
    first_name: str = "",
    last_name: str = "",
) -> Response:
    failure = _missing_fields(login=login, password=password, role=role)
    if failure:
        return failure

    if Role.parse(role.strip().upper()) is None:
        return _invalid_field(f"Role must be one of {', '.join(r.value for r in Role)}.")

    return client.call(
        "/admin/users",
        "POST",
        {
            "login": login.strip(),
            "password": password,
            "role": role.strip().upper(),
            "first_name": first_name,
            "last_name": last_name,
        },
    )


def update_user(
    client: ApiClient,
    user_id: str,
    login: str,
    role: str,
    first_name: str = "",
    last_name: str = "",
) -> Response:
    failure = _missing_fields(login=login, role=role)
    if failure:
        return failure

    if Role.parse(role.strip().upper()) is None:
        return _invalid_field(f"Role must be one of {', '.join(r.value for r in Role)}.")

    return client.call(
        f"/admin/users/{user_id}",
        "PUT",
        {
            "login": login.strip(),
            "role": role.strip().upper(),
            "first_name": first_name,
            "last_name": last_name,
        },
    )


def delete_user(client: ApiClient, user_id: str) -> Response:
    return client.call(f"/admin/users/{user_id}", "DELETE")


# === courses ===


def fetch_courses(client: ApiClient) -> Response:
    return to_records(client.call("/admin/courses"), Course.from_dict, "courses")


def create_course(client: ApiClient, name: str) -> Response:
    failure = _missing_fields(name=name)
    if failure:
        return failure

    return client.call("/admin/courses", "POST", {"name": name.strip()})


def rename_course(client: ApiClient, course_id: str, name: str) -> Response:
    failure = _missing_fields(name=name)
    if failure:
        return failure

    return client.call(f"/admin/courses/{course_id}", "PUT", {"name": name.strip()})


def delete_course(client: ApiClient, course_id: str) -> Response:
    return client.call(f"/admin/courses/{course_id}", "DELETE")


# === students ===


def fetch_students(client: ApiClient) -> Response:
    return to_records(client.call("/admin/students"), Student.from_dict, "students")


def create_student(
    client: ApiClient,
    first_name: str,
    last_name: str,
    dob: str,
    group_id: str | None,
    login: str,
    password: str,
) -> Response:
    failure = _missing_fields(
        first_name=first_name,
        last_name=last_name,
        dob=dob,
        login=login,
        password=password,
    )
    if failure:
        return failure

    try:
        dob = Student.validate_dob_input(dob)
    except ValueError as e:
        return _invalid_field(str(e))

    return client.call(
        "/admin/students",
        "POST",
        {
            "first_name": first_name.strip(),
            "last_name": last_name.strip(),
            "dob": dob,
            "group_id": wire_id(group_id) if group_id else None,
            "login": login.strip(),
            "password": password,
        },
    )


def update_student(
    client: ApiClient,
    student_id: str,
    first_name: str,
    last_name: str,
    dob: str,
    group_id: str | None,
) -> Response:
    failure = _missing_fields(first_name=first_name, last_name=last_name, dob=dob)
    if failure:
        return failure

    try:
        dob = Student.validate_dob_input(dob)
    except ValueError as e:
        return _invalid_field(str(e))

    return client.call(
        f"/admin/students/{student_id}/profile",
        "PUT",
        {
            "first_name": first_name.strip(),
            "last_name": last_name.strip(),
            "dob": dob,
            "group_id": wire_id(group_id) if group_id else None,
        },
    )


def delete_student(client: ApiClient, student_id: str) -> Response:
    return client.call(f"/admin/students/{student_id}", "DELETE")


# === teachers ===


def fetch_teachers(client: ApiClient) -> Response:
    return to_records(client.call("/admin/teachers"), Teacher.from_dict, "teachers")


def create_teacher(
    client: ApiClient,
    first_name: str,
    last_name: str,
    login: str,
    password: str,
    group_ids: list[int] | None = None,
) -> Response:
    failure = _missing_fields(
        first_name=first_name, last_name=last_name, login=login, password=password
    )
    if failure:
        return failure

    return client.call(
        "/admin/teachers",
        "POST",
        {
            "first_name": first_name.strip(),
            "last_name": last_name.strip(),
            "login": login.strip(),
            "password": password,
            "group_ids": [int(g) for g in group_ids or []],
        },
    )


def update_teacher(
    client: ApiClient,
    teacher_id: str,
    first_name: str,
    last_name: str,
    login: str,
    group_ids: list[int] | None = None,
) -> Response:
    failure = _missing_fields(first_name=first_name, last_name=last_name, login=login)
    if failure:
        return failure

    return client.call(
        f"/admin/teachers/{teacher_id}",
        "PUT",
        {
            "first_name": first_name.strip(),
            "last_name": last_name.strip(),
            "login": login.strip(),
            "group_ids": [int(g) for g in group_ids or []],
        },
    )


def delete_teacher(client: ApiClient, teacher_id: str) -> Response:
    return client.call(f"/admin/teachers/{teacher_id}", "DELETE")


# === groups ===


def fetch_groups(client: ApiClient) -> Response:
    return to_records(client.call("/admin/groups"), Group.from_dict, "groups")


def create_group(client: ApiClient, name: str) -> Response:
    failure = _missing_fields(name=name)
    if failure:
        return failure

    return client.call("/admin/groups", "POST", {"name": name.strip()})


def delete_group(client: ApiClient, group_id: str) -> Response:
    return client.call(f"/admin/groups/{group_id}", "DELETE")


# === teacher load ===


def fetch_teacher_loads(client: ApiClient) -> Response:
    return to_records(
        client.call("/admin/teachers/load"), TeacherLoad.from_dict, "teacher load"
    )


def assign_teacher_load(
    client: ApiClient, teacher_id: str, course_id: str, group_id: str
) -> Response:
    failure = _missing_fields(teacher_id=teacher_id, course_id=course_id, group_id=group_id)
    if failure:
        return failure

    return client.call(
        "/admin/teachers/load",
        "POST",
        {
            "teacher_id": wire_id(teacher_id),
            "course_id": wire_id(course_id),
            "group_id": wire_id(group_id),
        },
    )


def fetch_load_overview(client: ApiClient) -> Response:
    """
    Fetches courses, groups, teachers, and teacher load in parallel for the teacher-load screen.

    Args:
        client (ApiClient): The admin's client.

    Returns:
        Response: A structured response with the following contract:
            - success (bool):
                - True only if all four fetches succeeded.
                - False if any one of them failed; there is no partial result.
            - detail (str | None):
                - On failure, the message of the first failed fetch in the order courses, groups, teachers, loads.
            - error (ErrorCode | str | None):
                - The error code of that first failure.
            - data (dict | None): Payload with the following keys:
                - On success:
                    - "courses" (list[Course])
                    - "groups" (list[Group])
                    - "teachers" (list[Teacher])
                    - "loads" (list[TeacherLoad]): With display names resolved from the other three lists.
                - On failure:
                    - None

    Notes:
        - The four calls run on a thread pool and are all awaited before anything is inspected.
    """
    fetchers = {
        "courses": fetch_courses,
        "groups": fetch_groups,
        "teachers": fetch_teachers,
        "loads": fetch_teacher_loads,
    }

    with ThreadPoolExecutor(max_workers=len(fetchers)) as executor:
        futures = {key: executor.submit(fetch, client) for key, fetch in fetchers.items()}
        results = {key: future.result() for key, future in futures.items()}

    for response in results.values():
        if not response.success:
            return response

    records = {key: response.data["records"] for key, response in results.items()}

    teacher_names = {t.id: t.full_name for t in records["teachers"]}
    course_names = {c.id: c.name for c in records["courses"]}
    group_names = {g.id: g.name for g in records["groups"]}

    for load in records["loads"]:
        load.resolve_names(teacher_names, course_names, group_names)

    return Response.succeed(data=records)
