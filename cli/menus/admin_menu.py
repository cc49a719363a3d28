# cli/menus/admin_menu.py

"""
Admin menu for the School Portal CLI.

Provides management screens for:
- User accounts (any role)
- Courses
- Students
- Teachers and the groups they teach
- Groups
- Teacher load (which teacher teaches which course to which group)

Each screen follows the same pattern: list records from the backend, then add, edit, or delete one.
Required fields are checked by the `api.admin` wrappers, which issue no call when one is missing.
"""

from typing import Callable

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from api import admin as admin_api
from api.client import ApiClient
from core.response import ErrorCode, Response
from core.utils import parse_id_list
from models.session import Role, require_role


def run(client: ApiClient) -> None:
    """
    Top-level loop with dispatch for the Admin menu.

    Args:
        client (ApiClient): The client holding the admin's session.

    Notes:
        - The role gate runs before anything else; a mismatch logs out and returns without any call.
    """
    if not require_role(client.session, Role.ADMIN):
        helpers.access_denied()
        return

    title = formatters.format_banner_text("ADMIN PORTAL")
    options = [
        ("Manage Users", lambda: users_menu(client)),
        ("Manage Courses", lambda: courses_menu(client)),
        ("Manage Students", lambda: students_menu(client)),
        ("Manage Teachers", lambda: teachers_menu(client)),
        ("Manage Groups", lambda: groups_menu(client)),
        ("Manage Teacher Load", lambda: load_menu(client)),
    ]
    zero_option = "Log out"

    helpers.run_menu_loop(title, options, zero_option)


def _submenu(title: str, options: list[tuple[str, Callable[[], None]]]) -> None:
    helpers.run_menu_loop(
        formatters.format_banner_text(title), options, "Return to Admin menu"
    )
    helpers.returning_to("Admin menu")


def _confirm_delete(description: str) -> bool:
    helpers.caution_banner()
    return helpers.confirm_action(f"Delete {description}? This cannot be undone.")


def _parse_group_ids(raw: str) -> list[int] | Response:
    try:
        return parse_id_list(raw)
    except ValueError as e:
        return Response.fail(detail=str(e), error=ErrorCode.INVALID_FIELD_VALUE)


# === users ===


def users_menu(client: ApiClient) -> None:
    _submenu(
        "Manage Users",
        [
            ("View Users", lambda: view_users(client)),
            ("Add User", lambda: add_user(client)),
            ("Edit User", lambda: edit_user(client)),
            ("Delete User", lambda: delete_user(client)),
        ],
    )


def view_users(client: ApiClient) -> None:
    helpers.display_records_response(
        admin_api.fetch_users(client), "Users", model_formatters.format_user_oneline
    )


def add_user(client: ApiClient) -> None:
    login = helpers.prompt_user_input("Enter the login:")
    password = helpers.prompt_password("Enter the password:")
    role = helpers.prompt_user_input("Enter the role (ADMIN, TEACHER, STUDENT):")
    first_name = helpers.prompt_user_input("Enter the first name (optional):")
    last_name = helpers.prompt_user_input("Enter the last name (optional):")

    response = admin_api.create_user(client, login, password, role, first_name, last_name)

    helpers.display_response_outcome(response, f"User '{login}' created.")


def edit_user(client: ApiClient) -> None:
    user = helpers.select_from_response(
        admin_api.fetch_users(client), "Users", model_formatters.format_user_oneline
    )

    if user is None:
        helpers.returning_without_changes()
        return

    login = helpers.prompt_user_input_or_default("Enter the login", user.login)
    role = helpers.prompt_user_input_or_default("Enter the role", user.role)
    first_name = helpers.prompt_user_input_or_default("Enter the first name", user.first_name)
    last_name = helpers.prompt_user_input_or_default("Enter the last name", user.last_name)

    response = admin_api.update_user(client, user.id, login, role, first_name, last_name)

    helpers.display_response_outcome(response, f"User '{login}' updated.")


def delete_user(client: ApiClient) -> None:
    user = helpers.select_from_response(
        admin_api.fetch_users(client), "Users", model_formatters.format_user_oneline
    )

    if user is None or not _confirm_delete(f"user '{user.login}'"):
        helpers.returning_without_changes()
        return

    response = admin_api.delete_user(client, user.id)

    helpers.display_response_outcome(response, f"User '{user.login}' deleted.")


# === courses ===


def courses_menu(client: ApiClient) -> None:
    _submenu(
        "Manage Courses",
        [
            ("View Courses", lambda: view_courses(client)),
            ("Add Course", lambda: add_course(client)),
            ("Rename Course", lambda: rename_course(client)),
            ("Delete Course", lambda: delete_course(client)),
        ],
    )


def view_courses(client: ApiClient) -> None:
    helpers.display_records_response(
        admin_api.fetch_courses(client), "Courses", model_formatters.format_course_oneline
    )


def add_course(client: ApiClient) -> None:
    name = helpers.prompt_user_input("Enter the course name:")

    response = admin_api.create_course(client, name)

    helpers.display_response_outcome(response, f"Course '{name}' created.")


def rename_course(client: ApiClient) -> None:
    course = helpers.select_from_response(
        admin_api.fetch_courses(client), "Courses", model_formatters.format_course_oneline
    )

    if course is None:
        helpers.returning_without_changes()
        return

    name = helpers.prompt_user_input_or_default("Enter the new course name", course.name)

    if name == course.name:
        helpers.returning_without_changes()
        return

    response = admin_api.rename_course(client, course.id, name)

    helpers.display_response_outcome(response, f"Course renamed to '{name}'.")


def delete_course(client: ApiClient) -> None:
    course = helpers.select_from_response(
        admin_api.fetch_courses(client), "Courses", model_formatters.format_course_oneline
    )

    if course is None or not _confirm_delete(f"course '{course.name}'"):
        helpers.returning_without_changes()
        return

    response = admin_api.delete_course(client, course.id)

    helpers.display_response_outcome(response, f"Course '{course.name}' deleted.")


# === students ===


def students_menu(client: ApiClient) -> None:
    _submenu(
        "Manage Students",
        [
            ("View Students", lambda: view_students(client)),
            ("Add Student", lambda: add_student(client)),
            ("Edit Student", lambda: edit_student(client)),
            ("Delete Student", lambda: delete_student(client)),
        ],
    )


def view_students(client: ApiClient) -> None:
    helpers.display_records_response(
        admin_api.fetch_students(client), "Students", model_formatters.format_student_oneline
    )


def add_student(client: ApiClient) -> None:
    first_name = helpers.prompt_user_input("Enter the first name:")
    last_name = helpers.prompt_user_input("Enter the last name:")
    dob = helpers.prompt_user_input("Enter the date of birth (YYYY-MM-DD):")
    group_id = helpers.prompt_user_input_or_none("Enter the group ID (optional):")
    login = helpers.prompt_user_input("Enter the login:")
    password = helpers.prompt_password("Enter the password:")

    response = admin_api.create_student(
        client, first_name, last_name, dob, group_id, login, password
    )

    helpers.display_response_outcome(response, f"Student '{first_name} {last_name}' created.")


def edit_student(client: ApiClient) -> None:
    student = helpers.select_from_response(
        admin_api.fetch_students(client), "Students", model_formatters.format_student_oneline
    )

    if student is None:
        helpers.returning_without_changes()
        return

    first_name = helpers.prompt_user_input_or_default("Enter the first name", student.first_name)
    last_name = helpers.prompt_user_input_or_default("Enter the last name", student.last_name)
    dob = helpers.prompt_user_input_or_default("Enter the date of birth", student.dob or "")
    group_id = helpers.prompt_user_input_or_default("Enter the group ID", student.group_id or "")

    response = admin_api.update_student(
        client, student.id, first_name, last_name, dob, group_id or None
    )

    helpers.display_response_outcome(response, f"Student '{first_name} {last_name}' updated.")


def delete_student(client: ApiClient) -> None:
    student = helpers.select_from_response(
        admin_api.fetch_students(client), "Students", model_formatters.format_student_oneline
    )

    if student is None or not _confirm_delete(f"student '{student.full_name}'"):
        helpers.returning_without_changes()
        return

    response = admin_api.delete_student(client, student.id)

    helpers.display_response_outcome(response, f"Student '{student.full_name}' deleted.")


# === teachers ===


def teachers_menu(client: ApiClient) -> None:
    _submenu(
        "Manage Teachers",
        [
            ("View Teachers", lambda: view_teachers(client)),
            ("Add Teacher", lambda: add_teacher(client)),
            ("Edit Teacher", lambda: edit_teacher(client)),
            ("Delete Teacher", lambda: delete_teacher(client)),
        ],
    )


def view_teachers(client: ApiClient) -> None:
    helpers.display_records_response(
        admin_api.fetch_teachers(client), "Teachers", model_formatters.format_teacher_oneline
    )


def add_teacher(client: ApiClient) -> None:
    first_name = helpers.prompt_user_input("Enter the first name:")
    last_name = helpers.prompt_user_input("Enter the last name:")
    login = helpers.prompt_user_input("Enter the login:")
    password = helpers.prompt_password("Enter the password:")
    raw_groups = helpers.prompt_user_input("Enter group IDs separated by commas (optional):")

    group_ids = _parse_group_ids(raw_groups)

    if isinstance(group_ids, Response):
        helpers.display_response_failure(group_ids)
        return

    response = admin_api.create_teacher(
        client, first_name, last_name, login, password, group_ids
    )

    helpers.display_response_outcome(response, f"Teacher '{first_name} {last_name}' created.")


def edit_teacher(client: ApiClient) -> None:
    teacher = helpers.select_from_response(
        admin_api.fetch_teachers(client), "Teachers", model_formatters.format_teacher_oneline
    )

    if teacher is None:
        helpers.returning_without_changes()
        return

    first_name = helpers.prompt_user_input_or_default("Enter the first name", teacher.first_name)
    last_name = helpers.prompt_user_input_or_default("Enter the last name", teacher.last_name)
    login = helpers.prompt_user_input_or_default("Enter the login", teacher.login)
    raw_groups = helpers.prompt_user_input_or_default(
        "Enter group IDs separated by commas",
        ", ".join(str(g) for g in teacher.group_ids),
    )

    group_ids = _parse_group_ids(raw_groups)

    if isinstance(group_ids, Response):
        helpers.display_response_failure(group_ids)
        return

    response = admin_api.update_teacher(
        client, teacher.id, first_name, last_name, login, group_ids
    )

    helpers.display_response_outcome(response, f"Teacher '{first_name} {last_name}' updated.")


def delete_teacher(client: ApiClient) -> None:
    teacher = helpers.select_from_response(
        admin_api.fetch_teachers(client), "Teachers", model_formatters.format_teacher_oneline
    )

    if teacher is None or not _confirm_delete(f"teacher '{teacher.full_name}'"):
        helpers.returning_without_changes()
        return

    response = admin_api.delete_teacher(client, teacher.id)

    helpers.display_response_outcome(response, f"Teacher '{teacher.full_name}' deleted.")


# === groups ===


def groups_menu(client: ApiClient) -> None:
    _submenu(
        "Manage Groups",
        [
            ("View Groups", lambda: view_groups(client)),
            ("Add Group", lambda: add_group(client)),
            ("Delete Group", lambda: delete_group(client)),
        ],
    )


def view_groups(client: ApiClient) -> None:
    helpers.display_records_response(
        admin_api.fetch_groups(client), "Groups", model_formatters.format_group_oneline
    )


def add_group(client: ApiClient) -> None:
    name = helpers.prompt_user_input("Enter the group name:")

    response = admin_api.create_group(client, name)

    helpers.display_response_outcome(response, f"Group '{name}' created.")


def delete_group(client: ApiClient) -> None:
    """
    Deletes a group after an explicit confirmation.

    Notes:
        - The backend rejects deleting a group that still has students; its message is shown as-is.
    """
    group = helpers.select_from_response(
        admin_api.fetch_groups(client), "Groups", model_formatters.format_group_oneline
    )

    if group is None or not _confirm_delete(f"group '{group.name}'"):
        helpers.returning_without_changes()
        return

    response = admin_api.delete_group(client, group.id)

    helpers.display_response_outcome(response, f"Group '{group.name}' deleted.")


# === teacher load ===


def load_menu(client: ApiClient) -> None:
    _submenu(
        "Manage Teacher Load",
        [
            ("View Teacher Load", lambda: view_load(client)),
            ("Assign Teacher Load", lambda: assign_load(client)),
        ],
    )


def view_load(client: ApiClient) -> None:
    response = admin_api.fetch_load_overview(client)

    if not response.success:
        helpers.display_response_failure(response)
        return

    print(f"\n{formatters.format_banner_text('Teacher Load')}")

    loads = response.data["loads"]

    if not loads:
        print("No teacher load has been assigned yet.")
        return

    helpers.display_results(loads, False, model_formatters.format_load_oneline)


def assign_load(client: ApiClient) -> None:
    """
    Assigns a course and group to a teacher.

    Notes:
        - The three pick lists come from one parallel overview fetch; if any part fails nothing is shown.
    """
    overview = admin_api.fetch_load_overview(client)

    if not overview.success:
        helpers.display_response_failure(overview)
        return

    teacher = helpers.prompt_selection_from_list(
        overview.data["teachers"], "Teachers", model_formatters.format_teacher_oneline
    )
    if teacher is None:
        helpers.returning_without_changes()
        return

    course = helpers.prompt_selection_from_list(
        overview.data["courses"], "Courses", model_formatters.format_course_oneline
    )
    if course is None:
        helpers.returning_without_changes()
        return

    group = helpers.prompt_selection_from_list(
        overview.data["groups"], "Groups", model_formatters.format_group_oneline
    )
    if group is None:
        helpers.returning_without_changes()
        return

    response = admin_api.assign_teacher_load(client, teacher.id, course.id, group.id)

    helpers.display_response_outcome(
        response,
        f"{teacher.full_name} now teaches {course.name} to {group.name}.",
    )
