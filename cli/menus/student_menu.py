# cli/menus/student_menu.py

"""
Student menu for the School Portal CLI.

Provides the student's own grades (grouped by course, with a predicted next grade per course),
profile, group list, and password change.

Predictions are looked up in the background; the grades table is printed straight away and a
course whose prediction has not arrived yet shows as still computing.
"""

from functools import partial

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from api import student as student_api
from api.client import ApiClient
from models.prediction import PredictionBoard
from models.session import Role, require_role
from models.student import group_grades_by_course


def run(client: ApiClient) -> None:
    """
    Top-level loop with dispatch for the Student menu.

    Args:
        client (ApiClient): The client holding the student's session.

    Notes:
        - The role gate runs before anything else; a mismatch logs out and returns without any call.
        - The grades table is shown once on entry, like the landing tab of the portal.
    """
    if not require_role(client.session, Role.STUDENT):
        helpers.access_denied()
        return

    student_id = client.session.user_id
    board = PredictionBoard(partial(student_api.fetch_prediction, client, student_id))

    title = formatters.format_banner_text("STUDENT PORTAL")
    options = [
        ("View Grades", lambda: view_grades(client, board)),
        ("View Profile", lambda: view_profile(client)),
        ("View My Group", lambda: view_group(client)),
        ("Change Password", lambda: change_password(client)),
    ]
    zero_option = "Log out"

    try:
        view_grades(client, board)
        helpers.run_menu_loop(title, options, zero_option)

    finally:
        board.close()


def view_grades(client: ApiClient, board: PredictionBoard) -> None:
    """
    Prints the student's grades grouped by course name.

    Notes:
        - Each course with a known id gets a prediction cell; lookups start here and never block the print.
        - Choosing this option again re-fetches the grades and shows any predictions that have arrived since.
    """
    response = student_api.fetch_grades(client, client.session.user_id)

    if not response.success:
        helpers.display_response_failure(response)
        return

    grouped = group_grades_by_course(response.data["records"])

    for grades in grouped.values():
        course_id = grades[0].course_id
        if course_id is not None:
            board.request(course_id)

    print(f"\n{formatters.format_banner_text('My Grades')}")
    print(model_formatters.format_grades_table(grouped, board.cells))


def view_profile(client: ApiClient) -> None:
    response = student_api.fetch_profile(client, client.session.user_id)

    if not response.success:
        helpers.display_response_failure(response)
        return

    print(f"\n{formatters.format_banner_text('Profile')}")
    print(model_formatters.format_student_profile(response.data["record"]))


def view_group(client: ApiClient) -> None:
    helpers.display_records_response(
        student_api.fetch_group_members(client, client.session.user_id),
        "My Group",
        model_formatters.format_member_oneline,
    )


def change_password(client: ApiClient) -> None:
    new_password = helpers.prompt_password("Enter a new password:")

    if not new_password:
        helpers.returning_without_changes()
        return

    if not helpers.confirm_action("Change your password?"):
        helpers.returning_without_changes()
        return

    response = student_api.change_password(client, client.session.user_id, new_password)

    helpers.display_response_outcome(response, "Password changed.")
