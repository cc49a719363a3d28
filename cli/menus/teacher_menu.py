# cli/menus/teacher_menu.py

"""
Teacher menu for the School Portal CLI.

Provides the teacher profile, the course list, and the grade journal editor:
- Select a course, then one of its groups, to show the journal grid
- Edit one grade cell at a time; every accepted edit is saved immediately
- Add a lesson (a new journal column) to the selected course and group

All journal operations are routed through `JournalEditor`, which validates input and talks to the backend.
"""

from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from api import teacher as teacher_api
from api.client import ApiClient
from cli.menu_helpers import MenuSignal
from models.grade import ABSENCE_MARK
from models.journal import JournalEditor, JournalState
from models.session import Role, require_role


def run(client: ApiClient) -> None:
    """
    Top-level loop with dispatch for the Teacher menu.

    Args:
        client (ApiClient): The client holding the teacher's session.

    Notes:
        - The role gate runs before anything else; a mismatch logs out and returns without any call.
    """
    if not require_role(client.session, Role.TEACHER):
        helpers.access_denied()
        return

    editor = JournalEditor(client)

    title = formatters.format_banner_text("TEACHER PORTAL")
    options = [
        ("Open Grade Journal", lambda: open_journal(client, editor)),
        ("View My Courses", lambda: view_courses(client)),
        ("View Profile", lambda: view_profile(client)),
    ]
    zero_option = "Log out"

    helpers.run_menu_loop(title, options, zero_option)


# === profile and courses ===


def view_profile(client: ApiClient) -> None:
    response = teacher_api.fetch_profile(client)

    if not response.success:
        helpers.display_response_failure(response)
        return

    profile = response.payload if isinstance(response.payload, dict) else {}

    print(f"\n{formatters.format_banner_text('Profile')}")
    print(f"... Name: {profile.get('first_name', '')} {profile.get('last_name', '')}")
    print(f"... Login: {profile.get('login', '')}")


def view_courses(client: ApiClient) -> None:
    helpers.display_records_response(
        teacher_api.fetch_courses(client),
        "My Courses",
        model_formatters.format_course_oneline,
    )


# === journal selection ===


def open_journal(client: ApiClient, editor: JournalEditor) -> None:
    """
    Walks the teacher through course and group selection, then opens the journal menu.

    Args:
        client (ApiClient): The teacher's client.
        editor (JournalEditor): The editor that keeps the selection state.

    Notes:
        - Cancelling at either step returns without opening the journal.
    """
    course = helpers.select_from_response(
        teacher_api.fetch_courses(client),
        "My Courses",
        model_formatters.format_course_oneline,
    )

    if course is None:
        helpers.returning_without_changes()
        return

    course_response = editor.select_course(course.id)

    if not course_response.success:
        helpers.display_response_failure(course_response)
        return

    if not select_group(editor):
        return

    journal_menu(editor)


def select_group(editor: JournalEditor) -> bool:
    group = helpers.prompt_selection_from_list(
        editor.groups, "Groups", model_formatters.format_group_oneline
    )

    if group is None:
        helpers.returning_without_changes()
        return False

    print("\nLoading journal ...")

    response = editor.select_group(group.id)

    if not response.success:
        helpers.display_response_failure(response)
        return False

    return True


# === journal menu ===


def journal_menu(editor: JournalEditor) -> None:
    """
    Loop for the open journal: shows the grid and dispatches to grid actions.

    Notes:
        - The grid is re-rendered from the editor's current journal before every prompt.
    """
    options = [
        ("Edit Grade", lambda: edit_grade(editor)),
        ("Add Lesson", lambda: add_lesson(editor)),
        ("View Lessons", lambda: view_lessons(editor)),
        ("Reload Journal", lambda: reload_journal(editor)),
        ("Switch Group", lambda: select_group(editor)),
    ]
    zero_option = "Return to Teacher menu"

    while editor.grid_visible:
        journal = editor.journal
        print(f"\n{model_formatters.format_journal_grid(journal)}")

        menu_response = helpers.display_menu(
            formatters.format_banner_text("Grade Journal"), options, zero_option
        )

        if menu_response is MenuSignal.EXIT:
            break

        elif callable(menu_response):
            menu_response()

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

    helpers.returning_to("Teacher menu")


def edit_grade(editor: JournalEditor) -> None:
    """
    Prompts for a student, a lesson, and a grade, then saves that single cell.

    Notes:
        - Invalid input is rejected before any call and the cell keeps its previous value.
        - A failed save leaves the value unchanged and colors the cell as an error.
    """
    journal = editor.journal

    if journal is None:
        return

    student = helpers.prompt_selection_from_list(
        journal.students, "Students", lambda s: s.full_name
    )

    if student is None:
        return

    lesson = helpers.prompt_selection_from_list(
        journal.lessons, "Lessons", model_formatters.format_lesson_oneline
    )

    if lesson is None:
        return

    cell = journal.cell(student.id, lesson.id)
    current = cell.display if cell else ""

    raw_value = helpers.prompt_raw_input(
        f"Current grade: '{current}'. Enter 2-5, '{ABSENCE_MARK}' for an absence, or leave blank to clear:"
    )

    response = editor.edit_cell(student.id, lesson.id, raw_value)

    if response.success:
        print(f"\n{response.detail}")
        return

    helpers.display_response_failure(response)

    if "cell" in response.data:
        shown = response.data["cell"].display
        print(f"Cell kept its value: '{shown}'.")


def add_lesson(editor: JournalEditor) -> None:
    date = helpers.prompt_user_input_or_cancel(
        "Enter the lesson date (YYYY-MM-DD, leave blank to cancel):"
    )

    if date is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    date = cast(str, date)

    homework = helpers.prompt_user_input_or_none("Enter homework (optional):")

    response = editor.add_lesson(date, homework)

    helpers.display_response_outcome(response, "Lesson added.")


def view_lessons(editor: JournalEditor) -> None:
    journal = editor.journal

    if journal is None:
        return

    print(f"\n{formatters.format_banner_text('Lessons')}")
    helpers.display_results(journal.lessons, True, model_formatters.format_lesson_oneline)


def reload_journal(editor: JournalEditor) -> None:
    response = editor.reload()

    if not response.success:
        helpers.display_response_failure(response)

    if editor.state is not JournalState.GROUP_SELECTED:
        print("\nThe journal is no longer available.")
