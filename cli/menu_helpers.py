# cli/menu_helpers.py

"""
Helper functions for CLI menus and user interaction in the School Portal.

The admin, teacher, and student menus all use these helpers to show numbered menus, read input,
pick a record out of a backend list, and report a failed `Response` as one `[ERROR: CODE]` line.
No helper here talks to the backend; callers pass in the `Response` they already have.
"""

from enum import Enum
from getpass import getpass
from typing import Any, Callable, Iterable

import core.formatters as formatters
from core.response import ErrorCode, Response
from models.types import RecordType


class MenuSignal(Enum):
    CANCEL = "CANCEL"
    EXIT = "EXIT"


# === display methods ===


def display_menu(
    title: str,
    options: list[tuple[str, Callable[..., Any]]],
    zero_option: str = "Return",
) -> MenuSignal | Callable[..., Any]:
    """
    Displays a numbered CLI menu and returns the selected action.

    Args:
        title (str): The heading displayed above the menu options.
        options (list[tuple[str, Callable[..., Any]]]): A list of (label, action) pairs to present.
        zero_option (str, optional): The label for the "cancel" or "exit" option. Defaults to "Return".

    Returns:
        MenuSignal.EXIT if the user selects the zero option.
        Callable[..., Any]: The function associated with the selected menu item.

    Notes:
        - Menu selection is repeated until a valid choice is made.
        - User input is matched by menu index, not by label.
    """
    while True:
        print(f"\n{title}")

        for i, (label, _) in enumerate(options, 1):
            print(f"{i}. {label}")

        print(f"0. {zero_option}")

        choice = prompt_user_input("Select an option: ")

        if choice == "0":
            return MenuSignal.EXIT

        try:
            index = int(choice) - 1
            if index < 0:
                raise IndexError(index)
            return options[index][1]

        except (ValueError, IndexError):
            print("Invalid selection. Please try again.")


def run_menu_loop(
    title: str,
    options: list[tuple[str, Callable[[], Any]]],
    zero_option: str,
) -> None:
    """
    Displays a menu repeatedly and dispatches to the selected zero-argument action until the user exits.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    while True:
        menu_response = display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            break

        elif callable(menu_response):
            menu_response()

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")


def display_results(
    results: Iterable[Any],
    show_index: bool = False,
    formatter: Callable[[Any], str] = lambda x: str(x),
) -> None:
    """
    Prints a list of results to the console, optionally numbered and formatted.

    Args:
        results (Iterable[Any]): A sequence of results to display.
        show_index (bool, optional): If True, prepends a numbered index to each result. Defaults to False.
        formatter (Callable[[Any], str], optional): A function to convert each result to a display string. Defaults to str().
    """
    for i, result in enumerate(results, 1):
        prefix = f"{i:>2}. " if show_index else ""
        print(f"{prefix}{formatter(result)}")


def display_records_response(
    response: Response,
    list_description: str,
    formatter: Callable[[Any], str] = lambda x: str(x),
) -> None:
    """
    Prints the records of a list `Response`, or its failure.

    Notes:
        - Records are printed in server order.
    """
    if not response.success:
        display_response_failure(response)
        return

    records = response.data["records"]

    print(f"\n{formatters.format_banner_text(list_description)}")

    if not records:
        print(f"There are no {list_description.lower()}.")
        return

    display_results(records, False, formatter)


# === prompt user input methods ===


# Prompt Helpers
#
# These functions provide a consistent way to handle user input and confirmation prompts.
#
# Conventions:
# - `prompt_user_input()` is the base function, used by all others to standardize the UI format.
# - Empty string responses are overloaded for control signals:
#     - `prompt_user_input_or_cancel()` returns `MenuSignal.CANCEL` on blank input.
#     - `prompt_user_input_or_none()` returns `None`.
# - `confirm_action()` loops until the user enters a valid yes/no response.


def confirm_action(prompt: str) -> bool:
    while True:
        choice = prompt_user_input(f"{prompt} (y/n): ").lower()

        if choice == "y" or choice == "yes":
            return True

        elif choice == "n" or choice == "no":
            return False

        else:
            print("Invalid selection. Please try again.")


def prompt_user_input(prompt: str) -> str:
    return input(f"\n{prompt}\n  >> ").strip()


def prompt_raw_input(prompt: str) -> str:
    return input(f"\n{prompt}\n  >> ")


def prompt_password(prompt: str) -> str:
    return getpass(f"\n{prompt}\n  >> ")


def prompt_user_input_or_cancel(prompt: str) -> str | MenuSignal:
    response = prompt_user_input(prompt)
    return MenuSignal.CANCEL if response == "" else response


def prompt_user_input_or_none(prompt: str) -> str | None:
    response = prompt_user_input(prompt)
    return None if response == "" else response


def prompt_user_input_or_default(prompt: str, default: str) -> str:
    response = prompt_user_input(f"{prompt} (leave blank to keep '{default}'):")
    return default if response == "" else response


# === select methods ===


def prompt_selection_from_list(
    list_data: list[RecordType],
    list_description: str,
    formatter: Callable[[RecordType], str] = lambda x: str(x),
) -> RecordType | None:
    """
    Prompts the user to select an item from a list of records.

    Args:
        list_data (list[RecordType]): The records to choose from.
        list_description (str): A short description used in prompts and headings (e.g. "students").
        formatter (Callable[[RecordType], str], optional): Function to convert each record to a display string. Defaults to str().

    Returns:
        RecordType: The selected record if a valid index is chosen.
        None: If the list is empty or the user cancels with "0".

    Notes:
        - Records are listed in the order given; journal columns in particular must not be reordered.
        - Menu is repeated until a valid selection is made or canceled.
    """
    if not list_data:
        print(f"\nThere are no {list_description.lower()}.")
        return

    while True:
        print(f"\n{formatters.format_banner_text(list_description)}")

        display_results(list_data, True, formatter)

        choice = prompt_user_input("Select an option (0 to cancel):")

        if choice == "0":
            return

        try:
            index = int(choice) - 1
            if index < 0:
                raise IndexError(index)
            return list_data[index]

        except (ValueError, IndexError):
            print("\nInvalid selection. Please try again.")


def select_from_response(
    response: Response,
    list_description: str,
    formatter: Callable[[Any], str] = lambda x: str(x),
) -> Any | None:
    """
    Prompts a selection from the records of a list `Response`; failures are displayed and yield None.
    """
    if not response.success:
        display_response_failure(response)
        return None

    return prompt_selection_from_list(response.data["records"], list_description, formatter)


# === often used messages ===


def returning_without_changes() -> None:
    print("\nReturning without changes.")


def returning_to(destination: str) -> None:
    print(f"\nReturning to {destination}.")


def caution_banner() -> None:
    caution_banner = formatters.format_banner_text("CAUTION!")
    print(f"\n{caution_banner}")


def access_denied() -> None:
    display_response_failure(
        Response.fail(
            detail="Your session cannot open this screen. Please log in again.",
            error=ErrorCode.ACCESS_DENIED,
            status_code=None,
        )
    )


def display_response_outcome(response: Response, success_message: str) -> None:
    if response.success:
        print(f"\n{success_message}")
    else:
        display_response_failure(response)


def display_response_failure(response: Response) -> None:
    """
    Displays a formatted error message based on a failed `Response`.

    Args:
        response (Response): The response object to inspect.

    Notes:
        - Does nothing if the response was successful.
        - Enum error codes are printed by name; string errors are printed as-is.
    """
    if response.success:
        return

    error_label = (
        response.error.name if isinstance(response.error, Enum) else str(response.error)
    )

    print(f"\n[ERROR: {error_label}] {response.detail}")
