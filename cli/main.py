# cli/main.py

"""
Start Menu for the School Portal CLI.

Reads the runtime configuration, then offers login. After a successful login the user is sent to
the menu for their role; leaving that menu logs out and returns here.
"""

import argparse
import logging

import cli.menu_helpers as helpers
import core.formatters as formatters
from api import auth
from api.client import ApiClient
from cli.menu_helpers import MenuSignal
from cli.menus import admin_menu, student_menu, teacher_menu
from core.config import Config, configure_logging
from models.session import Role, Session

logger = logging.getLogger("portal.cli")

ROLE_MENUS = {
    Role.ADMIN: admin_menu.run,
    Role.TEACHER: teacher_menu.run,
    Role.STUDENT: student_menu.run,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="school-portal", description="Terminal client for the school records portal."
    )
    parser.add_argument("--base-url", help="Root URL of the records backend.")
    parser.add_argument("--timeout", help="Per-request timeout in seconds.")
    parser.add_argument("--log-level", help="Console log threshold, e.g. INFO or DEBUG.")
    parser.add_argument(
        "--debug", action="store_true", help="Shorthand for --log-level DEBUG."
    )
    return parser


def load_config(argv: list[str] | None = None) -> Config:
    """
    Builds the runtime `Config` from the environment, then applies command-line overrides.

    Raises:
        ValueError: If the timeout or log level is invalid.
    """
    args = build_parser().parse_args(argv)
    config = Config.from_env()

    if args.base_url:
        config.base_url = args.base_url.rstrip("/")

    if args.timeout is not None:
        config.timeout = Config.validate_timeout(args.timeout)

    if args.debug:
        config.log_level = "DEBUG"
    elif args.log_level:
        config.log_level = args.log_level.upper()

    return config


def run_cli(argv: list[str] | None = None) -> None:
    """
    Top-level loop with dispatch for the Start menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    config = load_config(argv)
    configure_logging(config.log_level)

    logger.debug("starting with %r", config)

    client = ApiClient(config.base_url, Session(), timeout=config.timeout)

    title = formatters.format_banner_text("SCHOOL PORTAL")
    options = [("Log in", lambda: login(client))]
    zero_option = "Exit Program"

    while True:
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            exit_program()

        elif callable(menu_response):
            role = menu_response()

            if role is not None:
                ROLE_MENUS[role](client)
                auth.logout(client)
                print("\nLogged out.")

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")


def login(client: ApiClient) -> Role | None:
    """
    Prompts for credentials and logs in.

    Returns:
        Role: The role of the established session.
        None: If the user cancels or the login fails.

    Notes:
        - Failures (wrong credentials, unknown role, network failure) are shown and leave the session anonymous.
    """
    login_name = helpers.prompt_user_input_or_cancel("Enter your login (leave blank to cancel):")

    if login_name is MenuSignal.CANCEL:
        return None

    password = helpers.prompt_password("Enter your password:")

    print("\nLogging in ...")

    response = auth.login(client, str(login_name), password)

    if not response.success:
        helpers.display_response_failure(response)
        return None

    role = response.data["role"]

    print(f"... Logged in as {role.value}.")

    return role


def exit_program():
    """
    Displays an exit banner and terminates the CLI program.

    Raises:
        SystemExit: Always raised to immediately terminate execution.
    """
    exit_banner = formatters.format_banner_text("Exiting Program")
    print(f"\n{exit_banner}\n")

    raise SystemExit


if __name__ == "__main__":
    run_cli()
