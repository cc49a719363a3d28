# api/auth.py

"""
Login and logout against the records backend.
"""

import logging

from api.client import ApiClient
from core.response import ErrorCode, Response
from core.utils import first_present
from models.session import Role

logger = logging.getLogger("portal.auth")

LOGIN_FAILED_MESSAGE = "Login failed"


def login(client: ApiClient, login: str, password: str) -> Response:
    """
    Authenticates with the backend and establishes the client's session.

    Args:
        client (ApiClient): The client whose session will be established.
        login (str): The account login.
        password (str): The account password.

    Returns:
        Response: A structured response with the following contract:
            - success (bool):
                - True if the backend accepted the credentials and reported a known role and an id.
                - False otherwise; the session stays anonymous.
            - detail (str | None):
                - On failure, the message to show on the login screen (e.g. "Unknown role: BOGUS").
                - On success, None.
            - error (ErrorCode | str | None):
                - `ErrorCode.MISSING_REQUIRED_FIELD` if login or password is blank, or the response has no id.
                - `ErrorCode.UNKNOWN_ROLE` if the role is not ADMIN, TEACHER, or STUDENT.
                - The client's error code if the call itself failed.
            - data (dict | None): Payload with the following keys:
                - On success:
                    - "role" (Role): The established role.
                - On failure:
                    - None

    Notes:
        - The user id is read from "id", then "user_id", then "userId".
        - Mutates `client.session` only on success.
    """
    if not login.strip() or not password:
        return Response.fail(
            detail="Enter both login and password.",
            error=ErrorCode.MISSING_REQUIRED_FIELD,
        )

    response = client.call("/login", "POST", {"login": login, "password": password})

    if not response.success:
        return Response.fail(
            detail=response.detail or LOGIN_FAILED_MESSAGE,
            error=response.error,
            status_code=response.status_code,
        )

    payload = response.payload

    if not isinstance(payload, dict) or payload.get("status") != "success":
        return Response.fail(
            detail=LOGIN_FAILED_MESSAGE,
            error=ErrorCode.INVALID_INPUT,
            status_code=response.status_code,
        )

    raw_role = payload.get("role")
    role = Role.parse(raw_role)

    if role is None:
        logger.error("login returned unknown role %r", raw_role)
        return Response.fail(
            detail=f"Unknown role: {raw_role}",
            error=ErrorCode.UNKNOWN_ROLE,
            status_code=response.status_code,
        )

    user_id = first_present(payload, "id", "user_id", "userId")

    try:
        client.session.establish(role, user_id)

    except ValueError as e:
        return Response.fail(
            detail=str(e),
            error=ErrorCode.MISSING_REQUIRED_FIELD,
            status_code=response.status_code,
        )

    return Response.succeed(data={"role": role})


def logout(client: ApiClient) -> None:
    client.session.logout()
