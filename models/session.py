# models/session.py

"""
Represents the authenticated context of the portal user.

A `Session` holds the role and user identifier returned by a successful login. It is created once
per portal process and passed explicitly to the API client and to every view; nothing reads it from
a global. Logging out clears every field and returns the session to the anonymous state.

Includes functionality for:
- Establishing a session from a recognized role and identifier
- Clearing the session on logout
- Gating views on the required role
"""

from __future__ import annotations

import logging
from enum import Enum

logger = logging.getLogger("portal.session")


class Role(str, Enum):
    ADMIN = "ADMIN"
    TEACHER = "TEACHER"
    STUDENT = "STUDENT"

    @classmethod
    def parse(cls, raw: object) -> Role | None:
        return cls._value2member_map_.get(raw) if isinstance(raw, str) else None


class Session:

    def __init__(self):
        self._role: Role | None = None
        self._user_id: str | None = None

    # === properties ===

    @property
    def role(self) -> Role | None:
        return self._role

    @property
    def user_id(self) -> str | None:
        return self._user_id

    @property
    def is_authenticated(self) -> bool:
        return self._role is not None and self._user_id is not None

    @property
    def state(self) -> str:
        return self._role.value if self._role else "ANONYMOUS"

    def headers(self) -> dict[str, str]:
        return {
            "role": self._role.value if self._role else "",
            "user_id": self._user_id or "",
        }

    # === state transitions ===

    def establish(self, role: Role | str, user_id: object) -> None:
        """
        Moves the session from ANONYMOUS to an authenticated role.

        Args:
            role (Role | str): The role reported by the login endpoint.
            user_id (object): The identifier reported by the login endpoint; stored as a string.

        Raises:
            ValueError: If the role is not recognized or the identifier is missing.

        Notes:
            - On failure the session is left untouched.
        """
        parsed_role = role if isinstance(role, Role) else Role.parse(role)

        if parsed_role is None:
            raise ValueError(f"Unknown role: {role}")

        if user_id is None or str(user_id).strip() == "":
            raise ValueError("Login response did not include a user id.")

        self._role = parsed_role
        self._user_id = str(user_id).strip()

        logger.debug("session established role=%s", self._role.value)

    def logout(self) -> None:
        self._role = None
        self._user_id = None

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Session({self.state}, {self._user_id})"


def require_role(session: Session, required: Role) -> bool:
    """
    Verifies that the session may open a view gated on `required`.

    Args:
        session (Session): The current session.
        required (Role): The role the view requires.

    Returns:
        True if the session is authenticated with the required role, False otherwise.

    Notes:
        - A mismatch logs the session out before returning, so the caller must not issue further calls.
    """
    if session.is_authenticated and session.role is required:
        return True

    logger.warning(
        "role gate rejected session state=%s required=%s", session.state, required.value
    )
    session.logout()

    return False
