# core/response.py

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(Enum):
    # === Not Found ===
    NOT_FOUND = "NOT_FOUND"

    # === Transport ===
    # the request never produced an HTTP response (DNS, refused, timeout)
    NETWORK_FAILURE = "NETWORK_FAILURE"

    # the server answered with a 4xx or 5xx status
    HTTP_ERROR = "HTTP_ERROR"

    # === Session ===
    # login answered with a role the portal does not know
    UNKNOWN_ROLE = "UNKNOWN_ROLE"

    # the current session may not open the requested view
    ACCESS_DENIED = "ACCESS_DENIED"

    # === Validation Failures ===
    # required argument or attribute is missing
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"

    # input structure is malformed or incomplete
    INVALID_INPUT = "INVALID_INPUT"

    # field value is out of bounds or incorrectly formatted
    INVALID_FIELD_VALUE = "INVALID_FIELD_VALUE"

    # the value is valid in isolation, but violates system rules
    VALIDATION_FAILED = "VALIDATION_FAILED"

    # === Internal Faults ===
    INTERNAL_ERROR = "INTERNAL_ERROR"


class Response:
    """
    Standard Response object returned by the API client, the endpoint wrappers, and the journal editor.

    A `Response` is the tagged Ok/Err result of the portal: callers branch on `success` only and
    never inspect the raw shape of what the server sent.

    Attributes:
        success (bool): Indicates whether the operation succeeded.
        detail (str | None): Optional human-readable explanation.
        error (ErrorCode | str | None): Optional machine-readable error identifier.
        status_code (int | None): Optional HTTP response code.
        data (dict): Optional payload, varies by operation.
    """

    def __init__(
        self,
        success: bool,
        detail: str | None = None,
        error: ErrorCode | str | None = None,
        status_code: int | None = None,
        data: dict | None = None,
    ):
        self._success = success
        self._detail = detail
        self._error = error
        self._status_code = status_code
        self._data = data or {}

    # === properties ===

    @property
    def success(self) -> bool:
        return self._success

    @property
    def detail(self) -> str | None:
        return self._detail

    @property
    def error(self) -> ErrorCode | str | None:
        return self._error

    @property
    def status_code(self) -> int | None:
        return self._status_code

    @property
    def data(self) -> dict:
        return self._data or {}

    @property
    def payload(self) -> Any:
        return self.data.get("payload")

    # === public classmethods ===

    @classmethod
    def succeed(
        cls,
        detail: str | None = None,
        status_code: int | None = 200,
        data: dict | None = None,
    ) -> Response:
        return cls(
            success=True,
            detail=detail,
            error=None,
            status_code=status_code,
            data=data,
        )

    @classmethod
    def fail(
        cls,
        detail: str | None = None,
        error: ErrorCode | str | None = None,
        status_code: int | None = 400,
        data: dict | None = None,
    ) -> Response:
        return cls(
            success=False,
            detail=detail,
            error=error,
            status_code=status_code,
            data=data,
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Response({self._success}, {self._error}, {self._detail!r}, {self._status_code})"

    def __str__(self) -> str:
        if self.success:
            return f"Success: {self.detail or ''}"
        else:
            error_str = (
                self.error.value if isinstance(self.error, Enum) else self.error or ""
            )
            return f"Error: {error_str}"
