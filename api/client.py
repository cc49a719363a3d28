# api/client.py

"""
HTTP client for the school records backend.

`ApiClient.call()` is the single chokepoint for outbound requests. It attaches the session headers,
performs the request with `requests`, and decodes whatever comes back into a `Response`.

The backend does not answer with a consistent shape: errors may be JSON objects or bare text,
deletes may return an empty body, and some mutations answer 200 with a plain sentence such as
"Lesson created". The decoding rules below turn all of these into either a success carrying
`data["payload"]` or a failure carrying a single message.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

import requests

from core.response import ErrorCode, Response
from models.session import Session

logger = logging.getLogger("portal.api")

ALLOWED_METHODS = ("GET", "POST", "PUT", "DELETE")
NETWORK_FAILURE_MESSAGE = "network failure"
SUCCESS_MARKER = {"status": "success"}


class ApiClient:

    def __init__(
        self,
        base_url: str,
        session: Session,
        timeout: float = 10.0,
        http: requests.Session | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._session = session
        self._timeout = timeout
        self._http = http or requests.Session()

    # === properties ===

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def session(self) -> Session:
        return self._session

    # === public methods ===

    def call(
        self,
        path: str,
        method: str = "GET",
        body: dict | list | None = None,
        params: dict | None = None,
    ) -> Response:
        """
        Performs one request against the backend and decodes the result.

        Args:
            path (str): Server route, e.g. "/teacher/journal".
            method (str, optional): One of GET, POST, PUT, DELETE. Defaults to GET.
            body (dict | list | None, optional): JSON-serializable request body.
            params (dict | None, optional): Query string parameters.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the server answered below 400 with a body that is empty, non-JSON, or JSON without an "error" field.
                    - False for transport failures, HTTP error statuses, or JSON bodies carrying an "error" field.
                - detail (str | None):
                    - On failure, exactly one human-readable message.
                    - On success, the bare text when the body was not JSON, else None.
                - error (ErrorCode | str | None):
                    - `ErrorCode.NETWORK_FAILURE` if no HTTP response was received.
                    - `ErrorCode.HTTP_ERROR` for 4xx/5xx statuses and "error" payloads.
                    - `ErrorCode.INVALID_INPUT` for an unsupported method or an unserializable body.
                - status_code (int | None):
                    - The HTTP status when one was received, else None.
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "payload" (Any): The decoded body, `{"status": "success"}` for an empty body, or `{"status": "success", "message": <text>}` for a non-JSON body.
                    - On failure:
                        - None

        Notes:
            - This method never raises and never mutates the session.
            - Nothing is retried.
        """
        method = method.upper()

        if method not in ALLOWED_METHODS:
            return Response.fail(
                detail=f"Unsupported HTTP method: {method}",
                error=ErrorCode.INVALID_INPUT,
                status_code=None,
            )

        headers = self._session.headers()
        data = None

        if body is not None:
            headers["Content-Type"] = "application/json"

            try:
                data = json.dumps(body)
            except (TypeError, ValueError) as e:
                return Response.fail(
                    detail=f"Request body is not serializable: {e}",
                    error=ErrorCode.INVALID_INPUT,
                    status_code=None,
                )

        url = f"{self._base_url}/{path.lstrip('/')}"

        try:
            http_response = self._http.request(
                method,
                url,
                headers=headers,
                data=data,
                params=params,
                timeout=self._timeout,
            )
            text = http_response.text

        except requests.exceptions.RequestException as e:
            logger.error("%s %s failed: %s", method, path, e)
            return Response.fail(
                detail=NETWORK_FAILURE_MESSAGE,
                error=ErrorCode.NETWORK_FAILURE,
                status_code=None,
            )

        return decode_response(http_response.status_code, text, f"{method} {path}")


# === decoding ===


def decode_response(status_code: int, text: str | None, label: str = "") -> Response:
    """
    Classifies a raw HTTP status and body into a `Response`.

    Args:
        status_code (int): The HTTP status code.
        text (str | None): The raw response body.
        label (str, optional): Request description used in diagnostics.

    Returns:
        Response: See `ApiClient.call()` for the contract.

    Notes:
        - Error statuses surface the "error" or "message" field of a JSON body, else the raw text, else the status code.
        - A JSON body is returned as-is unless it is an object with a non-empty "error" field.
    """
    text = text or ""

    if status_code >= 400:
        message = _extract_message(_try_decode(text)) or text.strip() or str(status_code)
        logger.info("%s answered %s: %s", label, status_code, message)

        return Response.fail(
            detail=message,
            error=ErrorCode.HTTP_ERROR,
            status_code=status_code,
        )

    if text.strip() == "":
        return Response.succeed(
            status_code=status_code, data={"payload": dict(SUCCESS_MARKER)}
        )

    decoded = _try_decode(text)

    if decoded is _UNDECODABLE:
        logger.warning("%s returned a non-JSON body: %s", label, text)
        return Response.succeed(
            detail=text,
            status_code=status_code,
            data={"payload": {**SUCCESS_MARKER, "message": text}},
        )

    if isinstance(decoded, dict) and decoded.get("error"):
        return Response.fail(
            detail=str(decoded["error"]),
            error=ErrorCode.HTTP_ERROR,
            status_code=status_code,
        )

    return Response.succeed(status_code=status_code, data={"payload": decoded})


_UNDECODABLE = object()


def _try_decode(text: str) -> Any:
    try:
        return json.loads(text)
    # deeply nested bodies exhaust the decoder stack
    except (ValueError, RecursionError):
        return _UNDECODABLE


def _extract_message(decoded: Any) -> str | None:
    if not isinstance(decoded, dict):
        return None

    message = decoded.get("error") or decoded.get("message")
    return str(message) if message else None


# === payload conversion ===


def to_records(response: Response, factory: Callable[[dict], Any], label: str) -> Response:
    """
    Converts a successful list payload into model records.

    Args:
        response (Response): The result of `ApiClient.call()`.
        factory (Callable[[dict], Any]): Builds one record from one JSON object, usually `Model.from_dict`.
        label (str): Plural record description used in failure messages (e.g. "courses").

    Returns:
        Response: A structured response with the following contract:
            - success (bool):
                - True if the payload was a list and every item converted.
                - False if the call failed or the payload had the wrong shape.
            - error (ErrorCode | str | None):
                - The original error for failed calls.
                - `ErrorCode.INVALID_INPUT` for malformed payloads.
            - data (dict | None): Payload with the following keys:
                - On success:
                    - "records" (list[Any]): The converted records, in server order.
                - On failure:
                    - None
    """
    if not response.success:
        return response

    payload = response.payload

    if not isinstance(payload, list):
        return Response.fail(
            detail=f"Unexpected response while loading {label}: expected a list.",
            error=ErrorCode.INVALID_INPUT,
            status_code=response.status_code,
        )

    try:
        records = [_convert(factory, item) for item in payload]

    except (KeyError, TypeError, ValueError) as e:
        return Response.fail(
            detail=f"Malformed {label} record: {e}",
            error=ErrorCode.INVALID_INPUT,
            status_code=response.status_code,
        )

    return Response.succeed(status_code=response.status_code, data={"records": records})


def to_record(response: Response, factory: Callable[[dict], Any], label: str) -> Response:
    """
    Converts a successful object payload into one model record under `data["record"]`.

    Notes:
        - Mirrors `to_records()` for endpoints that answer with a single JSON object.
    """
    if not response.success:
        return response

    payload = response.payload

    if not isinstance(payload, dict):
        return Response.fail(
            detail=f"Unexpected response while loading {label}: expected an object.",
            error=ErrorCode.INVALID_INPUT,
            status_code=response.status_code,
        )

    try:
        record = factory(payload)

    except (KeyError, TypeError, ValueError) as e:
        return Response.fail(
            detail=f"Malformed {label} record: {e}",
            error=ErrorCode.INVALID_INPUT,
            status_code=response.status_code,
        )

    return Response.succeed(status_code=response.status_code, data={"record": record})


def _convert(factory: Callable[[dict], Any], item: Any) -> Any:
    if not isinstance(item, dict):
        raise TypeError(f"expected an object, got {type(item).__name__}")
    return factory(item)
