# tests/conftest.py

import json
import threading
from collections import deque
from urllib.parse import urlsplit

import pytest

from api.client import ApiClient
from models.session import Role, Session

BASE_URL = "http://portal.test"


class FakeHttpResponse:

    def __init__(self, status_code: int = 200, text: str = ""):
        self.status_code = status_code
        self.text = text


class FakeHttp:
    """
    Records requests made through `ApiClient` and answers them without touching the network.

    Answers come from per-route replies first (for calls issued concurrently), then from a FIFO queue.
    A queued item may be a `FakeHttpResponse`, an exception to raise, or a zero-argument callable
    returning a `FakeHttpResponse`.
    """

    def __init__(self):
        self.calls: list[dict] = []
        self._queue: deque = deque()
        self._routes: dict[tuple[str, str], object] = {}
        self._lock = threading.Lock()

    # === arranging replies ===

    def queue(self, status_code: int = 200, body=None, text: str | None = None) -> None:
        self._queue.append(FakeHttpResponse(status_code, _as_text(body, text)))

    def queue_error(self, exception: Exception) -> None:
        self._queue.append(exception)

    def queue_handler(self, handler) -> None:
        self._queue.append(handler)

    @staticmethod
    def make_response(status_code: int = 200, text: str = "") -> FakeHttpResponse:
        return FakeHttpResponse(status_code, text)

    def route(
        self, method: str, path: str, status_code: int = 200, body=None, text: str | None = None
    ) -> None:
        self._routes[(method, path)] = FakeHttpResponse(status_code, _as_text(body, text))

    # === requests.Session stand-in ===

    def request(self, method, url, headers=None, data=None, params=None, timeout=None):
        path = urlsplit(url).path

        with self._lock:
            self.calls.append(
                {
                    "method": method,
                    "url": url,
                    "path": path,
                    "headers": dict(headers or {}),
                    "body": json.loads(data) if data is not None else None,
                    "params": params,
                    "timeout": timeout,
                }
            )

            if (method, path) in self._routes:
                reply = self._routes[(method, path)]
            else:
                reply = self._queue.popleft()

        if isinstance(reply, Exception):
            raise reply

        if callable(reply):
            return reply()

        return reply

    # === inspection ===

    def calls_to(self, path: str) -> list[dict]:
        return [call for call in self.calls if call["path"] == path]


def _as_text(body, text):
    if text is not None:
        return text
    return "" if body is None else json.dumps(body)


@pytest.fixture
def http():
    return FakeHttp()


@pytest.fixture
def session():
    return Session()


@pytest.fixture
def client(http, session):
    return ApiClient(BASE_URL, session, timeout=5.0, http=http)


@pytest.fixture
def admin_client(client):
    client.session.establish(Role.ADMIN, 1)
    return client


@pytest.fixture
def teacher_client(client):
    client.session.establish(Role.TEACHER, 7)
    return client


@pytest.fixture
def student_client(client):
    client.session.establish(Role.STUDENT, 2)
    return client


@pytest.fixture
def journal_payload():
    """Three students, two lessons, and a single 5 for student 2 in lesson 1."""
    return {
        "lessons": [
            {"id": 101, "date": "2025-09-01", "homework": "Read chapter 1"},
            {"id": 102, "date": "2025-09-03", "homework": None},
        ],
        "students": [
            {"id": 1, "first_name": "Anna", "last_name": "Ivanova"},
            {"id": 2, "first_name": "Boris", "last_name": "Petrov"},
            {"id": 3, "first_name": "Vera", "last_name": "Sokolova"},
        ],
        "grades": [{"student_id": 2, "lesson_id": 101, "grade": 5}],
    }
