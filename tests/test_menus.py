# tests/test_menus.py

import pytest

import cli.menu_helpers as helpers
from cli import main
from cli.menu_helpers import MenuSignal
from cli.menus import admin_menu, student_menu, teacher_menu
from core.response import ErrorCode, Response
from models.session import Role, Session


@pytest.mark.parametrize(
    "menu, wrong_client",
    [
        (admin_menu, "teacher_client"),
        (teacher_menu, "student_client"),
        (student_menu, "admin_client"),
    ],
)
def test_role_gate_logs_out_without_calls(request, http, capsys, menu, wrong_client):
    client = request.getfixturevalue(wrong_client)

    menu.run(client)

    assert http.calls == []
    assert client.session.state == "ANONYMOUS"
    assert "log in again" in capsys.readouterr().out


def test_anonymous_session_is_redirected(http, client, capsys):
    assert client.session.state == Session().state

    teacher_menu.run(client)

    assert http.calls == []
    assert "log in again" in capsys.readouterr().out


def test_student_menu_renders_grades_before_predictions(http, student_client, monkeypatch, capsys):
    http.route(
        "GET",
        "/students/2/grades",
        body=[{"course_id": 11, "course_name": "Algebra", "grade": 5}],
    )
    # the prediction lookup never answers successfully, so its cell stays computing
    http.route("GET", "/students/2/predict", status_code=503, text="")
    monkeypatch.setattr("builtins.input", lambda prompt="": "0")

    student_menu.run(student_client)

    out = capsys.readouterr().out
    assert "Algebra" in out
    assert "next: computing…" in out


def test_menu_signals():
    assert {signal.name for signal in MenuSignal} == {"CANCEL", "EXIT"}


def test_password_prompt_does_not_echo(monkeypatch):
    prompts = []

    def fake_getpass(prompt=""):
        prompts.append(prompt)
        return " s3cret "

    monkeypatch.setattr(helpers, "getpass", fake_getpass)
    monkeypatch.setattr("builtins.input", lambda prompt="": pytest.fail("input() was used"))

    assert helpers.prompt_password("Enter your password:") == " s3cret "
    assert "Enter your password:" in prompts[0]


def test_failure_is_one_error_line(capsys):
    helpers.display_response_failure(
        Response.fail(detail="Course is in use", error=ErrorCode.HTTP_ERROR, status_code=409)
    )

    assert capsys.readouterr().out.strip() == "[ERROR: HTTP_ERROR] Course is in use"


def test_login_reads_password_without_echo(http, client, monkeypatch, capsys):
    http.queue(body={"status": "success", "role": "STUDENT", "id": 2})
    monkeypatch.setattr("builtins.input", lambda prompt="": "student")
    monkeypatch.setattr(helpers, "getpass", lambda prompt="": "secret")

    role = main.login(client)

    assert role is Role.STUDENT
    assert http.calls[0]["body"] == {"login": "student", "password": "secret"}
    assert "secret" not in capsys.readouterr().out
