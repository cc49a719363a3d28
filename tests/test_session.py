# tests/test_session.py

import pytest

from models.session import Role, Session, require_role


def test_new_session_is_anonymous():
    session = Session()

    assert session.state == "ANONYMOUS"
    assert not session.is_authenticated
    assert session.headers() == {"role": "", "user_id": ""}


def test_establish_sets_role_and_id():
    session = Session()

    session.establish("TEACHER", 7)

    assert session.role is Role.TEACHER
    assert session.user_id == "7"
    assert session.headers() == {"role": "TEACHER", "user_id": "7"}


def test_establish_unknown_role_raises_and_keeps_session():
    session = Session()

    with pytest.raises(ValueError, match="Unknown role: BOGUS"):
        session.establish("BOGUS", 1)

    assert session.state == "ANONYMOUS"


def test_role_parse_is_exact():
    assert Role.parse("STUDENT") is Role.STUDENT
    assert Role.parse("student") is None
    assert Role.parse(None) is None


def test_require_role_mismatch_logs_out():
    session = Session()
    session.establish(Role.STUDENT, 3)

    assert not require_role(session, Role.TEACHER)
    assert session.state == "ANONYMOUS"


def test_require_role_rejects_anonymous_session():
    assert not require_role(Session(), Role.ADMIN)
