from datetime import datetime, timedelta

import pytest

from app.core.config import AccountTables, Settings
from app.services.instructor_account import InstructorAccount
from app.services.instructor_token_service import decode_instructor_access_token


@pytest.fixture
def account_settings():
    s = Settings()
    s.MAX_LOGIN_ATTEMPTS = 3
    return s


@pytest.fixture
def account(db, account_settings):
    return InstructorAccount(db, AccountTables.for_table("instructors"), account_settings)


def test_account_tables_follow_instructor_table():
    tables = AccountTables.for_table("instructors")
    assert tables.users == "instructors"
    assert tables.attempts == "instructors_attempts"
    assert tables.requests == "instructors_requests"
    assert tables.sessions == "instructors_sessions"


def test_login(account, add_row):
    add_row(100, email="jane@drivingschool.co.uk")
    result = account.login("jane@drivingschool.co.uk", "password123")
    assert result["fino"] == 100
    assert decode_instructor_access_token(result["access_token"])["sub"] == "100"
    # a refresh token is not accepted as an access token
    assert decode_instructor_access_token(result["refresh_token"]) is None


def test_login_wrong_password_records_attempt(account, db, add_row):
    add_row(100, email="jane@drivingschool.co.uk")
    assert account.login("jane@drivingschool.co.uk", "wrong-password") is False
    assert account.login("nobody@drivingschool.co.uk", "password123") is False
    attempts = db.select_all("instructors_attempts")
    assert sorted(a["email"] for a in attempts) == ["jane@drivingschool.co.uk", "nobody@drivingschool.co.uk"]


def test_login_blocked_after_repeated_failures(account, add_row):
    add_row(100, email="jane@drivingschool.co.uk")
    for _ in range(3):
        assert account.login("jane@drivingschool.co.uk", "wrong-password") is False
    assert account.is_blocked("jane@drivingschool.co.uk")
    assert account.login("jane@drivingschool.co.uk", "password123") is False


def test_old_attempts_do_not_block(account, db, add_row):
    add_row(100, email="jane@drivingschool.co.uk")
    for _ in range(3):
        db.insert("instructors_attempts", {"email": "jane@drivingschool.co.uk", "attempted_at": datetime.now() - timedelta(hours=2)})
    assert account.login("jane@drivingschool.co.uk", "password123")


@pytest.mark.parametrize("status", [2, 3, 4])
def test_login_refused_for_closed_accounts(account, add_row, status):
    add_row(100, email="jane@drivingschool.co.uk", status=status)
    assert account.login("jane@drivingschool.co.uk", "password123") is False


def test_refresh_rotates_token(account, add_row):
    add_row(100, email="jane@drivingschool.co.uk")
    first = account.login("jane@drivingschool.co.uk", "password123")["refresh_token"]

    access_token, second = account.refresh(first)
    assert decode_instructor_access_token(access_token)["sub"] == "100"
    assert second != first
    # used tokens cannot be replayed
    assert account.refresh(first) is False
    assert account.refresh("not-a-token") is False


def test_logout_revokes_token(account, add_row):
    add_row(100, email="jane@drivingschool.co.uk")
    refresh_token = account.login("jane@drivingschool.co.uk", "password123")["refresh_token"]
    assert account.logout(refresh_token) is True
    assert account.refresh(refresh_token) is False
    assert account.logout("unknown") is False


def test_password_reset(db, account_settings, add_row):
    add_row(100, email="jane@drivingschool.co.uk")
    sent = []
    account = InstructorAccount(
        db, AccountTables.for_table("instructors"), account_settings,
        send_reset_token=lambda instructor, token: sent.append((instructor["email"], token)),
    )
    assert account.request_password_reset("jane@drivingschool.co.uk") is True
    [(email, token)] = sent
    assert email == "jane@drivingschool.co.uk"
    assert db.select("instructors_requests", {"fino": 100})["token"] == token

    assert account.reset_password(token, "new-password") is True
    assert account.login("jane@drivingschool.co.uk", "new-password")
    assert db.select("instructors", {"fino": 100})["password_base"] == "bmV3LXBhc3N3b3Jk"
    # single use
    assert account.reset_password(token, "another-password") is False


def test_password_reset_unknown_email(account):
    assert account.request_password_reset("nobody@drivingschool.co.uk") is False
    assert account.reset_password("missing", "new-password") is False


def test_password_reset_expired(account, db, add_row):
    add_row(100, email="jane@drivingschool.co.uk")
    db.insert("instructors_requests", {"fino": 100, "token": "old", "used": False, "expired_at": datetime.now() - timedelta(minutes=1)})
    assert account.reset_password("old", "new-password") is False
