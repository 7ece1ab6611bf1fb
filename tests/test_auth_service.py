# tests/test_auth_service.py

from datetime import timedelta

import pytest

from taskboard.models import User
from taskboard.services.auth_service import AuthService
from taskboard.utils.errors import (
    DuplicateEmail,
    InvalidCredentials,
    NotFound,
    Unauthenticated,
    ValidationError,
)
from taskboard.utils.security import create_access_token


def test_register_then_login(db):
    user, token = AuthService.register(db, "a@x.com", "pw", "alice")
    assert user.id is not None
    assert AuthService.verify_token(token) == user.id

    logged_in, login_token = AuthService.login(db, "a@x.com", "pw")
    assert logged_in.id == user.id
    assert AuthService.verify_token(login_token) == user.id


def test_password_is_stored_hashed(db):
    user, _ = AuthService.register(db, "a@x.com", "pw", "alice")
    assert user.hashed_password != "pw"
    assert user.hashed_password.startswith("$2")


def test_wrong_password_and_unknown_email_fail_identically(db):
    AuthService.register(db, "a@x.com", "pw", "alice")

    with pytest.raises(InvalidCredentials) as wrong_password:
        AuthService.login(db, "a@x.com", "wrong")
    with pytest.raises(InvalidCredentials) as unknown_email:
        AuthService.login(db, "nobody@x.com", "pw")
    assert wrong_password.value.message == unknown_email.value.message


def test_email_is_matched_case_insensitively(db):
    AuthService.register(db, "  Alice@X.com ", "pw", "alice")

    user, _ = AuthService.login(db, "alice@x.com", "pw")
    assert user.email == "alice@x.com"
    with pytest.raises(DuplicateEmail):
        AuthService.register(db, "ALICE@x.com", "other", "alice2")
    assert db.query(User).count() == 1


@pytest.mark.parametrize(
    "email, password, username",
    [
        (None, "pw", "alice"),
        ("a@x.com", None, "alice"),
        ("a@x.com", "pw", None),
        ("a@x.com", "pw", "  "),
        ("", "pw", "alice"),
    ],
)
def test_register_requires_every_field(db, email, password, username):
    with pytest.raises(ValidationError):
        AuthService.register(db, email, password, username)
    assert db.query(User).count() == 0


@pytest.mark.parametrize("email", ["not-an-email", "a@", "@x.com", "a b@x.com"])
def test_register_rejects_malformed_email(db, email):
    with pytest.raises(ValidationError, match="valid email"):
        AuthService.register(db, email, "pw", "alice")


def test_login_requires_both_fields(db):
    with pytest.raises(ValidationError):
        AuthService.login(db, "a@x.com", "")


@pytest.mark.parametrize("token", [None, "", "garbage", "a.b.c"])
def test_verify_token_rejects_missing_or_malformed(token):
    with pytest.raises(Unauthenticated):
        AuthService.verify_token(token)


def test_verify_token_rejects_expired():
    token = create_access_token({"sub": "1"}, expires_delta=timedelta(minutes=-1))
    with pytest.raises(Unauthenticated):
        AuthService.verify_token(token)


def test_verify_token_rejects_foreign_signature():
    from jose import jwt

    token = jwt.encode({"sub": "1"}, "someone-elses-key", algorithm="HS256")
    with pytest.raises(Unauthenticated):
        AuthService.verify_token(token)


def test_verify_token_rejects_token_without_subject():
    token = create_access_token({"role": "nobody"})
    with pytest.raises(Unauthenticated):
        AuthService.verify_token(token)


def test_get_user_for_deleted_account_is_unauthenticated(db, make_user):
    user = make_user()
    AuthService.delete_user(db, user.id)

    with pytest.raises(Unauthenticated):
        AuthService.get_user(db, user.id)
    with pytest.raises(NotFound):
        AuthService.delete_user(db, user.id)
