"""Test token signing and password hashing."""
import pytest

from bookstore_api.app.core.config import Settings
from bookstore_api.app.core.errors import ForbiddenError
from bookstore_api.app.core.security import (
    check_owner_or_admin,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from bookstore_api.app.models import Role

from conftest import build_customer


@pytest.fixture
def token_settings():
    return Settings(secret_key="unit-secret", access_token_expire_minutes=5)


def test_token_round_trip(token_settings):
    token = create_access_token({"sub": "ana@email.com"}, token_settings)
    claims = decode_access_token(token, "unit-secret")
    assert claims["sub"] == "ana@email.com"
    assert "exp" in claims


def test_token_with_wrong_secret_is_rejected(token_settings):
    token = create_access_token({"sub": "ana@email.com"}, token_settings)
    assert decode_access_token(token, "another-secret") is None


def test_tampered_token_is_rejected(token_settings):
    header, payload, signature = create_access_token({"sub": "ana@email.com"}, token_settings).split(".")
    forged = create_access_token({"sub": "root@email.com"}, token_settings).split(".")[1]
    assert decode_access_token(f"{header}.{forged}.{signature}", "unit-secret") is None


def test_expired_token_is_rejected(token_settings):
    token = create_access_token({"sub": "ana@email.com"}, token_settings, expires_delta=-10)
    assert decode_access_token(token, "unit-secret") is None


@pytest.mark.parametrize("token", ["", "abc", "a.b", "a.b.c", "..."])
def test_garbage_token_is_rejected(token):
    assert decode_access_token(token, "unit-secret") is None


def test_hash_and_verify_password():
    hashed = hash_password("s3cret")
    assert hashed != "s3cret"
    assert hash_password("s3cret") != hashed
    assert verify_password("s3cret", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("s3cret", "not-a-hash")


def test_check_owner_or_admin():
    owner = build_customer(id=1)
    admin = build_customer(id=2, roles={Role.CUSTOMER, Role.ADMIN})
    check_owner_or_admin(owner, 1)
    check_owner_or_admin(admin, 1)
    with pytest.raises(ForbiddenError):
        check_owner_or_admin(owner, 2)
