import pytest

from backend.app.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


def test_password_hashing_not_plain():
    plain = "password123"
    hashed = get_password_hash(plain)
    assert hashed and hashed != plain


def test_verify_password():
    hashed = get_password_hash("secret")
    assert verify_password("secret", hashed)
    assert not verify_password("wrong", hashed)


def test_token_carries_user_id_as_subject():
    token = create_access_token(user_id=42)
    assert isinstance(token, str) and token
    payload = decode_access_token(token)
    assert payload.get("sub") == "42"
    assert "exp" in payload


def test_expired_token_raises_value_error():
    token = create_access_token(user_id=1, expires_minutes=-1)
    with pytest.raises(ValueError):
        decode_access_token(token)


def test_tampered_token_raises_value_error():
    with pytest.raises(ValueError):
        decode_access_token("invalid.token.value")
