"""
Unit tests for session token issue and verification.
"""

from datetime import timedelta

import jwt
import pytest

from config import TestingConfig
from tokens import TokenError, TokenService


FAR_FUTURE = 4102444800  # 2100-01-01


class ExpiredConfig(TestingConfig):
    TOKEN_LIFETIME = timedelta(seconds=-10)


def test_token_round_trip_returns_user_id(config):
    tokens = TokenService(config)

    token = tokens.create_token("user-123")

    assert tokens.verify_token(token) == "user-123"


def test_token_expires_after_lifetime(config):
    tokens = TokenService(config)

    payload = jwt.decode(
        tokens.create_token("user-123"),
        config.JWT_SECRET_KEY,
        algorithms=[config.JWT_ALGORITHM],
    )

    assert payload["exp"] - payload["iat"] == 86400


def test_expired_token_is_rejected():
    tokens = TokenService(ExpiredConfig())

    with pytest.raises(TokenError, match="expired"):
        tokens.verify_token(tokens.create_token("user-123"))


def test_token_signed_with_other_key_is_rejected(config):
    forged = jwt.encode(
        {"sub": "user-123", "exp": FAR_FUTURE},
        "another-secret-key-of-sufficient-size",
        algorithm="HS256",
    )

    with pytest.raises(TokenError):
        TokenService(config).verify_token(forged)


def test_unsigned_token_is_rejected(config):
    forged = jwt.encode({"sub": "user-123", "exp": FAR_FUTURE}, key=None, algorithm="none")

    with pytest.raises(TokenError):
        TokenService(config).verify_token(forged)


def test_garbage_token_is_rejected(config):
    with pytest.raises(TokenError):
        TokenService(config).verify_token("definitely.not.a-jwt")


def test_token_without_expiry_is_rejected(config):
    token = jwt.encode({"sub": "user-123"}, config.JWT_SECRET_KEY, algorithm="HS256")

    with pytest.raises(TokenError):
        TokenService(config).verify_token(token)
