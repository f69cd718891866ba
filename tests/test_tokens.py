"""Tests for bearer token signing and verification."""

import time
from datetime import timedelta

import jwt as pyjwt
import pytest

from src.auth.tokens import (
    TokenError,
    TokenExpiredError,
    TokenInvalidError,
    create_token,
    parse_duration,
    verify_token,
)

SECRET = "token-secret-for-testing-only-0123456789"
OTHER_SECRET = "another-secret-for-testing-only-987654321"


class TestParseDuration:
    """Tests for expiry expressions."""

    @pytest.mark.parametrize(
        ("expression", "expected"),
        [
            ("1h", timedelta(hours=1)),
            ("7d", timedelta(days=7)),
            ("2 days", timedelta(days=2)),
            ("90s", timedelta(seconds=90)),
            ("15m", timedelta(minutes=15)),
            ("1.5h", timedelta(minutes=90)),
            ("1w", timedelta(weeks=1)),
            ("-10s", timedelta(seconds=-10)),
            ("2H", timedelta(hours=2)),
        ],
    )
    def test_string_expressions(self, expression: str, expected: timedelta):
        assert parse_duration(expression) == expected

    def test_bare_numeric_string_is_milliseconds(self):
        assert parse_duration("1500") == timedelta(milliseconds=1500)

    def test_number_is_seconds(self):
        assert parse_duration(3600) == timedelta(hours=1)

    def test_timedelta_passes_through(self):
        assert parse_duration(timedelta(minutes=5)) == timedelta(minutes=5)

    @pytest.mark.parametrize("expression", ["", "soon", "1 fortnight", "h1"])
    def test_invalid_expressions(self, expression: str):
        with pytest.raises(ValueError):
            parse_duration(expression)


class TestCreateToken:
    """Tests for token issuance."""

    def test_embeds_payload_and_expiry(self):
        before = int(time.time())
        token = create_token({"sub": "42", "role": "user"}, SECRET, "1h")

        claims = pyjwt.decode(token, SECRET, algorithms=["HS256"])
        assert claims["sub"] == "42"
        assert claims["role"] == "user"
        assert claims["exp"] - claims["iat"] == 3600
        assert claims["iat"] >= before

    def test_rejects_payload_with_exp(self):
        with pytest.raises(ValueError):
            create_token({"exp": 123}, SECRET, "1h")

    def test_rejects_invalid_duration(self):
        with pytest.raises(ValueError):
            create_token({"sub": "42"}, SECRET, "forever")

    def test_uses_supplied_iat_as_base(self):
        issued_at = int(time.time()) - 10
        token = create_token({"iat": issued_at}, SECRET, "1h")

        claims = verify_token(token, SECRET)
        assert claims["iat"] == issued_at
        assert claims["exp"] == issued_at + 3600


class TestVerifyToken:
    """Tests for token verification."""

    def test_round_trip(self):
        payload = {"sub": "42", "email": "ada@example.com", "scopes": ["read", "write"]}
        token = create_token(payload, SECRET, "1h")

        claims = verify_token(token, SECRET)

        assert {k: claims[k] for k in payload} == payload
        assert set(claims) == set(payload) | {"iat", "exp"}

    def test_wrong_secret_raises_invalid(self):
        token = create_token({"sub": "42"}, OTHER_SECRET, "1h")

        with pytest.raises(TokenInvalidError, match="signature"):
            verify_token(token, SECRET)

    def test_elapsed_expiry_raises_expired(self):
        token = create_token({"sub": "42"}, SECRET, "-10s")

        with pytest.raises(TokenExpiredError):
            verify_token(token, SECRET)

    def test_expired_token_from_other_issuer(self):
        token = pyjwt.encode(
            {"sub": "42", "exp": int(time.time()) - 60}, SECRET, algorithm="HS256"
        )

        with pytest.raises(TokenExpiredError):
            verify_token(token, SECRET)

    def test_malformed_token_raises_invalid(self):
        with pytest.raises(TokenInvalidError):
            verify_token("not.a.jwt", SECRET)

    def test_errors_share_base_class(self):
        assert issubclass(TokenExpiredError, TokenError)
        assert issubclass(TokenInvalidError, TokenError)
