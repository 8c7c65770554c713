"""Tests for JWT issue/decode and bcrypt password hashing."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from protean.exceptions import ConfigurationError

from marketplace.auth.actor import Actor
from marketplace.auth.passwords import generate_temporary_password, hash_password, verify_password
from marketplace.auth.tokens import actor_from_token, decode_token, issue_token
from marketplace.config import setting
from marketplace.exceptions import Unauthorized


class TestTokens:
    def test_issued_token_carries_claims(self):
        token = issue_token("user-1", "a@x.com", "shopper")
        claims = decode_token(token)
        assert claims["sub"] == "user-1"
        assert claims["email"] == "a@x.com"
        assert claims["role"] == "shopper"
        assert "exp" in claims

    def test_actor_from_token(self):
        actor = actor_from_token(issue_token("user-1", "a@x.com", "seller"))
        assert actor == Actor(user_id="user-1", role="seller", email="a@x.com")

    def test_expired_token_rejected(self):
        claims = {"sub": "user-1", "role": "shopper", "exp": datetime.now(UTC) - timedelta(minutes=1)}
        token = jwt.encode(claims, setting("JWT_SECRET"), algorithm="HS256")
        with pytest.raises(Unauthorized) as exc:
            decode_token(token)
        assert exc.value.message == "Token has expired"

    def test_wrong_signature_rejected(self):
        token = jwt.encode({"sub": "user-1", "role": "admin"}, "another-secret", algorithm="HS256")
        with pytest.raises(Unauthorized):
            decode_token(token)

    def test_garbage_rejected(self):
        with pytest.raises(Unauthorized):
            actor_from_token("not-a-jwt")

    def test_token_without_role_rejected(self):
        token = jwt.encode(
            {"sub": "user-1", "exp": datetime.now(UTC) + timedelta(minutes=5)},
            setting("JWT_SECRET"),
            algorithm="HS256",
        )
        with pytest.raises(Unauthorized):
            actor_from_token(token)


class TestProductionSecret:
    def test_checked_in_secret_refused_in_production(self, monkeypatch):
        monkeypatch.setenv("PROTEAN_ENV", "production")
        monkeypatch.setenv("JWT_SECRET", "change-me-in-production")

        with pytest.raises(ConfigurationError):
            issue_token("user-1", "a@x.com", "shopper")

    def test_unresolved_placeholder_refused_in_production(self, monkeypatch):
        monkeypatch.setenv("PROTEAN_ENV", "production")
        monkeypatch.setenv("JWT_SECRET", "${JWT_SECRET}")

        with pytest.raises(ConfigurationError):
            decode_token("any-token")

    def test_deployed_secret_signs_tokens(self, monkeypatch):
        monkeypatch.setenv("PROTEAN_ENV", "production")
        monkeypatch.setenv("JWT_SECRET", "s3cr3t-from-the-vault")

        token = issue_token("user-1", "a@x.com", "shopper")

        assert jwt.decode(token, "s3cr3t-from-the-vault", algorithms=["HS256"])["sub"] == "user-1"


class TestPasswords:
    def test_hash_verifies(self):
        hashed = hash_password("secret123")
        assert hashed != "secret123"
        assert verify_password("secret123", hashed)
        assert not verify_password("wrong", hashed)

    def test_malformed_hash_does_not_verify(self):
        assert not verify_password("secret123", "not-a-bcrypt-hash")

    def test_temporary_password(self):
        password = generate_temporary_password()
        assert len(password) == 8
        assert password.isalnum()
        assert password == password.lower()
