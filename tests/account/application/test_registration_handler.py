"""Application tests for registration, verification and login."""

import pytest
from protean.exceptions import ConfigurationError, ValidationError
from protean.utils.globals import current_domain

from marketplace.account.authentication import authenticate
from marketplace.account.bootstrap import ensure_admin
from marketplace.account.registration import RegisterUser, VerifyEmail
from marketplace.account.user import User
from marketplace.auth.passwords import verify_password
from marketplace.auth.tokens import decode_token
from marketplace.exceptions import Conflict, Forbidden, NotFound, Unauthorized


def _register(**overrides):
    defaults = {"email": "a@x.com", "password": "secret123", "name": "Ada"}
    defaults.update(overrides)
    return current_domain.process(RegisterUser(**defaults), asynchronous=False)


class TestRegisterUser:
    def test_register_persists_unverified_user(self):
        result = _register()

        user = current_domain.repository_for(User).get(result["user_id"])
        assert user.email == "a@x.com"
        assert user.role == "shopper"
        assert user.is_verified is False
        assert verify_password("secret123", user.password_hash)
        assert "verify" in result["message"].lower()

    def test_register_sends_verification_email(self, outbox):
        result = _register()

        user = current_domain.repository_for(User).get(result["user_id"])
        emails = outbox.sent_to("a@x.com")
        assert len(emails) == 1
        assert user.verification_token in emails[0]["body"]

    def test_register_as_seller(self):
        result = _register(role="seller")
        assert current_domain.repository_for(User).get(result["user_id"]).role == "seller"

    def test_admin_cannot_self_register(self):
        with pytest.raises(Forbidden):
            _register(role="admin")

    def test_duplicate_email_conflicts(self):
        _register()
        with pytest.raises(Conflict):
            _register(name="Someone Else")

    def test_short_password_rejected(self):
        with pytest.raises(ValidationError):
            _register(password="12345")

    def test_email_delivery_failure_does_not_fail_registration(self, outbox):
        outbox.configure(should_succeed=False)
        result = _register()
        assert current_domain.repository_for(User).get(result["user_id"]) is not None


class TestVerifyEmail:
    def test_verify_with_token(self):
        user_id = _register()["user_id"]
        token = current_domain.repository_for(User).get(user_id).verification_token

        result = current_domain.process(VerifyEmail(token=token), asynchronous=False)

        user = current_domain.repository_for(User).get(user_id)
        assert user.is_verified is True
        assert user.verification_token is None
        assert result["message"] == "Email verified successfully"

    def test_unknown_token(self):
        with pytest.raises(NotFound):
            current_domain.process(VerifyEmail(token="nope"), asynchronous=False)

    def test_token_is_single_use(self):
        user_id = _register()["user_id"]
        token = current_domain.repository_for(User).get(user_id).verification_token
        current_domain.process(VerifyEmail(token=token), asynchronous=False)

        with pytest.raises(NotFound):
            current_domain.process(VerifyEmail(token=token), asynchronous=False)


class TestAuthenticate:
    def test_login_before_verification_rejected(self):
        _register()
        with pytest.raises(Unauthorized) as exc:
            authenticate("a@x.com", "secret123")
        assert "verify" in exc.value.message

    def test_login_after_verification(self):
        user_id = _register()["user_id"]
        token = current_domain.repository_for(User).get(user_id).verification_token
        current_domain.process(VerifyEmail(token=token), asynchronous=False)

        result = authenticate("a@x.com", "secret123")

        assert result["user"] == {"id": user_id, "email": "a@x.com", "name": "Ada", "role": "shopper"}
        assert decode_token(result["access_token"])["sub"] == user_id

    def test_wrong_password_and_unknown_email_share_message(self):
        _register()
        with pytest.raises(Unauthorized) as wrong_password:
            authenticate("a@x.com", "bad-password")
        with pytest.raises(Unauthorized) as unknown:
            authenticate("nobody@x.com", "secret123")
        assert wrong_password.value.message == unknown.value.message == "Invalid credentials"


class TestEnsureAdmin:
    def test_creates_admin_once(self):
        first = ensure_admin()
        second = ensure_admin()

        assert first == second
        admin = current_domain.repository_for(User).get(first)
        assert admin.role == "admin"
        assert admin.is_verified is True
        assert admin.email == "admin@marketplace.com"

    def test_admin_can_log_in(self):
        ensure_admin()
        result = authenticate("admin@marketplace.com", "admin123")
        assert result["user"]["role"] == "admin"

    def test_default_password_refused_in_production(self, monkeypatch):
        monkeypatch.setenv("PROTEAN_ENV", "production")
        monkeypatch.delenv("ADMIN_PASSWORD", raising=False)

        with pytest.raises(ConfigurationError):
            ensure_admin()
        assert current_domain.repository_for(User).find_by_email("admin@marketplace.com") is None

    def test_deployed_password_used_in_production(self, monkeypatch):
        monkeypatch.setenv("PROTEAN_ENV", "production")
        monkeypatch.setenv("ADMIN_PASSWORD", "a-long-unique-passphrase")

        ensure_admin()

        assert authenticate("admin@marketplace.com", "a-long-unique-passphrase")["user"]["role"] == "admin"
