"""Credential check and token issue for ``POST /auth/login``."""

import structlog
from protean.utils.globals import current_domain

from marketplace.account.user import User
from marketplace.auth.passwords import verify_password
from marketplace.auth.tokens import issue_token
from marketplace.exceptions import Unauthorized

logger = structlog.get_logger(__name__)


def authenticate(email: str, password: str) -> dict:
    """Return ``{"access_token", "user"}`` for valid, verified credentials.

    Unknown email and wrong password share one message so callers cannot
    tell which accounts exist.
    """
    user = current_domain.repository_for(User).find_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Login rejected", email=email)
        raise Unauthorized("Invalid credentials")

    if not user.is_verified:
        raise Unauthorized("Please verify your email before logging in")

    return {
        "access_token": issue_token(str(user.id), user.email, user.role),
        "user": user.summary(),
    }
