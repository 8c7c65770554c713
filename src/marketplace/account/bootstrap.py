"""First-run admin account.

Credentials come from ``ADMIN_EMAIL``/``ADMIN_PASSWORD``/``ADMIN_NAME``
settings. Runs at application startup and from ``manage.py create-admin``.
"""

import structlog
from protean.utils.globals import current_domain

from marketplace.account.user import User
from marketplace.auth.passwords import hash_password
from marketplace.config import secret_setting, setting

logger = structlog.get_logger(__name__)


def ensure_admin() -> str:
    """Create the configured admin if missing; return its id either way."""
    email = setting("ADMIN_EMAIL", "admin@marketplace.com")
    repo = current_domain.repository_for(User)

    existing = repo.find_by_email(email)
    if existing is not None:
        return str(existing.id)

    admin = User.create_admin(
        email=email,
        password_hash=hash_password(secret_setting("ADMIN_PASSWORD")),
        name=setting("ADMIN_NAME", "Admin"),
    )
    repo.add(admin)
    logger.info("Admin account created", email=email)
    return str(admin.id)
