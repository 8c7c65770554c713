"""Runtime settings.

Values come from the ``[custom]`` table of ``domain.toml`` (with the active
``PROTEAN_ENV`` overlay applied). An environment variable of the same name
always wins, so deployments can override secrets without editing the file.
"""

import os
from typing import Any

from protean.exceptions import ConfigurationError

from marketplace.domain import marketplace


def setting(key: str, default: Any = None) -> Any:
    if key in os.environ:
        return os.environ[key]
    custom = marketplace.config.get("custom") or {}
    return custom.get(key, default)


def int_setting(key: str, default: int) -> int:
    return int(setting(key, default))


def float_setting(key: str, default: float) -> float:
    return float(setting(key, default))


# Shipped with domain.toml for local use only
_INSECURE_DEFAULTS = {
    "JWT_SECRET": "change-me-in-production",
    "ADMIN_PASSWORD": "admin123",
}


def secret_setting(key: str) -> str:
    """A credential that a production deployment must supply itself.

    Raises ``ConfigurationError`` under ``PROTEAN_ENV=production`` when the
    value is missing, an unresolved ``${...}`` placeholder, or one of the
    defaults checked into ``domain.toml``.
    """
    value = setting(key)
    if os.environ.get("PROTEAN_ENV") == "production":
        if not value or str(value).startswith("${") or value == _INSECURE_DEFAULTS.get(key):
            raise ConfigurationError(f"{key} must be set for production")
    return value
