"""Django settings for chartdoc.

The project hosts the `chartdoc` app so its management command, signals and
settings-driven defaults can be used. Configuration is driven by environment
variables.
"""

from __future__ import annotations

import os


def _env_bool(name: str, *, default: bool) -> bool:
    """Parse a boolean environment variable.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set.

    Returns:
        Parsed boolean value.
    """

    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _env_int(name: str, *, default: int) -> int:
    """Parse an integer environment variable.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set.

    Returns:
        Parsed integer value.
    """

    raw = os.getenv(name)
    if raw is None:
        return default
    return int(raw.strip())


DEBUG = _env_bool("DJANGO_DEBUG", default=True)

_DEV_SECRET_KEY = "dev-only-insecure-secret-key"
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY") or (_DEV_SECRET_KEY if DEBUG else "")
if not SECRET_KEY:
    raise RuntimeError("DJANGO_SECRET_KEY is required when DJANGO_DEBUG is False.")

ALLOWED_HOSTS: list[str] = []

INSTALLED_APPS = [
    "chartdoc.apps.ChartDocConfig",
]

DATABASES: dict[str, dict[str, str]] = {}

USE_TZ = True
TIME_ZONE = "UTC"

CHARTDOC = {
    "DEFAULT_LEGEND": _env_bool("CHARTDOC_DEFAULT_LEGEND", default=True),
    "DEFAULT_TOOLTIP": _env_bool("CHARTDOC_DEFAULT_TOOLTIP", default=True),
    "INDENT": _env_int("CHARTDOC_INDENT", default=0),
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "chartdoc": {
            "handlers": ["console"],
            "level": os.getenv("CHARTDOC_LOG_LEVEL", "WARNING").upper(),
            "propagate": False,
        },
    },
}
