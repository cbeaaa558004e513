import os

from .config import logging_dict_config

_SETTINGS_BY_ENV = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
}


def get_settings_module(env: str | None = None) -> str:
    """Settings module for ``env`` (``APP_ENV`` when not given).

    Anything unrecognised runs with the development settings.
    """
    env = (env or os.getenv("APP_ENV", "development")).strip().lower()
    return _SETTINGS_BY_ENV.get(env, "config.development")


__all__ = ["get_settings_module", "logging_dict_config"]
