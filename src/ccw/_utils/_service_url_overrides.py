"""Endpoint overrides read from ``CCW_QUOTING_URL`` and ``CCW_IDENTITY_URL``."""

import os
from functools import lru_cache

_OVERRIDE_ENV_VARS: dict[str, str] = {
    "quoting": "CCW_QUOTING_URL",
    "identity": "CCW_IDENTITY_URL",
}


@lru_cache(maxsize=1)
def _load_service_overrides() -> dict[str, str]:
    return {
        service: os.environ[name].rstrip("/")
        for service, name in _OVERRIDE_ENV_VARS.items()
        if os.environ.get(name)
    }


def get_service_override(service: str) -> str | None:
    """Return the endpoint configured for ``quoting`` or ``identity``, if any.

    The environment is read once; call :func:`clear_overrides_cache` after
    changing it.
    """
    return _load_service_overrides().get(service.lower())


def clear_overrides_cache() -> None:
    _load_service_overrides.cache_clear()
