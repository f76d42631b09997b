from __future__ import annotations

import os

from .model import ErrorCorrection

DEFAULT_ERROR_CORRECTION = ErrorCorrection.M
DEFAULT_ALLOW_MICRO = False
DEFAULT_MODULE_SIZE = 5
DEFAULT_QUIET_ZONE = True

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _configured(name: str) -> str | None:
    configured = os.getenv(name)
    if isinstance(configured, str) and configured.strip():
        return configured.strip()
    return None


def _flag(name: str, default: bool) -> bool:
    configured = _configured(name)
    if configured is None:
        return default
    value = configured.lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    return default


def get_error_correction() -> ErrorCorrection:
    configured = _configured("QRSYMBOL_ERROR_CORRECTION")
    if configured is None:
        return DEFAULT_ERROR_CORRECTION
    try:
        return ErrorCorrection[configured.upper()]
    except KeyError:
        return DEFAULT_ERROR_CORRECTION


def get_allow_micro() -> bool:
    return _flag("QRSYMBOL_ALLOW_MICRO", DEFAULT_ALLOW_MICRO)


def get_module_size() -> int:
    configured = _configured("QRSYMBOL_MODULE_SIZE")
    if configured is None:
        return DEFAULT_MODULE_SIZE
    try:
        size = int(configured)
    except ValueError:
        return DEFAULT_MODULE_SIZE
    if size < 1:
        return DEFAULT_MODULE_SIZE
    return size


def get_quiet_zone() -> bool:
    return _flag("QRSYMBOL_QUIET_ZONE", DEFAULT_QUIET_ZONE)
