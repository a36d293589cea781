import os
import logging
from typing import Optional

from .errors import InvalidArgumentError


def _get_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise InvalidArgumentError(f"Environment variable {name} must be an integer, got {value!r}") from None


def _get_flag(name: str, default: bool) -> bool:
    return _get_int(name, int(default)) != 0


def get_framework_name() -> str:
    return os.environ.get("GEMMCHECK_FRAMEWORK", "torch")


def get_backend_name() -> str:
    return os.environ.get("GEMMCHECK_BACKEND", "torch")


def get_device() -> Optional[str]:
    """Device requested through ``GEMMCHECK_DEVICE``, or None to let the framework pick."""
    return os.environ.get("GEMMCHECK_DEVICE") or None


def get_seed() -> int:
    return _get_int("GEMMCHECK_SEED", 0)


def get_double_support() -> bool:
    return _get_flag("GEMMCHECK_DOUBLE_SUPPORT", True)


def get_full_suite() -> bool:
    return _get_flag("GEMMCHECK_FULL_SUITE", False)


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Set the level of the ``gemmcheck`` logger from ``GEMMCHECK_LOG_LEVEL``."""
    if level is None:
        level = os.environ.get("GEMMCHECK_LOG_LEVEL", "WARNING")
    logger = logging.getLogger("gemmcheck")
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise InvalidArgumentError(f"Unknown log level {level!r} in GEMMCHECK_LOG_LEVEL")
    logger.setLevel(numeric_level)
    return logger
