from .errors import (
    DeviceExecutionError,
    DriverUnavailableError,
    GemmMismatchError,
    HarnessError,
    InvalidArgumentError,
    TransferError,
)
from .types import float32, float64, SUPPORTED_DTYPES, get_dtype, supported_dtypes
from .config import configure_logging
from .build import get_driver


__all__ = [
    "DeviceExecutionError",
    "DriverUnavailableError",
    "GemmMismatchError",
    "HarnessError",
    "InvalidArgumentError",
    "TransferError",
    "float32",
    "float64",
    "SUPPORTED_DTYPES",
    "get_dtype",
    "supported_dtypes",
    "configure_logging",
    "get_driver",
]
