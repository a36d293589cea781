from .runtime import float32, float64, get_driver, supported_dtypes
from .testing import GemmArguments, GemmCase, verify_gemm

__all__ = [
    "float32",
    "float64",
    "get_driver",
    "supported_dtypes",
    "GemmArguments",
    "GemmCase",
    "verify_gemm",
]
