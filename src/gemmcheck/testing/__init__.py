from .gemm import (
    GemmArguments,
    GemmCase,
    GemmDispatch,
    MatrixLayout,
    pack_matrices,
    select_dispatch,
    unpack_matrices,
    verify_gemm,
)
from .combinations import case_id, combine

__all__ = [
    "GemmArguments",
    "GemmCase",
    "GemmDispatch",
    "MatrixLayout",
    "pack_matrices",
    "select_dispatch",
    "unpack_matrices",
    "verify_gemm",
    "case_id",
    "combine",
]
