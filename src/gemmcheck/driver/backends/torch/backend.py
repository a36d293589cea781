import logging
from typing import Optional

import torch

from gemmcheck.driver.backends import Backend
from gemmcheck.driver.buffer import DevicePointer, as_pointer
from gemmcheck.runtime.errors import DeviceExecutionError
from gemmcheck.utils.layout import (
    check_extent,
    check_flag,
    check_leading_dimension,
    is_transposed,
    stored_shape,
)

logger = logging.getLogger(__name__)


def _view(pointer: DevicePointer, rows: int, cols: int, ld: int) -> torch.Tensor:
    base = pointer.buffer.tensor
    return torch.as_strided(base, (rows, cols), (1, ld), base.storage_offset() + pointer.offset)


def _batched_view(pointer: DevicePointer, batch: int, stride: int, rows: int, cols: int, ld: int) -> torch.Tensor:
    base = pointer.buffer.tensor
    return torch.as_strided(base, (batch, rows, cols), (stride, 1, ld), base.storage_offset() + pointer.offset)


class TorchBackend(Backend):
    """GEMM on torch strided views of the caller's device buffers.

    The single problem entry point runs ``torch.addmm`` and the batched one
    runs ``torch.baddbmm`` over a 3-D view, so each exercises a different
    device kernel.
    """

    def __init__(self) -> None:
        pass

    @staticmethod
    def get_name() -> str:
        return "torch"

    @staticmethod
    def is_available() -> bool:
        return True

    @staticmethod
    def _check(transa, transb, m, n, k, a, lda, b, ldb, c, ldc, batch=1, stride_a=0, stride_b=0, stride_c=0):
        check_flag("transa", transa)
        check_flag("transb", transb)
        rows_a, cols_a = stored_shape(transa, m, k)
        rows_b, cols_b = stored_shape(transb, k, n)
        check_leading_dimension("lda", lda, rows_a)
        check_leading_dimension("ldb", ldb, rows_b)
        check_leading_dimension("ldc", ldc, m)
        check_extent("A", len(a), rows_a, cols_a, lda, batch, stride_a)
        check_extent("B", len(b), rows_b, cols_b, ldb, batch, stride_b)
        check_extent("C", len(c), m, n, ldc, batch, stride_c)

    def gemm(self, framework, transa, transb, m, n, k, alpha, a, lda, b, ldb, beta, c, ldc) -> None:
        if min(m, n, k) < 0:
            raise ValueError(f"GEMM dimensions must be non-negative, got m={m}, n={n}, k={k}")
        a, b, c = as_pointer(a), as_pointer(b), as_pointer(c)
        self._check(transa, transb, m, n, k, a, lda, b, ldb, c, ldc)
        if m == 0 or n == 0:
            return

        logger.debug("gemm %s%s m=%d n=%d k=%d lda=%d ldb=%d ldc=%d", transa, transb, m, n, k, lda, ldb, ldc)
        try:
            with framework.stream_context():
                c_view = _view(c, m, n, ldc)
                if alpha == 0 or k == 0:
                    _scale(c_view, beta)
                    return
                a_view = _view(a, *stored_shape(transa, m, k), lda)
                b_view = _view(b, *stored_shape(transb, k, n), ldb)
                op_a = a_view.t() if is_transposed(transa) else a_view
                op_b = b_view.t() if is_transposed(transb) else b_view
                c_view.copy_(torch.addmm(c_view, op_a, op_b, beta=beta, alpha=alpha))
        except RuntimeError as e:
            raise DeviceExecutionError(f"Error launching gemm (m={m}, n={n}, k={k})", str(e)) from e

    def gemm_batched(
        self,
        framework,
        transa,
        transb,
        m,
        n,
        k,
        alpha,
        a,
        lda,
        b,
        ldb,
        beta,
        c,
        ldc,
        batch: int,
        stride_a: Optional[int] = None,
        stride_b: Optional[int] = None,
        stride_c: Optional[int] = None,
    ) -> None:
        if min(m, n, k) < 0:
            raise ValueError(f"GEMM dimensions must be non-negative, got m={m}, n={n}, k={k}")
        if batch < 1:
            raise ValueError(f"Batch count must be at least 1, got {batch}")
        rows_a, cols_a = stored_shape(transa, m, k)
        rows_b, cols_b = stored_shape(transb, k, n)
        stride_a = lda * cols_a if stride_a is None else stride_a
        stride_b = ldb * cols_b if stride_b is None else stride_b
        stride_c = ldc * n if stride_c is None else stride_c

        a, b, c = as_pointer(a), as_pointer(b), as_pointer(c)
        self._check(transa, transb, m, n, k, a, lda, b, ldb, c, ldc, batch, stride_a, stride_b, stride_c)
        if m == 0 or n == 0:
            return

        logger.debug(
            "gemm_batched %s%s m=%d n=%d k=%d batch=%d strides=(%d, %d, %d)",
            transa,
            transb,
            m,
            n,
            k,
            batch,
            stride_a,
            stride_b,
            stride_c,
        )
        try:
            with framework.stream_context():
                c_view = _batched_view(c, batch, stride_c, m, n, ldc)
                if alpha == 0 or k == 0:
                    _scale(c_view, beta)
                    return
                a_view = _batched_view(a, batch, stride_a, rows_a, cols_a, lda)
                b_view = _batched_view(b, batch, stride_b, rows_b, cols_b, ldb)
                op_a = a_view.transpose(1, 2) if is_transposed(transa) else a_view
                op_b = b_view.transpose(1, 2) if is_transposed(transb) else b_view
                c_view.copy_(torch.baddbmm(c_view, op_a, op_b, beta=beta, alpha=alpha))
        except RuntimeError as e:
            raise DeviceExecutionError(f"Error launching gemm_batched (m={m}, n={n}, k={k}, batch={batch})", str(e)) from e


def _scale(c_view: torch.Tensor, beta: float) -> None:
    # A and B are not read, matching BLAS when alpha == 0 or k == 0
    if beta == 0:
        c_view.zero_()
    elif beta != 1:
        c_view.mul_(beta)
