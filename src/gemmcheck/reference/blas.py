"""Host reference GEMM with BLAS ``xGEMM`` semantics on flat column-major buffers.

Buffers are 1-D numpy arrays. Passing ``buffer[offset:]`` plays the role of a
pointer to the first element of a matrix; numpy slices are views so the
result lands in the caller's buffer.
"""
import logging
from typing import Optional

import numpy as np
from numpy.lib.stride_tricks import as_strided

from gemmcheck.runtime.errors import InvalidArgumentError
from gemmcheck.utils.layout import (
    check_extent,
    check_flag,
    check_leading_dimension,
    is_transposed,
    stored_shape,
)

logger = logging.getLogger(__name__)


def _matrix(buffer: np.ndarray, rows: int, cols: int, ld: int) -> np.ndarray:
    itemsize = buffer.itemsize
    return as_strided(buffer, shape=(rows, cols), strides=(itemsize, ld * itemsize))


def _check_buffer(name: str, buffer: np.ndarray) -> None:
    if not isinstance(buffer, np.ndarray) or buffer.ndim != 1 or not buffer.flags["C_CONTIGUOUS"]:
        raise InvalidArgumentError(f"{name} must be a contiguous 1-dimensional numpy array")


def gemm(
    transa: str,
    transb: str,
    m: int,
    n: int,
    k: int,
    alpha,
    a: np.ndarray,
    lda: int,
    b: np.ndarray,
    ldb: int,
    beta,
    c: np.ndarray,
    ldc: int,
) -> None:
    """Compute ``C := alpha * op(A) * op(B) + beta * C`` in place.

    Args:
        transa (str): 'n' for op(A) = A, any other character for op(A) = A^T.
        transb (str): Same for B.
        m (int): Rows of op(A) and C.
        n (int): Columns of op(B) and C.
        k (int): Columns of op(A) and rows of op(B).
        alpha: Scalar applied to the product.
        a (np.ndarray): Buffer starting at A, column-major with leading dimension ``lda``.
        lda (int): Leading dimension of the stored A.
        b (np.ndarray): Buffer starting at B.
        ldb (int): Leading dimension of the stored B.
        beta: Scalar applied to C. When zero, C is not read.
        c (np.ndarray): Buffer starting at C, updated in place.
        ldc (int): Leading dimension of C.

    Raises:
        InvalidArgumentError: On malformed dimensions, leading dimensions or buffers too small for the matrices.
    """
    check_flag("transa", transa)
    check_flag("transb", transb)
    if m < 0 or n < 0 or k < 0:
        raise InvalidArgumentError(f"GEMM dimensions must be non-negative, got m={m}, n={n}, k={k}")
    rows_a, cols_a = stored_shape(transa, m, k)
    rows_b, cols_b = stored_shape(transb, k, n)
    check_leading_dimension("lda", lda, rows_a)
    check_leading_dimension("ldb", ldb, rows_b)
    check_leading_dimension("ldc", ldc, m)
    for name, buffer in (("A", a), ("B", b), ("C", c)):
        _check_buffer(name, buffer)
    check_extent("A", a.size, rows_a, cols_a, lda)
    check_extent("B", b.size, rows_b, cols_b, ldb)
    check_extent("C", c.size, m, n, ldc)

    if m == 0 or n == 0 or ((alpha == 0 or k == 0) and beta == 1):
        return

    dtype = c.dtype
    c_view = _matrix(c, m, n, ldc)
    if alpha == 0 or k == 0:
        if beta == 0:
            c_view[...] = 0
        else:
            c_view *= dtype.type(beta)
        return

    op_a = _matrix(a, rows_a, cols_a, lda)
    op_b = _matrix(b, rows_b, cols_b, ldb)
    if is_transposed(transa):
        op_a = op_a.T
    if is_transposed(transb):
        op_b = op_b.T

    product = np.matmul(op_a, op_b, dtype=dtype)
    product *= dtype.type(alpha)
    if beta == 0:
        c_view[...] = product
    else:
        c_view[...] = product + dtype.type(beta) * c_view


def gemm_batched(
    transa: str,
    transb: str,
    m: int,
    n: int,
    k: int,
    alpha,
    a: np.ndarray,
    lda: int,
    b: np.ndarray,
    ldb: int,
    beta,
    c: np.ndarray,
    ldc: int,
    batch: int,
    stride_a: Optional[int] = None,
    stride_b: Optional[int] = None,
    stride_c: Optional[int] = None,
) -> None:
    """Run ``batch`` independent reference GEMMs laid out ``stride_*`` elements apart."""
    if batch < 1:
        raise InvalidArgumentError(f"Batch count must be at least 1, got {batch}")
    if stride_a is None:
        stride_a = lda * stored_shape(transa, m, k)[1]
    if stride_b is None:
        stride_b = ldb * stored_shape(transb, k, n)[1]
    if stride_c is None:
        stride_c = ldc * n

    logger.debug("reference gemm_batched m=%d n=%d k=%d batch=%d", m, n, k, batch)
    for i in range(batch):
        gemm(
            transa,
            transb,
            m,
            n,
            k,
            alpha,
            a[i * stride_a :],
            lda,
            b[i * stride_b :],
            ldb,
            beta,
            c[i * stride_c :],
            ldc,
        )
