import logging
from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

logger = logging.getLogger(__name__)

MAX_REPORTED_MISMATCHES = 8


@dataclass
class ComparisonResult:
    """Outcome of an elementwise comparison.

    Attributes:
        passed: True when every element agrees within tolerance.
        size: Number of compared elements.
        mismatches: Number of elements outside tolerance.
        max_abs_error: Largest absolute difference over finite elements.
        rtol: Relative tolerance that was applied.
        atol: Absolute tolerance that was applied.
        worst: ``(index, actual, expected)`` for the largest offending elements.
    """

    passed: bool
    size: int
    mismatches: int
    max_abs_error: float
    rtol: float
    atol: float
    worst: List[Tuple[int, float, float]] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.passed


def fill_random(array: np.ndarray, rng: np.random.Generator, low: float = -1.0, high: float = 1.0) -> np.ndarray:
    """Fill ``array`` in place with uniform values in ``[low, high)``."""
    array[...] = rng.uniform(low, high, size=array.shape).astype(array.dtype, copy=False)
    return array


def tolerance(dtype, k: int = 1) -> Tuple[float, float]:
    """Return ``(rtol, atol)`` for a GEMM reducing over ``k`` products.

    Rounding error of a dot product grows with the reduction length, so both
    margins of the dtype are scaled by ``max(k, 1)``.
    """
    scale = max(k, 1)
    return dtype.relative_margin * scale, dtype.absolute_margin * scale


def compare_vectors(actual: np.ndarray, expected: np.ndarray, dtype, k: int = 1) -> ComparisonResult:
    """Compare two buffers elementwise.

    Elements agree iff ``|actual - expected| <= atol + rtol * |expected|``.
    NaN only agrees with NaN and infinities must match exactly.

    Args:
        actual (np.ndarray): Device result.
        expected (np.ndarray): Reference result.
        dtype: ``gemmcheck.runtime.types.dtype`` providing the margins.
        k (int): Reduction length of the GEMM that produced the buffers.

    Returns:
        ComparisonResult: Truthy when the buffers agree.
    """
    if actual.shape != expected.shape:
        raise ValueError(f"Can not compare buffers of shape {actual.shape} and {expected.shape}")

    rtol, atol = tolerance(dtype, k)
    actual = np.asarray(actual, dtype=np.float64)
    expected = np.asarray(expected, dtype=np.float64)

    close = np.isclose(actual, expected, rtol=rtol, atol=atol, equal_nan=True)
    mismatched = np.flatnonzero(~close)

    finite = np.isfinite(actual) & np.isfinite(expected)
    with np.errstate(invalid="ignore"):
        errors = np.abs(actual - expected, where=finite, out=np.zeros_like(actual))
    max_abs_error = float(errors.max()) if errors.size else 0.0

    worst = []
    if mismatched.size:
        # Non-finite mismatches sort first
        ranking = np.where(finite[mismatched], errors[mismatched], np.inf)
        for index in mismatched[np.argsort(-ranking, kind="stable")][:MAX_REPORTED_MISMATCHES]:
            worst.append((int(index), float(actual[index]), float(expected[index])))
            logger.warning(
                "Mismatch at element %d: device=%r reference=%r (rtol=%.1e, atol=%.1e)",
                index,
                float(actual[index]),
                float(expected[index]),
                rtol,
                atol,
            )

    return ComparisonResult(
        passed=mismatched.size == 0,
        size=int(actual.size),
        mismatches=int(mismatched.size),
        max_abs_error=max_abs_error,
        rtol=rtol,
        atol=atol,
        worst=worst,
    )
