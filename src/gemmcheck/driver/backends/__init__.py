from abc import ABCMeta, abstractmethod
from typing import Optional

from ..buffer import DevicePointer


class Backend(metaclass=ABCMeta):
    """Abstract base class for accelerated GEMM implementations.

    Matrices are column-major. ``a``, ``b`` and ``c`` are device pointers that
    may sit at any offset inside their buffers, and leading dimensions may be
    larger than the stored row count. Implementations must honour both and
    must not touch elements of ``c`` outside the ``m x n`` matrices.

    Each backend implementation should provide:
    1. A single problem entry point (``gemm``)
    2. A batched entry point (``gemm_batched``) with its own execution strategy
    3. A way to check if the backend is available on the system
    """

    @abstractmethod
    def __init__(self) -> None:
        """Initialize the backend."""

    @staticmethod
    @abstractmethod
    def get_name() -> str:
        """Get the name of the backend.

        Returns:
            str: Name of the backend (e.g., 'torch')
        """

    @staticmethod
    @abstractmethod
    def is_available() -> bool:
        """Check if this backend is available on the current system.

        Returns:
            bool: True if the backend is available, False otherwise
        """

    @abstractmethod
    def gemm(
        self,
        framework,
        transa: str,
        transb: str,
        m: int,
        n: int,
        k: int,
        alpha: float,
        a: DevicePointer,
        lda: int,
        b: DevicePointer,
        ldb: int,
        beta: float,
        c: DevicePointer,
        ldc: int,
    ) -> None:
        """Submit ``C := alpha * op(A) * op(B) + beta * C`` to the framework's stream.

        Raises:
            DeviceExecutionError: If the launch fails.
        """

    @abstractmethod
    def gemm_batched(
        self,
        framework,
        transa: str,
        transb: str,
        m: int,
        n: int,
        k: int,
        alpha: float,
        a: DevicePointer,
        lda: int,
        b: DevicePointer,
        ldb: int,
        beta: float,
        c: DevicePointer,
        ldc: int,
        batch: int,
        stride_a: Optional[int] = None,
        stride_b: Optional[int] = None,
        stride_c: Optional[int] = None,
    ) -> None:
        """Submit ``batch`` independent GEMM problems laid out at fixed strides.

        Problem ``i`` reads ``a + i * stride_a`` and ``b + i * stride_b`` and
        updates ``c + i * stride_c``. Strides default to the storage slot of one
        matrix: the leading dimension times the number of stored columns.

        Raises:
            DeviceExecutionError: If the launch fails.
        """
