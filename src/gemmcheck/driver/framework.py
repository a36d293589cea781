from abc import ABCMeta, abstractmethod
from contextlib import AbstractContextManager
from typing import Any, List, Optional

import numpy as np

from .buffer import DeviceBuffer, DevicePointer


class Event:
    """Completion token returned by asynchronous framework operations.

    Wraps a framework specific handle (e.g. ``torch.cuda.Event``). A token
    without a handle refers to work that already completed on submission.
    """

    def __init__(self, handle: Any = None) -> None:
        self.handle = handle

    def synchronize(self) -> None:
        if self.handle is not None:
            self.handle.synchronize()


class Framework(metaclass=ABCMeta):
    """Base abstract class for the execution context the accelerated GEMM runs in.

    The framework owns the device, the queue (stream) work is submitted to,
    device allocation and host/device transfers. Work submitted through one
    framework instance executes in submission order.
    """

    @staticmethod
    @abstractmethod
    def is_active() -> bool:
        """Check if the framework is available in the current environment.

        Returns:
            bool: True if the framework is available, False otherwise.
        """

    @staticmethod
    @abstractmethod
    def get_name() -> str:
        """Get the name of the framework.

        Returns:
            str: Name of the framework (e.g., 'torch').
        """

    @staticmethod
    @abstractmethod
    def get_available_targets() -> List[str]:
        """Get the backends this framework can hand its buffers to.

        Returns:
            List[str]: Backend names (e.g., ['torch']).
        """

    @abstractmethod
    def get_device(self) -> str:
        """Get the device identifier work is submitted to."""

    @abstractmethod
    def get_stream(self) -> Any:
        """Get the queue work is submitted to, or None for synchronous devices."""

    @abstractmethod
    def stream_context(self) -> AbstractContextManager:
        """Context manager making the framework's stream current for kernel launches."""

    @abstractmethod
    def supports_dtype(self, dtype) -> bool:
        """Check whether the device can run GEMM in ``dtype``."""

    @abstractmethod
    def allocate(self, count: int, dtype) -> DeviceBuffer:
        """Allocate an uninitialized device buffer of ``count`` elements.

        Args:
            count (int): Number of elements.
            dtype: A ``gemmcheck.runtime.types.dtype``.

        Returns:
            DeviceBuffer: The device resident buffer.
        """

    @abstractmethod
    def copy_to_device(self, host: np.ndarray, device: DevicePointer | DeviceBuffer, count: int) -> Event:
        """Submit a copy of the first ``count`` elements of ``host`` to ``device``.

        Raises:
            TransferError: If the copy can not be submitted.
        """

    @abstractmethod
    def copy_to_host(self, device: DevicePointer | DeviceBuffer, host: np.ndarray, count: int) -> Event:
        """Submit a copy of ``count`` elements from ``device`` into ``host``.

        The host array must not be read before the returned event completes.

        Raises:
            TransferError: If the copy can not be submitted.
        """

    @abstractmethod
    def wait(self, event: Optional[Event] = None) -> None:
        """Block until ``event`` completes, or until all submitted work completes when no event is given."""
