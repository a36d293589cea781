import logging
from contextlib import nullcontext
from typing import List, Optional

import numpy as np
import torch

from gemmcheck.driver.buffer import DeviceBuffer, DevicePointer, as_pointer
from gemmcheck.driver.framework import Event, Framework
from gemmcheck.runtime.errors import DeviceExecutionError, DriverUnavailableError, TransferError
from gemmcheck.runtime.types import SUPPORTED_DTYPES

logger = logging.getLogger(__name__)

_HOST_TYPES = {t.torch_type: t.numpy_type for t in SUPPORTED_DTYPES}


class TorchFramework(Framework):
    """Execution context backed by a torch device.

    On CUDA all work goes to a dedicated stream and completion tokens are
    ``torch.cuda.Event``s. On the CPU device torch executes eagerly, so every
    token is already complete.
    """

    def __init__(self, device: Optional[str] = None) -> None:
        if device is None:
            device = "cuda" if torch.cuda.is_available() else "cpu"
        self.device = torch.device(device)
        self.stream = None

        if self.device.type == "cuda":
            if not torch.cuda.is_available():
                raise DriverUnavailableError(f"Requested device {device} but CUDA is not available")
            if not torch.cuda.is_initialized():
                torch.cuda.init()
            # TF32 would silently lower float32 GEMM precision
            torch.set_float32_matmul_precision("highest")
            self.stream = torch.cuda.Stream(device=self.device)

        logger.debug("Created torch framework on %s", self.device)

    @staticmethod
    def is_active() -> bool:
        return True

    @staticmethod
    def get_name() -> str:
        return "torch"

    @staticmethod
    def get_available_targets() -> List[str]:
        return ["torch"]

    def get_device(self) -> str:
        return str(self.device)

    def get_stream(self):
        return self.stream

    def stream_context(self):
        if self.stream is None:
            return nullcontext()
        return torch.cuda.stream(self.stream)

    def supports_dtype(self, dtype) -> bool:
        if self.device.type == "mps":
            return dtype.torch_type != torch.float64
        return True

    def allocate(self, count: int, dtype) -> DeviceBuffer:
        try:
            with self.stream_context():
                tensor = torch.empty(count, dtype=dtype.torch_type, device=self.device)
        except RuntimeError as e:
            raise DeviceExecutionError(f"Failed to allocate {count} {dtype} elements on {self.device}", str(e)) from e
        logger.debug("Allocated %d %s elements on %s", count, dtype, self.device)
        return DeviceBuffer(tensor)

    def _record(self) -> Event:
        if self.stream is None:
            return Event()
        event = torch.cuda.Event()
        event.record(self.stream)
        return Event(event)

    @staticmethod
    def _check_transfer(host: np.ndarray, pointer: DevicePointer, count: int) -> None:
        if not isinstance(host, np.ndarray) or host.ndim != 1 or not host.flags["C_CONTIGUOUS"]:
            raise TransferError("Host buffers must be contiguous 1-dimensional numpy arrays")
        if _HOST_TYPES.get(pointer.buffer.dtype) != host.dtype:
            raise TransferError(f"Host dtype {host.dtype} does not match device dtype {pointer.buffer.dtype}")
        if count < 0 or count > host.size or count > len(pointer):
            raise TransferError(
                f"Can not transfer {count} elements between a host buffer of {host.size} "
                f"and a device region of {len(pointer)} elements"
            )

    def copy_to_device(self, host: np.ndarray, device: DevicePointer | DeviceBuffer, count: int) -> Event:
        pointer = as_pointer(device)
        self._check_transfer(host, pointer, count)
        try:
            with self.stream_context():
                pointer.tensor(count).copy_(torch.from_numpy(host[:count]), non_blocking=True)
                event = self._record()
        except RuntimeError as e:
            raise TransferError(f"Host to device copy of {count} elements failed", str(e)) from e
        logger.debug("Submitted host to device copy of %d elements", count)
        return event

    def copy_to_host(self, device: DevicePointer | DeviceBuffer, host: np.ndarray, count: int) -> Event:
        pointer = as_pointer(device)
        self._check_transfer(host, pointer, count)
        try:
            with self.stream_context():
                torch.from_numpy(host[:count]).copy_(pointer.tensor(count), non_blocking=True)
                event = self._record()
        except RuntimeError as e:
            raise TransferError(f"Device to host copy of {count} elements failed", str(e)) from e
        logger.debug("Submitted device to host copy of %d elements", count)
        return event

    def wait(self, event: Optional[Event] = None) -> None:
        try:
            if event is not None:
                event.synchronize()
            elif self.stream is not None:
                self.stream.synchronize()
        except RuntimeError as e:
            raise DeviceExecutionError(f"Device work on {self.device} failed", str(e)) from e
