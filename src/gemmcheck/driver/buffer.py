import torch


class DeviceBuffer:
    """Device resident flat sequence of elements.

    Adding an integer to a buffer yields a ``DevicePointer`` at that element,
    so offsets can be written the same way as with raw device pointers::

        a = framework.allocate(size, float32)
        backend.gemm(framework, ..., a + offset, lda, ...)
    """

    def __init__(self, tensor: torch.Tensor) -> None:
        if tensor.dim() != 1:
            raise ValueError(f"Device buffers must be 1-dimensional, got shape {tuple(tensor.shape)}")
        self.tensor = tensor

    def __len__(self) -> int:
        return self.tensor.numel()

    def __add__(self, offset: int) -> "DevicePointer":
        return DevicePointer(self, offset)

    @property
    def device(self) -> torch.device:
        return self.tensor.device

    @property
    def dtype(self) -> torch.dtype:
        return self.tensor.dtype

    def pointer(self) -> "DevicePointer":
        return DevicePointer(self, 0)

    def __repr__(self) -> str:
        return f"DeviceBuffer(size={len(self)}, dtype={self.dtype}, device={self.device})"


class DevicePointer:
    def __init__(self, buffer: DeviceBuffer, offset: int = 0) -> None:
        if offset < 0 or offset > len(buffer):
            raise IndexError(f"Offset {offset} is outside of a buffer of {len(buffer)} elements")
        self.buffer = buffer
        self.offset = offset

    def __add__(self, offset: int) -> "DevicePointer":
        return DevicePointer(self.buffer, self.offset + offset)

    def __len__(self) -> int:
        return len(self.buffer) - self.offset

    def tensor(self, count: int | None = None) -> torch.Tensor:
        """Return the ``count`` elements starting at this pointer (all remaining if None)."""
        if count is None:
            count = len(self)
        if count < 0 or count > len(self):
            raise IndexError(f"Can not view {count} elements at offset {self.offset} of a buffer of {len(self.buffer)}")
        return self.buffer.tensor[self.offset : self.offset + count]

    def __repr__(self) -> str:
        return f"DevicePointer({self.buffer!r} + {self.offset})"


def as_pointer(handle: DeviceBuffer | DevicePointer) -> DevicePointer:
    if isinstance(handle, DevicePointer):
        return handle
    if isinstance(handle, DeviceBuffer):
        return handle.pointer()
    raise TypeError(f"Expected a DeviceBuffer or DevicePointer, but got {type(handle)}")
