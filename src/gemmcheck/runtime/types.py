from typing import List, Optional

import numpy as np
import torch

from .config import get_double_support


class dtype:
    """A numeric type the harness can verify GEMM in.

    Couples the host (numpy) and device (torch) representations with the
    per-element tolerance margins used by ``compare_vectors``.
    """

    def __init__(
        self,
        name: str,
        numpy_type,
        torch_type: torch.dtype,
        relative_margin: float,
        absolute_margin: float,
    ):
        self.name = name
        self.numpy_type = np.dtype(numpy_type)
        self.torch_type = torch_type
        self.relative_margin = relative_margin
        self.absolute_margin = absolute_margin

    @property
    def itemsize(self) -> int:
        return self.numpy_type.itemsize

    def __str__(self):
        return self.name

    def __repr__(self):
        return f"dtype({self.name!r})"


float32 = dtype("fp32", np.float32, torch.float32, relative_margin=1e-5, absolute_margin=1e-5)
float64 = dtype("fp64", np.float64, torch.float64, relative_margin=1e-12, absolute_margin=1e-12)

SUPPORTED_DTYPES = [float32, float64]


def get_dtype(name: str) -> dtype:
    for candidate in SUPPORTED_DTYPES:
        if candidate.name == name:
            return candidate
    supported = ", ".join(t.name for t in SUPPORTED_DTYPES)
    raise ValueError(f"Type '{name}' is not supported. Available types: {supported}")


def supported_dtypes(framework=None, double_support: Optional[bool] = None) -> List[dtype]:
    """List the numeric types to run the suite over.

    Args:
        framework: Optional framework; types it cannot execute are dropped.
        double_support (bool, optional): Overrides ``GEMMCHECK_DOUBLE_SUPPORT``.

    Returns:
        List[dtype]: Always starts with ``float32``.
    """
    if double_support is None:
        double_support = get_double_support()

    types = [float32]
    if double_support:
        types.append(float64)
    if framework is not None:
        types = [t for t in types if framework.supports_dtype(t)]
    return types
