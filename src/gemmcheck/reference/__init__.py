from .blas import gemm, gemm_batched

__all__ = ["gemm", "gemm_batched"]
