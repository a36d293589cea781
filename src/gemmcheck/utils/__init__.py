from .numeric import ComparisonResult, compare_vectors, fill_random, tolerance

__all__ = ["ComparisonResult", "compare_vectors", "fill_random", "tolerance"]
