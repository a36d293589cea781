from .framework import TorchFramework

__all__ = ["TorchFramework"]
