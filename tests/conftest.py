import numpy as np
import pytest
import torch

from gemmcheck.runtime import configure_logging, get_driver


def pytest_configure(config):
    configure_logging()


@pytest.fixture
def cuda_device():
    """Fixture to ensure CUDA is available."""
    if not torch.cuda.is_available():
        pytest.skip("Skipping test: CUDA device not available")
    return torch.device("cuda")


@pytest.fixture(scope="session")
def cpu_driver():
    return get_driver("torch", "torch", "cpu")


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
