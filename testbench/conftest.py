import pytest
import torch

from gemmcheck.runtime import configure_logging, get_driver


def pytest_configure(config):
    configure_logging()


@pytest.fixture(scope="session", params=["cpu", "cuda"])
def driver(request):
    """Driver for every device the suite can run on."""
    if request.param == "cuda" and not torch.cuda.is_available():
        pytest.skip("Skipping test: CUDA device not available")
    return get_driver("torch", "torch", request.param)


@pytest.fixture(scope="session")
def cpu_driver():
    return get_driver("torch", "torch", "cpu")
