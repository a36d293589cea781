from functools import lru_cache
from typing import Optional

from gemmcheck.driver import Driver
from gemmcheck.driver.backends.torch.backend import TorchBackend
from gemmcheck.driver.frameworks.torch.framework import TorchFramework

from . import config
from .errors import DriverUnavailableError

FRAMEWORKS = {
    "torch": TorchFramework,
}
BACKENDS = {
    "torch": TorchBackend,
}


@lru_cache
def get_driver(
    framework_name: Optional[str] = None,
    backend_name: Optional[str] = None,
    device: Optional[str] = None,
) -> Driver:
    if framework_name is None:
        framework_name = config.get_framework_name()
    if backend_name is None:
        backend_name = config.get_backend_name()
    if device is None:
        device = config.get_device()
    if framework_name not in FRAMEWORKS:
        supported = ", ".join(sorted(FRAMEWORKS.keys()))
        raise ValueError(f"Framework '{framework_name}' is not supported. Available frameworks: {supported}")
    if backend_name not in BACKENDS:
        supported = ", ".join(sorted(BACKENDS.keys()))
        raise ValueError(f"Backend '{backend_name}' is not supported. Available backends: {supported}")

    framework_cls = FRAMEWORKS[framework_name]
    backend_cls = BACKENDS[backend_name]
    if not framework_cls.is_active():
        raise DriverUnavailableError(f"Framework '{framework_name}' is not available in this environment")
    if not backend_cls.is_available():
        raise DriverUnavailableError(f"Backend '{backend_name}' is not available on this system")
    return Driver(framework_cls(device), backend_cls())
