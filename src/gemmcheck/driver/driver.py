from .backends import Backend
from .framework import Framework


class Driver:
    def __init__(self, framework: Framework, backend: Backend) -> None:
        if not isinstance(framework, Framework):
            raise TypeError(f"Expected a Framework when creating a Driver, but got {type(framework)}")
        if not isinstance(backend, Backend):
            raise TypeError(f"Expected a Backend when creating a Driver, but got {type(backend)}")
        if backend.get_name() not in framework.get_available_targets():
            raise TypeError(
                f"Expected a Backend with the same target as the Framework, but got {backend.get_name()} and {framework.get_available_targets()}"
            )
        self.framework = framework
        self.backend = backend

    def get_name(self) -> str:
        return self.framework.get_name() + "." + self.backend.get_name() + "@" + str(self.framework.get_device())

    def __repr__(self) -> str:
        return f"Driver({self.get_name()})"
