from .buffer import DeviceBuffer, DevicePointer
from .framework import Event, Framework
from .backends import Backend
from .driver import Driver

__all__ = [
    "Backend",
    "DeviceBuffer",
    "DevicePointer",
    "Driver",
    "Event",
    "Framework",
]
