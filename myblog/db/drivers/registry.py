"""Name -> driver lookup table.

Drivers register themselves when their module is imported. Registration
happens once, at process start; lookups may come from any thread afterwards.
"""

import threading
from typing import Callable, Optional

from myblog.core.errors import DriverNotFoundError, DriverRegistrationError

from .base import Driver

DriverResolver = Callable[[str], Driver]


class DriverRegistry:
    def __init__(self):
        self._drivers: dict[str, Driver] = {}
        self._lock = threading.Lock()

    def register(self, name: str, driver: Optional[Driver]) -> None:
        """
        Register ``driver`` under ``name``.

        Raises:
            DriverRegistrationError: if the driver is None or the name is taken
        """
        if driver is None:
            raise DriverRegistrationError("driver cannot be nil")
        with self._lock:
            if name in self._drivers:
                raise DriverRegistrationError(f"driver already registered: {name}")
            self._drivers[name] = driver

    def get(self, name: str) -> Driver:
        with self._lock:
            driver = self._drivers.get(name)
        if driver is None:
            raise DriverNotFoundError(f"driver not found: {name}")
        return driver

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._drivers)

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._drivers


registry = DriverRegistry()


def register_driver(name: str, driver: Optional[Driver]) -> None:
    registry.register(name, driver)


def get_driver(name: str) -> Driver:
    return registry.get(name)


def available_drivers() -> list[str]:
    return registry.names()
