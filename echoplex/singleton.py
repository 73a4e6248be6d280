"""Lazily and eagerly created single-instance classes."""

from __future__ import annotations

import threading
from typing import ClassVar


def _refuse(cls):
    return TypeError(f"{cls.__name__} has a single instance; use get_instance()")


class SingletonLazy:
    """Created on the first call to get_instance(), safely across threads."""

    _instance: ClassVar[SingletonLazy | None] = None
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __new__(cls, *args, **kwargs):
        raise _refuse(cls)

    def __copy__(self):
        raise _refuse(type(self))

    def __deepcopy__(self, memo):
        raise _refuse(type(self))

    @classmethod
    def get_instance(cls):
        """Return the one instance, creating it on first use."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = object.__new__(cls)
        return cls._instance

    def print_greeting(self):
        """Print the instance's greeting."""
        print("Hello world,I`m lazy.")


class SingletonEager:
    """Created when the module is imported."""

    _instance: ClassVar[SingletonEager]

    def __new__(cls, *args, **kwargs):
        raise _refuse(cls)

    def __copy__(self):
        raise _refuse(type(self))

    def __deepcopy__(self, memo):
        raise _refuse(type(self))

    @classmethod
    def get_instance(cls):
        """Return the instance created at import time."""
        return cls._instance

    def print_greeting(self):
        """Print the instance's greeting."""
        print("Hello world,I`m eager.")


SingletonEager._instance = object.__new__(SingletonEager)