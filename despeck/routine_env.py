"""Base class for compute routines that keep track of their run time."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Any


class RoutineEnv(ABC):
    """A named routine whose timed runs add up in ``elapsed_seconds``."""

    def __init__(self, routine_name: str = "") -> None:
        self.routine_name = routine_name
        self.elapsed_seconds = 0.0

    @abstractmethod
    def run(self, *args: Any, **kwargs: Any) -> Any:
        """Do the routine's work."""

    def timed_run(self, *args: Any, **kwargs: Any) -> float:
        """Call :meth:`run` and return how many seconds it took."""
        start = time.perf_counter()
        self.run(*args, **kwargs)
        duration = time.perf_counter() - start
        self.elapsed_seconds += duration
        return duration