"""Collaborators the post store consumes: caller identity and time."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, Protocol, runtime_checkable


@runtime_checkable
class IdentitySource(Protocol):
    def current_caller(self) -> str: ...


@runtime_checkable
class Clock(Protocol):
    def now(self) -> int: ...


@dataclass(frozen=True)
class CallerIdentity:
    """Identity source bound to one already-authenticated caller."""

    caller_id: str

    def current_caller(self) -> str:
        return self.caller_id


class SystemClock:
    """Nanosecond wall clock that never returns a smaller value than before."""

    def __init__(self, source: Callable[[], int] = time.time_ns) -> None:
        self._source = source
        self._last = 0
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            current = max(self._source(), self._last)
            self._last = current
            return current
