"""Engines, priorities and the context handed to an engine's cycle."""

from __future__ import annotations

import abc
import enum
import time
from typing import Any, Hashable


class Priority(enum.IntEnum):
    """Engine priority; higher values run first within a time slice."""

    VERY_LOW = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    VERY_HIGH = 4


PRIORITY_COUNT = len(Priority)


class Engine(abc.ABC):
    """A unit of cooperative work run by the scheduler."""

    @abc.abstractmethod
    def cycle(self, ctx: EngineCtx) -> bool:
        """Do one step of work; return True to stay awake for the next slice."""


class EngineCtx:
    """Scheduler operations available to an engine during its cycle.

    ``state`` is the scheduler state; it must provide ``fire``,
    ``is_signaled``, ``wake_up_engine`` and a ``deadline`` attribute holding
    a ``time.monotonic`` value.
    """

    def __init__(self, engine_id: Hashable, state: Any) -> None:
        self._engine_id = engine_id
        self._state = state

    def fire(self, signal: Hashable) -> None:
        """Fire a signal, marking it pending."""
        self._state.fire(signal)

    def is_signaled(self, signal: Hashable) -> bool:
        """Tell whether ``signal`` fired since this engine's previous cycle."""
        return self._state.is_signaled(signal, self._engine_id)

    def is_time_slice_at_end(self) -> bool:
        """Tell whether the current time slice has passed its deadline."""
        return time.monotonic() >= self._state.deadline

    def wake_up(self, engine: Hashable) -> None:
        """Wake another engine so it runs in the current time slice."""
        self._state.wake_up_engine(engine)

    def id(self) -> Hashable:
        """Return the id of the engine being cycled."""
        return self._engine_id