"""Wall-clock timers that fire scheduler signals."""

from __future__ import annotations

import itertools
import time
from dataclasses import dataclass
from typing import Hashable


@dataclass
class _TimerEntry:
    signal_id: Hashable
    interval_ms: int
    periodic: bool
    next_fire: float
    active: bool = True


class TimerCentral:
    """Keeps timers and reports which signals are due on each check."""

    def __init__(self) -> None:
        self._timers: dict[int, _TimerEntry] = {}
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._timers)

    def create_timer(self, signal_id: Hashable, interval_ms: int, periodic: bool) -> int:
        """Create a timer firing ``signal_id`` after ``interval_ms``; return its id."""
        timer_id = next(self._ids)
        self._timers[timer_id] = _TimerEntry(
            signal_id=signal_id,
            interval_ms=interval_ms,
            periodic=periodic,
            next_fire=time.monotonic() + interval_ms / 1000.0,
        )
        return timer_id

    def cancel_timer(self, timer_id: int) -> None:
        """Deactivate a timer; unknown ids are ignored."""
        entry = self._timers.get(timer_id)
        if entry is not None:
            entry.active = False

    def remove_timer(self, timer_id: int) -> None:
        """Drop a timer entirely; unknown ids are ignored."""
        self._timers.pop(timer_id, None)

    def check_and_collect(self) -> list[Hashable]:
        """Return signals of timers that are due and purge inactive timers."""
        now = time.monotonic()
        due: list[Hashable] = []
        for timer in self._timers.values():
            if not timer.active or now < timer.next_fire:
                continue
            due.append(timer.signal_id)
            if timer.periodic:
                timer.next_fire += timer.interval_ms / 1000.0
                # No burst catch-up after a long stall.
                if timer.next_fire < now:
                    timer.next_fire = now
            else:
                timer.active = False

        self._timers = {tid: t for tid, t in self._timers.items() if t.active}
        return due