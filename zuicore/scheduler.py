"""Cooperative scheduler running engines in prioritized time slices."""

from __future__ import annotations

import time
from typing import Hashable

from zuicore.engine import PRIORITY_COUNT, Engine, EngineCtx, Priority
from zuicore.state import EngineData, SchedulerState

TIME_SLICE_DURATION = 0.05


class EngineScheduler:
    """Manages signals, engines and timers and runs them in time slices.

    - A signal counts as signaled for an engine when it was processed after
      the engine's previous cycle, judged by the scheduler clock.
    - Engines woken in the middle of a slice run in that same slice.
    - After each cycle the scheduler climbs back to any higher priority that
      has work.
    - Signal-engine connections are reference counted.
    - Queues are FIFO, and slices alternate parity so that every engine gets
      its turn.
    """

    def __init__(self) -> None:
        self._state = SchedulerState()

    # Signals

    def create_signal(self) -> int:
        """Create a new signal and return its id."""
        return self._state.create_signal()

    def fire(self, signal: Hashable) -> None:
        """Fire a signal, marking it pending for the next signal phase."""
        self._state.fire(signal)

    def is_pending(self, signal: Hashable) -> bool:
        """Tell whether a signal is pending."""
        return self._state.is_pending(signal)

    def abort(self, signal: Hashable) -> None:
        """Cancel a pending signal before it is processed."""
        self._state.abort(signal)

    def remove_signal(self, signal: Hashable) -> None:
        """Remove a signal entirely."""
        self._state.remove_signal(signal)

    def connect(self, signal: Hashable, engine: Hashable) -> None:
        """Connect a signal to an engine; repeated calls raise the refcount."""
        self._state.connect(signal, engine)

    def disconnect(self, signal: Hashable, engine: Hashable) -> None:
        """Drop one connection reference; sever it when none remain."""
        self._state.disconnect(signal, engine)

    def get_signal_refs(self, signal: Hashable, engine: Hashable) -> int:
        """Return the number of connection references for a signal-engine pair."""
        return self._state.get_signal_refs(signal, engine)

    def is_signaled(self, signal: Hashable, engine: Hashable) -> bool:
        """Tell whether ``signal`` was processed after ``engine``'s last cycle."""
        return self._state.is_signaled(signal, engine)

    # Engines

    def register_engine(self, priority: Priority, behavior: Engine) -> int:
        """Register an engine with the given priority; it starts asleep."""
        state = self._state
        engine_id = next(state.engine_ids)
        state.engines[engine_id] = EngineData(
            priority=Priority(priority), behavior=behavior, clock=state.clock
        )
        return engine_id

    def remove_engine(self, engine: Hashable) -> None:
        """Remove an engine from the queues, all connections and the scheduler."""
        state = self._state
        for queue in state.wake_queues:
            queue[:] = [e for e in queue if e != engine]
        for data in state.signals.values():
            data.connected_engines[:] = [
                c for c in data.connected_engines if c.engine != engine
            ]
        state.engines.pop(engine, None)

    def wake_up(self, engine: Hashable) -> None:
        """Wake an engine so that it runs in the current time slice."""
        self._state.wake_up_engine(engine)

    def set_engine_priority(self, engine: Hashable, priority: Priority) -> None:
        """Change an engine's priority, requeueing it if it is awake."""
        state = self._state
        eng = state.engines.get(engine)
        if eng is None:
            return
        priority = Priority(priority)
        old_priority = eng.priority
        if old_priority == priority:
            return
        eng.priority = priority
        if eng.awake_state >= 0:
            old = state.wake_queues[int(old_priority) * 2 + eng.awake_state]
            old[:] = [e for e in old if e != engine]
            state.wake_queues[int(priority) * 2 + eng.awake_state].append(engine)

    def sleep(self, engine: Hashable) -> None:
        """Put an engine to sleep, taking it out of the wake queues."""
        state = self._state
        eng = state.engines.get(engine)
        if eng is None or eng.awake_state < 0:
            return
        queue = state.wake_queues[int(eng.priority) * 2 + eng.awake_state]
        queue[:] = [e for e in queue if e != engine]
        eng.awake_state = -1

    # Timers

    def create_timer(self, signal: Hashable, interval_ms: int, periodic: bool) -> int:
        """Create a timer firing ``signal`` after ``interval_ms`` milliseconds."""
        return self._state.timer_central.create_timer(signal, interval_ms, periodic)

    def cancel_timer(self, timer: int) -> None:
        """Cancel a timer."""
        self._state.timer_central.cancel_timer(timer)

    def remove_timer(self, timer: int) -> None:
        """Remove a timer entirely."""
        self._state.timer_central.remove_timer(timer)

    # Time slices

    def do_time_slice(self) -> None:
        """Run one time slice: timers, signals, then engines by priority."""
        state = self._state
        state.deadline = time.monotonic() + TIME_SLICE_DURATION
        next_parity = state.time_slice ^ 1

        for signal in state.timer_central.check_and_collect():
            state.fire(signal)

        queues = state.wake_queues
        parity = state.time_slice
        highest = (PRIORITY_COUNT - 1) * 2 + parity
        index = highest

        while True:
            state.clock += 1
            state.process_pending_signals()

            while not queues[index]:
                if index < 2 + parity:
                    for priority in range(PRIORITY_COUNT):
                        src = queues[priority * 2 + parity]
                        queues[priority * 2 + next_parity].extend(src)
                        src.clear()
                    state.time_slice = next_parity
                    return
                index -= 2

            engine_id = queues[index].pop(0)
            eng = state.engines.get(engine_id)
            if eng is None:
                continue
            eng.awake_state = -1
            behavior = eng.behavior
            if behavior is None:
                continue
            eng.behavior = None

            stay_awake = False
            try:
                stay_awake = bool(behavior.cycle(EngineCtx(engine_id, state)))
            finally:
                eng = state.engines.get(engine_id)
                if eng is not None:
                    eng.behavior = behavior
                    eng.clock = state.clock

            if eng is not None and stay_awake and eng.awake_state < 0:
                # Not re-woken during its cycle: queue it for the next slice.
                eng.awake_state = next_parity
                queues[int(eng.priority) * 2 + next_parity].append(engine_id)

            state.clock += 1
            state.process_pending_signals()

            for check in range(highest, index - 1, -2):
                if queues[check]:
                    index = check
                    break

    def is_time_slice_at_end(self) -> bool:
        """Tell whether the current time slice has passed its deadline."""
        return time.monotonic() >= self._state.deadline

    def time_slice_counter(self) -> int:
        """Return a monotonically increasing counter (the scheduler clock)."""
        return self._state.clock