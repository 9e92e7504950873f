"""Shared scheduler state: signals, engines, wake queues and the clock."""

from __future__ import annotations

import itertools
import time
from dataclasses import dataclass
from typing import Hashable, Optional

from zuicore.engine import PRIORITY_COUNT, Engine, Priority
from zuicore.signal import SignalConnection, SignalData
from zuicore.timer import TimerCentral


@dataclass
class EngineData:
    """Internal state of a registered engine.

    ``awake_state`` is -1 while sleeping, otherwise the parity (0 or 1) of
    the wake queue holding the engine. ``clock`` is the scheduler clock value
    after the engine's last cycle and is what ``is_signaled`` compares with.
    ``behavior`` is None only while the engine's cycle is running.
    """

    priority: Priority
    behavior: Optional[Engine]
    clock: int
    awake_state: int = -1


class SchedulerState:
    """Everything the scheduler and running engines share.

    Wake queues are interleaved by priority and parity: the queue for a
    priority ``p`` and parity ``k`` sits at index ``p * 2 + k``.
    """

    def __init__(self) -> None:
        self.signals: dict[int, SignalData] = {}
        self.engines: dict[int, EngineData] = {}
        self.pending_signals: list[int] = []
        self.wake_queues: list[list[int]] = [[] for _ in range(PRIORITY_COUNT * 2)]
        self.time_slice: int = 0
        # Starts at 1 so that "clock > 0" comparisons work.
        self.clock: int = 1
        self.deadline: float = time.monotonic()
        self.timer_central = TimerCentral()
        self.signal_ids = itertools.count(1)
        self.engine_ids = itertools.count(1)

    # Signals

    def create_signal(self) -> int:
        """Create a new signal and return its id."""
        signal_id = next(self.signal_ids)
        self.signals[signal_id] = SignalData()
        return signal_id

    def fire(self, signal: Hashable) -> None:
        """Mark a signal pending for the next signal phase."""
        data = self.signals.get(signal)
        if data is not None and not data.pending:
            data.pending = True
            self.pending_signals.append(signal)

    def is_pending(self, signal: Hashable) -> bool:
        """Tell whether a signal is waiting to be processed."""
        data = self.signals.get(signal)
        return data is not None and data.pending

    def abort(self, signal: Hashable) -> None:
        """Cancel a pending signal before it is processed."""
        data = self.signals.get(signal)
        if data is not None:
            data.pending = False
        self.pending_signals = [s for s in self.pending_signals if s != signal]

    def remove_signal(self, signal: Hashable) -> None:
        """Abort and forget a signal."""
        self.abort(signal)
        self.signals.pop(signal, None)

    def connect(self, signal: Hashable, engine: Hashable) -> None:
        """Connect a signal to an engine, counting repeated connections."""
        data = self.signals.get(signal)
        if data is None:
            return
        for conn in data.connected_engines:
            if conn.engine == engine:
                conn.ref_count += 1
                return
        data.connected_engines.append(SignalConnection(engine=engine))

    def disconnect(self, signal: Hashable, engine: Hashable) -> None:
        """Drop one reference of a connection; sever it when none remain."""
        data = self.signals.get(signal)
        if data is None:
            return
        conns = data.connected_engines
        for index, conn in enumerate(conns):
            if conn.engine != engine:
                continue
            conn.ref_count -= 1
            if conn.ref_count == 0:
                # Swap-remove: the last connection takes this slot.
                last = conns.pop()
                if index < len(conns):
                    conns[index] = last
            return

    def get_signal_refs(self, signal: Hashable, engine: Hashable) -> int:
        """Return how many times ``engine`` is connected to ``signal``."""
        data = self.signals.get(signal)
        if data is None:
            return 0
        return next(
            (c.ref_count for c in data.connected_engines if c.engine == engine), 0
        )

    def is_signaled(self, signal: Hashable, engine: Hashable) -> bool:
        """Tell whether ``signal`` was processed after ``engine``'s last cycle."""
        data = self.signals.get(signal)
        if data is None:
            return False
        eng = self.engines.get(engine)
        return data.clock > (eng.clock if eng is not None else 0)

    # Engines

    def wake_up_engine(self, engine: Hashable) -> None:
        """Put an engine in the current parity's wake queue.

        An engine already queued for the next slice is moved to the current
        one, which lets signals chain instantly within a slice.
        """
        eng = self.engines.get(engine)
        if eng is None:
            return
        parity = self.time_slice
        if eng.awake_state == parity:
            return
        if eng.awake_state >= 0:
            old = self.wake_queues[int(eng.priority) * 2 + eng.awake_state]
            old[:] = [e for e in old if e != engine]
        eng.awake_state = parity
        self.wake_queues[int(eng.priority) * 2 + parity].append(engine)

    def process_pending_signals(self) -> None:
        """Process pending signals, stamping their clock and waking engines."""
        while self.pending_signals:
            pending, self.pending_signals = self.pending_signals, []
            for signal in pending:
                data = self.signals.get(signal)
                if data is None:
                    continue
                data.pending = False
                data.clock = self.clock
                for engine in [c.engine for c in data.connected_engines]:
                    self.wake_up_engine(engine)