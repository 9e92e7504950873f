"""Signal bookkeeping used by the scheduler."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable


@dataclass
class SignalConnection:
    """A reference-counted link between a signal and an engine."""

    engine: Hashable
    ref_count: int = 1


@dataclass
class SignalData:
    """Internal state of a signal.

    ``clock`` holds the scheduler clock value at which the signal was last
    processed; engines compare it with their own clock to tell whether the
    signal fired since their previous cycle.
    """

    pending: bool = False
    connected_engines: list[SignalConnection] = field(default_factory=list)
    clock: int = 0