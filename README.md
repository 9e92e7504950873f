# zuicore

Building blocks for a zoomable user interface:

- a cooperative **engine scheduler** driven by signals and timers
  (`zuicore.scheduler`, `zuicore.engine`, `zuicore.timer`),
- **stroke** descriptions: line joins, caps and decorated stroke ends
  (`zuicore.stroke`),
- a grid-based **tile cache** with dirty tracking and least-recently-used
  eviction (`zuicore.tile_cache`).

It has no runtime dependencies beyond the standard library.

## Installation

```
pip install zuicore
```

## The scheduler

Work is split into *engines*. An engine subclasses `zuicore.engine.Engine` and
implements `cycle(ctx)`. When woken it is cycled once in a time slice and
returns `True` to stay awake for the next slice or `False` to go to sleep.
Engines are woken directly with `wake_up` or by *signals* they are connected to.

```python
from zuicore.engine import Engine, Priority
from zuicore.scheduler import EngineScheduler


class Printer(Engine):
    def __init__(self, signal):
        self.signal = signal

    def cycle(self, ctx):
        if ctx.is_signaled(self.signal):
            print("signal received")
        return False


sched = EngineScheduler()
sig = sched.create_signal()
eng = sched.register_engine(Priority.HIGH, Printer(sig))
sched.connect(sig, eng)

sched.fire(sig)
sched.do_time_slice()   # prints "signal received"
```

Each call to `do_time_slice`:

1. fires the signals of due timers,
2. processes pending signals, waking the engines connected to them,
3. runs awake engines from `Priority.VERY_HIGH` down to `Priority.VERY_LOW`,
   in first-in, first-out order within a priority,
4. after every cycle processes the signals the engine fired, so engines woken
   by them run in the same slice, including higher-priority ones.

Engines that return `True` are queued for the next slice.

Signals can be checked with `is_pending`, cancelled before processing with
`abort`, and dropped with `remove_signal`. Connections are reference-counted:
connecting the same signal and engine twice needs two calls to `disconnect` to
break the link, and `get_signal_refs` reports the count. Engines can be put to
sleep with `sleep`, moved with `set_engine_priority` and dropped with
`remove_engine`.

Inside `cycle`, the `EngineCtx` offers `fire`, `is_signaled`, `wake_up`,
`is_time_slice_at_end` (a slice lasts 50 ms) and `id`.

Timers fire a signal after a delay in milliseconds, once or periodically. A
periodic timer that falls behind does not fire a burst to catch up.

```python
tick = sched.create_signal()
timer = sched.create_timer(tick, 100, True)   # every 100 ms
...
sched.cancel_timer(timer)
```

## Strokes

```python
from zuicore.stroke import Stroke, StrokeEnd, StrokeEndType

end = StrokeEnd(StrokeEndType.ARROW).with_length_factor(2.0)
assert end.is_decorated()
assert not StrokeEnd.butt().is_decorated()

stroke = Stroke(color=(255, 0, 0, 255), width=2.0, finish_end=end)
```

`StrokeEnd` is immutable; its `with_*` methods return changed copies. `Stroke`
holds a colour as an `(r, g, b, a)` tuple, a width, a `LineJoin`, a `LineCap`,
the start and finish `StrokeEnd` and an optional dash pattern with offset.

## Tile cache

```python
from zuicore.tile_cache import TileCache

cache = TileCache(1024, 768, 8)
print(cache.grid_size())          # (4, 3)
tile = cache.get_or_create(0, 0)  # 256x256 RGBA tile, image is a bytearray
cache.mark_all_dirty()
cache.advance_frame()             # evicts the oldest tiles beyond the limit
```

Grid positions outside the grid raise `IndexError`. `resize` adapts the grid to
a new viewport and drops all tiles.

## What it does not do

The package only describes strokes and holds tile buffers; it draws nothing.
There is no painter, no text or font handling and no window or GPU output.

## Running the tests

```
pip install -e ".[test]"
pytest
```