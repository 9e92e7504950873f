import pytest

from zuicore.engine import Engine, EngineCtx, Priority
from zuicore.state import EngineData, SchedulerState


class _Idle(Engine):
    def cycle(self, ctx):
        return False


def _add_engine(state, priority=Priority.MEDIUM):
    engine_id = next(state.engine_ids)
    state.engines[engine_id] = EngineData(
        priority=priority, behavior=_Idle(), clock=state.clock
    )
    return engine_id


@pytest.fixture
def state():
    return SchedulerState()


def test_initial_clock_and_queues(state):
    assert state.clock == 1
    assert len(state.wake_queues) == 10
    assert all(q == [] for q in state.wake_queues)
    assert state.time_slice == 0


def test_create_signal_gives_distinct_ids(state):
    a = state.create_signal()
    b = state.create_signal()
    assert a != b
    assert not state.is_pending(a)


def test_fire_marks_pending_once(state):
    sig = state.create_signal()
    state.fire(sig)
    state.fire(sig)
    assert state.is_pending(sig)
    assert state.pending_signals == [sig]


def test_fire_unknown_signal_is_ignored(state):
    state.fire(12345)
    assert state.pending_signals == []
    assert not state.is_pending(12345)


def test_abort_clears_pending(state):
    sig = state.create_signal()
    state.fire(sig)
    state.abort(sig)
    assert not state.is_pending(sig)
    assert sig not in state.pending_signals


def test_remove_signal(state):
    sig = state.create_signal()
    state.fire(sig)
    state.remove_signal(sig)
    assert sig not in state.signals
    assert state.pending_signals == []
    state.fire(sig)
    assert not state.is_pending(sig)


def test_refcounted_connections(state):
    sig = state.create_signal()
    eng = _add_engine(state)
    state.connect(sig, eng)
    state.connect(sig, eng)
    assert state.get_signal_refs(sig, eng) == 2
    state.disconnect(sig, eng)
    assert state.get_signal_refs(sig, eng) == 1
    state.disconnect(sig, eng)
    assert state.get_signal_refs(sig, eng) == 0


def test_signal_refs_unknown(state):
    sig = state.create_signal()
    assert state.get_signal_refs(sig, 999) == 0
    assert state.get_signal_refs(999, 1) == 0


def test_disconnect_keeps_other_connections(state):
    sig = state.create_signal()
    engines = [_add_engine(state) for _ in range(3)]
    for eng in engines:
        state.connect(sig, eng)
    state.disconnect(sig, engines[0])
    remaining = {c.engine for c in state.signals[sig].connected_engines}
    assert remaining == {engines[1], engines[2]}


def test_wake_up_engine_queues_in_current_parity(state):
    eng = _add_engine(state, Priority.HIGH)
    state.wake_up_engine(eng)
    state.wake_up_engine(eng)
    assert state.engines[eng].awake_state == state.time_slice
    assert state.wake_queues[int(Priority.HIGH) * 2 + state.time_slice] == [eng]


def test_wake_up_moves_from_next_parity(state):
    eng = _add_engine(state, Priority.LOW)
    next_idx = int(Priority.LOW) * 2 + 1
    state.engines[eng].awake_state = 1
    state.wake_queues[next_idx].append(eng)
    state.wake_up_engine(eng)
    assert state.wake_queues[next_idx] == []
    assert state.wake_queues[int(Priority.LOW) * 2] == [eng]
    assert state.engines[eng].awake_state == 0


def test_wake_up_unknown_engine_is_ignored(state):
    state.wake_up_engine(42)
    assert all(q == [] for q in state.wake_queues)


def test_process_pending_signals_wakes_connected(state):
    sig = state.create_signal()
    eng = _add_engine(state)
    state.connect(sig, eng)
    state.clock += 1
    state.fire(sig)
    state.process_pending_signals()
    assert not state.is_pending(sig)
    assert state.signals[sig].clock == state.clock
    assert eng in state.wake_queues[int(Priority.MEDIUM) * 2]


def test_is_signaled_compares_clocks(state):
    sig_a = state.create_signal()
    sig_b = state.create_signal()
    eng = _add_engine(state)
    state.connect(sig_a, eng)
    state.connect(sig_b, eng)
    state.clock += 1
    state.fire(sig_a)
    state.process_pending_signals()
    assert state.is_signaled(sig_a, eng)
    assert not state.is_signaled(sig_b, eng)
    assert not state.is_signaled(999, eng)


def test_engine_ctx_uses_state(state):
    sig = state.create_signal()
    eng = _add_engine(state)
    other = _add_engine(state, Priority.VERY_HIGH)
    ctx = EngineCtx(eng, state)
    ctx.fire(sig)
    ctx.wake_up(other)
    assert state.is_pending(sig)
    assert state.wake_queues[int(Priority.VERY_HIGH) * 2] == [other]
    assert ctx.id() == eng
    assert ctx.is_time_slice_at_end()