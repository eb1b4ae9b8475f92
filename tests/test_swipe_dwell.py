import pytest
from gestures.config import GestureConfig
from gestures.engine import GestureEngine
from gestures.events import DwellClick, SwipeSelect
from gestures.state import CursorSample, EngineState, Mode
from gestures.swipe_dwell import detect_swipe, track_dwell
from ui.tiles import TileBoard

from hands import POINTER, events_of, hold, make_hand, run


@pytest.fixture
def config():
    return GestureConfig()


@pytest.fixture
def board():
    return TileBoard()


@pytest.fixture
def engine(board):
    return GestureEngine(board)


def test_swipe_right(config):
    state = EngineState()
    previous = CursorSample(x=0.30, y=0.5, t=0.0)

    events = detect_swipe(state, (0.55, 0.5), previous, 50.0, 50.0, config)

    assert events == [SwipeSelect(direction="right")]
    assert state.mode == Mode.SWIPE
    assert state.last_swipe_at == 50.0


def test_swipe_left(config):
    state = EngineState()
    previous = CursorSample(x=0.55, y=0.5, t=0.0)
    assert detect_swipe(state, (0.30, 0.5), previous, 50.0, 50.0, config) == [SwipeSelect(direction="left")]


def test_swipe_cooldown(config):
    state = EngineState()
    detect_swipe(state, (0.55, 0.5), CursorSample(x=0.30, y=0.5, t=0.0), 50.0, 50.0, config)

    # Tried again 100 ms after the first swipe
    again = detect_swipe(state, (0.80, 0.5), CursorSample(x=0.55, y=0.5, t=50.0), 100.0, 150.0, config)
    assert again == []

    later = detect_swipe(state, (0.30, 0.5), CursorSample(x=0.55, y=0.5, t=700.0), 50.0, 750.0, config)
    assert later == [SwipeSelect(direction="left")]


def test_slow_or_short_motion_is_not_a_swipe(config):
    state = EngineState()
    previous = CursorSample(x=0.30, y=0.5, t=0.0)
    assert detect_swipe(state, (0.55, 0.5), previous, 140.0, 140.0, config) == []
    assert detect_swipe(state, (0.45, 0.5), previous, 50.0, 50.0, config) == []
    assert detect_swipe(state, (0.55, 0.5), None, 16.0, 50.0, config) == []


def test_engine_swipe_cycles_focus(engine, board):
    # Below the grid so dwell stays out of the way
    engine.step(make_hand((0.2, 0.9), POINTER), 0)
    out = engine.step(make_hand((0.7, 0.9), POINTER), 2)
    board.apply(out.events)

    assert out.events == [SwipeSelect(direction="right")]
    assert out.mode == Mode.SWIPE
    assert board.active_tile == "media"


def test_dwell_clicks_once_after_a_second(engine, board):
    outs = run(engine, hold(board.center_of("tasks"), POINTER, 0, 1000))

    assert events_of(outs, DwellClick) == [DwellClick(tile_id="tasks")]
    # Fired at 980 ms and restarted
    assert outs[49].events == [DwellClick(tile_id="tasks")]
    assert outs[-1].dwell_progress == pytest.approx(20 / 980)


def test_short_dwell_does_not_click(engine, board):
    outs = run(engine, hold(board.center_of("tasks"), POINTER, 0, 900))

    assert events_of(outs, DwellClick) == []
    assert outs[-1].dwell_progress == pytest.approx(900 / 980)


def test_dwell_waits_for_click_cooldown(engine, board):
    engine.state.last_click_at = 700.0
    frames = hold(board.center_of("tasks"), POINTER, 0, 1400)
    outs = run(engine, frames)

    fired = [t for (t, _), out in zip(frames, outs) if out.events]
    assert fired == [1320]


def test_dwell_target_switch_restarts_timer(config, board):
    state = EngineState()
    tasks = board.center_of("tasks")
    notes = board.center_of("notes")

    track_dwell(state, tasks, 0.0, board, config)
    track_dwell(state, tasks, 500.0, board, config)
    assert state.dwell.progress == pytest.approx(500 / 980)

    assert track_dwell(state, notes, 520.0, board, config) == []
    assert state.dwell.target == "notes"
    assert state.dwell.started_at == 520.0
    assert state.dwell.progress == 0.0


def test_dwell_clears_off_tile(config, board):
    state = EngineState()
    track_dwell(state, board.center_of("tasks"), 0.0, board, config)

    track_dwell(state, (0.5, 0.95), 40.0, board, config)

    assert state.dwell.target is None
    assert state.dwell.progress == 0.0
