"""
Pointer sub-mode detectors: air swipe and dwell click.
Both only run while no pinch and no mode lock is held.
"""
from typing import List, Optional, Tuple

from .config import GestureConfig
from .events import DwellClick, GestureEvent, SwipeSelect
from .geometry import clamp
from .state import CursorSample, DwellState, EngineState, Mode
from .surface import TileSurface


def detect_swipe(
    state: EngineState,
    cursor: Tuple[float, float],
    previous: Optional[CursorSample],
    elapsed_ms: float,
    now: float,
    config: GestureConfig,
) -> List[GestureEvent]:
    """Fast horizontal flick of the smoothed cursor between two consecutive frames."""
    if previous is None:
        return []

    dx = cursor[0] - previous.x
    cooled = state.last_swipe_at is None or now - state.last_swipe_at > config.swipe_cooldown_ms
    if elapsed_ms < config.swipe_max_elapsed_ms and abs(dx) > config.swipe_min_dx and cooled:
        direction = "right" if dx > 0 else "left"
        state.last_swipe_at = now
        state.mode = Mode.SWIPE
        state.status = f"Air swipe {direction}: switched tile focus."
        return [SwipeSelect(direction=direction)]
    return []


def track_dwell(
    state: EngineState,
    cursor: Tuple[float, float],
    now: float,
    surface: TileSurface,
    config: GestureConfig,
) -> List[GestureEvent]:
    """
    Hover timer over the tile under the cursor.

    Progress fills over dwell_ms; a full timer clicks once the shared click
    cooldown allows it and restarts on the same tile, so resting longer
    clicks again.
    """
    hovered = surface.hit_test(cursor)
    dwell = state.dwell

    if hovered is None:
        state.dwell = DwellState()
        return []

    if dwell.target != hovered:
        state.dwell = DwellState(target=hovered, started_at=now)
        return []

    dwell.progress = clamp((now - dwell.started_at) / config.dwell_ms, 0.0, 1.0)
    cooled = state.last_click_at is None or now - state.last_click_at > config.dwell_cooldown_ms
    if dwell.progress >= 1.0 and cooled:
        state.last_click_at = now
        state.dwell = DwellState(target=hovered, started_at=now)
        state.status = f"Dwell click: {hovered.upper()} toggled."
        return [DwellClick(tile_id=hovered)]
    return []
