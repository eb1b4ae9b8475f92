"""
Discrete gesture events raised by the engine.
Events are returned with the frame that produced them and never replayed.
"""
from dataclasses import dataclass
from typing import Literal, Union

SwipeDirection = Literal["left", "right"]


@dataclass(frozen=True)
class Click:
    """Quick thumb-index pinch released over a tile."""
    tile_id: str


@dataclass(frozen=True)
class DwellClick:
    """Cursor rested on one tile long enough to click it."""
    tile_id: str


@dataclass(frozen=True)
class ScrollDelta:
    """Per-frame scroll step in pixels (already clamped)."""
    dx: float
    dy: float


@dataclass(frozen=True)
class ZoomDelta:
    """Multiplicative zoom step requested this frame."""
    factor: float


@dataclass(frozen=True)
class SwipeSelect:
    """Fast horizontal flick; moves tile focus one step."""
    direction: SwipeDirection


@dataclass(frozen=True)
class DragReorder:
    """Selected tile was moved to the position of another tile."""
    from_tile_id: str
    to_tile_id: str


GestureEvent = Union[Click, DwellClick, ScrollDelta, ZoomDelta, SwipeSelect, DragReorder]
