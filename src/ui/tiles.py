"""
Tile board: the ordered workspace tiles the gestures act on.
Holds tile order, the selected tile and the grid geometry used for hit testing.
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple
import math
import threading

from gestures.config import SurfaceConfig
from gestures.events import Click, DwellClick, GestureEvent, SwipeSelect


@dataclass(frozen=True)
class Tile:
    id: str
    title: str
    detail: str


DEFAULT_TILES: List[Tile] = [
    Tile("mail", "Mail", "Unread: 12"),
    Tile("media", "Media", "Now Playing"),
    Tile("tasks", "Tasks", "3 due today"),
    Tile("notes", "Notes", "Gesture ideas"),
    Tile("stats", "Stats", "Realtime mode"),
    Tile("lights", "Lights", "Studio scene"),
    Tile("code", "Code", "Review queue"),
    Tile("boards", "Boards", "Sprint planning"),
    Tile("docs", "Docs", "Design review"),
    Tile("music", "Music", "Focus playlist"),
    Tile("camera", "Camera", "Rear feed"),
    Tile("chat", "Chat", "4 active rooms"),
]


class TileRect(NamedTuple):
    """Screen-space rectangle in surface pixels."""
    left: float
    top: float
    right: float
    bottom: float

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom


class TileBoard:
    """
    Ordered tile grid with scroll/zoom view transform.

    The grid is laid out row-major inside the padded surface, then moved by
    translate(scroll_x, scroll_y) scale(zoom) around a fixed origin in the
    grid box. Worker and UI threads share one board, so every access takes
    the lock.
    """

    def __init__(self, config: Optional[SurfaceConfig] = None, tiles: Optional[Iterable[Tile]] = None):
        self._config = config or SurfaceConfig()
        self._tiles: List[Tile] = list(tiles if tiles is not None else DEFAULT_TILES)
        self._active: Optional[str] = None
        self._zoom = 1.0
        self._scroll = (0.0, 0.0)
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Tile order and selection

    @property
    def tiles(self) -> List[Tile]:
        with self._lock:
            return list(self._tiles)

    @property
    def tile_ids(self) -> List[str]:
        with self._lock:
            return [tile.id for tile in self._tiles]

    @property
    def active_tile(self) -> Optional[str]:
        with self._lock:
            return self._active

    def get(self, tile_id: str) -> Optional[Tile]:
        with self._lock:
            return next((tile for tile in self._tiles if tile.id == tile_id), None)

    def _index_of(self, tile_id: Optional[str]) -> int:
        for i, tile in enumerate(self._tiles):
            if tile.id == tile_id:
                return i
        return -1

    def toggle(self, tile_id: str) -> None:
        """Select a tile, or clear the selection if it is already selected."""
        with self._lock:
            self._active = None if self._active == tile_id else tile_id

    def cycle(self, direction: str) -> None:
        """Move the selection one tile left or right, wrapping around."""
        with self._lock:
            if not self._tiles:
                return
            current = self._index_of(self._active)
            start = 0 if current == -1 else current
            delta = 1 if direction == "right" else -1
            self._active = self._tiles[(start + delta) % len(self._tiles)].id

    def reorder(self, from_tile_id: str, to_tile_id: str) -> None:
        """Move semantics: remove the dragged tile and reinsert it at the hovered tile's index."""
        with self._lock:
            if from_tile_id == to_tile_id:
                return
            from_index = self._index_of(from_tile_id)
            to_index = self._index_of(to_tile_id)
            if from_index < 0 or to_index < 0:
                return
            moved = self._tiles.pop(from_index)
            self._tiles.insert(to_index, moved)

    def apply(self, events: Iterable[GestureEvent]) -> None:
        """
        Apply discrete gesture events to the board.
        Drag reorders were already performed by the engine; scroll and zoom
        reach the board through set_view().
        """
        with self._lock:
            for event in events:
                if isinstance(event, (Click, DwellClick)):
                    self.toggle(event.tile_id)
                elif isinstance(event, SwipeSelect):
                    self.cycle(event.direction)

    # ------------------------------------------------------------------
    # Geometry

    def set_view(self, zoom: float, scroll_x: float, scroll_y: float) -> None:
        with self._lock:
            self._zoom = zoom
            self._scroll = (scroll_x, scroll_y)

    @property
    def size(self) -> Tuple[int, int]:
        return (self._config.width, self._config.height)

    def tile_rects(self) -> Dict[str, TileRect]:
        """Transformed rect of every tile, in surface pixels, in tile order."""
        with self._lock:
            cfg = self._config
            cols = max(1, cfg.columns)
            x0 = y0 = cfg.padding
            grid_w = cfg.width - 2 * cfg.padding
            col_w = (grid_w - cfg.gap * (cols - 1)) / cols
            rows = math.ceil(len(self._tiles) / cols)
            grid_h = rows * cfg.row_height + max(0, rows - 1) * cfg.gap

            ox = x0 + grid_w * cfg.origin_x
            oy = y0 + grid_h * cfg.origin_y
            zoom = self._zoom
            sx, sy = self._scroll

            rects: Dict[str, TileRect] = {}
            for i, tile in enumerate(self._tiles):
                row, col = divmod(i, cols)
                left = x0 + col * (col_w + cfg.gap)
                top = y0 + row * (cfg.row_height + cfg.gap)
                rects[tile.id] = TileRect(
                    left=ox + (left - ox) * zoom + sx,
                    top=oy + (top - oy) * zoom + sy,
                    right=ox + (left + col_w - ox) * zoom + sx,
                    bottom=oy + (top + cfg.row_height - oy) * zoom + sy,
                )
            return rects

    def hit_test(self, cursor: Tuple[float, float]) -> Optional[str]:
        """Tile whose transformed rect contains the cursor, or None."""
        x = self._config.width * cursor[0]
        y = self._config.height * cursor[1]
        for tile_id, rect in self.tile_rects().items():
            if rect.contains(x, y):
                return tile_id
        return None

    def center_of(self, tile_id: str) -> Optional[Tuple[float, float]]:
        """Normalized cursor position of a tile's center."""
        rect = self.tile_rects().get(tile_id)
        if rect is None:
            return None
        return (
            (rect.left + rect.right) / 2.0 / self._config.width,
            (rect.top + rect.bottom) / 2.0 / self._config.height,
        )
