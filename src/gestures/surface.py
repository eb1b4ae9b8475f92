"""
Interface of the tile surface the engine points at.
"""
from typing import Optional, Protocol, Tuple, runtime_checkable


@runtime_checkable
class TileSurface(Protocol):
    """Live tile layout as seen by the engine."""

    @property
    def active_tile(self) -> Optional[str]:
        """Currently selected tile, if any."""
        ...

    def hit_test(self, cursor: Tuple[float, float]) -> Optional[str]:
        """Tile under a normalized cursor, after the current scroll/zoom transform."""
        ...

    def reorder(self, from_tile_id: str, to_tile_id: str) -> None:
        """Move a tile to the position currently held by another."""
        ...
