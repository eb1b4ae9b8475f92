"""
NeuroDesk UI Module

Tile board model and the PyQt5 desk window.
"""
from .tiles import DEFAULT_TILES, Tile, TileBoard, TileRect

__all__ = [
    'DEFAULT_TILES',
    'Tile',
    'TileBoard',
    'TileRect',
]
