"""Grid of fixed-size RGBA tiles with dirty tracking and LRU eviction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

TILE_SIZE = 256
_CHANNELS = 4


def _blank_image() -> bytearray:
    return bytearray(TILE_SIZE * TILE_SIZE * _CHANNELS)


def _grid_dims(width: int, height: int) -> tuple[int, int]:
    return -(-width // TILE_SIZE), -(-height // TILE_SIZE)


@dataclass
class Tile:
    """A TILE_SIZE x TILE_SIZE RGBA8 bitmap.

    ``dirty`` tells whether the content must be re-rendered; ``last_used``
    is the frame at which the tile was last requested.
    """

    image: bytearray = field(default_factory=_blank_image)
    dirty: bool = True
    last_used: int = 0


class TileCache:
    """Tiles covering a viewport, kept by grid position."""

    def __init__(self, viewport_width: int, viewport_height: int, max_tiles: int) -> None:
        self._cols, self._rows = _grid_dims(viewport_width, viewport_height)
        self._tiles: list[Optional[Tile]] = [None] * (self._cols * self._rows)
        self._frame_counter = 0
        self._max_tiles = max_tiles

    def grid_size(self) -> tuple[int, int]:
        """Return the grid dimensions as (cols, rows)."""
        return self._cols, self._rows

    def get_or_create(self, col: int, row: int) -> Tile:
        """Return the tile at a grid position, creating it if needed."""
        idx = self._index(col, row)
        tile = self._tiles[idx]
        if tile is None:
            tile = self._tiles[idx] = Tile()
        tile.last_used = self._frame_counter
        return tile

    def get(self, col: int, row: int) -> Optional[Tile]:
        """Return the tile at a grid position, or None if it does not exist."""
        return self._tiles[self._index(col, row)]

    def mark_dirty(self, col: int, row: int) -> None:
        """Mark an existing tile as needing re-rendering."""
        tile = self._tiles[self._index(col, row)]
        if tile is not None:
            tile.dirty = True

    def mark_all_dirty(self) -> None:
        """Mark every existing tile as needing re-rendering."""
        for tile in self._tiles:
            if tile is not None:
                tile.dirty = True

    def advance_frame(self) -> None:
        """Advance the frame counter and evict the least recently used excess tiles."""
        self._frame_counter += 1
        active = [(i, t.last_used) for i, t in enumerate(self._tiles) if t is not None]
        excess = len(active) - self._max_tiles
        if excess <= 0:
            return
        active.sort(key=lambda item: item[1])
        for idx, _ in active[:excess]:
            self._tiles[idx] = None

    def active_tile_count(self) -> int:
        """Return the number of tiles currently held."""
        return sum(tile is not None for tile in self._tiles)

    def resize(self, viewport_width: int, viewport_height: int) -> None:
        """Adapt the grid to a new viewport size, dropping all tiles."""
        self._cols, self._rows = _grid_dims(viewport_width, viewport_height)
        self._tiles = [None] * (self._cols * self._rows)

    def _index(self, col: int, row: int) -> int:
        if not (0 <= col < self._cols and 0 <= row < self._rows):
            raise IndexError(
                f"tile ({col}, {row}) outside grid {self._cols}x{self._rows}"
            )
        return row * self._cols + col