# dungeon/grid.py
from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, List, Optional, Set, Tuple

import numpy as np
import structlog

from dungeon.location import Location
from dungeon.tiles import Terrain, Tile

if TYPE_CHECKING:  # pragma: no cover - for type checking
    from dungeon.feature import Feature

log = structlog.get_logger(__name__)


class Grid:
    """Dense, fixed-size buffer of tiles for one generated level.

    Tiles are stored row-major in a flat list (``index = y * width + x``).
    The dimensions are fixed at construction.
    """

    def __init__(self, width: int, height: int, fill: Terrain = Terrain.NOTHING):
        if width <= 0 or height <= 0:
            log.error("Invalid grid dimensions", width=width, height=height)
            raise ValueError("Grid width and height must be positive integers.")
        self._width = width
        self._height = height
        self._tiles: List[Tile] = [Tile(fill) for _ in range(width * height)]
        log.debug("Grid initialized", width=width, height=height, fill=fill.name)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def __len__(self) -> int:
        return len(self._tiles)

    # --- Bounds / access ---
    def in_bounds(self, loc: Location) -> bool:
        """Checks if ``loc`` lies inside the grid."""
        return 0 <= loc.x < self._width and 0 <= loc.y < self._height

    def tile_at(self, loc: Location) -> Tile:
        """Return the tile at ``loc``; out-of-bounds access raises ``IndexError``."""
        if not self.in_bounds(loc):
            raise IndexError(
                f"Tile out of bounds: {loc} not in [0,{self._width})x[0,{self._height})"
            )
        return self._tiles[loc.y * self._width + loc.x]

    def set_terrain(self, loc: Location, terrain: Terrain) -> None:
        self.tile_at(loc).terrain = terrain

    def neighbors(self, loc: Location) -> Set[Location]:
        """The in-bounds cells sharing an edge with ``loc`` (no diagonals)."""
        adjacent: Set[Location] = set()
        if loc.x > 0:
            adjacent.add(Location(loc.x - 1, loc.y))
        if loc.y > 0:
            adjacent.add(Location(loc.x, loc.y - 1))
        if loc.x < self._width - 1:
            adjacent.add(Location(loc.x + 1, loc.y))
        if loc.y < self._height - 1:
            adjacent.add(Location(loc.x, loc.y + 1))
        return adjacent

    def iter_tiles(self) -> Iterator[Tuple[Tile, Location]]:
        """Yield ``(tile, location)`` pairs in row-major order."""
        for index, tile in enumerate(self._tiles):
            yield tile, Location(index % self._width, index // self._width)

    # --- Bulk views ---
    def terrain_array(self) -> np.ndarray:
        """Terrain values as a ``(height, width)`` uint8 array (a copy)."""
        return np.fromiter(
            (tile.terrain for tile in self._tiles),
            dtype=np.uint8,
            count=len(self._tiles),
        ).reshape(self._height, self._width)

    def apply_feature(self, feature: "Feature") -> None:
        """Stamp every component of an already placed ``feature`` onto the grid.

        The whole feature is bounds-checked first so a feature that does not fit
        leaves the grid untouched.
        """
        outside = [loc for loc, _ in feature if not self.in_bounds(loc)]
        if outside:
            log.error("Feature does not fit on grid", outside=outside[:5])
            raise IndexError(f"Feature component out of bounds: {outside[0]}")
        for loc, terrain in feature:
            self.set_terrain(loc, terrain)
        log.debug("Applied feature", components=len(feature))

    # --- Debug output ---
    def to_str_lines(self, marker: Optional[Location] = None) -> List[str]:
        """Text dump of the grid, one string per row; ``marker`` is drawn as '@'."""
        lines: List[str] = []
        for y in range(self._height):
            row = []
            for x in range(self._width):
                if marker is not None and marker.x == x and marker.y == y:
                    row.append("@")
                else:
                    row.append(self._tiles[y * self._width + x].terrain.glyph)
            lines.append("".join(row))
        return lines
