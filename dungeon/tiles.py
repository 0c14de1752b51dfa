# dungeon/tiles.py
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Final, List


class Terrain(IntEnum):
    """Material of a single grid cell."""

    NOTHING = 0  # Unexcavated; the only terrain the path search may cross
    FLOOR = 1
    WALL = 2
    DEBUG = 3  # Cells on a carved connection path

    @property
    def glyph(self) -> str:
        """Single character used by the text dump of a grid."""
        return TERRAIN_GLYPHS[self]


TERRAIN_GLYPHS: Final[dict[Terrain, str]] = {
    Terrain.NOTHING: " ",
    Terrain.FLOOR: ".",
    Terrain.WALL: "#",
    Terrain.DEBUG: "*",
}


@dataclass
class Tile:
    terrain: Terrain = Terrain.NOTHING
    # Attachment point for entity references; populated by callers.
    entities: List[Any] = field(default_factory=list)


__all__ = ["Terrain", "TERRAIN_GLYPHS", "Tile"]
