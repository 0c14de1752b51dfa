"""Dungeon level generation.

The package builds a single tile-based level: rooms placed at random on a
:class:`~dungeon.grid.Grid`, one A* corridor between two of them and a
starting location.  Features (small terrain patterns) can be aligned and
stamped onto the grid with :class:`~dungeon.feature.FeatureBuilder`.
"""

from dungeon.errors import GenerationError
from dungeon.feature import Feature, FeatureBuilder, HorizontalAlignment, VerticalAlignment
from dungeon.generator import GeneratedLevel, GeneratorConfig, generate
from dungeon.grid import Grid
from dungeon.location import Location
from dungeon.room import Room
from dungeon.tiles import Terrain, Tile

__all__ = [
    "Feature",
    "FeatureBuilder",
    "GeneratedLevel",
    "GenerationError",
    "GeneratorConfig",
    "Grid",
    "HorizontalAlignment",
    "Location",
    "Room",
    "Terrain",
    "Tile",
    "VerticalAlignment",
    "generate",
]
