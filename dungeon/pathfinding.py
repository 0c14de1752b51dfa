# dungeon/pathfinding.py
from typing import Iterator, List, Optional, Tuple

from dungeon.astar import astar
from dungeon.grid import Grid
from dungeon.location import Location
from dungeon.tiles import Terrain

STEP_COST = 1


class ConnectRooms:
    """Search problem for digging a corridor between two cells.

    Only cells still holding ``Terrain.NOTHING`` are traversable, so the
    corridor never runs through existing walls or floors.
    """

    def __init__(self, grid: Grid, start: Location, end: Location):
        self.grid = grid
        self._start = start
        self._end = end

    def start(self) -> Location:
        return self._start

    def is_goal(self, loc: Location) -> bool:
        return loc == self._end

    def heuristic(self, loc: Location) -> int:
        return loc.manhattan(self._end)

    def neighbors(self, loc: Location) -> Iterator[Tuple[Location, int]]:
        # Sorted for a deterministic expansion order.
        for adjacent in sorted(self.grid.neighbors(loc)):
            if self.grid.tile_at(adjacent).terrain == Terrain.NOTHING:
                yield adjacent, STEP_COST


def find_path(grid: Grid, start: Location, end: Location) -> Optional[List[Location]]:
    """Shortest path of ``Nothing`` cells from ``start`` to ``end``, or ``None``."""
    return astar(ConnectRooms(grid, start, end))
