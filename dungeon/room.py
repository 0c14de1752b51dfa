# dungeon/room.py
from typing import Iterator, Tuple

from dungeon.location import Location


class Room:
    """A rectangular room on the grid.

    Border cells are walls, strictly interior cells are floors. The covered
    cells are computed once and listed column by column (x outer, y inner).
    """

    def __init__(self, x: int, y: int, width: int, height: int):
        if x < 0 or y < 0 or width <= 0 or height <= 0:
            raise ValueError(
                f"Invalid room geometry: x={x} y={y} width={width} height={height}"
            )
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.locations: Tuple[Location, ...] = tuple(
            Location(i, j) for i in range(x, x + width) for j in range(y, y + height)
        )

    @property
    def x2(self) -> int:
        """Last covered column."""
        return self.x + self.width - 1

    @property
    def y2(self) -> int:
        """Last covered row."""
        return self.y + self.height - 1

    def overlaps(self, other: "Room") -> bool:
        """Returns True if the rooms intersect or touch.

        Comparison runs against one past the far edge, so rooms sharing an edge
        and rooms sitting directly next to each other both count.
        """
        return (
            self.x + self.width >= other.x
            and other.x + other.width >= self.x
            and self.y + self.height >= other.y
            and other.y + other.height >= self.y
        )

    def contains(self, loc: Location) -> bool:
        return self.x <= loc.x <= self.x2 and self.y <= loc.y <= self.y2

    def is_wall(self, loc: Location) -> bool:
        return self.contains(loc) and (
            loc.x == self.x or loc.y == self.y or loc.x == self.x2 or loc.y == self.y2
        )

    def walls(self) -> Iterator[Location]:
        return (loc for loc in self.locations if self.is_wall(loc))

    def floors(self) -> Iterator[Location]:
        return (
            loc
            for loc in self.locations
            if self.x < loc.x < self.x2 and self.y < loc.y < self.y2
        )

    def __repr__(self) -> str:
        return f"Room(x={self.x}, y={self.y}, width={self.width}, height={self.height})"
