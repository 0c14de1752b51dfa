# dungeon/location.py
from typing import NamedTuple


class Location(NamedTuple):
    """An integer ``(x, y)`` cell coordinate on the grid."""

    x: int
    y: int

    def manhattan(self, other: "Location") -> int:
        """Grid distance to ``other`` moving only along the axes."""
        return abs(self.x - other.x) + abs(self.y - other.y)

    def offset(self, dx: int, dy: int) -> "Location":
        return Location(self.x + dx, self.y + dy)

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"
