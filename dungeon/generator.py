# dungeon/generator.py
"""Rooms-and-corridor level generation.

One call to :func:`generate` runs the whole pipeline for a single level:

1. propose random rooms for a fixed number of attempts, rejecting any that
   overlap (or touch) a room already accepted;
2. stamp every accepted room's walls and floors onto an empty grid;
3. open one wall cell in each of two random rooms and dig an A* corridor of
   ``Terrain.DEBUG`` cells between them;
4. pick a random floor cell of a random room as the starting location.

Only one pair of rooms is connected by default, so most rooms stay
unreachable from the corridor.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, List, Mapping, NamedTuple, Optional, Protocol, Sequence, TypeVar

import structlog

from dungeon.errors import GenerationError
from dungeon.grid import Grid
from dungeon.location import Location
from dungeon.pathfinding import find_path
from dungeon.room import Room
from dungeon.tiles import Terrain

log = structlog.get_logger(__name__)

T = TypeVar("T")

# --- Configuration ---
DEFAULT_ROOM_ATTEMPTS = 60
DEFAULT_MIN_ROOM_SIZE = 3  # Smallest room that still has a floor cell
DEFAULT_MAX_ROOM_SIZE = 15  # Exclusive
DEFAULT_CONNECTIONS = 1


class RandomSource(Protocol):
    """Anything that can draw a uniform integer from ``[start, stop)``."""

    def get_randrange(self, start: int, stop: int) -> int: ...


@dataclass(frozen=True)
class GeneratorConfig:
    room_attempts: int = DEFAULT_ROOM_ATTEMPTS
    min_room_size: int = DEFAULT_MIN_ROOM_SIZE
    max_room_size: int = DEFAULT_MAX_ROOM_SIZE
    connections: int = DEFAULT_CONNECTIONS

    def __post_init__(self) -> None:
        if self.room_attempts < 0:
            raise ValueError("room_attempts must not be negative")
        if self.min_room_size < DEFAULT_MIN_ROOM_SIZE:
            raise ValueError(
                f"min_room_size must be at least {DEFAULT_MIN_ROOM_SIZE} so rooms have floors"
            )
        if self.max_room_size <= self.min_room_size:
            raise ValueError("max_room_size must be greater than min_room_size")
        if self.connections < 0:
            raise ValueError("connections must not be negative")

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "GeneratorConfig":
        """Build a config from the ``generation`` section of the YAML config.

        Values may be integers or integer strings. Booleans and fractional
        numbers are rejected with ``ValueError``.
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ValueError("generation settings must be a mapping")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            log.warning("Ignoring unknown generation settings", keys=unknown)
        values = {}
        for key in known & set(data):
            values[key] = _as_int(key, data[key])
        return cls(**values)


def _as_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"generation.{key} must be an integer, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"generation.{key} must be an integer, got {value!r}")
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"generation.{key} must be an integer, got {value!r}") from e


class GeneratedLevel(NamedTuple):
    grid: Grid
    start: Location
    rooms: List[Room]
    # One entry per connection attempt; None where no path was found.
    paths: List[Optional[List[Location]]]

    @property
    def connected(self) -> bool:
        return all(path is not None for path in self.paths)


def random_element(rng: RandomSource, items: Sequence[T]) -> T:
    """Uniformly pick one element of a non-empty sequence."""
    if not items:
        raise ValueError("cannot pick a random element from an empty sequence")
    return items[rng.get_randrange(0, len(items))]


def _place_rooms(
    rng: RandomSource, width: int, height: int, config: GeneratorConfig, logger
) -> List[Room]:
    rooms: List[Room] = []
    rejected = 0
    for attempt in range(config.room_attempts):
        room_width = rng.get_randrange(config.min_room_size, config.max_room_size)
        room_height = rng.get_randrange(config.min_room_size, config.max_room_size)
        if room_width >= width or room_height >= height:
            logger.debug(
                "Room cannot fit on grid",
                attempt=attempt,
                room_width=room_width,
                room_height=room_height,
            )
            rejected += 1
            continue
        room = Room(
            rng.get_randrange(0, width - room_width),
            rng.get_randrange(0, height - room_height),
            room_width,
            room_height,
        )
        if any(chosen.overlaps(room) for chosen in rooms):
            logger.debug("Room overlaps, skipped", attempt=attempt, room=room)
            rejected += 1
            continue
        logger.debug("Room accepted", attempt=attempt, room=room)
        rooms.append(room)
    logger.info(
        "Room placement finished",
        accepted=len(rooms),
        rejected=rejected,
        attempts=config.room_attempts,
    )
    return rooms


def draw_rooms(grid: Grid, rooms: Sequence[Room]) -> None:
    """Stamp walls and floors of ``rooms`` onto ``grid`` in the given order."""
    for room in rooms:
        for wall in room.walls():
            grid.set_terrain(wall, Terrain.WALL)
        for floor in room.floors():
            grid.set_terrain(floor, Terrain.FLOOR)


def connect_locations(
    grid: Grid, start: Location, end: Location, logger=None
) -> Optional[List[Location]]:
    """Open ``start`` and ``end`` and dig a corridor of DEBUG cells between them.

    Returns the corridor (endpoints included) or ``None`` when the two cells
    cannot be joined through unexcavated space; the opened cells stay open
    either way.
    """
    logger = logger or log
    grid.set_terrain(start, Terrain.NOTHING)
    grid.set_terrain(end, Terrain.NOTHING)
    logger.info("Searching for path", start=start, end=end)
    path = find_path(grid, start, end)
    if path is None:
        logger.warning("Failed to find path", start=start, end=end)
        return None
    for loc in path:
        grid.set_terrain(loc, Terrain.DEBUG)
    logger.info("Path carved", start=start, end=end, length=len(path))
    return path


def generate(
    rng: RandomSource,
    width: int,
    height: int,
    config: Optional[GeneratorConfig] = None,
    logger=None,
) -> GeneratedLevel:
    """Generate a level of ``width`` x ``height`` cells.

    The result is a :class:`GeneratedLevel`. ``level.grid`` and
    ``level.start`` are the generated grid and starting location; ``rooms``
    and ``paths`` are extra detail, so callers that only want the pair can
    unpack with ``grid, start, *_ = generate(...)``.

    Raises ``ValueError`` for non-positive dimensions and
    :class:`GenerationError` if no room could be placed. A failed corridor
    search is reported through ``GeneratedLevel.connected``.
    """
    if width <= 0 or height <= 0:
        raise ValueError("Level width and height must be positive integers.")
    config = config or GeneratorConfig()
    logger = (logger or log).bind(width=width, height=height)
    logger.info("Starting level generation", config=config)

    grid = Grid(width, height)

    rooms = _place_rooms(rng, width, height, config, logger)
    if not rooms:
        logger.error("Level generation failed to place any rooms")
        raise GenerationError(
            f"No rooms fit on a {width}x{height} grid after {config.room_attempts} attempts"
        )

    draw_rooms(grid, rooms)

    paths: List[Optional[List[Location]]] = []
    for _ in range(config.connections):
        # Two rooms with replacement; both ends may be in the same room.
        wall1 = random_element(rng, list(random_element(rng, rooms).walls()))
        wall2 = random_element(rng, list(random_element(rng, rooms).walls()))
        paths.append(connect_locations(grid, wall1, wall2, logger))

    start_room = random_element(rng, rooms)
    start = random_element(rng, list(start_room.floors()))

    level = GeneratedLevel(grid=grid, start=start, rooms=rooms, paths=paths)
    logger.info(
        "Level generation complete",
        rooms=len(rooms),
        start=start,
        connected=level.connected,
    )
    return level


__all__ = [
    "GeneratedLevel",
    "GeneratorConfig",
    "RandomSource",
    "connect_locations",
    "draw_rooms",
    "generate",
    "random_element",
]
