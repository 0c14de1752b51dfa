"""Terrain features and the builder that places them.

A :class:`Feature` is an arrangement of terrain given in coordinates relative
to an arbitrary origin.  :class:`FeatureBuilder` translates a raw shape so that
one edge (or the centre) of its bounding box lands on an absolute grid
location, producing a new feature ready for :meth:`Grid.apply_feature`.

Example::

    pillar = (
        FeatureBuilder(components)
        .horiz_align(HorizontalAlignment.LEFT)
        .vert_align(VerticalAlignment.TOP)
        .location(Location(2, 3))
        .build()
    )
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Iterable, Iterator, Mapping, Sequence, Tuple

import structlog

from dungeon.location import Location
from dungeon.tiles import Terrain

log = structlog.get_logger(__name__)

Component = Tuple[Location, Terrain]


class Feature:
    """An ordered collection of ``(Location, Terrain)`` components."""

    def __init__(self, components: Iterable[Component]):
        self.components: Tuple[Component, ...] = tuple(components)

    @classmethod
    def from_rows(cls, rows: Sequence[str], legend: Mapping[str, Terrain]) -> "Feature":
        """Build a feature from text rows, e.g. ``["###", "#.#", "###"]``.

        Characters missing from ``legend`` are left out of the feature, so
        spaces can be used for cells the feature should not touch.
        """
        components = [
            (Location(x, y), legend[char])
            for y, row in enumerate(rows)
            for x, char in enumerate(row)
            if char in legend
        ]
        return cls(components)

    @property
    def width(self) -> int:
        if not self.components:
            return 0
        xs = [loc.x for loc, _ in self.components]
        return max(xs) - min(xs) + 1

    @property
    def height(self) -> int:
        if not self.components:
            return 0
        ys = [loc.y for loc, _ in self.components]
        return max(ys) - min(ys) + 1

    def __iter__(self) -> Iterator[Component]:
        return iter(self.components)

    def __len__(self) -> int:
        return len(self.components)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Feature):
            return NotImplemented
        return self.components == other.components

    def __repr__(self) -> str:
        return f"Feature({list(self.components)!r})"


class HorizontalAlignment(Enum):
    LEFT = auto()
    CENTER = auto()
    RIGHT = auto()


class VerticalAlignment(Enum):
    TOP = auto()
    CENTER = auto()
    BOTTOM = auto()


def _aligned_offset(target: int, low: int, high: int, edge: str) -> int:
    """Shift that moves the ``edge`` ("low", "center", "high") of a span onto ``target``."""
    if edge == "low":
        return target - low
    if edge == "high":
        return target - high
    # Integer division biases odd spans towards the higher coordinate.
    return target - (low + (high - low + 1) // 2)


_HORIZONTAL_EDGES = {
    HorizontalAlignment.LEFT: "low",
    HorizontalAlignment.CENTER: "center",
    HorizontalAlignment.RIGHT: "high",
}
_VERTICAL_EDGES = {
    VerticalAlignment.TOP: "low",
    VerticalAlignment.CENTER: "center",
    VerticalAlignment.BOTTOM: "high",
}


@dataclass(frozen=True)
class FeatureBuilder:
    """Immutable builder; every configuring call returns a new builder."""

    components: Tuple[Component, ...]
    placement: Location = Location(0, 0)
    horizontal: HorizontalAlignment = HorizontalAlignment.CENTER
    vertical: VerticalAlignment = VerticalAlignment.CENTER

    def __post_init__(self) -> None:
        object.__setattr__(self, "components", tuple(self.components))
        if not self.components:
            raise ValueError("FeatureBuilder requires at least one component.")

    def location(self, loc: Location) -> "FeatureBuilder":
        return replace(self, placement=loc)

    def horiz_align(self, align: HorizontalAlignment) -> "FeatureBuilder":
        return replace(self, horizontal=align)

    def vert_align(self, align: VerticalAlignment) -> "FeatureBuilder":
        return replace(self, vertical=align)

    def build(self) -> Feature:
        xs = [loc.x for loc, _ in self.components]
        ys = [loc.y for loc, _ in self.components]
        dx = _aligned_offset(
            self.placement.x, min(xs), max(xs), _HORIZONTAL_EDGES[self.horizontal]
        )
        dy = _aligned_offset(
            self.placement.y, min(ys), max(ys), _VERTICAL_EDGES[self.vertical]
        )
        log.debug(
            "Feature adjustment",
            dx=dx,
            dy=dy,
            placement=self.placement,
            horizontal=self.horizontal.name,
            vertical=self.vertical.name,
        )
        return Feature((loc.offset(dx, dy), terrain) for loc, terrain in self.components)


__all__ = [
    "Feature",
    "FeatureBuilder",
    "HorizontalAlignment",
    "VerticalAlignment",
]
