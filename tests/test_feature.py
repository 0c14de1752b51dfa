import pytest

from dungeon.feature import (
    Feature,
    FeatureBuilder,
    HorizontalAlignment,
    VerticalAlignment,
)
from dungeon.grid import Grid
from dungeon.location import Location
from dungeon.tiles import Terrain

W = Terrain.WALL

# Shape used by the placement tests:
#
# ....
# .##.
# .##.
# .#..
# ....
SHAPE = [
    (Location(1, 1), W),
    (Location(2, 1), W),
    (Location(1, 2), W),
    (Location(2, 2), W),
    (Location(1, 3), W),
]

SQUARE = [(Location(x, y), W) for y in range(3) for x in range(3)]


def test_feature_size():
    feature = Feature([(Location(0, 0), W), (Location(1, 0), W), (Location(1, 1), W)])
    assert feature.width == 2
    assert feature.height == 2


def test_empty_feature_has_no_size():
    feature = Feature([])
    assert feature.width == 0
    assert feature.height == 0
    assert len(feature) == 0


def test_builder_requires_components():
    with pytest.raises(ValueError):
        FeatureBuilder([])


def test_top_left_alignment():
    feature = (
        FeatureBuilder(SHAPE)
        .vert_align(VerticalAlignment.TOP)
        .horiz_align(HorizontalAlignment.LEFT)
        .location(Location(2, 3))
        .build()
    )
    assert list(feature) == [
        (Location(2, 3), W),
        (Location(3, 3), W),
        (Location(2, 4), W),
        (Location(3, 4), W),
        (Location(2, 5), W),
    ]


def test_bottom_right_alignment():
    feature = (
        FeatureBuilder(SHAPE)
        .vert_align(VerticalAlignment.BOTTOM)
        .horiz_align(HorizontalAlignment.RIGHT)
        .location(Location(5, 2))
        .build()
    )
    assert list(feature) == [
        (Location(4, 0), W),
        (Location(5, 0), W),
        (Location(4, 1), W),
        (Location(5, 1), W),
        (Location(4, 2), W),
    ]


def test_center_alignment_of_square():
    feature = (
        FeatureBuilder(SQUARE)
        .vert_align(VerticalAlignment.CENTER)
        .horiz_align(HorizontalAlignment.CENTER)
        .location(Location(4, 1))
        .build()
    )
    assert list(feature) == [(Location(3 + x, y), W) for y in range(3) for x in range(3)]


def test_center_alignment_biases_even_span_upwards():
    # Span of 2: the placement lands on the second cell.
    feature = FeatureBuilder([(Location(0, 0), W), (Location(1, 0), W)]).location(
        Location(10, 10)
    ).build()
    assert [loc for loc, _ in feature] == [Location(9, 10), Location(10, 10)]


def test_builder_calls_return_new_builders():
    base = FeatureBuilder(SHAPE)
    moved = base.location(Location(7, 7))
    assert base.placement == Location(0, 0)
    assert moved.placement == Location(7, 7)
    assert moved.build() == moved.build()


def test_terrain_is_preserved_per_component():
    mixed = [(Location(0, 0), Terrain.FLOOR), (Location(1, 0), Terrain.WALL)]
    feature = FeatureBuilder(mixed).horiz_align(HorizontalAlignment.LEFT).location(
        Location(3, 3)
    ).build()
    assert [terrain for _, terrain in feature] == [Terrain.FLOOR, Terrain.WALL]


def test_from_rows_skips_unknown_characters():
    feature = Feature.from_rows(["#.#", " # "], {"#": W, ".": Terrain.FLOOR})
    assert len(feature) == 4
    assert (Location(1, 0), Terrain.FLOOR) in list(feature)
    assert feature.width == 3
    assert feature.height == 2


def test_apply_feature_to_grid():
    grid = Grid(8, 8)
    feature = (
        FeatureBuilder(SQUARE)
        .horiz_align(HorizontalAlignment.LEFT)
        .vert_align(VerticalAlignment.TOP)
        .location(Location(5, 5))
        .build()
    )
    grid.apply_feature(feature)
    arr = grid.terrain_array()
    assert (arr[5:8, 5:8] == Terrain.WALL).all()
    assert int((arr == Terrain.WALL).sum()) == 9


def test_apply_feature_out_of_bounds_leaves_grid_untouched():
    grid = Grid(4, 4)
    feature = FeatureBuilder(SQUARE).location(Location(3, 3)).build()
    with pytest.raises(IndexError):
        grid.apply_feature(feature)
    assert (grid.terrain_array() == Terrain.NOTHING).all()
