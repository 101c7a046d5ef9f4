import pytest

from tourguide.design.geometry import Coords, Rect, ViewportSnapshot
from tourguide.design.orientation import (
    CardinalOrientation as O,
    DEFAULT_ORIENTATION_ORDER,
    candidate_coords,
    compute_overflow,
    normalize_preferences,
)

TARGET = Rect(top=100, left=100, width=50, height=50)
TOOLTIP = Rect.from_size(200, 80)


@pytest.mark.parametrize(
    "orientation, expected",
    [
        (O.NORTH, (25, 5)),
        (O.SOUTH, (25, 165)),
        (O.EAST, (165, 85)),
        (O.WEST, (-115, 85)),
        (O.NORTH_EAST, (-45, 5)),
        (O.NORTH_WEST, (95, 5)),
        (O.SOUTH_EAST, (-45, 165)),
        (O.SOUTH_WEST, (95, 165)),
        (O.EAST_NORTH, (165, 95)),
        (O.EAST_SOUTH, (165, 75)),
        (O.WEST_NORTH, (-115, 95)),
        (O.WEST_SOUTH, (-115, 75)),
    ],
)
def test_candidate_coords_per_orientation(orientation, expected):
    coords = candidate_coords(orientation, TARGET, TOOLTIP, 5, 10)
    assert (coords.x, coords.y) == expected


def test_every_orientation_has_a_placement():
    for orientation in O:
        candidate_coords(orientation, TARGET, TOOLTIP, 0, 0)


def test_default_order_covers_all_orientations_once():
    assert len(DEFAULT_ORIENTATION_ORDER) == len(O)
    assert set(DEFAULT_ORIENTATION_ORDER) == set(O)


def test_overflow_inside_and_outside():
    vp = ViewportSnapshot(width=1024, height=768)
    inside = compute_overflow(Coords(x=25, y=165), TOOLTIP, vp)
    assert inside.fits
    assert inside.bottom == 165 + 80 - 768

    outside = compute_overflow(Coords(x=-115, y=85), TOOLTIP, vp)
    assert not outside.fits
    assert outside.left == 115
    assert outside.right <= 0


def test_overflow_touching_edge_still_fits():
    vp = ViewportSnapshot(width=200, height=80)
    assert compute_overflow(Coords(x=0, y=0), TOOLTIP, vp).fits


def test_normalize_preferences_defaults_and_coercion():
    assert normalize_preferences(None) == list(DEFAULT_ORIENTATION_ORDER)
    assert normalize_preferences([]) == list(DEFAULT_ORIENTATION_ORDER)
    assert normalize_preferences(["south", O.NORTH_WEST]) == [O.SOUTH, O.NORTH_WEST]


def test_normalize_preferences_rejects_unknown():
    with pytest.raises(ValueError):
        normalize_preferences(["upwards"])
