import random

import pytest

from lichcrawl.levelgen.coords import Coords, Rect
from lichcrawl.levelgen.grid import Grid


def test_coords_vector_arithmetic():
    c = Coords(3, 4)
    assert c + (1, -1) == Coords(4, 3)
    assert c - Coords(1, 1) == Coords(2, 3)
    assert -c == Coords(-3, -4)
    assert isinstance(c + (0, 0), Coords)


def test_neighbors_order_left_right_top_bottom():
    assert Coords(5, 5).neighbors4() == (Coords(4, 5), Coords(6, 5), Coords(5, 4), Coords(5, 6))


def test_rect_shrink_and_contains():
    r = Rect.from_xz(6, 4).shrink(1)
    assert r == Rect(Coords(1, 1), Coords(5, 3))
    assert r.contains((1, 1)) and r.contains((4, 2))
    assert not r.contains((5, 2)) and not r.contains((0, 1))


def test_rect_shrink_past_empty_raises():
    # shrinking to exactly empty is allowed, past it is not
    assert Rect.from_xz(2, 2).shrink(1).is_empty()
    with pytest.raises(ValueError):
        Rect.from_xz(2, 2).shrink(2)


def test_rect_rand_stays_inside_and_rejects_empty():
    rng = random.Random(7)
    r = Rect(Coords(2, 3), Coords(5, 9))
    for _ in range(200):
        assert r.contains(r.rand(rng))
    with pytest.raises(ValueError):
        Rect.from_xz(0, 3).rand(rng)


def test_rect_rand_center_near_middle():
    rng = random.Random(3)
    r = Rect.from_xz(10, 7)
    seen = {r.rand_center(rng) for _ in range(64)}
    assert seen <= {Coords(5, 3), Coords(5, 4), Coords(6, 3), Coords(6, 4)}
    assert Coords(5, 3) in seen or Coords(5, 4) in seen


def test_rect_cells_x_outer_z_inner():
    assert list(Rect.from_xz(2, 2).cells()) == [Coords(0, 0), Coords(0, 1), Coords(1, 0), Coords(1, 1)]


def test_grid_rejects_bad_dimensions():
    with pytest.raises(ValueError):
        Grid(0, 4, None)


def test_grid_index_is_bounds_checked():
    g = Grid(3, 2, 0)
    g[2, 1] = 5
    assert g[Coords(2, 1)] == 5
    for bad in [(-1, 0), (3, 0), (0, 2), (0, -1)]:
        with pytest.raises(IndexError):
            g[bad]
        with pytest.raises(IndexError):
            g[bad] = 1
    assert g.get((-1, 0), "edge") == "edge"


def test_grid_iter_buffer_order_and_rows():
    g = Grid(2, 2, 0)
    g[1, 0] = 1
    g[0, 1] = 2
    assert [c for c, _ in g.iter()] == [Coords(0, 0), Coords(1, 0), Coords(0, 1), Coords(1, 1)]
    assert list(g.rows()) == [[0, 1], [2, 0]]


def test_grid_map_and_copy_are_independent():
    g = Grid(2, 2, 1)
    doubled = g.map(lambda v: v * 2)
    clone = g.copy()
    clone[0, 0] = 9
    assert doubled.values() == [2, 2, 2, 2]
    assert g[0, 0] == 1
    assert clone != g
    assert g == Grid(2, 2, 1)
