import pytest

from planners.grid import GridMap, PlanningInputError, bresenham, line_of_sight, make_grid


def test_walkable_respects_bounds_and_obstacles():
    g = GridMap(4, 3, frozenset({(1, 1)}))
    assert g.is_walkable((0, 0))
    assert g.is_walkable((3, 2))
    assert not g.is_walkable((1, 1))
    for cell in [(-1, 0), (0, -1), (4, 0), (0, 3)]:
        assert not g.is_walkable(cell)


def test_neighbors_are_cardinal_and_walkable():
    g = GridMap(3, 3, frozenset({(1, 0)}))
    assert list(g.neighbors((1, 1))) == [(1, 2), (0, 1), (2, 1)]
    assert list(g.neighbors((0, 0))) == [(0, 1)]


def test_bresenham_includes_both_ends():
    pts = bresenham((0, 0), (4, 2))
    assert pts[0] == (0, 0) and pts[-1] == (4, 2)
    assert bresenham((2, 2), (2, 2)) == [(2, 2)]
    assert bresenham((3, 0), (0, 0)) == [(3, 0), (2, 0), (1, 0), (0, 0)]


def test_bresenham_tie_stays_on_start_row():
    assert bresenham((0, 0), (2, 1)) == [(0, 0), (1, 0), (2, 1)]
    assert bresenham((0, 0), (3, 3)) == [(0, 0), (1, 1), (2, 2), (3, 3)]
    g = GridMap(3, 2, frozenset({(1, 1)}))
    assert line_of_sight(g, (0, 0), (2, 1))
    assert not line_of_sight(GridMap(3, 2, frozenset({(1, 0)})), (0, 0), (2, 1))


def test_line_of_sight_blocked_by_any_cell():
    g = GridMap(10, 10, frozenset({(5, 5)}))
    assert line_of_sight(g, (0, 0), (9, 0))
    assert not line_of_sight(g, (0, 5), (9, 5))
    assert not line_of_sight(g, (0, 0), (9, 9))
    # endpoint itself must be walkable too
    assert not line_of_sight(g, (5, 0), (5, 5))


def test_make_grid_validates_eagerly():
    g = make_grid(5, 4, [(1, 1)], (0, 0), (4, 3), 2)
    assert g.obstacles == frozenset({(1, 1)})
    with pytest.raises(PlanningInputError, match="positive"):
        make_grid(5, 0, [], (0, 0), (0, 0), 1)
    with pytest.raises(PlanningInputError, match="out of bounds"):
        make_grid(5, 4, [], (0, 0), (5, 3), 1)
    with pytest.raises(PlanningInputError, match="on obstacle"):
        make_grid(5, 4, [(0, 0)], (0, 0), (4, 3), 1)
    with pytest.raises(PlanningInputError, match="min_segment_length"):
        make_grid(5, 4, [], (0, 0), (4, 3), 0)
