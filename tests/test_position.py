import pytest

from gatecrawl.position import (
    HEIGHT,
    WIDTH,
    Position,
    dist_x,
    in_gate,
    manhattan_distance,
)


def test_border_is_outside_gate():
    assert not in_gate(0, 5)
    assert not in_gate(5, 0)
    assert not in_gate(HEIGHT - 1, 5)
    assert not in_gate(5, WIDTH - 1)


def test_interior_is_inside_gate():
    assert in_gate(1, 1)
    assert in_gate(HEIGHT - 2, WIDTH - 2)
    assert in_gate(HEIGHT // 2, WIDTH // 2)


def test_manhattan_distance_symmetric():
    assert manhattan_distance(3, 4, 7, 1) == manhattan_distance(7, 1, 3, 4)
    assert manhattan_distance(5, 5, 5, 5) == 0


def test_dist_one_order_around_centre():
    x, y = WIDTH // 2, HEIGHT // 2
    assert dist_x(1, x, y) == [
        Position(x, y - 1),
        Position(x - 1, y),
        Position(x + 1, y),
        Position(x, y + 1),
    ]


def test_dist_one_near_corner_drops_border_cells():
    assert dist_x(1, 1, 1) == [Position(2, 1), Position(1, 2)]


@pytest.mark.parametrize("dist", [1, 2, 3])
def test_dist_cells_are_at_requested_distance(dist):
    x, y = WIDTH // 2, HEIGHT // 2
    cells = dist_x(dist, x, y)
    assert len(cells) == 4 * dist
    assert all(manhattan_distance(c.y, c.x, y, x) == dist for c in cells)
    assert len(set(cells)) == len(cells)


def test_dist_zero_is_the_centre():
    assert dist_x(0, 10, 10) == [Position(10, 10)]
    assert dist_x(0, 0, 0) == []