"""Grid coordinates and neighbourhood helpers for a dungeon floor."""

from __future__ import annotations

from dataclasses import dataclass

WIDTH = 63
HEIGHT = 43


@dataclass(frozen=True)
class Position:
    """A cell coordinate: ``x`` is the column, ``y`` the row."""

    x: int
    y: int


def in_gate(i: int, j: int) -> bool:
    """Return True if row ``i``, column ``j`` lies strictly inside the border."""
    return 0 < i < HEIGHT - 1 and 0 < j < WIDTH - 1


def manhattan_distance(i1: int, j1: int, i2: int, j2: int) -> int:
    """Return the Manhattan distance between two cells."""
    return abs(i1 - i2) + abs(j1 - j2)


def dist_x(dist: int, x: int, y: int) -> list[Position]:
    """Return the in-border cells at Manhattan distance ``dist`` from (x, y).

    Cells are ordered by row offset, then by column offset.
    """
    return [
        Position(x + dj, y + di)
        for di in range(-dist, dist + 1)
        for dj in range(-dist, dist + 1)
        if abs(di) + abs(dj) == dist and in_gate(y + di, x + dj)
    ]