"""Dungeon floors: cell grid, maze generation and placement of content."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import IntEnum

from .entity import Monster, Treasure, generate_treasure, make_monster
from .player import Player
from .position import HEIGHT, WIDTH, Position, dist_x, in_gate, manhattan_distance

CENTER = Position(WIDTH // 2, HEIGHT // 2)
FLOORS = 10
STAIR_MIN_DISTANCE = 25


class CellType(IntEnum):
    WALL = 0
    ROOM = 1
    MONSTER = 2
    TREASURE = 3
    STAIR_UP = 4
    STAIR_DOWN = 5
    PLAYER = 6


CELL_SYMBOLS = {
    CellType.WALL: "W",
    CellType.ROOM: "R",
    CellType.PLAYER: "P",
    CellType.MONSTER: "M",
    CellType.TREASURE: "T",
    CellType.STAIR_UP: "U",
    CellType.STAIR_DOWN: "D",
}


@dataclass
class Cell:
    type: CellType = CellType.WALL
    entity: Monster | Treasure | None = None


def _pick(candidates: list[Position], rng: random.Random) -> Position:
    """Remove and return a random element of ``candidates``."""
    return candidates.pop(rng.randrange(len(candidates)))


def _blank_grid() -> list[list[Cell]]:
    return [[Cell() for _ in range(WIDTH)] for _ in range(HEIGHT)]


@dataclass
class Gate:
    """One floor of the tower, indexed as ``cells[row][column]``."""

    cells: list[list[Cell]] = field(default_factory=_blank_grid)

    @classmethod
    def initial(cls) -> Gate:
        """Return a floor of walls with the up stair in the centre."""
        gate = cls()
        gate.cells[CENTER.y][CENTER.x].type = CellType.STAIR_UP
        return gate

    def _open_neighbours(self, dist: int, i: int, j: int) -> list[Position]:
        return [
            p for p in dist_x(dist, j, i) if self.cells[p.y][p.x].type != CellType.WALL
        ]

    def admissible(self, i: int, j: int) -> bool:
        """Return True if the wall at (i, j) may be dug into a room."""
        if self.cells[i][j].type != CellType.WALL:
            return False
        if len(self._open_neighbours(1, i, j)) != 1:
            return False
        return len(self._open_neighbours(2, i, j)) <= 2

    def adjacent_to_three_walls(self, i: int, j: int) -> bool:
        walls = sum(
            1 for p in dist_x(1, j, i) if self.cells[p.y][p.x].type == CellType.WALL
        )
        return walls == 3

    def surround_with_rooms(self, i: int, j: int) -> None:
        """Turn the inner walls among the eight cells around (i, j) into rooms."""
        for di in (-1, 0, 1):
            for dj in (-1, 0, 1):
                if (di, dj) == (0, 0) or not in_gate(i + di, j + dj):
                    continue
                cell = self.cells[i + di][j + dj]
                if cell.type == CellType.WALL:
                    cell.type = CellType.ROOM

    def single_room_neighbour(self, i: int, j: int) -> Position | None:
        """Return the only open neighbour of an open cell, or None."""
        if self.cells[i][j].type == CellType.WALL:
            return None
        neighbours = self._open_neighbours(1, i, j)
        return neighbours[0] if len(neighbours) == 1 else None

    def _put_treasure(self, pos: Position, stage: int, rng: random.Random) -> None:
        cell = self.cells[pos.y][pos.x]
        cell.type = CellType.TREASURE
        cell.entity = generate_treasure(stage, rng.randrange(2), rng)

    def place_treasures_and_monsters(self, stage: int, rng: random.Random) -> None:
        """Put a treasure near the up stair, then treasures in dead ends guarded by monsters."""
        candidates = dist_x(1, CENTER.x, CENTER.y)
        while True:
            if not candidates:
                raise RuntimeError("no room around the up stair")
            pos = _pick(candidates, rng)
            if self.cells[pos.y][pos.x].type != CellType.WALL:
                break
        self._put_treasure(pos, stage, rng)

        dead_ends: list[Position] = []
        lairs: list[Position] = []
        for i in range(1, HEIGHT - 1):
            for j in range(1, WIDTH - 1):
                neighbour = self.single_room_neighbour(i, j)
                if neighbour is not None:
                    dead_ends.append(Position(j, i))
                    lairs.append(neighbour)

        for pos in dead_ends:
            self._put_treasure(pos, stage, rng)
        for pos in lairs:
            cell = self.cells[pos.y][pos.x]
            cell.type = CellType.MONSTER
            cell.entity = make_monster(
                1 + rng.randrange(10) * stage, 1 + rng.randrange(10) * stage
            )

    def place_player(self, player: Player, i: int, j: int, rng: random.Random) -> None:
        """Put the player on a random room next to (i, j)."""
        candidates = dist_x(1, j, i)
        while True:
            if not candidates:
                raise RuntimeError("no room around the stair")
            pos = _pick(candidates, rng)
            if self.cells[pos.y][pos.x].type == CellType.ROOM:
                break
        self.cells[pos.y][pos.x].type = CellType.PLAYER
        player.pos = pos

    def place_stair_down(self, rng: random.Random) -> Position:
        """Put the down stair on a room far enough from the centre."""

        def eligible(i: int, j: int) -> bool:
            return (
                in_gate(i, j)
                and manhattan_distance(i, j, CENTER.y, CENTER.x) >= STAIR_MIN_DISTANCE
                and self.cells[i][j].type == CellType.ROOM
            )

        if not any(eligible(i, j) for i in range(HEIGHT) for j in range(WIDTH)):
            raise RuntimeError("no room far enough for the down stair")
        while True:
            i = rng.randrange(HEIGHT)
            j = rng.randrange(WIDTH)
            if eligible(i, j):
                self.cells[i][j].type = CellType.STAIR_DOWN
                self.surround_with_rooms(i, j)
                return Position(j, i)

    def stair_down_position(self) -> Position:
        for i, row in enumerate(self.cells):
            for j, cell in enumerate(row):
                if cell.type == CellType.STAIR_DOWN:
                    return Position(j, i)
        raise LookupError("no down stair on this floor")

    def render(self) -> str:
        """Return the floor as one letter per cell, one line per row."""
        return "".join(
            "".join(CELL_SYMBOLS[cell.type] for cell in row) + "\n" for row in self.cells
        )


@dataclass
class Tower:
    """The floors of the dungeon, numbered from 1."""

    floors: list[Gate]

    def __getitem__(self, level: int) -> Gate:
        if not 1 <= level <= len(self.floors):
            raise IndexError(f"no floor {level}")
        return self.floors[level - 1]

    def __len__(self) -> int:
        return len(self.floors)


def generate_gate(rng: random.Random) -> Gate:
    """Dig a maze outward from the up stair."""
    gate = Gate.initial()
    frontier = dist_x(1, CENTER.x, CENTER.y)
    while frontier:
        chosen = None
        while frontier:
            pos = _pick(frontier, rng)
            if gate.admissible(pos.y, pos.x):
                chosen = pos
                break
        if chosen is None:
            break
        gate.cells[chosen.y][chosen.x].type = CellType.ROOM
        for neighbour in dist_x(1, chosen.x, chosen.y):
            if neighbour not in frontier and gate.admissible(neighbour.y, neighbour.x):
                frontier.append(neighbour)

    for i in range(HEIGHT):
        for j in range(WIDTH):
            if gate.cells[i][j].type == CellType.ROOM and gate.adjacent_to_three_walls(i, j):
                gate.cells[i][j].type = CellType.WALL

    gate.surround_with_rooms(CENTER.y, CENTER.x)
    return gate


def generate_tower(rng: random.Random) -> Tower:
    """Generate every floor with its treasures, monsters and down stair."""
    floors = []
    for stage in range(1, FLOORS + 1):
        gate = generate_gate(rng)
        gate.place_treasures_and_monsters(stage, rng)
        gate.place_stair_down(rng)
        floors.append(gate)
    return Tower(floors)