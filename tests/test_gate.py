import copy
import random

import pytest

from gatecrawl.entity import Equipment, Monster, Treasure
from gatecrawl.gate import (
    CENTER,
    CellType,
    Gate,
    generate_gate,
    generate_tower,
)
from gatecrawl.player import Player
from gatecrawl.position import HEIGHT, WIDTH, Position, dist_x, in_gate, manhattan_distance


@pytest.fixture(scope="module")
def generated():
    return generate_gate(random.Random(7))


@pytest.fixture(scope="module")
def tower():
    return generate_tower(random.Random(11))


def test_initial_gate_render():
    lines = Gate.initial().render().splitlines()
    assert len(lines) == HEIGHT
    assert all(len(line) == WIDTH for line in lines)
    assert lines[HEIGHT // 2][WIDTH // 2] == "U"
    assert "".join(lines).count("W") == HEIGHT * WIDTH - 1


def test_admissible_on_initial_gate():
    gate = Gate.initial()
    assert gate.admissible(CENTER.y - 1, CENTER.x)
    assert not gate.admissible(CENTER.y, CENTER.x)
    assert not gate.admissible(5, 5)


def test_adjacent_to_three_walls():
    gate = Gate.initial()
    assert gate.adjacent_to_three_walls(CENTER.y - 1, CENTER.x)
    assert not gate.adjacent_to_three_walls(CENTER.y, CENTER.x)


def test_surround_with_rooms_keeps_centre_and_border():
    gate = Gate.initial()
    gate.surround_with_rooms(CENTER.y, CENTER.x)
    for di in (-1, 0, 1):
        for dj in (-1, 0, 1):
            cell = gate.cells[CENTER.y + di][CENTER.x + dj]
            expected = CellType.STAIR_UP if (di, dj) == (0, 0) else CellType.ROOM
            assert cell.type == expected
    gate.surround_with_rooms(1, 1)
    assert gate.cells[0][0].type == CellType.WALL
    assert gate.cells[2][2].type == CellType.ROOM


def test_single_room_neighbour():
    gate = Gate.initial()
    gate.cells[CENTER.y - 1][CENTER.x].type = CellType.ROOM
    assert gate.single_room_neighbour(CENTER.y - 1, CENTER.x) == CENTER
    assert gate.single_room_neighbour(5, 5) is None
    gate.surround_with_rooms(CENTER.y, CENTER.x)
    assert gate.single_room_neighbour(CENTER.y, CENTER.x) is None


def test_generation_is_deterministic():
    first = generate_gate(random.Random(5)).render()
    second = generate_gate(random.Random(5)).render()
    assert first == second
    assert first.count("U") == 1
    assert len(first.splitlines()) == HEIGHT


def test_generated_gate_shape(generated):
    lines = generated.render().splitlines()
    assert set(lines[0]) == {"W"}
    assert set(lines[-1]) == {"W"}
    assert all(line[0] == "W" and line[-1] == "W" for line in lines)
    assert generated.cells[CENTER.y][CENTER.x].type == CellType.STAIR_UP
    for di in (-1, 0, 1):
        for dj in (-1, 0, 1):
            if (di, dj) != (0, 0):
                assert generated.cells[CENTER.y + di][CENTER.x + dj].type == CellType.ROOM
    assert "".join(lines).count("R") > 100


def test_place_treasures_and_monsters(generated):
    gate = copy.deepcopy(generated)
    stage = 3
    gate.place_treasures_and_monsters(stage, random.Random(2))
    near = [gate.cells[p.y][p.x].type for p in dist_x(1, CENTER.x, CENTER.y)]
    assert any(t in (CellType.TREASURE, CellType.MONSTER) for t in near)
    monsters = 0
    for row in gate.cells:
        for cell in row:
            if cell.type == CellType.TREASURE:
                assert isinstance(cell.entity, Treasure)
                if isinstance(cell.entity.item, Equipment):
                    assert 1 <= cell.entity.item.quality <= stage
            elif cell.type == CellType.MONSTER:
                monsters += 1
                assert isinstance(cell.entity, Monster)
                assert 1 <= cell.entity.hp <= 1 + 9 * stage
                assert 1 <= cell.entity.atk <= 1 + 9 * stage
    assert monsters > 0


def test_place_player_next_to_stair(generated):
    gate = copy.deepcopy(generated)
    player = Player.new()
    gate.place_player(player, CENTER.y, CENTER.x, random.Random(4))
    assert manhattan_distance(player.pos.y, player.pos.x, CENTER.y, CENTER.x) == 1
    assert gate.cells[player.pos.y][player.pos.x].type == CellType.PLAYER


def test_place_player_without_room_raises():
    with pytest.raises(RuntimeError):
        Gate.initial().place_player(Player.new(), CENTER.y, CENTER.x, random.Random(0))


def test_place_stair_down(generated):
    gate = copy.deepcopy(generated)
    pos = gate.place_stair_down(random.Random(9))
    assert manhattan_distance(pos.y, pos.x, CENTER.y, CENTER.x) >= 25
    assert gate.render().count("D") == 1
    assert gate.stair_down_position() == pos
    for di in (-1, 0, 1):
        for dj in (-1, 0, 1):
            if in_gate(pos.y + di, pos.x + dj):
                assert gate.cells[pos.y + di][pos.x + dj].type != CellType.WALL


def test_place_stair_down_without_room_raises():
    with pytest.raises(RuntimeError):
        Gate.initial().place_stair_down(random.Random(0))


def test_stair_down_position_missing():
    with pytest.raises(LookupError):
        Gate.initial().stair_down_position()


def test_tower_floors(tower):
    assert len(tower) == 10
    for level in range(1, 11):
        gate = tower[level]
        assert gate.cells[CENTER.y][CENTER.x].type == CellType.STAIR_UP
        assert isinstance(gate.stair_down_position(), Position)
        for row in gate.cells:
            for cell in row:
                if cell.type == CellType.TREASURE and isinstance(cell.entity.item, Equipment):
                    assert cell.entity.item.quality <= level


@pytest.mark.parametrize("level", [0, 11])
def test_tower_rejects_missing_floor(tower, level):
    with pytest.raises(IndexError):
        tower[level]
    assert len(tower) == 10
    assert tower[1].cells[CENTER.y][CENTER.x].type == CellType.STAIR_UP