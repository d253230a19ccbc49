import random

import pytest

from gatecrawl.app import GameSession
from gatecrawl.entity import Monster
from gatecrawl.game import MoveResult
from gatecrawl.gate import CellType, Gate, Tower
from gatecrawl.player import Player
from gatecrawl.position import Position


def session_with_corridor():
    gate = Gate.initial()
    for x in range(10, 16):
        gate.cells[5][x].type = CellType.ROOM
    gate.cells[5][10].type = CellType.PLAYER
    player = Player.new()
    player.pos = Position(10, 5)
    return GameSession(Tower([gate]), player, 1, random.Random(1)), gate


def test_step_into_room_moves_and_ends_turn():
    session, gate = session_with_corridor()
    session.player.boosts = [2, 0, 0]
    assert session.step("d") is MoveResult.MOVED
    assert session.player.pos == Position(11, 5)
    assert gate.cells[5][10].type == CellType.ROOM
    assert session.player.boosts == [1, 0, 0]
    assert session.last_direction == "d"


def test_step_into_wall_is_blocked():
    session, _ = session_with_corridor()
    assert session.step("z") is MoveResult.BLOCKED
    assert session.player.pos == Position(10, 5)
    assert session.last_direction == "z"


def test_step_rejects_unknown_direction():
    session, _ = session_with_corridor()
    with pytest.raises(ValueError):
        session.step("x")


def test_cast_without_mana():
    session, _ = session_with_corridor()
    session.player.mp = 1
    assert session.cast() is False
    assert session.player.mp == 1


def test_cast_kills_monster_in_line():
    session, gate = session_with_corridor()
    gate.cells[5][13].type = CellType.MONSTER
    gate.cells[5][13].entity = Monster(hp=1, atk=1)
    session.step("d")
    mp = session.player.mp
    assert session.cast() is True
    assert session.player.mp == mp - 2
    assert gate.cells[5][13].type == CellType.ROOM
    assert session.player.exp == 50


def test_is_over():
    session, _ = session_with_corridor()
    assert not session.is_over()
    session.player.hp = 0
    assert session.is_over()