"""Turn rules: combat, movement, potions and magic."""

from __future__ import annotations

import random
from enum import IntEnum

from .entity import Monster, ObjectType, PotionKind, Treasure
from .gate import FLOORS, CellType, Gate, Tower
from .player import (
    BOOST_ACCURACY,
    BOOST_EXPERIENCE,
    BOOST_REGENERATION,
    MAX_EQUIPMENT,
    BagFullError,
    Player,
)
from .position import HEIGHT, WIDTH

MELEE = 1
MAGIC = 2
KILL_EXPERIENCE = 50
MAGIC_COST = 2
POTION_BOOST_TURNS = 30

DIRECTIONS = {"z": (0, -1), "s": (0, 1), "d": (1, 0), "q": (-1, 0)}


class MoveResult(IntEnum):
    MOVED = 0
    BAG_FULL = 1
    BLOCKED = 2


def damage(atk: int, accuracy_boost: int, rng: random.Random) -> int:
    """Roll damage between 80% and 120% of ``atk``, tripled on a critical hit."""
    coefficient = rng.randrange(41) / 100 + 0.8
    result = coefficient * atk
    critical_chance = 5
    if accuracy_boost > 0:
        critical_chance = rng.randrange(10) + 5
    if rng.randrange(100) < critical_chance:
        result *= 3
    return int(result)


def player_attack(player: Player, monster: Monster, kind: int, rng: random.Random) -> bool:
    """Hit ``monster`` with melee (1) or magic (2); return True if it dies."""
    if kind == MELEE:
        power = player.atk
    elif kind == MAGIC:
        power = player.intelligence * 2
    else:
        raise ValueError(f"unknown attack type {kind}")
    monster.hp -= damage(power, player.boosts[BOOST_ACCURACY], rng)
    if monster.hp > 0:
        return False
    gained = KILL_EXPERIENCE
    if player.boosts[BOOST_EXPERIENCE] > 0:
        gained = int(gained * 1.3)
    player.exp += gained
    return True


def _pick_up(gate: Gate, player: Player, x: int, y: int) -> MoveResult:
    cell = gate.cells[y][x]
    treasure: Treasure = cell.entity
    if treasure.kind is ObjectType.EQUIP:
        found = treasure.item
        for slot in range(MAX_EQUIPMENT):
            current = player.equipment[slot]
            if current is None or (
                current.type == found.type and current.quality < found.quality
            ):
                player.equip(found, slot)
                cell.type = CellType.ROOM
                cell.entity = None
                return MoveResult.MOVED
    try:
        player.add_to_bag(treasure)
    except BagFullError:
        return MoveResult.BAG_FULL
    cell.type = CellType.ROOM
    cell.entity = None
    return MoveResult.MOVED


def move_player(
    tower: Tower, player: Player, next_x: int, next_y: int, level: int, rng: random.Random
) -> tuple[MoveResult, int]:
    """Act on the cell at (next_x, next_y); return the result and the new floor."""
    gate = tower[level]
    cell = gate.cells[next_y][next_x]
    here = gate.cells[player.pos.y][player.pos.x]

    if cell.type == CellType.WALL:
        return MoveResult.BLOCKED, level
    if cell.type == CellType.ROOM:
        here.type = CellType.ROOM
        cell.type = CellType.PLAYER
        player.pos = type(player.pos)(next_x, next_y)
    elif cell.type == CellType.TREASURE:
        return _pick_up(gate, player, next_x, next_y), level
    elif cell.type == CellType.STAIR_DOWN:
        if level < FLOORS:
            here.type = CellType.ROOM
            level += 1
            tower[level].place_player(player, HEIGHT // 2, WIDTH // 2, rng)
    elif cell.type == CellType.STAIR_UP:
        if level > 1:
            here.type = CellType.ROOM
            level -= 1
            stair = tower[level].stair_down_position()
            tower[level].place_player(player, stair.y, stair.x, rng)
    elif cell.type == CellType.MONSTER:
        monster: Monster = cell.entity
        player.hp -= damage(monster.atk, 0, rng)
        if player_attack(player, monster, MELEE, rng):
            cell.type = CellType.ROOM
            cell.entity = None
    else:
        raise ValueError(f"unexpected cell type {cell.type!r} at x = {next_x} y = {next_y}")
    return MoveResult.MOVED, level


def drink_potion(player: Player, potion: PotionKind) -> None:
    if potion is PotionKind.HEAL:
        player.hp = min(player.hp_max, int(player.hp_max * 0.1 + player.hp))
    elif potion is PotionKind.MANA:
        player.mp = min(player.mp_max, int(player.mp_max * 0.1 + player.mp))
    elif potion is PotionKind.REGENERATION:
        player.boosts[BOOST_REGENERATION] += POTION_BOOST_TURNS
    elif potion is PotionKind.ACCURACY:
        player.boosts[BOOST_ACCURACY] += POTION_BOOST_TURNS
    elif potion is PotionKind.LEARNING:
        player.boosts[BOOST_EXPERIENCE] += POTION_BOOST_TURNS


def end_turn(player: Player) -> None:
    """Apply regeneration every third turn and count down the boosts."""
    regeneration = player.boosts[BOOST_REGENERATION]
    if regeneration > 0 and (regeneration - 1) % 3 == 0:
        player.hp = min(player.hp_max, player.hp + 20)
        player.mp = min(player.mp_max, player.mp + 10)
    player.boosts = [b - 1 if b > 0 else b for b in player.boosts]


def magic_attack(player: Player, gate: Gate, direction: str, rng: random.Random) -> bool:
    """Fire a bolt in ``direction`` hitting every monster up to the next wall.

    Returns False, doing nothing, if the player lacks mana.
    """
    try:
        dx, dy = DIRECTIONS[direction]
    except KeyError:
        raise ValueError(f"unknown direction {direction!r}") from None
    if player.mp < MAGIC_COST:
        return False
    player.mp -= MAGIC_COST
    x, y = player.pos.x, player.pos.y
    while gate.cells[y][x].type != CellType.WALL:
        cell = gate.cells[y][x]
        if cell.type == CellType.MONSTER and player_attack(player, cell.entity, MAGIC, rng):
            cell.type = CellType.ROOM
            cell.entity = None
        x += dx
        y += dy
    return True