"""Monsters, equipment, potions and treasures found in the dungeon."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum


class ObjectType(IntEnum):
    EQUIP = 0
    POTION = 1


class PotionKind(IntEnum):
    HEAL = 0
    MANA = 1
    REGENERATION = 2
    ACCURACY = 3
    LEARNING = 4


class EquipmentType(IntEnum):
    SWORD = 0
    ARMOR = 1
    MAGIC_WAND = 2


@dataclass
class Monster:
    hp: int
    atk: int


@dataclass(frozen=True)
class Equipment:
    quality: int
    type: EquipmentType


@dataclass(frozen=True)
class Treasure:
    """A pick-up holding either a piece of equipment or a potion."""

    item: Equipment | PotionKind

    @property
    def kind(self) -> ObjectType:
        return ObjectType.EQUIP if isinstance(self.item, Equipment) else ObjectType.POTION


def make_equipment(kind: int, quality: int) -> Equipment:
    """Build equipment of type ``kind`` (0 sword, 1 armor, 2 magic wand)."""
    try:
        equipment_type = EquipmentType(kind)
    except ValueError:
        raise ValueError(f"unknown equipment type {kind}") from None
    return Equipment(quality=quality, type=equipment_type)


def make_potion(kind: int) -> PotionKind:
    """Return the potion of the given number (0 to 4)."""
    try:
        return PotionKind(kind)
    except ValueError:
        raise ValueError(f"unknown potion type {kind}") from None


def generate_treasure(stage: int, kind: int, rng: random.Random) -> Treasure:
    """Generate a potion (``kind`` 0) or equipment (``kind`` 1) for a floor.

    Equipment quality lies between 1 and ``stage``.
    """
    if kind == 0:
        return Treasure(make_potion(rng.randrange(5)))
    if kind == 1:
        return Treasure(make_equipment(rng.randrange(3), 1 + rng.randrange(stage)))
    raise ValueError(f"unknown treasure type {kind}")


def make_monster(hp: int, atk: int) -> Monster:
    """Build a monster; both statistics must be positive."""
    if hp <= 0 or atk <= 0:
        raise ValueError(f"Hp or Atk <= 0: Hp = {hp} Atk = {atk}")
    return Monster(hp=hp, atk=atk)