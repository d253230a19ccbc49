"""The adventurer: statistics, level progression, bag and equipment."""

from __future__ import annotations

from dataclasses import dataclass, field

from .entity import Equipment, EquipmentType, ObjectType, PotionKind, Treasure
from .position import Position

MAX_EQUIPMENT = 3
BAG_CAPACITY = 12

# Indices into Player.boosts: remaining turns of each bonus.
BOOST_REGENERATION = 0
BOOST_ACCURACY = 1
BOOST_EXPERIENCE = 2


class BagFullError(Exception):
    """Raised when a treasure is added to a full bag."""


@dataclass
class Player:
    hp: int
    hp_max: int
    mp: int
    mp_max: int
    atk: int
    intelligence: int
    defense: int
    exp: int
    lv: int
    boosts: list[int] = field(default_factory=lambda: [0, 0, 0])
    bag: list[Treasure] = field(default_factory=list)
    equipment: list[Equipment | None] = field(
        default_factory=lambda: [None] * MAX_EQUIPMENT
    )
    pos: Position = field(default_factory=lambda: Position(0, 0))

    def __post_init__(self) -> None:
        if (
            self.hp <= 0
            or self.mp < 0
            or self.atk <= 0
            or self.intelligence < 0
            or self.defense < 0
            or self.exp < 0
            or self.lv < 0
        ):
            raise ValueError(
                "Hp<=0 || Mp<0 || Atk<=0 || Int<0 || Def<0 || Exp<0 || Lv<0"
            )

    @classmethod
    def new(cls) -> Player:
        """Return a level-0 player with starting statistics."""
        return cls(100, 100, 50, 50, 10, 10, 10, 0, 0)

    def upgrade_stat(self, stat: int) -> None:
        """Add one point to attack (0), defense (1) or intelligence (2)."""
        if stat == 0:
            self.atk += 1
        elif stat == 1:
            self.defense += 1
            self.hp_max = self.defense * 10
        elif stat == 2:
            self.intelligence += 1
            self.mp_max = self.intelligence * 10 - 50

    def level_up(self, stat_to_up) -> None:
        """Spend points per statistic, refill hp and mp and gain a level."""
        for stat, count in enumerate(list(stat_to_up)[:3]):
            for _ in range(count):
                self.upgrade_stat(stat)
        self.hp = self.hp_max
        self.mp = self.mp_max
        self.exp -= self.exp_to_next_level()
        self.lv += 1

    def exp_to_next_level(self) -> int:
        return 350 + 50 * self.lv

    def can_level_up(self) -> bool:
        return self.exp >= self.exp_to_next_level()

    def equip(self, equipment: Equipment, slot: int) -> None:
        """Put ``equipment`` in ``slot``, swapping the bonus of the old item."""
        current = self.equipment[slot]
        old_quality = current.quality if current is not None else 0
        delta = equipment.quality - old_quality
        if equipment.type is EquipmentType.SWORD:
            self.atk += delta
        elif equipment.type is EquipmentType.ARMOR:
            self.defense += delta
        elif equipment.type is EquipmentType.MAGIC_WAND:
            self.intelligence += delta
        else:
            raise ValueError(f"unknown equipment type {equipment.type}")
        self.equipment[slot] = equipment

    def add_to_bag(self, treasure: Treasure) -> None:
        if len(self.bag) >= BAG_CAPACITY:
            raise BagFullError("bag is full")
        self.bag.append(treasure)

    def potion_count(self, kind: PotionKind) -> int:
        return sum(
            1 for t in self.bag if t.kind is ObjectType.POTION and t.item is kind
        )

    def remove_from_bag(self, index: int) -> Treasure:
        """Remove and return the bag item at ``index``, closing the gap."""
        return self.bag.pop(index)

    def throw_equipment(self, slot: int) -> Equipment | None:
        """Drop the equipment in ``slot``; later slots shift down one place."""
        removed = self.equipment.pop(slot)
        self.equipment.append(None)
        return removed