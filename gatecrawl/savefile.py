"""Saving and loading a game in progress."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from .entity import Equipment, Monster, Treasure, make_equipment, make_potion
from .gate import CELL_SYMBOLS, Cell, Gate, Tower
from .player import Player
from .position import HEIGHT, WIDTH, Position

SAVE_DIRECTORY = "sauvegarde"
DEFAULT_SAVE_NAME = "default_save"
MAX_LISTED = 25

_CELL_FROM_SYMBOL = {symbol: kind for kind, symbol in CELL_SYMBOLS.items()}


@dataclass
class SaveState:
    tower: Tower
    player: Player
    level: int


def list_saves(directory: str | os.PathLike = SAVE_DIRECTORY) -> list[str]:
    """Return the paths of up to 25 files found under ``directory``."""
    root = Path(directory)
    if not root.is_dir():
        return []
    found: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for name in sorted(filenames):
            found.append(str(Path(dirpath) / name))
            if len(found) >= MAX_LISTED:
                return found
    return found


def resolve_save_path(name: str) -> Path:
    """Return the save file path for an entered name; empty means the default save."""
    return Path(SAVE_DIRECTORY) / (name or DEFAULT_SAVE_NAME)


def _encode_treasure(treasure: Treasure) -> dict:
    item = treasure.item
    if isinstance(item, Equipment):
        return {"equipment": [int(item.type), item.quality]}
    return {"potion": int(item)}


def _decode_treasure(data: dict) -> Treasure:
    if "equipment" in data:
        kind, quality = data["equipment"]
        return Treasure(make_equipment(kind, quality))
    return Treasure(make_potion(data["potion"]))


def _encode_gate(gate: Gate) -> dict:
    entities = []
    for y, row in enumerate(gate.cells):
        for x, cell in enumerate(row):
            if isinstance(cell.entity, Monster):
                entities.append({"x": x, "y": y, "monster": [cell.entity.hp, cell.entity.atk]})
            elif isinstance(cell.entity, Treasure):
                entities.append({"x": x, "y": y, **_encode_treasure(cell.entity)})
    return {"rows": gate.render().splitlines(), "entities": entities}


def _decode_gate(data: dict) -> Gate:
    rows = data["rows"]
    if len(rows) != HEIGHT or any(len(row) != WIDTH for row in rows):
        raise ValueError("floor has the wrong size")
    try:
        cells = [[Cell(_CELL_FROM_SYMBOL[symbol]) for symbol in row] for row in rows]
    except KeyError as exc:
        raise ValueError(f"unknown cell symbol {exc.args[0]!r}") from None
    for entity in data["entities"]:
        cell = cells[entity["y"]][entity["x"]]
        if "monster" in entity:
            hp, atk = entity["monster"]
            cell.entity = Monster(hp=hp, atk=atk)
        else:
            cell.entity = _decode_treasure(entity)
    return Gate(cells)


def _encode_player(player: Player) -> dict:
    return {
        "hp": player.hp,
        "hp_max": player.hp_max,
        "mp": player.mp,
        "mp_max": player.mp_max,
        "atk": player.atk,
        "intelligence": player.intelligence,
        "defense": player.defense,
        "exp": player.exp,
        "lv": player.lv,
        "boosts": list(player.boosts),
        "bag": [_encode_treasure(t) for t in player.bag],
        "equipment": [
            None if e is None else [int(e.type), e.quality] for e in player.equipment
        ],
        "pos": [player.pos.x, player.pos.y],
    }


def _decode_player(data: dict) -> Player:
    x, y = data["pos"]
    return Player(
        hp=data["hp"],
        hp_max=data["hp_max"],
        mp=data["mp"],
        mp_max=data["mp_max"],
        atk=data["atk"],
        intelligence=data["intelligence"],
        defense=data["defense"],
        exp=data["exp"],
        lv=data["lv"],
        boosts=list(data["boosts"]),
        bag=[_decode_treasure(t) for t in data["bag"]],
        equipment=[None if e is None else make_equipment(*e) for e in data["equipment"]],
        pos=Position(x, y),
    )


def save(path: str | os.PathLike, tower: Tower, player: Player, level: int) -> None:
    """Write the tower, the player and the current floor to ``path``."""
    document = {
        "level": level,
        "player": _encode_player(player),
        "tower": [_encode_gate(gate) for gate in tower.floors],
    }
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(document, fh)


def load(path: str | os.PathLike) -> SaveState:
    """Read a game written by :func:`save`.

    Raises FileNotFoundError if there is no such save and ValueError if it is malformed.
    """
    with open(path, encoding="utf-8") as fh:
        document = json.load(fh)
    try:
        return SaveState(
            tower=Tower([_decode_gate(g) for g in document["tower"]]),
            player=_decode_player(document["player"]),
            level=int(document["level"]),
        )
    except (KeyError, TypeError, IndexError) as exc:
        raise ValueError(f"malformed save file {path}") from exc