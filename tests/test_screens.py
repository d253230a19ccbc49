import pygame
import pytest

from gatecrawl.entity import Equipment, EquipmentType, PotionKind, Treasure
from gatecrawl.gate import Gate, Tower
from gatecrawl.graphics import Renderer
from gatecrawl.player import Player
from gatecrawl.savefile import SaveState, save
from gatecrawl.screens import Key, MenuChoice, Nav, Screens


def make(keys):
    return Screens(Renderer(pygame.Surface((1300, 900))), keys)


def potion(kind=PotionKind.HEAL):
    return Treasure(kind)


def test_select_option_moves_and_clamps():
    assert make([Key.DOWN, Key.RETURN]).select_option(["a", "b", "c"], 0, 0) == 1
    assert make([Key.DOWN] * 5 + [Key.RETURN]).select_option(["a", "b", "c"], 0, 0) == 2
    assert make([Key.UP, Key.RETURN]).select_option(["a", "b", "c"], 0, 0) == 0


def test_select_object_in_bag():
    player = Player.new()
    player.add_to_bag(potion())
    player.add_to_bag(potion(PotionKind.MANA))
    assert make([Key.DOWN, Key.DOWN, Key.RETURN]).select_object_in_bag(player, 600, 400) == 1
    assert make([Key.RIGHT]).select_object_in_bag(player, 600, 400) is Nav.SWITCH
    assert make([Key.EXIT]).select_object_in_bag(player, 600, 400) is Nav.EXIT


def test_empty_bag_ignores_return():
    assert make([Key.RETURN, Key.EXIT]).select_object_in_bag(Player.new(), 600, 400) is Nav.EXIT


def test_select_equipment_without_equipment_switches():
    assert make([]).select_equipment(Player.new(), 600, 400) is Nav.SWITCH


def test_use_potion_heals():
    player = Player.new()
    player.hp = 50
    player.add_to_bag(potion())
    used = []
    assert make([]).use_treasure_in_bag(player, 0, 600, 400, used) is True
    assert player.hp == 60
    assert len(used) == 1


def test_use_equipment_in_free_slot():
    player = Player.new()
    sword = Equipment(4, EquipmentType.SWORD)
    player.add_to_bag(Treasure(sword))
    assert make([]).use_treasure_in_bag(player, 0, 600, 400, []) is True
    assert player.atk == 14
    assert player.equipment[0] == sword


def test_inventory_drink_and_throw():
    player = Player.new()
    player.hp = 50
    player.add_to_bag(potion())
    make([Key.RETURN, Key.RETURN, Key.EXIT]).inventory(player, 600, 400)
    assert player.bag == []
    assert player.hp == 60

    other = Player.new()
    other.hp = 50
    other.add_to_bag(potion())
    make([Key.RETURN, Key.DOWN, Key.RETURN, Key.EXIT]).inventory(other, 600, 400)
    assert other.bag == []
    assert other.hp == 50


def test_inventory_store_equipment():
    player = Player.new()
    sword = Equipment(2, EquipmentType.SWORD)
    player.equip(sword, 0)
    make([Key.RIGHT, Key.RETURN, Key.RETURN, Key.EXIT]).inventory(player, 600, 400)
    assert player.bag == [Treasure(sword)]
    assert player.equipment[0] is None


def test_select_stat():
    names = ["a", "b", "c", "d", "e", "f"]
    assert make([Key.DOWN] * 3 + [Key.RETURN]).select_stat(names, 0, 0) == 5
    assert make([Key.UP, Key.RETURN]).select_stat(names, 0, 0) == 3
    assert make([Key.EXIT]).select_stat(names, 0, 0) is None


def test_select_upgrade_spends_points_on_attack():
    player = Player.new()
    player.exp = player.exp_to_next_level()
    keys = [Key.RETURN] + [Key.RETURN, Key.RETURN] * 5 + [Key.RETURN, Key.EXIT]
    make(keys).select_upgrade(player, 300, 200)
    assert player.lv == 1
    assert player.atk == 15
    assert player.exp == 0


def test_enter_name():
    assert make(["a", "b", Key.BACKSPACE, "c", Key.RETURN]).enter_name() == "ac"
    assert make([Key.ESCAPE]).enter_name() is None


def test_menu_choices():
    assert make([Key.RETURN]).menu() is MenuChoice.PLAY
    assert make([Key.DOWN, Key.DOWN, Key.RETURN]).menu() is MenuChoice.QUIT


def test_menu_loads_game(tmp_path):
    player = Player.new()
    save(tmp_path / "game", Tower([Gate.initial()]), player, 1)
    keys = [Key.DOWN, Key.RETURN, "g", "a", "m", Key.EXIT, Key.RETURN]
    state = make(keys).menu(tmp_path)
    assert isinstance(state, SaveState)
    assert state.level == 1
    assert state.player == player