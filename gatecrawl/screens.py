"""Interactive menus: inventory, level-up, name entry and the title menu."""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from enum import Enum
from pathlib import Path

import pygame

from .entity import ObjectType, Treasure
from .graphics import BLACK, GREEN, RED, SCREEN_HEIGHT, SCREEN_WIDTH, WHITE, Renderer
from .player import BagFullError, Player
from .savefile import DEFAULT_SAVE_NAME, SAVE_DIRECTORY, SaveState, list_saves, load

NAVIGATION_HELP = "zqsd : deplacement      entrer : valider      E : quitter "
BAG_OPTIONS = ("Utiliser", "Jeter", "Retour")
EQUIPMENT_OPTIONS = ("Stocker", "Jeter", "Retour")
UPGRADE_OPTIONS = ("Plus", "Moins", "Retour")
STAT_NAMES = ("NIVEAU", "HPMAX", "MPMAX", "ATTAQUE", "DEFENSE", "INTELLIGENCE")
FIRST_UPGRADABLE = 3
LAST_UPGRADABLE = 5
POINTS_PER_LEVEL = 5
MAX_NAME_LENGTH = 38


class Key(str, Enum):
    """Keys the game reacts to; typed characters arrive as plain strings."""

    UP = "z"
    DOWN = "s"
    LEFT = "q"
    RIGHT = "d"
    EXIT = "e"
    SPACE = " "
    RETURN = "\r"
    BACKSPACE = "\b"
    ESCAPE = "\x1b"
    PROFILE = "p"
    INVENTORY = "i"
    SAVE = "m"
    LOAD = "c"
    QUIT = "l"


class Nav(Enum):
    """Outcome of a selection screen other than a chosen index."""

    SWITCH = "switch"
    EXIT = "exit"


class MenuChoice(Enum):
    PLAY = "play"
    QUIT = "quit"


class Screens:
    """Runs the interactive screens, reading keys from ``events``."""

    def __init__(self, renderer: Renderer, events: Iterable) -> None:
        self.renderer = renderer
        self._events = iter(events)

    def _next_key(self):
        return next(self._events, None)

    @staticmethod
    def _refresh() -> None:
        if pygame.display.get_init() and pygame.display.get_surface() is not None:
            pygame.display.flip()

    def _redraw_inventory(self, player: Player, x: int, y: int) -> None:
        pygame.draw.rect(self.renderer.surface, BLACK, (x - 300, y - 300, 600, 600))
        self.renderer.draw_bag(player, x, y)
        self.renderer.draw_player_equipment(player, x, y)
        self._refresh()

    def select_object_in_bag(self, player: Player, x: int, y: int) -> int | Nav:
        """Highlight a bag item; return its index, SWITCH or EXIT."""
        pos = 0

        def mark(color) -> None:
            self.renderer.draw_treasure(player.bag[pos], x - 140, y - 150 + 20 * pos, color)

        if player.bag:
            mark(RED)
            self._refresh()
        while True:
            key = self._next_key()
            if key is None or key == Key.EXIT:
                return Nav.EXIT
            if key == Key.RIGHT:
                if player.bag:
                    mark(WHITE)
                return Nav.SWITCH
            if key == Key.UP and pos > 0:
                mark(WHITE)
                pos -= 1
                mark(RED)
                self._refresh()
            elif key == Key.DOWN and pos < len(player.bag) - 1:
                mark(WHITE)
                pos += 1
                mark(RED)
                self._refresh()
            elif key == Key.RETURN and player.bag:
                mark(WHITE)
                return pos

    def select_equipment(self, player: Player, x: int, y: int) -> int | Nav:
        """Highlight a worn item; return its slot, SWITCH or EXIT."""
        if player.equipment[0] is None:
            return Nav.SWITCH
        pos = 0

        def mark(color) -> None:
            self.renderer.draw_equipment(player.equipment[pos], x + 50, y - 150 + 20 * pos, color)

        mark(RED)
        self._refresh()
        while True:
            key = self._next_key()
            if key is None or key == Key.EXIT:
                return Nav.EXIT
            if key == Key.LEFT and player.bag:
                mark(WHITE)
                return Nav.SWITCH
            if key == Key.UP and pos > 0:
                mark(WHITE)
                pos -= 1
                mark(RED)
                self._refresh()
            elif (
                key == Key.DOWN
                and pos + 1 < len(player.equipment)
                and player.equipment[pos + 1] is not None
            ):
                mark(WHITE)
                pos += 1
                mark(RED)
                self._refresh()
            elif key == Key.RETURN:
                mark(WHITE)
                return pos

    def select_option(self, options: Sequence[str], x: int, y: int) -> int:
        """Let the player pick one of ``options``; return its index."""
        pos = 0
        self.renderer.draw_options(options, x, y)
        self.renderer.text(x + 15, y, options[pos], RED)
        self._refresh()
        while True:
            key = self._next_key()
            if key is None:
                return len(options) - 1
            if key in (Key.UP, Key.DOWN):
                new = pos - 1 if key == Key.UP else pos + 1
                if 0 <= new < len(options):
                    self.renderer.text(x + 15, y + pos * 25, options[pos], WHITE)
                    pos = new
                    self.renderer.text(x + 15, y + pos * 25, options[pos], RED)
                    self._refresh()
            elif key == Key.RETURN:
                pygame.draw.rect(
                    self.renderer.surface, BLACK, (x, y, 70, 15 + 25 * len(options))
                )
                return pos

    def use_treasure_in_bag(
        self, player: Player, index: int, x: int, y: int, used: list[Treasure]
    ) -> bool:
        """Drink or wear the bag item at ``index``; return True if it was used.

        Drunk potions are appended to ``used``, which sets where the next one is shown.
        """
        treasure = player.bag[index]
        if treasure.kind is ObjectType.POTION:
            from .game import drink_potion

            drink_potion(player, treasure.item)
            self.renderer.draw_treasure(
                treasure, 50, SCREEN_HEIGHT - (len(used) * 15 + 100), GREEN
            )
            used.append(treasure)
            return True
        for slot, current in enumerate(player.equipment):
            if current is None or current.quality <= 0:
                player.equip(treasure.item, slot)
                return True
        slot = self.select_equipment(player, x, y)
        if isinstance(slot, Nav):
            return False
        player.equip(treasure.item, slot)
        return True

    def inventory(self, player: Player, x: int, y: int) -> None:
        """Browse the bag and the worn equipment until the player leaves."""
        self.renderer.text(5, SCREEN_HEIGHT - 20, NAVIGATION_HELP, WHITE)
        self._refresh()
        used: list[Treasure] = []
        in_bag = True
        while True:
            if in_bag:
                choice = self.select_object_in_bag(player, x, y)
                if choice is Nav.EXIT:
                    return
                if choice is Nav.SWITCH:
                    in_bag = False
                    continue
                top = y - 175 + 20 * choice
                option = self.select_option(BAG_OPTIONS, x - 250, top)
                if option == 2:
                    continue
                if option == 0 and not self.use_treasure_in_bag(player, choice, x, y, used):
                    continue
                player.remove_from_bag(choice)
            else:
                choice = self.select_equipment(player, x, y)
                if choice is Nav.EXIT:
                    return
                if choice is Nav.SWITCH:
                    in_bag = True
                    continue
                top = y - 175 + 20 * choice
                option = self.select_option(EQUIPMENT_OPTIONS, x + 200, top)
                if option == 2:
                    continue
                if option == 0:
                    try:
                        player.add_to_bag(Treasure(player.equipment[choice]))
                    except BagFullError:
                        continue
                player.throw_equipment(choice)
            self._redraw_inventory(player, x, y)

    def select_stat(self, names: Sequence[str], x: int, y: int) -> int | None:
        """Pick an upgradable statistic; return its row or None on exit."""
        pos = FIRST_UPGRADABLE
        self.renderer.text(x, y + pos * 20, names[pos], RED)
        self._refresh()
        while True:
            key = self._next_key()
            if key is None or key == Key.EXIT:
                return None
            if key in (Key.UP, Key.DOWN):
                new = pos - 1 if key == Key.UP else pos + 1
                if FIRST_UPGRADABLE <= new <= LAST_UPGRADABLE:
                    self.renderer.text(x, y + pos * 20, names[pos], WHITE)
                    pos = new
                    self.renderer.text(x, y + pos * 20, names[pos], RED)
            elif key == Key.RETURN:
                self.renderer.text(x, y + pos * 20, names[pos], WHITE)
                self._refresh()
                return pos
            self._refresh()

    def _draw_profile(self, player: Player, x: int, y: int) -> None:
        values = (
            player.lv, player.hp_max, player.mp_max,
            player.atk, player.defense, player.intelligence,
        )
        self.renderer.draw_boosts(player, x + 250, y)
        self.renderer.draw_stats(STAT_NAMES, values, x, y)
        self.renderer.text(5, SCREEN_HEIGHT - 20, NAVIGATION_HELP, WHITE)
        self._refresh()

    def _draw_remaining(self, remaining: int, x: int, y: int) -> None:
        pygame.draw.rect(self.renderer.surface, BLACK, (x + 35, y - 20, 150, 15))
        self.renderer.text(x + 35, y - 20, f"Points restants {remaining}", GREEN)

    def select_upgrade(self, player: Player, x: int, y: int) -> None:
        """Show the profile and let the player spend level-up points."""
        self._draw_profile(player, x, y)
        while True:
            key = self._next_key()
            if key is None or key == Key.EXIT:
                return
            if key != Key.RETURN or not player.can_level_up():
                continue
            self.renderer.text(x + 55, y + 7 * 20, "UPGRADE", WHITE)
            spent = [0, 0, 0]
            self._draw_remaining(POINTS_PER_LEVEL, x, y)
            self._refresh()
            levelled = False
            while not levelled:
                pos = self.select_stat(STAT_NAMES, x, y)
                if pos is None:
                    return
                row = y + (pos - 1) * 20
                option = self.select_option(UPGRADE_OPTIONS, x - 90, row)
                index = pos - FIRST_UPGRADABLE
                if option == 0 and sum(spent) < POINTS_PER_LEVEL:
                    spent[index] += 1
                elif option == 1 and spent[index] > 0:
                    spent[index] -= 1
                self.renderer.draw_stat_points(spent, x, y)
                self._draw_remaining(POINTS_PER_LEVEL - sum(spent), x, y)
                if sum(spent) < POINTS_PER_LEVEL:
                    self._refresh()
                    continue
                self.renderer.text(x + 55, y + 7 * 20, "UPGRADE", RED)
                self._refresh()
                while True:
                    confirm = self._next_key()
                    if confirm is None:
                        return
                    if confirm == Key.RETURN:
                        player.level_up(spent)
                        self.renderer.clear()
                        self._draw_profile(player, x, y)
                        levelled = True
                        break
                    if confirm == Key.EXIT:
                        spent = [0, 0, 0]
                        self.renderer.draw_stat_points(spent, x, y)
                        self._draw_remaining(POINTS_PER_LEVEL, x, y)
                        self.renderer.text(x + 55, y + 7 * 20, "UPGRADE", WHITE)
                        self._refresh()
                        break

    def enter_name(self) -> str | None:
        """Read a save name; return it, or None if the player cancels."""
        cx, cy = SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2
        name = ""
        while True:
            pygame.draw.rect(self.renderer.surface, BLACK, (cx + 50, cy - 50, 400, 30))
            self.renderer.text(cx + 50, cy - 50, f"NOM : {name}", WHITE)
            self.renderer.text(cx - 30, cy + 57, "entrer : VALIDER   echap : QUITTER", WHITE)
            self._refresh()
            key = self._next_key()
            if key is None or key == Key.ESCAPE:
                return None
            if key == Key.RETURN:
                return name
            if key == Key.BACKSPACE:
                name = name[:-1]
                continue
            char = key.value if isinstance(key, Key) else str(key)
            if char.isprintable() and len(name) + len(char) <= MAX_NAME_LENGTH:
                name += char

    def _load_game(self, save_dir: Path) -> SaveState | None:
        self.renderer.clear()
        self.renderer.text(150, 125, "NOM DES SAUVEGARDE(S) : ", WHITE)
        self.renderer.draw_save_names(list_saves(save_dir), 150, 150)
        while True:
            name = self.enter_name()
            if name is None:
                return None
            try:
                return load(save_dir / (name or DEFAULT_SAVE_NAME))
            except (OSError, ValueError):
                self.renderer.text(
                    10, 10, "Chargement echoué aucune sauvegarde de ce nom", RED
                )

    def menu(self, save_dir: str | os.PathLike = SAVE_DIRECTORY) -> MenuChoice | SaveState:
        """Run the title menu; return PLAY, QUIT or a loaded game."""
        entries = ("JOUER", "CHARGER", "QUITTER")
        cx, cy = SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2
        pos = 0
        while True:
            self.renderer.clear()
            for index, label in enumerate(entries):
                color = RED if index == pos else WHITE
                self.renderer.text(cx - 25, cy - 25 + 25 * index, label, color)
            self._refresh()
            key = self._next_key()
            if key is None:
                return MenuChoice.QUIT
            if key == Key.UP and pos > 0:
                pos -= 1
            elif key == Key.DOWN and pos < len(entries) - 1:
                pos += 1
            elif key == Key.RETURN:
                self.renderer.clear()
                if pos == 0:
                    return MenuChoice.PLAY
                if pos == 2:
                    return MenuChoice.QUIT
                state = self._load_game(Path(save_dir))
                if state is not None:
                    return state