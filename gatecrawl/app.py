"""The game session and the windowed game loop."""

from __future__ import annotations

import argparse
import random
from pathlib import Path

import pygame

from .game import DIRECTIONS, MoveResult, end_turn, magic_attack, move_player
from .gate import Tower, generate_tower
from .graphics import RED, SCREEN_HEIGHT, SCREEN_WIDTH, Renderer
from .player import Player
from .position import HEIGHT, WIDTH
from .savefile import DEFAULT_SAVE_NAME, SAVE_DIRECTORY, SaveState, list_saves, load, save
from .screens import Key, MenuChoice, Screens

VIEW_CELL = 60
VIEW_WIDTH = WIDTH // 3
VIEW_HEIGHT = HEIGHT // 3


class GameSession:
    """A game in progress: the tower, the player and the current floor."""

    def __init__(self, tower: Tower, player: Player, level: int, rng: random.Random) -> None:
        self.tower = tower
        self.player = player
        self.level = level
        self.rng = rng
        self.last_direction = "z"

    def step(self, direction: str) -> MoveResult:
        """Move or act one cell in ``direction``; a completed move ends the turn."""
        try:
            dx, dy = DIRECTIONS[str(getattr(direction, "value", direction))]
        except KeyError:
            raise ValueError(f"unknown direction {direction!r}") from None
        pos = self.player.pos
        result, self.level = move_player(
            self.tower, self.player, pos.x + dx, pos.y + dy, self.level, self.rng
        )
        if result is MoveResult.MOVED:
            end_turn(self.player)
            self.last_direction = str(getattr(direction, "value", direction))
        return result

    def cast(self) -> bool:
        """Fire a bolt in the last direction moved; False if mana is lacking."""
        return magic_attack(
            self.player, self.tower[self.level], self.last_direction, self.rng
        )

    def is_over(self) -> bool:
        return self.player.hp <= 0


def _keyboard_events():
    while True:
        event = pygame.event.wait()
        if event.type == pygame.QUIT:
            return
        if event.type != pygame.KEYDOWN:
            continue
        special = {
            pygame.K_RETURN: Key.RETURN,
            pygame.K_KP_ENTER: Key.RETURN,
            pygame.K_ESCAPE: Key.ESCAPE,
            pygame.K_BACKSPACE: Key.BACKSPACE,
            pygame.K_SPACE: Key.SPACE,
        }
        if event.key in special:
            yield special[event.key]
        elif event.unicode:
            yield event.unicode


def _draw_view(renderer: Renderer, session: GameSession, direction: str) -> None:
    renderer.clear()
    renderer.draw_player_view(
        session.tower[session.level], session.player,
        VIEW_WIDTH, VIEW_HEIGHT, direction, VIEW_CELL,
    )
    renderer.draw_header(session.player, session.level)
    pygame.display.flip()


def _new_session(rng: random.Random) -> GameSession:
    tower = generate_tower(rng)
    player = Player.new()
    tower[1].place_player(player, HEIGHT // 2, WIDTH // 2, rng)
    return GameSession(tower, player, 1, rng)


def _save_names_screen(renderer: Renderer, save_dir: Path, title: str) -> None:
    renderer.clear()
    renderer.text(150, 125, "NOM DES SAUVEGARDE(S) : ", (255, 255, 255))
    renderer.draw_save_names(list_saves(save_dir), 150, 150)
    renderer.text(SCREEN_WIDTH // 2 - 75, 10, title, (0, 255, 0))


def _run(session: GameSession, renderer: Renderer, screens: Screens, events, save_dir: Path) -> None:
    renderer.draw_gate(session.tower[session.level], session.player, "z")
    renderer.text(SCREEN_WIDTH // 2 - 125, SCREEN_HEIGHT // 2 - 5, "CLIQUER POUR CONTINUER", RED)
    pygame.display.flip()
    if next(events, None) is None:
        return
    _draw_view(renderer, session, "z")
    while True:
        if session.is_over():
            renderer.clear()
            renderer.text(SCREEN_WIDTH // 2 - 25, SCREEN_HEIGHT // 2 - 5, "PERDUE", RED)
            pygame.display.flip()
            next(events, None)
            return
        key = next(events, None)
        if key is None or key == Key.QUIT:
            return
        if key in DIRECTIONS:
            result = session.step(key)
            if result is MoveResult.BAG_FULL:
                renderer.text(20, 70, "sac plein", RED)
                pygame.display.flip()
                continue
            if result is MoveResult.BLOCKED:
                continue
            _draw_view(renderer, session, session.last_direction)
            pygame.time.wait(100)
            continue
        if key == Key.INVENTORY:
            renderer.clear()
            renderer.draw_bag(session.player, SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2)
            renderer.draw_player_equipment(session.player, SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2)
            screens.inventory(session.player, SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2)
        elif key == Key.PROFILE:
            renderer.clear()
            screens.select_upgrade(session.player, SCREEN_WIDTH // 4, SCREEN_HEIGHT // 4)
        elif key == Key.SPACE:
            if not session.cast():
                continue
            renderer.draw_magic_attack(
                session.player, session.tower[session.level], session.last_direction,
                VIEW_CELL, VIEW_HEIGHT, VIEW_WIDTH,
            )
            pygame.display.flip()
            pygame.time.wait(100)
        elif key == Key.SAVE:
            _save_names_screen(renderer, save_dir, "MENU DE SAUVEGARDE")
            name = screens.enter_name()
            if name is not None:
                save_dir.mkdir(parents=True, exist_ok=True)
                save(save_dir / (name or DEFAULT_SAVE_NAME), session.tower, session.player, session.level)
        elif key == Key.LOAD:
            _save_names_screen(renderer, save_dir, "MENU DE CHARGEMENT")
            while True:
                name = screens.enter_name()
                if name is None:
                    break
                try:
                    state = load(save_dir / (name or DEFAULT_SAVE_NAME))
                except (OSError, ValueError):
                    renderer.text(10, 10, "Chargement echoué aucune sauvegarde de ce nom", RED)
                    continue
                session.tower, session.player, session.level = state.tower, state.player, state.level
                break
        else:
            continue
        _draw_view(renderer, session, session.last_direction)


def main(argv=None) -> int:
    """Open the game window and play until the player quits."""
    parser = argparse.ArgumentParser(prog="gatecrawl", description="Dungeon crawler.")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument("--save-dir", default=SAVE_DIRECTORY, help="directory of saves")
    args = parser.parse_args(argv)
    rng = random.Random(args.seed)
    save_dir = Path(args.save_dir)

    pygame.init()
    try:
        surface = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption("GATE")
        renderer = Renderer(surface)
        events = _keyboard_events()
        screens = Screens(renderer, events)
        choice = screens.menu(save_dir)
        if choice is MenuChoice.QUIT:
            return 0
        if isinstance(choice, SaveState):
            session = GameSession(choice.tower, choice.player, choice.level, rng)
        else:
            session = _new_session(rng)
        _run(session, renderer, screens, events, save_dir)
    finally:
        pygame.quit()
    return 0