"""Drawing of the dungeon, the player and the interface panels with pygame."""

from __future__ import annotations

from collections.abc import Sequence

import pygame

from .entity import Equipment, EquipmentType, ObjectType, PotionKind, Treasure
from .gate import Cell, CellType, Gate
from .player import BAG_CAPACITY, BOOST_REGENERATION, Player
from .position import HEIGHT, WIDTH

Color = tuple[int, int, int]

BLACK: Color = (0, 0, 0)
WHITE: Color = (255, 255, 255)
RED: Color = (255, 0, 0)
GREEN: Color = (0, 255, 0)
BLUE: Color = (0, 0, 255)
YELLOW: Color = (255, 255, 0)
CYAN: Color = (0, 255, 255)
PINK: Color = (255, 192, 203)
PURPLE: Color = (160, 32, 240)
GREY: Color = (190, 190, 190)

CELL_SIZE = 20
SCREEN_WIDTH = (WIDTH + 1) * CELL_SIZE
SCREEN_HEIGHT = (HEIGHT + 1) * CELL_SIZE
FONT_SIZE = 18

HELP_LINE = (
    "esapce : attque magique      P : menu personnage      I : Inventaire"
    "     M : sauvegarder     C : charger     L : QUITTER"
)

_CELL_COLORS = {
    CellType.WALL: BLACK,
    CellType.ROOM: WHITE,
    CellType.TREASURE: YELLOW,
    CellType.STAIR_DOWN: RED,
    CellType.STAIR_UP: GREEN,
    CellType.MONSTER: WHITE,
    CellType.PLAYER: WHITE,
}

_POTIONS = {
    PotionKind.HEAL: (RED, "Potion de soin"),
    PotionKind.MANA: (BLUE, "Potion de mana"),
    PotionKind.REGENERATION: (PINK, "Potion de regeneration"),
    PotionKind.ACCURACY: (YELLOW, "Potion de precision"),
    PotionKind.LEARNING: (GREEN, "Potion d'apprentissage"),
}

_BOOST_NAMES = ("Regeneration", "Precision", "Experience")

_PROJECTILES = {"z": (0, -1, "^"), "s": (0, 1, "v"), "d": (1, 0, ">"), "q": (-1, 0, "<")}


def quality_to_color(quality: int) -> Color:
    """Return the colour that marks equipment of the given quality."""
    if quality <= 3:
        return CYAN
    if quality <= 6:
        return RED
    if quality <= 9:
        return PURPLE
    return WHITE


class Renderer:
    """Draws game elements onto a pygame surface."""

    def __init__(self, surface: pygame.Surface) -> None:
        self.surface = surface
        if not pygame.font.get_init():
            pygame.font.init()
        self._font = pygame.font.Font(None, FONT_SIZE)

    def text(self, x: int, y: int, message: str, color: Color) -> pygame.Rect:
        """Draw ``message`` with its top-left corner at (x, y)."""
        image = self._font.render(message, True, color)
        return self.surface.blit(image, (x, y))

    def draw_player(self, x: int, y: int, direction: str, size: int) -> None:
        """Draw the player as a triangle centred on (x, y) pointing in ``direction``."""
        half = size // 2
        shapes = {
            "z": [(x - half, y + half), (x, y - half), (x + half, y + half)],
            "d": [(x - half, y - half), (x - half, y + half), (x + half, y)],
            "q": [(x + half, y + half), (x + half, y - half), (x - half, y)],
            "s": [(x - half, y - half), (x, y + half), (x + half, y - half)],
        }
        try:
            points = shapes[direction]
        except KeyError:
            raise ValueError(f"unknown direction {direction!r}") from None
        pygame.draw.polygon(self.surface, BLUE, points)

    def draw_cell(self, cell: Cell, x: int, y: int, size: int) -> None:
        """Draw one cell centred on (x, y)."""
        try:
            color = _CELL_COLORS[cell.type]
        except KeyError:
            raise ValueError(f"unknown cell type {cell.type!r}") from None
        half = size // 2
        pygame.draw.rect(self.surface, color, (x - half, y - half, size, size))
        if cell.type == CellType.MONSTER:
            pygame.draw.circle(self.surface, RED, (x, y), half)

    def draw_gate(self, gate: Gate, player: Player, direction: str) -> None:
        """Draw the whole floor and the player on it."""
        for i, row in enumerate(gate.cells):
            for j, cell in enumerate(row):
                self.draw_cell(cell, (j + 1) * CELL_SIZE, (i + 1) * CELL_SIZE, CELL_SIZE)
        self.draw_player(
            (player.pos.x + 1) * CELL_SIZE, (player.pos.y + 1) * CELL_SIZE, direction, CELL_SIZE
        )

    def draw_player_view(
        self, gate: Gate, player: Player, width: int, height: int, direction: str, size: int
    ) -> None:
        """Draw the cells around the player, centred in a ``width`` by ``height`` grid."""
        px, py = player.pos.x, player.pos.y
        for i in range(max(py - 4, 0), min(py + 5, HEIGHT)):
            for j in range(max(px - 6, 0), min(px + 7, WIDTH)):
                self.draw_cell(
                    gate.cells[i][j],
                    (j - px + width // 2) * size,
                    (i - py + height // 2) * size,
                    size,
                )
        self.draw_player((width // 2) * size, (height // 2) * size, direction, size)

    def _gauge(self, value: int, maximum: int, top: int, width: int, color: Color) -> None:
        left = width - 150
        pygame.draw.rect(self.surface, WHITE, (left, top, 100, 10), 1)
        filled = max(0, int(100 * value / maximum)) if maximum > 0 else 0
        if filled:
            pygame.draw.rect(self.surface, color, (left, top, filled, 10))

    def draw_hp(self, hp: int, hp_max: int, width: int) -> None:
        """Draw the health bar near the right edge of a screen ``width`` wide."""
        self._gauge(hp, hp_max, 10, width, GREEN)

    def draw_mp(self, player: Player, width: int) -> None:
        """Draw the mana bar below the health bar."""
        self._gauge(player.mp, player.mp_max, 25, width, BLUE)

    def draw_potion(self, potion: PotionKind, x: int, y: int, color: Color) -> None:
        """Draw a potion icon and its name, the name in ``color``."""
        try:
            potion_color, label = _POTIONS[potion]
        except KeyError:
            raise ValueError(f"unknown potion {potion!r}") from None
        self.text(x + 15, y, label, color)
        points = [(x - 5, y + 7), (x, y + 12), (x + 5, y + 7), (x, y + 2)]
        pygame.draw.polygon(self.surface, potion_color, points)

    def draw_equipment(self, equipment: Equipment, x: int, y: int, color: Color) -> None:
        """Draw an equipment icon coloured by quality, and its name in ``color``."""
        icon_color = quality_to_color(equipment.quality)
        if equipment.type is EquipmentType.SWORD:
            points = [(x - 5, y), (x - 5, y + 10), (x + 5, y + 5)]
            pygame.draw.polygon(self.surface, icon_color, points)
            self.text(x + 15, y, "Epee", color)
        elif equipment.type is EquipmentType.ARMOR:
            pygame.draw.rect(self.surface, icon_color, (x - 5, y + 5, 10, 10))
            self.text(x + 15, y, "Armure", color)
        elif equipment.type is EquipmentType.MAGIC_WAND:
            pygame.draw.rect(self.surface, icon_color, (x - 5, y + 5, 10, 3))
            self.text(x + 15, y, "Baguette magic", color)
        else:
            raise ValueError(f"unknown equipment {equipment.type!r}")

    def draw_treasure(self, treasure: Treasure, x: int, y: int, color: Color) -> None:
        if treasure.kind is ObjectType.EQUIP:
            self.draw_equipment(treasure.item, x, y, color)
        else:
            self.draw_potion(treasure.item, x, y, color)

    def draw_bag(self, player: Player, x: int, y: int) -> None:
        """Draw the numbered bag contents to the left of (x, y)."""
        self.text(x - 158, y - 165, "Contenue du sac :", WHITE)
        for index, treasure in enumerate(player.bag):
            row = y - 150 + 20 * index
            self.text(x - 158, row, f"{index}.", WHITE)
            self.draw_treasure(treasure, x - 140, row, WHITE)

    def draw_player_equipment(self, player: Player, x: int, y: int) -> None:
        """Draw the numbered worn equipment to the right of (x, y)."""
        self.text(x + 40, y - 165, "Equipments :", WHITE)
        for slot, equipment in enumerate(player.equipment):
            if equipment is None or equipment.quality <= 0:
                continue
            row = y - 150 + 20 * slot
            self.text(x + 32, row, f"{slot}.", WHITE)
            self.draw_equipment(equipment, x + 50, row, WHITE)

    def draw_header(self, player: Player, level: int) -> None:
        """Draw the status line, the gauges and the key help."""
        self.draw_hp(player.hp, player.hp_max, SCREEN_WIDTH)
        self.draw_mp(player, SCREEN_WIDTH)
        self.text(20, 20, f"sac : {len(player.bag)}/{BAG_CAPACITY}", WHITE)
        self.text(
            100, 20, f"potion de soin : {player.potion_count(PotionKind.HEAL)}", WHITE
        )
        if player.can_level_up():
            self.text(SCREEN_WIDTH - 300, 20, "P : augmenter niveau", GREEN)
        self.text(
            SCREEN_WIDTH - 550,
            20,
            f"etage : {level} niveau : {player.lv} exp : "
            f"{player.exp}/{player.exp_to_next_level()}",
            WHITE,
        )
        self.text(5, SCREEN_HEIGHT - 20, HELP_LINE, WHITE)

    def draw_options(self, options: Sequence[str], x: int, y: int) -> None:
        """Draw a column of option buttons starting at (x, y)."""
        for index, option in enumerate(options):
            pygame.draw.rect(self.surface, GREY, (x, y + index * 25, 70, 15))
            self.text(x + 15, y + index * 25, option, WHITE)

    def draw_boosts(self, player: Player, x: int, y: int) -> None:
        """Draw the remaining turns of each active bonus."""
        for index, name in enumerate(_BOOST_NAMES):
            turns = player.boosts[BOOST_REGENERATION + index]
            self.text(x, y + index * 25, f"Bonus de {name} actifs pendant {turns} tour(s)", WHITE)

    def draw_stats(self, names: Sequence[str], values: Sequence[int], x: int, y: int) -> None:
        """Draw statistic names with their values, then the upgrade button."""
        for index, (name, value) in enumerate(zip(names, values)):
            self.text(x, y + index * 20, name, WHITE)
            self.text(x + 150, y + index * 20, f": {value}", WHITE)
        button_y = y + (len(names) + 1) * 20
        pygame.draw.rect(self.surface, GREY, (x + 40, button_y, 95, 15))
        self.text(x + 55, button_y, "UPGRADE", RED)

    def draw_stat_points(self, stat_to_up: Sequence[int], x: int, y: int) -> None:
        """Draw the points assigned to attack, defense and intelligence."""
        pygame.draw.rect(self.surface, BLACK, (x + 175, y + 3 * 18, 25, 3 * 25))
        for index, points in enumerate(list(stat_to_up)[:3]):
            row = y + (index + 3) * 20
            pygame.draw.rect(self.surface, BLACK, (x + 172, row, 5, 5))
            self.text(x + 175, row, f"+ {points}", RED)

    def draw_magic_attack(
        self, player: Player, gate: Gate, direction: str, cell_size: int, height: int, width: int
    ) -> None:
        """Draw the bolt from the player up to the next wall."""
        try:
            dx, dy, projectile = _PROJECTILES[direction]
        except KeyError:
            raise ValueError(f"unknown direction {direction!r}") from None
        i = j = 0
        while gate.cells[player.pos.y + i][player.pos.x + j].type != CellType.WALL:
            self.text((width // 2 + j) * cell_size, (height // 2 + i) * cell_size, projectile, CYAN)
            j += dx
            i += dy

    def draw_save_names(self, names: Sequence[str], x: int, y: int) -> None:
        """Draw the list of saved games, one per line."""
        for index, name in enumerate(names):
            self.text(x, y + index * 25, name, WHITE)

    def clear(self) -> None:
        self.surface.fill(BLACK)