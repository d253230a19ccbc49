# gatecrawl

A dungeon crawler played on a grid. You go down a tower of ten floors, called
gates. Each floor is a maze dug at random from its centre. You fight monsters,
pick up potions and equipment, and level up your character as you go.

## Installing

```
pip install .
```

To run the test suite, install the test extra:

```
pip install ".[test]"
pytest
```

## Playing

```
gatecrawl
gatecrawl --seed 42 --save-dir my_saves
```

* `--seed` fixes the random seed, so the same tower is generated each time.
* `--save-dir` sets the directory that saves are written to and read from.
  The default is `sauvegarde`.

The title menu offers **JOUER** (new game), **CHARGER** (load a save) and
**QUITTER** (quit). Move the cursor with `z` and `s`, then press Enter. A new
game first shows the whole floor. Press any key to go on to the close-up view
around your character.

### Controls

| Key       | Action                                        |
|-----------|-----------------------------------------------|
| `z q s d` | move up / left / down / right                 |
| space     | magic attack in the direction you last moved  |
| `p`       | character screen: boosts, stats, level up     |
| `i`       | inventory: use, drop or store items           |
| `m`       | save the game                                 |
| `c`       | load a game                                   |
| `l`       | quit                                          |

In the menus, `z`/`s` move the cursor, Enter confirms and `e` goes back. In the
inventory, `d` switches from the bag to the worn equipment and `q` switches back.
When you enter a save name, type it, fix mistakes with Backspace, and press
Enter to confirm or Escape to cancel.

### Rules in brief

* Walking into a monster makes it hit you once, and you strike back once in
  melee. A kill gives 50 experience, or 30% more while the experience boost is
  active.
* Damage ranges from 80% to 120% of the attack value. A critical hit does
  three times as much.
* The magic attack costs 2 MP. It hits every monster in a straight line up to
  the next wall, with twice your intelligence as its power.
* Equipment (sword, armour, magic wand) adds its quality to attack, defence or
  intelligence. When you pick up equipment, it goes into a free slot or replaces
  a weaker item of the same kind. If neither applies, it goes into your bag.
* A healing or mana potion restores 10% of the maximum. A regeneration,
  precision or learning potion gives a boost that lasts 30 turns. While
  regeneration is active, every third turn restores 20 HP and 10 MP.
* Your bag holds 12 items. You can wear up to three pieces of equipment.
* You can level up once your experience reaches `350 + 50 × level`. Each level
  gives five points to spend across attack, defence and intelligence. Raising
  defence sets the HP maximum to ten times defence. Raising intelligence sets
  the MP maximum to ten times intelligence, minus 50. Levelling up also refills
  HP and MP.
* The red tile is the stair down. The green tile at the centre of each floor
  leads back up to the floor above. On the first floor it does nothing.
* Dead ends hold treasure, and the cell in front of each dead end holds a
  monster. Monsters and equipment get stronger on deeper floors.
* The game ends when your HP drops to zero.

Saves are JSON files in the save directory, named after what you type in. If
you leave the name empty, the save is called `default_save`.

## Using the library

The game logic runs without a window:

```python
import random
from gatecrawl.gate import generate_tower
from gatecrawl.player import Player
from gatecrawl.app import GameSession

rng = random.Random(1)
tower = generate_tower(rng)
player = Player.new()
tower[1].place_player(player, 21, 31, rng)
session = GameSession(tower, player, 1, rng)
result = session.step("d")      # a MoveResult: MOVED, BAG_FULL or BLOCKED
print(tower[session.level].render())
```

The modules:

* `gatecrawl.position`: grid size, `Position`, `in_gate`, `dist_x` and
  `manhattan_distance`.
* `gatecrawl.entity`: monsters, equipment, potions and treasures.
* `gatecrawl.player`: `Player` with its statistics, bag and equipment, and
  `BagFullError`.
* `gatecrawl.gate`: `Gate`, `Tower`, `generate_gate` and `generate_tower`.
* `gatecrawl.game`: combat, movement (`move_player`), potions, `end_turn` and
  `magic_attack`.
* `gatecrawl.savefile`: `save`, `load`, `list_saves` and `resolve_save_path`.
* `gatecrawl.graphics`: the pygame `Renderer`.
* `gatecrawl.screens`: the interactive menus. They read keys from any iterable.
* `gatecrawl.app`: `GameSession` and the `main` entry point.

## Limits

* The game is played with the keyboard only. Mouse clicks are ignored.
* There is no sound and no intro animation.
* Saves use the package's own JSON layout. Only files written by
  `gatecrawl.savefile.save` can be loaded.