# landlord

A hot-seat, terminal board game of buying land and collecting fines, for one
to four players.

## Installing

```
pip install .
```

## Playing

By default the game reads its board from a file named `map.dat` in the
current directory:

```
landlord
```

Another board file can be given with `--map`:

```
landlord --map path/to/board.dat
```

If the map file cannot be opened, or holds no squares, the game prints an
error and exits with status 1.

You are first asked how many players will play. The answer is clamped to
between one and four. If the answer does not start with a number, one player
plays under the default name and no names are asked for. Otherwise each
player is asked for a name; pressing Enter keeps the default (`A-Tu`,
`Little-Mei`, `King-Baby`, `Mrs.Money`). Each player starts with $30000 on
square 0.

On your turn, press Enter (or type anything but `2`) to roll the die, or
type `2` to end the game. Each time your move wraps past the start square
you receive $2000.

### Squares

Each line of the map file describes one square. The first letter gives its
type, the next word its name:

| Line                                  | Square                                                                 |
|---------------------------------------|------------------------------------------------------------------------|
| `U name price upgrade f1 f2 f3 f4 f5` | Upgradable land; the fine is `f1`..`f5` according to its level (1 to 5) |
| `C name price unit_fine`              | Collectable; fine = unit_fine × collectable squares the owner holds    |
| `R name price fine_per_point`         | Random cost; fine = a die roll × fine_per_point                        |
| `J name`                              | Jail; whoever lands here misses their next turn                        |

Blank lines and lines starting with any other letter are skipped. A known
line with a missing name or missing or non-numeric numbers is an error.

When you land on a square nobody owns and you have enough money, you are
offered it. When you land on your own upgradable land and can afford the
upgrade, you may upgrade it, up to level 5. When you land on someone else's
square you pay them the fine; if you cannot cover it, they receive what you
had. A player whose money drops below zero goes bankrupt, and their squares
go back on the market at level 1. The game ends when one player is left or
someone chooses to exit.

## Using the pieces

The board and players can be driven from code:

```python
import random
from landlord.board import load_map
from landlord.player import PlayerRoster
from landlord.console import Console
from landlord.game import Game

rng = random.Random()
roster = PlayerRoster(["Ann", "Bob"])
world_map = load_map("map.dat", len(roster), rng)
game = Game(world_map, roster, Console(input), rng, clear=lambda: None)
game.run()
```

`Console` takes a function that returns the next line of input and a text
stream to write to (standard output by default). `Game.play_turn` plays a
single turn and returns `False` once the game is over.

`landlord.board.parse_map` builds the same board from an iterable of lines
and raises `landlord.board.MapError` on a malformed line; `load_map` raises
it too when the file cannot be opened. `landlord.game.format_board` and
`landlord.game.format_player_status` return the text that the game prints.

## What it does not do

Games are not saved: a game lives only as long as the process runs. There
is no board editor and no bundled map file; you supply the map yourself.