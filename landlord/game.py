"""Board display, game setup and the turn loop."""

from __future__ import annotations

import argparse
import os
import random
import re
import subprocess
import sys
from typing import Callable, List, Optional, Sequence

from landlord.board import MapError, WorldMap, load_map
from landlord.console import Console, roll_dice
from landlord.player import PlayerRoster, PlayerStatus

MAX_PLAYERS = 4
DEFAULT_NAMES = ("A-Tu", "Little-Mei", "King-Baby", "Mrs.Money")
PASS_GO_REWARD = 2000
COLUMN_WIDTH = 40
DEFAULT_MAP_PATH = "map.dat"

_INT_RANGE = (-(2**31), 2**31 - 1)
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def clear_screen() -> None:
    """Clear the terminal using the platform's clear command."""
    try:
        if os.name == "nt":
            subprocess.run("cls", shell=True, check=False)
        else:
            subprocess.run(["clear"], check=False)
    except OSError:
        pass


def format_board(world_map: WorldMap) -> str:
    """Lay the units out in two columns, the ring folded in half."""
    size = len(world_map)
    if size == 0:
        return ""
    lines: List[str] = []
    if size % 2 == 1:
        lines.append(f"{world_map[0].display():<{COLUMN_WIDTH}}")
    else:
        lines.append(
            f"{world_map[0].display():<{COLUMN_WIDTH}}"
            f"{world_map[size - 1].display():<{COLUMN_WIDTH}}"
        )
    for left in range(1, (size + 1) // 2):
        lines.append(
            f"{world_map[left].display():<{COLUMN_WIDTH}}"
            f"{world_map[size - 1 - left].display():<{COLUMN_WIDTH}}"
        )
    return "".join(line + "\n" for line in lines)


def format_player_status(roster: PlayerRoster, current_index: int) -> str:
    """One line per player still in the game, the current one marked."""
    parts = ["\n"]
    for index, player in enumerate(roster):
        if player.status is PlayerStatus.BANKRUPT:
            continue
        marker = "=>" if index == current_index else "  "
        money = str(player.money)
        parts.append(
            f"{marker}[{player.id}]  {player.name[:15]:>15}  ${money:<7}"
            f"with {player.unit_count()} units\n"
        )
    parts.append("\n")
    return "".join(parts)


def read_player_count(console: Console) -> Optional[int]:
    """Ask for the number of players, clamped to 1..4.

    Returns None when the answer does not start with a number.
    """
    answer = console.ask(f"How many players?(Maximum:{MAX_PLAYERS})...>")
    match = _LEADING_INT.match(answer)
    if match is None:
        return None
    value = int(match.group(1))
    low, high = _INT_RANGE
    if not low <= value <= high:
        return None
    return max(1, min(MAX_PLAYERS, value))


def read_player_names(console: Console, count: int) -> List[str]:
    """Ask each player for a name; an empty answer keeps the default."""
    names = list(DEFAULT_NAMES[:count])
    for index, default in enumerate(names):
        answer = console.ask(
            f"Please input player {index + 1}'s name (Default: {default})...>"
        )
        if answer:
            names[index] = answer
    return names


class Game:
    """A running game: the board, the players and whose turn it is."""

    def __init__(
        self,
        world_map: WorldMap,
        roster: PlayerRoster,
        console: Console,
        rng: Optional[random.Random] = None,
        clear: Callable[[], None] = clear_screen,
    ) -> None:
        if len(world_map) == 0:
            raise ValueError("the map has no units")
        if len(roster) == 0:
            raise ValueError("the game needs at least one player")
        self.world_map = world_map
        self.roster = roster
        self.console = console
        self.rng = rng
        self.clear = clear
        self.current_index = 0
        self.active_players = len(roster)
        start = world_map[0]
        for player in roster:
            start.add_player(player)

    def show(self) -> None:
        """Redraw the board and the player list."""
        self.clear()
        self.console.write(format_board(self.world_map))
        self.console.write(format_player_status(self.roster, self.current_index))

    def _advance(self) -> None:
        self.current_index = (self.current_index + 1) % len(self.roster)

    def play_turn(self) -> bool:
        """Play the current player's turn; return False when the game ends."""
        player = self.roster[self.current_index]

        if player.status is PlayerStatus.BANKRUPT:
            self._advance()
            self.show()
            return True

        choice = self.console.ask(
            f"{player.name}, your action? (1:Dice [default] / 2:Exit)...>"
        )
        if choice == "2":
            return False

        if player.status is PlayerStatus.IN_JAIL:
            self.console.write(f"{player.name} is in jail and misses a turn.")
            player.release_from_jail()
            self.console.wait_for_enter()
            self._advance()
            self.show()
            return True

        roll = roll_dice(self.rng)
        old_location = player.location
        new_location = (old_location + roll) % len(self.world_map)
        if new_location < old_location:
            player.receive(PASS_GO_REWARD)
        player.move_to(new_location, self.world_map)

        unit = self.world_map[new_location]
        self.show()
        unit.on_visit(player, self.console)

        if player.money < 0:
            self.console.write(f"\n{player.name} is bankrupt!")
            player.declare_bankruptcy()
            self.active_players -= 1

        self.console.wait_for_enter()
        self._advance()

        if self.active_players == 1:
            return False

        self.show()
        return True

    def run(self) -> None:
        """Play turns until someone exits or one player is left."""
        self.show()
        while self.play_turn():
            pass
        self.console.write("The winner is determined!\n")


def _read_line() -> str:
    line = sys.stdin.readline()
    if not line:
        raise EOFError
    return line


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="A board game of buying land.")
    parser.add_argument(
        "--map", default=DEFAULT_MAP_PATH, help="map file to play on"
    )
    args = parser.parse_args(argv)

    console = Console(input_func=_read_line)
    clear_screen()

    count = read_player_count(console)
    if count is None:
        names = list(DEFAULT_NAMES[:1])
    else:
        names = read_player_names(console, count)

    rng = random.Random()
    try:
        world_map = load_map(args.map, len(names), rng)
    except MapError as exc:
        print(exc, file=sys.stderr)
        return 1

    try:
        game = Game(world_map, PlayerRoster(names), console, rng)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    game.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())