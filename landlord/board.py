"""Map units and the world map they form."""

from __future__ import annotations

import abc
import random
from pathlib import Path
from typing import (
    TYPE_CHECKING,
    Any,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
)

from landlord.console import Console, roll_dice

if TYPE_CHECKING:
    from landlord.player import Player

MAX_LEVEL = 5


class MapError(Exception):
    """Raised when a map file cannot be read or parsed."""


def _fine_message(player: "Player", host: "Player", amount: int) -> str:
    return f"{player.name}, you must pay ${amount} to Player {host.id} ({host.name})"


class MapUnit(abc.ABC):
    """A square on the board that tracks which players stand on it."""

    # Attributes restored by reset(), with the values they return to.
    _RESET_STATE: Mapping[str, Any] = {}

    def __init__(self, id: int, name: str, num_players: int) -> None:
        self.id = id
        self.name = name
        self._players_here: List[Optional["Player"]] = [None] * num_players

    @abc.abstractmethod
    def on_visit(self, player: "Player", console: Console) -> None:
        """Apply the effect of a player landing here."""

    @abc.abstractmethod
    def kind(self) -> str:
        """One-letter unit type as used in map files."""

    def reset(self) -> None:
        """Return the unit's resettable attributes to their initial values."""
        for attribute, value in self._RESET_STATE.items():
            setattr(self, attribute, value)

    def is_purchasable(self) -> bool:
        return False

    def add_player(self, player: "Player") -> None:
        if 0 <= player.id < len(self._players_here):
            self._players_here[player.id] = player

    def remove_player(self, player: "Player") -> None:
        if 0 <= player.id < len(self._players_here):
            self._players_here[player.id] = None

    def players_here(self) -> Tuple[Optional["Player"], ...]:
        """One slot per player id, holding the player if present."""
        return tuple(self._players_here)

    def players_here_string(self) -> str:
        slots = "".join(" " if p is None else str(p.id) for p in self._players_here)
        return f"={slots}="

    def display(self) -> str:
        label = f"[{self.id}]"
        return f"{self.players_here_string()}  {label:<5}{self.name[:10]:>10} "


class PurchasableUnit(MapUnit):
    """A unit that can be bought and then has an owner."""

    _RESET_STATE: Mapping[str, Any] = {"host": None}

    def __init__(self, id: int, name: str, num_players: int, price: int) -> None:
        super().__init__(id, name, num_players)
        self.price = price
        self.host: Optional["Player"] = None

    def is_purchasable(self) -> bool:
        return True

    def try_to_buy(self, player: "Player", console: Console) -> None:
        """Offer the unit to the player if they can afford it."""
        if player.money < self.price:
            return
        choice = console.ask(
            f"{player.name}, do you want to buy {self.name}? "
            "(1: Yes [default] / 2: No) ...>"
        )
        if choice != "2":
            player.pay(self.price)
            player.add_unit(self)
            self.host = player
            console.write(f"You pay ${self.price} to buy {self.name}")

    def display(self) -> str:
        base = super().display()
        if self.host is None:
            return f"{base}{'':4}B${self.price:>5}"
        owner = f"{{{self.host.id}}}"
        return f"{base}{owner:<4}"


class UpgradableUnit(PurchasableUnit):
    """A unit whose fine rises with each upgrade, up to level five."""

    _RESET_STATE: Mapping[str, Any] = {"host": None, "level": 1}

    def __init__(
        self,
        id: int,
        name: str,
        num_players: int,
        price: int,
        upgrade_price: int,
        fines: Sequence[int],
    ) -> None:
        super().__init__(id, name, num_players, price)
        fines = tuple(fines)
        if len(fines) != MAX_LEVEL:
            raise ValueError(f"expected {MAX_LEVEL} fines, got {len(fines)}")
        self.upgrade_price = upgrade_price
        self.fines = fines
        self.level = 1

    def on_visit(self, player: "Player", console: Console) -> None:
        if self.host is None:
            self.try_to_buy(player, console)
        elif self.host is not player:
            amount = self.fine()
            console.write(_fine_message(player, self.host, amount))
            self.host.receive(player.pay(amount))
        elif self.level < MAX_LEVEL:
            if player.money >= self.upgrade_price:
                choice = console.ask(
                    f"{player.name}, do you want to upgrade {self.name}? "
                    "(1: Yes [default] / 2: No)...>"
                )
                if choice != "2":
                    player.pay(self.upgrade_price)
                    self.upgrade()
                    console.write(
                        f"You pay ${self.upgrade_price} to upgrade {self.name} "
                        f"to Lv.{self.level}"
                    )
        else:
            console.write(
                f"{player.name}, your {self.name} already reaches the highest level!"
            )

    def kind(self) -> str:
        return "U"

    def reset(self) -> None:
        self.level = 1
        self.host = None

    def display(self) -> str:
        text = super().display()
        if self.host is None:
            return text
        if self.level == MAX_LEVEL:
            return f"{text}{'L5':<3}"
        return f"{text}U${self.upgrade_price:>5} L{self.level}"

    def upgrade(self) -> None:
        if self.level < MAX_LEVEL:
            self.level += 1

    def fine(self) -> int:
        return self.fines[self.level - 1]


class RandomCostUnit(PurchasableUnit):
    """A unit whose fine is a die roll times a fixed amount."""

    def __init__(
        self,
        id: int,
        name: str,
        num_players: int,
        price: int,
        fine_per_point: int,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(id, name, num_players, price)
        self.fine_per_point = fine_per_point
        self._rng = rng

    def on_visit(self, player: "Player", console: Console) -> None:
        if self.host is None:
            self.try_to_buy(player, console)
        elif self.host is not player:
            amount = roll_dice(self._rng) * self.fine_per_point
            console.write(_fine_message(player, self.host, amount))
            self.host.receive(player.pay(amount))

    def kind(self) -> str:
        return "R"

    def reset(self) -> None:
        self.host = None

    def display(self) -> str:
        text = super().display()
        return f"{text}?" if self.host is not None else text


class CollectableUnit(PurchasableUnit):
    """A unit whose fine grows with the number of collectables the owner holds."""

    def __init__(
        self, id: int, name: str, num_players: int, price: int, unit_fine: int
    ) -> None:
        super().__init__(id, name, num_players, price)
        self.unit_fine = unit_fine

    def on_visit(self, player: "Player", console: Console) -> None:
        if self.host is None:
            self.try_to_buy(player, console)
        elif self.host is not player:
            amount = self.host.collectable_count() * self.unit_fine
            console.write(_fine_message(player, self.host, amount))
            self.host.receive(player.pay(amount))

    def kind(self) -> str:
        return "C"

    def reset(self) -> None:
        self.host = None

    def display(self) -> str:
        text = super().display()
        if self.host is not None:
            return f"{text}x{self.host.collectable_count()}"
        return text


class JailUnit(MapUnit):
    """Landing here costs the player their next turn."""

    def __init__(self, id: int, name: str, num_players: int) -> None:
        super().__init__(id, name, num_players)

    def on_visit(self, player: "Player", console: Console) -> None:
        console.write(
            f"{player.name} is visiting the Jail. He (She) will be frozen for one round."
        )
        player.set_to_jail()

    def kind(self) -> str:
        return "J"

    def display(self) -> str:
        return f"{super().display()}{'':4}{'J':<3}"


class WorldMap:
    """The ordered ring of units that make up the board."""

    def __init__(self, units: Iterable[MapUnit]) -> None:
        self._units = list(units)

    def __len__(self) -> int:
        return len(self._units)

    def __getitem__(self, index: int) -> MapUnit:
        return self._units[index]

    def __iter__(self) -> Iterator[MapUnit]:
        return iter(self._units)

    def get(self, index: int) -> Optional[MapUnit]:
        """Return the unit at index, or None when out of range."""
        if 0 <= index < len(self._units):
            return self._units[index]
        return None


def _ints(fields: Sequence[str], count: int, line_number: int) -> List[int]:
    if len(fields) < count:
        raise MapError(f"line {line_number}: expected {count} numbers")
    try:
        return [int(value) for value in fields[:count]]
    except ValueError as exc:
        raise MapError(f"line {line_number}: {exc}") from exc


def parse_map(
    lines: Iterable[str], num_players: int, rng: Optional[random.Random] = None
) -> WorldMap:
    """Build a map from lines of the form '<type> <name> <numbers...>'.

    Lines with an unknown type letter are skipped.
    """
    units: List[MapUnit] = []
    for line_number, line in enumerate(lines, start=1):
        text = line.lstrip()
        if not text:
            continue
        kind, fields = text[0], text[1:].split()
        if kind not in "UCRJ":
            continue
        if not fields:
            raise MapError(f"line {line_number}: missing unit name")
        name, numbers = fields[0], fields[1:]
        unit_id = len(units)
        if kind == "U":
            price, upgrade_price, *fines = _ints(numbers, 7, line_number)
            units.append(
                UpgradableUnit(unit_id, name, num_players, price, upgrade_price, fines)
            )
        elif kind == "C":
            price, unit_fine = _ints(numbers, 2, line_number)
            units.append(CollectableUnit(unit_id, name, num_players, price, unit_fine))
        elif kind == "R":
            price, per_point = _ints(numbers, 2, line_number)
            units.append(
                RandomCostUnit(unit_id, name, num_players, price, per_point, rng)
            )
        else:
            units.append(JailUnit(unit_id, name, num_players))
    return WorldMap(units)


def load_map(
    path: "str | Path", num_players: int, rng: Optional[random.Random] = None
) -> WorldMap:
    """Read a map file; raise MapError when it cannot be opened."""
    try:
        with open(path, encoding="utf-8") as handle:
            return parse_map(handle, num_players, rng)
    except OSError as exc:
        raise MapError(f"Failed to open {path}") from exc