"""Players and the roster that holds them."""

from __future__ import annotations

import enum
from typing import Any, Iterable, Iterator, List, Optional

STARTING_MONEY = 30000


class PlayerStatus(enum.Enum):
    """Where a player stands in the game."""

    NORMAL = "normal"
    IN_JAIL = "in_jail"
    BANKRUPT = "bankrupt"


class Player:
    """A player with money, a position and owned units."""

    def __init__(self, id: int = 0, name: str = "nameless") -> None:
        self.id = id
        self.name = name
        self.location = 0
        self.money = STARTING_MONEY
        self.status = PlayerStatus.NORMAL
        self.owned_units: List[Any] = []

    def __repr__(self) -> str:
        return f"Player(id={self.id!r}, name={self.name!r}, money={self.money!r})"

    def unit_count(self) -> int:
        """Number of units the player owns."""
        return len(self.owned_units)

    def collectable_count(self) -> int:
        """Number of collectable units the player owns."""
        return sum(1 for unit in self.owned_units if unit.kind() == "C")

    def pay(self, amount: int) -> int:
        """Deduct the full amount and return what the player could actually cover."""
        payment = min(amount, self.money) if self.money < amount else amount
        self.money -= amount
        return payment

    def receive(self, amount: int) -> None:
        self.money += amount

    def move_to(self, location: int, world_map: Any) -> None:
        """Move to a new location, updating who stands on which unit."""
        old_unit = world_map.get(self.location)
        if old_unit is not None:
            old_unit.remove_player(self)
        self.location = location
        new_unit = world_map.get(self.location)
        if new_unit is not None:
            new_unit.add_player(self)

    def add_unit(self, unit: Any) -> None:
        self.owned_units.append(unit)

    def release_all_units(self) -> None:
        """Return every owned unit to its unowned state."""
        for unit in self.owned_units:
            unit.reset()
        self.owned_units.clear()

    def set_to_jail(self) -> None:
        self.status = PlayerStatus.IN_JAIL

    def release_from_jail(self) -> None:
        self.status = PlayerStatus.NORMAL

    def declare_bankruptcy(self) -> None:
        self.status = PlayerStatus.BANKRUPT
        self.release_all_units()


class PlayerRoster:
    """All players of a game, numbered from zero in the given order."""

    def __init__(self, names: Iterable[str]) -> None:
        self._players = [Player(index, name) for index, name in enumerate(names)]

    def __len__(self) -> int:
        return len(self._players)

    def __getitem__(self, index: int) -> Player:
        return self._players[index]

    def __iter__(self) -> Iterator[Player]:
        return iter(self._players)

    def get(self, index: int) -> Optional[Player]:
        """Return the player at index, or None when out of range."""
        if 0 <= index < len(self._players):
            return self._players[index]
        return None