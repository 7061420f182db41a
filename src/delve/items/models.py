from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional

from ..world.entities import MapRef, Point


class ItemKind(str, Enum):
    POTION = "potion"
    WEAPON = "weapon"
    ARMOR = "armor"


class Rarity(str, Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"

    @property
    def tier(self) -> int:
        """0 for common up to 4 for legendary."""
        return list(Rarity).index(self)


@dataclass
class Item:
    """A potion, weapon or armor instance.

    ``value`` is the base price before shop multipliers. Optional stat bonuses
    are None when the item does not grant them.
    """

    id: str
    kind: ItemKind
    name: str
    value: int
    heal_amount: Optional[int] = None
    attack_bonus: Optional[int] = None
    defense_bonus: Optional[int] = None
    crit_chance: Optional[int] = None
    dodge_chance: Optional[int] = None
    lifesteal: Optional[int] = None
    thorns: Optional[int] = None
    rarity: Optional[Rarity] = None
    map_ref: Optional[MapRef] = None
    pos: Optional[Point] = None

    def __post_init__(self) -> None:
        self.kind = ItemKind(self.kind)
        if self.rarity is not None:
            self.rarity = Rarity(self.rarity)
        if self.value < 0:
            raise ValueError(f"Item '{self.id}' has negative value {self.value}")

    @property
    def effective_rarity(self) -> Rarity:
        return self.rarity or Rarity.COMMON


def index_items(items: Iterable[Item]) -> Dict[str, Item]:
    """Map item id -> item. Later duplicates win."""
    return {it.id: it for it in items}


__all__ = ["ItemKind", "Rarity", "Item", "index_items"]
