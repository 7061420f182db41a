"""Narrow views of the game state that the simulation core reads and writes.

The surrounding game owns the full state object. Generators and the shop engine
only depend on the attributes declared here, so any object with the right
shape works, including the :class:`GameState` dataclass used by the CLI and
tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from .core.rng import Rng
from .items.models import Item
from .world.entities import CharacterClass, Entity


class LeveledActor(Protocol):
    level: int


class ClassedActor(Protocol):
    class_type: Optional[CharacterClass]


class InventoryHolder(ClassedActor, Protocol):
    inventory: List[str]


class MonsterSpawnState(Protocol):
    """State needed by monster spawning: the session RNG, the player and the entity list."""

    rng: Rng
    player: LeveledActor
    entities: List[Entity]


class LootState(Protocol):
    """State needed to place floor loot. ``items`` is the master item list."""

    world_seed: int
    items: List[Item]
    player: ClassedActor


class PopulationState(MonsterSpawnState, LootState, Protocol):
    player: Entity


class ShopState(Protocol):
    """State needed by the shop engine. ``items`` is the master item list."""

    turn_counter: int
    world_seed: int
    items: List[Item]
    player: InventoryHolder


@dataclass
class GameState:
    world_seed: int
    player: Entity
    turn_counter: int = 0
    entities: List[Entity] = field(default_factory=list)
    items: List[Item] = field(default_factory=list)
    rng: Rng = field(init=False)

    def __post_init__(self) -> None:
        self.rng = Rng(self.world_seed)


__all__ = [
    "MonsterSpawnState",
    "LootState",
    "PopulationState",
    "ShopState",
    "GameState",
    "LeveledActor",
    "ClassedActor",
    "InventoryHolder",
]
