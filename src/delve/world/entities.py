from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)


class EntityKind(str, Enum):
    PLAYER = "player"
    MONSTER = "monster"


class CharacterClass(str, Enum):
    WARRIOR = "warrior"
    MAGE = "mage"
    ROGUE = "rogue"


class MapKind(str, Enum):
    OVERWORLD = "overworld"
    DUNGEON = "dungeon"


class StatusEffectKind(str, Enum):
    POISON = "poison"


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def manhattan(self, other: "Point") -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)


@dataclass(frozen=True)
class MapRef:
    """Which map an entity or item lives on."""

    kind: MapKind
    dungeon_id: Optional[str] = None

    @classmethod
    def dungeon(cls, dungeon_id: str) -> "MapRef":
        return cls(kind=MapKind.DUNGEON, dungeon_id=dungeon_id)

    @classmethod
    def overworld(cls) -> "MapRef":
        return cls(kind=MapKind.OVERWORLD)


@dataclass
class Equipment:
    weapon_item_id: Optional[str] = None
    armor_item_id: Optional[str] = None


@dataclass
class StatusEffect:
    kind: StatusEffectKind
    remaining_turns: int
    potency: int


@dataclass
class Entity:
    """An actor in the world: the player or a monster.

    Attributes:
        hp: Current hit points, kept within [0, max_hp].
        monster_type: Table key (slime/goblin/wraith/orc) for generated monsters.
        status_effects: None for actors that never carry effects.
        special_cooldown: Turns until a special ability is ready; None if the
            actor has no special.
    """

    id: str
    kind: EntityKind
    name: str
    glyph: str
    pos: Point
    map_ref: MapRef
    hp: int
    max_hp: int
    base_attack: int
    base_defense: int
    level: int = 1
    xp: int = 0
    gold: int = 0
    inventory: List[str] = field(default_factory=list)
    equipment: Equipment = field(default_factory=Equipment)
    monster_type: Optional[str] = None
    class_type: Optional[CharacterClass] = None
    strength: Optional[int] = None
    agility: Optional[int] = None
    intellect: Optional[int] = None
    status_effects: Optional[List[StatusEffect]] = None
    special_cooldown: Optional[int] = None
    is_boss: bool = False

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Entity.id must be a non-empty string")
        self.kind = EntityKind(self.kind)
        if self.class_type is not None:
            self.class_type = CharacterClass(self.class_type)
        if self.max_hp <= 0:
            raise ValueError("max_hp must be >= 1")
        if self.hp < 0 or self.hp > self.max_hp:
            logger.warning("HP out of range for %s (%s/%s); clamping.", self.id, self.hp, self.max_hp)
            self.hp = max(0, min(self.max_hp, self.hp))

    @property
    def alive(self) -> bool:
        return self.hp > 0

    @property
    def is_player(self) -> bool:
        return self.kind is EntityKind.PLAYER

    @property
    def is_monster(self) -> bool:
        return self.kind is EntityKind.MONSTER

    def take_damage(self, amount: int) -> int:
        """Apply damage, clamping HP to zero. Returns the damage actually applied."""
        if amount < 0:
            raise ValueError("damage must be non-negative")
        before = self.hp
        self.hp = max(0, self.hp - amount)
        return before - self.hp

    def heal(self, amount: int) -> int:
        """Restore HP up to max_hp. Returns the amount actually healed."""
        if amount < 0:
            raise ValueError("heal amount must be non-negative")
        before = self.hp
        self.hp = min(self.max_hp, self.hp + amount)
        return self.hp - before

    def __repr__(self) -> str:
        return f"Entity({self.id} {self.name!r}@{self.pos.x},{self.pos.y} hp={self.hp}/{self.max_hp} lvl={self.level})"


__all__ = [
    "EntityKind",
    "CharacterClass",
    "MapKind",
    "StatusEffectKind",
    "Point",
    "MapRef",
    "Equipment",
    "StatusEffect",
    "Entity",
]
