from .entities import (
    CharacterClass,
    Entity,
    EntityKind,
    Equipment,
    MapKind,
    MapRef,
    Point,
    StatusEffect,
    StatusEffectKind,
)
from .player import CLASS_BASE_STATS, create_player

__all__ = [
    "CharacterClass",
    "Entity",
    "EntityKind",
    "Equipment",
    "MapKind",
    "MapRef",
    "Point",
    "StatusEffect",
    "StatusEffectKind",
    "CLASS_BASE_STATS",
    "create_player",
]
