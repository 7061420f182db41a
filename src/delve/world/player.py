from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from .entities import CharacterClass, Entity, EntityKind, MapRef, Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassBaseStats:
    max_hp: int
    attack: int
    defense: int
    strength: int
    agility: int
    intellect: int


CLASS_BASE_STATS: Dict[CharacterClass, ClassBaseStats] = {
    CharacterClass.WARRIOR: ClassBaseStats(max_hp=28, attack=4, defense=2, strength=6, agility=3, intellect=2),
    CharacterClass.ROGUE: ClassBaseStats(max_hp=22, attack=3, defense=1, strength=3, agility=6, intellect=3),
    CharacterClass.MAGE: ClassBaseStats(max_hp=18, attack=2, defense=0, strength=2, agility=3, intellect=7),
}


def create_player(
    class_type: CharacterClass,
    pos: Optional[Point] = None,
    map_ref: Optional[MapRef] = None,
    name: str = "Adventurer",
    player_id: str = "player",
) -> Entity:
    """Build a level-1 player with the starting stats of ``class_type``."""
    class_type = CharacterClass(class_type)
    stats = CLASS_BASE_STATS[class_type]
    player = Entity(
        id=player_id,
        kind=EntityKind.PLAYER,
        name=name,
        glyph="@",
        pos=pos or Point(0, 0),
        map_ref=map_ref or MapRef.overworld(),
        hp=stats.max_hp,
        max_hp=stats.max_hp,
        base_attack=stats.attack,
        base_defense=stats.defense,
        class_type=class_type,
        strength=stats.strength,
        agility=stats.agility,
        intellect=stats.intellect,
        status_effects=[],
    )
    logger.debug("Created %s player %s", class_type.value, player)
    return player


__all__ = ["ClassBaseStats", "CLASS_BASE_STATS", "create_player"]
