from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from ..config import default_balance
from ..core.rng import Rng
from ..core.seeding import ambush_encounter_seed
from ..world.entities import Point

logger = logging.getLogger(__name__)

SESSION_DRAW_MAX = 0x7FFFFFFF
VICTORY_GOLD_BASE = 10
VICTORY_GOLD_PER_LEVEL = 4
VICTORY_GOLD_ROLL_MAX = 8


class Terrain(str, Enum):
    FOREST = "forest"
    GRASS = "grass"
    ROAD = "road"
    CAVE = "cave"
    DUNGEON = "dungeon"
    TOWN = "town"
    WATER = "water"
    MOUNTAIN = "mountain"


@dataclass(frozen=True)
class AmbushPlan:
    """Everything needed to build and populate an ambush arena."""

    ambush_id: str
    seed: int
    depth: int
    origin: Point


def ambush_chance_for(terrain: Terrain, table: Optional[Mapping[str, int]] = None) -> int:
    """Percent chance per overworld step; terrain missing from the table uses ``default``."""
    table = table if table is not None else default_balance().ambush_chance
    key = Terrain(terrain).value
    return table.get(key, table.get("default", 0))


def roll_for_ambush(terrain: Terrain, rng: Rng, table: Optional[Mapping[str, int]] = None) -> bool:
    """Roll once for an ambush. Terrain with no chance consumes no draw."""
    chance = ambush_chance_for(terrain, table)
    if chance <= 0:
        return False
    triggered = rng.next_int(0, 100) < chance
    if triggered:
        logger.info("Ambush triggered on %s", Terrain(terrain).value)
    return triggered


def plan_ambush(world_seed: int, origin: Point, rng: Rng, player_level: int, turn_counter: int) -> AmbushPlan:
    """Derive the arena seed and id for an ambush at ``origin``.

    One draw comes from the session ``rng`` so that repeated ambushes on the same
    tile differ; the spatial hash keeps different tiles apart.
    """
    draw = rng.next_int(0, SESSION_DRAW_MAX)
    seed = ambush_encounter_seed(world_seed, origin.x, origin.y, draw)
    plan = AmbushPlan(
        ambush_id=f"ambush_{origin.x}_{origin.y}_{turn_counter}_{seed & 0xFFFF}",
        seed=seed,
        depth=max(1, (player_level + 1) // 2),
        origin=origin,
    )
    logger.debug("Planned ambush %s", plan)
    return plan


def ambush_victory_gold(player_level: int, rng: Rng) -> int:
    return VICTORY_GOLD_BASE + player_level * VICTORY_GOLD_PER_LEVEL + rng.next_int(0, VICTORY_GOLD_ROLL_MAX)


__all__ = ["Terrain", "AmbushPlan", "ambush_chance_for", "roll_for_ambush", "plan_ambush", "ambush_victory_gold"]
