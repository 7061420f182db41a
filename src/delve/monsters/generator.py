from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Optional, Set, Tuple

from ..config import BalanceConfig, MonsterTypeConfig, default_balance
from ..core.numeric import clamp
from ..core.rng import Rng
from ..core.seeding import (
    ambush_point_seed,
    ambush_spawn_seed,
    boss_point_seed,
    monster_spawn_seed,
    spawn_point_seed,
)
from ..dungeon.level import Dungeon, DungeonTile, FloorPointSource, random_floor_point
from ..state import MonsterSpawnState
from ..world.entities import Entity, EntityKind, MapKind, MapRef, Point
from .names import EnglishMonsterNames, MonsterNames

logger = logging.getLogger(__name__)


class MonsterType(str, Enum):
    SLIME = "slime"
    GOBLIN = "goblin"
    WRAITH = "wraith"
    ORC = "orc"


# Types that can carry status effects; only wraiths have a special ability.
_EFFECT_CARRIERS = (MonsterType.WRAITH, MonsterType.ORC)


def has_boss_of(entity: Entity, dungeon_id: str) -> bool:
    ref = entity.map_ref
    return entity.is_boss and ref.kind is MapKind.DUNGEON and ref.dungeon_id == dungeon_id


class MonsterGenerator:
    """Seeded monster spawning and per-type stat scaling.

    The floor-point source and the name resolver are injected so that the
    generator never carves maps or formats strings itself. Given the same seed,
    dungeon and player level, the spawned monsters are identical on every run.

    Usage:
        gen = MonsterGenerator()
        gen.spawn_monsters_in_dungeon(state, dungeon, seed)
    """

    def __init__(
        self,
        config: Optional[BalanceConfig] = None,
        names: Optional[MonsterNames] = None,
        floor_points: FloorPointSource = random_floor_point,
    ) -> None:
        self.config = config or default_balance()
        self.names = names or EnglishMonsterNames()
        self.floor_points = floor_points

    # ---------------------- Scaling ----------------------
    def monster_level(self, player_level: int, depth: int) -> int:
        scaling = self.config.monster_scaling
        weight = scaling.level_player_weight
        weighted = math.floor(player_level * weight + depth * (1 - weight))
        return max(scaling.level_minimum, weighted)

    def monster_type_for_roll(self, roll: int, depth: int) -> MonsterType:
        for entry in self.config.monster_scaling.type_table:
            if roll < entry.below and depth >= entry.min_depth:
                return MonsterType(entry.type)
        # The validated table always ends in a catch-all.
        return MonsterType(self.config.monster_scaling.type_table[-1].type)

    def create_monster(
        self,
        monster_type: MonsterType,
        monster_level: int,
        dungeon_id: str,
        index: int,
        pos: Point,
    ) -> Entity:
        monster_type = MonsterType(monster_type)
        stats: MonsterTypeConfig = self.config.monster_scaling.types[monster_type.value]
        hp = math.floor(stats.hp.base + monster_level * stats.hp.per_level)
        attack = math.floor(stats.attack.base + monster_level * stats.attack.per_level)
        defense = math.floor(stats.defense.base + monster_level * stats.defense.per_level)

        monster = Entity(
            id=f"m_{dungeon_id}_{index}",
            kind=EntityKind.MONSTER,
            name=self.names.monster_name(monster_type.value),
            glyph=stats.glyph,
            pos=pos,
            map_ref=MapRef.dungeon(dungeon_id),
            hp=hp,
            max_hp=hp,
            base_attack=attack,
            base_defense=defense,
            level=max(monster_level, stats.level_floor),
            monster_type=monster_type.value,
            status_effects=[] if monster_type in _EFFECT_CARRIERS else None,
            special_cooldown=0 if monster_type is MonsterType.WRAITH else None,
        )
        logger.debug("Created monster %r", monster)
        return monster

    def create_monster_for_depth(
        self, depth: int, roll: int, dungeon_id: str, index: int, pos: Point, player_level: int
    ) -> Entity:
        monster_type = self.monster_type_for_roll(roll, depth)
        level = self.monster_level(player_level, depth)
        return self.create_monster(monster_type, level, dungeon_id, index, pos)

    # ---------------------- Spawning ----------------------
    def monster_count(self, depth: int) -> int:
        spawn = self.config.monster_spawn
        return spawn.base_count + min(spawn.depth_cap, depth * spawn.depth_multiplier)

    def ambush_size(self, player_level: int) -> int:
        spawn = self.config.monster_spawn
        return clamp(spawn.ambush_base + player_level // spawn.ambush_level_div, spawn.ambush_min, spawn.ambush_max)

    def spawn_monsters_in_dungeon(self, state: MonsterSpawnState, dungeon: Dungeon, seed: int) -> None:
        """Populate a dungeon level, appending the monsters to ``state.entities``."""
        count = self.monster_count(dungeon.depth)
        rng = Rng(monster_spawn_seed(seed))
        player_level = state.player.level

        for i in range(count):
            pos = self.floor_points(dungeon, spawn_point_seed(seed, i))
            roll = rng.next_int(0, 100)
            state.entities.append(self.create_monster_for_depth(dungeon.depth, roll, dungeon.id, i, pos, player_level))

        logger.info("Spawned %d monsters in %s (depth %d, player level %d)", count, dungeon.id, dungeon.depth, player_level)

    def spawn_ambush_monsters(self, state: MonsterSpawnState, dungeon: Dungeon, seed: int, player_level: int) -> None:
        """Populate an ambush arena, keeping every monster off the entry tile and off each other."""
        rng = Rng(ambush_spawn_seed(seed))
        desired = self.ambush_size(player_level)
        depth = max(1, (player_level + 1) // 2)
        used: Set[Tuple[int, int]] = set()

        for i in range(desired):
            spawn = self._ambush_position(dungeon, seed, i, used)
            used.add(spawn.as_tuple())
            roll = rng.next_int(0, 100)
            state.entities.append(self.create_monster_for_depth(depth, roll, dungeon.id, i, spawn, player_level))

        logger.info("Spawned %d ambush monsters in %s (player level %d)", desired, dungeon.id, player_level)

    # ---------------------- Bosses ----------------------
    @staticmethod
    def boss_name_key(depth: int) -> str:
        if depth < 3:
            return "boss_ruins"
        if depth < 6:
            return "boss_caves"
        return "boss_crypt"

    def create_boss(self, dungeon: Dungeon, pos: Point) -> Entity:
        boss_cfg = self.config.monster_spawn.boss
        depth = dungeon.depth
        hp = boss_cfg.hp_base + depth * boss_cfg.hp_per_depth
        return Entity(
            id=f"boss_{dungeon.id}",
            kind=EntityKind.MONSTER,
            name=self.names.monster_name(self.boss_name_key(depth)),
            glyph=boss_cfg.glyph,
            pos=pos,
            map_ref=MapRef.dungeon(dungeon.id),
            hp=hp,
            max_hp=hp,
            base_attack=boss_cfg.attack_base + depth * boss_cfg.attack_per_depth,
            base_defense=boss_cfg.defense_base + depth // boss_cfg.defense_depth_div,
            status_effects=[],
            is_boss=True,
        )

    def spawn_boss_in_dungeon(self, state: MonsterSpawnState, dungeon: Dungeon, seed: int) -> Optional[Entity]:
        """Place the level boss once per dungeon id, from the configured depth down.

        Returns the new boss, or None when the level is too shallow or already has one.
        """
        if dungeon.depth < self.config.monster_spawn.boss.min_depth:
            return None
        if any(has_boss_of(e, dungeon.id) for e in state.entities):
            logger.debug("Dungeon %s already has a boss; not spawning another", dungeon.id)
            return None

        boss = self.create_boss(dungeon, self.floor_points(dungeon, boss_point_seed(seed)))
        state.entities.append(boss)
        logger.info("Spawned boss %s at %s in %s (depth %d)", boss.name, boss.pos, dungeon.id, dungeon.depth)
        return boss

    def _ambush_position(self, dungeon: Dungeon, seed: int, index: int, used: Set[Tuple[int, int]]) -> Point:
        stairs = dungeon.stairs_up
        for attempt in range(self.config.monster_spawn.ambush_placement_attempts):
            candidate = self.floor_points(dungeon, ambush_point_seed(seed, index, attempt))
            if candidate == stairs or candidate.as_tuple() in used:
                continue
            return candidate

        # Exhausted: place next to the entry, alternating sides.
        step = 1 if index % 2 == 0 else -1
        fx = clamp(stairs.x + step, 1, dungeon.width - 2)
        fy = clamp(stairs.y, 1, dungeon.height - 2)
        if dungeon.tile_at(fx, fy) is DungeonTile.WALL:
            spawn = Point(stairs.x, clamp(stairs.y + step, 1, dungeon.height - 2))
        else:
            spawn = Point(fx, fy)
        logger.debug("Ambush placement exhausted for monster %d in %s; using fallback %s", index, dungeon.id, spawn)
        return spawn


__all__ = ["MonsterType", "MonsterGenerator", "has_boss_of"]
