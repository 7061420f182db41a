"""Fills a freshly generated dungeon level with monsters, floor loot and its boss.

Each part draws from its own sub-seed of the level seed, so adding loot never
shifts where monsters stand.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from ..config import BalanceConfig, default_balance
from ..core.rng import Rng
from ..core.seeding import boss_loot_seed, loot_point_seed, loot_spawn_seed
from ..items.catalog import GREATER_HEALING_POTION_NAME, HEALING_POTION_NAME
from ..items.generation import ItemGenerator
from ..items.models import Item, ItemKind
from ..monsters.generator import MonsterGenerator
from ..state import LootState, PopulationState
from ..world.entities import Entity, MapKind, MapRef
from .level import Dungeon, FloorPointSource, random_floor_point

logger = logging.getLogger(__name__)


class LootSpawner:
    """Seeded floor loot and boss relic drops.

    Usage:
        spawner = LootSpawner()
        spawner.spawn_loot_in_dungeon(state, dungeon, seed)
    """

    def __init__(
        self,
        config: Optional[BalanceConfig] = None,
        generator: Optional[ItemGenerator] = None,
        floor_points: FloorPointSource = random_floor_point,
    ) -> None:
        self.config = config or default_balance()
        self.generator = generator or ItemGenerator()
        self.floor_points = floor_points

    def loot_rng(self, seed: int) -> Rng:
        return Rng(loot_spawn_seed(seed))

    def _potion(self, item_id: str, depth: int) -> Item:
        cfg = self.config.loot
        name = GREATER_HEALING_POTION_NAME if depth >= cfg.greater_potion_depth else HEALING_POTION_NAME
        return Item(
            id=item_id,
            kind=ItemKind.POTION,
            name=name,
            value=cfg.potion_value_base + depth * cfg.potion_value_per_depth,
            heal_amount=cfg.potion_heal_base + depth * cfg.potion_heal_per_depth,
        )

    def _gear(self, base_id: str, kind: ItemKind, power: int, rng: Rng) -> Item:
        if kind is ItemKind.WEAPON:
            return self.generator.generate_weapon_loot(f"{base_id}_w", power, rng)
        return self.generator.generate_armor_loot(f"{base_id}_a", power, rng)

    def spawn_loot_in_dungeon(self, state: LootState, dungeon: Dungeon, seed: int) -> None:
        """Scatter the level's floor items, appending them to ``state.items``.

        Rolls at or above the armor band give a class upgrade for the player
        (plain gear when the player has no class).
        """
        cfg = self.config.loot
        rng = self.loot_rng(seed)
        depth = dungeon.depth

        for i in range(cfg.count):
            pos = self.floor_points(dungeon, loot_point_seed(seed, i))
            roll = rng.next_int(0, 100)
            base_id = f"it_{dungeon.id}_{i}"

            if roll < cfg.potion_below:
                item = self._potion(base_id, depth)
            elif roll < cfg.weapon_below:
                item = self._gear(base_id, ItemKind.WEAPON, max(1, depth + rng.next_int(0, 2)), rng)
            elif roll < cfg.armor_below:
                item = self._gear(base_id, ItemKind.ARMOR, max(1, depth + rng.next_int(0, 2)), rng)
            else:
                kind = ItemKind.WEAPON if rng.next_int(0, 2) == 0 else ItemKind.ARMOR
                level = max(1, depth // 2 + 1)
                class_type = state.player.class_type
                if class_type is None:
                    item = self._gear(base_id, kind, level, rng)
                else:
                    upgrade_id = f"{base_id}_class_{kind.value}"
                    item = self.generator.generate_class_upgrade(class_type, kind, upgrade_id, level, rng)

            state.items.append(replace(item, map_ref=MapRef.dungeon(dungeon.id), pos=pos))

        logger.info("Placed %d loot items in %s (depth %d)", cfg.count, dungeon.id, depth)

    def drop_boss_loot(self, state: LootState, boss: Entity, depth: int) -> Optional[Item]:
        """Drop the boss relic where ``boss`` stands, at most once per dungeon.

        Returns the dropped item, or None for non-bosses and repeat drops.
        """
        ref = boss.map_ref
        if not boss.is_boss or ref.kind is not MapKind.DUNGEON or not ref.dungeon_id:
            return None
        item_id = f"boss_{ref.dungeon_id}_loot"
        if any(it.id == item_id for it in state.items):
            return None

        rng = Rng(boss_loot_seed(state.world_seed, depth, boss.pos.x, boss.pos.y))
        kind = ItemKind.WEAPON if rng.next_int(0, 2) == 0 else ItemKind.ARMOR
        power = max(1, depth + self.config.monster_spawn.boss.loot_power_bonus)
        relic = self.generator.generate_boss_relic(item_id, kind, power, boss.name, rng)
        relic = replace(relic, map_ref=MapRef.dungeon(ref.dungeon_id), pos=boss.pos)
        state.items.append(relic)
        logger.info("%s dropped %s", boss.name, relic.name)
        return relic


def populate_dungeon(
    state: PopulationState,
    dungeon: Dungeon,
    seed: int,
    monsters: Optional[MonsterGenerator] = None,
    loot: Optional[LootSpawner] = None,
) -> None:
    """Monsters first, then floor loot, then the boss."""
    monsters = monsters or MonsterGenerator()
    loot = loot or LootSpawner(config=monsters.config, floor_points=monsters.floor_points)
    monsters.spawn_monsters_in_dungeon(state, dungeon, seed)
    loot.spawn_loot_in_dungeon(state, dungeon, seed)
    monsters.spawn_boss_in_dungeon(state, dungeon, seed)


__all__ = ["LootSpawner", "populate_dungeon"]
