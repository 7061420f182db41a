from __future__ import annotations

import logging
from typing import AbstractSet, List, Optional

from ..config import ShopConfig, default_balance
from ..core.rng import Rng
from ..core.seeding import economy_cycle, shop_restock_seed
from ..items.catalog import HEALING_POTION_NAME
from ..items.generation import ItemGenerator
from ..items.models import Item, ItemKind
from ..world.entities import CharacterClass
from ..state import ShopState
from .shop import Shop

logger = logging.getLogger(__name__)


class ShopRestocker:
    """Replaces a shop's stock at the start of every economy cycle.

    The new stock depends only on the world seed, the shop position and the
    cycle number, so restocking the same cycle twice yields the same items.
    """

    def __init__(self, config: Optional[ShopConfig] = None, generator: Optional[ItemGenerator] = None) -> None:
        self.config = config or default_balance().shop
        self.generator = generator or ItemGenerator()

    def needs_restock(self, turn_counter: int) -> bool:
        return turn_counter % self.config.restock_interval == 0

    def generate_stock(
        self,
        world_seed: int,
        shop: Shop,
        cycle: int,
        class_type: Optional[CharacterClass] = None,
        taken_ids: AbstractSet[str] = frozenset(),
    ) -> List[Item]:
        """Regular stock for ``cycle``, followed by class upgrades when ``class_type`` is set."""
        cfg = self.config
        rng = Rng(shop_restock_seed(world_seed, shop.town_world_pos.x, shop.town_world_pos.y, cycle))
        tier = max(1, cycle + 1)
        stock: List[Item] = []
        for i in range(cfg.stock_size):
            roll = rng.next_int(0, 100)
            item_id = f"shop_{shop.id}_{cycle}_{i}"
            if roll < cfg.potion_below:
                item = Item(
                    id=item_id,
                    kind=ItemKind.POTION,
                    name=HEALING_POTION_NAME,
                    value=cfg.potion_value,
                    heal_amount=cfg.potion_heal,
                )
            elif roll < cfg.weapon_below:
                item = self.generator.generate_weapon_loot(item_id, tier + rng.next_int(0, 2), rng)
            else:
                item = self.generator.generate_armor_loot(item_id, tier + rng.next_int(0, 2), rng)
            stock.append(item)
        if class_type is not None:
            stock.extend(self.class_gear(shop, cycle, class_type, rng, taken_ids))
        return stock

    def class_gear(
        self, shop: Shop, cycle: int, class_type: CharacterClass, rng: Rng, taken_ids: AbstractSet[str]
    ) -> List[Item]:
        """One weapon and one armor upgrade per tier, skipping ids already in the world."""
        tier = max(1, cycle)
        gear: List[Item] = []
        for kind in (ItemKind.WEAPON, ItemKind.ARMOR):
            item_id = f"shop_{shop.id}_class_{kind.value}_{tier}"
            if item_id in taken_ids:
                continue
            gear.append(self.generator.generate_class_upgrade(class_type, kind, item_id, tier + 1, rng))
        return gear

    def restock_shop(self, state: ShopState, shop: Shop) -> bool:
        """Restock when the turn counter sits on a cycle boundary.

        Old stock items are removed from the master item list and the new ones
        appended. Returns True when a restock happened.
        """
        if not self.needs_restock(state.turn_counter):
            return False
        cycle = economy_cycle(state.turn_counter, self.config.restock_interval)
        old_ids = set(shop.stock_item_ids)
        state.items[:] = [it for it in state.items if it.id not in old_ids]

        taken_ids = {it.id for it in state.items}
        stock = self.generate_stock(state.world_seed, shop, cycle, state.player.class_type, taken_ids)
        state.items.extend(stock)
        shop.stock_item_ids = [it.id for it in stock]
        logger.info("Restocked shop %s for cycle %d with %d items", shop.id, cycle, len(stock))
        return True


def restock_shop(state: ShopState, shop: Shop, restocker: Optional[ShopRestocker] = None) -> bool:
    return (restocker or ShopRestocker()).restock_shop(state, shop)


__all__ = ["ShopRestocker", "restock_shop"]
