from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from ..config import ShopConfig, default_balance
from ..core.numeric import round_half_up
from ..core.rng import Rng
from ..core.seeding import economy_cycle, shop_economy_seed
from ..items.models import Item, ItemKind, index_items
from ..state import ShopState
from ..world.entities import Point

logger = logging.getLogger(__name__)


class ShopSpecialty(str, Enum):
    ALL = "all"
    POTION = "potion"
    WEAPON = "weapon"
    ARMOR = "armor"


_SPECIALTY_BY_ROLL = (ShopSpecialty.POTION, ShopSpecialty.WEAPON, ShopSpecialty.ARMOR)


@dataclass
class Shop:
    """A persistent market. Only the stock list changes, and only on restock."""

    id: str
    town_world_pos: Point
    stock_item_ids: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ShopEconomy:
    """Market snapshot for one restock cycle. Recomputed on demand, never stored."""

    mood_label: str
    specialty: ShopSpecialty
    buy_multiplier: float
    sell_multiplier: float
    featured_item_id: Optional[str]
    restock_in: int


@dataclass(frozen=True)
class ShopPricing:
    economy: ShopEconomy
    buy_prices: Dict[str, int]
    sell_prices: Dict[str, int]


class ShopEconomyEngine:
    """Derives shop moods and prices from (world seed, shop position, turn).

    All queries are pure: the same inputs always produce the same economy and
    prices, and nothing is cached between calls.

    Usage:
        engine = ShopEconomyEngine()
        pricing = engine.build_shop_pricing(state, shop)
        pricing.buy_prices["potion_1"]
    """

    def __init__(self, config: Optional[ShopConfig] = None) -> None:
        self.config = config or default_balance().shop

    def economy_rng(self, world_seed: int, shop: Shop, turn_counter: int) -> Rng:
        cycle = economy_cycle(turn_counter, self.config.restock_interval)
        return Rng(shop_economy_seed(world_seed, shop.town_world_pos.x, shop.town_world_pos.y, cycle))

    def get_shop_economy(self, state: ShopState, shop: Shop) -> ShopEconomy:
        cfg = self.config
        rng = self.economy_rng(state.world_seed, shop, state.turn_counter)

        mood_roll = rng.next_int(0, 100)
        mood = next(m for m in cfg.moods if mood_roll < m.below)

        specialty = ShopSpecialty.ALL
        if rng.next_int(0, 100) >= cfg.specialty_all_below:
            specialty = _SPECIALTY_BY_ROLL[rng.next_int(0, len(_SPECIALTY_BY_ROLL))]

        featured = self.featured_item_id(shop.stock_item_ids, rng)
        restock_in = cfg.restock_interval - state.turn_counter % cfg.restock_interval

        economy = ShopEconomy(
            mood_label=mood.label,
            specialty=specialty,
            buy_multiplier=mood.buy_multiplier,
            sell_multiplier=mood.sell_multiplier,
            featured_item_id=featured,
            restock_in=restock_in,
        )
        logger.debug("Economy for shop %s at turn %d: %s", shop.id, state.turn_counter, economy)
        return economy

    def featured_item_id(self, stock_item_ids: Sequence[str], rng: Rng) -> Optional[str]:
        """Pick the featured item; an empty stock consumes no draws."""
        if not stock_item_ids:
            return None
        if rng.next_int(0, 100) < self.config.featured_none_below:
            return None
        ids = sorted(stock_item_ids)
        return ids[rng.next_int(0, len(ids))]

    @staticmethod
    def specialty_matches(specialty: ShopSpecialty, kind: ItemKind) -> bool:
        if specialty is ShopSpecialty.ALL:
            return True
        return specialty.value == ItemKind(kind).value

    def rarity_price_multiplier(self, item: Item) -> float:
        return self.config.rarity_multipliers[item.effective_rarity.value]

    def buy_price(self, item: Item, economy: ShopEconomy) -> int:
        cfg = self.config
        multiplier = economy.buy_multiplier
        if economy.specialty is not ShopSpecialty.ALL:
            matches = self.specialty_matches(economy.specialty, item.kind)
            multiplier += cfg.buy_specialty_match if matches else cfg.buy_specialty_mismatch
        if economy.featured_item_id is not None and economy.featured_item_id == item.id:
            multiplier *= cfg.featured_discount
        multiplier *= self.rarity_price_multiplier(item)
        return max(1, round_half_up(item.value * multiplier))

    def sell_price(self, item: Item, economy: ShopEconomy) -> int:
        cfg = self.config
        multiplier = economy.sell_multiplier
        if economy.specialty is not ShopSpecialty.ALL:
            matches = self.specialty_matches(economy.specialty, item.kind)
            multiplier += cfg.sell_specialty_match if matches else cfg.sell_specialty_mismatch
        multiplier *= self.rarity_price_multiplier(item)
        return max(1, round_half_up(item.value * multiplier))

    def build_shop_pricing(self, state: ShopState, shop: Shop) -> ShopPricing:
        """Buy prices for the shop's stock and sell prices for the player's inventory.

        Ids missing from the master item list are skipped.
        """
        economy = self.get_shop_economy(state, shop)
        by_id = index_items(state.items)

        buy_prices: Dict[str, int] = {}
        for item_id in shop.stock_item_ids:
            item = by_id.get(item_id)
            if item is None:
                logger.debug("Shop %s lists unknown item %s; skipping", shop.id, item_id)
                continue
            buy_prices[item_id] = self.buy_price(item, economy)

        sell_prices: Dict[str, int] = {}
        for item_id in state.player.inventory:
            item = by_id.get(item_id)
            if item is None:
                logger.debug("Player inventory holds unknown item %s; skipping", item_id)
                continue
            sell_prices[item_id] = self.sell_price(item, economy)

        return ShopPricing(economy=economy, buy_prices=buy_prices, sell_prices=sell_prices)


__all__ = ["ShopSpecialty", "Shop", "ShopEconomy", "ShopPricing", "ShopEconomyEngine"]
