from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence

from ..core.numeric import round_half_up
from ..core.rng import Rng
from .catalog import (
    ARMOR_BASES,
    ARMOR_PREFIXES,
    ARMOR_SUFFIXES,
    CLASS_GEAR,
    RARITY_TIERS,
    RELIC_ARMOR_NAME,
    RELIC_ATTACK_BONUS,
    RELIC_DEFENSE_BONUS,
    RELIC_VALUE_MULTIPLIER,
    RELIC_WEAPON_NAME,
    WEAPON_BASES,
    WEAPON_PREFIXES,
    WEAPON_SUFFIXES,
    ArmorTemplate,
    GearAffix,
    RarityTier,
    WeaponTemplate,
)
from ..world.entities import CharacterClass
from .models import Item, ItemKind, Rarity

logger = logging.getLogger(__name__)

WEAPON_PREFIX_CHANCE = 65
WEAPON_SUFFIX_CHANCE = 55
ARMOR_PREFIX_CHANCE = 60
ARMOR_SUFFIX_CHANCE = 45


def build_item_name(prefix: Optional[GearAffix], noun: str, suffix: Optional[GearAffix], rarity: RarityTier) -> str:
    parts = []
    if rarity.name_prefix:
        parts.append(rarity.name_prefix)
    if prefix is not None:
        parts.append(prefix.name)
    parts.append(noun)
    if suffix is not None:
        parts.append(suffix.name)
    return " ".join(parts)


def _upgrade_name(rarity: RarityTier, upgrade_name: str, gain: int) -> str:
    name = f"{upgrade_name} +{gain}"
    return f"{rarity.name_prefix} {name}" if rarity.name_prefix else name


class ItemGenerator:
    """Rarity-weighted weapon and armor generator.

    Every method draws only from the ``Rng`` passed in, so the same stream
    always yields the same item. ``power`` is the loot tier (>= 1); higher power
    shifts weight towards rarer tiers and raises the stat scaling.
    """

    def __init__(self, rarity_tiers: Sequence[RarityTier] = RARITY_TIERS) -> None:
        if not rarity_tiers:
            raise ValueError("rarity_tiers must not be empty")
        self.rarity_tiers = tuple(rarity_tiers)

    def rarity_weights(self, power: int) -> list:
        depth_factor = max(0, power - 1)
        return [max(1, int(tier.base_weight + tier.depth_weight * depth_factor)) for tier in self.rarity_tiers]

    def roll_rarity(self, power: int, rng: Rng) -> RarityTier:
        weights = self.rarity_weights(power)
        roll = rng.next_int(0, sum(weights))
        for tier, weight in zip(self.rarity_tiers, weights):
            roll -= weight
            if roll < 0:
                return tier
        return self.rarity_tiers[-1]

    @staticmethod
    def _maybe_affix(rng: Rng, chance: int, table: Sequence[GearAffix]) -> Optional[GearAffix]:
        if rng.next_int(0, 100) < chance:
            return rng.pick_one(table)
        return None

    @staticmethod
    def _affix_sum(attr: str, *affixes: Optional[GearAffix]) -> int:
        return sum(getattr(a, attr) for a in affixes if a is not None)

    def generate_weapon_loot(self, item_id: str, power: int, rng: Rng) -> Item:
        power = max(1, power)
        rarity = self.roll_rarity(power, rng)
        base: WeaponTemplate = rng.pick_one(WEAPON_BASES)
        prefix = self._maybe_affix(rng, WEAPON_PREFIX_CHANCE, WEAPON_PREFIXES)
        suffix = self._maybe_affix(rng, WEAPON_SUFFIX_CHANCE, WEAPON_SUFFIXES)
        scaling = max(1, power // base.scale)
        variance = rng.next_int(0, 2)

        attack = max(
            1,
            base.base_attack + scaling + variance + rarity.attack_bonus + self._affix_sum("attack_bonus", prefix, suffix),
        )
        crit = self._affix_sum("crit_chance", prefix, suffix) + rarity.weapon_crit_chance
        lifesteal = self._affix_sum("lifesteal", prefix, suffix) + rarity.weapon_lifesteal
        value = max(1, round_half_up((16 + attack * 9) * rarity.value_multiplier))

        item = Item(
            id=item_id,
            kind=ItemKind.WEAPON,
            name=build_item_name(prefix, base.noun, suffix, rarity),
            value=value,
            attack_bonus=attack,
            crit_chance=crit,
            lifesteal=lifesteal,
            rarity=rarity.rarity,
        )
        logger.debug("Generated weapon %s (power=%d): %s", item_id, power, item)
        return item

    def generate_armor_loot(self, item_id: str, power: int, rng: Rng) -> Item:
        power = max(1, power)
        rarity = self.roll_rarity(power, rng)
        base: ArmorTemplate = rng.pick_one(ARMOR_BASES)
        prefix = self._maybe_affix(rng, ARMOR_PREFIX_CHANCE, ARMOR_PREFIXES)
        suffix = self._maybe_affix(rng, ARMOR_SUFFIX_CHANCE, ARMOR_SUFFIXES)
        scaling = max(1, power // base.scale)
        variance = 0 if rng.next_int(0, 2) == 0 else 1

        defense = max(
            1,
            base.base_defense + scaling + variance + rarity.defense_bonus + self._affix_sum("defense_bonus", prefix, suffix),
        )
        dodge = self._affix_sum("dodge_chance", prefix, suffix) + rarity.armor_dodge_chance
        thorns = self._affix_sum("thorns", prefix, suffix) + rarity.armor_thorns
        value = max(1, round_half_up((14 + defense * 8) * rarity.value_multiplier))

        item = Item(
            id=item_id,
            kind=ItemKind.ARMOR,
            name=build_item_name(prefix, base.noun, suffix, rarity),
            value=value,
            defense_bonus=defense,
            dodge_chance=dodge,
            thorns=thorns,
            rarity=rarity.rarity,
        )
        logger.debug("Generated armor %s (power=%d): %s", item_id, power, item)
        return item

    def generate_class_upgrade(
        self, class_type: CharacterClass, kind: ItemKind, item_id: str, upgrade_level: int, rng: Rng
    ) -> Item:
        """Class-specific gear; the name shows how far it improves on the class base."""
        weapon_spec, armor_spec = CLASS_GEAR[CharacterClass(class_type)]
        level = max(1, upgrade_level)
        rarity = self.roll_rarity(level, rng)

        if ItemKind(kind) is ItemKind.WEAPON:
            attack = weapon_spec.bonus + level + rarity.attack_bonus
            return Item(
                id=item_id,
                kind=ItemKind.WEAPON,
                name=_upgrade_name(rarity, weapon_spec.upgrade_name, attack - weapon_spec.bonus),
                value=max(1, round_half_up((weapon_spec.value + level * 18) * rarity.value_multiplier)),
                attack_bonus=attack,
                crit_chance=rarity.weapon_crit_chance,
                lifesteal=rarity.weapon_lifesteal,
                rarity=rarity.rarity,
            )

        defense = armor_spec.bonus + max(1, level // 2) + rarity.defense_bonus
        return Item(
            id=item_id,
            kind=ItemKind.ARMOR,
            name=_upgrade_name(rarity, armor_spec.upgrade_name, defense - armor_spec.bonus),
            value=max(1, round_half_up((armor_spec.value + level * 16) * rarity.value_multiplier)),
            defense_bonus=defense,
            dodge_chance=rarity.armor_dodge_chance,
            thorns=rarity.armor_thorns,
            rarity=rarity.rarity,
        )

    def generate_boss_relic(self, item_id: str, kind: ItemKind, power: int, boss_name: str, rng: Rng) -> Item:
        """Legendary weapon or armor named after the boss that dropped it."""
        if ItemKind(kind) is ItemKind.WEAPON:
            item = self.generate_weapon_loot(item_id, power, rng)
            return replace(
                item,
                name=RELIC_WEAPON_NAME.format(boss=boss_name),
                rarity=Rarity.LEGENDARY,
                attack_bonus=(item.attack_bonus or 0) + RELIC_ATTACK_BONUS,
                value=round_half_up(item.value * RELIC_VALUE_MULTIPLIER),
            )
        item = self.generate_armor_loot(item_id, power, rng)
        return replace(
            item,
            name=RELIC_ARMOR_NAME.format(boss=boss_name),
            rarity=Rarity.LEGENDARY,
            defense_bonus=(item.defense_bonus or 0) + RELIC_DEFENSE_BONUS,
            value=round_half_up(item.value * RELIC_VALUE_MULTIPLIER),
        )


__all__ = ["ItemGenerator", "build_item_name"]
