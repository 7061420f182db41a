from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from ..world.entities import CharacterClass
from .models import Rarity


@dataclass(frozen=True)
class WeaponTemplate:
    noun: str
    base_attack: int
    scale: int


@dataclass(frozen=True)
class ArmorTemplate:
    noun: str
    base_defense: int
    scale: int


@dataclass(frozen=True)
class GearAffix:
    """A name fragment with optional stat bonuses.

    Prefixes read before the base noun ("Sunforged Blade"); suffixes after it
    ("Blade of Embers").
    """

    name: str
    attack_bonus: int = 0
    defense_bonus: int = 0
    crit_chance: int = 0
    dodge_chance: int = 0
    lifesteal: int = 0
    thorns: int = 0


@dataclass(frozen=True)
class RarityTier:
    """Per-rarity bonuses and roll weights.

    Attributes:
        base_weight: Roll weight at power 1.
        depth_weight: Extra weight per power level above 1.
        value_multiplier: Applied to the computed base value of the item.
    """

    rarity: Rarity
    name_prefix: str
    attack_bonus: int
    defense_bonus: int
    weapon_crit_chance: int
    weapon_lifesteal: int
    armor_dodge_chance: int
    armor_thorns: int
    value_multiplier: float
    base_weight: int
    depth_weight: int


WEAPON_PREFIXES: Tuple[GearAffix, ...] = (
    GearAffix("Sunforged", attack_bonus=1),
    GearAffix("Stormcall", crit_chance=3, attack_bonus=1),
    GearAffix("Glimmering", crit_chance=4),
    GearAffix("Nightfall", crit_chance=2),
    GearAffix("Emberforged", attack_bonus=1),
    GearAffix("Voidbound", lifesteal=3),
    GearAffix("Ironchant", attack_bonus=1, crit_chance=2),
    GearAffix("Frostvein", crit_chance=3),
)

WEAPON_SUFFIXES: Tuple[GearAffix, ...] = (
    GearAffix("of the Fox", crit_chance=5),
    GearAffix("of Embers", attack_bonus=1),
    GearAffix("of the Depths", lifesteal=5),
    GearAffix("of Dawn", crit_chance=3),
    GearAffix("of Ruin", attack_bonus=2),
    GearAffix("of the Tempest", crit_chance=4, attack_bonus=1),
    GearAffix("of Echoes", lifesteal=4),
)

WEAPON_BASES: Tuple[WeaponTemplate, ...] = (
    WeaponTemplate("Blade", 2, 2),
    WeaponTemplate("Halberd", 3, 3),
    WeaponTemplate("Longspear", 3, 2),
    WeaponTemplate("Warhammer", 4, 4),
    WeaponTemplate("Scimitar", 2, 1),
    WeaponTemplate("Greatsword", 4, 3),
    WeaponTemplate("Quarterstaff", 2, 2),
)

ARMOR_PREFIXES: Tuple[GearAffix, ...] = (
    GearAffix("Runeward", defense_bonus=1),
    GearAffix("Starwoven", dodge_chance=3),
    GearAffix("Stoneplate", defense_bonus=2),
    GearAffix("Whispersteel", dodge_chance=4),
    GearAffix("Moonlit", dodge_chance=6),
    GearAffix("Ashen", thorns=2),
    GearAffix("Verdant", thorns=3),
)

ARMOR_SUFFIXES: Tuple[GearAffix, ...] = (
    GearAffix("of Resilience", defense_bonus=1),
    GearAffix("of the Mirage", dodge_chance=6),
    GearAffix("of the Glacier", defense_bonus=1),
    GearAffix("of Sparks", thorns=2),
    GearAffix("of the Sentinel", defense_bonus=2),
    GearAffix("of Cinders", thorns=3),
)

ARMOR_BASES: Tuple[ArmorTemplate, ...] = (
    ArmorTemplate("Vestments", 1, 3),
    ArmorTemplate("Scale Mail", 2, 2),
    ArmorTemplate("Battlemantle", 2, 3),
    ArmorTemplate("Coat", 1, 2),
    ArmorTemplate("Carapace", 3, 4),
    ArmorTemplate("Guardplate", 3, 3),
)

RARITY_TIERS: Tuple[RarityTier, ...] = (
    RarityTier(Rarity.COMMON, "", 0, 0, 0, 0, 0, 0, 1.0, 80, 0),
    RarityTier(Rarity.UNCOMMON, "Fine", 1, 1, 2, 1, 2, 1, 1.25, 42, 3),
    RarityTier(Rarity.RARE, "Rare", 2, 2, 4, 2, 4, 2, 1.65, 18, 4),
    RarityTier(Rarity.EPIC, "Epic", 3, 3, 6, 3, 6, 3, 2.25, 6, 3),
    RarityTier(Rarity.LEGENDARY, "Legendary", 4, 4, 9, 5, 9, 4, 3.1, 2, 2),
)


@dataclass(frozen=True)
class ClassGearSpec:
    """Base of a class-specific upgrade; ``bonus`` is attack for weapons and defense for armor."""

    upgrade_name: str
    bonus: int
    value: int


# Upgrade gear per class: (weapon, armor).
CLASS_GEAR: Dict[CharacterClass, Tuple[ClassGearSpec, ClassGearSpec]] = {
    CharacterClass.WARRIOR: (ClassGearSpec("Tempered Longsword", 3, 32), ClassGearSpec("Reinforced Plate", 2, 30)),
    CharacterClass.ROGUE: (ClassGearSpec("Honed Daggers", 2, 28), ClassGearSpec("Shadow Leathers", 1, 26)),
    CharacterClass.MAGE: (ClassGearSpec("Runed Staff", 3, 30), ClassGearSpec("Warded Robes", 1, 24)),
}

RARITY_TIER_BY_KEY: Dict[Rarity, RarityTier] = {tier.rarity: tier for tier in RARITY_TIERS}

HEALING_POTION_NAME = "Healing Potion"
GREATER_HEALING_POTION_NAME = "Greater Healing Potion"

# Boss relics start from regular generated gear.
RELIC_WEAPON_NAME = "Relic Blade of {boss}"
RELIC_ARMOR_NAME = "Aegis of {boss}"
RELIC_ATTACK_BONUS = 3
RELIC_DEFENSE_BONUS = 2
RELIC_VALUE_MULTIPLIER = 2.4


__all__ = [
    "WeaponTemplate",
    "ArmorTemplate",
    "GearAffix",
    "RarityTier",
    "WEAPON_PREFIXES",
    "WEAPON_SUFFIXES",
    "WEAPON_BASES",
    "ARMOR_PREFIXES",
    "ARMOR_SUFFIXES",
    "ARMOR_BASES",
    "RARITY_TIERS",
    "RARITY_TIER_BY_KEY",
    "ClassGearSpec",
    "CLASS_GEAR",
    "HEALING_POTION_NAME",
    "GREATER_HEALING_POTION_NAME",
    "RELIC_WEAPON_NAME",
    "RELIC_ARMOR_NAME",
    "RELIC_ATTACK_BONUS",
    "RELIC_DEFENSE_BONUS",
    "RELIC_VALUE_MULTIPLIER",
]
