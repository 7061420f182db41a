from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Mapping, Optional

from ..config import CombatConfig, default_balance
from ..core.numeric import clamp
from ..core.rng import Rng
from ..items.models import Item
from ..world.entities import CharacterClass, Entity

logger = logging.getLogger(__name__)

ItemLookup = Mapping[str, Item]


@dataclass(frozen=True)
class AttackOutcome:
    """Result of one attack or drain, before it is applied to the combatants.

    Attributes:
        hit: False when the attack missed or was dodged.
        dodged: True when the defender's dodge roll succeeded.
        crit: True when the damage was doubled by a critical hit.
        damage: Damage dealt to the defender (>= 1 on a hit, 0 otherwise).
        lifesteal_heal: HP restored to the attacker.
        thorns_damage: Flat damage reflected back at the attacker.
    """

    hit: bool
    dodged: bool = False
    crit: bool = False
    damage: int = 0
    lifesteal_heal: int = 0
    thorns_damage: int = 0


MISS = AttackOutcome(hit=False)


def equipped_weapon(entity: Entity, items: ItemLookup) -> Optional[Item]:
    weapon_id = entity.equipment.weapon_item_id
    return items.get(weapon_id) if weapon_id else None


def equipped_armor(entity: Entity, items: ItemLookup) -> Optional[Item]:
    armor_id = entity.equipment.armor_item_id
    return items.get(armor_id) if armor_id else None


def class_stat_bonus(entity: Entity) -> int:
    """Half the attacker's class stat (strength, agility or intellect), rounded down."""
    if not entity.is_player or entity.class_type is None:
        return 0
    if entity.class_type is CharacterClass.WARRIOR:
        stat = entity.strength
    elif entity.class_type is CharacterClass.ROGUE:
        stat = entity.agility
    else:
        stat = entity.intellect
    return (stat or 0) // 2


class CombatResolver:
    """Combat formulas over entity stats plus draws from a caller-supplied Rng.

    ``resolve_*`` methods never mutate the combatants; pass their result to
    :meth:`apply_outcome` to commit it.

    Usage:
        resolver = CombatResolver()
        outcome = resolver.resolve_attack(player, monster, rng, items)
        resolver.apply_outcome(player, monster, outcome)
    """

    def __init__(self, config: Optional[CombatConfig] = None) -> None:
        self.config = config or default_balance().combat

    # ---------------------- Chances ----------------------
    def hit_chance(self, attacker: Entity, defender: Entity) -> int:
        hit = self.config.hit
        if attacker.is_player:
            chance = hit.player_base + (attacker.agility or 0) * hit.player_agi_mult - defender.level // hit.player_level_div
            return clamp(chance, hit.player_min, hit.player_max)
        return clamp(hit.monster_base + attacker.level * hit.monster_level_mult, hit.monster_min, hit.monster_max)

    def dodge_chance(self, defender: Entity, items: ItemLookup) -> int:
        armor = equipped_armor(defender, items)
        return min(self.config.dodge_cap, (armor.dodge_chance or 0) if armor else 0)

    def crit_chance(self, attacker: Entity, items: ItemLookup) -> int:
        if not attacker.is_player:
            return 0
        crit = self.config.crit
        chance = 0
        if attacker.class_type is CharacterClass.ROGUE:
            chance = min(crit.rogue_cap, crit.rogue_base + (attacker.agility or 0) * crit.rogue_agi_mult)
        weapon = equipped_weapon(attacker, items)
        if weapon is not None:
            chance += weapon.crit_chance or 0
        return min(crit.total_cap, chance)

    # ---------------------- Power ----------------------
    def attack_power(self, entity: Entity, items: ItemLookup) -> int:
        weapon = equipped_weapon(entity, items)
        bonus = (weapon.attack_bonus or 0) if weapon else 0
        return entity.base_attack + bonus + class_stat_bonus(entity)

    def defense_power(self, entity: Entity, items: ItemLookup) -> int:
        armor = equipped_armor(entity, items)
        return entity.base_defense + ((armor.defense_bonus or 0) if armor else 0)

    def defense_multiplier(self, attacker: Entity) -> float:
        dmg = self.config.damage
        if attacker.is_player and attacker.class_type is CharacterClass.MAGE:
            return dmg.mage_def_multiplier
        return dmg.player_def_multiplier

    @staticmethod
    def compute_damage(
        attack: int,
        defense: int,
        roll: int,
        def_multiplier: float,
        damage_multiplier: float = 1.0,
    ) -> int:
        """Damage for one hit.

        ``base = max(1, attack + roll - defense * def_multiplier)``, then all
        multipliers are applied and the result is floored once, never below 1.
        """
        base = max(1.0, (attack + roll) - defense * def_multiplier)
        return max(1, math.floor(base * damage_multiplier))

    # ---------------------- Resolution ----------------------
    def resolve_attack(self, attacker: Entity, defender: Entity, rng: Rng, items: ItemLookup) -> AttackOutcome:
        """Resolve one melee attack.

        Draw order: hit, dodge (only if dodge > 0), crit (only if crit > 0),
        damage roll. A miss or dodge stops drawing.
        """
        if not attacker.alive:
            logger.warning("%s attempted to attack while defeated; no action taken.", attacker.name)
            return MISS

        if rng.next_int(0, 100) >= self.hit_chance(attacker, defender):
            logger.debug("%s misses %s", attacker.name, defender.name)
            return MISS

        dodge = self.dodge_chance(defender, items)
        if dodge > 0 and rng.next_int(0, 100) < dodge:
            logger.debug("%s dodges %s", defender.name, attacker.name)
            return AttackOutcome(hit=False, dodged=True)

        crit_chance = self.crit_chance(attacker, items)
        crit = crit_chance > 0 and rng.next_int(0, 100) < crit_chance

        if attacker.is_player:
            damage_multiplier = self.config.crit.damage_mult if crit else 1.0
        else:
            damage_multiplier = self.config.damage.monster_damage_multiplier

        roll = rng.next_int(0, self.config.damage.roll_max_exclusive)
        damage = self.compute_damage(
            self.attack_power(attacker, items),
            self.defense_power(defender, items),
            roll,
            self.defense_multiplier(attacker),
            damage_multiplier,
        )

        lifesteal_heal = 0
        if attacker.is_player:
            weapon = equipped_weapon(attacker, items)
            pct = min(self.config.lifesteal_cap, (weapon.lifesteal or 0) if weapon else 0)
            if pct > 0:
                lifesteal_heal = max(0, min(attacker.max_hp - attacker.hp, damage * pct // 100))

        thorns = 0
        if defender.is_player and attacker.is_monster:
            armor = equipped_armor(defender, items)
            thorns = min(self.config.thorns_cap, (armor.thorns or 0) if armor else 0)

        outcome = AttackOutcome(
            hit=True,
            crit=crit,
            damage=damage,
            lifesteal_heal=lifesteal_heal,
            thorns_damage=max(0, thorns),
        )
        logger.debug("%s hits %s: %s", attacker.name, defender.name, outcome)
        return outcome

    def resolve_wraith_drain(self, attacker: Entity, defender: Entity, rng: Rng, items: ItemLookup) -> AttackOutcome:
        """Life drain: always lands, ignores most of the target's defense and heals the caster."""
        wraith = self.config.wraith
        defense = self.defense_power(defender, items)
        base = wraith.base_damage + attacker.base_attack // 2 + rng.next_int(0, wraith.roll_max_exclusive)
        damage = max(1, base - math.floor(defense * wraith.def_multiplier))
        heal = max(0, min(attacker.max_hp - attacker.hp, math.floor(damage * wraith.heal_ratio)))
        logger.debug("%s drains %s for %d (heals %d)", attacker.name, defender.name, damage, heal)
        return AttackOutcome(hit=True, damage=damage, lifesteal_heal=heal)

    def apply_outcome(self, attacker: Entity, defender: Entity, outcome: AttackOutcome) -> None:
        """Commit an outcome; HP stays within [0, max_hp] on both sides."""
        if not outcome.hit:
            return
        defender.take_damage(outcome.damage)
        if outcome.lifesteal_heal:
            attacker.heal(outcome.lifesteal_heal)
        if outcome.thorns_damage:
            attacker.take_damage(outcome.thorns_damage)
        if not defender.alive:
            logger.info("%s was defeated by %s.", defender.name, attacker.name)
        if not attacker.alive:
            logger.info("%s was killed by thorns.", attacker.name)

    # ---------------------- Wraith special ----------------------
    def can_drain(self, wraith: Entity, distance: int, rng: Rng) -> bool:
        """Whether a wraith uses its drain this turn. Draws only when cooldown and range allow."""
        cfg = self.config.wraith
        if wraith.special_cooldown is None or wraith.special_cooldown > 0:
            return False
        if distance > cfg.drain_range:
            return False
        if rng.next_int(0, 100) >= cfg.drain_chance:
            return False
        wraith.special_cooldown = cfg.cooldown
        return True

    @staticmethod
    def tick_special_cooldown(entity: Entity) -> None:
        if entity.special_cooldown:
            entity.special_cooldown = max(0, entity.special_cooldown - 1)


__all__ = [
    "AttackOutcome",
    "CombatResolver",
    "ItemLookup",
    "class_stat_bonus",
    "equipped_armor",
    "equipped_weapon",
]
