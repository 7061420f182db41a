from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..config import ProgressionConfig, default_balance
from ..core.rng import Rng
from ..world.entities import CharacterClass, Entity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LevelUpGains:
    hp: int
    attack: int
    defense: int
    strength: int
    agility: int
    intellect: int


@dataclass(frozen=True)
class KillRewards:
    xp: int
    gold: int


def _every(level: int, n: int) -> int:
    return 1 if level % n == 0 else 0


def level_up_gains(class_type: CharacterClass, level: int) -> LevelUpGains:
    """Stat growth for reaching ``level`` (the new level, after the increment)."""
    if class_type is CharacterClass.WARRIOR:
        return LevelUpGains(6, 2, _every(level, 2), 2, _every(level, 3), _every(level, 4))
    if class_type is CharacterClass.ROGUE:
        return LevelUpGains(4, 1, _every(level, 3), 1, 2, _every(level, 2))
    return LevelUpGains(3, 1, _every(level, 4), _every(level, 4), _every(level, 3), 2)


def xp_to_next_level(level: int, config: Optional[ProgressionConfig] = None) -> int:
    cfg = config or default_balance().progression
    return cfg.xp_base + (level - 1) * cfg.xp_per_level


def award_xp(player: Entity, amount: int, config: Optional[ProgressionConfig] = None) -> List[LevelUpGains]:
    """Add XP, applying every level-up it pays for. Each level-up refills HP.

    Returns the gains of each level gained, in order.
    """
    if amount < 0:
        raise ValueError("xp amount must be non-negative")
    cfg = config or default_balance().progression
    class_type = player.class_type or CharacterClass.MAGE
    player.xp += amount
    gained: List[LevelUpGains] = []
    while player.xp >= xp_to_next_level(player.level, cfg):
        player.xp -= xp_to_next_level(player.level, cfg)
        player.level += 1
        gains = level_up_gains(class_type, player.level)
        player.max_hp += gains.hp
        player.base_attack += gains.attack
        player.base_defense += gains.defense
        player.strength = (player.strength or 0) + gains.strength
        player.agility = (player.agility or 0) + gains.agility
        player.intellect = (player.intellect or 0) + gains.intellect
        player.hp = player.max_hp
        gained.append(gains)
        logger.info("%s reached level %d", player.name, player.level)
    return gained


def kill_rewards(victim: Entity, rng: Rng, config: Optional[ProgressionConfig] = None) -> KillRewards:
    cfg = config or default_balance().progression
    xp = cfg.kill_xp_base + victim.base_attack + victim.base_defense
    gold = cfg.kill_gold_base + rng.next_int(0, cfg.kill_gold_roll_max_exclusive)
    return KillRewards(xp=xp, gold=gold)


def grant_kill_rewards(player: Entity, victim: Entity, rng: Rng, config: Optional[ProgressionConfig] = None) -> KillRewards:
    """Roll rewards for ``victim`` and credit them to ``player``."""
    rewards = kill_rewards(victim, rng, config)
    player.gold += rewards.gold
    award_xp(player, rewards.xp, config)
    logger.debug("%s looted %s from %s", player.name, rewards, victim.name)
    return rewards


__all__ = [
    "LevelUpGains",
    "KillRewards",
    "level_up_gains",
    "xp_to_next_level",
    "award_xp",
    "kill_rewards",
    "grant_kill_rewards",
]
