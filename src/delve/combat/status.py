from __future__ import annotations

import logging
from typing import Optional

from ..config import PoisonConfig, default_balance
from ..core.rng import Rng
from ..world.entities import Entity, StatusEffect, StatusEffectKind

logger = logging.getLogger(__name__)

POISONOUS_TYPES = frozenset({"slime"})


def maybe_poison(attacker: Entity, target: Entity, rng: Rng, config: Optional[PoisonConfig] = None) -> bool:
    """Roll for a poisonous attacker to poison ``target``.

    Only call after the attack landed and left the target alive. Non-poisonous
    attackers never consume a draw. An existing poison is refreshed rather
    than stacked.
    """
    if attacker.monster_type not in POISONOUS_TYPES:
        return False
    cfg = config or default_balance().combat.poison
    if rng.next_int(0, 100) >= cfg.chance:
        return False

    if target.status_effects is None:
        target.status_effects = []
    existing = next((e for e in target.status_effects if e.kind is StatusEffectKind.POISON), None)
    if existing is not None:
        existing.remaining_turns = max(existing.remaining_turns, cfg.turns)
        existing.potency = max(existing.potency, cfg.potency)
    else:
        target.status_effects.append(StatusEffect(StatusEffectKind.POISON, cfg.turns, cfg.potency))
    logger.debug("%s poisoned %s", attacker.name, target.name)
    return True


def tick_status_effects(entity: Entity) -> int:
    """Apply start-of-turn effects and drop expired ones. Returns total damage dealt."""
    if not entity.status_effects:
        return 0
    total = 0
    for effect in entity.status_effects:
        if effect.kind is StatusEffectKind.POISON:
            total += entity.take_damage(effect.potency)
        effect.remaining_turns -= 1
    entity.status_effects = [e for e in entity.status_effects if e.remaining_turns > 0]
    if not entity.alive:
        logger.info("%s succumbed to status effects", entity.name)
    return total


__all__ = ["maybe_poison", "tick_status_effects", "POISONOUS_TYPES"]
