from .resolver import AttackOutcome, CombatResolver
from .rewards import award_xp, grant_kill_rewards, kill_rewards, xp_to_next_level
from .status import maybe_poison, tick_status_effects

__all__ = [
    "AttackOutcome",
    "CombatResolver",
    "award_xp",
    "grant_kill_rewards",
    "kill_rewards",
    "xp_to_next_level",
    "maybe_poison",
    "tick_status_effects",
]
