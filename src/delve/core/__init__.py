from .numeric import clamp, round_half_up
from .rng import Rng, xorshift32
from .seeding import (
    hash2d,
    monster_spawn_seed,
    ambush_spawn_seed,
    economy_cycle,
    shop_economy_seed,
    dungeon_level_seed,
)

__all__ = [
    "Rng",
    "xorshift32",
    "clamp",
    "round_half_up",
    "hash2d",
    "monster_spawn_seed",
    "ambush_spawn_seed",
    "economy_cycle",
    "shop_economy_seed",
    "dungeon_level_seed",
]
