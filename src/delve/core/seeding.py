"""Sub-seed derivation.

Every random stream in the simulation traces back to one world seed. The helpers
here mix that seed with fixed domain salts, spatial hashes and cycle counters so
that each subsystem draws from its own stream. Changing one salt never perturbs
another subsystem's sequence.

Sub-seeds are re-derived on demand and never stored.
"""

from __future__ import annotations

from .rng import MASK32, to_u32

MONSTER_SALT = 0xBEEF
AMBUSH_SALT = 0xA51D
SHOP_SALT = 0x5F10
BOSS_SALT = 0xB055
LOOT_SALT = 0x51F15
GOLDEN_GAMMA = 0x9E3779B9

_HASH_PRIME_X = 374761393
_HASH_PRIME_Y = 668265263
_HASH_MIX = 1274126177


def hash2d(world_seed: int, x: int, y: int) -> int:
    """Mix a seed with two integer coordinates into one unsigned 32-bit value."""
    h = to_u32(world_seed)
    h ^= to_u32(x * _HASH_PRIME_X)
    h ^= to_u32(y * _HASH_PRIME_Y)
    h = to_u32((h ^ (h >> 13)) * _HASH_MIX)
    h ^= h >> 16
    return h


def monster_spawn_seed(seed: int) -> int:
    return to_u32(seed ^ MONSTER_SALT)


def ambush_spawn_seed(seed: int) -> int:
    return to_u32(seed ^ AMBUSH_SALT)


def spawn_point_seed(seed: int, index: int) -> int:
    """Positional stream for the ``index``-th monster of a level."""
    return to_u32(seed + 1000 + index * 17)


def ambush_point_seed(seed: int, index: int, attempt: int) -> int:
    """Positional stream for one placement attempt of an ambush monster."""
    return to_u32(seed + 2000 + index * 37 + attempt * 11)


def loot_spawn_seed(seed: int) -> int:
    return to_u32(seed ^ LOOT_SALT)


def loot_point_seed(seed: int, index: int) -> int:
    """Positional stream for the ``index``-th floor item of a level."""
    return to_u32(seed + 5000 + index * 31)


def boss_point_seed(seed: int) -> int:
    return to_u32(seed + 7000)


def boss_loot_seed(world_seed: int, depth: int, x: int, y: int) -> int:
    """Seed for the relic a boss drops where it fell."""
    return hash2d(to_u32(world_seed ^ depth), x, y) ^ BOSS_SALT


def economy_cycle(turn_counter: int, restock_interval: int) -> int:
    return turn_counter // restock_interval


def _cycle_term(cycle: int) -> int:
    return (cycle * GOLDEN_GAMMA) & MASK32


def shop_economy_seed(world_seed: int, x: int, y: int, cycle: int) -> int:
    return hash2d(world_seed, x, y) ^ _cycle_term(cycle) ^ SHOP_SALT


def shop_restock_seed(world_seed: int, x: int, y: int, cycle: int) -> int:
    # Same cycle mixing as the economy stream, without the mood salt.
    return hash2d(world_seed, x, y) ^ _cycle_term(cycle)


def dungeon_level_seed(base_seed: int, depth: int) -> int:
    return to_u32(base_seed ^ (depth * GOLDEN_GAMMA))


def ambush_encounter_seed(world_seed: int, x: int, y: int, draw: int) -> int:
    """Seed for an overworld ambush at ``(x, y)``; ``draw`` comes from the session RNG."""
    return to_u32(draw ^ hash2d(world_seed, x, y))


__all__ = [
    "MONSTER_SALT",
    "AMBUSH_SALT",
    "SHOP_SALT",
    "BOSS_SALT",
    "LOOT_SALT",
    "GOLDEN_GAMMA",
    "hash2d",
    "monster_spawn_seed",
    "ambush_spawn_seed",
    "spawn_point_seed",
    "ambush_point_seed",
    "loot_spawn_seed",
    "loot_point_seed",
    "boss_point_seed",
    "boss_loot_seed",
    "economy_cycle",
    "shop_economy_seed",
    "shop_restock_seed",
    "dungeon_level_seed",
    "ambush_encounter_seed",
]
