from __future__ import annotations

import logging
import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from platformdirs import user_config_dir
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import ConfigError

logger = logging.getLogger(__name__)

MONSTER_KEYS = ("slime", "goblin", "wraith", "orc")
RARITY_KEYS = ("common", "uncommon", "rare", "epic", "legendary")

BALANCE_ENV_VAR = "DELVE_BALANCE_FILE"
APP_NAME = "delve"
USER_BALANCE_FILENAME = "balance.yaml"


def user_balance_path() -> Path:
    """Per-user override location, e.g. ~/.config/delve/balance.yaml on Linux."""
    return Path(user_config_dir(APP_NAME)) / USER_BALANCE_FILENAME


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class BossConfig(_Frozen):
    """One boss per dungeon level from ``min_depth`` down; stats grow linearly with depth."""

    min_depth: int = Field(3, ge=0)
    glyph: str = Field("B", min_length=1, max_length=1)
    hp_base: int = 24
    hp_per_depth: int = 7
    attack_base: int = 5
    attack_per_depth: int = 2
    defense_base: int = 2
    defense_depth_div: int = Field(2, gt=0)
    loot_power_bonus: int = 4


class MonsterSpawnConfig(_Frozen):
    base_count: int = 7
    depth_cap: int = 14
    depth_multiplier: int = 2
    ambush_min: int = 3
    ambush_max: int = 7
    ambush_base: int = 3
    ambush_level_div: int = Field(2, gt=0)
    ambush_placement_attempts: int = Field(200, gt=0)
    boss: BossConfig = Field(default_factory=BossConfig)

    @model_validator(mode="after")
    def _ambush_bounds(self) -> "MonsterSpawnConfig":
        if self.ambush_min > self.ambush_max:
            raise ValueError("ambush_min must not exceed ambush_max")
        return self


class StatCurve(_Frozen):
    """Linear stat growth: ``floor(base + level * per_level)``."""

    base: float
    per_level: float


class MonsterTypeConfig(_Frozen):
    glyph: str = Field(..., min_length=1, max_length=1)
    level_floor: int = Field(..., ge=1)
    hp: StatCurve
    attack: StatCurve
    defense: StatCurve


class TypeRollEntry(_Frozen):
    type: str
    below: int = Field(..., ge=0, le=100)
    min_depth: int = Field(0, ge=0)

    @field_validator("type")
    @classmethod
    def _known_type(cls, v: str) -> str:
        if v not in MONSTER_KEYS:
            raise ValueError(f"Unknown monster type {v!r}; expected one of {MONSTER_KEYS}")
        return v


def _default_type_table() -> List[TypeRollEntry]:
    return [
        TypeRollEntry(type="slime", below=30),
        TypeRollEntry(type="goblin", below=60),
        TypeRollEntry(type="wraith", below=82, min_depth=2),
        TypeRollEntry(type="orc", below=100),
    ]


def _default_monster_types() -> Dict[str, MonsterTypeConfig]:
    def curve(base: float, per_level: float) -> StatCurve:
        return StatCurve(base=base, per_level=per_level)

    return {
        "slime": MonsterTypeConfig(glyph="s", level_floor=2, hp=curve(5, 2), attack=curve(1, 0.5), defense=curve(0, 0.2)),
        "goblin": MonsterTypeConfig(glyph="g", level_floor=3, hp=curve(8, 3), attack=curve(2, 1), defense=curve(0, 0.35)),
        "wraith": MonsterTypeConfig(glyph="w", level_floor=4, hp=curve(9, 3.5), attack=curve(2, 1.2), defense=curve(1, 0.35)),
        "orc": MonsterTypeConfig(glyph="O", level_floor=5, hp=curve(12, 4), attack=curve(3, 1.3), defense=curve(1, 0.5)),
    }


class MonsterScalingConfig(_Frozen):
    level_player_weight: float = Field(0.7, ge=0.0, le=1.0)
    level_minimum: int = Field(1, ge=1)
    type_table: List[TypeRollEntry] = Field(default_factory=_default_type_table)
    types: Dict[str, MonsterTypeConfig] = Field(default_factory=_default_monster_types)

    @model_validator(mode="after")
    def _complete_tables(self) -> "MonsterScalingConfig":
        missing = [k for k in MONSTER_KEYS if k not in self.types]
        if missing:
            raise ValueError(f"Missing monster type stats: {missing}")
        if not self.type_table:
            raise ValueError("type_table must not be empty")
        last = self.type_table[-1]
        if last.below < 100 or last.min_depth > 0:
            # Every roll in [0, 100) must resolve to some type.
            raise ValueError("The last type_table entry must be an unconditional catch-all")
        return self


class HitConfig(_Frozen):
    player_base: int = 70
    player_agi_mult: int = 3
    player_level_div: int = Field(2, gt=0)
    player_min: int = 25
    player_max: int = 95
    monster_base: int = 60
    monster_level_mult: int = 3
    monster_min: int = 25
    monster_max: int = 90


class CritConfig(_Frozen):
    rogue_base: int = 10
    rogue_agi_mult: int = 4
    rogue_cap: int = 60
    total_cap: int = 75
    damage_mult: float = 2


class DamageConfig(_Frozen):
    roll_max_exclusive: int = 6
    player_def_multiplier: float = 0.9
    mage_def_multiplier: float = 0.5
    monster_damage_multiplier: float = 1.15


class WraithConfig(_Frozen):
    def_multiplier: float = 0.3
    heal_ratio: float = 0.6
    base_damage: int = 2
    roll_max_exclusive: int = 3
    drain_chance: int = 20
    drain_range: int = 4
    cooldown: int = 3


class PoisonConfig(_Frozen):
    chance: int = 20
    turns: int = 5
    potency: int = 1


class CombatConfig(_Frozen):
    hit: HitConfig = Field(default_factory=HitConfig)
    dodge_cap: int = 50
    crit: CritConfig = Field(default_factory=CritConfig)
    damage: DamageConfig = Field(default_factory=DamageConfig)
    lifesteal_cap: int = 50
    thorns_cap: int = 20
    wraith: WraithConfig = Field(default_factory=WraithConfig)
    poison: PoisonConfig = Field(default_factory=PoisonConfig)


class ProgressionConfig(_Frozen):
    xp_base: int = 25
    xp_per_level: int = 12
    kill_xp_base: int = 6
    kill_gold_base: int = 2
    kill_gold_roll_max_exclusive: int = 4


class MoodConfig(_Frozen):
    label: str
    below: int = Field(..., ge=0, le=100)
    buy_multiplier: float = Field(..., gt=0)
    sell_multiplier: float = Field(..., gt=0)


def _default_moods() -> List[MoodConfig]:
    return [
        MoodConfig(label="booming", below=22, buy_multiplier=0.9, sell_multiplier=0.55),
        MoodConfig(label="tight", below=45, buy_multiplier=1.15, sell_multiplier=0.45),
        MoodConfig(label="steady", below=100, buy_multiplier=1.0, sell_multiplier=0.5),
    ]


def _default_rarity_multipliers() -> Dict[str, float]:
    return {"common": 1.0, "uncommon": 1.03, "rare": 1.06, "epic": 1.1, "legendary": 1.15}


class ShopConfig(_Frozen):
    restock_interval: int = Field(80, gt=0)
    moods: List[MoodConfig] = Field(default_factory=_default_moods)
    specialty_all_below: int = 40
    featured_none_below: int = 65
    buy_specialty_match: float = -0.08
    buy_specialty_mismatch: float = 0.04
    featured_discount: float = 0.8
    sell_specialty_match: float = 0.03
    sell_specialty_mismatch: float = -0.02
    rarity_multipliers: Dict[str, float] = Field(default_factory=_default_rarity_multipliers)
    stock_size: int = 10
    potion_below: int = 45
    weapon_below: int = 75
    potion_heal: int = 10
    potion_value: int = 14

    @field_validator("moods")
    @classmethod
    def _moods_cover_range(cls, v: List[MoodConfig]) -> List[MoodConfig]:
        if not v or v[-1].below < 100:
            raise ValueError("The last mood must cover rolls up to 100")
        return v

    @field_validator("rarity_multipliers")
    @classmethod
    def _rarity_monotonic(cls, v: Dict[str, float]) -> Dict[str, float]:
        missing = [k for k in RARITY_KEYS if k not in v]
        if missing:
            raise ValueError(f"Missing rarity multipliers: {missing}")
        ordered = [v[k] for k in RARITY_KEYS]
        if any(b < a for a, b in zip(ordered, ordered[1:])):
            raise ValueError("Rarity multipliers must be non-decreasing from common to legendary")
        return v


class LootConfig(_Frozen):
    """Floor loot scattered over a freshly generated dungeon level."""

    count: int = Field(8, ge=0)
    potion_below: int = 55
    weapon_below: int = 80
    armor_below: int = 95
    potion_heal_base: int = 8
    potion_heal_per_depth: int = 2
    potion_value_base: int = 10
    potion_value_per_depth: int = 2
    greater_potion_depth: int = 4


def _default_ambush_chance() -> Dict[str, int]:
    return {"forest": 6, "grass": 3, "road": 1, "cave": 0, "dungeon": 0, "town": 0, "water": 0, "default": 2}


class BalanceConfig(_Frozen):
    """All tunable constants of the simulation core.

    Defaults mirror ``delve/data/balance.yaml``; ``BalanceConfig()`` and
    ``BalanceConfig.load()`` produce equal values unless an override is given.
    """

    monster_spawn: MonsterSpawnConfig = Field(default_factory=MonsterSpawnConfig)
    monster_scaling: MonsterScalingConfig = Field(default_factory=MonsterScalingConfig)
    combat: CombatConfig = Field(default_factory=CombatConfig)
    progression: ProgressionConfig = Field(default_factory=ProgressionConfig)
    shop: ShopConfig = Field(default_factory=ShopConfig)
    loot: LootConfig = Field(default_factory=LootConfig)
    ambush_chance: Dict[str, int] = Field(default_factory=_default_ambush_chance)

    @staticmethod
    def _load_yaml(path: Path) -> dict:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    @classmethod
    def _deep_merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @classmethod
    def from_dict(cls, data: dict) -> "BalanceConfig":
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid balance configuration:\n{exc}") from exc

    @classmethod
    def packaged_data(cls) -> dict:
        """Raw mapping from the packaged ``delve/data/balance.yaml``."""
        try:
            text = resources.files("delve.data").joinpath("balance.yaml").read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.warning("Packaged balance.yaml not found; falling back to model defaults.")
            return cls().model_dump()
        return yaml.safe_load(text) or {}

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "BalanceConfig":
        """Load packaged defaults and overlay an optional user file.

        When ``user_path`` is None the ``DELVE_BALANCE_FILE`` environment
        variable is consulted, then the per-user config directory. Only an
        explicitly requested file must exist.
        """
        default_data = cls.packaged_data()

        if user_path is None and os.getenv(BALANCE_ENV_VAR):
            user_path = Path(os.environ[BALANCE_ENV_VAR])
        if user_path is None and user_balance_path().is_file():
            user_path = user_balance_path()

        user_data: dict = {}
        if user_path is not None:
            if not user_path.exists():
                raise ConfigError(f"Balance override file not found: {user_path}")
            try:
                user_data = cls._load_yaml(user_path)
            except yaml.YAMLError as exc:
                raise ConfigError(f"Could not parse balance override {user_path}: {exc}") from exc
            logger.info("Loaded balance overrides from %s", user_path)

        merged = cls._deep_merge(default_data, user_data)
        config = cls.from_dict(merged)
        logger.debug("Balance configuration resolved: %s", config)
        return config


@lru_cache(maxsize=1)
def default_balance() -> BalanceConfig:
    """Process-wide immutable defaults read from the packaged balance.yaml.

    User override files are ignored here; pass ``BalanceConfig.load()`` explicitly
    to honour them.
    """
    return BalanceConfig.from_dict(BalanceConfig.packaged_data())


__all__ = [
    "BalanceConfig",
    "MonsterSpawnConfig",
    "BossConfig",
    "LootConfig",
    "MonsterScalingConfig",
    "MonsterTypeConfig",
    "StatCurve",
    "TypeRollEntry",
    "CombatConfig",
    "HitConfig",
    "CritConfig",
    "DamageConfig",
    "WraithConfig",
    "PoisonConfig",
    "ProgressionConfig",
    "ShopConfig",
    "MoodConfig",
    "MONSTER_KEYS",
    "RARITY_KEYS",
    "default_balance",
    "user_balance_path",
]
