import pytest

from delve.config import BalanceConfig, default_balance
from delve.errors import ConfigError


def test_packaged_yaml_matches_model_defaults():
    assert BalanceConfig.load() == BalanceConfig()


def test_default_balance_is_cached():
    assert default_balance() is default_balance()


def test_user_override_is_deep_merged(tmp_path):
    override = tmp_path / "balance.yaml"
    override.write_text("monster_spawn:\n  base_count: 5\nshop:\n  restock_interval: 40\n", encoding="utf-8")

    cfg = BalanceConfig.load(user_path=override)

    assert cfg.monster_spawn.base_count == 5
    assert cfg.monster_spawn.depth_cap == 14
    assert cfg.shop.restock_interval == 40
    assert cfg.shop.moods[0].label == "booming"


def test_env_var_supplies_override(tmp_path, monkeypatch):
    override = tmp_path / "env.yaml"
    override.write_text("combat:\n  dodge_cap: 40\n", encoding="utf-8")
    monkeypatch.setenv("DELVE_BALANCE_FILE", str(override))

    assert BalanceConfig.load().combat.dodge_cap == 40


def test_user_config_dir_file_is_picked_up(tmp_path, monkeypatch):
    user_file = tmp_path / "balance.yaml"
    user_file.write_text("progression:\n  xp_base: 30\n", encoding="utf-8")
    monkeypatch.setattr("delve.config.user_balance_path", lambda: user_file)

    assert BalanceConfig.load().progression.xp_base == 30


def test_missing_override_raises(tmp_path):
    with pytest.raises(ConfigError):
        BalanceConfig.load(user_path=tmp_path / "missing.yaml")


def test_unparseable_override_raises(tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("monster_spawn: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        BalanceConfig.load(user_path=bad)


def test_unknown_key_is_rejected():
    with pytest.raises(ConfigError):
        BalanceConfig.from_dict({"monster_spawn": {"bogus": 1}})


def test_ambush_bounds_validated():
    with pytest.raises(ConfigError):
        BalanceConfig.from_dict({"monster_spawn": {"ambush_min": 9, "ambush_max": 7}})


def test_mood_table_must_cover_all_rolls():
    moods = [{"label": "only", "below": 50, "buy_multiplier": 1.0, "sell_multiplier": 0.5}]
    with pytest.raises(ConfigError):
        BalanceConfig.from_dict({"shop": {"moods": moods}})


def test_rarity_multipliers_must_not_decrease():
    bad = {"common": 1.0, "uncommon": 1.2, "rare": 1.1, "epic": 1.3, "legendary": 1.4}
    with pytest.raises(ConfigError):
        BalanceConfig.from_dict({"shop": {"rarity_multipliers": bad}})


def test_type_table_needs_catch_all():
    table = [{"type": "slime", "below": 50}, {"type": "orc", "below": 90}]
    with pytest.raises(ConfigError):
        BalanceConfig.from_dict({"monster_scaling": {"type_table": table}})


def test_config_is_frozen():
    cfg = BalanceConfig()
    with pytest.raises(Exception):
        cfg.monster_spawn.base_count = 3


@pytest.fixture
def fresh_default_balance():
    default_balance.cache_clear()
    yield default_balance
    default_balance.cache_clear()


def test_default_balance_reads_packaged_yaml(fresh_default_balance, monkeypatch):
    packaged = {"monster_spawn": {"base_count": 4}, "loot": {"count": 3}}
    monkeypatch.setattr(BalanceConfig, "packaged_data", classmethod(lambda cls: packaged))

    cfg = fresh_default_balance()

    assert cfg.monster_spawn.base_count == 4
    assert cfg.loot.count == 3


def test_default_balance_ignores_user_overrides(fresh_default_balance, tmp_path, monkeypatch):
    override = tmp_path / "env.yaml"
    override.write_text("combat:\n  dodge_cap: 40\n", encoding="utf-8")
    monkeypatch.setenv("DELVE_BALANCE_FILE", str(override))

    assert fresh_default_balance().combat.dodge_cap == 50


def test_boss_and_loot_tables_load():
    cfg = BalanceConfig.load()
    assert cfg.monster_spawn.boss.min_depth == 3
    assert cfg.loot.count == 8
