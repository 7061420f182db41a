import json

import pytest

from delve import cli


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    # Leave the root logger alone so pytest's capture keeps working.
    monkeypatch.setattr(cli, "configure_logging", lambda *a, **k: None)


def test_spawn_prints_monsters(capsys):
    assert cli.main(["spawn", "--seed", "42", "--depth", "1"]) == 0
    monsters = json.loads(capsys.readouterr().out)

    assert len(monsters) == 9
    assert {m["id"] for m in monsters} == {f"m_arena_42_1_{i}" for i in range(9)}
    assert all(m["type"] in {"slime", "goblin", "orc"} for m in monsters)


def test_spawn_is_reproducible(capsys):
    cli.main(["spawn", "--seed", "7", "--depth", "3"])
    first = capsys.readouterr().out
    cli.main(["spawn", "--seed", "7", "--depth", "3"])
    assert capsys.readouterr().out == first


def test_ambush_spawn_size_and_placement(capsys):
    assert cli.main(["spawn", "--seed", "5", "--player-level", "4", "--ambush"]) == 0
    monsters = json.loads(capsys.readouterr().out)
    assert len(monsters) == 5
    positions = [tuple(m["pos"]) for m in monsters]
    assert len(set(positions)) == 5
    assert (1, 1) not in positions


def test_shop_output(capsys):
    assert cli.main(["shop", "--world-seed", "11", "--x", "3", "--y", "4", "--turn", "100"]) == 0
    data = json.loads(capsys.readouterr().out)

    assert data["shop"] == "town_3_4"
    assert data["turn"] == 100
    assert data["economy"]["restock_in"] == 60
    assert data["economy"]["mood_label"] in {"booming", "tight", "steady"}
    ids = [entry["id"] for entry in data["stock"]]
    assert ids[:10] == [f"shop_town_3_4_1_{i}" for i in range(10)]
    assert ids[10:] == ["shop_town_3_4_class_weapon_1", "shop_town_3_4_class_armor_1"]
    assert all(entry["price"] >= 1 for entry in data["stock"])


def test_bad_balance_file_returns_error_code(tmp_path, capsys):
    assert cli.main(["--balance", str(tmp_path / "missing.yaml"), "spawn", "--seed", "1"]) == 2
    assert capsys.readouterr().out == ""
