import pytest

from delve.core.rng import Rng
from delve.core.seeding import ambush_encounter_seed
from delve.encounters.ambush import (
    Terrain,
    ambush_chance_for,
    ambush_victory_gold,
    plan_ambush,
    roll_for_ambush,
)
from delve.world.entities import Point


def test_terrain_chances():
    assert ambush_chance_for(Terrain.FOREST) == 6
    assert ambush_chance_for(Terrain.GRASS) == 3
    assert ambush_chance_for(Terrain.ROAD) == 1
    assert ambush_chance_for(Terrain.MOUNTAIN) == 2
    assert ambush_chance_for("town") == 0


@pytest.mark.parametrize("terrain", [Terrain.TOWN, Terrain.WATER, Terrain.CAVE, Terrain.DUNGEON])
def test_safe_terrain_draws_nothing(terrain, stub_rng):
    rng = stub_rng([])
    assert roll_for_ambush(terrain, rng) is False
    assert rng.calls == []


def test_forest_roll_threshold(stub_rng):
    assert roll_for_ambush(Terrain.FOREST, stub_rng([5])) is True
    assert roll_for_ambush(Terrain.FOREST, stub_rng([6])) is False


def test_custom_table_overrides_default(stub_rng):
    table = {"road": 50, "default": 0}
    assert roll_for_ambush(Terrain.ROAD, stub_rng([49]), table) is True
    assert roll_for_ambush(Terrain.MOUNTAIN, stub_rng([]), table) is False


def test_plan_ambush(stub_rng):
    rng = stub_rng([123456])
    plan = plan_ambush(99, Point(14, -3), rng, player_level=5, turn_counter=412)

    expected_seed = ambush_encounter_seed(99, 14, -3, 123456)
    assert plan.seed == expected_seed
    assert plan.ambush_id == f"ambush_14_-3_412_{expected_seed & 0xFFFF}"
    assert plan.depth == 3
    assert plan.origin == Point(14, -3)
    assert rng.calls == [(0, 0x7FFFFFFF)]


@pytest.mark.parametrize("level,depth", [(1, 1), (2, 1), (3, 2), (8, 4)])
def test_plan_depth_follows_player_level(level, depth):
    assert plan_ambush(1, Point(0, 0), Rng(5), level, 0).depth == depth


def test_repeat_ambush_on_same_tile_differs():
    rng = Rng(31337)
    first = plan_ambush(1, Point(4, 4), rng, 2, 10)
    second = plan_ambush(1, Point(4, 4), rng, 2, 10)
    assert first.seed != second.seed


def test_victory_gold(stub_rng):
    assert ambush_victory_gold(3, stub_rng([7])) == 29
    assert ambush_victory_gold(1, stub_rng([0])) == 14
