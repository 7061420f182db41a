import pytest

from delve.core.rng import Rng
from delve.core.seeding import ambush_spawn_seed, monster_spawn_seed, spawn_point_seed
from delve.dungeon.level import Dungeon, random_floor_point
from delve.monsters.generator import MonsterGenerator, MonsterType
from delve.world.entities import EntityKind, MapKind, Point

LEVEL_FLOORS = {"slime": 2, "goblin": 3, "wraith": 4, "orc": 5}


class TaggedNames:
    def monster_name(self, key):
        return f"name:{key}"


def _spawn(game_state, dungeon, seed, **kwargs):
    gen = MonsterGenerator(**kwargs)
    gen.spawn_monsters_in_dungeon(game_state, dungeon, seed)
    return game_state.entities


def test_depth_one_level_one_spawns_nine(game_state, arena):
    monsters = _spawn(game_state, arena, 42)
    assert len(monsters) == 9
    assert [m.id for m in monsters] == [f"m_arena_{i}" for i in range(9)]


def test_monster_count_caps_with_depth():
    gen = MonsterGenerator()
    assert gen.monster_count(0) == 7
    assert gen.monster_count(3) == 13
    assert gen.monster_count(7) == 21
    assert gen.monster_count(30) == 21


def test_spawn_is_deterministic(game_state, arena):
    from delve.state import GameState

    other = GameState(world_seed=game_state.world_seed, player=game_state.player)
    first = _spawn(game_state, arena, 4242)
    second = _spawn(other, arena, 4242)
    assert first == second


def test_spawn_follows_type_and_position_streams(game_state):
    dungeon = Dungeon.open_arena("d3", 30, 20, depth=3)
    seed = 777
    monsters = _spawn(game_state, dungeon, seed)

    gen = MonsterGenerator()
    rolls = Rng(monster_spawn_seed(seed))
    for i, m in enumerate(monsters):
        expected_type = gen.monster_type_for_roll(rolls.next_int(0, 100), dungeon.depth)
        assert m.monster_type == expected_type.value
        assert m.pos == random_floor_point(dungeon, spawn_point_seed(seed, i))


def test_spawned_monsters_respect_invariants(game_state):
    game_state.player.level = 6
    dungeon = Dungeon.open_arena("deep", 30, 20, depth=5)
    monsters = _spawn(game_state, dungeon, 99)
    assert monsters
    for m in monsters:
        assert m.kind is EntityKind.MONSTER
        assert m.hp == m.max_hp
        assert m.level >= LEVEL_FLOORS[m.monster_type]
        assert m.inventory == []
        assert m.equipment.weapon_item_id is None and m.equipment.armor_item_id is None
        assert m.map_ref.kind is MapKind.DUNGEON and m.map_ref.dungeon_id == "deep"
        assert dungeon.is_spawnable(m.pos.x, m.pos.y)


def test_names_come_from_injected_resolver(game_state, arena):
    monsters = _spawn(game_state, arena, 5, names=TaggedNames())
    assert all(m.name == f"name:{m.monster_type}" for m in monsters)


def test_floor_point_source_is_injected(game_state, arena):
    seen = []

    def fixed(dungeon, seed):
        seen.append(seed)
        return Point(3, 4)

    monsters = _spawn(game_state, arena, 100, floor_points=fixed)
    assert seen == [spawn_point_seed(100, i) for i in range(len(monsters))]
    assert all(m.pos == Point(3, 4) for m in monsters)


@pytest.mark.parametrize(
    "roll,depth,expected",
    [
        (0, 0, MonsterType.SLIME),
        (29, 5, MonsterType.SLIME),
        (30, 0, MonsterType.GOBLIN),
        (59, 1, MonsterType.GOBLIN),
        (60, 1, MonsterType.ORC),
        (81, 1, MonsterType.ORC),
        (60, 2, MonsterType.WRAITH),
        (81, 2, MonsterType.WRAITH),
        (82, 2, MonsterType.ORC),
        (99, 9, MonsterType.ORC),
    ],
)
def test_type_table(roll, depth, expected):
    assert MonsterGenerator().monster_type_for_roll(roll, depth) is expected


@pytest.mark.parametrize(
    "player_level,depth,expected",
    [(1, 1, 1), (1, 0, 1), (2, 0, 1), (4, 0, 2), (6, 4, 5)],
)
def test_monster_level_weighting(player_level, depth, expected):
    assert MonsterGenerator().monster_level(player_level, depth) == expected


def test_create_monster_stats_and_specials():
    gen = MonsterGenerator()
    pos = Point(1, 1)

    goblin = gen.create_monster(MonsterType.GOBLIN, 5, "d", 0, pos)
    assert (goblin.hp, goblin.base_attack, goblin.base_defense, goblin.level) == (23, 7, 1, 5)
    assert goblin.glyph == "g"
    assert goblin.status_effects is None and goblin.special_cooldown is None

    slime = gen.create_monster(MonsterType.SLIME, 1, "d", 1, pos)
    assert (slime.hp, slime.base_attack, slime.base_defense, slime.level) == (7, 1, 0, 2)

    wraith = gen.create_monster(MonsterType.WRAITH, 1, "d", 2, pos)
    assert (wraith.hp, wraith.base_attack, wraith.base_defense, wraith.level) == (12, 3, 1, 4)
    assert wraith.status_effects == [] and wraith.special_cooldown == 0
    assert wraith.glyph == "w"

    orc = gen.create_monster(MonsterType.ORC, 1, "d", 3, pos)
    assert (orc.hp, orc.base_attack, orc.base_defense, orc.level) == (16, 4, 1, 5)
    assert orc.status_effects == [] and orc.special_cooldown is None
    assert orc.glyph == "O"


@pytest.mark.parametrize("player_level,expected", [(1, 3), (2, 4), (4, 5), (8, 7), (30, 7)])
def test_ambush_size(player_level, expected):
    assert MonsterGenerator().ambush_size(player_level) == expected


def test_ambush_placement_unique_and_off_stairs(game_state, arena):
    gen = MonsterGenerator()
    gen.spawn_ambush_monsters(game_state, arena, 31337, player_level=9)
    monsters = game_state.entities

    assert len(monsters) == 7
    positions = [m.pos for m in monsters]
    assert len(set(positions)) == len(positions)
    assert arena.stairs_up not in positions


def test_ambush_types_use_ambush_stream_and_player_depth(game_state, arena):
    seed = 2468
    gen = MonsterGenerator()
    gen.spawn_ambush_monsters(game_state, arena, seed, player_level=5)

    rolls = Rng(ambush_spawn_seed(seed))
    depth = 3  # (5 + 1) // 2
    for m in game_state.entities:
        assert m.monster_type == gen.monster_type_for_roll(rolls.next_int(0, 100), depth).value
        assert m.level >= gen.monster_level(5, depth)


def test_ambush_fallback_beside_stairs(game_state):
    dungeon = Dungeon.from_rows(["#####", "#...#", "#.<.#", "#...#", "#####"], dungeon_id="tiny", depth=1)
    calls = []

    def always_stairs(d, seed):
        calls.append(seed)
        return d.stairs_up

    MonsterGenerator(floor_points=always_stairs).spawn_ambush_monsters(game_state, dungeon, 1, player_level=1)

    assert [m.pos for m in game_state.entities] == [Point(3, 2), Point(1, 2), Point(3, 2)]
    assert len(calls) == 3 * 200


def test_ambush_fallback_moves_vertically_when_walled(game_state):
    dungeon = Dungeon.from_rows(["#####", "##.##", "##<##", "##.##", "#####"], dungeon_id="shaft", depth=1)

    MonsterGenerator(floor_points=lambda d, s: d.stairs_up).spawn_ambush_monsters(
        game_state, dungeon, 1, player_level=1
    )

    assert [m.pos for m in game_state.entities] == [Point(2, 3), Point(2, 1), Point(2, 3)]


def test_ambush_used_set_is_local_to_each_call(game_state, arena):
    gen = MonsterGenerator()
    gen.spawn_ambush_monsters(game_state, arena, 55, player_level=1)
    first = [m.pos for m in game_state.entities]
    game_state.entities.clear()
    gen.spawn_ambush_monsters(game_state, arena, 55, player_level=1)
    assert [m.pos for m in game_state.entities] == first
