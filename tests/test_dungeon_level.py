import pytest

from delve.dungeon.level import Dungeon, DungeonTile, random_floor_point
from delve.world.entities import Point


def test_from_rows_reads_tiles_and_stairs():
    dungeon = Dungeon.from_rows(["#####", "#<.B#", "#..>#", "#####"], "d1", depth=2)

    assert (dungeon.width, dungeon.height) == (5, 4)
    assert dungeon.base_id == "d1"
    assert dungeon.stairs_up == Point(1, 1)
    assert dungeon.stairs_down == Point(3, 2)
    assert dungeon.tile_at(3, 1) is DungeonTile.BOSS_FLOOR
    assert dungeon.is_wall(0, 0)
    assert dungeon.is_spawnable(2, 1)
    assert dungeon.is_spawnable(3, 1)
    assert not dungeon.is_spawnable(1, 1)
    assert not dungeon.in_bounds(5, 0)


def test_missing_stairs_default_to_first_floor():
    dungeon = Dungeon.from_rows(["###", "#.#", "###"], "tiny", depth=1)
    assert dungeon.stairs_up == dungeon.stairs_down == Point(1, 1)


@pytest.mark.parametrize("rows", [["#?#"], ["###", "##"], []])
def test_bad_rows_rejected(rows):
    with pytest.raises(ValueError):
        Dungeon.from_rows(rows, "bad", depth=1)


def test_open_arena_layout():
    arena = Dungeon.open_arena("a", 6, 5, depth=1)
    assert arena.stairs_up == Point(1, 1)
    assert arena.stairs_down == Point(4, 3)
    assert arena.is_wall(0, 2) and arena.is_wall(5, 2)
    assert arena.is_spawnable(2, 2)


def test_open_arena_too_small():
    with pytest.raises(ValueError):
        Dungeon.open_arena("a", 3, 8, depth=1)


def test_random_floor_point_lands_on_floor(arena):
    for seed in range(50):
        p = random_floor_point(arena, seed)
        assert arena.is_spawnable(p.x, p.y)
    assert random_floor_point(arena, 7) == random_floor_point(arena, 7)


def test_random_floor_point_falls_back_to_stairs():
    solid = Dungeon.from_rows(["#####", "##>##", "#####"], "solid", depth=1)
    assert random_floor_point(solid, 3) == Point(2, 1)
