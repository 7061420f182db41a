"""Read-only view of a generated dungeon level.

Carving lives with the map-generation collaborator. This module only holds the
records the simulation core consumes plus the reference floor-point picker used
for encounter placement.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence

from ..core.rng import Rng
from ..world.entities import Point

logger = logging.getLogger(__name__)


class DungeonTile(str, Enum):
    WALL = "wall"
    FLOOR = "floor"
    BOSS_FLOOR = "bossFloor"
    STAIRS_UP = "stairsUp"
    STAIRS_DOWN = "stairsDown"


_GLYPHS = {
    "#": DungeonTile.WALL,
    ".": DungeonTile.FLOOR,
    "B": DungeonTile.BOSS_FLOOR,
    "<": DungeonTile.STAIRS_UP,
    ">": DungeonTile.STAIRS_DOWN,
}

FLOOR_POINT_ATTEMPTS = 2000


@dataclass
class Dungeon:
    id: str
    base_id: str
    depth: int
    width: int
    height: int
    tiles: List[DungeonTile]
    stairs_up: Point
    stairs_down: Point

    def __post_init__(self) -> None:
        if self.depth < 0:
            raise ValueError("depth must be >= 0")
        if len(self.tiles) != self.width * self.height:
            raise ValueError(
                f"tile count {len(self.tiles)} does not match {self.width}x{self.height}"
            )

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, x: int, y: int) -> DungeonTile:
        return self.tiles[y * self.width + x]

    def is_wall(self, x: int, y: int) -> bool:
        return self.tile_at(x, y) is DungeonTile.WALL

    def is_spawnable(self, x: int, y: int) -> bool:
        return self.tile_at(x, y) in (DungeonTile.FLOOR, DungeonTile.BOSS_FLOOR)

    @classmethod
    def from_rows(cls, rows: Sequence[str], dungeon_id: str, depth: int, base_id: Optional[str] = None) -> "Dungeon":
        """Build a level from ASCII rows (``#`` wall, ``.`` floor, ``<``/``>`` stairs, ``B`` boss floor).

        A level without explicit stairs gets both stairs at the first floor tile.
        """
        if not rows:
            raise ValueError("rows must not be empty")
        width = len(rows[0])
        tiles: List[DungeonTile] = []
        stairs_up: Optional[Point] = None
        stairs_down: Optional[Point] = None
        first_floor: Optional[Point] = None
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"row {y} has width {len(row)}, expected {width}")
            for x, ch in enumerate(row):
                try:
                    tile = _GLYPHS[ch]
                except KeyError as e:
                    raise ValueError(f"Unknown tile glyph {ch!r} at {x},{y}") from e
                tiles.append(tile)
                if tile is DungeonTile.STAIRS_UP:
                    stairs_up = Point(x, y)
                elif tile is DungeonTile.STAIRS_DOWN:
                    stairs_down = Point(x, y)
                elif tile is DungeonTile.FLOOR and first_floor is None:
                    first_floor = Point(x, y)
        fallback = first_floor or Point(0, 0)
        return cls(
            id=dungeon_id,
            base_id=base_id or dungeon_id,
            depth=depth,
            width=width,
            height=len(rows),
            tiles=tiles,
            stairs_up=stairs_up or fallback,
            stairs_down=stairs_down or fallback,
        )

    @classmethod
    def open_arena(cls, dungeon_id: str, width: int, height: int, depth: int) -> "Dungeon":
        """Walled rectangle of floor with stairs up at (1, 1) and stairs down opposite."""
        if width < 4 or height < 4:
            raise ValueError("arena must be at least 4x4")
        rows = []
        for y in range(height):
            if y in (0, height - 1):
                rows.append("#" * width)
            else:
                rows.append("#" + "." * (width - 2) + "#")
        rows[1] = "#<" + rows[1][2:]
        last = rows[height - 2]
        rows[height - 2] = last[: width - 2] + ">#"
        return cls.from_rows(rows, dungeon_id=dungeon_id, depth=depth)


FloorPointSource = Callable[[Dungeon, int], Point]


def random_floor_point(dungeon: Dungeon, seed: int) -> Point:
    """Pick a floor tile from the stream seeded by ``seed``.

    Falls back to the down stairs when no floor is found.
    """
    rng = Rng(seed)
    for _ in range(FLOOR_POINT_ATTEMPTS):
        x = rng.next_int(1, dungeon.width - 1)
        y = rng.next_int(1, dungeon.height - 1)
        if dungeon.is_spawnable(x, y):
            return Point(x, y)
    logger.debug("No floor tile found in %s after %d draws; using stairs down", dungeon.id, FLOOR_POINT_ATTEMPTS)
    return dungeon.stairs_down


__all__ = ["DungeonTile", "Dungeon", "FloorPointSource", "random_floor_point", "FLOOR_POINT_ATTEMPTS"]
