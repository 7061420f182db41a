from .level import Dungeon, DungeonTile, FloorPointSource, random_floor_point

__all__ = ["Dungeon", "DungeonTile", "FloorPointSource", "random_floor_point"]
