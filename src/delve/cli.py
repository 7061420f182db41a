from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import BalanceConfig
from .dungeon.level import Dungeon
from .economy.restock import ShopRestocker
from .economy.shop import Shop, ShopEconomyEngine
from .errors import DelveError
from .logging_config import configure_logging
from .monsters.generator import MonsterGenerator
from .state import GameState
from .world.entities import CharacterClass, Entity, Point
from .world.player import create_player

logger = logging.getLogger(__name__)

ARENA_WIDTH = 24
ARENA_HEIGHT = 16


def _jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {k: _jsonable(v) for k, v in dataclasses.asdict(value).items()}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def _monster_summary(monster: Entity) -> Dict[str, Any]:
    return {
        "id": monster.id,
        "type": monster.monster_type,
        "name": monster.name,
        "glyph": monster.glyph,
        "pos": [monster.pos.x, monster.pos.y],
        "level": monster.level,
        "hp": monster.hp,
        "attack": monster.base_attack,
        "defense": monster.base_defense,
    }


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="delve",
        description="Deterministic roguelike simulation core: inspect seeded spawns and shop economies.",
    )
    parser.add_argument("--debug", action="store_true", help="Enable verbose debug logging.")
    parser.add_argument(
        "--balance",
        dest="balance_path",
        type=Path,
        default=None,
        help="Path to a balance YAML file overriding the packaged defaults.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    spawn = sub.add_parser("spawn", help="Spawn monsters into an open test arena and print them.")
    spawn.add_argument("--seed", type=int, required=True)
    spawn.add_argument("--depth", type=int, default=1)
    spawn.add_argument("--player-level", type=int, default=1)
    spawn.add_argument("--ambush", action="store_true", help="Use ambush placement and scaling.")

    shop = sub.add_parser("shop", help="Print the economy and prices of a shop at a given turn.")
    shop.add_argument("--world-seed", type=int, required=True)
    shop.add_argument("--x", type=int, default=0)
    shop.add_argument("--y", type=int, default=0)
    shop.add_argument("--turn", type=int, default=0)

    return parser.parse_args(argv)


def run_spawn(args: argparse.Namespace, balance: BalanceConfig) -> List[Dict[str, Any]]:
    player = create_player(CharacterClass.WARRIOR)
    player.level = args.player_level
    state = GameState(world_seed=args.seed, player=player)
    arena_id = f"arena_{args.seed}_{args.depth}"
    dungeon = Dungeon.open_arena(arena_id, ARENA_WIDTH, ARENA_HEIGHT, depth=args.depth)

    generator = MonsterGenerator(config=balance)
    if args.ambush:
        generator.spawn_ambush_monsters(state, dungeon, args.seed, args.player_level)
    else:
        generator.spawn_monsters_in_dungeon(state, dungeon, args.seed)
    return [_monster_summary(m) for m in state.entities]


def run_shop(args: argparse.Namespace, balance: BalanceConfig) -> Dict[str, Any]:
    state = GameState(world_seed=args.world_seed, player=create_player(CharacterClass.WARRIOR))
    shop = Shop(id=f"town_{args.x}_{args.y}", town_world_pos=Point(args.x, args.y))

    # Stock is whatever was put on the shelves at the start of this cycle.
    interval = balance.shop.restock_interval
    state.turn_counter = (args.turn // interval) * interval
    ShopRestocker(config=balance.shop).restock_shop(state, shop)
    state.turn_counter = args.turn

    pricing = ShopEconomyEngine(config=balance.shop).build_shop_pricing(state, shop)
    return {
        "shop": shop.id,
        "turn": args.turn,
        "economy": _jsonable(pricing.economy),
        "stock": [
            {"id": it.id, "name": it.name, "kind": it.kind.value, "value": it.value, "price": pricing.buy_prices[it.id]}
            for it in state.items
            if it.id in pricing.buy_prices
        ],
    }


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.debug else None)

    try:
        balance = BalanceConfig.load(user_path=args.balance_path)
        if args.command == "spawn":
            data: Any = run_spawn(args, balance)
        else:
            data = run_shop(args, balance)
    except DelveError as exc:
        logger.error("%s", exc)
        return 2

    # Print JSON summary so it can be diffed across runs
    print(json.dumps(data, indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
