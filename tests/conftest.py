import sys
from pathlib import Path
from typing import Iterable, List

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from delve.dungeon.level import Dungeon  # noqa: E402
from delve.state import GameState  # noqa: E402
from delve.world.entities import CharacterClass  # noqa: E402
from delve.world.player import create_player  # noqa: E402


class StubRng:
    """Scripted stand-in for ``Rng`` that replays fixed ``next_int`` results.

    Raises if a value falls outside the requested range or if more draws are
    requested than were scripted, so tests also pin down how many draws happen.
    """

    def __init__(self, values: Iterable[int]) -> None:
        self.values: List[int] = list(values)
        self.calls: List[tuple] = []

    def next_int(self, min_inclusive: int, max_exclusive: int) -> int:
        if max_exclusive - min_inclusive <= 0:
            return min_inclusive
        if not self.values:
            raise AssertionError(f"Unexpected draw next_int({min_inclusive}, {max_exclusive})")
        value = self.values.pop(0)
        assert min_inclusive <= value < max_exclusive, (value, min_inclusive, max_exclusive)
        self.calls.append((min_inclusive, max_exclusive))
        return value

    def pick_one(self, items):
        return items[self.next_int(0, len(items))]

    @property
    def exhausted(self) -> bool:
        return not self.values


@pytest.fixture
def stub_rng():
    return StubRng


@pytest.fixture(autouse=True)
def _isolated_balance(monkeypatch, tmp_path):
    # Keep a developer's own balance overrides out of the tests.
    monkeypatch.delenv("DELVE_BALANCE_FILE", raising=False)
    monkeypatch.setattr("delve.config.user_balance_path", lambda: tmp_path / "no-such-balance.yaml")


@pytest.fixture
def arena():
    return Dungeon.open_arena("arena", 24, 16, depth=1)


@pytest.fixture
def game_state():
    return GameState(world_seed=1234, player=create_player(CharacterClass.WARRIOR))
