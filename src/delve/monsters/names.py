from __future__ import annotations

from typing import Dict, Mapping, Optional, Protocol


class MonsterNames(Protocol):
    """Resolves a monster or boss key to a display name."""

    def monster_name(self, key: str) -> str: ...


_ENGLISH: Dict[str, str] = {
    "slime": "Slime",
    "goblin": "Goblin",
    "wraith": "Wraith",
    "orc": "Orc",
    "boss_ruins": "Ruin Warden",
    "boss_caves": "Cavern Tyrant",
    "boss_crypt": "Crypt Lord",
}


class EnglishMonsterNames:
    """Default resolver with fixed English names; unknown keys come back title-cased."""

    def __init__(self, overrides: Optional[Mapping[str, str]] = None) -> None:
        self._names = dict(_ENGLISH)
        if overrides:
            self._names.update(overrides)

    def monster_name(self, key: str) -> str:
        return self._names.get(key, key.replace("_", " ").title())


__all__ = ["MonsterNames", "EnglishMonsterNames"]
