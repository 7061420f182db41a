from .generator import MonsterGenerator, MonsterType
from .names import EnglishMonsterNames, MonsterNames

__all__ = ["MonsterGenerator", "MonsterType", "MonsterNames", "EnglishMonsterNames"]
