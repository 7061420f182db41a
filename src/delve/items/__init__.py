from .generation import ItemGenerator
from .models import Item, ItemKind, Rarity, index_items

__all__ = ["Item", "ItemKind", "Rarity", "ItemGenerator", "index_items"]
