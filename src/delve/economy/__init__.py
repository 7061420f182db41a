from .restock import ShopRestocker, restock_shop
from .shop import Shop, ShopEconomy, ShopEconomyEngine, ShopPricing, ShopSpecialty

__all__ = [
    "Shop",
    "ShopEconomy",
    "ShopEconomyEngine",
    "ShopPricing",
    "ShopSpecialty",
    "ShopRestocker",
    "restock_shop",
]
