"""Catalogue entities: products, combos, gifts and highlight slots."""

from .gift import GiftProduct
from .highlight import BestSellers, ItemReference, ProductOfTheDay
from .priced import Priced
from .product import ComboProduct, Product, ProductFaq, ProductVariant

__all__ = [
    "BestSellers",
    "ComboProduct",
    "GiftProduct",
    "ItemReference",
    "Priced",
    "Product",
    "ProductFaq",
    "ProductOfTheDay",
    "ProductVariant",
]
