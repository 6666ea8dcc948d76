"""Product, combo product and gift product routers."""

from src.oilpress_admin.api.http.routers.resource import Resource, build_router
from src.oilpress_admin.entities import collections
from src.oilpress_admin.entities.catalog import ComboProduct, GiftProduct, Product

PRODUCTS = Resource(
    collection=collections.PRODUCTS,
    model=Product,
    label="Product",
    search_fields=("product_name", "category"),
    filter_fields=("status", "category", "size"),
)

COMBO_PRODUCTS = Resource(
    collection=collections.COMBO_PRODUCTS,
    model=ComboProduct,
    label="Combo product",
    search_fields=("product_name", "category"),
    filter_fields=("status", "category"),
)

GIFT_PRODUCTS = Resource(
    collection=collections.GIFT_PRODUCTS,
    model=GiftProduct,
    label="Gift product",
    search_fields=("product_name", "category", "contents"),
    filter_fields=("status", "category"),
)

products_router = build_router(PRODUCTS)
combo_products_router = build_router(COMBO_PRODUCTS)
gift_products_router = build_router(GIFT_PRODUCTS)
