"""Read-only views of records submitted from the storefront."""

from src.oilpress_admin.api.http.routers.resource import Resource, build_router
from src.oilpress_admin.entities import collections
from src.oilpress_admin.entities.inbox import BulkOrder, ContactMessage, Visitor

BULK_ORDERS = Resource(
    collection=collections.BULK_ORDERS,
    model=BulkOrder,
    label="Bulk order",
    search_fields=("first_name", "email", "company_name", "product_name"),
    filter_fields=("state",),
    read_only=True,
)

CONTACT_MESSAGES = Resource(
    collection=collections.CONTACT_MESSAGES,
    model=ContactMessage,
    label="Contact message",
    search_fields=("first_name", "last_name", "email", "message"),
    read_only=True,
)

VISITORS = Resource(
    collection=collections.USERS,
    model=Visitor,
    label="Visitor",
    search_fields=("name", "email", "phone"),
    read_only=True,
)

bulk_orders_router = build_router(BULK_ORDERS)
contact_messages_router = build_router(CONTACT_MESSAGES)
visitors_router = build_router(VISITORS)
