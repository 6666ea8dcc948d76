"""Records submitted from the storefront."""

from .bulk_order import BulkOrder
from .contact_message import ContactMessage
from .review import Review
from .visitor import Visitor

__all__ = ["BulkOrder", "ContactMessage", "Review", "Visitor"]
