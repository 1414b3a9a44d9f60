"""
Value objects for the domain layer.

Value objects are immutable objects that represent concepts
with no conceptual identity, only defined by their attributes.
"""

from .application_status import ApplicationStatus
from .phone_number import PhoneNumber
from .postal_code import PostalCode
from .prefecture import Prefecture
from .shopify_shop_id import ShopifyShopId

__all__ = ["ApplicationStatus", "PhoneNumber", "PostalCode", "Prefecture", "ShopifyShopId"]
