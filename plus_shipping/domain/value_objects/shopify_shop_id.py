"""
ShopifyShopId value object (``<name>.myshopify.com``).
"""

import re
from dataclasses import dataclass

from plus_shipping.utils.error_handler import ValidationException

SHOPIFY_DOMAIN_SUFFIX = ".myshopify.com"
_SHOP_NAME = re.compile(r"[a-z0-9-]+")


@dataclass(frozen=True)
class ShopifyShopId:
    """
    Immutable Shopify shop domain.

    Example:
        >>> ShopifyShopId.from_value(" demo-store.myshopify.com ").shop_name
        'demo-store'
    """

    value: str

    def __post_init__(self) -> None:
        raw = self.value
        if not isinstance(raw, str) or not raw.strip():
            raise self._invalid("Invalid Shopify Shop ID: empty string", raw)

        shop_id = raw.strip()
        if not shop_id.endswith(SHOPIFY_DOMAIN_SUFFIX):
            raise self._invalid("Invalid Shopify Shop ID: must end with .myshopify.com", raw)

        shop_name = shop_id[: -len(SHOPIFY_DOMAIN_SUFFIX)]
        if not shop_name:
            raise self._invalid("Invalid Shopify Shop ID: shop name cannot be empty", raw)

        if not _SHOP_NAME.fullmatch(shop_name):
            raise self._invalid(
                "Invalid Shopify Shop ID: shop name must contain only lowercase letters, numbers, and hyphens",
                raw,
            )

        object.__setattr__(self, "value", shop_id)

    @staticmethod
    def _invalid(message: str, raw) -> ValidationException:
        return ValidationException(
            message, field="shopify_shop_id", invalid_value=raw, expected_format="<name>.myshopify.com"
        )

    @classmethod
    def from_value(cls, raw: str) -> "ShopifyShopId":
        return cls(raw)

    @property
    def shop_name(self) -> str:
        """Shop name without the .myshopify.com suffix."""
        return self.value[: -len(SHOPIFY_DOMAIN_SUFFIX)]

    @property
    def store_url(self) -> str:
        return f"https://{self.value}"

    def __str__(self) -> str:
        return self.value
