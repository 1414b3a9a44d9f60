"""
Consignor aggregate: a shop shipping from one distribution center.
"""

from dataclasses import dataclass
from typing import Any

from plus_shipping.domain.value_objects import ApplicationStatus

from .location import Location
from .shop import Shop

CONSIGNOR_COLUMNS = (
    "shopify_shop_id",
    "store_id",
    "japan_post_consignor_detail_id",
    "sagawa_consignor_detail_id",
    "yamato_consignor_detail_id",
    "print_name",
    "location_name",
    "postal_code",
    "prefecture",
    "city",
    "address",
    "building",
    "tel",
    "delivery_usage",
    "application_status",
    "application_status_sagawa",
    "application_status_yamato",
    "deletion_requested",
)


@dataclass(frozen=True)
class Consignor:
    """
    Consignor (shipping origin) record to be inserted into ``consignors``.

    Use ``create_test_data`` or ``create_for_production`` rather than the
    constructor: they decide the status and carrier ids together.
    """

    shop: Shop
    location: Location
    status: ApplicationStatus
    sagawa_detail_id: int = 0
    yamato_detail_id: int = 0
    japan_post_detail_id: int = 0

    @classmethod
    def create_test_data(cls, shop: Shop, location: Location) -> "Consignor":
        """Accepted consignor reusing the shop's existing carrier detail ids."""
        credentials = shop.get_credentials()
        return cls(
            shop=shop,
            location=location,
            status=ApplicationStatus.accepted(),
            sagawa_detail_id=credentials.sagawa_detail_id,
            yamato_detail_id=credentials.yamato_detail_id,
            japan_post_detail_id=credentials.japan_post_detail_id,
        )

    @classmethod
    def create_for_production(cls, shop: Shop, location: Location) -> "Consignor":
        """Consignor awaiting carrier applications, with no detail ids."""
        return cls(shop=shop, location=location, status=ApplicationStatus.not_applied())

    def can_deploy(self) -> bool:
        if not self.status.is_accepted:
            return False
        return self.sagawa_detail_id > 0 or self.yamato_detail_id > 0 or self.japan_post_detail_id > 0

    def to_row(self) -> dict[str, Any]:
        """Column -> value mapping in ``consignors`` column order."""
        status = str(self.status)
        location = self.location
        return {
            "shopify_shop_id": str(self.shop.shopify_shop_id),
            "store_id": self.shop.store_id,
            "japan_post_consignor_detail_id": self.japan_post_detail_id,
            "sagawa_consignor_detail_id": self.sagawa_detail_id,
            "yamato_consignor_detail_id": self.yamato_detail_id,
            "print_name": "",
            "location_name": location.name,
            "postal_code": str(location.postal_code),
            "prefecture": str(location.prefecture),
            "city": location.city,
            "address": location.address1,
            "building": location.address2,
            "tel": str(location.phone),
            "delivery_usage": 1,
            # The status is duplicated into the per-carrier legacy columns
            "application_status": status,
            "application_status_sagawa": status,
            "application_status_yamato": status,
            "deletion_requested": 0,
        }

    def to_sql(self) -> str:
        """
        Render the single-row INSERT statement.

        String values are quoted without escaping; every one of them comes
        from a validated value object or the location catalog.
        """
        row = self.to_row()
        columns = ",\n".join(f"  {column}" for column in CONSIGNOR_COLUMNS)
        values = ",\n".join(f"  {_literal(row[column])}" for column in CONSIGNOR_COLUMNS)
        return f"INSERT INTO consignors (\n{columns}\n) VALUES (\n{values}\n);"


def _literal(value: Any) -> str:
    if isinstance(value, str):
        return f"'{value}'"
    return str(value)
