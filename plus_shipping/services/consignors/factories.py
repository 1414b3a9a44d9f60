"""
ConsignorFactory - builds consignor sets for a shop.
"""

from typing import Iterable

from plus_shipping.domain.models import Consignor, Location, Shop


class ConsignorFactory:
    """Factory for consignors in test-data or production mode."""

    @staticmethod
    def create(shop: Shop, location: Location, is_test_data: bool) -> Consignor:
        """
        Create one consignor.

        Test data is accepted and reuses the shop's carrier detail ids;
        production data starts as not_applied with every id set to 0.
        """
        if is_test_data:
            return Consignor.create_test_data(shop, location)
        return Consignor.create_for_production(shop, location)

    @staticmethod
    def create_for_locations(shop: Shop, locations: Iterable[Location], is_test_data: bool) -> list[Consignor]:
        """Create one consignor per location, preserving catalog order."""
        return [ConsignorFactory.create(shop, location, is_test_data) for location in locations]
