"""
Data access layer for consignor management.

- YamlShopRepository: shop registry (config/shops.yaml)
- JsonLocationRepository: distribution-center catalog (data/locations.json)
- FileSystemSQLRepository: SQL file output
- KubectlBroker: remote MySQL through kubectl and a worker pod
"""

from plus_shipping.db.location_catalog import JsonLocationRepository
from plus_shipping.db.shop_registry import YamlShopRepository
from plus_shipping.db.sql_file_repository import FileSystemSQLRepository

__all__ = ["FileSystemSQLRepository", "JsonLocationRepository", "YamlShopRepository"]
