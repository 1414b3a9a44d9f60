"""
YAML-backed shop registry.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

import yaml
from pydantic import ValidationError

from plus_shipping.core.config import get_settings
from plus_shipping.db.schemas import ShopRecord, ShopsFile
from plus_shipping.domain.models import KubernetesEnvironment, ShippingCredentials, Shop
from plus_shipping.domain.value_objects import ShopifyShopId
from plus_shipping.utils.error_handler import ConfigurationException, NotFoundException

logger = logging.getLogger(__name__)


class YamlShopRepository:
    """
    Reads shops from ``shops.yaml``.

    The file is parsed once per repository instance and cached; edits made
    while the process runs are not picked up.
    """

    def __init__(self, config_path: Optional[str | Path] = None):
        self.config_path = Path(config_path or get_settings().SHOPS_CONFIG_PATH)
        self._cache: Optional[ShopsFile] = None

    def find_by_name(self, name: str) -> Shop:
        """
        Get a shop by its registry name.

        Args:
            name: Key under ``shops:`` (e.g. "81-test-store-plan-silver")

        Returns:
            Shop: Validated shop aggregate

        Raises:
            NotFoundException: If no shop is registered under that name
            ConfigurationException: If the registry cannot be read
        """
        config = self._load()
        record = config.shops.get(name)
        if record is None:
            raise NotFoundException(
                f'Shop "{name}" not found', resource="shop", key=name, available=sorted(config.shops)
            )
        return self._to_domain(record)

    def list_all(self) -> Dict[str, Shop]:
        config = self._load()
        return {name: self._to_domain(record) for name, record in config.shops.items()}

    def _load(self) -> ShopsFile:
        if self._cache is not None:
            return self._cache

        if not self.config_path.is_file():
            raise ConfigurationException(
                f"Shops config file not found: {self.config_path}", path=str(self.config_path)
            )

        try:
            with self.config_path.open(encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
            config = ShopsFile.model_validate(raw)
        except yaml.YAMLError as e:
            raise ConfigurationException(
                f"Invalid YAML in shops config {self.config_path}: {e}", path=str(self.config_path)
            ) from e
        except ValidationError as e:
            raise ConfigurationException(
                f"Invalid shops config {self.config_path}: {e}", path=str(self.config_path)
            ) from e

        logger.debug(f"Loaded {len(config.shops)} shops from {self.config_path}")
        self._cache = config
        return config

    @staticmethod
    def _to_domain(record: ShopRecord) -> Shop:
        environments = {
            name: KubernetesEnvironment(
                namespace=env.namespace,
                context=env.context,
                db_name=env.db_name,
                db_config_map=env.db_config_map,
                db_secret=env.db_secret,
            )
            for name, env in record.environments.items()
        }

        credentials = record.credentials
        shipping_credentials = (
            ShippingCredentials(
                sagawa_detail_id=credentials.sagawa_detail_id,
                yamato_detail_id=credentials.yamato_detail_id,
                japan_post_detail_id=credentials.japan_post_detail_id,
            )
            if credentials
            else ShippingCredentials()
        )

        return Shop.create(
            shopify_shop_id=ShopifyShopId.from_value(record.shopify_shop_id),
            store_id=record.store_id,
            environments=environments,
            credentials=shipping_credentials,
        )
