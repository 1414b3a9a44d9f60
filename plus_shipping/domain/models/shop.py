"""
Shop aggregate: a storefront with its cluster environments and carrier credentials.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping

from plus_shipping.domain.value_objects import ShopifyShopId
from plus_shipping.utils.error_handler import NotFoundException, ValidationException


@dataclass(frozen=True)
class KubernetesEnvironment:
    """
    Cluster coordinates of one deployment environment.

    Attributes:
        namespace: Namespace holding the worker pod, config map and secret
        context: kubectl context to switch to
        db_name: Database name in the remote MySQL
        db_config_map: Config map with DB_HOST, DB_USER, DB_PORT, DB_NAME
        db_secret: Secret with DB_PASSWORD
    """

    namespace: str
    context: str
    db_name: str
    db_config_map: str
    db_secret: str


@dataclass(frozen=True)
class ShippingCredentials:
    """Carrier contract detail ids; 0 means not provisioned."""

    sagawa_detail_id: int = 0
    yamato_detail_id: int = 0
    japan_post_detail_id: int = 0

    def __post_init__(self) -> None:
        for attr in ("sagawa_detail_id", "yamato_detail_id", "japan_post_detail_id"):
            value = getattr(self, attr)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ValidationException(
                    f"{attr} must be a non-negative integer", field=attr, invalid_value=value
                )

    @property
    def has_any(self) -> bool:
        return self.sagawa_detail_id > 0 or self.yamato_detail_id > 0 or self.japan_post_detail_id > 0


@dataclass(frozen=True)
class Shop:
    """
    Shop aggregate.

    Attributes:
        shopify_shop_id: Shopify domain of the shop
        store_id: Positive internal store id
        environments: Environment name -> cluster coordinates
        credentials: Carrier detail ids used for test data
    """

    shopify_shop_id: ShopifyShopId
    store_id: int
    environments: Mapping[str, KubernetesEnvironment] = field(default_factory=dict)
    credentials: ShippingCredentials = field(default_factory=ShippingCredentials)

    def __post_init__(self) -> None:
        if not isinstance(self.store_id, int) or isinstance(self.store_id, bool) or self.store_id <= 0:
            raise ValidationException(
                "Store ID must be a positive number", field="store_id", invalid_value=self.store_id
            )
        object.__setattr__(self, "environments", MappingProxyType(dict(self.environments)))

    def __hash__(self) -> int:
        return hash((self.shopify_shop_id, self.store_id))

    @classmethod
    def create(
        cls,
        shopify_shop_id: ShopifyShopId,
        store_id: int,
        environments: Mapping[str, KubernetesEnvironment],
        credentials: ShippingCredentials,
    ) -> "Shop":
        return cls(
            shopify_shop_id=shopify_shop_id,
            store_id=store_id,
            environments=environments,
            credentials=credentials,
        )

    def get_environment(self, name: str) -> KubernetesEnvironment:
        """
        Look up an environment by name.

        Raises:
            NotFoundException: If the shop has no such environment
        """
        env = self.environments.get(name)
        if env is None:
            raise NotFoundException(
                f'Environment "{name}" not found for shop {self.shopify_shop_id}',
                resource="environment",
                key=name,
                available=sorted(self.environments),
            )
        return env

    def has_environment(self, name: str) -> bool:
        return name in self.environments

    def get_credentials(self) -> ShippingCredentials:
        """Return a copy of the carrier credentials."""
        return replace(self.credentials)

    def has_test_credentials(self) -> bool:
        return self.credentials.has_any

    def to_dict(self) -> dict[str, Any]:
        return {
            "shopify_shop_id": str(self.shopify_shop_id),
            "store_id": self.store_id,
            "environments": {
                name: {
                    "namespace": env.namespace,
                    "context": env.context,
                    "db_name": env.db_name,
                    "db_config_map": env.db_config_map,
                    "db_secret": env.db_secret,
                }
                for name, env in self.environments.items()
            },
            "credentials": {
                "sagawa_detail_id": self.credentials.sagawa_detail_id,
                "yamato_detail_id": self.credentials.yamato_detail_id,
                "japan_post_detail_id": self.credentials.japan_post_detail_id,
            },
        }
