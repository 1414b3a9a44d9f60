"""Shared fixtures for the consignor test suite."""

import pytest

from plus_shipping.domain.models import KubernetesEnvironment, Location, ShippingCredentials, Shop
from plus_shipping.domain.value_objects import PhoneNumber, PostalCode, Prefecture, ShopifyShopId

SHOPS_YAML = """\
shops:
  81-test-store-plan-silver:
    shopify_shop_id: 81-test-store-plan-silver.myshopify.com
    store_id: 404
    environments:
      tes:
        namespace: store
        context: shopifyshipping-tes-main
        db_name: store_management
        db_config_map: store-management-env
        db_secret: store-management-env
    credentials:
      sagawa_detail_id: 556
      yamato_detail_id: 528
      japan_post_detail_id: 0
  no-credentials-shop:
    shopify_shop_id: no-credentials-shop.myshopify.com
    store_id: 7
    environments: {}
"""

LOCATIONS_JSON = """\
[
  {"area": "hokkaido", "name": "北海道配送センター", "address1": "北3条西6丁目", "address2": "",
   "city": "札幌市中央区", "province": "北海道", "province_code": "JP-01", "zip": "060-8588",
   "country_code": "JP", "phone": "011-231-4111"},
  {"area": "kanto", "name": "関東配送センター", "address1": "西新宿2-8-1", "address2": "",
   "city": "新宿区", "province": "東京都", "province_code": "JP-13", "zip": "163-8001",
   "country_code": "JP", "phone": "03-5321-1111"}
]
"""


@pytest.fixture
def tes_environment():
    return KubernetesEnvironment(
        namespace="store",
        context="shopifyshipping-tes-main",
        db_name="store_management",
        db_config_map="store-management-env",
        db_secret="store-management-env",
    )


@pytest.fixture
def shop(tes_environment):
    return Shop.create(
        shopify_shop_id=ShopifyShopId.from_value("81-test-store-plan-silver.myshopify.com"),
        store_id=404,
        environments={"tes": tes_environment},
        credentials=ShippingCredentials(sagawa_detail_id=556, yamato_detail_id=528, japan_post_detail_id=0),
    )


@pytest.fixture
def hokkaido():
    return Location.create(
        area="hokkaido",
        name="北海道配送センター",
        postal_code=PostalCode.from_value("060-8588"),
        prefecture=Prefecture.from_value("北海道"),
        city="札幌市中央区",
        address1="北3条西6丁目",
        address2="",
        phone=PhoneNumber.from_value("011-231-4111"),
    )


@pytest.fixture
def kanto():
    return Location.create(
        area="kanto",
        name="関東配送センター",
        postal_code=PostalCode.from_value("163-8001"),
        prefecture=Prefecture.from_value("東京都"),
        city="新宿区",
        address1="西新宿2-8-1",
        address2="",
        phone=PhoneNumber.from_value("03-5321-1111"),
    )


@pytest.fixture
def shops_yaml(tmp_path):
    path = tmp_path / "shops.yaml"
    path.write_text(SHOPS_YAML, encoding="utf-8")
    return path


@pytest.fixture
def locations_json(tmp_path):
    path = tmp_path / "locations.json"
    path.write_text(LOCATIONS_JSON, encoding="utf-8")
    return path
