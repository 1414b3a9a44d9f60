"""Integration tests for the YAML shop registry."""

from pathlib import Path

import pytest

from plus_shipping.db.shop_registry import YamlShopRepository
from plus_shipping.utils.error_handler import ConfigurationException, ErrorCode, NotFoundException, ValidationException

PROJECT_ROOT = Path(__file__).resolve().parents[2]


class TestBundledRegistry:
    """Tests against config/shops.yaml."""

    def test_test_store(self):
        repository = YamlShopRepository(PROJECT_ROOT / "config" / "shops.yaml")

        shop = repository.find_by_name("81-test-store-plan-silver")

        assert str(shop.shopify_shop_id) == "81-test-store-plan-silver.myshopify.com"
        assert shop.store_id == 404
        env = shop.get_environment("tes")
        assert env.namespace == "store"
        assert env.context.endswith("cluster/shopifyshipping-tes-main")
        assert env.db_name == "store_management"
        assert env.db_config_map == "store-management-env"
        credentials = shop.get_credentials()
        assert (credentials.sagawa_detail_id, credentials.yamato_detail_id, credentials.japan_post_detail_id) == (
            556,
            528,
            0,
        )


class TestYamlShopRepository:
    """Tests with temporary registry files."""

    def test_list_all_in_file_order(self, shops_yaml):
        repository = YamlShopRepository(shops_yaml)

        assert list(repository.list_all()) == ["81-test-store-plan-silver", "no-credentials-shop"]
        shops = repository.list_all()
        assert shops["no-credentials-shop"].store_id == 7
        assert not shops["no-credentials-shop"].has_test_credentials()
        assert dict(shops["no-credentials-shop"].environments) == {}

    def test_unknown_shop(self, shops_yaml):
        with pytest.raises(NotFoundException) as exc_info:
            YamlShopRepository(shops_yaml).find_by_name("ghost")

        assert str(exc_info.value) == 'Shop "ghost" not found'
        assert exc_info.value.error_code == ErrorCode.SHOP_NOT_FOUND
        assert exc_info.value.available == ["81-test-store-plan-silver", "no-credentials-shop"]

    def test_null_credential_ids_default_to_zero(self, tmp_path):
        path = tmp_path / "shops.yaml"
        path.write_text(
            "shops:\n"
            "  demo:\n"
            "    shopify_shop_id: demo.myshopify.com\n"
            "    store_id: 1\n"
            "    credentials:\n"
            "      sagawa_detail_id: null\n"
            "      yamato_detail_id: 12\n",
            encoding="utf-8",
        )

        credentials = YamlShopRepository(path).find_by_name("demo").get_credentials()

        assert credentials.sagawa_detail_id == 0
        assert credentials.yamato_detail_id == 12
        assert credentials.japan_post_detail_id == 0

    def test_registry_is_cached(self, shops_yaml):
        repository = YamlShopRepository(shops_yaml)
        repository.find_by_name("81-test-store-plan-silver")

        shops_yaml.unlink()

        assert repository.find_by_name("81-test-store-plan-silver").store_id == 404

    def test_empty_file(self, tmp_path):
        path = tmp_path / "shops.yaml"
        path.write_text("", encoding="utf-8")

        assert YamlShopRepository(path).list_all() == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationException, match="Shops config file not found"):
            YamlShopRepository(tmp_path / "missing.yaml").list_all()

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "shops.yaml"
        path.write_text("shops: [unclosed", encoding="utf-8")

        with pytest.raises(ConfigurationException, match="Invalid YAML"):
            YamlShopRepository(path).list_all()

    def test_missing_required_field(self, tmp_path):
        path = tmp_path / "shops.yaml"
        path.write_text("shops:\n  demo:\n    store_id: 1\n", encoding="utf-8")

        with pytest.raises(ConfigurationException, match="Invalid shops config"):
            YamlShopRepository(path).list_all()

    def test_domain_rules_apply_on_lookup(self, tmp_path):
        path = tmp_path / "shops.yaml"
        path.write_text("shops:\n  demo:\n    shopify_shop_id: demo.example.com\n    store_id: 1\n", encoding="utf-8")

        with pytest.raises(ValidationException, match="must end with .myshopify.com"):
            YamlShopRepository(path).find_by_name("demo")
