"""Unit tests for the Consignor aggregate and its SQL rendering."""

from plus_shipping.domain.models import CONSIGNOR_COLUMNS, Consignor, ShippingCredentials, Shop
from plus_shipping.domain.value_objects import ApplicationStatus


def shop_with_credentials(shop, **ids):
    return Shop.create(
        shopify_shop_id=shop.shopify_shop_id,
        store_id=shop.store_id,
        environments=dict(shop.environments),
        credentials=ShippingCredentials(**ids),
    )


class TestConsignorCreation:
    """Tests for the test-data and production constructors."""

    def test_test_data_copies_shop_credentials(self, shop, hokkaido):
        consignor = Consignor.create_test_data(shop, hokkaido)

        assert consignor.status is ApplicationStatus.ACCEPTED
        assert consignor.sagawa_detail_id == 556
        assert consignor.yamato_detail_id == 528
        assert consignor.japan_post_detail_id == 0
        assert consignor.can_deploy()

    def test_test_data_without_credentials_cannot_deploy(self, shop, hokkaido):
        consignor = Consignor.create_test_data(shop_with_credentials(shop), hokkaido)
        assert not consignor.can_deploy()

    def test_test_data_with_only_japan_post_can_deploy(self, shop, hokkaido):
        consignor = Consignor.create_test_data(shop_with_credentials(shop, japan_post_detail_id=9), hokkaido)
        assert consignor.can_deploy()

    def test_production_is_not_applied_with_zero_ids(self, shop, hokkaido):
        consignor = Consignor.create_for_production(shop, hokkaido)

        assert consignor.status is ApplicationStatus.NOT_APPLIED
        assert (consignor.sagawa_detail_id, consignor.yamato_detail_id, consignor.japan_post_detail_id) == (0, 0, 0)
        assert not consignor.can_deploy()


class TestConsignorSQL:
    """Tests for the INSERT statement."""

    def test_single_insert_with_all_values(self, shop, hokkaido):
        sql = Consignor.create_test_data(shop, hokkaido).to_sql()

        assert sql.count("INSERT INTO consignors") == 1
        for fragment in (
            "'81-test-store-plan-silver.myshopify.com'",
            "'北海道配送センター'",
            "'060-8588'",
            "'北海道'",
            "'札幌市中央区'",
            "'北3条西6丁目'",
            "'011-231-4111'",
        ):
            assert fragment in sql
        assert sql.count("'accepted'") == 3
        assert sql.endswith("\n);")

    def test_column_order(self, shop, hokkaido):
        sql = Consignor.create_test_data(shop, hokkaido).to_sql()
        columns_block = sql.split(") VALUES (")[0]

        positions = [columns_block.index(f"  {column}") for column in CONSIGNOR_COLUMNS]
        assert positions == sorted(positions)
        assert len(CONSIGNOR_COLUMNS) == 18

    def test_values_follow_column_order(self, shop, hokkaido):
        """Should write store id, then japan_post, sagawa, yamato ids, then an empty print name."""
        sql = Consignor.create_test_data(shop, hokkaido).to_sql()

        assert "  '81-test-store-plan-silver.myshopify.com',\n  404,\n  0,\n  556,\n  528,\n  ''," in sql
        assert "  1,\n  'accepted',\n  'accepted',\n  'accepted',\n  0\n);" in sql

    def test_production_sql(self, shop, kanto):
        sql = Consignor.create_for_production(shop, kanto).to_sql()

        assert sql.count("'not_applied'") == 3
        assert "556" not in sql
        assert "'東京都'" in sql
        assert "'163-8001'" in sql

    def test_to_row_maps_building_and_tel(self, shop, kanto):
        row = Consignor.create_for_production(shop, kanto).to_row()

        assert list(row) == list(CONSIGNOR_COLUMNS)
        assert row["address"] == "西新宿2-8-1"
        assert row["building"] == ""
        assert row["tel"] == "03-5321-1111"
        assert row["delivery_usage"] == 1
        assert row["deletion_requested"] == 0
