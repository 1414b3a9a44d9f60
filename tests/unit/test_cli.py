"""Unit tests for the plus-shipping command line."""

import io
from unittest.mock import AsyncMock, MagicMock

import pytest
from rich.console import Console

from plus_shipping import main as cli
from plus_shipping.core.config import Settings
from plus_shipping.domain.models import ContextToken, DatabaseCredentials
from plus_shipping.services.consignors.wiring import create_consignor_services

VERIFY_OUTPUT = (
    "location_name\tprefecture\tapplication_status_yamato\n"
    "北海道配送センター\t北海道\taccepted\n"
    "関東配送センター\t東京都\taccepted\n"
)


@pytest.fixture
def output(monkeypatch):
    buffer = io.StringIO()
    monkeypatch.setattr(cli, "console", Console(file=buffer, width=200))
    return buffer


@pytest.fixture
def broker():
    broker = MagicMock()
    broker.switch_context = AsyncMock(return_value=ContextToken("operator-ctx", "shopifyshipping-tes-main"))
    broker.ensure_worker_pod = AsyncMock(return_value="temp-mysql-client")
    broker.get_credentials = AsyncMock(
        return_value=DatabaseCredentials("db.internal", 3306, "app", "store_management", "s3cret")
    )
    broker.exec_sql = AsyncMock(return_value="")
    broker.restore_context = AsyncMock()
    return broker


@pytest.fixture
def services(tmp_path, shops_yaml, locations_json, broker):
    return create_consignor_services(
        Settings(SQL_OUTPUT_DIR=str(tmp_path / "sql-out")),
        shops_config_path=shops_yaml,
        locations_data_path=locations_json,
        broker=broker,
    )


class TestShopCommands:
    """Tests for shops and shop-info."""

    @pytest.mark.asyncio
    async def test_shops_lists_registry(self, services, output):
        assert await cli.main(["shops"], services=services) == 0

        text = output.getvalue()
        assert "81-test-store-plan-silver" in text
        assert "no-credentials-shop" in text
        assert "404" in text

    @pytest.mark.asyncio
    async def test_shop_info(self, services, output):
        assert await cli.main(["shop-info", "-s", "81-test-store-plan-silver"], services=services) == 0

        text = output.getvalue()
        assert "https://81-test-store-plan-silver.myshopify.com" in text
        assert "556" in text
        assert "shopifyshipping-tes-main" in text

    @pytest.mark.asyncio
    async def test_unknown_shop_exits_1(self, services, output):
        assert await cli.main(["shop-info", "-s", "ghost"], services=services) == 1
        assert 'Shop "ghost" not found' in output.getvalue()


class TestConsignorCommands:
    """Tests for consignor generate, deploy and rollback."""

    @pytest.mark.asyncio
    async def test_generate_writes_file(self, services, output, tmp_path):
        out_dir = tmp_path / "generated"

        code = await cli.main(
            ["consignor", "generate", "-s", "81-test-store-plan-silver", "-t", "-o", str(out_dir)], services=services
        )

        assert code == 0
        sql = (out_dir / "insert_test_consignors.sql").read_text(encoding="utf-8")
        assert sql.startswith("-- Plus Shipping 配送元データ登録SQL")
        assert sql.count("INSERT INTO consignors") == 2
        assert "accepted" in output.getvalue()

    @pytest.mark.asyncio
    async def test_generate_defaults_to_configured_output_dir(self, services, output, tmp_path):
        code = await cli.main(["consignor", "generate", "-s", "81-test-store-plan-silver"], services=services)

        assert code == 0
        assert (tmp_path / "sql-out" / "insert_consignors.sql").is_file()

    @pytest.mark.asyncio
    async def test_deploy_dry_run_prints_sql_only(self, services, output, broker):
        code = await cli.main(
            ["consignor", "deploy", "-s", "81-test-store-plan-silver", "-e", "tes", "--dry-run"], services=services
        )

        assert code == 0
        text = output.getvalue()
        assert "INSERT INTO consignors" in text
        assert "Dry run" in text
        broker.switch_context.assert_not_called()
        broker.exec_sql.assert_not_called()

    @pytest.mark.asyncio
    async def test_deploy_and_verify(self, services, output, broker):
        broker.exec_sql.side_effect = ["", VERIFY_OUTPUT]

        code = await cli.main(
            ["consignor", "deploy", "-s", "81-test-store-plan-silver", "-e", "tes", "-y"], services=services
        )

        assert code == 0
        text = output.getvalue()
        assert "Deployed 2 consignors to tes" in text
        assert "関東配送センター" in text
        assert broker.exec_sql.await_count == 2
        assert broker.restore_context.await_count == 2

    @pytest.mark.asyncio
    async def test_deploy_failure_exits_1(self, services, output, broker):
        broker.ensure_worker_pod.side_effect = RuntimeError("pod never became ready")

        code = await cli.main(
            ["consignor", "deploy", "-s", "81-test-store-plan-silver", "-e", "tes", "-y"], services=services
        )

        assert code == 1
        assert "pod never became ready" in output.getvalue()

    @pytest.mark.asyncio
    async def test_deploy_unknown_environment_exits_1(self, services, output, broker):
        code = await cli.main(
            ["consignor", "deploy", "-s", "81-test-store-plan-silver", "-e", "prd", "-y"], services=services
        )

        assert code == 1
        assert 'Environment "prd" not found' in output.getvalue()
        broker.switch_context.assert_not_called()

    @pytest.mark.asyncio
    async def test_deploy_cancelled_at_prompt(self, services, output, broker, monkeypatch):
        monkeypatch.setattr(cli.Confirm, "ask", MagicMock(return_value=False))

        code = await cli.main(
            ["consignor", "deploy", "-s", "81-test-store-plan-silver", "-e", "tes"], services=services
        )

        assert code == 0
        assert "Cancelled" in output.getvalue()
        broker.exec_sql.assert_not_called()

    @pytest.mark.asyncio
    async def test_rollback(self, services, output, broker):
        broker.exec_sql.return_value = "deleted_count\n2\n"

        code = await cli.main(
            ["consignor", "rollback", "-s", "81-test-store-plan-silver", "-e", "tes", "-y"], services=services
        )

        assert code == 0
        assert "Deleted 2 consignors from tes" in output.getvalue()
        assert "DELETE FROM consignors" in broker.exec_sql.call_args.args[0].sql


class TestParser:
    """Tests for argument parsing."""

    def test_deploy_requires_environment(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["consignor", "deploy", "-s", "81-test-store-plan-silver"])

    def test_deploy_flags(self):
        args = cli.build_parser().parse_args(
            ["consignor", "deploy", "-s", "x", "-e", "tes", "--production-data", "--dry-run"]
        )

        assert args.production_data is True
        assert args.dry_run is True
        assert args.yes is False
