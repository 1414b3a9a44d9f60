"""
Application use cases for consignor SQL generation and deployment.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from plus_shipping.domain.interfaces import (
    IConsignorRepository,
    ILocationRepository,
    ISqlFileRepository,
    IShopRepository,
)
from plus_shipping.domain.models import Consignor, Shop
from plus_shipping.domain.value_objects import ApplicationStatus
from plus_shipping.services.consignors.factories import ConsignorFactory

logger = logging.getLogger(__name__)

TEST_DATA_FILENAME = "insert_test_consignors.sql"
PRODUCTION_FILENAME = "insert_consignors.sql"


@dataclass(frozen=True)
class GenerateConsignorSQLOutput:
    filepath: Path
    consignor_count: int
    application_status: ApplicationStatus


@dataclass(frozen=True)
class DeployConsignorOutput:
    success: bool
    deployed_count: int
    environment: str
    error_message: Optional[str] = None


class GenerateConsignorSQLUseCase:
    """
    Renders a shop's consignors for every catalog location into a SQL file.

    Lookup and validation errors propagate to the caller.
    """

    def __init__(
        self,
        shop_repository: IShopRepository,
        location_repository: ILocationRepository,
        sql_file_repository: ISqlFileRepository,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.shop_repository = shop_repository
        self.location_repository = location_repository
        self.sql_file_repository = sql_file_repository
        self.clock = clock

    def build_sql(self, shop_name: str, is_test_data: bool) -> tuple[Shop, list[Consignor], str]:
        """
        Build the consignors and the full SQL script without writing it.

        Returns:
            tuple: (shop, consignors, header + statements)
        """
        shop = self.shop_repository.find_by_name(shop_name)
        locations = self.location_repository.find_all()
        consignors = ConsignorFactory.create_for_locations(shop, locations, is_test_data)

        sql = self.generate_header(shop, is_test_data) + "\n\n".join(c.to_sql() for c in consignors)
        return shop, consignors, sql

    def execute(
        self, shop_name: str, is_test_data: bool, output_dir: Optional[str | Path] = None
    ) -> GenerateConsignorSQLOutput:
        _, consignors, sql = self.build_sql(shop_name, is_test_data)

        filename = TEST_DATA_FILENAME if is_test_data else PRODUCTION_FILENAME
        filepath = self.sql_file_repository.save(sql, filename, output_dir)

        status = ApplicationStatus.accepted() if is_test_data else ApplicationStatus.not_applied()
        logger.info(f"Generated {len(consignors)} consignors ({status}) for {shop_name}: {filepath}")
        return GenerateConsignorSQLOutput(filepath=filepath, consignor_count=len(consignors), application_status=status)

    def generate_header(self, shop: Shop, is_test_data: bool) -> str:
        lines = [
            "-- Plus Shipping 配送元データ登録SQL（consignorsテーブル）",
            f"-- 生成日時: {self.clock().strftime('%Y/%m/%d %H:%M:%S')}",
            f"-- Shopify Shop ID: {shop.shopify_shop_id}",
            f"-- Store ID: {shop.store_id}",
        ]
        if is_test_data:
            lines.append("-- 用途: テストデータ")
            lines.append("-- 注意: 既存のdetail_idを使い回しています")
        return "\n".join(lines) + "\n\n"


class DeployConsignorUseCase:
    """Builds a shop's consignors and hands them to the remote repository."""

    def __init__(
        self,
        shop_repository: IShopRepository,
        location_repository: ILocationRepository,
        consignor_repository: IConsignorRepository,
    ):
        self.shop_repository = shop_repository
        self.location_repository = location_repository
        self.consignor_repository = consignor_repository

    def build_consignors(self, shop_name: str, is_test_data: bool) -> list[Consignor]:
        shop = self.shop_repository.find_by_name(shop_name)
        locations = self.location_repository.find_all()
        return ConsignorFactory.create_for_locations(shop, locations, is_test_data)

    async def execute(self, shop_name: str, environment: str, is_test_data: bool) -> DeployConsignorOutput:
        """
        Deploy all catalog consignors of a shop.

        Shop and location lookup errors propagate; remote failures are
        reported in the output.
        """
        consignors = self.build_consignors(shop_name, is_test_data)
        result = await self.consignor_repository.deploy(consignors, environment)
        return DeployConsignorOutput(
            success=result.success,
            deployed_count=result.inserted_count,
            environment=environment,
            error_message=result.error_message,
        )
