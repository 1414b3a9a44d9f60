"""
Explicit wiring of the consignor services.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from plus_shipping.core.config import Settings, get_settings
from plus_shipping.db.kubernetes import KubectlBroker, KubectlRunner
from plus_shipping.db.location_catalog import JsonLocationRepository
from plus_shipping.db.shop_registry import YamlShopRepository
from plus_shipping.db.sql_file_repository import FileSystemSQLRepository
from plus_shipping.domain.interfaces import IClusterBroker
from plus_shipping.services.consignors.orchestrator import ConsignorDeploymentOrchestrator
from plus_shipping.services.consignors.use_cases import DeployConsignorUseCase, GenerateConsignorSQLUseCase


@dataclass
class ConsignorServices:
    shop_repository: YamlShopRepository
    location_repository: JsonLocationRepository
    sql_file_repository: FileSystemSQLRepository
    broker: IClusterBroker
    orchestrator: ConsignorDeploymentOrchestrator
    generate_sql: GenerateConsignorSQLUseCase
    deploy: DeployConsignorUseCase


def create_consignor_services(
    settings: Optional[Settings] = None,
    shops_config_path: Optional[str | Path] = None,
    locations_data_path: Optional[str | Path] = None,
    broker: Optional[IClusterBroker] = None,
) -> ConsignorServices:
    """
    Create fully wired consignor services.

    Each call builds its own broker, so concurrent deployments never share
    the original-context bookkeeping.

    Args:
        settings: Application settings (defaults to the cached instance)
        shops_config_path: Override for SHOPS_CONFIG_PATH
        locations_data_path: Override for LOCATIONS_DATA_PATH
        broker: Cluster broker to use instead of the kubectl one

    Returns:
        ConsignorServices: Repositories, broker, orchestrator and use cases
    """
    settings = settings or get_settings()

    shop_repository = YamlShopRepository(shops_config_path or settings.SHOPS_CONFIG_PATH)
    location_repository = JsonLocationRepository(locations_data_path or settings.LOCATIONS_DATA_PATH)
    sql_file_repository = FileSystemSQLRepository(settings.SQL_OUTPUT_DIR)
    broker = broker or KubectlBroker(KubectlRunner(settings.KUBECTL_PATH), settings)
    orchestrator = ConsignorDeploymentOrchestrator(broker, shop_repository, settings)

    return ConsignorServices(
        shop_repository=shop_repository,
        location_repository=location_repository,
        sql_file_repository=sql_file_repository,
        broker=broker,
        orchestrator=orchestrator,
        generate_sql=GenerateConsignorSQLUseCase(shop_repository, location_repository, sql_file_repository),
        deploy=DeployConsignorUseCase(shop_repository, location_repository, orchestrator),
    )
