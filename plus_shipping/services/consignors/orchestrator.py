"""
ConsignorDeploymentOrchestrator - runs consignor SQL against a remote cluster database.

Every run walks the same linear sequence:

    INIT -> CONTEXT_ACQUIRED -> POD_READY -> CREDENTIALS_RESOLVED
         -> SQL_EXECUTED -> CONTEXT_RESTORED -> DONE

A failure at any step skips straight to CONTEXT_RESTORED. Restoration runs
exactly once per call, in a ``finally`` block.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from plus_shipping.core.config import Settings, get_settings
from plus_shipping.core.logging_config import LogContext
from plus_shipping.domain.interfaces import IClusterBroker, IShopRepository
from plus_shipping.domain.models import (
    Consignor,
    ContextToken,
    DeployResult,
    KubernetesEnvironment,
    RollbackResult,
    Shop,
    SqlExecutionSpec,
)
from plus_shipping.domain.models.location import DISTRIBUTION_CENTER_MARKER
from plus_shipping.domain.value_objects.shopify_shop_id import SHOPIFY_DOMAIN_SUFFIX
from plus_shipping.utils.error_handler import describe_exception, log_error

logger = logging.getLogger(__name__)

ROW_COUNT_COLUMN = "deleted_count"


class DeploymentState(Enum):
    INIT = "INIT"
    CONTEXT_ACQUIRED = "CONTEXT_ACQUIRED"
    POD_READY = "POD_READY"
    CREDENTIALS_RESOLVED = "CREDENTIALS_RESOLVED"
    SQL_EXECUTED = "SQL_EXECUTED"
    CONTEXT_RESTORED = "CONTEXT_RESTORED"
    DONE = "DONE"


@dataclass
class DeploymentRun:
    """Bookkeeping for one orchestrator call."""

    operation: str
    subject: str
    environment: str
    state: DeploymentState = DeploymentState.INIT
    token: Optional[ContextToken] = None

    def advance(self, state: DeploymentState) -> None:
        logger.debug(f"[{self.operation}] {self.subject} @ {self.environment}: {self.state.value} -> {state.value}")
        self.state = state


class ConsignorDeploymentOrchestrator:
    """
    Coordinates the broker steps of a deploy, rollback or verification run.

    ``deploy`` and ``rollback`` are the error boundary of the remote pipeline:
    they never raise and report failures through their result objects.
    """

    def __init__(
        self,
        broker: IClusterBroker,
        shop_repository: IShopRepository,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize orchestrator with its dependencies.

        Args:
            broker: Remote execution broker
            shop_repository: Shop registry, used by rollback to resolve the shop
            settings: Application settings
        """
        self.broker = broker
        self.shop_repository = shop_repository
        self.settings = settings or get_settings()

    async def deploy(self, consignors: list[Consignor], environment: str) -> DeployResult:
        """
        Insert consignors into the environment's database in one remote execution.

        Every consignor must belong to the same shop; the environment is
        resolved from that shop.

        Args:
            consignors: Consignors to insert
            environment: Environment name (e.g. "tes")

        Returns:
            DeployResult: Inserted count on success, error message on failure
        """
        if not consignors:
            return DeployResult.failed("No consignors to deploy")

        shop = consignors[0].shop
        if any(consignor.shop != shop for consignor in consignors):
            return DeployResult.failed("Consignors must belong to one shop")

        run = DeploymentRun("deploy", str(shop.shopify_shop_id), environment)

        with LogContext(shop=run.subject, environment=environment, operation=run.operation):
            logger.info(f"Deploying {len(consignors)} consignors for {run.subject} to {environment}")

            try:
                env = shop.get_environment(environment)
                sql = "\n\n".join(consignor.to_sql() for consignor in consignors)
                await self._execute(run, env, sql)
                result = DeployResult.succeeded(len(consignors))
            except Exception as e:
                log_error(e)
                result = DeployResult.failed(describe_exception(e))
            finally:
                await self._restore(run)

            logger.info(f"Deploy finished: success={result.success}, inserted={result.inserted_count}")
        return result

    async def rollback(self, shopify_shop_id: str, environment: str) -> RollbackResult:
        """
        Delete a shop's distribution-center consignors from the environment's database.

        Args:
            shopify_shop_id: Shop domain; the registry name is the domain
                without ``.myshopify.com``
            environment: Environment name

        Returns:
            RollbackResult: Row count read back from the database on success
        """
        run = DeploymentRun("rollback", shopify_shop_id, environment)

        with LogContext(shop=shopify_shop_id, environment=environment, operation=run.operation):
            logger.info(f"Rolling back consignors for {shopify_shop_id} in {environment}")

            try:
                shop = self.shop_repository.find_by_name(
                    shopify_shop_id.strip().removesuffix(SHOPIFY_DOMAIN_SUFFIX)
                )
                env = shop.get_environment(environment)
                output = await self._execute(run, env, self.build_rollback_sql(str(shop.shopify_shop_id)))

                deleted = self.parse_deleted_count(output)
                if deleted is None:
                    deleted = self.settings.LOCATION_CATALOG_SIZE
                    logger.warning(f"Rollback output carried no row count, reporting {deleted}")
                result = RollbackResult.succeeded(deleted)
            except Exception as e:
                log_error(e)
                result = RollbackResult.failed(describe_exception(e))
            finally:
                await self._restore(run)

            logger.info(f"Rollback finished: success={result.success}, deleted={result.deleted_count}")
        return result

    async def verify(self, shop: Shop, environment: str) -> list[dict[str, str]]:
        """
        Read back the shop's consignors after a deploy.

        Returns:
            list[dict]: Rows with location_name, prefecture and
                application_status_yamato, ordered by id

        Raises:
            NotFoundException: If the shop has no such environment
            ClusterOperationException: If any broker step fails
        """
        run = DeploymentRun("verify", str(shop.shopify_shop_id), environment)

        with LogContext(shop=run.subject, environment=environment, operation=run.operation):
            try:
                env = shop.get_environment(environment)
                output = await self._execute(run, env, self.build_verify_sql(run.subject))
            finally:
                await self._restore(run)
        return parse_batch_output(output)

    # === SQL ===

    @staticmethod
    def build_rollback_sql(shopify_shop_id: str) -> str:
        return (
            "DELETE FROM consignors\n"
            f"WHERE shopify_shop_id = '{shopify_shop_id}'\n"
            f"  AND location_name LIKE '%{DISTRIBUTION_CENTER_MARKER}%';\n"
            f"SELECT ROW_COUNT() AS {ROW_COUNT_COLUMN};"
        )

    @staticmethod
    def build_verify_sql(shopify_shop_id: str) -> str:
        return (
            "SELECT location_name, prefecture, application_status_yamato\n"
            "FROM consignors\n"
            f"WHERE shopify_shop_id = '{shopify_shop_id}'\n"
            "ORDER BY id;"
        )

    @staticmethod
    def parse_deleted_count(output: str) -> Optional[int]:
        """Read the ROW_COUNT() value from mysql batch output, if present."""
        rows = parse_batch_output(output)
        if not rows:
            return None
        value = rows[-1].get(ROW_COUNT_COLUMN, "").strip()
        if not value.lstrip("-").isdigit():
            return None
        # ROW_COUNT() is -1 when the previous statement changed nothing it could count
        return max(int(value), 0)

    # === STEPS ===

    async def _execute(self, run: DeploymentRun, env: KubernetesEnvironment, sql: str) -> str:
        # Step 1: Switch context
        run.token = await self.broker.switch_context(env.context)
        run.advance(DeploymentState.CONTEXT_ACQUIRED)

        # Step 2: Ensure worker pod
        pod_name = await self.broker.ensure_worker_pod(env.namespace)
        run.advance(DeploymentState.POD_READY)

        # Step 3: Resolve credentials
        credentials = await self.broker.get_credentials(env.namespace, env.db_config_map, env.db_secret)
        run.advance(DeploymentState.CREDENTIALS_RESOLVED)

        # Step 4: Execute
        output = await self.broker.exec_sql(
            SqlExecutionSpec(namespace=env.namespace, pod_name=pod_name, credentials=credentials, sql=sql)
        )
        run.advance(DeploymentState.SQL_EXECUTED)
        return output

    async def _restore(self, run: DeploymentRun) -> None:
        try:
            await self.broker.restore_context(run.token)
        except Exception as e:
            logger.warning(f"Context restoration after {run.operation} failed: {e}")
        run.advance(DeploymentState.CONTEXT_RESTORED)
        run.advance(DeploymentState.DONE)


def _unescape_batch_value(value: str) -> str:
    replacements = {"\\t": "\t", "\\n": "\n", "\\0": "\0", "\\\\": "\\"}
    chars = []
    i = 0
    while i < len(value):
        pair = value[i : i + 2]
        if pair in replacements:
            chars.append(replacements[pair])
            i += 2
        else:
            chars.append(value[i])
            i += 1
    return "".join(chars)


def parse_batch_output(output: str) -> list[dict[str, str]]:
    """
    Parse ``mysql --batch`` output of a single result set into rows.

    The first line holds the column names; values are tab-separated with
    mysql's backslash escapes. An empty line is a row whose only value is
    empty, so only the terminating newline is discarded.
    """
    lines = output.splitlines()
    if not lines:
        return []
    header = lines[0].split("\t")
    return [dict(zip(header, (_unescape_batch_value(value) for value in line.split("\t")))) for line in lines[1:]]
