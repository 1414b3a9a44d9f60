"""
Interfaces/Protocols for consignor services (Dependency Inversion Principle).

These protocols define contracts that repositories and the cluster broker
must implement, allowing for loose coupling and easy testing.
"""

from pathlib import Path
from typing import Protocol

from plus_shipping.domain.models import (
    Consignor,
    ContextToken,
    DatabaseCredentials,
    DeployResult,
    Location,
    RollbackResult,
    Shop,
    SqlExecutionSpec,
)


class IShopRepository(Protocol):
    """Protocol for shop registries."""

    def find_by_name(self, name: str) -> Shop:
        """Return the shop registered under ``name`` or raise NotFoundException."""
        ...

    def list_all(self) -> dict[str, Shop]:
        ...


class ILocationRepository(Protocol):
    """Protocol for the distribution-center catalog."""

    def find_all(self) -> list[Location]:
        ...

    def find_by_area(self, area: str) -> Location:
        """Return the location for ``area`` or raise NotFoundException."""
        ...


class ISqlFileRepository(Protocol):
    """Protocol for SQL output sinks."""

    def save(self, sql: str, filename: str, output_dir: str | Path | None = None) -> Path:
        """Write ``sql`` and return the path written."""
        ...


class IConsignorRepository(Protocol):
    """Protocol for remote consignor persistence."""

    async def deploy(self, consignors: list[Consignor], environment: str) -> DeployResult:
        ...

    async def rollback(self, shopify_shop_id: str, environment: str) -> RollbackResult:
        ...


class IClusterBroker(Protocol):
    """Protocol for remote execution brokers."""

    async def switch_context(self, context: str) -> ContextToken:
        """Switch the active context, returning a token for restoration."""
        ...

    async def restore_context(self, token: ContextToken | None) -> None:
        """Switch back to the original context. Never raises."""
        ...

    async def ensure_worker_pod(self, namespace: str) -> str:
        """Return the name of a ready worker pod, creating it when missing."""
        ...

    async def get_credentials(self, namespace: str, config_map: str, secret: str) -> DatabaseCredentials:
        ...

    async def exec_sql(self, spec: SqlExecutionSpec) -> str:
        """Run the statements and return the client's stdout."""
        ...
