"""
Domain models for business entities.

These models represent core business concepts and contain
business logic and invariants.
"""

from .cluster import ContextToken, DatabaseCredentials, SqlExecutionSpec
from .consignor import CONSIGNOR_COLUMNS, Consignor
from .location import DISTRIBUTION_CENTER_MARKER, Location
from .results import DeployResult, RollbackResult
from .shop import KubernetesEnvironment, ShippingCredentials, Shop

__all__ = [
    "CONSIGNOR_COLUMNS",
    "Consignor",
    "ContextToken",
    "DISTRIBUTION_CENTER_MARKER",
    "DatabaseCredentials",
    "DeployResult",
    "KubernetesEnvironment",
    "Location",
    "RollbackResult",
    "ShippingCredentials",
    "Shop",
    "SqlExecutionSpec",
]
