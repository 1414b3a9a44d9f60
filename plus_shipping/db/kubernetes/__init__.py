"""
kubectl-based access to the remote consignor database.
"""

from plus_shipping.db.kubernetes.broker import KubectlBroker
from plus_shipping.db.kubernetes.runner import CommandResult, KubectlRunner

__all__ = ["CommandResult", "KubectlBroker", "KubectlRunner"]
