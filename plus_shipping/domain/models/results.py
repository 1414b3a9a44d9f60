"""
Outcomes of remote deploy and rollback runs.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class DeployResult:
    success: bool
    inserted_count: int
    error_message: str | None = None

    @classmethod
    def succeeded(cls, inserted_count: int) -> "DeployResult":
        return cls(success=True, inserted_count=inserted_count)

    @classmethod
    def failed(cls, error_message: str) -> "DeployResult":
        return cls(success=False, inserted_count=0, error_message=error_message)


@dataclass(frozen=True)
class RollbackResult:
    success: bool
    deleted_count: int
    error_message: str | None = None

    @classmethod
    def succeeded(cls, deleted_count: int) -> "RollbackResult":
        return cls(success=True, deleted_count=deleted_count)

    @classmethod
    def failed(cls, error_message: str) -> "RollbackResult":
        return cls(success=False, deleted_count=0, error_message=error_message)
