"""
Value types exchanged with the remote execution broker.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ContextToken:
    """
    Proof of a context switch.

    Carries the kubectl context that was active before the switch so the
    caller can hand it back to ``restore_context``.
    """

    original_context: str
    target_context: str


@dataclass(frozen=True)
class DatabaseCredentials:
    host: str
    port: int
    user: str
    database: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class SqlExecutionSpec:
    """
    One remote SQL execution.

    Attributes:
        namespace: Namespace of the worker pod
        pod_name: Worker pod that runs the mysql client
        credentials: Resolved database credentials
        sql: Statements to run, sent as a single file
    """

    namespace: str
    pod_name: str
    credentials: DatabaseCredentials
    sql: str
