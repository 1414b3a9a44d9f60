"""
kubectl-backed remote execution broker.

Covers the handful of cluster operations a consignor deployment needs:
context switch and restore, the ephemeral mysql client pod, database
credential lookup, and running a SQL file inside the pod.
"""

import asyncio
import base64
import binascii
import logging
import shlex
import time
from typing import Optional

import yaml

from plus_shipping.core.config import Settings, get_settings
from plus_shipping.db.kubernetes.runner import KubectlRunner
from plus_shipping.domain.models import ContextToken, DatabaseCredentials, SqlExecutionSpec
from plus_shipping.utils.error_handler import ClusterOperationException, ErrorCode

logger = logging.getLogger(__name__)

CONFIG_MAP_KEYS = ("DB_HOST", "DB_USER", "DB_PORT", "DB_NAME")
SECRET_PASSWORD_KEY = "DB_PASSWORD"
TERMINATED_POD_PHASES = ("Succeeded", "Failed")


class KubectlBroker:
    """
    Remote execution broker driving the local kubectl.

    One broker serves one deployment at a time: it remembers the context
    that was active before its first switch and falls back to it when
    restoration is requested without a token.
    """

    def __init__(self, runner: Optional[KubectlRunner] = None, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.runner = runner or KubectlRunner(self.settings.KUBECTL_PATH)
        self._original_context: Optional[str] = None

    @property
    def original_context(self) -> Optional[str]:
        return self._original_context

    # === CONTEXT ===

    async def get_current_context(self) -> str:
        result = await self.runner.run(
            ["config", "current-context"],
            operation="get_current_context",
            error_code=ErrorCode.CONTEXT_SWITCH_FAILED,
        )
        return result.stdout.strip()

    async def switch_context(self, context: str) -> ContextToken:
        """
        Switch kubectl to ``context``.

        The context active before the broker's first switch is recorded once
        and carried by every token this broker returns.

        Raises:
            ClusterOperationException: If the current context cannot be read
                or the switch fails
        """
        if self._original_context is None:
            self._original_context = await self.get_current_context()

        await self.runner.run(
            ["config", "use-context", context],
            operation="switch_context",
            error_code=ErrorCode.CONTEXT_SWITCH_FAILED,
        )
        logger.info(f"Switched kubectl context: {context}")
        return ContextToken(original_context=self._original_context, target_context=context)

    async def restore_context(self, token: Optional[ContextToken] = None) -> None:
        """
        Switch back to the original context.

        Failures are logged as warnings; restoration never raises.
        """
        target = token.original_context if token else self._original_context
        if not target:
            logger.debug("No original kubectl context recorded, nothing to restore")
            return

        try:
            await self.runner.run(
                ["config", "use-context", target],
                operation="restore_context",
                error_code=ErrorCode.CONTEXT_SWITCH_FAILED,
            )
            logger.info(f"Restored kubectl context: {target}")
        except Exception as e:
            logger.warning(f"Failed to restore kubectl context {target}: {e}")

    # === WORKER POD ===

    def build_worker_pod_manifest(self, namespace: str) -> str:
        manifest = {
            "apiVersion": "v1",
            "kind": "Pod",
            "metadata": {"name": self.settings.WORKER_POD_NAME, "namespace": namespace},
            "spec": {
                "containers": [
                    {
                        "name": "mysql-client",
                        "image": self.settings.WORKER_POD_IMAGE,
                        "command": ["sleep", str(self.settings.WORKER_POD_SLEEP_SECONDS)],
                    }
                ],
                "restartPolicy": "Never",
            },
        }
        return yaml.safe_dump(manifest, sort_keys=False)

    async def ensure_worker_pod(self, namespace: str) -> str:
        """
        Return the name of a ready worker pod, creating it when needed.

        A pod whose container has exited (phase Succeeded or Failed, e.g.
        after its sleep ran out) is deleted and recreated. Reused and created
        pods alike are waited on until Ready, bounded by
        POD_READY_TIMEOUT_SECONDS.

        Raises:
            ClusterOperationException: If the pod cannot be created or does not
                become ready in time
        """
        pod_name = self.settings.WORKER_POD_NAME

        existing = await self.runner.run(
            ["get", "pod", pod_name, "-n", namespace, "-o", "jsonpath={.status.phase}"],
            check=False,
            operation="ensure_worker_pod",
            error_code=ErrorCode.POD_PROVISIONING_FAILED,
        )
        phase = existing.stdout.strip() if existing.ok else ""

        if phase in TERMINATED_POD_PHASES:
            logger.info(f"Worker pod {namespace}/{pod_name} is {phase}, recreating it")
            await self.runner.run(
                ["delete", "pod", pod_name, "-n", namespace, "--wait=true"],
                operation="ensure_worker_pod",
                error_code=ErrorCode.POD_PROVISIONING_FAILED,
            )
            phase = ""

        if phase:
            logger.debug(f"Reusing worker pod {namespace}/{pod_name} ({phase})")
        else:
            logger.info(f"Creating worker pod {namespace}/{pod_name}")
            await self.runner.run(
                ["apply", "-f", "-"],
                input_text=self.build_worker_pod_manifest(namespace),
                operation="ensure_worker_pod",
                error_code=ErrorCode.POD_PROVISIONING_FAILED,
            )

        timeout = self.settings.POD_READY_TIMEOUT_SECONDS
        await self.runner.run(
            ["wait", "--for=condition=Ready", f"pod/{pod_name}", "-n", namespace, f"--timeout={timeout}s"],
            operation="ensure_worker_pod",
            error_code=ErrorCode.POD_PROVISIONING_FAILED,
            # kubectl enforces its own timeout; this only guards a hung client
            timeout=timeout + 30,
        )
        logger.info(f"Worker pod ready: {namespace}/{pod_name}")
        return pod_name

    # === CREDENTIALS ===

    async def get_config_map_value(self, namespace: str, name: str, key: str) -> str:
        result = await self.runner.run(
            ["get", "configmap", name, "-n", namespace, "-o", f"jsonpath={{.data.{key}}}"],
            operation="get_credentials",
            error_code=ErrorCode.CREDENTIAL_RESOLUTION_FAILED,
        )
        return result.stdout.strip()

    async def get_secret_value(self, namespace: str, name: str, key: str) -> str:
        result = await self.runner.run(
            ["get", "secret", name, "-n", namespace, "-o", f"jsonpath={{.data.{key}}}"],
            operation="get_credentials",
            error_code=ErrorCode.CREDENTIAL_RESOLUTION_FAILED,
        )
        try:
            return base64.b64decode(result.stdout.strip(), validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise ClusterOperationException(
                f"Secret value is not valid base64: {namespace}/{name}.{key}",
                operation="get_credentials",
                error_code=ErrorCode.CREDENTIAL_RESOLUTION_FAILED,
            ) from e

    async def get_credentials(self, namespace: str, config_map: str, secret: str) -> DatabaseCredentials:
        """
        Resolve database credentials from a config map and a secret.

        The five lookups run concurrently. The first failure cancels the
        lookups still in flight and fails the whole call.

        Raises:
            ClusterOperationException: If a lookup fails or a required key is empty
        """
        tasks = [
            asyncio.ensure_future(self.get_config_map_value(namespace, config_map, key)) for key in CONFIG_MAP_KEYS
        ]
        tasks.append(asyncio.ensure_future(self.get_secret_value(namespace, secret, SECRET_PASSWORD_KEY)))
        try:
            host, user, port, database, password = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        missing = [key for key, value in (("DB_HOST", host), ("DB_USER", user), ("DB_NAME", database)) if not value]
        if missing:
            raise ClusterOperationException(
                f"Missing keys in config map {namespace}/{config_map}: {', '.join(missing)}",
                operation="get_credentials",
                error_code=ErrorCode.CREDENTIAL_RESOLUTION_FAILED,
            )

        try:
            db_port = int(port) if port else self.settings.DEFAULT_DB_PORT
        except ValueError as e:
            raise ClusterOperationException(
                f"Invalid DB_PORT in config map {namespace}/{config_map}: {port}",
                operation="get_credentials",
                error_code=ErrorCode.CREDENTIAL_RESOLUTION_FAILED,
            ) from e

        logger.info(f"Resolved DB credentials for {user}@{host}:{db_port}/{database}")
        return DatabaseCredentials(host=host, port=db_port, user=user, database=database, password=password)

    # === SQL EXECUTION ===

    def staging_path(self) -> str:
        return f"{self.settings.SQL_STAGING_DIR.rstrip('/')}/ps-cli-{int(time.time() * 1000)}.sql"

    def build_mysql_command(self, credentials: DatabaseCredentials, staged_file: str) -> str:
        """
        Shell command run inside the pod.

        The password is read from stdin into MYSQL_PWD so it never appears in
        a process argument list.
        """
        mysql = " ".join(
            shlex.quote(part)
            for part in (
                "mysql",
                f"--default-character-set={self.settings.MYSQL_CHARSET}",
                "--batch",
                "-h",
                credentials.host,
                "-P",
                str(credentials.port),
                "-u",
                credentials.user,
                credentials.database,
            )
        )
        return f"IFS= read -r MYSQL_PWD; export MYSQL_PWD; exec {mysql} < {shlex.quote(staged_file)}"

    async def exec_sql(self, spec: SqlExecutionSpec) -> str:
        """
        Stage ``spec.sql`` as a file in the worker pod and run it with mysql.

        The staged file is removed afterwards. A removal failure is raised
        when execution succeeded and only logged when execution already failed.

        Returns:
            str: mysql stdout (tab-separated, with a header row per result set)

        Raises:
            ClusterOperationException: If staging, execution or cleanup fails
        """
        staged_file = self.staging_path()
        pod = ["-n", spec.namespace, spec.pod_name]

        try:
            await self.runner.run(
                ["exec", "-i", *pod, "--", "sh", "-c", f"cat > {shlex.quote(staged_file)}"],
                input_text=spec.sql,
                operation="exec_sql",
                error_code=ErrorCode.REMOTE_EXECUTION_FAILED,
            )
            logger.debug(f"Staged {len(spec.sql)} characters of SQL at {staged_file}")

            result = await self.runner.run(
                ["exec", "-i", *pod, "--", "sh", "-c", self.build_mysql_command(spec.credentials, staged_file)],
                input_text=f"{spec.credentials.password}\n",
                operation="exec_sql",
                error_code=ErrorCode.REMOTE_EXECUTION_FAILED,
            )
        except ClusterOperationException:
            await self._remove_staged_file(pod, staged_file, raise_errors=False)
            raise

        await self._remove_staged_file(pod, staged_file, raise_errors=True)
        return result.stdout

    async def _remove_staged_file(self, pod: list[str], staged_file: str, raise_errors: bool) -> None:
        try:
            await self.runner.run(
                ["exec", *pod, "--", "rm", "-f", staged_file],
                operation="exec_sql_cleanup",
                error_code=ErrorCode.REMOTE_EXECUTION_FAILED,
            )
        except ClusterOperationException as e:
            if raise_errors:
                raise
            logger.warning(f"Failed to remove staged SQL file {staged_file}: {e}")
