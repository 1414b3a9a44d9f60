"""
Async kubectl process runner.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from plus_shipping.core.config import get_settings
from plus_shipping.utils.error_handler import ClusterOperationException, ErrorCode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    args: tuple[str, ...]
    return_code: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.return_code == 0


class KubectlRunner:
    """
    Runs kubectl as a subprocess without a shell.

    Arguments are passed as a list, so values such as context names or SQL
    never go through shell word splitting on the local side.
    """

    def __init__(self, kubectl_path: Optional[str] = None):
        self.kubectl_path = kubectl_path or get_settings().KUBECTL_PATH

    async def run(
        self,
        args: Sequence[str],
        input_text: Optional[str] = None,
        check: bool = True,
        operation: str = "kubectl",
        error_code: ErrorCode = ErrorCode.KUBECTL_COMMAND_FAILED,
        timeout: Optional[float] = None,
    ) -> CommandResult:
        """
        Run ``kubectl <args>``.

        Args:
            args: kubectl arguments
            input_text: Text written to the process's stdin
            check: Raise when the exit code is non-zero
            operation: Broker operation name, for error reporting
            error_code: Error code used when raising
            timeout: Seconds before the process is killed

        Returns:
            CommandResult: Exit code and decoded output

        Raises:
            ClusterOperationException: If kubectl is missing, times out, or
                exits non-zero while ``check`` is set
        """
        command = [self.kubectl_path, *args]
        logger.debug(f"Running: {' '.join(command)}")

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.PIPE if input_text is not None else asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise ClusterOperationException(
                f"kubectl executable not found: {self.kubectl_path}",
                operation=operation,
                error_code=error_code,
                command=command,
            ) from e

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(input_text.encode("utf-8") if input_text is not None else None),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            raise ClusterOperationException(
                f"kubectl timed out after {timeout}s",
                operation=operation,
                error_code=error_code,
                command=command,
            ) from e
        except asyncio.CancelledError:
            process.kill()
            await process.wait()
            raise

        result = CommandResult(
            args=tuple(command),
            return_code=process.returncode,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
        )

        if check and not result.ok:
            raise ClusterOperationException(
                f"{operation} failed (exit code {result.return_code})",
                operation=operation,
                error_code=error_code,
                command=command,
                return_code=result.return_code,
                stderr=result.stderr.strip(),
            )

        return result
