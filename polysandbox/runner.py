"""
Child process execution for engine commands.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessResult:
    """Raw result of a finished child process."""
    returncode: int
    stdout: bytes
    stderr: bytes

    @property
    def success(self) -> bool:
        return self.returncode == 0


class ProcessRunner:
    """
    Runs a command to completion and collects its exit status and output.

    Stateless; one instance can serve any number of phases and pipelines.
    """

    async def run(self, argv: Sequence[str], timeout: Optional[float] = None) -> ProcessResult:
        """
        Spawn ``argv`` and wait for it to exit.

        Args:
            argv: Program and arguments
            timeout: Seconds to wait before killing the process, None waits forever

        Returns:
            ProcessResult with the exit status and raw streams

        Raises:
            OSError: If the process cannot be spawned
            asyncio.TimeoutError: If the timeout elapses; the process is killed first
            asyncio.CancelledError: If the calling task is cancelled; the process
                is killed first
        """
        logger.debug(f"Spawning: {' '.join(argv)}")
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Process {proc.pid} exceeded {timeout}s, killing")
            await self._kill(proc)
            raise
        except asyncio.CancelledError:
            logger.warning(f"Run of process {proc.pid} cancelled, killing")
            await self._kill(proc)
            raise

        return ProcessResult(returncode=proc.returncode, stdout=stdout, stderr=stderr)

    @staticmethod
    async def _kill(proc: asyncio.subprocess.Process) -> None:
        try:
            proc.kill()
        except ProcessLookupError:
            # Exited on its own before the kill landed
            pass
        await proc.wait()
