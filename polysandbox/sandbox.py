"""
Compile-then-execute sandbox pipeline.
"""

import asyncio
import logging
import time
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

from .command import CommandBuilder
from .config import SandboxConfig
from .engine import DockerEngine
from .exceptions import (
    CompilationError,
    CompilationOutputError,
    ExecutionError,
    SandboxError,
    SandboxStateError,
    SandboxTimeoutError,
    StringConversionError,
)
from .languages import Language
from .runner import ProcessResult, ProcessRunner
from .workspace import Workspace

logger = logging.getLogger(__name__)


def _decode(data: bytes, stream: str) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise StringConversionError(f"{stream} is not valid UTF-8: {e}") from e


@dataclass(frozen=True)
class CommandOutput:
    """Result of one phase."""

    success: bool
    stdout: str
    stderr: str
    exit_code: Optional[int] = None
    duration: float = 0.0

    @classmethod
    def from_process(cls, result: ProcessResult, duration: float = 0.0) -> "CommandOutput":
        """
        Adapt a raw process result, decoding both streams.

        Raises:
            StringConversionError: If either stream is not valid UTF-8
        """
        return cls(
            success=result.success,
            stdout=_decode(result.stdout, "stdout"),
            stderr=_decode(result.stderr, "stderr"),
            exit_code=result.returncode,
            duration=duration,
        )

    @classmethod
    def unattempted(cls) -> "CommandOutput":
        """Record for a phase that never ran."""
        return cls(success=False, stdout="", stderr="")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SandboxOutput:
    """Outputs of both phases of one submission."""
    compile_output: CommandOutput
    execute_output: CommandOutput

    def to_dict(self) -> Dict[str, Any]:
        return {
            "compile_output": self.compile_output.to_dict(),
            "execute_output": self.execute_output.to_dict(),
        }


class SandboxState(Enum):
    """Lifecycle of a single pipeline instance."""
    INITIALIZED = "initialized"
    COMPILING = "compiling"
    COMPILE_FAILED = "compile_failed"
    COMPILED = "compiled"
    EXECUTING = "executing"
    COMPLETED = "completed"
    ERRORED = "errored"


class Sandbox:
    """
    One submission: a workspace plus the compile and execute phases run
    against it.

    The workspace is created on construction and removed when the sandbox
    is closed, either explicitly or by leaving a ``with`` / ``async with``
    block. Execution is only attempted after a successful compile.
    """

    def __init__(
        self,
        code: str,
        language: Union[Language, str],
        config: Optional[SandboxConfig] = None,
        runner: Optional[ProcessRunner] = None,
        engine: Optional[DockerEngine] = None,
    ):
        """
        Provision the workspace for a submission.

        Args:
            code: Source text
            language: Target language or its name
            config: Sandbox configuration, defaults to ``SandboxConfig()``
            runner: Process runner, defaults to a fresh ``ProcessRunner``
            engine: Docker engine used for preflight and timeout cleanup

        Raises:
            UnsupportedLanguageError: If ``language`` is unknown
            TempError, PermissionsError, SourceFileError: If the workspace
                cannot be provisioned
        """
        self.language = Language.parse(language)
        self.config = config or SandboxConfig()
        self.runner = runner or ProcessRunner()
        self.engine = engine or DockerEngine()
        self.commands = CommandBuilder(self.config)
        self.workspace = Workspace.create(code, self.language, root=self.config.workspace_root)
        self.state = SandboxState.INITIALIZED

    async def output(self) -> SandboxOutput:
        """
        Compile the submission and, if that succeeds, execute it.

        Returns:
            SandboxOutput with both phase records. When compilation fails
            the execute record is ``CommandOutput.unattempted()``.

        Raises:
            SandboxStateError: If already run or closed
            CompilationError, ExecutionError: If the engine cannot be run
            CompilationOutputError: If compilation succeeded without an artifact
            StringConversionError: If output is not valid UTF-8
            SandboxTimeoutError: If a phase exceeds the configured timeout
        """
        if self.workspace.closed:
            raise SandboxStateError("Sandbox workspace has already been removed")
        if self.state is not SandboxState.INITIALIZED:
            raise SandboxStateError(f"Sandbox already ran (state: {self.state.value})")

        try:
            if self.config.preflight:
                await self._in_executor(self.engine.preflight, self.language, self.config)

            compile_output = await self._compile()
            if not compile_output.success:
                self.state = SandboxState.COMPILE_FAILED
                logger.warning(
                    f"Compilation failed for {self.language.value} "
                    f"(exit_code: {compile_output.exit_code})"
                )
                return SandboxOutput(
                    compile_output=compile_output,
                    execute_output=CommandOutput.unattempted(),
                )

            execute_output = await self._execute()
        except SandboxError as e:
            self.state = SandboxState.ERRORED
            logger.error(f"Sandbox failed for {self.language.value}: {e}")
            raise

        self.state = SandboxState.COMPLETED
        return SandboxOutput(compile_output=compile_output, execute_output=execute_output)

    async def _compile(self) -> CommandOutput:
        self.state = SandboxState.COMPILING
        argv = self.commands.compile_command(self.workspace, self.language)
        logger.info(f"Compiling {self.language.value} submission in {self.workspace.path}")

        try:
            result, duration = await self._run_phase("compile", argv)
        except OSError as e:
            raise CompilationError(f"Failed to run compiler container: {e}") from e

        # A successful compile must leave the binary in the bind mount
        if result.success and not self.workspace.has_artifact():
            raise CompilationOutputError()

        output = CommandOutput.from_process(result, duration)
        if output.success:
            self.state = SandboxState.COMPILED
        return output

    async def _execute(self) -> CommandOutput:
        self.state = SandboxState.EXECUTING
        argv = self.commands.execute_command(self.workspace)
        logger.info(f"Executing {self.language.value} binary in {self.workspace.path}")

        try:
            result, duration = await self._run_phase("execute", argv)
        except OSError as e:
            raise ExecutionError(f"Failed to run execution container: {e}") from e

        return CommandOutput.from_process(result, duration)

    async def _run_phase(self, phase: str, argv):
        timeout = self.config.timeout_seconds
        start_time = time.monotonic()
        try:
            result = await self.runner.run(argv, timeout=timeout)
        except asyncio.TimeoutError as e:
            if self.config.reap_on_timeout:
                await self._reap()
            raise SandboxTimeoutError(
                f"{phase.capitalize()} timed out after {timeout} seconds", phase=phase
            ) from e
        except asyncio.CancelledError:
            self.state = SandboxState.ERRORED
            logger.warning(f"{phase.capitalize()} cancelled for {self.language.value}")
            if self.config.reap_on_timeout:
                await self._reap()
            raise

        duration = time.monotonic() - start_time
        logger.info(f"{phase.capitalize()} finished with exit code {result.returncode} in {duration:.2f}s")
        return result, duration

    async def _in_executor(self, func, *args):
        # Docker SDK calls block; keep them off the event loop
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, func, *args)

    async def _reap(self) -> int:
        return await self._in_executor(self.engine.reap, self.workspace.path)

    def close(self) -> None:
        """Remove the workspace."""
        self.workspace.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.close()


async def submit(
    code: str,
    language: Union[Language, str],
    config: Optional[SandboxConfig] = None,
    runner: Optional[ProcessRunner] = None,
    engine: Optional[DockerEngine] = None,
) -> SandboxOutput:
    """
    Compile and run one submission in a fresh workspace.

    The workspace is removed before this returns or raises.
    """
    async with Sandbox(code, language, config=config, runner=runner, engine=engine) as sandbox:
        return await sandbox.output()


def submit_sync(
    code: str,
    language: Union[Language, str],
    config: Optional[SandboxConfig] = None,
    runner: Optional[ProcessRunner] = None,
    engine: Optional[DockerEngine] = None,
) -> SandboxOutput:
    """Blocking variant of ``submit`` for callers without an event loop."""
    return asyncio.run(submit(code, language, config=config, runner=runner, engine=engine))
