"""
Compile-and-run sandbox for untrusted C, C++, Rust and Go code.

Isolation is delegated to a container engine: each submission gets its own
workspace, a compile container and, if compilation succeeds, an execute
container.
"""

from .command import CommandBuilder
from .config import SandboxConfig
from .engine import DockerEngine, required_images
from .exceptions import (
    SandboxError,
    UnsupportedLanguageError,
    TempError,
    PermissionsError,
    SourceFileError,
    CompilationError,
    CompilationOutputError,
    ExecutionError,
    StringConversionError,
    SandboxTimeoutError,
    SandboxStateError,
    EngineUnavailableError,
    ImageNotFoundError,
)
from .languages import Language, LanguageProfile, LANGUAGE_PROFILES
from .runner import ProcessResult, ProcessRunner
from .sandbox import (
    CommandOutput,
    Sandbox,
    SandboxOutput,
    SandboxState,
    submit,
    submit_sync,
)
from .workspace import Workspace

__all__ = [
    "CommandBuilder",
    "SandboxConfig",
    "DockerEngine",
    "required_images",
    "SandboxError",
    "UnsupportedLanguageError",
    "TempError",
    "PermissionsError",
    "SourceFileError",
    "CompilationError",
    "CompilationOutputError",
    "ExecutionError",
    "StringConversionError",
    "SandboxTimeoutError",
    "SandboxStateError",
    "EngineUnavailableError",
    "ImageNotFoundError",
    "Language",
    "LanguageProfile",
    "LANGUAGE_PROFILES",
    "ProcessResult",
    "ProcessRunner",
    "CommandOutput",
    "Sandbox",
    "SandboxOutput",
    "SandboxState",
    "submit",
    "submit_sync",
    "Workspace",
]
