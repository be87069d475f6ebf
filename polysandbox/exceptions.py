"""
Sandbox-specific exceptions.

Every exception here signals that the sandbox itself failed to operate.
A program that fails to compile or exits non-zero is reported through
``CommandOutput.success`` instead.
"""


class SandboxError(Exception):
    """Base exception for sandbox-related errors."""
    pass


class UnsupportedLanguageError(SandboxError, ValueError):
    """Raised when a language name does not map to a supported language."""
    pass


class TempError(SandboxError):
    """Raised when the workspace directory cannot be created."""
    pass


class PermissionsError(SandboxError):
    """Raised when permissions cannot be set on the workspace."""
    pass


class SourceFileError(SandboxError):
    """Raised when the source file cannot be written into the workspace."""
    pass


class CompilationError(SandboxError):
    """Raised when the compile container cannot be spawned or awaited."""
    pass


class CompilationOutputError(SandboxError):
    """Raised when the compiler reports success but leaves no artifact."""

    def __init__(self, message: str = "Compilation succeeded but produced no output artifact"):
        super().__init__(message)


class ExecutionError(SandboxError):
    """Raised when the execute container cannot be spawned or awaited."""
    pass


class StringConversionError(SandboxError):
    """Raised when captured output is not valid UTF-8."""
    pass


class SandboxTimeoutError(SandboxError):
    """Raised when a phase runs longer than the configured timeout."""

    def __init__(self, message: str, phase: str = ""):
        super().__init__(message)
        self.phase = phase


class SandboxStateError(SandboxError):
    """Raised when a sandbox is reused or used after its workspace is gone."""
    pass


class EngineUnavailableError(SandboxError):
    """Raised when the container engine cannot be reached."""
    pass


class ImageNotFoundError(SandboxError):
    """Raised when a required sandbox image is not present on the engine."""

    def __init__(self, image: str):
        super().__init__(f"Docker image not found: {image}")
        self.image = image
