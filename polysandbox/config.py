"""
Configuration for the sandbox pipeline.
"""

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_ENGINE = "docker"
DEFAULT_MOUNT_PATH = "/home/sandbox/mnt/"
DEFAULT_MOUNT_ALIAS = "mnt"
DEFAULT_EXECUTE_IMAGE = "sandbox-c"
DEFAULT_TIMEOUT_SECONDS = 30.0

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class SandboxConfig:
    """Configuration for the sandbox pipeline."""

    # Container engine settings
    engine: str = DEFAULT_ENGINE                # Engine CLI binary
    mount_path: str = DEFAULT_MOUNT_PATH        # Bind mount target inside every container
    mount_alias: str = DEFAULT_MOUNT_ALIAS      # Mount as seen from the container working dir
    execute_image: str = DEFAULT_EXECUTE_IMAGE  # Runtime image for compiled binaries

    # Limits
    timeout_seconds: Optional[float] = DEFAULT_TIMEOUT_SECONDS  # Per phase, None disables

    # Workspace settings
    workspace_root: Optional[str] = None  # Parent of workspaces, None for the system temp dir

    # Engine checks
    preflight: bool = False        # Ping engine and check images before running
    reap_on_timeout: bool = True   # Force-remove containers left behind by a timeout

    @classmethod
    def from_env(cls) -> "SandboxConfig":
        """Build a configuration from ``SANDBOX_*`` environment variables."""
        timeout = os.getenv("SANDBOX_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
        return cls(
            engine=os.getenv("SANDBOX_ENGINE", DEFAULT_ENGINE),
            mount_path=os.getenv("SANDBOX_MOUNT_PATH", DEFAULT_MOUNT_PATH),
            timeout_seconds=float(timeout) if timeout.strip() else None,
            workspace_root=os.getenv("SANDBOX_WORKSPACE_ROOT") or None,
            preflight=os.getenv("SANDBOX_PREFLIGHT", "false").lower() in _TRUE_VALUES,
        )
