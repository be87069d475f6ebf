"""
Container engine command construction.

Every command shares the prefix ``run --rm --volume <workspace>:<mount>``
followed by an image and the argv to run inside it. Paths inside the
container are relative to the image working directory, where the mount
is visible as ``mnt``.
"""

from typing import List, Optional

from .config import SandboxConfig
from .languages import ARTIFACT_NAME, Language
from .workspace import Workspace


class CommandBuilder:
    """Builds engine argv lists for the compile and execute phases."""

    def __init__(self, config: Optional[SandboxConfig] = None):
        self.config = config or SandboxConfig()

    def _in_mount(self, name: str) -> str:
        return f"{self.config.mount_alias}/{name}"

    def volume(self, workspace: Workspace) -> str:
        """Bind mount specification for a workspace."""
        return f"{workspace.path}:{self.config.mount_path}"

    def base_command(self, workspace: Workspace) -> List[str]:
        return [self.config.engine, "run", "--rm", "--volume", self.volume(workspace)]

    def compile_command(self, workspace: Workspace, language: Language) -> List[str]:
        """
        Command that compiles ``mnt/input.<ext>`` into ``mnt/output``.

        Args:
            workspace: Workspace holding the source file
            language: Language selecting the image and compiler

        Returns:
            Full argv including the engine binary
        """
        profile = language.profile
        return [
            *self.base_command(workspace),
            profile.image,
            *profile.compiler,
            "-o",
            self._in_mount(ARTIFACT_NAME),
            self._in_mount(profile.source_name),
        ]

    def execute_command(self, workspace: Workspace) -> List[str]:
        # The C image doubles as the runtime for every compiled binary
        return [
            *self.base_command(workspace),
            self.config.execute_image,
            self._in_mount(ARTIFACT_NAME),
        ]
