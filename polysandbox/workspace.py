"""
Ephemeral workspace directories bind-mounted into sandbox containers.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from .exceptions import PermissionsError, SourceFileError, TempError
from .languages import ARTIFACT_NAME, Language

logger = logging.getLogger(__name__)

# The container user is unrelated to the host user and must be able to
# write the compiled artifact back through the mount.
WORKSPACE_MODE = 0o777


class Workspace:
    """
    Exclusively-owned temporary directory holding one submission.

    Contains ``input.<ext>`` from creation and ``output`` once a compile
    succeeds. The directory is removed by ``close()``, by leaving the
    context manager, or when the object is garbage collected.
    """

    def __init__(self, tmp: tempfile.TemporaryDirectory, language: Language):
        self._tmp = tmp
        self.language = language
        self.path = Path(tmp.name)
        self._closed = False

    @classmethod
    def create(cls, code: str, language: Language, root: Optional[str] = None) -> "Workspace":
        """
        Create a workspace and write the source file into it.

        Args:
            code: Source text to compile
            language: Target language, selects the file extension
            root: Parent directory for the workspace, system temp dir if None

        Returns:
            A ready workspace

        Raises:
            TempError: If the directory cannot be created
            PermissionsError: If the directory mode cannot be set
            SourceFileError: If the source file cannot be written
        """
        try:
            tmp = tempfile.TemporaryDirectory(prefix="sandbox-", dir=root)
        except OSError as e:
            raise TempError(f"Failed to create workspace directory: {e}") from e

        workspace = cls(tmp, language)
        try:
            try:
                os.chmod(workspace.path, WORKSPACE_MODE)
            except OSError as e:
                raise PermissionsError(f"Failed to set workspace permissions: {e}") from e

            try:
                workspace.source_path.write_text(code, encoding="utf-8")
            except OSError as e:
                raise SourceFileError(f"Failed to write source file: {e}") from e
        except (PermissionsError, SourceFileError):
            workspace.close()
            raise

        logger.debug(f"Created workspace {workspace.path} for {language.value}")
        return workspace

    @property
    def source_path(self) -> Path:
        return self.path / self.language.profile.source_name

    @property
    def artifact_path(self) -> Path:
        return self.path / ARTIFACT_NAME

    @property
    def closed(self) -> bool:
        return self._closed

    def has_artifact(self) -> bool:
        """Whether the compile step left an ``output`` file behind."""
        return self.artifact_path.exists()

    def close(self) -> None:
        """Remove the workspace directory. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._tmp.cleanup()
        logger.debug(f"Removed workspace {self.path}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        return f"Workspace(path={str(self.path)!r}, language={self.language.value!r})"
