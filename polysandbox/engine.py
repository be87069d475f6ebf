"""
Docker engine checks and cleanup.

Commands themselves go through the engine CLI. This module talks to the
daemon through the Docker SDK for the things the CLI run does not cover:
verifying the daemon and images before a run, and removing containers a
killed CLI client left behind.
"""

import logging
import time
from pathlib import Path
from typing import Iterable, List, Optional, Union

import docker
from docker.errors import APIError, DockerException, ImageNotFound

from .config import SandboxConfig
from .exceptions import EngineUnavailableError, ImageNotFoundError, SandboxError
from .languages import Language

logger = logging.getLogger(__name__)


def required_images(language: Language, config: Optional[SandboxConfig] = None) -> List[str]:
    """Images a submission in ``language`` needs, compile image first."""
    config = config or SandboxConfig()
    images = [language.profile.image]
    if config.execute_image not in images:
        images.append(config.execute_image)
    return images


class DockerEngine:
    """Thin wrapper around a Docker SDK client."""

    def __init__(
        self,
        client: Optional[docker.DockerClient] = None,
        reap_attempts: int = 3,
        reap_delay: float = 0.5,
    ):
        self._client = client
        self.reap_attempts = max(1, reap_attempts)
        self.reap_delay = reap_delay

    @property
    def client(self) -> docker.DockerClient:
        if self._client is None:
            try:
                self._client = docker.from_env()
            except DockerException as e:
                logger.error(f"Failed to initialize Docker client: {e}")
                raise EngineUnavailableError(f"Docker initialization failed: {e}") from e
        return self._client

    def ping(self) -> None:
        """Verify the daemon answers."""
        try:
            self.client.ping()
        except EngineUnavailableError:
            raise
        except Exception as e:
            logger.error(f"Docker daemon unreachable: {e}")
            raise EngineUnavailableError(f"Docker daemon unreachable: {e}") from e

    def ensure_images(self, images: Iterable[str]) -> None:
        """
        Verify that every image exists locally.

        Raises:
            ImageNotFoundError: For the first missing image
            SandboxError: If the daemon returns any other error
        """
        for image in images:
            try:
                self.client.images.get(image)
            except ImageNotFound as e:
                raise ImageNotFoundError(image) from e
            except APIError as e:
                raise SandboxError(f"Docker API error: {e}") from e

    def preflight(self, language: Language, config: Optional[SandboxConfig] = None) -> None:
        self.ping()
        self.ensure_images(required_images(language, config))
        logger.info(f"Engine ready for {language.value}")

    def reap(self, workspace_path: Union[str, Path]) -> int:
        """
        Force-remove containers that still mount ``workspace_path``.

        A client killed right after sending its create request can leave a
        container that the daemon registers a moment later, so an empty
        listing is retried ``reap_attempts`` times, ``reap_delay`` apart.

        Returns:
            Number of containers removed
        """
        removed = 0
        for attempt in range(1, self.reap_attempts + 1):
            try:
                containers = self.client.containers.list(
                    all=True,
                    filters={"volume": str(workspace_path)},
                )
                for container in containers:
                    container.remove(force=True)
                    removed += 1
            except Exception as e:
                logger.error(f"Container cleanup failed for {workspace_path}: {e}")
                return removed

            if removed or attempt == self.reap_attempts:
                break
            time.sleep(self.reap_delay)

        if removed:
            logger.info(f"Removed {removed} container(s) bound to {workspace_path}")
        return removed
