# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import logging

from imagematrix.common.command import CommandError, CommandRequest, CommandRunner
from imagematrix.common.exceptions import PublishError
from imagematrix.matrix.compose import ComposeArtifact

logger = logging.getLogger(__name__)


def _references(artifact: ComposeArtifact) -> list[str]:
    """Every tag of every service, primary image first, without duplicates."""
    refs: list[str] = []
    for service in artifact.services.values():
        refs.append(service.image)
        refs.extend(service.build.get("tags", []))
    return list(dict.fromkeys(refs))


class PublishDriver:
    """Pushes every image reference of a compose artifact to its registry.

    The first failing push aborts publishing.
    """

    def __init__(
        self,
        command_runner: CommandRunner | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self.command_runner = command_runner or CommandRunner()
        self.timeout_seconds = timeout_seconds

    def publish(self, artifact: ComposeArtifact, dry_run: bool = False) -> int:
        """Push all image references; returns the exit status (0 on success).

        Raises:
            PublishError: If a push cannot run or exits nonzero
        """
        refs = _references(artifact)
        logger.info(f"Publishing {len(refs)} image references from {artifact.path.name}")
        for ref in refs:
            request = CommandRequest(
                argv=("docker", "push", ref),
                timeout_seconds=self.timeout_seconds,
                dry_run=dry_run,
            )
            try:
                result = self.command_runner.run(request)
            except CommandError as e:
                raise PublishError(str(e)) from e
            if not result.ok:
                raise PublishError(
                    f"Pushing {ref} failed with exit code {result.returncode}: "
                    f"{result.diagnostics()}",
                    returncode=result.returncode,
                )
            if not dry_run:
                logger.info(f"Published {ref}")
        return 0
