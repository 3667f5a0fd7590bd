# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Concurrent pre-pull of the base images a matrix depends on."""

import asyncio
import logging

from imagematrix.common.command import CommandError, CommandRequest, CommandRunner
from imagematrix.matrix.models import TargetDescriptor

logger = logging.getLogger(__name__)


class BaseImageWarmup:
    """Pulls every distinct base image once, one unit per image.

    Failures are only reported: the build pulls again on its own and is the
    authoritative place for a missing base image to fail.
    """

    def __init__(
        self,
        command_runner: CommandRunner | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self.command_runner = command_runner or CommandRunner()
        self.timeout_seconds = timeout_seconds

    def warm(self, targets: list[TargetDescriptor], dry_run: bool = False) -> dict[str, bool]:
        """Pull the base images of the targets.

        Returns:
            Mapping of base image reference to whether the pull succeeded
        """
        images = list(dict.fromkeys(t.base_image for t in targets))
        if not images:
            return {}
        logger.info(f"Pulling {len(images)} base images: {', '.join(images)}")
        outcomes = asyncio.run(self._pull_all(images, dry_run))
        return dict(zip(images, outcomes))

    async def _pull_all(self, images: list[str], dry_run: bool) -> list[bool]:
        tasks = [asyncio.create_task(asyncio.to_thread(self._pull, image, dry_run)) for image in images]
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)
        results = []
        for image, outcome in zip(images, outcomes):
            if isinstance(outcome, BaseException):
                logger.warning(f"Pulling {image} failed: {outcome}")
                results.append(False)
            else:
                results.append(outcome)
        return results

    def _pull(self, image: str, dry_run: bool) -> bool:
        request = CommandRequest(
            argv=("docker", "pull", image),
            timeout_seconds=self.timeout_seconds,
            dry_run=dry_run,
        )
        try:
            result = self.command_runner.run(request)
        except CommandError as e:
            logger.warning(f"Pulling {image} failed: {e}")
            return False
        if not result.ok:
            logger.warning(f"Pulling {image} failed: {result.diagnostics()}")
            return False
        return True
