# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Matrix build: one build engine invocation per compose artifact."""

import logging
from pathlib import Path

from imagematrix.common.command import CommandError, CommandRequest, CommandRunner
from imagematrix.common.exceptions import BuildEngineError
from imagematrix.matrix.compose import ComposeArtifact
from imagematrix.orchestrator.models import BuildResult

logger = logging.getLogger(__name__)

__all__ = [
    "MatrixBuildOrchestrator",
]


class MatrixBuildOrchestrator:
    """Asks the build engine to build the targets of a compose artifact.

    Parallelism is delegated to the engine; this class selects targets and
    detects aggregate failure. Failed builds are never retried.
    """

    def __init__(
        self,
        command_runner: CommandRunner | None = None,
        log_dir: Path | None = None,
        pull: bool = True,
        timeout_seconds: float | None = None,
    ) -> None:
        self.command_runner = command_runner or CommandRunner()
        self.log_dir = Path(log_dir) if log_dir is not None else None
        self.pull = pull
        self.timeout_seconds = timeout_seconds

    def build_request(
        self,
        artifact: ComposeArtifact,
        services: list[str] | None = None,
        parallel: bool = True,
        dry_run: bool = False,
    ) -> CommandRequest:
        """Typed request for the build engine."""
        argv = ["docker", "compose", "--file", str(artifact.path), "build"]
        if parallel:
            argv.append("--parallel")
        if self.pull:
            argv.append("--pull")
        argv.extend(services or [])

        stream_to = None
        if self.log_dir is not None and not dry_run:
            stream_to = self.log_dir / f"{artifact.path.stem}.log"
        return CommandRequest(
            argv=tuple(argv),
            timeout_seconds=self.timeout_seconds,
            dry_run=dry_run,
            stream_to=stream_to,
        )

    def build_all(
        self,
        artifact: ComposeArtifact,
        parallel: bool = True,
        dry_run: bool = False,
        services: list[str] | None = None,
    ) -> BuildResult:
        """Build every selected target of the artifact.

        Args:
            artifact: Compose artifact to build
            parallel: Let the engine build targets in parallel
            dry_run: Only report the command
            services: Subset of services to build, all when None

        Returns:
            BuildResult carrying the engine's exit status

        Raises:
            BuildEngineError: If the engine cannot be started or timed out
        """
        unknown = sorted(set(services or []) - set(artifact.services))
        if unknown:
            raise BuildEngineError(f"Unknown targets requested: {', '.join(unknown)}")

        request = self.build_request(artifact, services, parallel=parallel, dry_run=dry_run)
        selected = tuple(services or artifact.service_names)
        logger.info(f"Building {len(selected)} targets from {artifact.path}")

        try:
            result = self.command_runner.run(request)
        except CommandError as e:
            raise BuildEngineError(str(e)) from e

        build_result = BuildResult(
            compose_file=artifact.path,
            services=selected,
            returncode=result.returncode,
            dry_run=request.dry_run,
            log_path=request.stream_to,
            command=request.display,
        )
        if build_result.success:
            if not request.dry_run:
                logger.info(f"Build of {artifact.path.name} succeeded")
        else:
            logger.error(
                f"Build of {artifact.path.name} failed with exit code {result.returncode}"
                + (f", see {request.stream_to}" if request.stream_to else "")
            )
        return build_result
