# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Test orchestration: runs the probe suite for every image of a compose artifact."""

import logging
import shutil
import threading
from pathlib import Path

from imagematrix.common.config import UserConfig
from imagematrix.common.enums import AgentType, TestMode
from imagematrix.common.exceptions import SerializationError
from imagematrix.matrix.compose import ComposeArtifact, ComposeService
from imagematrix.matrix.models import RuntimeVariant
from imagematrix.orchestrator.models import RunAggregate
from imagematrix.orchestrator.strategies import (
    ExecutionStrategy,
    RunnerFactory,
    create_strategy,
)
from imagematrix.probe.models import ProbeContext
from imagematrix.probe.runner import ProbeRunner

logger = logging.getLogger(__name__)

__all__ = [
    "TestOrchestrator",
]


class TestOrchestrator:
    """Probes every image of a compose artifact and aggregates the outcome.

    All targets are always attempted. The aggregate is failed when any target
    reported at least one failed check.
    """

    __test__ = False

    def __init__(
        self,
        user_config: UserConfig,
        runner_factory: RunnerFactory | None = None,
    ) -> None:
        self.user_config = user_config
        self.runner_factory = runner_factory or ProbeRunner

    def run_tests(
        self,
        agent_type: AgentType,
        artifact: ComposeArtifact,
        mode: TestMode | None = None,
        strategy: ExecutionStrategy | None = None,
    ) -> RunAggregate:
        """Run the probes for every service of the artifact.

        Args:
            agent_type: Agent type the artifact was expanded for
            artifact: Compose artifact listing the images to probe
            mode: Scheduling mode, defaults to the configured one
            strategy: Explicit strategy, overrides mode

        Returns:
            RunAggregate with one result per service, in artifact order
        """
        tests = self.user_config.tests
        if strategy is None:
            strategy = create_strategy(mode or tests.mode, max_workers=tests.jobs)

        results_root = Path(self.user_config.output.results_dir) / agent_type.value
        cancel_event = threading.Event()
        contexts = []
        for name, service in artifact.services.items():
            output_dir = self._prepare_output_dir(results_root / name)
            contexts.append(
                self._make_context(agent_type, name, service, output_dir, cancel_event)
            )

        logger.info(
            f"Testing {len(contexts)} {agent_type.value} images "
            f"({strategy.__class__.__name__})"
        )
        try:
            results = strategy.run(contexts, self.runner_factory)
        except KeyboardInterrupt:
            cancel_event.set()
            raise

        aggregate = RunAggregate(agent_type=agent_type, results=tuple(results))
        self._report(aggregate)
        return aggregate

    def _prepare_output_dir(self, output_dir: Path) -> Path:
        """Give a target a fresh, exclusively owned output directory."""
        if output_dir.exists():
            shutil.rmtree(output_dir)
        output_dir.mkdir(parents=True)
        return output_dir

    def _make_context(
        self,
        agent_type: AgentType,
        name: str,
        service: ComposeService,
        output_dir: Path,
        cancel_event: threading.Event,
    ) -> ProbeContext:
        java_version = service.java_version
        if not java_version:
            raise SerializationError(f"Compose service '{name}' has no JAVA_VERSION build argument")
        try:
            variant = RuntimeVariant.from_java_version(name.rpartition("_")[2], java_version)
        except ValueError as e:
            raise SerializationError(f"Compose service '{name}' is malformed: {e}") from e
        tests = self.user_config.tests
        return ProbeContext(
            target_name=name,
            image=service.image,
            agent_type=agent_type,
            runtime_version=service.runtime_version,
            variant=variant.name,
            java_version=variant.java_version,
            java_major=variant.major,
            output_dir=output_dir,
            debug=tests.debug,
            shell=tests.shell,
            timeout_seconds=tests.probe_timeout_seconds,
            cancel_event=cancel_event,
        )

    def _report(self, aggregate: RunAggregate) -> None:
        agent = aggregate.agent_type.value
        if not aggregate.failed:
            logger.info(
                f"All {len(aggregate.results)} {agent} images passed "
                f"({aggregate.total_checks} checks)"
            )
            return
        for target in aggregate.failed_targets:
            detail = f" ({target.error})" if target.error else ""
            logger.error(
                f"{target.image}: {target.failed} of {target.total} checks failed{detail}"
            )
        logger.error(
            f"{len(aggregate.failed_targets)} of {len(aggregate.results)} {agent} images failed "
            f"({aggregate.failed_checks} of {aggregate.total_checks} checks)"
        )
