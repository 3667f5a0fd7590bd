# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Matrix pipeline: expand, materialize, build, test and publish per agent type."""

import asyncio
import logging
from pathlib import Path

from rich.console import Console

from imagematrix.common.command import CommandRunner
from imagematrix.common.config import UserConfig
from imagematrix.common.enums import AgentType, BuildTarget, Stage
from imagematrix.common.exceptions import BuildEngineError, ProbeFailure
from imagematrix.exporters import (
    SummaryConsoleExporter,
    SummaryCsvExporter,
    SummaryExporterConfig,
    SummaryJsonExporter,
)
from imagematrix.matrix.compose import (
    ComposeArtifact,
    ComposeMaterializer,
    compose_file_path,
    load_compose_artifact,
)
from imagematrix.matrix.expander import ExpansionOptions, TargetDescriptorBuilder
from imagematrix.matrix.models import AxisSet, TargetDescriptor
from imagematrix.orchestrator.build import MatrixBuildOrchestrator
from imagematrix.orchestrator.models import AgentTypeOutcome, BuildResult, RunAggregate
from imagematrix.orchestrator.publish import PublishDriver
from imagematrix.orchestrator.testing import TestOrchestrator
from imagematrix.orchestrator.warmup import BaseImageWarmup
from imagematrix.probe.runner import ProbeRunner

logger = logging.getLogger(__name__)

__all__ = [
    "MatrixPipeline",
]


class MatrixPipeline:
    """Drives every stage of the selected target for each agent type.

    Expansion and materialization happen for all agent types before any build,
    so malformed axes abort the run before anything is built. Afterwards each
    agent type runs its stages on its own: a failed build skips that agent
    type's remaining stages and the loop moves on, failed tests are reported
    once every probe ran, and a failed publish aborts the whole run.
    """

    def __init__(
        self,
        user_config: UserConfig,
        command_runner: CommandRunner | None = None,
        console: Console | None = None,
    ) -> None:
        self.user_config = user_config
        self.command_runner = command_runner or CommandRunner()
        self.console = console or Console()

        docker = user_config.docker
        self.expander = TargetDescriptorBuilder(ExpansionOptions.from_user_config(user_config))
        self.materializer = ComposeMaterializer()
        self.warmup = BaseImageWarmup(self.command_runner, timeout_seconds=docker.timeout_seconds)
        self.builder = MatrixBuildOrchestrator(
            self.command_runner,
            log_dir=Path(user_config.output.build_dir) / "logs",
            pull=docker.pull,
            timeout_seconds=docker.timeout_seconds,
        )
        self.tester = TestOrchestrator(
            user_config, runner_factory=lambda: ProbeRunner(self.command_runner)
        )
        self.publisher = PublishDriver(self.command_runner, timeout_seconds=docker.timeout_seconds)

    def axes_for(self, agent_type: AgentType) -> AxisSet:
        matrix = self.user_config.matrix
        return AxisSet(
            agent_type=agent_type,
            image_type=matrix.image_type,
            runtime_version=matrix.runtime_version,
            build_number=matrix.build_number,
        )

    def prepare(
        self, agent_type: AgentType
    ) -> tuple[list[TargetDescriptor], ComposeArtifact]:
        """Expand the axes of an agent type and materialize its compose artifact.

        Raises:
            InvalidAxisError: If the axes are malformed
            SerializationError: If the artifact cannot be written or read back
        """
        matrix = self.user_config.matrix
        targets = self.expander.expand(self.axes_for(agent_type))
        path = compose_file_path(self.user_config.output.build_dir, agent_type, matrix.image_type)
        self.materializer.materialize(targets, path, force=matrix.overwrite_compose_file)
        return targets, load_compose_artifact(path)

    def execute(self, target: BuildTarget) -> list[AgentTypeOutcome]:
        """Run the stages of ``target`` for every agent type of the outer matrix.

        Returns:
            One outcome per agent type, in processing order

        Raises:
            InvalidAxisError: Before any build, on malformed axes
            SerializationError: Before any build, on an unusable compose artifact
            PublishError: Immediately, when publishing fails
        """
        agent_types = self.user_config.matrix.agent_types
        self._banner(f"Preparing {target.value} for {', '.join(a.value for a in agent_types)}")
        prepared = {agent_type: self.prepare(agent_type) for agent_type in agent_types}

        outcomes = []
        for agent_type, (targets, artifact) in prepared.items():
            outcomes.append(self._run_agent_type(agent_type, target, targets, artifact))
        return outcomes

    def _run_agent_type(
        self,
        agent_type: AgentType,
        target: BuildTarget,
        targets: list[TargetDescriptor],
        artifact: ComposeArtifact,
    ) -> AgentTypeOutcome:
        outcome = AgentTypeOutcome(agent_type=agent_type)
        dry_run = self.user_config.matrix.dry_run

        for stage in target.stages:
            self._banner(f"{stage.value.capitalize()} {agent_type.value} ({artifact.path.name})")
            if stage == Stage.BUILD:
                try:
                    outcome.build = self._build(targets, artifact, dry_run)
                except BuildEngineError as e:
                    return self._fail(outcome, stage, BuildEngineError.exit_code, str(e))
            elif stage == Stage.TEST:
                if dry_run:
                    for name, service in artifact.services.items():
                        logger.info(f"[dry-run] would probe {service.image} ({name})")
                else:
                    outcome.tests = self._test(agent_type, artifact)
                    if outcome.tests.failed:
                        failed = [t.target_name for t in outcome.tests.failed_targets]
                        error = ProbeFailure(
                            f"Tests failed for {len(failed)} {agent_type.value} images",
                            failed_targets=failed,
                        )
                        return self._fail(outcome, stage, error.exit_code, str(error))
            elif stage == Stage.PUBLISH:
                self.publisher.publish(artifact, dry_run=dry_run)
            outcome.completed_stages.append(stage)

        logger.info(f"{agent_type.value}: {', '.join(s.value for s in outcome.completed_stages)} succeeded")
        return outcome

    def _build(
        self, targets: list[TargetDescriptor], artifact: ComposeArtifact, dry_run: bool
    ) -> BuildResult:
        docker = self.user_config.docker
        if not dry_run and not docker.skip_warmup:
            self.warmup.warm(targets)
        result = self.builder.build_all(artifact, parallel=docker.parallel, dry_run=dry_run)
        if not result.success:
            raise BuildEngineError(
                f"Build of {artifact.path.name} failed with exit code {result.returncode}",
                returncode=result.returncode,
            )
        return result

    def _test(self, agent_type: AgentType, artifact: ComposeArtifact) -> RunAggregate:
        aggregate = self.tester.run_tests(agent_type, artifact)
        self._export(aggregate)
        return aggregate

    def _export(self, aggregate: RunAggregate) -> None:
        output_dir = Path(self.user_config.output.results_dir) / aggregate.agent_type.value
        config = SummaryExporterConfig(aggregate=aggregate, output_dir=output_dir)

        async def export_artifacts() -> tuple[Path, Path]:
            return await asyncio.gather(
                SummaryJsonExporter(config).export(),
                SummaryCsvExporter(config).export(),
            )

        json_path, csv_path = asyncio.run(export_artifacts())
        logger.info(f"Test summary written to: {json_path}, {csv_path}")
        SummaryConsoleExporter(aggregate).export(self.console)

    def _fail(
        self, outcome: AgentTypeOutcome, stage: Stage, exit_code: int, message: str
    ) -> AgentTypeOutcome:
        outcome.failed_stage = stage
        outcome.exit_code = exit_code
        outcome.message = message
        logger.error(f"{outcome.agent_type.value}: {stage.value} failed: {message}")
        return outcome

    def _banner(self, title: str) -> None:
        logger.info("=" * 80)
        logger.info(title)
        logger.info("=" * 80)
