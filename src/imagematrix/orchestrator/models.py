# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Data models for matrix orchestration."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, computed_field

from imagematrix.common.enums import AgentType, Stage
from imagematrix.probe.models import ProbeResult


class BuildResult(BaseModel):
    """Outcome of one matrix build invocation.

    Attributes:
        compose_file: Compose artifact that was built
        services: Services requested from the build engine
        returncode: Exit status of the build engine
        dry_run: Whether the build was only reported
        log_path: Build engine output, passed through untouched
        command: Command line handed to the build engine
    """

    model_config = ConfigDict(frozen=True)

    compose_file: Path
    services: tuple[str, ...] = ()
    returncode: int
    dry_run: bool = False
    log_path: Path | None = None
    command: str = ""

    @property
    def success(self) -> bool:
        return self.returncode == 0


class FailedTarget(BaseModel):
    """Identifies one target whose probes reported failures."""

    model_config = ConfigDict(frozen=True)

    target_name: str
    image: str
    failed: int
    total: int
    error: str | None = None


class RunAggregate(BaseModel):
    """Test outcome of one agent type's matrix.

    Attributes:
        agent_type: Agent type the probes ran for
        results: Per-target probe results, in launch order
    """

    model_config = ConfigDict(frozen=True)

    agent_type: AgentType
    results: tuple[ProbeResult, ...] = ()

    @computed_field
    @property
    def failed(self) -> bool:
        """Logical OR of all per-target failures."""
        return any(not r.success for r in self.results)

    @computed_field
    @property
    def total_checks(self) -> int:
        return sum(r.total for r in self.results)

    @computed_field
    @property
    def failed_checks(self) -> int:
        return sum(r.failed for r in self.results)

    @property
    def failed_targets(self) -> list[FailedTarget]:
        return [
            FailedTarget(
                target_name=r.target_name,
                image=r.image,
                failed=r.failed,
                total=r.total,
                error=r.error,
            )
            for r in self.results
            if not r.success
        ]


class AgentTypeOutcome(BaseModel):
    """What happened to one agent type of the outer matrix loop.

    Attributes:
        agent_type: Agent type processed
        completed_stages: Stages that finished successfully
        failed_stage: Stage that failed, if any
        exit_code: Process exit code contributed by this agent type
        message: Human-readable reason of the failure
        build: Build result, when the build stage ran
        tests: Test aggregate, when the test stage ran
    """

    agent_type: AgentType
    completed_stages: list[Stage] = Field(default_factory=list)
    failed_stage: Stage | None = None
    exit_code: int = 0
    message: str | None = None
    build: BuildResult | None = None
    tests: RunAggregate | None = None

    @property
    def success(self) -> bool:
        return self.exit_code == 0
