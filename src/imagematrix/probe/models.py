# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Data models for probe runs."""

import threading
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, computed_field

from imagematrix.common.enums import AgentType, CheckStatus, TestsDebug


class ProbeContext(BaseModel):
    """Configuration captured for exactly one probe invocation.

    Built at launch time and handed to the unit by value; units never read
    ambient process state.

    Attributes:
        target_name: Compose service name of the target
        image: Image reference under test
        agent_type: Agent type of the image
        runtime_version: Agent runtime version baked into the image
        variant: Runtime variant identifier (e.g. "jdk17")
        java_version: Full JDK version expected in the image
        java_major: JDK feature release expected in the image
        output_dir: Directory exclusively owned by this unit for its reports
        debug: Probe verbosity
        shell: Shell executable inside the image
        timeout_seconds: Timeout of each docker command
        cancel_event: Set to skip the checks that have not started yet
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    target_name: str
    image: str
    agent_type: AgentType
    runtime_version: str | None = None
    variant: str
    java_version: str
    java_major: int
    output_dir: Path
    debug: TestsDebug = TestsDebug.NONE
    shell: str = "pwsh"
    timeout_seconds: float | None = None
    cancel_event: threading.Event = Field(default_factory=threading.Event, exclude=True)

    @property
    def report_path(self) -> Path:
        return self.output_dir / "junit-results.xml"

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()


class CheckResult(BaseModel):
    """Outcome of one check of the suite."""

    model_config = ConfigDict(frozen=True)

    name: str
    status: CheckStatus
    duration_seconds: float = 0.0
    message: str = ""
    output: str = ""


class ProbeResult(BaseModel):
    """Outcome of the probe suite against one image. Never mutated once created.

    Attributes:
        target_name: Compose service name of the target
        image: Image reference under test
        checks: Individual check outcomes, in suite order
        report_path: JUnit report written for this target, if any
        error: Internal error that prevented the suite from running normally
    """

    model_config = ConfigDict(frozen=True)

    target_name: str
    image: str
    checks: tuple[CheckResult, ...] = ()
    report_path: Path | None = None
    error: str | None = None

    @computed_field
    @property
    def total(self) -> int:
        return max(len(self.checks), 1 if self.error else 0)

    @computed_field
    @property
    def passed(self) -> int:
        return sum(1 for c in self.checks if c.status == CheckStatus.PASSED)

    @computed_field
    @property
    def failed(self) -> int:
        failed = sum(1 for c in self.checks if c.status == CheckStatus.FAILED)
        if self.error and failed == 0:
            return 1
        return failed

    @computed_field
    @property
    def skipped(self) -> int:
        return sum(1 for c in self.checks if c.status == CheckStatus.SKIPPED)

    @property
    def success(self) -> bool:
        return self.failed == 0

    @classmethod
    def from_error(
        cls, target_name: str, image: str, error: str, report_path: Path | None = None
    ) -> "ProbeResult":
        return cls(target_name=target_name, image=image, error=error, report_path=report_path)
