# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""The fixed suite of checks run inside every agent image."""

from dataclasses import dataclass

from imagematrix.common.enums import AgentType
from imagematrix.probe.models import ProbeContext

__all__ = [
    "ProbeCheck",
    "default_suite",
]

AGENT_HOME = "C:/ProgramData/Jenkins"


@dataclass(frozen=True, slots=True)
class ProbeCheck:
    """One assertion executed in a running container.

    ``script`` and ``expected_output`` may reference ProbeContext fields with
    ``str.format`` placeholders, e.g. ``{java_major}``.

    Attributes:
        name: Test case name in the JUnit report
        script: Shell script executed through the image's shell
        expected_output: Substring the output must contain (case-insensitive)
        agent_types: Agent types the check applies to; all when empty
    """

    name: str
    script: str
    expected_output: str | None = None
    agent_types: frozenset[AgentType] = frozenset()

    def applies_to(self, agent_type: AgentType) -> bool:
        return not self.agent_types or agent_type in self.agent_types

    def render(self, context: ProbeContext) -> tuple[str, str | None]:
        """Script and expected output with the context substituted."""
        values = context.model_dump(exclude={"cancel_event"})
        expected = self.expected_output.format(**values) if self.expected_output else None
        return self.script.format(**values), expected


_CHECKS: tuple[ProbeCheck, ...] = (
    ProbeCheck(
        name="has the expected java version",
        script="java -version 2>&1",
        expected_output='version "{java_major}',
    ),
    ProbeCheck(
        name="has JAVA_HOME pointing to the runtime variant",
        script="$env:JAVA_HOME",
        expected_output="openjdk-{java_major}",
    ),
    ProbeCheck(
        name="has the agent jar",
        script=f"if (-not (Test-Path '{AGENT_HOME}/agent.jar')) {{{{ exit 1 }}}}",
    ),
    ProbeCheck(
        name="has git",
        script="git --version",
        expected_output="git version",
    ),
    ProbeCheck(
        name="has git-lfs",
        script="git lfs version",
        expected_output="git-lfs/",
    ),
    ProbeCheck(
        name="runs as the jenkins user",
        script="$env:USERNAME",
        expected_output="jenkins",
    ),
    ProbeCheck(
        name="has the inbound launcher script",
        script=f"if (-not (Test-Path '{AGENT_HOME}/jenkins-agent.ps1')) {{{{ exit 1 }}}}",
        agent_types=frozenset({AgentType.INBOUND_AGENT}),
    ),
)


def default_suite(agent_type: AgentType) -> list[ProbeCheck]:
    """Checks that apply to an agent type, in execution order."""
    return [check for check in _CHECKS if check.applies_to(agent_type)]
