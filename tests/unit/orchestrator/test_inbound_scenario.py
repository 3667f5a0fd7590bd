# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Expand, materialize, dry-run build and sequential tests for one inbound-agent image type."""

from unittest.mock import patch

from imagematrix.common.command import CommandRunner
from imagematrix.common.enums import AgentType, TestMode
from imagematrix.matrix.compose import ComposeMaterializer, compose_file_path, load_compose_artifact
from imagematrix.matrix.expander import ExpansionOptions, TargetDescriptorBuilder
from imagematrix.matrix.models import AxisSet
from imagematrix.orchestrator.build import MatrixBuildOrchestrator
from imagematrix.orchestrator.testing import TestOrchestrator
from imagematrix.probe.runner import ProbeRunner


def test_inbound_agent_nanoserver_ltsc2019(user_config, runner_factory, passing_responder):
    axes = AxisSet(
        agent_type=AgentType.INBOUND_AGENT,
        image_type="nanoserver-ltsc2019",
        runtime_version="3345.v03dee9b_f88fc",
        build_number="1",
    )
    targets = TargetDescriptorBuilder(ExpansionOptions.from_user_config(user_config)).expand(axes)

    assert [t.name for t in targets] == [
        "inbound-agent_nanoserver-ltsc2019_jdk17",
        "inbound-agent_nanoserver-ltsc2019_jdk21",
    ]
    assert {t.args["WINDOWS_FLAVOR"] for t in targets} == {"nanoserver"}
    assert {t.args["WINDOWS_VERSION_TAG"] for t in targets} == {"ltsc2019"}

    build_dir = user_config.output.build_dir
    path = compose_file_path(build_dir, AgentType.INBOUND_AGENT, "nanoserver-ltsc2019")
    ComposeMaterializer().materialize(targets, path)
    assert [p.name for p in build_dir.iterdir()] == [path.name]
    artifact = load_compose_artifact(path)

    with patch("imagematrix.common.command.subprocess") as mock_subprocess:
        build = MatrixBuildOrchestrator(CommandRunner(), log_dir=build_dir / "logs").build_all(
            artifact, dry_run=True
        )
    assert build.success
    mock_subprocess.run.assert_not_called()
    mock_subprocess.Popen.assert_not_called()
    assert not (build_dir / "logs").exists()

    fake = runner_factory(passing_responder)
    aggregate = TestOrchestrator(user_config, runner_factory=lambda: ProbeRunner(fake)).run_tests(
        AgentType.INBOUND_AGENT, artifact, mode=TestMode.SEQUENTIAL
    )

    assert aggregate.failed is False
    assert len(aggregate.results) == 2
