# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for PublishDriver."""

import pytest

from imagematrix.common.command import CommandError
from imagematrix.common.exceptions import PublishError
from imagematrix.orchestrator.publish import PublishDriver


class TestPublishDriver:
    """Tests for PublishDriver.publish."""

    def test_pushes_every_tag_once(self, make_artifact, fake_runner):
        artifact = make_artifact()

        assert PublishDriver(fake_runner).publish(artifact) == 0

        pushed = [argv[2] for argv in fake_runner.argvs("docker", "push")]
        assert pushed == [
            "docker.io/jenkins/agent:jdk17-nanoserver-ltsc2019",
            "docker.io/jenkins/agent:nanoserver-ltsc2019",
            "docker.io/jenkins/agent:jdk21-nanoserver-ltsc2019",
        ]

    def test_dry_run_only_reports(self, make_artifact, fake_runner):
        PublishDriver(fake_runner).publish(make_artifact(), dry_run=True)

        assert fake_runner.requests
        assert all(r.dry_run for r in fake_runner.requests)

    def test_first_failure_aborts(self, make_artifact, runner_factory):
        fake = runner_factory(lambda request: 1)

        with pytest.raises(PublishError, match="failed with exit code 1") as exc_info:
            PublishDriver(fake).publish(make_artifact())

        assert exc_info.value.returncode == 1
        assert exc_info.value.exit_code == 4
        assert len(fake.requests) == 1

    def test_engine_error_becomes_publish_error(self, make_artifact, runner_factory):
        fake = runner_factory(lambda request: CommandError("Executable not found: docker"))

        with pytest.raises(PublishError, match="Executable not found"):
            PublishDriver(fake).publish(make_artifact())
