# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Shared fixtures: a scripted stand-in for the docker CLI and config helpers."""

import re
import threading
from collections.abc import Callable

import pytest

from imagematrix.common.command import CommandRequest, CommandResult
from imagematrix.common.config import UserConfig
from imagematrix.common.enums import AgentType
from imagematrix.matrix.compose import ComposeMaterializer, compose_file_path, load_compose_artifact
from imagematrix.matrix.expander import ExpansionOptions, TargetDescriptorBuilder
from imagematrix.matrix.models import AxisSet

Responder = Callable[[CommandRequest], "CommandResult | int | str | Exception | None"]


class FakeCommandRunner:
    """Records every request and answers it through an optional responder.

    The responder may return a CommandResult, a return code, a stdout string,
    an exception to raise, or None for a successful empty result.
    """

    def __init__(self, responder: Responder | None = None) -> None:
        self.responder = responder
        self.requests: list[CommandRequest] = []
        self._lock = threading.Lock()

    def run(self, request: CommandRequest) -> CommandResult:
        with self._lock:
            self.requests.append(request)
        if request.dry_run:
            return CommandResult(request=request, returncode=0)
        answer = self.responder(request) if self.responder else None
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, CommandResult):
            return answer
        if isinstance(answer, int):
            return CommandResult(request=request, returncode=answer, stderr="boom" if answer else "")
        return CommandResult(request=request, returncode=0, stdout=answer or "")

    def argvs(self, *prefix: str) -> list[tuple[str, ...]]:
        """Recorded argv tuples starting with ``prefix``."""
        return [r.argv for r in self.requests if r.argv[: len(prefix)] == prefix]


def passing_probe_responder(request: CommandRequest) -> str | None:
    """Answers docker exec probes with output satisfying every default check.

    The JDK major is read from the container name, which embeds the target name.
    """
    if request.argv[:2] != ("docker", "exec"):
        return None
    major = re.search(r"_jdk(\d+)", request.argv[2]).group(1)
    return (
        f'openjdk version "{major}.0.1" 2025-07-15\n'
        f"C:/openjdk-{major}\ngit version 2.47.0.windows.1\ngit-lfs/3.6.0\njenkins\n"
    )


@pytest.fixture
def fake_runner() -> FakeCommandRunner:
    return FakeCommandRunner()


@pytest.fixture
def runner_factory():
    """Builds FakeCommandRunners with a given responder."""
    return FakeCommandRunner


@pytest.fixture
def passing_responder():
    return passing_probe_responder


@pytest.fixture
def user_config(tmp_path) -> UserConfig:
    config = UserConfig()
    config.output.build_dir = tmp_path / "build"
    config.output.results_dir = tmp_path / "target"
    config.docker.skip_warmup = True
    return config


@pytest.fixture
def make_artifact(user_config):
    """Expands and materializes the artifact of an agent type, then loads it."""

    def _make(agent_type: AgentType = AgentType.AGENT, image_type: str = "nanoserver-ltsc2019"):
        builder = TargetDescriptorBuilder(ExpansionOptions.from_user_config(user_config))
        targets = builder.expand(
            AxisSet(
                agent_type=agent_type,
                image_type=image_type,
                runtime_version="3345.v03dee9b_f88fc",
                build_number="7",
            )
        )
        path = compose_file_path(user_config.output.build_dir, agent_type, image_type)
        ComposeMaterializer().materialize(targets, path)
        return load_compose_artifact(path)

    return _make

