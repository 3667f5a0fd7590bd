# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from typing import Annotated, Literal

from pydantic import Field

from imagematrix.common.config.base_config import BaseConfig
from imagematrix.common.config.cli_parameter import CLIParameter
from imagematrix.common.config.config_defaults import TestDefaults
from imagematrix.common.config.groups import Groups
from imagematrix.common.enums import TestMode, TestsDebug


class TestConfig(BaseConfig):
    """Settings for the validation probes run against every built image."""

    __test__ = False

    _CLI_GROUP = Groups.TESTS

    mode: Annotated[
        TestMode,
        Field(
            description="Run probes one target after the other (sequential) or all "
            "targets at once (concurrent).",
        ),
        CLIParameter(name=("--test-mode",), group=_CLI_GROUP),
    ] = TestMode(TestDefaults.MODE)

    jobs: Annotated[
        int,
        Field(
            ge=0,
            description="Maximum number of probe units running at once in concurrent "
            "mode. 0 means one unit per target.",
        ),
        CLIParameter(name=("--test-jobs",), group=_CLI_GROUP),
    ] = TestDefaults.JOBS

    tests_debug: Annotated[
        Literal["", "debug", "verbose"],
        Field(
            description="Probe verbosity: '' (quiet), 'debug' (each check) or "
            "'verbose' (each check and its output).",
        ),
        CLIParameter(name=("--tests-debug",), group=_CLI_GROUP),
    ] = TestDefaults.DEBUG

    probe_timeout_seconds: Annotated[
        float,
        Field(gt=0, description="Timeout in seconds for each probe command."),
        CLIParameter(name=("--probe-timeout",), group=_CLI_GROUP),
    ] = TestDefaults.PROBE_TIMEOUT_SECONDS

    shell: Annotated[
        str,
        Field(description="Shell executable inside the images used to run probe checks."),
        CLIParameter(name=("--probe-shell",), group=_CLI_GROUP),
    ] = TestDefaults.SHELL

    @property
    def debug(self) -> TestsDebug:
        return TestsDebug(self.tests_debug)
