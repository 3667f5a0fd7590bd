# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from pathlib import Path
from typing import Annotated, Literal

from pydantic import Field

from imagematrix.common.config.base_config import BaseConfig
from imagematrix.common.config.cli_parameter import CLIParameter
from imagematrix.common.config.config_defaults import OutputDefaults
from imagematrix.common.config.groups import Groups


class OutputConfig(BaseConfig):
    """Where artifacts, logs and test reports are written."""

    _CLI_GROUP = Groups.OUTPUT

    build_dir: Annotated[
        Path,
        Field(description="Directory holding compose artifacts and build logs."),
        CLIParameter(name=("--build-dir",), group=_CLI_GROUP),
    ] = OutputDefaults.BUILD_DIR

    results_dir: Annotated[
        Path,
        Field(description="Directory holding per-target test reports."),
        CLIParameter(name=("--results-dir",), group=_CLI_GROUP),
    ] = OutputDefaults.RESULTS_DIR

    log_level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR"],
        Field(description="Console log level."),
        CLIParameter(name=("--log-level",), group=_CLI_GROUP),
    ] = OutputDefaults.LOG_LEVEL
