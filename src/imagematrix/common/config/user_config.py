# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from typing import Annotated

from cyclopts import Parameter
from pydantic import Field

from imagematrix.common.config.base_config import BaseConfig
from imagematrix.common.config.docker_config import DockerConfig
from imagematrix.common.config.matrix_config import MatrixConfig
from imagematrix.common.config.output_config import OutputConfig
from imagematrix.common.config.runtime_config import RuntimeConfig
from imagematrix.common.config.test_config import TestConfig


class UserConfig(BaseConfig):
    """Complete configuration of one imagematrix invocation.

    Every sub-config is flattened into the top-level CLI namespace.
    """

    matrix: Annotated[MatrixConfig, Parameter(name="*")] = Field(
        default_factory=MatrixConfig
    )
    runtime: Annotated[RuntimeConfig, Parameter(name="*")] = Field(
        default_factory=RuntimeConfig
    )
    docker: Annotated[DockerConfig, Parameter(name="*")] = Field(
        default_factory=DockerConfig
    )
    tests: Annotated[TestConfig, Parameter(name="*")] = Field(
        default_factory=TestConfig
    )
    output: Annotated[OutputConfig, Parameter(name="*")] = Field(
        default_factory=OutputConfig
    )
