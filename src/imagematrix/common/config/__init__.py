# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from imagematrix.common.config.base_config import BaseConfig
from imagematrix.common.config.cli_parameter import CLIParameter
from imagematrix.common.config.docker_config import DockerConfig
from imagematrix.common.config.groups import Groups
from imagematrix.common.config.matrix_config import MatrixConfig
from imagematrix.common.config.output_config import OutputConfig
from imagematrix.common.config.runtime_config import RuntimeConfig
from imagematrix.common.config.test_config import TestConfig
from imagematrix.common.config.user_config import UserConfig

__all__ = [
    "BaseConfig",
    "CLIParameter",
    "DockerConfig",
    "Groups",
    "MatrixConfig",
    "OutputConfig",
    "RuntimeConfig",
    "TestConfig",
    "UserConfig",
]
