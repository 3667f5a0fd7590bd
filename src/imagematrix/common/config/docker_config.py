# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from typing import Annotated

from pydantic import Field

from imagematrix.common.config.base_config import BaseConfig
from imagematrix.common.config.cli_parameter import CLIParameter
from imagematrix.common.config.config_defaults import DockerDefaults
from imagematrix.common.config.groups import Groups


class DockerConfig(BaseConfig):
    """Settings for the docker CLI used as build engine, probe host and publisher."""

    _CLI_GROUP = Groups.DOCKER

    base_image_registry: Annotated[
        str,
        Field(description="Repository prefix of the Windows base images."),
        CLIParameter(name=("--base-image-registry",), group=_CLI_GROUP),
    ] = DockerDefaults.BASE_IMAGE_REGISTRY

    context_root: Annotated[
        str,
        Field(description="Directory holding one build context per OS flavor."),
        CLIParameter(name=("--context-root",), group=_CLI_GROUP),
    ] = DockerDefaults.CONTEXT_ROOT

    parallel: Annotated[
        bool,
        Field(description="Build all targets of a compose artifact in parallel."),
        CLIParameter(name=("--parallel",), negative="--no-parallel", group=_CLI_GROUP),
    ] = DockerDefaults.PARALLEL

    pull: Annotated[
        bool,
        Field(description="Always attempt to pull newer base images while building."),
        CLIParameter(name=("--pull",), negative="--no-pull", group=_CLI_GROUP),
    ] = DockerDefaults.PULL

    skip_warmup: Annotated[
        bool,
        Field(description="Do not pre-pull base images before building."),
        CLIParameter(name=("--skip-warmup",), group=_CLI_GROUP),
    ] = DockerDefaults.SKIP_WARMUP

    timeout_seconds: Annotated[
        float | None,
        Field(
            gt=0,
            description="Timeout in seconds for individual docker pull/build/push commands. "
            "No timeout when unset.",
        ),
        CLIParameter(name=("--docker-timeout",), group=_CLI_GROUP),
    ] = DockerDefaults.TIMEOUT_SECONDS
