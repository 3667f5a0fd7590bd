# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from typing import Annotated

from pydantic import Field, field_validator, model_validator

from imagematrix.common.config.base_config import BaseConfig
from imagematrix.common.config.cli_parameter import CLIParameter
from imagematrix.common.config.config_defaults import MatrixDefaults
from imagematrix.common.config.groups import Groups
from imagematrix.common.enums import AgentType


class MatrixConfig(BaseConfig):
    """Axes of the build matrix and the options that shape image references."""

    _CLI_GROUP = Groups.MATRIX

    runtime_version: Annotated[
        str,
        Field(
            min_length=1,
            description="Version of the agent runtime embedded in every image "
            "(passed to the build as the VERSION argument).",
        ),
        CLIParameter(name=("--runtime-version", "-v"), group=_CLI_GROUP),
    ] = MatrixDefaults.RUNTIME_VERSION

    agent_type: Annotated[
        AgentType | None,
        Field(
            description="Agent type to build. When omitted, every allowed agent type "
            "is processed one after the other.",
        ),
        CLIParameter(name=("--agent-type",), group=_CLI_GROUP),
    ] = None

    allowed_agent_types: Annotated[
        list[AgentType],
        Field(
            min_length=1,
            description="Agent types this invocation is allowed to process.",
        ),
        CLIParameter(name=("--allowed-agent-types",), group=_CLI_GROUP),
    ] = list(AgentType)

    image_type: Annotated[
        str,
        Field(
            description="Composite '<flavor>-<version>' image type, e.g. nanoserver-ltsc2019.",
        ),
        CLIParameter(name=("--image-type",), group=_CLI_GROUP),
    ] = MatrixDefaults.IMAGE_TYPE

    build_number: Annotated[
        str,
        Field(
            min_length=1,
            description="Monotonic build number appended to versioned tags.",
        ),
        CLIParameter(name=("--build-number",), group=_CLI_GROUP),
    ] = MatrixDefaults.BUILD_NUMBER

    registry: Annotated[
        str,
        Field(description="Registry host of the produced images."),
        CLIParameter(name=("--registry",), group=_CLI_GROUP),
    ] = MatrixDefaults.REGISTRY

    organisation: Annotated[
        str,
        Field(description="Registry organisation of the produced images."),
        CLIParameter(name=("--organisation",), group=_CLI_GROUP),
    ] = MatrixDefaults.ORGANISATION

    push_versions: Annotated[
        bool,
        Field(
            description="Also tag images with '<runtime-version>-<build-number>' prefixed tags.",
        ),
        CLIParameter(name=("--push-versions",), group=_CLI_GROUP),
    ] = MatrixDefaults.PUSH_VERSIONS

    overwrite_compose_file: Annotated[
        bool,
        Field(
            description="Regenerate the compose artifact even if it already exists.",
        ),
        CLIParameter(name=("--overwrite-compose-file",), group=_CLI_GROUP),
    ] = MatrixDefaults.OVERWRITE_COMPOSE_FILE

    dry_run: Annotated[
        bool,
        Field(
            description="Only report the commands that would run. Nothing is built, "
            "pulled, tested or pushed.",
        ),
        CLIParameter(name=("--dry-run",), group=_CLI_GROUP),
    ] = MatrixDefaults.DRY_RUN

    @field_validator("build_number", mode="before")
    @classmethod
    def coerce_build_number(cls, v: str | int) -> str:
        """Accept integer build numbers from programmatic callers."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @model_validator(mode="after")
    def check_agent_type_allowed(self) -> "MatrixConfig":
        if self.agent_type is not None and self.agent_type not in self.allowed_agent_types:
            allowed = ", ".join(a.value for a in self.allowed_agent_types)
            raise ValueError(
                f"Agent type '{self.agent_type.value}' is not allowed. "
                f"Allowed agent types: {allowed}"
            )
        return self

    @property
    def agent_types(self) -> list[AgentType]:
        """Agent types of the outer matrix loop, in processing order."""
        if self.agent_type is not None:
            return [self.agent_type]
        return [a for a in AgentType if a in self.allowed_agent_types]
