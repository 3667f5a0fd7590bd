# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from typing import Annotated, Any

from pydantic import Field, field_validator

from imagematrix.common.config.base_config import BaseConfig
from imagematrix.common.config.cli_parameter import CLIParameter
from imagematrix.common.config.config_defaults import RuntimeDefaults
from imagematrix.common.config.groups import Groups
from imagematrix.matrix.models import RuntimeVariant


def _default_variants() -> list[RuntimeVariant]:
    return [
        RuntimeVariant(name=name, major=major, java_version=java_version)
        for name, major, java_version in RuntimeDefaults.VARIANTS
    ]


class RuntimeConfig(BaseConfig):
    """Registry of the runtime variants every image is built for."""

    _CLI_GROUP = Groups.RUNTIME

    variants: Annotated[
        Any,  # CLI passes a string, validator converts to list[RuntimeVariant]
        Field(
            description="Comma-separated runtime variants as '<name>=<java-version>', "
            "e.g. 'jdk17=17.0.16_8,jdk21=21.0.8_9'. The first variant is the default "
            "one and also receives the short '<image-type>' tag.",
        ),
        CLIParameter(name=("--runtime-variants",), group=_CLI_GROUP),
    ] = Field(default_factory=_default_variants)

    java_home_template: Annotated[
        str,
        Field(description="Template of the JAVA_HOME build argument, '{major}' is substituted."),
        CLIParameter(name=("--java-home-template",), group=_CLI_GROUP),
    ] = RuntimeDefaults.JAVA_HOME_TEMPLATE

    @field_validator("variants", mode="before")
    @classmethod
    def parse_variants(cls, v: Any) -> list[RuntimeVariant]:
        """Parse runtime variants from CLI input.

        Accepts a comma-separated string of '<name>=<java-version>' pairs, or a
        list of RuntimeVariant instances / dicts.

        Raises:
            ValueError: If the input is empty, malformed or contains duplicate names
        """
        if isinstance(v, str):
            variants = []
            for part in (p.strip() for p in v.split(",")):
                if not part:
                    continue
                name, sep, java_version = part.partition("=")
                if not sep or not name.strip() or not java_version.strip():
                    raise ValueError(
                        f"Invalid runtime variant: '{part}'. "
                        f"Expected '<name>=<java-version>', e.g. jdk17=17.0.16_8"
                    )
                variants.append(
                    RuntimeVariant.from_java_version(name.strip(), java_version.strip())
                )
        elif isinstance(v, list):
            variants = [
                item if isinstance(item, RuntimeVariant) else RuntimeVariant.model_validate(item)
                for item in v
            ]
        else:
            raise ValueError(
                f"Invalid runtime variants type {type(v).__name__}. "
                f"Expected a string or a list."
            )

        if not variants:
            raise ValueError("At least one runtime variant is required.")
        names = [variant.name for variant in variants]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate runtime variant names: {', '.join(duplicates)}")
        return variants

    @property
    def default_variant(self) -> RuntimeVariant:
        return self.variants[0]
