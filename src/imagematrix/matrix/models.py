# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Data models for build matrix expansion."""

import re
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from imagematrix.common.enums import AgentType
from imagematrix.common.exceptions import InvalidAxisError

__all__ = [
    "AxisSet",
    "ImageType",
    "RuntimeVariant",
    "TargetDescriptor",
]

IMAGE_TYPE_SEPARATOR = "-"


class ImageType(BaseModel):
    """OS flavor and OS version, always parsed together from one composite token.

    Attributes:
        flavor: Windows flavor (e.g. "nanoserver", "windowsservercore")
        version: Windows release (e.g. "ltsc2019")
    """

    model_config = ConfigDict(frozen=True)

    flavor: str
    version: str

    @classmethod
    def parse(cls, token: str) -> "ImageType":
        """Split a '<flavor>-<version>' token.

        Raises:
            InvalidAxisError: If the token does not split into exactly two non-empty parts
        """
        if not isinstance(token, str):
            raise InvalidAxisError(f"Image type must be a string, got {type(token).__name__}")
        parts = token.split(IMAGE_TYPE_SEPARATOR)
        if len(parts) != 2 or not all(part.strip() for part in parts):
            raise InvalidAxisError(
                f"Invalid image type: '{token}'. Expected '<flavor>{IMAGE_TYPE_SEPARATOR}<version>' "
                f"with exactly two non-empty parts, e.g. nanoserver-ltsc2019"
            )
        return cls(flavor=parts[0], version=parts[1])

    @property
    def token(self) -> str:
        return f"{self.flavor}{IMAGE_TYPE_SEPARATOR}{self.version}"

    def __str__(self) -> str:
        return self.token


class RuntimeVariant(BaseModel):
    """One supported flavor of the embedded Java runtime.

    Attributes:
        name: Identifier used in target names and tags (e.g. "jdk17")
        major: Java feature release
        java_version: Full JDK version passed to the build (e.g. "17.0.16_8")
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(pattern=r"^[A-Za-z0-9][A-Za-z0-9._]*$")
    major: int = Field(ge=1)
    java_version: str = Field(min_length=1)

    @classmethod
    def from_java_version(cls, name: str, java_version: str) -> "RuntimeVariant":
        """Derive the major release from the leading digits of the JDK version."""
        match = re.match(r"^(\d+)", java_version)
        if match is None:
            raise ValueError(
                f"Invalid java version '{java_version}' for runtime variant '{name}'. "
                f"It must start with the major release, e.g. 17.0.16_8"
            )
        return cls(name=name, major=int(match.group(1)), java_version=java_version)


class AxisSet(BaseModel):
    """The fixed axes of one matrix expansion.

    Agent type and image type are held fixed; the runtime variant dimension is
    supplied separately by the runtime registry.
    """

    model_config = ConfigDict(frozen=True)

    agent_type: AgentType
    image_type: str
    runtime_version: str = Field(min_length=1)
    build_number: str = Field(min_length=1)

    @property
    def parsed_image_type(self) -> ImageType:
        return ImageType.parse(self.image_type)


class TargetDescriptor(BaseModel):
    """Declarative definition of one buildable image variant.

    Attributes:
        name: Unique target name within one expansion
        context: Build context directory
        dockerfile: Dockerfile path relative to the context
        tags: Image references, most specific first
        args: Build arguments
        platforms: Target platforms
        output: Output routing for the build engine (never written to compose)
        base_image: Base image the target depends on
        variant: Runtime variant this target was expanded for
    """

    model_config = ConfigDict(frozen=True)

    # Fields meaningful only to the build engine's output routing or to this process.
    SINK_ONLY_FIELDS: ClassVar[frozenset[str]] = frozenset({"name", "output", "base_image", "variant"})

    name: str
    context: str
    dockerfile: str
    tags: tuple[str, ...] = Field(min_length=1)
    args: dict[str, str]
    platforms: tuple[str, ...] = ()
    output: tuple[str, ...] = ()
    base_image: str
    variant: RuntimeVariant

    @property
    def image(self) -> str:
        """Primary image reference (the first tag)."""
        return self.tags[0]

    def build_section(self) -> dict[str, Any]:
        """Compose 'build' mapping: the full descriptor minus sink-only fields."""
        data = self.model_dump(mode="json", exclude=set(self.SINK_ONLY_FIELDS))
        return {key: data[key] for key in ("context", "dockerfile", "args", "tags", "platforms")}
