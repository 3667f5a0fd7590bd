# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Expansion of matrix axes into concrete build targets."""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from imagematrix.common.config.config_defaults import DockerDefaults, RuntimeDefaults
from imagematrix.common.exceptions import InvalidAxisError
from imagematrix.matrix.models import AxisSet, ImageType, RuntimeVariant, TargetDescriptor

if TYPE_CHECKING:
    from imagematrix.common.config import UserConfig

logger = logging.getLogger(__name__)

__all__ = [
    "ExpansionOptions",
    "TargetDescriptorBuilder",
]


@dataclass(frozen=True, slots=True)
class ExpansionOptions:
    """Everything besides the axes that shapes a target descriptor.

    Attributes:
        variants: Supported runtime variants; the first one is the default
        registry: Registry host of the produced images
        organisation: Registry organisation of the produced images
        push_versions: Add the fully versioned tag in front of the others
        context_root: Directory holding one build context per OS flavor
        base_image_registry: Repository prefix of the Windows base images
        java_home_template: Template of the JAVA_HOME build argument
        platform: Target platform of every image
        output: Output routing handed to the build engine
        tools_windows_versions: Windows releases whose tools image uses another tag
    """

    variants: tuple[RuntimeVariant, ...]
    registry: str = "docker.io"
    organisation: str = "jenkins"
    push_versions: bool = False
    context_root: str = DockerDefaults.CONTEXT_ROOT
    dockerfile: str = DockerDefaults.DOCKERFILE
    base_image_registry: str = DockerDefaults.BASE_IMAGE_REGISTRY
    java_home_template: str = RuntimeDefaults.JAVA_HOME_TEMPLATE
    platform: str = DockerDefaults.PLATFORM
    output: str = DockerDefaults.OUTPUT
    tools_windows_versions: dict[str, str] = field(
        default_factory=lambda: dict(DockerDefaults.TOOLS_WINDOWS_VERSIONS)
    )

    @classmethod
    def from_user_config(cls, user_config: "UserConfig") -> "ExpansionOptions":
        return cls(
            variants=tuple(user_config.runtime.variants),
            registry=user_config.matrix.registry,
            organisation=user_config.matrix.organisation,
            push_versions=user_config.matrix.push_versions,
            context_root=user_config.docker.context_root,
            base_image_registry=user_config.docker.base_image_registry,
            java_home_template=user_config.runtime.java_home_template,
        )


class TargetDescriptorBuilder:
    """Expands an AxisSet into one TargetDescriptor per runtime variant.

    Expansion is a pure function of the axes and the options: no I/O, no clock,
    and identical inputs yield descriptors that compare equal.
    """

    def __init__(self, options: ExpansionOptions) -> None:
        if not options.variants:
            raise InvalidAxisError("At least one runtime variant is required for expansion.")
        self.options = options

    def expand(self, axes: AxisSet) -> list[TargetDescriptor]:
        """Build the descriptors for every runtime variant, in registry order.

        Raises:
            InvalidAxisError: If the image type token is malformed or two targets
                would share a name
        """
        image_type = ImageType.parse(axes.image_type)
        targets = [self._describe(axes, image_type, variant) for variant in self.options.variants]

        names = [t.name for t in targets]
        if len(set(names)) != len(names):
            raise InvalidAxisError(f"Matrix expansion produced duplicate target names: {names}")

        logger.debug(
            f"Expanded {axes.agent_type.value} {image_type.token} into {len(targets)} targets: "
            f"{', '.join(names)}"
        )
        return targets

    def target_name(self, axes: AxisSet, image_type: ImageType, variant: RuntimeVariant) -> str:
        return f"{axes.agent_type.value}_{image_type.token}_{variant.name}"

    def repository(self, axes: AxisSet) -> str:
        return f"{self.options.registry}/{self.options.organisation}/{axes.agent_type.value}"

    def tags(self, axes: AxisSet, image_type: ImageType, variant: RuntimeVariant) -> tuple[str, ...]:
        """Image references for one target, most specific first."""
        repository = self.repository(axes)
        suffixes = []
        if self.options.push_versions:
            suffixes.append(
                f"{axes.runtime_version}-{axes.build_number}-{variant.name}-{image_type.token}"
            )
        suffixes.append(f"{variant.name}-{image_type.token}")
        if variant == self.options.variants[0]:
            suffixes.append(image_type.token)
        return tuple(f"{repository}:{suffix}" for suffix in suffixes)

    def _describe(
        self, axes: AxisSet, image_type: ImageType, variant: RuntimeVariant
    ) -> TargetDescriptor:
        options = self.options
        args = {
            "VERSION": axes.runtime_version,
            "BUILD_NUMBER": axes.build_number,
            "JAVA_VERSION": variant.java_version,
            "JAVA_HOME": options.java_home_template.format(major=variant.major),
            "WINDOWS_FLAVOR": image_type.flavor,
            "WINDOWS_VERSION_TAG": image_type.version,
            "TOOLS_WINDOWS_VERSION": options.tools_windows_versions.get(
                image_type.version, image_type.version
            ),
        }
        return TargetDescriptor(
            name=self.target_name(axes, image_type, variant),
            context=f"{options.context_root.rstrip('/')}/{image_type.flavor}",
            dockerfile=options.dockerfile,
            tags=self.tags(axes, image_type, variant),
            args=args,
            platforms=(options.platform,),
            output=(options.output,),
            base_image=f"{options.base_image_registry}/{image_type.flavor}:{image_type.version}",
            variant=variant,
        )
