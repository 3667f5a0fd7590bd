# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Build matrix expansion and compose artifact persistence."""

from imagematrix.matrix.compose import (
    ComposeArtifact,
    ComposeMaterializer,
    ComposeService,
    compose_file_path,
    load_compose_artifact,
)
from imagematrix.matrix.expander import ExpansionOptions, TargetDescriptorBuilder
from imagematrix.matrix.models import AxisSet, ImageType, RuntimeVariant, TargetDescriptor

__all__ = [
    "AxisSet",
    "ComposeArtifact",
    "ComposeMaterializer",
    "ComposeService",
    "ExpansionOptions",
    "ImageType",
    "RuntimeVariant",
    "TargetDescriptor",
    "TargetDescriptorBuilder",
    "compose_file_path",
    "load_compose_artifact",
]
