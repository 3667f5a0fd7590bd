# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Configuration for test summary exporters."""

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from imagematrix.orchestrator.models import RunAggregate


@dataclass(slots=True)
class SummaryExporterConfig:
    """Configuration for summary exporters.

    Attributes:
        aggregate: RunAggregate to export
        output_dir: Directory where the export file will be written
    """

    aggregate: "RunAggregate"
    output_dir: Path
