# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Base class for exporters writing a RunAggregate to a file."""

import asyncio
from abc import ABC, abstractmethod
from pathlib import Path

from imagematrix.exporters.exporter_config import SummaryExporterConfig


class SummaryBaseExporter(ABC):
    """Writes one file per RunAggregate into the configured output directory."""

    def __init__(self, config: SummaryExporterConfig) -> None:
        self._config = config
        self._aggregate = config.aggregate

    @abstractmethod
    def get_file_name(self) -> str:
        """Name of the file written into the output directory."""

    @abstractmethod
    def _generate_content(self) -> str:
        """Render the file content."""

    async def export(self) -> Path:
        """Write the file and return its path."""
        path = Path(self._config.output_dir) / self.get_file_name()
        content = self._generate_content()
        await asyncio.to_thread(path.parent.mkdir, parents=True, exist_ok=True)
        await asyncio.to_thread(path.write_text, content, encoding="utf-8")
        return path
