# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Exporters for test run aggregates."""

from imagematrix.exporters.console_exporter import SummaryConsoleExporter
from imagematrix.exporters.exporter_config import SummaryExporterConfig
from imagematrix.exporters.summary_base_exporter import SummaryBaseExporter
from imagematrix.exporters.summary_csv_exporter import SummaryCsvExporter
from imagematrix.exporters.summary_json_exporter import SummaryJsonExporter

__all__ = [
    "SummaryBaseExporter",
    "SummaryConsoleExporter",
    "SummaryCsvExporter",
    "SummaryExporterConfig",
    "SummaryJsonExporter",
]
