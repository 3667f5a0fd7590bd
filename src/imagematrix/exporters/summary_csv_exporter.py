# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""CSV exporter for test run aggregates."""

import csv
import io

from imagematrix.exporters.summary_base_exporter import SummaryBaseExporter


class SummaryCsvExporter(SummaryBaseExporter):
    """Exports a RunAggregate to CSV, one row per target in launch order."""

    HEADER = ["target_name", "image", "passed", "failed", "skipped", "total", "error"]

    def get_file_name(self) -> str:
        return "test-summary.csv"

    def _generate_content(self) -> str:
        buf = io.StringIO()
        writer = csv.writer(buf)
        writer.writerow(self.HEADER)
        for r in self._aggregate.results:
            writer.writerow(
                [r.target_name, r.image, r.passed, r.failed, r.skipped, r.total, r.error or ""]
            )
        return buf.getvalue()
