# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""JSON exporter for test run aggregates."""

import orjson

from imagematrix.exporters.summary_base_exporter import SummaryBaseExporter


class SummaryJsonExporter(SummaryBaseExporter):
    """Exports a RunAggregate to JSON.

    Output structure:
    {
        "agent_type": "inbound-agent",
        "failed": false,
        "num_targets": 2,
        "num_failed_targets": 0,
        "total_checks": 14,
        "failed_checks": 0,
        "targets": [{"target_name": ..., "image": ..., "passed": ..., ...}],
        "failed_targets": []
    }
    """

    def get_file_name(self) -> str:
        return "test-summary.json"

    def _generate_content(self) -> str:
        aggregate = self._aggregate
        output = {
            "agent_type": aggregate.agent_type.value,
            "failed": aggregate.failed,
            "num_targets": len(aggregate.results),
            "num_failed_targets": len(aggregate.failed_targets),
            "total_checks": aggregate.total_checks,
            "failed_checks": aggregate.failed_checks,
            "targets": [
                {
                    "target_name": r.target_name,
                    "image": r.image,
                    "passed": r.passed,
                    "failed": r.failed,
                    "skipped": r.skipped,
                    "total": r.total,
                    "report_path": str(r.report_path) if r.report_path else None,
                    "error": r.error,
                }
                for r in aggregate.results
            ],
            "failed_targets": [t.model_dump(mode="json") for t in aggregate.failed_targets],
        }
        return orjson.dumps(output, option=orjson.OPT_INDENT_2).decode("utf-8")
