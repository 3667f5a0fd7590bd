# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for test summary exporters."""

import asyncio
import csv
import io

import orjson
import pytest
from rich.console import Console

from imagematrix.common.enums import AgentType, CheckStatus
from imagematrix.exporters import (
    SummaryConsoleExporter,
    SummaryCsvExporter,
    SummaryExporterConfig,
    SummaryJsonExporter,
)
from imagematrix.orchestrator.models import RunAggregate
from imagematrix.probe.models import CheckResult, ProbeResult


@pytest.fixture
def aggregate():
    return RunAggregate(
        agent_type=AgentType.INBOUND_AGENT,
        results=(
            ProbeResult(
                target_name="inbound-agent_nanoserver-ltsc2019_jdk17",
                image="docker.io/jenkins/inbound-agent:jdk17-nanoserver-ltsc2019",
                checks=(
                    CheckResult(name="has git", status=CheckStatus.PASSED),
                    CheckResult(name="has git-lfs", status=CheckStatus.PASSED),
                ),
            ),
            ProbeResult.from_error(
                "inbound-agent_nanoserver-ltsc2019_jdk21",
                "docker.io/jenkins/inbound-agent:jdk21-nanoserver-ltsc2019",
                "RuntimeError: boom",
            ),
        ),
    )


class TestSummaryJsonExporter:
    def test_export_writes_summary(self, aggregate, tmp_path):
        config = SummaryExporterConfig(aggregate=aggregate, output_dir=tmp_path / "inbound-agent")

        path = asyncio.run(SummaryJsonExporter(config).export())

        assert path == tmp_path / "inbound-agent" / "test-summary.json"
        data = orjson.loads(path.read_bytes())
        assert data["agent_type"] == "inbound-agent"
        assert data["failed"] is True
        assert data["num_targets"] == 2
        assert data["num_failed_targets"] == 1
        assert data["total_checks"] == 3
        assert data["failed_checks"] == 1
        assert [t["target_name"] for t in data["targets"]] == [
            "inbound-agent_nanoserver-ltsc2019_jdk17",
            "inbound-agent_nanoserver-ltsc2019_jdk21",
        ]
        assert data["failed_targets"][0]["error"] == "RuntimeError: boom"


class TestSummaryCsvExporter:
    def test_export_writes_one_row_per_target(self, aggregate, tmp_path):
        config = SummaryExporterConfig(aggregate=aggregate, output_dir=tmp_path)

        path = asyncio.run(SummaryCsvExporter(config).export())

        rows = list(csv.reader(path.read_text().splitlines()))
        assert rows[0] == SummaryCsvExporter.HEADER
        assert rows[1][:6] == [
            "inbound-agent_nanoserver-ltsc2019_jdk17",
            "docker.io/jenkins/inbound-agent:jdk17-nanoserver-ltsc2019",
            "2",
            "0",
            "0",
            "2",
        ]
        assert rows[2][-1] == "RuntimeError: boom"


class TestSummaryConsoleExporter:
    def test_render_lists_every_target(self, aggregate):
        table = SummaryConsoleExporter(aggregate).render()

        assert table.row_count == 2
        assert "FAILED" in str(table.title)

    def test_export_prints_table(self, aggregate):
        console = Console(file=io.StringIO(), width=200)

        SummaryConsoleExporter(aggregate).export(console)

        output = console.file.getvalue()
        assert "inbound-agent_nanoserver-ltsc2019_jdk21" in output
        assert "inbound-agent test results: FAILED" in output
