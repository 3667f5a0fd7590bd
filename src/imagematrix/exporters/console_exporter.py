# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from imagematrix.orchestrator.models import RunAggregate


class SummaryConsoleExporter:
    """Prints a per-target results table for a RunAggregate."""

    def __init__(self, aggregate: "RunAggregate") -> None:
        self.aggregate = aggregate

    def render(self) -> Table:
        agent = self.aggregate.agent_type.value
        status = "[red]FAILED[/red]" if self.aggregate.failed else "[green]PASSED[/green]"
        table = Table(title=f"{agent} test results: {status}")
        table.add_column("Target")
        table.add_column("Image")
        table.add_column("Passed", justify="right")
        table.add_column("Failed", justify="right")
        table.add_column("Skipped", justify="right")
        table.add_column("Total", justify="right")
        for r in self.aggregate.results:
            style = None if r.success else "red"
            table.add_row(
                r.target_name,
                r.image,
                str(r.passed),
                str(r.failed),
                str(r.skipped),
                str(r.total),
                style=style,
            )
        return table

    def export(self, console: Console) -> None:
        console.print(self.render())
