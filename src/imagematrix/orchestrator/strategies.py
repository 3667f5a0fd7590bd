# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Execution strategies for running probes across the targets of a matrix."""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable

from imagematrix.common.enums import TestMode
from imagematrix.probe.junit import write_junit_report
from imagematrix.probe.models import ProbeContext, ProbeResult
from imagematrix.probe.runner import ProbeRunner

logger = logging.getLogger(__name__)

__all__ = [
    "ConcurrentExecutionStrategy",
    "ExecutionStrategy",
    "RunnerFactory",
    "SequentialExecutionStrategy",
    "create_strategy",
]

RunnerFactory = Callable[[], ProbeRunner]


def _error_result(context: ProbeContext, exc: BaseException) -> ProbeResult:
    """Turn a crashed probe unit into an error result with its own JUnit report."""
    error = f"{type(exc).__name__}: {exc}"
    try:
        report_path = write_junit_report(context.report_path, context.target_name, [], error=error)
    except OSError as e:
        logger.warning(f"Could not write JUnit report for {context.target_name}: {e}")
        report_path = None
    return ProbeResult.from_error(context.target_name, context.image, error, report_path)


class ExecutionStrategy(ABC):
    """Base class for probe execution strategies.

    Strategies decide how probe units are scheduled. Whatever the schedule,
    every context is attempted, and ``run`` returns one result per context in
    the order the contexts were given.
    """

    @abstractmethod
    def run(
        self, contexts: list[ProbeContext], runner_factory: RunnerFactory
    ) -> list[ProbeResult]:
        """Run the probe suite for every context.

        Args:
            contexts: One probe context per target, captured at launch time
            runner_factory: Creates the probe runner (the shared probe configuration)

        Returns:
            Probe results, one per context, in context order
        """
        pass


class SequentialExecutionStrategy(ExecutionStrategy):
    """Runs targets one after the other, in artifact order, with one shared runner.

    A failing or crashing target never stops the loop: later targets always run
    so the report is complete.
    """

    def run(
        self, contexts: list[ProbeContext], runner_factory: RunnerFactory
    ) -> list[ProbeResult]:
        runner = runner_factory()
        results = []
        for index, context in enumerate(contexts):
            logger.info(f"[{index + 1}/{len(contexts)}] Testing {context.image}")
            try:
                result = runner.run(context)
            except Exception as e:
                logger.exception(f"Probe unit for {context.target_name} crashed")
                result = _error_result(context, e)
            results.append(result)
        return results


class ConcurrentExecutionStrategy(ExecutionStrategy):
    """Runs one independent unit per target, all joined before returning.

    Each unit builds its own runner so no probe configuration is shared between
    units. A unit that raises is turned into an error result; siblings are
    unaffected.

    Attributes:
        max_workers: Upper bound of units running at once, 0 for no bound
    """

    def __init__(self, max_workers: int = 0) -> None:
        if max_workers < 0:
            raise ValueError(
                f"Invalid max_workers: {max_workers}. Use 0 for one unit per target "
                f"or a positive bound."
            )
        self.max_workers = max_workers

    def run(
        self, contexts: list[ProbeContext], runner_factory: RunnerFactory
    ) -> list[ProbeResult]:
        if not contexts:
            return []
        return asyncio.run(self._run_all(contexts, runner_factory))

    async def _run_all(
        self, contexts: list[ProbeContext], runner_factory: RunnerFactory
    ) -> list[ProbeResult]:
        limit = self.max_workers or len(contexts)
        semaphore = asyncio.Semaphore(limit)
        logger.info(f"Launching {len(contexts)} probe units ({limit} at a time)")

        async def unit(context: ProbeContext) -> ProbeResult:
            async with semaphore:
                return await asyncio.to_thread(_run_isolated, context, runner_factory)

        tasks = [asyncio.create_task(unit(context)) for context in contexts]
        try:
            # Barrier: no result is consumed before every unit finished.
            outcomes = await asyncio.gather(*tasks, return_exceptions=True)
        except asyncio.CancelledError:
            # Worker threads cannot be cancelled; tell them to skip remaining checks.
            logger.warning("Probe run cancelled, skipping remaining checks")
            for context in contexts:
                context.cancel_event.set()
            raise

        results = []
        for context, outcome in zip(contexts, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(f"Probe unit for {context.target_name} crashed: {outcome!r}")
                results.append(_error_result(context, outcome))
            else:
                results.append(outcome)
        return results


def _run_isolated(context: ProbeContext, runner_factory: RunnerFactory) -> ProbeResult:
    runner = runner_factory()
    return runner.run(context)


def create_strategy(mode: TestMode, max_workers: int = 0) -> ExecutionStrategy:
    if mode == TestMode.CONCURRENT:
        return ConcurrentExecutionStrategy(max_workers=max_workers)
    return SequentialExecutionStrategy()
