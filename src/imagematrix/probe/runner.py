# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Runs the probe suite against one running container."""

import re
import time
import uuid

from imagematrix.common.command import CommandError, CommandRequest, CommandRunner
from imagematrix.common.enums import CheckStatus, TestsDebug
from imagematrix.common.mixins import MatrixLoggerMixin
from imagematrix.probe.checks import ProbeCheck, default_suite
from imagematrix.probe.junit import write_junit_report
from imagematrix.probe.models import CheckResult, ProbeContext, ProbeResult

__all__ = [
    "ProbeRunner",
]

_KEEPALIVE_SCRIPT = "while ($true) { Start-Sleep -Seconds 60 }"


def _container_name(target_name: str) -> str:
    cleaned = re.sub(r"[^a-zA-Z0-9_.-]+", "-", target_name).strip("-.")
    return f"imagematrix-probe-{cleaned}-{uuid.uuid4().hex[:8]}"[:128]


class ProbeRunner(MatrixLoggerMixin):
    """Starts a container from the image under test and runs the check suite in it.

    The container is always removed once the suite finished, whatever the outcome.
    """

    def __init__(
        self,
        command_runner: CommandRunner | None = None,
        suite: list[ProbeCheck] | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.command_runner = command_runner or CommandRunner()
        self.suite = suite

    def run(self, context: ProbeContext) -> ProbeResult:
        """Run the suite and write the JUnit report into the context's output directory."""
        suite = self.suite if self.suite is not None else default_suite(context.agent_type)
        container = _container_name(context.target_name)

        start_error = self._start_container(context, container)
        try:
            if start_error is not None:
                checks = [
                    CheckResult(
                        name=check.name,
                        status=CheckStatus.FAILED,
                        message=f"Container failed to start: {start_error}",
                    )
                    for check in suite
                ]
            else:
                checks = [self._run_check(context, container, check) for check in suite]
        finally:
            # A failed start can still leave a created container behind.
            self._remove_container(context, container)

        report_path = write_junit_report(context.report_path, context.target_name, checks)
        result = ProbeResult(
            target_name=context.target_name,
            image=context.image,
            checks=tuple(checks),
            report_path=report_path,
        )
        self.info(
            f"{context.target_name}: {result.passed} passed, {result.failed} failed, "
            f"{result.skipped} skipped ({result.total} total)"
        )
        return result

    def _exec_argv(self, context: ProbeContext, *args: str) -> tuple[str, ...]:
        return (context.shell, "-NoLogo", "-NoProfile", "-NonInteractive", "-Command", *args)

    def _start_container(self, context: ProbeContext, container: str) -> str | None:
        request = CommandRequest(
            argv=(
                "docker",
                "run",
                "-d",
                "--name",
                container,
                "--entrypoint",
                context.shell,
                context.image,
                *self._exec_argv(context, _KEEPALIVE_SCRIPT)[1:],
            ),
            timeout_seconds=context.timeout_seconds,
        )
        try:
            result = self.command_runner.run(request)
        except CommandError as e:
            return str(e)
        if not result.ok:
            return result.diagnostics() or f"docker run exited with {result.returncode}"
        self.debug(f"{context.target_name}: started container {container}")
        return None

    def _remove_container(self, context: ProbeContext, container: str) -> None:
        request = CommandRequest(
            argv=("docker", "rm", "-f", container),
            timeout_seconds=context.timeout_seconds,
        )
        try:
            result = self.command_runner.run(request)
        except CommandError as e:
            self.warning(f"{context.target_name}: could not remove container {container}: {e}")
            return
        if not result.ok:
            self.warning(
                f"{context.target_name}: could not remove container {container}: "
                f"{result.diagnostics()}"
            )

    def _run_check(
        self, context: ProbeContext, container: str, check: ProbeCheck
    ) -> CheckResult:
        if context.cancelled:
            return CheckResult(name=check.name, status=CheckStatus.SKIPPED, message="cancelled")

        script, expected = check.render(context)
        request = CommandRequest(
            argv=("docker", "exec", container, *self._exec_argv(context, script)),
            timeout_seconds=context.timeout_seconds,
        )
        if context.debug != TestsDebug.NONE:
            self.debug(f"{context.target_name}: checking '{check.name}'")

        start = time.perf_counter()
        try:
            result = self.command_runner.run(request)
        except CommandError as e:
            return CheckResult(
                name=check.name,
                status=CheckStatus.FAILED,
                duration_seconds=time.perf_counter() - start,
                message=str(e),
            )
        duration = time.perf_counter() - start
        output = (result.stdout + result.stderr).strip()

        if context.debug == TestsDebug.VERBOSE and output:
            self.debug(f"{context.target_name}: '{check.name}' output:\n{output}")

        if not result.ok:
            status, message = CheckStatus.FAILED, f"exit code {result.returncode}"
        elif expected is not None and expected.lower() not in output.lower():
            status, message = CheckStatus.FAILED, f"expected output to contain '{expected}'"
        else:
            status, message = CheckStatus.PASSED, ""

        if status == CheckStatus.FAILED:
            self.warning(f"{context.target_name}: '{check.name}' failed: {message}")
        return CheckResult(
            name=check.name,
            status=status,
            duration_seconds=duration,
            message=message,
            output=output,
        )
