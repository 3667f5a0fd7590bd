# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Typed command requests for the external docker CLI.

Every interaction with the build engine, the registry and the probe containers
goes through a ``CommandRequest``. Dry-run is a property of the request, so
callers never branch on it themselves.
"""

import logging
import os
import shlex
import subprocess
import threading
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

# How long to wait for buffered output after a killed command.
_READER_GRACE_SECONDS = 5.0

__all__ = [
    "CommandError",
    "CommandRequest",
    "CommandResult",
    "CommandRunner",
]


class CommandError(RuntimeError):
    """Raised when a command cannot be started or does not finish in time."""


class CommandRequest(BaseModel):
    """A single external command invocation.

    Attributes:
        argv: Program and arguments
        cwd: Working directory, current directory when None
        env: Extra environment bindings, layered over the parent environment
        timeout_seconds: Abort the command after this many seconds
        dry_run: Report the command instead of running it
        stream_to: Stream combined output line by line to this log file and the console
    """

    model_config = ConfigDict(frozen=True)

    argv: tuple[str, ...] = Field(min_length=1)
    cwd: Path | None = None
    env: dict[str, str] = Field(default_factory=dict)
    timeout_seconds: float | None = None
    dry_run: bool = False
    stream_to: Path | None = None

    @property
    def display(self) -> str:
        return shlex.join(self.argv)


class CommandResult(BaseModel):
    """Outcome of a CommandRequest."""

    model_config = ConfigDict(frozen=True)

    request: CommandRequest
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def dry_run(self) -> bool:
        return self.request.dry_run

    def diagnostics(self, limit: int = 2000) -> str:
        """Tail of the captured output for error messages."""
        text = (self.stderr.strip() or self.stdout.strip())
        return text[-limit:]


class CommandRunner:
    """Runs CommandRequests with subprocess."""

    def run(self, request: CommandRequest) -> CommandResult:
        if request.dry_run:
            logger.info(f"[dry-run] $ {request.display}")
            return CommandResult(request=request, returncode=0)

        logger.debug(f"$ {request.display}")
        env = {**os.environ, **request.env} if request.env else None
        try:
            if request.stream_to is not None:
                return self._run_streaming(request, env)
            proc = subprocess.run(
                list(request.argv),
                cwd=str(request.cwd) if request.cwd is not None else None,
                env=env,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=request.timeout_seconds,
            )
        except FileNotFoundError as e:
            raise CommandError(
                f"Executable not found: {request.argv[0]}. "
                f"Ensure it is installed and available on PATH."
            ) from e
        except subprocess.TimeoutExpired as e:
            raise CommandError(
                f"Command timed out after {request.timeout_seconds}s: {request.display}"
            ) from e
        return CommandResult(
            request=request,
            returncode=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )

    def _run_streaming(
        self, request: CommandRequest, env: dict[str, str] | None
    ) -> CommandResult:
        """Run a long command, teeing its combined output to a log file and the console."""
        log_path = request.stream_to
        log_path.parent.mkdir(parents=True, exist_ok=True)
        tail: list[str] = []
        with log_path.open("w", encoding="utf-8", newline="\n") as log:
            log.write(f"$ {request.display}\n\n")
            log.flush()
            proc = subprocess.Popen(
                list(request.argv),
                cwd=str(request.cwd) if request.cwd is not None else None,
                env=env,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
            )

            def pump() -> None:
                assert proc.stdout is not None
                for line in proc.stdout:
                    log.write(line)
                    log.flush()
                    logger.info(line.rstrip("\n"))
                    tail.append(line)
                    if len(tail) > 200:
                        del tail[:100]

            # The deadline is enforced by wait(), independently of the output reader.
            reader = threading.Thread(target=pump, name="command-output", daemon=True)
            reader.start()
            try:
                returncode = proc.wait(timeout=request.timeout_seconds)
            except subprocess.TimeoutExpired as e:
                proc.kill()
                proc.wait()
                reader.join(timeout=_READER_GRACE_SECONDS)
                raise CommandError(
                    f"Command timed out after {request.timeout_seconds}s: {request.display}"
                ) from e
            except BaseException:
                proc.kill()
                proc.wait()
                reader.join(timeout=_READER_GRACE_SECONDS)
                raise
            reader.join()
        return CommandResult(request=request, returncode=returncode, stdout="".join(tail))
