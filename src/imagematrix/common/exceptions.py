# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Exception hierarchy for the image matrix pipeline.

Each exception carries the process exit code the CLI reports when it ends a run.
"""


class ImageMatrixError(Exception):
    """Base class for all imagematrix errors."""

    exit_code: int = 1


class InvalidAxisError(ImageMatrixError, ValueError):
    """Raised when a matrix axis value is malformed (e.g. a bad image type token)."""

    exit_code = 2


class SerializationError(ImageMatrixError):
    """Raised when the compose artifact cannot represent a target descriptor."""

    exit_code = 2


class BuildEngineError(ImageMatrixError):
    """Raised when the container build engine exits with a nonzero status."""

    exit_code = 3

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class ProbeFailure(ImageMatrixError):
    """Raised after all probes ran and at least one target reported failed checks."""

    exit_code = 1

    def __init__(self, message: str, failed_targets: list[str] | None = None) -> None:
        super().__init__(message)
        self.failed_targets = failed_targets or []


class PublishError(ImageMatrixError):
    """Raised when pushing images to the registry fails."""

    exit_code = 4

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode
