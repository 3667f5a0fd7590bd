# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Probe runner: validation checks executed against a running image."""

from imagematrix.probe.checks import ProbeCheck, default_suite
from imagematrix.probe.models import CheckResult, ProbeContext, ProbeResult
from imagematrix.probe.runner import ProbeRunner

__all__ = [
    "CheckResult",
    "ProbeCheck",
    "ProbeContext",
    "ProbeResult",
    "ProbeRunner",
    "default_suite",
]
