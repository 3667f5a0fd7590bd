# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from enum import Enum


class CaseInsensitiveStrEnum(str, Enum):
    """String enum that matches its values case-insensitively."""

    def __str__(self) -> str:
        return self.value

    @classmethod
    def _missing_(cls, value: object):
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return None


class AgentType(CaseInsensitiveStrEnum):
    """Kind of agent image produced by the matrix."""

    AGENT = "agent"
    INBOUND_AGENT = "inbound-agent"


class BuildTarget(CaseInsensitiveStrEnum):
    """Top-level pipeline target selected on the command line."""

    BUILD = "build"
    TEST = "test"
    PUBLISH = "publish"

    @property
    def stages(self) -> tuple["Stage", ...]:
        """Stages executed for this target, in order."""
        return _TARGET_STAGES[self]


class Stage(CaseInsensitiveStrEnum):
    BUILD = "build"
    TEST = "test"
    PUBLISH = "publish"


_TARGET_STAGES: dict[BuildTarget, tuple[Stage, ...]] = {
    BuildTarget.BUILD: (Stage.BUILD,),
    BuildTarget.TEST: (Stage.BUILD, Stage.TEST),
    BuildTarget.PUBLISH: (Stage.BUILD, Stage.TEST, Stage.PUBLISH),
}


class TestMode(CaseInsensitiveStrEnum):
    """How probes are scheduled across targets."""

    __test__ = False

    SEQUENTIAL = "sequential"
    CONCURRENT = "concurrent"


class TestsDebug(CaseInsensitiveStrEnum):
    """Verbosity of probe output."""

    __test__ = False

    NONE = ""
    DEBUG = "debug"
    VERBOSE = "verbose"


class CheckStatus(CaseInsensitiveStrEnum):
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"
