# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Build, test and publish orchestration for the image matrix."""

from imagematrix.orchestrator.build import MatrixBuildOrchestrator
from imagematrix.orchestrator.models import (
    AgentTypeOutcome,
    BuildResult,
    FailedTarget,
    RunAggregate,
)
from imagematrix.orchestrator.pipeline import MatrixPipeline
from imagematrix.orchestrator.publish import PublishDriver
from imagematrix.orchestrator.strategies import (
    ConcurrentExecutionStrategy,
    ExecutionStrategy,
    SequentialExecutionStrategy,
    create_strategy,
)
from imagematrix.orchestrator.testing import TestOrchestrator
from imagematrix.orchestrator.warmup import BaseImageWarmup

__all__ = [
    "AgentTypeOutcome",
    "BaseImageWarmup",
    "BuildResult",
    "ConcurrentExecutionStrategy",
    "ExecutionStrategy",
    "FailedTarget",
    "MatrixBuildOrchestrator",
    "MatrixPipeline",
    "PublishDriver",
    "RunAggregate",
    "SequentialExecutionStrategy",
    "TestOrchestrator",
    "create_strategy",
]
