# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import logging

from rich.console import Console

from imagematrix.common.config import UserConfig
from imagematrix.common.enums import BuildTarget
from imagematrix.common.exceptions import ImageMatrixError
from imagematrix.common.logging import setup_rich_logging
from imagematrix.orchestrator.models import AgentTypeOutcome
from imagematrix.orchestrator.pipeline import MatrixPipeline


def exit_code_for(outcomes: list[AgentTypeOutcome]) -> int:
    """First nonzero exit code among the agent types, 0 if all succeeded."""
    for outcome in outcomes:
        if not outcome.success:
            return outcome.exit_code
    return 0


def run_matrix(
    target: BuildTarget,
    user_config: UserConfig,
    console: Console | None = None,
) -> int:
    """Run the requested target across the whole matrix and return the exit code."""
    setup_rich_logging(user_config)
    logger = logging.getLogger(__name__)

    matrix = user_config.matrix
    logger.info("=" * 80)
    logger.info(f"Starting {target.value} of Windows agent images")
    logger.info(f"  Agent types: {', '.join(a.value for a in matrix.agent_types)}")
    logger.info(f"  Image type: {matrix.image_type}")
    logger.info(f"  Runtime version: {matrix.runtime_version} (build {matrix.build_number})")
    logger.info(
        f"  Variants: {', '.join(v.name for v in user_config.runtime.variants)}"
    )
    if matrix.dry_run:
        logger.info("  Dry run: commands are reported, nothing is executed")
    logger.info("=" * 80)

    pipeline = MatrixPipeline(user_config, console=console)
    try:
        outcomes = pipeline.execute(target)
    except ImageMatrixError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return e.exit_code

    succeeded = [o for o in outcomes if o.success]
    logger.info("=" * 80)
    logger.info(f"{target.value} complete: {len(succeeded)}/{len(outcomes)} agent types succeeded")
    for outcome in outcomes:
        if not outcome.success:
            logger.warning(
                f"{outcome.agent_type.value} failed at {outcome.failed_stage.value}: {outcome.message}"
            )
    logger.info("=" * 80)
    return exit_code_for(outcomes)
