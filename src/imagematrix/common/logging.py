# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import logging

from rich.console import Console
from rich.logging import RichHandler

from imagematrix.common.config import UserConfig
from imagematrix.common.enums import TestsDebug

_LOG_FORMAT = "%(message)s"
_ROOT_LOGGER_NAME = "imagematrix"


def resolve_log_level(user_config: UserConfig) -> int:
    """Console log level, lowered to DEBUG whenever probe debugging is requested."""
    if user_config.tests.debug != TestsDebug.NONE:
        return logging.DEBUG
    return logging.getLevelName(user_config.output.log_level)


def setup_rich_logging(
    user_config: UserConfig, console: Console | None = None
) -> logging.Logger:
    """Route imagematrix log records to a rich console handler.

    Calling this more than once replaces the previously installed handler.
    """
    logger = logging.getLogger(_ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt="[%X]"))
    logger.addHandler(handler)
    logger.setLevel(resolve_log_level(user_config))
    logger.propagate = False
    return logger
