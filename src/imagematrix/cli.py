# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Command line interface of imagematrix."""

import sys
from typing import Annotated

from cyclopts import App, Parameter

from imagematrix import __version__
from imagematrix.common.config import UserConfig
from imagematrix.common.enums import BuildTarget

app = App(
    name="imagematrix",
    help="Build, test and publish the Windows agent image matrix.",
    version=__version__,
)


@app.default
def run(
    target: BuildTarget = BuildTarget.BUILD,
    *,
    user_config: Annotated[UserConfig, Parameter(name="*")] = UserConfig(),
) -> int:
    """Run a target over the image matrix.

    Args:
        target: build, test (build then test) or publish (build, test, then push).
    """
    from imagematrix.cli_runner import run_matrix

    return run_matrix(target, user_config)


def main() -> None:
    sys.exit(app())


if __name__ == "__main__":
    main()
