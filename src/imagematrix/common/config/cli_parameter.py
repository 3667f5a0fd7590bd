# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from typing import Any

from cyclopts import Group, Parameter


def CLIParameter(  # noqa: N802
    name: tuple[str, ...],
    group: Group | str | None = None,
    **kwargs: Any,
) -> Parameter:
    """Build the cyclopts Parameter used for every imagematrix config field.

    Boolean flags never get a ``--no-`` counterpart and environment variables are
    not advertised in the help output.
    """
    kwargs.setdefault("negative", "")
    kwargs.setdefault("show_env_var", False)
    if group is not None:
        kwargs["group"] = group
    return Parameter(name=name, **kwargs)
