# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from cyclopts import Group


class Groups:
    """Help-panel groups for the CLI, in display order."""

    MATRIX = Group.create_ordered("Matrix")
    RUNTIME = Group.create_ordered("Runtime Variants")
    DOCKER = Group.create_ordered("Docker")
    TESTS = Group.create_ordered("Tests")
    OUTPUT = Group.create_ordered("Output")
