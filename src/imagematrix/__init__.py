# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""imagematrix - build, test and publish a matrix of agent container images."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("imagematrix")
except PackageNotFoundError:
    __version__ = "unknown"
