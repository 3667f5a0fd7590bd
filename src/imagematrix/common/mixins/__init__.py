# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from imagematrix.common.mixins.logger_mixin import MatrixLoggerMixin

__all__ = ["MatrixLoggerMixin"]
