# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class MatrixDefaults:
    RUNTIME_VERSION = "3345.v03dee9b_f88fc"
    IMAGE_TYPE = "nanoserver-ltsc2019"
    BUILD_NUMBER = "1"
    REGISTRY = "docker.io"
    ORGANISATION = "jenkins"
    PUSH_VERSIONS = False
    OVERWRITE_COMPOSE_FILE = False
    DRY_RUN = False


@dataclass(frozen=True)
class RuntimeDefaults:
    # First entry is the default variant.
    VARIANTS = (
        ("jdk17", 17, "17.0.16_8"),
        ("jdk21", 21, "21.0.8_9"),
    )
    JAVA_HOME_TEMPLATE = "C:/openjdk-{major}"


@dataclass(frozen=True)
class DockerDefaults:
    BASE_IMAGE_REGISTRY = "mcr.microsoft.com/windows"
    CONTEXT_ROOT = "./windows"
    DOCKERFILE = "Dockerfile"
    PLATFORM = "windows/amd64"
    OUTPUT = "type=docker"
    PARALLEL = True
    PULL = True
    SKIP_WARMUP = False
    TIMEOUT_SECONDS = None
    # Windows releases whose tools image is published under a different tag.
    TOOLS_WINDOWS_VERSIONS = {"ltsc2019": "1809"}


@dataclass(frozen=True)
class TestDefaults:
    __test__ = False

    MODE = "sequential"
    JOBS = 0
    DEBUG = ""
    PROBE_TIMEOUT_SECONDS = 300.0
    SHELL = "pwsh"


@dataclass(frozen=True)
class OutputDefaults:
    BUILD_DIR = Path("build")
    RESULTS_DIR = Path("target")
    LOG_LEVEL = "INFO"
