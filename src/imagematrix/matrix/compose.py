# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Compose artifact: the persisted expansion of one (agent type, image type) pair."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import orjson
from pydantic import BaseModel, ConfigDict, ValidationError

from imagematrix.common.enums import AgentType
from imagematrix.common.exceptions import SerializationError
from imagematrix.matrix.models import TargetDescriptor

logger = logging.getLogger(__name__)

__all__ = [
    "ComposeArtifact",
    "ComposeMaterializer",
    "ComposeService",
    "compose_file_path",
    "load_compose_artifact",
]


def compose_file_path(build_dir: Path, agent_type: AgentType, image_type: str) -> Path:
    """Deterministic artifact location for an (agent type, image type) pair."""
    return Path(build_dir) / f"build-windows_{agent_type.value}_{image_type}.json"


class ComposeService(BaseModel):
    """One entry of the compose 'services' mapping."""

    model_config = ConfigDict(frozen=True)

    image: str
    build: dict[str, Any]

    @property
    def java_version(self) -> str | None:
        return self.build.get("args", {}).get("JAVA_VERSION")

    @property
    def runtime_version(self) -> str | None:
        return self.build.get("args", {}).get("VERSION")


class ComposeArtifact(BaseModel):
    """Parsed compose document. Service order is the artifact's insertion order."""

    model_config = ConfigDict(frozen=True)

    path: Path
    services: dict[str, ComposeService]

    @property
    def service_names(self) -> list[str]:
        return list(self.services)

    @property
    def images(self) -> list[str]:
        return [service.image for service in self.services.values()]


def _render_document(targets: list[TargetDescriptor]) -> dict[str, Any]:
    services: dict[str, Any] = {}
    for target in targets:
        if target.name in services:
            raise SerializationError(f"Duplicate target name in compose document: {target.name}")
        services[target.name] = {"image": target.image, "build": target.build_section()}
    return {"services": services}


def _encode(document: dict[str, Any]) -> bytes:
    """Serialize the document and verify it survives a decode.

    Raises:
        SerializationError: If any value cannot be represented or changes on the way back
    """
    try:
        encoded = orjson.dumps(document, option=orjson.OPT_INDENT_2)
    except orjson.JSONEncodeError as e:
        raise SerializationError(f"Compose document cannot be serialized: {e}") from e

    decoded = orjson.loads(encoded)
    for name, service in document["services"].items():
        if decoded["services"].get(name) != service:
            raise SerializationError(
                f"Target '{name}' does not round-trip through the compose document"
            )
    return encoded + b"\n"


class ComposeMaterializer:
    """Persists an expanded target set as a compose artifact.

    The artifact is created once and reused across runs; ``force`` replaces it
    completely. Writes go to a temporary file in the same directory and are then
    renamed into place, so a failed write never leaves a partial artifact.
    """

    def materialize(
        self, targets: list[TargetDescriptor], destination: Path, force: bool = False
    ) -> bool:
        """Write the artifact unless it already exists.

        Args:
            targets: Expanded target descriptors, in the order services should appear
            destination: Artifact path
            force: Replace an existing artifact

        Returns:
            True if the artifact was written, False if an existing one was reused

        Raises:
            SerializationError: If a descriptor cannot be represented in the document
        """
        destination = Path(destination)
        if destination.exists() and not force:
            logger.info(f"Reusing existing compose artifact: {destination}")
            return False

        if not targets:
            raise SerializationError("Refusing to write a compose artifact without targets")

        payload = _encode(_render_document(targets))

        destination.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{destination.name}.", suffix=".tmp", dir=destination.parent
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
            os.replace(tmp_name, destination)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        action = "Regenerated" if force else "Generated"
        logger.info(f"{action} compose artifact with {len(targets)} services: {destination}")
        return True


def load_compose_artifact(path: Path) -> ComposeArtifact:
    """Read a compose artifact back.

    Raises:
        SerializationError: If the file is missing or not a valid compose document
    """
    path = Path(path)
    try:
        data = orjson.loads(path.read_bytes())
    except FileNotFoundError as e:
        raise SerializationError(f"Compose artifact not found: {path}") from e
    except orjson.JSONDecodeError as e:
        raise SerializationError(f"Compose artifact is not valid JSON: {path}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("services"), dict):
        raise SerializationError(f"Compose artifact has no 'services' mapping: {path}")
    if not data["services"]:
        raise SerializationError(f"Compose artifact has no services: {path}")

    try:
        return ComposeArtifact(path=path, services=data["services"])
    except ValidationError as e:
        raise SerializationError(f"Compose artifact is malformed: {path}: {e}") from e
