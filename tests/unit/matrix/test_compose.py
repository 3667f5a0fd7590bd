# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for compose artifact materialization."""

from unittest.mock import patch

import orjson
import pytest

from imagematrix.common.enums import AgentType
from imagematrix.common.exceptions import SerializationError
from imagematrix.matrix.compose import (
    ComposeMaterializer,
    compose_file_path,
    load_compose_artifact,
)
from imagematrix.matrix.expander import ExpansionOptions, TargetDescriptorBuilder
from imagematrix.matrix.models import AxisSet, RuntimeVariant


@pytest.fixture
def targets():
    builder = TargetDescriptorBuilder(
        ExpansionOptions(
            variants=(
                RuntimeVariant(name="jdk17", major=17, java_version="17.0.16_8"),
                RuntimeVariant(name="jdk21", major=21, java_version="21.0.8_9"),
            )
        )
    )
    return builder.expand(
        AxisSet(
            agent_type=AgentType.AGENT,
            image_type="nanoserver-ltsc2019",
            runtime_version="3345.v03dee9b_f88fc",
            build_number="3",
        )
    )


class TestComposeFilePath:
    def test_is_deterministic(self, tmp_path):
        path = compose_file_path(tmp_path, AgentType.INBOUND_AGENT, "nanoserver-ltsc2019")
        assert path == tmp_path / "build-windows_inbound-agent_nanoserver-ltsc2019.json"


class TestComposeMaterializer:
    """Tests for ComposeMaterializer."""

    def test_writes_services_in_target_order(self, targets, tmp_path):
        path = tmp_path / "build" / "compose.json"

        assert ComposeMaterializer().materialize(targets, path) is True

        document = orjson.loads(path.read_bytes())
        assert list(document["services"]) == [t.name for t in targets]
        service = document["services"][targets[0].name]
        assert service["image"] == targets[0].image
        assert "output" not in service["build"]
        assert service["build"]["args"]["JAVA_VERSION"] == "17.0.16_8"

    def test_reuses_existing_artifact(self, targets, tmp_path):
        path = tmp_path / "compose.json"
        path.write_text('{"services": {}}')

        assert ComposeMaterializer().materialize(targets, path) is False
        assert path.read_text() == '{"services": {}}'

    def test_force_regenerates_artifact(self, targets, tmp_path):
        path = tmp_path / "compose.json"
        path.write_text('{"services": {}}')

        assert ComposeMaterializer().materialize(targets, path, force=True) is True
        assert len(orjson.loads(path.read_bytes())["services"]) == 2

    def test_force_drops_stale_targets(self, targets, tmp_path):
        """Regenerating with fewer targets leaves no service from the previous expansion."""
        path = tmp_path / "compose.json"
        ComposeMaterializer().materialize(targets, path)

        ComposeMaterializer().materialize(targets[:1], path, force=True)

        assert list(orjson.loads(path.read_bytes())["services"]) == [targets[0].name]

    def test_refuses_empty_target_list(self, tmp_path):
        with pytest.raises(SerializationError, match="without targets"):
            ComposeMaterializer().materialize([], tmp_path / "compose.json")

    def test_failed_write_leaves_no_partial_file(self, targets, tmp_path):
        path = tmp_path / "compose.json"

        with patch("imagematrix.matrix.compose.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError, match="disk full"):
                ComposeMaterializer().materialize(targets, path)

        assert list(tmp_path.iterdir()) == []

    def test_unrepresentable_value_raises_serialization_error(self, targets, tmp_path):
        with patch(
            "imagematrix.matrix.compose.orjson.dumps",
            side_effect=orjson.JSONEncodeError("Type is not JSON serializable"),
        ):
            with pytest.raises(SerializationError, match="cannot be serialized"):
                ComposeMaterializer().materialize(targets, tmp_path / "compose.json")

    def test_lossy_round_trip_raises_serialization_error(self, targets, tmp_path):
        with patch("imagematrix.matrix.compose.orjson.loads", return_value={"services": {}}):
            with pytest.raises(SerializationError, match="does not round-trip"):
                ComposeMaterializer().materialize(targets, tmp_path / "compose.json")


class TestLoadComposeArtifact:
    """Tests for load_compose_artifact."""

    def test_round_trips_materialized_targets(self, targets, tmp_path):
        path = tmp_path / "compose.json"
        ComposeMaterializer().materialize(targets, path)

        artifact = load_compose_artifact(path)

        assert artifact.service_names == [t.name for t in targets]
        assert artifact.images == [t.image for t in targets]
        service = artifact.services[targets[1].name]
        assert service.java_version == "21.0.8_9"
        assert service.runtime_version == "3345.v03dee9b_f88fc"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(SerializationError, match="not found"):
            load_compose_artifact(tmp_path / "missing.json")

    @pytest.mark.parametrize(
        "content,match",
        [
            ("not json", "not valid JSON"),
            ("[]", "no 'services' mapping"),
            ('{"services": {}}', "no services"),
            ('{"services": {"a": {"image": "x"}}}', "malformed"),
        ],
    )
    def test_invalid_documents_raise(self, tmp_path, content, match):
        path = tmp_path / "compose.json"
        path.write_text(content)
        with pytest.raises(SerializationError, match=match):
            load_compose_artifact(path)
