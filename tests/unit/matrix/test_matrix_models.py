# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for matrix axis models."""

import pytest
from pydantic import ValidationError

from imagematrix.common.config.config_defaults import MatrixDefaults
from imagematrix.common.exceptions import InvalidAxisError
from imagematrix.matrix.models import IMAGE_TYPE_SEPARATOR, ImageType, RuntimeVariant


class TestImageType:
    """Tests for ImageType.parse."""

    @pytest.mark.parametrize(
        "token,flavor,version",
        [
            ("nanoserver-ltsc2019", "nanoserver", "ltsc2019"),
            ("windowsservercore-ltsc2022", "windowsservercore", "ltsc2022"),
        ],
    )
    def test_parse_valid_tokens(self, token, flavor, version):
        image_type = ImageType.parse(token)
        assert image_type.flavor == flavor
        assert image_type.version == version
        assert image_type.token == token
        assert str(image_type) == token

    @pytest.mark.parametrize(
        "token",
        ["nanoserver", "nanoserver-", "-ltsc2019", "nano-server-ltsc2019", "", "   -x"],
    )
    def test_parse_rejects_malformed_tokens(self, token):
        """Anything but two non-empty parts is an axis error."""
        with pytest.raises(InvalidAxisError, match="Invalid image type"):
            ImageType.parse(token)

    def test_invalid_axis_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            ImageType.parse("bogus")

    def test_default_image_type_uses_the_matrix_separator(self):
        """The separator is owned by the matrix models; defaults carry no copy of it."""
        assert not hasattr(MatrixDefaults, "IMAGE_TYPE_SEPARATOR")
        image_type = ImageType.parse(MatrixDefaults.IMAGE_TYPE)
        assert image_type.token.split(IMAGE_TYPE_SEPARATOR) == [image_type.flavor, image_type.version]


class TestRuntimeVariant:
    """Tests for RuntimeVariant."""

    def test_from_java_version_derives_major(self):
        variant = RuntimeVariant.from_java_version("jdk21", "21.0.8_9")
        assert variant.major == 21
        assert variant.java_version == "21.0.8_9"

    def test_from_java_version_rejects_missing_major(self):
        with pytest.raises(ValueError, match="must start with the major release"):
            RuntimeVariant.from_java_version("jdk", "latest")

    def test_name_must_be_tag_safe(self):
        with pytest.raises(ValidationError):
            RuntimeVariant(name="jdk 17", major=17, java_version="17.0.16_8")
