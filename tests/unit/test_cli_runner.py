# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for the CLI runner and the cyclopts entry point."""

from unittest.mock import patch

import pytest

from imagematrix.cli_runner import exit_code_for, run_matrix
from imagematrix.common.enums import AgentType, BuildTarget, Stage
from imagematrix.common.exceptions import BuildEngineError, InvalidAxisError, PublishError
from imagematrix.orchestrator.models import AgentTypeOutcome


class TestExitCodeFor:
    def test_all_success(self):
        outcomes = [AgentTypeOutcome(agent_type=a) for a in AgentType]
        assert exit_code_for(outcomes) == 0

    def test_first_failure_wins(self):
        outcomes = [
            AgentTypeOutcome(agent_type=AgentType.AGENT, failed_stage=Stage.BUILD, exit_code=3),
            AgentTypeOutcome(agent_type=AgentType.INBOUND_AGENT, failed_stage=Stage.TEST, exit_code=1),
        ]
        assert exit_code_for(outcomes) == 3


class TestRunMatrix:
    """Tests for run_matrix."""

    @pytest.mark.parametrize(
        "error,expected",
        [
            (InvalidAxisError("bad image type"), 2),
            (BuildEngineError("engine missing"), 3),
            (PublishError("push failed"), 4),
        ],
    )
    def test_errors_map_to_exit_codes(self, user_config, error, expected):
        with patch("imagematrix.cli_runner.MatrixPipeline.execute", side_effect=error):
            assert run_matrix(BuildTarget.PUBLISH, user_config) == expected

    def test_returns_outcome_exit_code(self, user_config):
        outcomes = [
            AgentTypeOutcome(agent_type=AgentType.AGENT),
            AgentTypeOutcome(
                agent_type=AgentType.INBOUND_AGENT,
                failed_stage=Stage.TEST,
                exit_code=1,
                message="Tests failed",
            ),
        ]
        with patch("imagematrix.cli_runner.MatrixPipeline.execute", return_value=outcomes):
            assert run_matrix(BuildTarget.TEST, user_config) == 1

    def test_dry_run_end_to_end(self, user_config):
        user_config.matrix.dry_run = True

        with patch("imagematrix.common.command.subprocess") as mock_subprocess:
            assert run_matrix(BuildTarget.PUBLISH, user_config) == 0

        mock_subprocess.run.assert_not_called()
        mock_subprocess.Popen.assert_not_called()


class TestCli:
    """Tests for the cyclopts app."""

    def test_parses_target_and_options(self):
        from imagematrix.cli import app

        with patch("imagematrix.cli_runner.run_matrix", return_value=0) as mock_run:
            assert app(
                ["test", "--agent-type", "inbound-agent", "--image-type", "windowsservercore-ltsc2022", "--dry-run"]
            ) == 0

        target, user_config = mock_run.call_args.args
        assert target == BuildTarget.TEST
        assert user_config.matrix.agent_type == AgentType.INBOUND_AGENT
        assert user_config.matrix.image_type == "windowsservercore-ltsc2022"
        assert user_config.matrix.dry_run is True
