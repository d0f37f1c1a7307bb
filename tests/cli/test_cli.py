# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for CLI commands."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner
from starlette.applications import Starlette

from headerguard.cli.main import cli


class TestCLI:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "headerguard" in result.output
        assert "headers" in result.output
        assert "run" in result.output


class TestHeadersCommand:
    def test_defaults_over_https(self, tmp_path: Path):
        runner = CliRunner()
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(cli, ["headers"])
        assert result.exit_code == 0, result.output
        assert "Strict-Transport-Security" in result.output
        assert "max-age=0" in result.output
        assert "nosniff" in result.output

    def test_insecure_omits_hsts(self, tmp_path: Path):
        runner = CliRunner()
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(cli, ["headers", "--insecure"])
        assert result.exit_code == 0, result.output
        assert "Strict-Transport-Security" not in result.output
        assert "X-Frame-Options" in result.output

    def test_reads_config_file(self, tmp_path: Path):
        config_file = tmp_path / "guard.yaml"
        config_file.write_text(
            "headerguard:\n"
            "  security-headers:\n"
            "    antiClickJackingOption: SAMEORIGIN\n"
            "    xssProtectionEnabled: false\n"
        )
        result = CliRunner().invoke(cli, ["headers", "--config", str(config_file)])
        assert result.exit_code == 0, result.output
        assert "SAMEORIGIN" in result.output
        assert "X-XSS-Protection" not in result.output

    def test_invalid_config_exits_nonzero(self, tmp_path: Path):
        config_file = tmp_path / "guard.yaml"
        config_file.write_text("headerguard:\n  security-headers:\n    frameOptions: DENY\n")
        result = CliRunner().invoke(cli, ["headers", "--config", str(config_file)])
        assert result.exit_code == 1
        assert "unknown configuration option" in result.output

    def test_missing_config_file(self, tmp_path: Path):
        result = CliRunner().invoke(cli, ["headers", "--config", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 1
        assert "not found" in result.output


class TestRunCommand:
    def test_serves_default_app(self, tmp_path: Path):
        runner = CliRunner()
        with (
            runner.isolated_filesystem(temp_dir=tmp_path),
            patch("uvicorn.run") as mock_run,
            patch("headerguard.cli.run.configure_logging"),
        ):
            result = runner.invoke(cli, ["run", "--port", "9001"])
        assert result.exit_code == 0, result.output
        args, kwargs = mock_run.call_args
        assert isinstance(args[0], Starlette)
        assert kwargs["port"] == 9001
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["reload"] is False

    def test_app_import_path_with_reload(self, tmp_path: Path):
        runner = CliRunner()
        with (
            runner.isolated_filesystem(temp_dir=tmp_path),
            patch("uvicorn.run") as mock_run,
            patch("headerguard.cli.run.configure_logging"),
        ):
            result = runner.invoke(cli, ["run", "--app", "myapp.main:app", "--reload"])
        assert result.exit_code == 0, result.output
        args, kwargs = mock_run.call_args
        assert args[0] == "myapp.main:app"
        assert kwargs["port"] == 8000
        assert kwargs["reload"] is True

    def test_reload_without_app_rejected(self, tmp_path: Path):
        runner = CliRunner()
        with (
            runner.isolated_filesystem(temp_dir=tmp_path),
            patch("uvicorn.run") as mock_run,
            patch("headerguard.cli.run.configure_logging"),
        ):
            result = runner.invoke(cli, ["run", "--reload"])
        assert result.exit_code == 1
        mock_run.assert_not_called()

    def test_invalid_config_aborts(self, tmp_path: Path):
        config_file = tmp_path / "guard.yaml"
        config_file.write_text("headerguard:\n  security-headers:\n    hstsMaxAgeSeconds: soon\n")
        with patch("uvicorn.run") as mock_run, patch("headerguard.cli.run.configure_logging"):
            result = CliRunner().invoke(cli, ["run", "--config", str(config_file)])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
        mock_run.assert_not_called()
