"""Tests for validate command."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path

import pytest

from modpull.cli.commands.validate import ValidateCommand
from modpull.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_RESOLUTION_FAILURE, EXIT_SUCCESS


class TestValidateCommand:
    """Tests for ValidateCommand."""

    def test_command_name(self) -> None:
        assert ValidateCommand().name == "validate"

    def test_valid_project_config(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        (tmp_path / ".modpull.yml").write_text("defaults:\n  loader: fabric\n")
        monkeypatch.chdir(tmp_path)

        assert ValidateCommand().execute(Namespace(config=None)) == EXIT_SUCCESS
        assert ": OK, no issues" in capsys.readouterr().out

    def test_warnings_still_valid(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        config_file = tmp_path / "custom.yml"
        config_file.write_text("defaults:\n  loadr: fabric\n")

        assert ValidateCommand().execute(Namespace(config=config_file)) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert "OK, 1 warning(s)" in out
        assert "defaults.loadr: warning:" in out
        assert "(did you mean 'loader'?)" in out

    def test_errors_are_invalid(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        config_file = tmp_path / "custom.yml"
        config_file.write_text("registry:\n  timeout: soon\n")

        assert ValidateCommand().execute(Namespace(config=config_file)) == EXIT_RESOLUTION_FAILURE
        assert "invalid, 1 error(s)" in capsys.readouterr().out

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        args = Namespace(config=tmp_path / "missing.yml")

        assert ValidateCommand().execute(args) == EXIT_INVALID_USAGE

    def test_no_config_found(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)

        assert ValidateCommand().execute(Namespace(config=None)) == EXIT_INVALID_USAGE
