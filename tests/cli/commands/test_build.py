"""
Unit tests for build command.
"""

import textwrap
from unittest.mock import patch

import pytest
from click.exceptions import Exit as ClickExit

from conftest import BRIDGE_SOURCE
from forge.cli.commands.build import cmd_build


class TestBuildCommand:
    """Test cases for build command."""

    @pytest.fixture
    def project(self, tmp_path):
        (tmp_path / "bridge.py").write_text(BRIDGE_SOURCE)
        (tmp_path / "forge.toml").write_text(
            textwrap.dedent(
                """
                [component]
                definition = "bridge.py"
                """
            )
        )
        return tmp_path

    def test_build_success(self, project, capsys):
        cmd_build(project_folder=str(project), data_driver=True)

        output = capsys.readouterr().out
        assert "Building project:" in output
        assert "✅ Build complete!" in output
        assert "Target: data-driver" in output
        assert "Operations: 15" in output
        assert (project / "output" / "schema.json").exists()
        assert (project / "output" / "data_driver.py").exists()

    def test_build_without_target(self, project, capsys):
        with pytest.raises(ClickExit) as exc_info:
            cmd_build(project_folder=str(project))

        assert exc_info.value.exit_code == 1
        err = capsys.readouterr().err
        assert "❌ Build failed" in err
        assert "No generation target selected" in err
        assert not (project / "output").exists()

    def test_build_with_both_targets(self, project, capsys):
        with pytest.raises(ClickExit):
            cmd_build(project_folder=str(project), wrappers=True, data_driver=True)
        assert "mutually exclusive" in capsys.readouterr().err

    @patch("forge.cli.commands.build.build_project")
    def test_build_passes_flags(self, mock_build_project, project, capsys):
        mock_build_project.return_value = {
            "component": "Bridge",
            "target": "wrappers",
            "operations_count": 15,
            "handlers_count": 2,
            "diagnostics": ["unknown type name 'X' in 'op' (from 'X')"],
            "schema_path": project / "output" / "schema.json",
            "module_path": project / "output" / "wrappers.py",
            "output_folder": project / "output",
        }

        cmd_build(project_folder=str(project), wrappers=True)

        mock_build_project.assert_called_once_with(
            project_folder=str(project.resolve()),
            wrappers=True,
            data_driver=False,
        )
        assert "unknown type name 'X'" in capsys.readouterr().out
