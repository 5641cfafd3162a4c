"""
Unit tests for call command.
"""

import json

import pytest
from click.exceptions import Exit as ClickExit

from conftest import COUNTER_SOURCE
from forge.cli.commands.call import cmd_call


class TestCallCommand:
    @pytest.fixture
    def definition(self, tmp_path):
        path = tmp_path / "counter.py"
        path.write_text(COUNTER_SOURCE)
        return path

    def test_encodes_input_as_hex(self, definition, fake_codec, capsys):
        cmd_call(definition=str(definition), function="double", input="21", codec="fake_codec")

        output = capsys.readouterr().out.strip()
        assert bytes.fromhex(output) == json.dumps(["int", 21]).encode()

    def test_unknown_function(self, definition, fake_codec, capsys):
        with pytest.raises(ClickExit):
            cmd_call(definition=str(definition), function="missing", input="1", codec="fake_codec")
        assert "Unknown function 'missing'" in capsys.readouterr().err

    def test_custom_function(self, definition, fake_codec, capsys):
        with pytest.raises(ClickExit):
            cmd_call(definition=str(definition), function="raw", input='"00"', codec="fake_codec")
        assert "is custom and has no handler" in capsys.readouterr().err

    def test_malformed_input(self, definition, fake_codec, capsys):
        with pytest.raises(ClickExit):
            cmd_call(definition=str(definition), function="double", input="[", codec="fake_codec")
        assert "Malformed input for 'double'" in capsys.readouterr().err
