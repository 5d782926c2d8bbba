"""Unit tests for the command-line entry point.

The prompt client is patched out; only argument handling and table output
are exercised.
"""

# pylint: disable=missing-class-docstring,missing-function-docstring

import io
import json
from unittest.mock import patch

import pytest

from llm_tables.cli import main

_PATCH_SEND = "llm_tables.cli.send_prompt"
_PATCH_COUNT = "llm_tables.cli.count_tokens"

RESPONSE = "| state | population |\\n|---|---|\\n| California | 39237836 |\\n| Texas | 30028194 |"


class TestCleanCommand:

    def test_clean_file_markdown(self, tmp_path, capsys):
        path = tmp_path / "response.txt"
        path.write_text(RESPONSE, encoding="utf-8")
        assert main(["clean", str(path)]) == 0
        out = capsys.readouterr().out
        assert "| state | population |" in out
        assert "| Texas | 30028194 |" in out

    def test_clean_stdin_csv(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(RESPONSE))
        assert main(["clean", "--format", "csv"]) == 0
        assert capsys.readouterr().out == "state,population\nCalifornia,39237836\nTexas,30028194\n\n"

    def test_clean_json(self, tmp_path, capsys):
        path = tmp_path / "response.txt"
        path.write_text(RESPONSE, encoding="utf-8")
        assert main(["clean", str(path), "--format", "json"]) == 0
        assert json.loads(capsys.readouterr().out)[0] == {"state": "California", "population": "39237836"}

    def test_clean_custom_delimiters(self, tmp_path, capsys):
        path = tmp_path / "response.txt"
        path.write_text("a;b<br>1;2", encoding="utf-8")
        assert main(["clean", str(path), "--row-split", ";", "--newline", "<br>", "--format", "csv"]) == 0
        assert capsys.readouterr().out.startswith("a,b\n1,2\n")

    def test_structural_mismatch_exit_code(self, tmp_path):
        path = tmp_path / "response.txt"
        path.write_text("a|b\n1|2|3", encoding="utf-8")
        assert main(["clean", str(path)]) == 2


class TestAskCommand:

    def test_prints_raw_response(self, capsys):
        with patch(_PATCH_SEND, return_value="Hello!") as mock_send:
            assert main(["ask", "Hi, how are you?"]) == 0
        assert capsys.readouterr().out.strip() == "Hello!"
        assert mock_send.call_args.kwargs["provider"] == "gemini"

    def test_table_flag(self, capsys):
        with patch(_PATCH_SEND, return_value=RESPONSE):
            assert main(["ask", "States by population", "--table", "--format", "csv"]) == 0
        assert "California,39237836" in capsys.readouterr().out

    def test_passes_attachment_and_model(self):
        with patch(_PATCH_SEND, return_value="ok") as mock_send:
            main(["ask", "What is this?", "--image", "chart.png", "--provider", "openai", "--model", "gpt-4o", "--temperature", "0.3"])
        kwargs = mock_send.call_args.kwargs
        assert kwargs["image"] == "chart.png"
        assert kwargs["provider"] == "openai"
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["temperature"] == 0.3

    def test_safety_block_exit_code(self):
        with patch(_PATCH_SEND, return_value=None):
            assert main(["ask", "Hi"]) == 1


class TestTokensCommand:

    def test_prints_count(self, capsys):
        with patch(_PATCH_COUNT, return_value=5) as mock_count:
            assert main(["tokens", "Hi, how are you?", "--model", "gpt-4o"]) == 0
        assert capsys.readouterr().out.strip() == "5"
        mock_count.assert_called_once_with("Hi, how are you?", model="gpt-4o")

    def test_help_says_counts_are_estimates(self, capsys):
        with pytest.raises(SystemExit):
            main(["tokens", "--help"])
        assert "estimates" in capsys.readouterr().out
