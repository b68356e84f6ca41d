"""
Tests for the command line front end.

Run with: pytest tests/test_cli.py -v
"""

import pytest
from pydantic import ValidationError

from cli import load_config, main

GAMES_PGN = """[White "alice"]
[Black "Magnus"]
[BlackElo "1500"]
[Result "1-0"]

1. e4 {[%emt 0:00:01]} e5 {[%emt 0:00:01]} 2. Nf3 {[%emt 0:00:00.05]} Nc6 {[%emt 0:00:02]} 1-0

[White "Magnus"]
[Black "alice"]
[WhiteElo "1700"]
[Result "1/2-1/2"]

1. d4 d5 2. c4 e6 1/2-1/2

[White "carol"]
[Black "dave"]
[Result "1-0"]

1. e4 e5 1-0
"""


@pytest.fixture
def pgn_path(tmp_path):
    path = tmp_path / "games.pgn"
    path.write_text(GAMES_PGN)
    return str(path)


@pytest.fixture
def no_config(tmp_path):
    return str(tmp_path / "missing.yaml")


class TestLoadConfig:
    """YAML configuration loading."""

    def test_missing_file_gives_defaults(self, no_config):
        config = load_config(no_config)
        assert config.summary_gate == "strict"
        assert config.premove_threshold_ms == 100
        assert config.connector == "local"

    def test_reads_stats_section(self, tmp_path):
        path = tmp_path / "stats.yaml"
        path.write_text("stats:\n  summary_gate: legacy\n  connector: fics\n")
        config = load_config(str(path))
        assert config.summary_gate == "legacy"
        assert config.connector == "fics"
        assert config.skipped_plies == 2

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "stats.yaml"
        path.write_text("")
        assert load_config(str(path)).summary_gate == "strict"

    def test_invalid_gate(self, tmp_path):
        path = tmp_path / "stats.yaml"
        path.write_text("stats:\n  summary_gate: sometimes\n")
        with pytest.raises(ValidationError):
            load_config(str(path))

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "stats.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            load_config(str(path))


class TestSummaryCommand:
    """`summary` subcommand."""

    def test_prints_summary_per_game(self, pgn_path, no_config, capsys):
        assert main(["summary", pgn_path, "--user", "Alice", "--config", no_config]) == 0
        out = capsys.readouterr().out

        assert "alice vs Magnus (1-0)" in out
        assert "Performance(standard): 1900" in out
        assert "Premoves(you/opp): 1/0" in out

        # Second game: draw vs 1700 with white on the other side
        assert "Magnus vs alice (1/2-1/2)" in out
        assert "Performance(standard): 1800" in out
        assert "Series(Magnus): 1.5/2" in out
        assert "Average Move Time(you/opponent): UNKNOWN/UNKNOWN" in out

        # Game without alice
        assert "carol vs dave" not in out

    def test_latin1_archive(self, tmp_path, no_config, capsys):
        path = tmp_path / "archive.pgn"
        path.write_bytes(
            b'[White "al\xe9x"]\n[Black "bob"]\n[WhiteElo "1600"]\n[Result "0-1"]\n\n'
            b'1. e4 e5 2. Nf3 Nc6 0-1\n'
        )
        assert main(["summary", str(path), "--user", "bob", "--config", no_config]) == 0
        out = capsys.readouterr().out
        assert "Performance(standard): 2000" in out
        assert "Series(al\ufffdx): 1.0/1" in out

    def test_missing_file(self, tmp_path, no_config, capsys):
        code = main(["summary", str(tmp_path / "nope.pgn"), "--user", "alice", "--config", no_config])
        assert code == 1
        assert "cannot read PGN" in capsys.readouterr().err


class TestReportCommand:
    """`report` subcommand."""

    def test_report_table(self, pgn_path, no_config, capsys):
        code = main([
            "report", pgn_path, "--user", "alice", "--connector", "fics",
            "--opponent", "magnus", "--config", no_config,
        ])
        assert code == 0
        out = capsys.readouterr().out
        assert "standard" in out
        assert "1-0-1" in out
        assert "1800" in out
        assert "Series(magnus): 1.5/2" in out

    def test_report_unknown_opponent(self, pgn_path, no_config, capsys):
        main(["report", pgn_path, "--user", "alice", "--opponent", "zed", "--config", no_config])
        assert "No games against zed" in capsys.readouterr().out

    def test_report_without_games(self, pgn_path, no_config, capsys):
        main(["report", pgn_path, "--user", "nobody", "--config", no_config])
        assert "No recorded games." in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage" in capsys.readouterr().out
