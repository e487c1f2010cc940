"""Tests for the command-line interface."""

import pytest

from mbta_board.cli import DepartureBoardCLI


@pytest.fixture
def cli():
    return DepartureBoardCLI()


class TestBoardCommand:
    """Test cases for the board command."""

    def test_board_from_fixture(self, cli, capsys, testdata_dir):
        """Boards print rows from a canned response."""
        exit_code = cli.run(["board", "--fixture", str(testdata_dir / "predictions.json"), "--stop", "place-sstat"])

        output = capsys.readouterr().out
        assert exit_code == 0
        assert "PLACE-SSTAT" in output
        assert "11:50AM" in output
        assert "Forge Park/495" in output

    def test_board_with_parse_errors_succeeds(self, cli, capsys, testdata_dir):
        """Parse errors are printed but do not fail the command."""
        exit_code = cli.run(["board", "--fixture", str(testdata_dir / "predictions-delayed.json")])

        output = capsys.readouterr().out
        assert exit_code == 0
        assert "NORTH STATION INFORMATION" in output
        assert "Error: Parse error:" in output

    def test_board_with_upstream_error_fails(self, cli, capsys, testdata_dir):
        """Fatal errors are printed and fail the command."""
        exit_code = cli.run(["board", "--fixture", str(testdata_dir / "error-429.json")])

        output = capsys.readouterr().out
        assert exit_code == 1
        assert "Error: MBTA API error: You have exceeded your allowed usage rate." in output

    def test_direction_option(self, cli, capsys, testdata_dir):
        """Inbound filtering leaves the outbound-only fixture empty."""
        cli.run([
            "board", "--fixture", str(testdata_dir / "predictions.json"),
            "--stop", "place-sstat", "--direction", "Inbound",
        ])

        assert "No upcoming departures." in capsys.readouterr().out

    def test_no_command(self, cli, capsys):
        """Running without a command prints usage guidance."""
        assert cli.run([]) == 1
        assert "No command specified" in capsys.readouterr().out
