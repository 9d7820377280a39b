"""
Tests for the command-line interface.
"""

import pytest

from ..cli import main
from ..engine_core.state import Outcome
from ..games.boards import CLASSIC
from ..cli import TerminalRenderer


class TestCommands:
    """Tests for CLI commands."""

    def test_boards(self, capsys):
        assert main(["boards"]) == 0
        out = capsys.readouterr().out
        assert "classic" in out
        assert "timed" in out
        assert "20s" in out

    def test_demo_classic_wins(self, capsys):
        """The remembering player always clears an untimed board."""
        assert main(["demo", "--board", "classic", "--seed", "1"]) == 0
        out = capsys.readouterr().out
        assert "All pairs found!" in out
        assert "Outcome: won" in out
        assert "8/8 pairs" in out

    def test_demo_timed_ends(self, capsys):
        assert main(["demo", "--board", "timed", "--seed", "2"]) == 0
        out = capsys.readouterr().out
        assert "Outcome: " in out
        assert ("Outcome: won" in out) or ("Outcome: timed_out" in out)

    def test_unknown_board(self, capsys):
        assert main(["demo", "--board", "giant"]) == 1
        assert "Unknown board" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()


class TestTerminalRenderer:
    """Tests for the text renderer."""

    def test_grid_tracks_card_faces(self, capsys):
        renderer = TerminalRenderer(CLASSIC)
        renderer.render_board_reset(4)
        renderer.render_reveal(2, 5)
        renderer.render_matched(2)
        renderer.render_session_ended(Outcome.WON)

        out = capsys.readouterr().out
        assert "New game: 4 cards" in out
        assert "Slot 2 shows 5" in out
        assert "5*" in out
        assert "All pairs found!" in out

    @pytest.mark.parametrize("seconds,shown", [(20, True), (17, False), (3, True)])
    def test_time_left_is_sparse(self, capsys, seconds, shown):
        TerminalRenderer(CLASSIC).render_time_left(seconds)
        assert ("Time left" in capsys.readouterr().out) is shown
