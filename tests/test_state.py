"""Tests for the playback state machine."""

import pytest

from speedreader.playback.state import Command, PlaybackState, RunMode


class TestTransitions:

    def test_starts_running_at_zero(self):
        state = PlaybackState(3)

        assert state.mode is RunMode.RUNNING
        assert state.position == 0

    def test_pause_toggle(self):
        state = PlaybackState(3)

        assert state.apply(Command.TOGGLE_PAUSE) is RunMode.PAUSED
        assert state.apply(Command.TOGGLE_PAUSE) is RunMode.RUNNING

    def test_quit_from_running(self):
        state = PlaybackState(3)

        assert state.apply(Command.QUIT) is RunMode.QUIT

    def test_quit_from_paused(self):
        state = PlaybackState(3)
        state.apply(Command.TOGGLE_PAUSE)

        assert state.apply(Command.QUIT) is RunMode.QUIT

    def test_repeated_quit_stays_quit(self):
        state = PlaybackState(3)
        state.apply(Command.QUIT)

        assert state.apply(Command.QUIT) is RunMode.QUIT

    def test_commands_ignored_after_quit(self):
        state = PlaybackState(3)
        state.apply(Command.QUIT)

        assert state.apply(Command.TOGGLE_PAUSE) is RunMode.QUIT

    def test_commands_ignored_after_finish(self):
        state = PlaybackState(1)
        state.advance()
        state.finish()

        assert state.apply(Command.TOGGLE_PAUSE) is RunMode.FINISHED
        assert state.apply(Command.QUIT) is RunMode.FINISHED

    def test_rate_commands_leave_mode(self):
        state = PlaybackState(3)

        assert state.apply(Command.INCREASE_RATE) is RunMode.RUNNING
        assert state.apply(Command.DECREASE_RATE) is RunMode.RUNNING

    def test_terminal_modes(self):
        assert RunMode.QUIT.is_terminal
        assert RunMode.FINISHED.is_terminal
        assert not RunMode.RUNNING.is_terminal
        assert not RunMode.PAUSED.is_terminal


class TestPosition:

    def test_advance_moves_forward(self):
        state = PlaybackState(2)

        assert state.advance() == 1
        assert state.advance() == 2
        assert state.at_end

    def test_cannot_advance_while_paused(self):
        state = PlaybackState(2)
        state.apply(Command.TOGGLE_PAUSE)

        with pytest.raises(RuntimeError):
            state.advance()
        assert state.position == 0

    def test_cannot_advance_past_end(self):
        state = PlaybackState(0)

        with pytest.raises(RuntimeError):
            state.advance()

    def test_cannot_finish_before_end(self):
        state = PlaybackState(2)
        state.advance()

        with pytest.raises(RuntimeError):
            state.finish()

    def test_empty_session_can_finish_immediately(self):
        state = PlaybackState(0)
        state.finish()

        assert state.mode is RunMode.FINISHED
