"""Tests for pipe-pane capture control."""

import pytest

from swarmtap.errors import CommandError
from swarmtap.tmux import CaptureControl
from swarmtap.types import PaneId, SessionId


@pytest.fixture
def capture(executor, log_reader):
    return CaptureControl(executor, log_reader)


class TestCaptureControl:
    def test_start_creates_log_and_pipes(self, capture, runner, log_reader):
        capture.start(SessionId("$0"))

        path = log_reader.log_path(SessionId("$0"))
        assert path.exists()
        argv = runner.calls[-1]
        assert argv[:5] == ["tmux", "pipe-pane", "-t", "$0", "-o"]
        assert argv[5].startswith("cat >> ")
        assert str(path).replace("%", "%%") in argv[5]

    def test_percent_in_path_is_escaped(self, executor, runner, tmp_path):
        from swarmtap.messaging import LogReader

        reader = LogReader(tmp_path / "100%")
        CaptureControl(executor, reader).start(SessionId("$1"))

        assert "100%%" in runner.calls[-1][5]

    def test_start_refused(self, capture, runner):
        runner.reply("pipe-pane", returncode=1, stderr="can't find session: $4")
        with pytest.raises(CommandError):
            capture.start(SessionId("$4"))

    def test_start_is_noop_when_already_piping(self, capture, runner):
        """pipe-pane -o would close a running pipe, so it must not be sent again."""
        runner.reply("display-message", stdout="1\n")

        assert capture.start(SessionId("$0")) is False
        assert "pipe-pane" not in runner.commands()

    def test_start_reports_new_pipe(self, capture, runner):
        runner.reply("display-message", stdout="0\n")
        assert capture.start(SessionId("$0")) is True
        assert runner.commands() == ["display-message", "pipe-pane"]

    def test_start_pane_uses_pane_log(self, capture, runner, log_reader):
        capture.start_pane(PaneId("%4"))

        path = log_reader.pane_log_path(PaneId("%4"))
        assert path.exists()
        assert path.name == "pane_%4.log"
        assert runner.calls[-1][:5] == ["tmux", "pipe-pane", "-t", "%4", "-o"]
        assert "pane_%%4.log" in runner.calls[-1][5]

    def test_stop(self, capture, runner):
        capture.stop(SessionId("$0"))
        assert runner.calls == [["tmux", "pipe-pane", "-t", "$0"]]

    @pytest.mark.parametrize(
        "stdout,returncode,expected",
        [("1\n", 0, True), ("0\n", 0, False), ("", 1, False)],
    )
    def test_is_running(self, capture, runner, stdout, returncode, expected):
        runner.reply("display-message", stdout=stdout, returncode=returncode)
        assert capture.is_running(SessionId("$0")) is expected
