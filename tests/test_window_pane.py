"""Tests for window and pane operations."""

import pytest

from swarmtap.errors import CommandError, PaneNotFoundError, WindowNotFoundError
from swarmtap.tmux import PaneManager, WindowManager
from swarmtap.types import PaneId, SessionId, WindowId

from conftest import listing, pane_line, window_line


@pytest.fixture
def windows(executor):
    return WindowManager(executor)


@pytest.fixture
def panes(executor):
    return PaneManager(executor)


class TestWindowManager:
    def test_list_windows(self, windows, runner):
        runner.reply("list-windows", stdout=listing(window_line("@0", "$0", "main"), window_line("@1", "$0", "aux", 0)))
        runner.reply("list-panes", stdout=listing(pane_line("%0", "@0", "$0"), pane_line("%1", "@1", "$0")))

        result = windows.list_windows(SessionId("$0"))

        assert [w.name for w in result] == ["main", "aux"]
        assert result[1].panes[0].id == PaneId("%1")
        assert runner.calls[1][:5] == ["tmux", "list-panes", "-t", "$0", "-s"]

    def test_new_window(self, windows, runner):
        runner.reply("list-windows", stdout=listing(window_line("@0", "$0", "main"), window_line("@3", "$0", "worker")))
        runner.reply("list-panes", stdout=listing(pane_line("%5", "@3", "$0")))

        window = windows.new_window(SessionId("$0"), "worker")

        assert window.id == WindowId("@3")
        assert runner.calls[0] == ["tmux", "new-window", "-t", "$0", "-d", "-n", "worker"]

    def test_get_missing_window(self, windows, runner):
        runner.reply("list-windows", stdout=listing(window_line("@0", "$0", "main")))
        with pytest.raises(WindowNotFoundError):
            windows.get_window(SessionId("$0"), WindowId("@9"))

    def test_navigation_commands(self, windows, runner):
        windows.select_window(WindowId("@1"))
        windows.rename_window(WindowId("@1"), "build")
        windows.next_window(SessionId("$0"))
        windows.previous_window(SessionId("$0"))
        windows.last_window(SessionId("$0"))
        windows.kill_window(WindowId("@1"))

        assert runner.commands() == [
            "select-window",
            "rename-window",
            "next-window",
            "previous-window",
            "last-window",
            "kill-window",
        ]
        assert runner.calls[1][-1] == "build"

    def test_failure_raises(self, windows, runner):
        runner.reply("kill-window", returncode=1, stderr="can't find window: @9")
        with pytest.raises(CommandError, match="@9"):
            windows.kill_window(WindowId("@9"))


class TestPaneManager:
    def test_list_panes_of_window_and_session(self, panes, runner):
        runner.reply("list-panes", stdout=listing(pane_line("%0", "@0", "$0")))

        panes.list_panes(WindowId("@0"))
        panes.list_panes(SessionId("$0"))

        assert "-s" not in runner.calls[0]
        assert "-s" in runner.calls[1]

    def test_get_missing_pane(self, panes, runner):
        runner.reply("list-panes", stdout=listing(pane_line("%0", "@0", "$0")))
        with pytest.raises(PaneNotFoundError):
            panes.get_pane(WindowId("@0"), PaneId("%4"))

    def test_split_returns_pane_reported_by_tmux(self, panes, runner):
        """The new pane sits after the active pane, not at the end of the listing."""
        runner.reply("split-window", stdout="%2\n")
        runner.reply(
            "list-panes",
            stdout=listing(
                pane_line("%0", "@0", "$0"),
                pane_line("%2", "@0", "$0", active=0),
                pane_line("%1", "@0", "$0", active=0),
            ),
        )

        pane = panes.split_pane(WindowId("@0"), horizontal=True)

        assert pane.id == PaneId("%2")
        assert runner.calls[0] == ["tmux", "split-window", "-t", "@0", "-d", "-h", "-P", "-F", "#{pane_id}"]

    def test_split_without_reported_id(self, panes, runner):
        with pytest.raises(CommandError):
            panes.split_pane(WindowId("@0"))

    def test_send_keys_with_enter(self, panes, runner):
        panes.send_keys(PaneId("%1"), "echo hi", enter=True)

        assert runner.calls == [
            ["tmux", "send-keys", "-t", "%1", "echo hi"],
            ["tmux", "send-keys", "-t", "%1", "Enter"],
        ]

    def test_send_key_name(self, panes, runner):
        panes.send_keys(PaneId("%1"), "C-c")
        assert runner.calls == [["tmux", "send-keys", "-t", "%1", "C-c"]]

    def test_send_key_name_as_text(self, panes, runner):
        panes.send_keys(PaneId("%1"), "Escape", literal=True)
        assert runner.calls == [["tmux", "send-keys", "-t", "%1", "-l", "Escape"]]

    @pytest.mark.parametrize("text", ["first line\nsecond line\n", "Escape", "C-c"])
    def test_paste_text_goes_through_a_buffer(self, panes, runner, text):
        """Multi-line text and key names reach the pane verbatim, never via send-keys."""
        panes.paste_text(PaneId("%1"), text, enter=True)

        load, paste, enter = runner.calls
        buffer_name = load[3]
        assert load == ["tmux", "load-buffer", "-b", buffer_name, "-"]
        assert runner.inputs[0] == text
        assert paste == ["tmux", "paste-buffer", "-t", "%1", "-b", buffer_name, "-d", "-p"]
        assert enter == ["tmux", "send-keys", "-t", "%1", "Enter"]

    def test_paste_load_failure(self, panes, runner):
        runner.reply("load-buffer", returncode=1, stderr="no space")
        with pytest.raises(CommandError, match="no space"):
            panes.paste_text(PaneId("%1"), "x")
        assert "paste-buffer" not in runner.commands()

    def test_capture_with_scrollback(self, panes, runner):
        runner.reply("capture-pane", stdout="line 1\nline 2\n")

        assert panes.capture_pane(PaneId("%1"), start=50) == "line 1\nline 2\n"
        assert runner.calls[0] == ["tmux", "capture-pane", "-t", "%1", "-p", "-S", "-50"]

    def test_resize(self, panes, runner):
        panes.resize_pane(PaneId("%1"), width=80, height=24)
        assert [call[-2:] for call in runner.calls] == [["-x", "80"], ["-y", "24"]]

    def test_select_and_kill(self, panes, runner):
        panes.select_pane(PaneId("%2"))
        panes.kill_pane(PaneId("%2"))
        assert runner.commands() == ["select-pane", "kill-pane"]
