"""Tests for tmux listing parsers."""

import pytest

from swarmtap.errors import ParseError
from swarmtap.tmux.parser import (
    PANE_FORMAT,
    SESSION_FORMAT,
    build_sessions,
    build_windows,
    parse_panes,
    parse_sessions,
)
from swarmtap.types import PaneId, SessionId, WindowId

from conftest import listing, pane_line, session_line, window_line


class TestFormats:
    def test_tab_separated_fields(self):
        assert SESSION_FORMAT == "#{session_id}\t#{session_name}\t#{session_attached}"
        assert PANE_FORMAT.count("\t") == 5


class TestParseSessions:
    def test_names_with_spaces_and_colons(self):
        sessions = parse_sessions(listing(session_line("$0", "my agent: one", 2)))
        assert sessions[0].id == SessionId("$0")
        assert sessions[0].name == "my agent: one"
        assert sessions[0].attached

    def test_empty_output(self):
        assert parse_sessions("") == []
        assert parse_sessions(None) == []

    def test_blank_lines_and_crlf_ignored(self):
        output = "\n" + session_line("$0", "a") + "\r\n\n"
        assert [s.name for s in parse_sessions(output)] == ["a"]

    def test_wrong_field_count_fails_whole_parse(self):
        output = listing(session_line("$0", "ok"), "$1\tbroken")
        with pytest.raises(ParseError, match="line 2"):
            parse_sessions(output)

    def test_non_numeric_flag(self):
        with pytest.raises(ParseError):
            parse_sessions(listing("$0\tname\tyes"))

    def test_empty_id(self):
        with pytest.raises(ParseError):
            parse_sessions(listing("\tname\t0"))


class TestParsePanes:
    def test_optional_fields(self):
        panes = parse_panes(listing(pane_line("%1", "@1", "$0", path="", pid="")))
        assert panes[0].current_path is None
        assert panes[0].pid is None

    def test_pid_and_path(self):
        pane = parse_panes(listing(pane_line("%1", "@1", "$0", path="/home/a b", pid="4242", active=0)))[0]
        assert pane.current_path == "/home/a b"
        assert pane.pid == 4242
        assert not pane.active

    def test_bad_pid(self):
        with pytest.raises(ParseError):
            parse_panes(listing(pane_line("%1", "@1", "$0", pid="x")))


class TestBuildGraphs:
    def test_full_graph(self):
        sessions = build_sessions(
            listing(session_line("$0", "alpha"), session_line("$1", "beta")),
            listing(window_line("@0", "$0", "main"), window_line("@1", "$1", "work"), window_line("@2", "$1", "logs", 0)),
            listing(
                pane_line("%0", "@0", "$0"),
                pane_line("%1", "@1", "$1"),
                pane_line("%2", "@1", "$1", active=0),
                pane_line("%3", "@2", "$1"),
            ),
        )

        assert [s.name for s in sessions] == ["alpha", "beta"]
        beta = sessions[1]
        assert [w.id for w in beta.windows] == [WindowId("@1"), WindowId("@2")]
        assert [p.id for p in beta.windows[0].panes] == [PaneId("%1"), PaneId("%2")]
        assert beta.active_window.name == "work"

    def test_every_pane_belongs_to_its_window_and_session(self):
        sessions = build_sessions(
            listing(session_line("$0", "a")),
            listing(window_line("@0", "$0", "w")),
            listing(pane_line("%0", "@0", "$0")),
        )
        for session in sessions:
            for window in session.windows:
                assert window.session_id == session.id
                for pane in window.panes:
                    assert pane.window_id == window.id
                    assert pane.session_id == session.id

    def test_window_with_unknown_session(self):
        with pytest.raises(ParseError, match="unknown session"):
            build_sessions(listing(session_line("$0", "a")), listing(window_line("@0", "$9", "w")), "")

    def test_pane_with_unknown_window(self):
        with pytest.raises(ParseError, match="unknown window"):
            build_windows(listing(window_line("@0", "$0", "w")), listing(pane_line("%0", "@5", "$0")))

    def test_pane_session_mismatch(self):
        with pytest.raises(ParseError):
            build_windows(listing(window_line("@0", "$0", "w")), listing(pane_line("%0", "@0", "$1")))

    def test_window_without_panes(self):
        windows = build_windows(listing(window_line("@0", "$0", "w")), "")
        assert windows[0].panes == ()
