"""Parse tmux listings into entity graphs.

Listings are requested with tab-separated format strings, one record per line.
A malformed line fails the whole parse; there are no best-effort results.

PUBLIC API:
  - FIELD_SEPARATOR: Delimiter used in all format strings
  - SESSION_FORMAT / WINDOW_FORMAT / PANE_FORMAT: tmux -F format strings
  - parse_sessions: Parse list-sessions output (no windows attached)
  - parse_windows: Parse list-windows output (no panes attached)
  - parse_panes: Parse list-panes output
  - build_sessions: Correlate three listings into Session graphs
  - build_windows: Correlate window and pane listings into Window graphs
"""

from dataclasses import replace
from typing import Iterable, Optional

from ..errors import ParseError
from ..types import Pane, PaneId, Session, SessionId, Window, WindowId

FIELD_SEPARATOR = "\t"

SESSION_FIELDS = ("session_id", "session_name", "session_attached")
WINDOW_FIELDS = ("window_id", "session_id", "window_name", "window_active")
PANE_FIELDS = ("pane_id", "window_id", "session_id", "pane_current_path", "pane_pid", "pane_active")


def _format(fields: Iterable[str]) -> str:
    return FIELD_SEPARATOR.join(f"#{{{name}}}" for name in fields)


SESSION_FORMAT = _format(SESSION_FIELDS)
WINDOW_FORMAT = _format(WINDOW_FIELDS)
PANE_FORMAT = _format(PANE_FIELDS)


def _records(output: Optional[str], fields: tuple[str, ...], kind: str) -> list[list[str]]:
    """Split output into records of exactly len(fields) columns."""
    records = []
    for lineno, line in enumerate((output or "").split("\n"), start=1):
        line = line.rstrip("\r")
        if not line.strip():
            continue
        parts = line.split(FIELD_SEPARATOR)
        if len(parts) != len(fields):
            raise ParseError(f"Malformed {kind} record on line {lineno}: expected {len(fields)} fields, got {len(parts)}")
        records.append(parts)
    return records


def _parse_int(value: str, name: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ParseError(f"Invalid {name}: {value!r}")


def _parse_flag(value: str, name: str) -> bool:
    return _parse_int(value, name) != 0


def _parse_id(cls, value: str, name: str):
    try:
        return cls(value)
    except ValueError:
        raise ParseError(f"Empty {name}")


def parse_sessions(output: Optional[str]) -> list[Session]:
    """Parse list-sessions output in SESSION_FORMAT.

    Attached is true when one or more clients are attached.
    """
    sessions = []
    for session_id, name, attached in _records(output, SESSION_FIELDS, "session"):
        sessions.append(
            Session(
                id=_parse_id(SessionId, session_id, "session_id"),
                name=name,
                attached=_parse_flag(attached, "session_attached"),
            )
        )
    return sessions


def parse_windows(output: Optional[str]) -> list[Window]:
    """Parse list-windows output in WINDOW_FORMAT."""
    windows = []
    for window_id, session_id, name, active in _records(output, WINDOW_FIELDS, "window"):
        windows.append(
            Window(
                id=_parse_id(WindowId, window_id, "window_id"),
                session_id=_parse_id(SessionId, session_id, "session_id"),
                name=name,
                active=_parse_flag(active, "window_active"),
            )
        )
    return windows


def parse_panes(output: Optional[str]) -> list[Pane]:
    """Parse list-panes output in PANE_FORMAT.

    Empty current path or pid become None.
    """
    panes = []
    for pane_id, window_id, session_id, path, pid, active in _records(output, PANE_FIELDS, "pane"):
        panes.append(
            Pane(
                id=_parse_id(PaneId, pane_id, "pane_id"),
                window_id=_parse_id(WindowId, window_id, "window_id"),
                session_id=_parse_id(SessionId, session_id, "session_id"),
                current_path=path or None,
                pid=_parse_int(pid, "pane_pid") if pid else None,
                active=_parse_flag(active, "pane_active"),
            )
        )
    return panes


def _attach_panes(windows: list[Window], panes: list[Pane]) -> list[Window]:
    """Attach panes to their windows, enforcing referential integrity."""
    by_id = {window.id: window for window in windows}
    grouped: dict[WindowId, list[Pane]] = {window.id: [] for window in windows}

    for pane in panes:
        owner = by_id.get(pane.window_id)
        if owner is None:
            raise ParseError(f"Pane {pane.id} references unknown window {pane.window_id}")
        if owner.session_id != pane.session_id:
            raise ParseError(
                f"Pane {pane.id} claims session {pane.session_id} but window {owner.id} belongs to {owner.session_id}"
            )
        grouped[pane.window_id].append(pane)

    return [replace(window, panes=tuple(grouped[window.id])) for window in windows]


def build_windows(window_output: Optional[str], pane_output: Optional[str]) -> list[Window]:
    """Build Window graphs from a window listing and a pane listing.

    Panes belonging to windows outside the listing are a ParseError.
    """
    return _attach_panes(parse_windows(window_output), parse_panes(pane_output))


def build_sessions(
    session_output: Optional[str], window_output: Optional[str], pane_output: Optional[str]
) -> list[Session]:
    """Build full Session → Window → Pane graphs from three listings.

    Args:
        session_output: list-sessions output in SESSION_FORMAT.
        window_output: list-windows -a output in WINDOW_FORMAT.
        pane_output: list-panes -a output in PANE_FORMAT.

    Returns:
        Sessions in listing order, each owning its windows and panes.

    Raises:
        ParseError: On any malformed record or dangling parent reference.
    """
    sessions = parse_sessions(session_output)
    windows = build_windows(window_output, pane_output)

    grouped: dict[SessionId, list[Window]] = {session.id: [] for session in sessions}
    for window in windows:
        if window.session_id not in grouped:
            raise ParseError(f"Window {window.id} references unknown session {window.session_id}")
        grouped[window.session_id].append(window)

    return [replace(session, windows=tuple(grouped[session.id])) for session in sessions]
