"""Output commands - read, tail, search and watch capture logs.

PUBLIC API:
  - output_read: Whole capture log for a session
  - output_tail: Last N lines of a session's log
  - output_search: Lines containing a literal pattern
  - output_watch: Print lines as they are appended (blocks until Ctrl+C)
  - output_pane: Per-pane capture log (pipe-pane of a single pane)
"""

from typing import Any

from ..app import app
from ..errors import TmuxError
from ..messaging import split_lines
from ..types import PaneId, SessionId
from ._helpers import markdown_error_response, markdown_lines_response


def _session_id(state, target: str) -> SessionId:
    """Resolve a session name to its id; ids pass through untouched."""
    if target.startswith("$"):
        return SessionId(target)
    return state.sessions.find_session(target).id


@app.command(
    display="markdown",
    typer={"name": "output-read", "help": "Read session output"},
    fastmcp={"type": "resource", "mime_type": "text/markdown", "tags": {"output"}},
)
def output_read(state, target: str) -> dict[str, Any]:
    """Read a session's whole capture log."""
    try:
        session_id = _session_id(state, target)
        lines = state.logs.read_log_lines(session_id)
    except (TmuxError, ValueError) as e:
        return markdown_error_response(str(e))

    return markdown_lines_response(lines, session=session_id.value)


@app.command(
    display="markdown",
    typer={"name": "output-tail", "help": "Tail last N lines"},
    fastmcp={"tags": {"output"}},
)
def output_tail(state, target: str, lines: int = 20) -> dict[str, Any]:
    """Show the last lines of a session's capture log."""
    try:
        session_id = _session_id(state, target)
        tail = state.logs.tail_log(session_id, lines)
    except (TmuxError, ValueError) as e:
        return markdown_error_response(str(e))

    return markdown_lines_response(tail, session=session_id.value, requested=lines)


@app.command(
    display="markdown",
    typer={"name": "output-search", "help": "Search session output"},
    fastmcp={"tags": {"output"}},
)
def output_search(state, target: str, pattern: str) -> dict[str, Any]:
    """Show log lines containing pattern (literal, not a regex)."""
    try:
        session_id = _session_id(state, target)
        matches = state.logs.search_log(session_id, pattern)
    except (TmuxError, ValueError) as e:
        return markdown_error_response(str(e))

    return markdown_lines_response(matches, session=session_id.value, pattern=pattern)


@app.command(
    display="markdown",
    typer={"name": "output-watch", "help": "Watch session output live"},
    fastmcp={"enabled": False},
)
def output_watch(state, target: str, from_start: bool = False) -> dict[str, Any]:
    """Print lines appended to a session's log until interrupted."""
    seen = 0

    def _print(line: str):
        nonlocal seen
        seen += 1
        print(line, flush=True)

    try:
        session_id = _session_id(state, target)
        print("Press Ctrl+C to stop", flush=True)
        state.logs.watch_log(session_id, _print, from_start=from_start)
    except KeyboardInterrupt:
        pass
    except (TmuxError, ValueError) as e:
        return markdown_error_response(f"Error watching log: {e}")

    return {"elements": [], "frontmatter": {"session": target, "lines": seen, "status": "stopped"}}


@app.command(
    display="markdown",
    typer={"name": "output-pane", "help": "Read a single pane's capture log"},
    fastmcp={"type": "resource", "mime_type": "text/markdown", "tags": {"output"}},
)
def output_pane(state, pane: str, capture: bool = False) -> dict[str, Any]:
    """Read a pane's own capture log, optionally starting its capture first."""
    try:
        pane_id = PaneId(pane)
        if capture:
            state.capture.start_pane(pane_id)
        lines = split_lines(state.logs.read_pane_output(pane_id))
    except (TmuxError, ValueError) as e:
        return markdown_error_response(str(e))

    return markdown_lines_response(lines, pane=pane, log=str(state.logs.pane_log_path(pane_id)))
