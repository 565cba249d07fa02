"""Session commands - start, list, attach, detach, stop.

PUBLIC API:
  - session_start: Create a detached session (and start capturing its output)
  - session_list: List sessions
  - session_attach: Attach to a session
  - session_detach: Detach clients from a session
  - session_stop: Kill a session
"""

from typing import Any

from ..app import app
from ..errors import TmuxError
from ._helpers import markdown_error_response, table_error_response


@app.command(
    display="markdown",
    typer={"name": "session-start", "help": "Create a new tmux session"},
    fastmcp={"tags": {"session"}, "description": "Create a detached tmux session"},
)
def session_start(state, name: str, capture: bool = True) -> dict[str, Any]:
    """Create a new detached session.

    Args:
        state: Application state.
        name: Session name.
        capture: Start piping the session's output into its capture log.
    """
    try:
        session = state.sessions.new_session(name)
        if capture:
            state.capture.start(session.id)
    except (TmuxError, ValueError) as e:
        return markdown_error_response(f"Failed to create session: {e}")

    return {
        "elements": [{"type": "text", "content": f"Session **{session.name}** created"}],
        "frontmatter": {
            "id": session.id.value,
            "name": session.name,
            "windows": len(session.windows),
            "log": str(state.logs.log_path(session.id)) if capture else None,
            "status": "created",
        },
    }


@app.command(
    display="table",
    headers=["ID", "Name", "Status", "Windows"],
    typer={"name": "session-list", "help": "List all sessions"},
    fastmcp={"type": "resource", "mime_type": "application/json", "tags": {"session"}},
)
def session_list(state) -> list[dict[str, Any]]:
    """List all tmux sessions."""
    try:
        sessions = state.sessions.list_sessions()
    except TmuxError as e:
        return table_error_response(str(e))

    return [
        {
            "ID": session.id.value,
            "Name": session.name,
            "Status": "attached" if session.attached else "detached",
            "Windows": len(session.windows),
        }
        for session in sessions
    ]


@app.command(
    display="markdown",
    typer={"name": "session-attach", "help": "Attach to a session"},
    fastmcp={"enabled": False},
)
def session_attach(state, target: str) -> dict[str, Any]:
    """Attach to a session by id or name."""
    try:
        session = state.sessions.find_session(target)
        state.sessions.attach_session(session.id)
    except TmuxError as e:
        return markdown_error_response(str(e))

    return {"elements": [], "frontmatter": {"id": session.id.value, "status": "attached"}}


@app.command(
    display="markdown",
    typer={"name": "session-detach", "help": "Detach from a session"},
    fastmcp={"tags": {"session"}},
)
def session_detach(state, target: str) -> dict[str, Any]:
    """Detach every client from a session given by id or name."""
    try:
        session = state.sessions.find_session(target)
        state.sessions.detach_session(session.id)
    except TmuxError as e:
        return markdown_error_response(str(e))

    return {
        "elements": [{"type": "text", "content": f"Detached from session **{session.name}**"}],
        "frontmatter": {"id": session.id.value, "status": "detached"},
    }


@app.command(
    display="markdown",
    typer={"name": "session-stop", "help": "Stop a session"},
    fastmcp={"tags": {"session"}, "description": "Kill a tmux session by id or name"},
)
def session_stop(state, target: str) -> dict[str, Any]:
    """Kill a session given by id or name."""
    try:
        session = state.sessions.find_session(target)
        state.sessions.kill_session(session.id)
    except TmuxError as e:
        return markdown_error_response(str(e))

    return {
        "elements": [{"type": "text", "content": f"Session **{session.name}** stopped"}],
        "frontmatter": {"id": session.id.value, "status": "stopped"},
    }
