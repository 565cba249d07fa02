"""Status command - sessions, capture logs and queued messages at a glance."""

from typing import Any

from ..app import app
from ..errors import TmuxError
from ._helpers import markdown_error_response


@app.command(
    display="markdown",
    typer={"name": "status", "help": "Show system status"},
    fastmcp={"type": "resource", "mime_type": "text/markdown", "tags": {"status"}},
)
def status(state) -> dict[str, Any]:
    """Show active sessions, available logs and the message queue."""
    try:
        sessions = state.sessions.list_sessions()
        logged = state.logs.list_session_logs()
    except TmuxError as e:
        return markdown_error_response(str(e))

    elements: list[dict[str, Any]] = [{"type": "heading", "content": f"Active Sessions: {len(sessions)}", "level": 3}]
    if sessions:
        elements.append(
            {
                "type": "list",
                "items": [
                    f"{s.id} {s.name} - {len(s.windows)} windows ({'attached' if s.attached else 'detached'})"
                    for s in sessions
                ],
            }
        )
    else:
        elements.append({"type": "text", "content": "No active sessions"})

    elements.append({"type": "heading", "content": f"Available Logs: {len(logged)}", "level": 3})
    if logged:
        elements.append({"type": "list", "items": [session_id.value for session_id in logged], "ordered": False})
    else:
        elements.append({"type": "text", "content": "No log files"})

    stats = state.queue.stats()
    return {
        "elements": elements,
        "frontmatter": {
            "sessions": len(sessions),
            "logs": len(logged),
            "queued": stats.total_messages,
            "oldest_queued_age": stats.oldest_message_age,
            "log_dir": str(state.logs.log_dir),
        },
    }
