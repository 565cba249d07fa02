"""Message commands - deliver prompts to panes.

PUBLIC API:
  - message_send: Write a prompt file for a pane and paste it into the pane
  - message_read: Show a pane's pending prompt
  - message_clear: Remove a pane's pending prompt
  - message_queue: Queue a prompt for later dispatch
  - message_dispatch: Write queued prompts in order
"""

from typing import Any

from ..app import app
from ..errors import TmuxError
from ..types import PaneId, PromptMetadata
from ._helpers import markdown_error_response


@app.command(
    display="markdown",
    typer={"name": "message-send", "help": "Send a message to a pane"},
    fastmcp={"tags": {"message"}, "description": "Deliver a prompt to a tmux pane"},
)
def message_send(state, pane: str, message: str, inject: bool = True) -> dict[str, Any]:
    """Send a prompt to a pane.

    The prompt file is written first, with a metadata header naming the
    pane's session, then the text is pasted into the pane followed by Enter.

    Args:
        state: Application state.
        pane: Pane id, e.g. "%3".
        message: Prompt text.
        inject: Also paste the prompt into the pane.
    """
    try:
        pane_id = PaneId(pane)
        session_id = _owning_session(state, pane_id)
        if session_id is None:
            sent = state.sender.send_prompt(pane_id, message)
        else:
            metadata = PromptMetadata(session_id=session_id, agent=state.config.agent)
            sent = state.sender.send_prompt_with_metadata(pane_id, message, metadata)
    except (TmuxError, ValueError) as e:
        return markdown_error_response(f"Failed to send message: {e}")

    prompt_file = str(state.sender.prompt_path(pane_id))
    if inject:
        try:
            state.panes.paste_text(pane_id, message, enter=True)
        except TmuxError as e:
            return markdown_error_response(
                f"Prompt written to {prompt_file}, but pasting into pane {pane} failed: {e}"
            )

    return {
        "elements": [{"type": "blockquote", "content": message}],
        "frontmatter": {"pane": pane, "id": sent.id, "file": prompt_file, "status": "sent"},
    }


def _owning_session(state, pane_id: PaneId):
    for session in state.sessions.list_sessions():
        if any(p.id == pane_id for p in session.panes):
            return session.id
    return None


@app.command(
    display="markdown",
    typer={"name": "message-read", "help": "Show a pane's pending prompt"},
    fastmcp={"tags": {"message"}},
)
def message_read(state, pane: str) -> dict[str, Any]:
    """Show the pending prompt for a pane with its metadata."""
    try:
        content, metadata = state.sender.read_prompt_with_metadata(PaneId(pane))
    except (TmuxError, ValueError) as e:
        return markdown_error_response(str(e))

    frontmatter: dict[str, Any] = {"pane": pane}
    if metadata:
        frontmatter.update(session=metadata.session_id.value, agent=metadata.agent, timestamp=metadata.timestamp)
    return {
        "elements": [{"type": "code_block", "content": content or "[Empty prompt]", "language": "text"}],
        "frontmatter": frontmatter,
    }


@app.command(
    display="markdown",
    typer={"name": "message-clear", "help": "Remove a pane's pending prompt"},
    fastmcp={"tags": {"message"}},
)
def message_clear(state, pane: str) -> dict[str, Any]:
    """Remove a pane's pending prompt. Clearing twice is fine."""
    try:
        state.sender.clear_prompt(PaneId(pane))
    except (TmuxError, ValueError) as e:
        return markdown_error_response(str(e))

    return {"elements": [], "frontmatter": {"pane": pane, "status": "cleared"}}


@app.command(
    display="markdown",
    typer={"name": "message-queue", "help": "Queue a prompt for later dispatch"},
    fastmcp={"tags": {"message"}},
)
def message_queue(state, pane: str, message: str) -> dict[str, Any]:
    """Queue a prompt for a pane without writing it yet."""
    try:
        queued = state.queue.push(PaneId(pane), message)
    except ValueError as e:
        return markdown_error_response(str(e))

    return {
        "elements": [{"type": "blockquote", "content": message}],
        "frontmatter": {"pane": pane, "id": queued.id, "queued": len(state.queue)},
    }


@app.command(
    display="markdown",
    typer={"name": "message-dispatch", "help": "Write queued prompts in order"},
    fastmcp={"tags": {"message"}},
)
def message_dispatch(state) -> dict[str, Any]:
    """Write every queued prompt to its pane's prompt file, oldest first."""
    try:
        delivered = state.queue.dispatch(state.sender)
    except TmuxError as e:
        return markdown_error_response(f"Dispatch stopped with {len(state.queue)} queued: {e}")

    if not delivered:
        return {"elements": [{"type": "text", "content": "Queue is empty"}], "frontmatter": {"dispatched": 0}}
    return {
        "elements": [{"type": "list", "items": [f"{m.pane_id}: {m.content[:60]}" for m in delivered]}],
        "frontmatter": {"dispatched": len(delivered)},
    }
