"""Shared response builders for swarmtap commands.

Core operations raise swarmtap.errors exceptions; commands catch them at the
boundary and render one of these responses instead of a traceback. Under the
typer CLI (see exit_on_error) an error is written to stderr and the process
exits with status 1 instead.

PUBLIC API:
  - exit_on_error: Switch error responses to stderr plus exit status 1
  - markdown_error_response: Error response for markdown display commands
  - table_error_response: Error response for table display commands
  - markdown_lines_response: Code block response for log lines
"""

import logging
from typing import Any

import typer

__all__ = ["exit_on_error", "markdown_error_response", "table_error_response", "markdown_lines_response"]

logger = logging.getLogger(__name__)

_exit_on_error = False


def exit_on_error(enabled: bool = True) -> None:
    """Make error responses terminate the command with exit status 1.

    Enabled by the CLI entry point; the REPL and MCP server keep rendering
    errors as responses.
    """
    global _exit_on_error
    _exit_on_error = enabled


def _report(message: str) -> None:
    logger.warning(f"Command failed: {message}")
    if _exit_on_error:
        typer.echo(f"Error: {message}", err=True)
        raise typer.Exit(code=1)


def markdown_error_response(message: str) -> dict[str, Any]:
    """Create error response for markdown display commands.

    Args:
        message: The error message to display

    Returns:
        Markdown display dict with error element

    Raises:
        typer.Exit: With code 1 when exit_on_error is enabled.
    """
    _report(message)
    return {"elements": [{"type": "text", "content": f"Error: {message}"}], "frontmatter": {"status": "error"}}


def table_error_response(message: str) -> list[dict[str, Any]]:
    """Create error response for table display commands.

    Tables show nothing on error; the message is logged.
    """
    _report(message)
    return []


def markdown_lines_response(lines: list[str], **frontmatter: Any) -> dict[str, Any]:
    """Render log lines as a single text code block."""
    return {
        "elements": [{"type": "code_block", "content": "\n".join(lines) or "[No output]", "language": "text"}],
        "frontmatter": {**frontmatter, "lines": len(lines)},
    }
