"""swarmtap entry point.

Runs as a typer CLI when given a known subcommand, as an MCP server with
--mcp, and as an interactive REPL otherwise.
"""

import logging
import os
import sys

logging.basicConfig(
    level=os.environ.get("SWARMTAP_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%H:%M:%S",
)

from .app import app  # noqa: E402
from .commands._helpers import exit_on_error  # noqa: E402

CLI_SUBCOMMANDS = frozenset(
    [
        "session-start",
        "session-list",
        "session-attach",
        "session-detach",
        "session-stop",
        "message-send",
        "message-read",
        "message-clear",
        "message-queue",
        "message-dispatch",
        "output-read",
        "output-tail",
        "output-search",
        "output-watch",
        "output-pane",
        "status",
    ]
)


def main():
    """Run swarmtap as CLI, MCP server or REPL based on command line arguments."""
    if len(sys.argv) > 1 and sys.argv[1] in CLI_SUBCOMMANDS:
        exit_on_error()
        app.cli()
    elif "--mcp" in sys.argv:
        app.mcp.run()
    else:
        app.run(title="swarmtap - tmux control for agents")


if __name__ == "__main__":
    main()
