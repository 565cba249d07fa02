"""Drive tmux sessions from automation agents.

Typed tmux queries (sessions, windows, panes) plus a file-based messaging
protocol: prompts are delivered through locked per-pane files and session
output is observed through append-only capture logs. Built on ReplKit2 for
dual REPL/MCP functionality.

PUBLIC API:
  - SwarmConfig: Resolved configuration
  - load_config: Build configuration from swarmtap.toml and environment
  - CommandExecutor: Execute tmux commands
  - SessionManager: Session operations
  - MessageSender: Per-pane prompt files
  - MessageQueue: In-memory message FIFO
  - LogReader: Capture log queries and watching
  - FileLock: Non-blocking advisory file lock
"""

from .config import SwarmConfig, load_config
from .tmux import CommandExecutor, SessionManager, WindowManager, PaneManager, CaptureControl
from .messaging import FileLock, LogReader, MessageQueue, MessageSender

__version__ = "0.1.0"
__all__ = [
    "SwarmConfig",
    "load_config",
    "CommandExecutor",
    "SessionManager",
    "WindowManager",
    "PaneManager",
    "CaptureControl",
    "FileLock",
    "LogReader",
    "MessageQueue",
    "MessageSender",
]
