"""tmux command layer - typed queries and control commands.

PUBLIC API:
  - CommandExecutor: Execute Command descriptors, return Responses
  - SubprocessRunner: Default process runner
  - RunResult: Captured process result
  - SessionManager: Session operations
  - WindowManager: Window operations
  - PaneManager: Pane operations
  - CaptureControl: pipe-pane capture into session logs
  - build_sessions: Parse listings into Session graphs
"""

from .core import CommandExecutor, SubprocessRunner, RunResult, ProcessRunner

from .parser import build_sessions, build_windows, parse_sessions, parse_windows, parse_panes

from .session import SessionManager
from .window import WindowManager
from .pane import PaneManager
from .capture import CaptureControl

__all__ = [
    "CommandExecutor",
    "SubprocessRunner",
    "RunResult",
    "ProcessRunner",
    "build_sessions",
    "build_windows",
    "parse_sessions",
    "parse_windows",
    "parse_panes",
    "SessionManager",
    "WindowManager",
    "PaneManager",
    "CaptureControl",
]
