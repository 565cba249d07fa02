"""Window operations.

PUBLIC API:
  - WindowManager: Create, list, select, rename and kill windows
"""

import logging

from ..errors import NotFoundError, WindowNotFoundError
from ..types import Command, SessionId, Window, WindowId
from .core import CommandExecutor, expect_success
from .parser import PANE_FORMAT, WINDOW_FORMAT, build_windows

logger = logging.getLogger(__name__)


class WindowManager:
    def __init__(self, executor: CommandExecutor):
        self.executor = executor

    def _run(self, command: str, target, *args: str, fallback: str):
        return expect_success(self.executor.execute(Command(command, target, args)), fallback)

    def list_windows(self, session_id: SessionId) -> list[Window]:
        """List a session's windows with their panes."""
        windows = self._run("list-windows", session_id, "-F", WINDOW_FORMAT, fallback="Failed to list windows")
        panes = self._run("list-panes", session_id, "-s", "-F", PANE_FORMAT, fallback="Failed to list panes")
        return build_windows(windows.output, panes.output)

    def get_window(self, session_id: SessionId, window_id: WindowId) -> Window:
        """Get one window of a session.

        Raises:
            WindowNotFoundError: If the session has no such window.
        """
        for window in self.list_windows(session_id):
            if window.id == window_id:
                return window
        raise WindowNotFoundError(f"Window '{window_id}' not found")

    def new_window(self, session_id: SessionId, name: str) -> Window:
        """Create a detached window and return it, located by name."""
        self._run("new-window", session_id, "-d", "-n", name, fallback="Failed to create window")
        for window in self.list_windows(session_id):
            if window.name == name:
                logger.info(f"Created window {window.id} ({name}) in {session_id}")
                return window
        raise NotFoundError(f"Window '{name}' not found after creation")

    def kill_window(self, window_id: WindowId) -> None:
        self._run("kill-window", window_id, fallback="Failed to kill window")

    def select_window(self, window_id: WindowId) -> None:
        self._run("select-window", window_id, fallback="Failed to select window")

    def rename_window(self, window_id: WindowId, new_name: str) -> None:
        self._run("rename-window", window_id, new_name, fallback="Failed to rename window")

    def next_window(self, session_id: SessionId) -> None:
        self._run("next-window", session_id, fallback="Failed to switch to next window")

    def previous_window(self, session_id: SessionId) -> None:
        self._run("previous-window", session_id, fallback="Failed to switch to previous window")

    def last_window(self, session_id: SessionId) -> None:
        self._run("last-window", session_id, fallback="Failed to switch to last window")
