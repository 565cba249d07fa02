"""Output capture - keep capture logs filled through pipe-pane.

tmux owns the pipe; we only start it, stop it and ask whether it is running.
The logs it appends to are the ones LogReader reads: one per session (piped
from the session's active pane) and optionally one per pane.

PUBLIC API:
  - CaptureControl: Start, stop and query pipe-pane capture for a session or pane
"""

import logging
import shlex
from pathlib import Path

from ..errors import TmuxIOError
from ..messaging.read import LogReader
from ..types import Command, PaneId, SessionId
from .core import CommandExecutor, expect_success

logger = logging.getLogger(__name__)


class CaptureControl:
    def __init__(self, executor: CommandExecutor, log_reader: LogReader):
        self.executor = executor
        self.log_reader = log_reader

    def is_running(self, target: SessionId | PaneId) -> bool:
        """Check if a pipe is active on the target's pane."""
        response = self.executor.execute(Command("display-message", target, ("-p", "#{pane_pipe}")))
        return response.success and response.output.strip() == "1"

    def _pipe(self, target: SessionId | PaneId, path: Path) -> bool:
        # pipe-pane -o toggles: it closes a running pipe without reopening it
        if self.is_running(target):
            logger.debug(f"{target} is already piping, leaving it alone")
            return False

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch()
        except OSError as e:
            raise TmuxIOError(f"Failed to create capture log {path}: {e}") from e

        # tmux expands format sequences in the shell command, escape % as %%
        shell_command = f"cat >> {shlex.quote(str(path))}".replace("%", "%%")
        expect_success(
            self.executor.execute(Command("pipe-pane", target, ("-o", shell_command))),
            f"Failed to start capture for {target}",
        )
        logger.info(f"Capturing {target} output to {path}")
        return True

    def start(self, session_id: SessionId) -> bool:
        """Start appending the session's active pane output to its log.

        A pipe that is already running (to any destination) is left alone.

        Returns:
            True if a new pipe was opened, False if one was already running.

        Raises:
            TmuxIOError: If the log directory cannot be created.
            CommandError: If tmux refuses the pipe.
        """
        return self._pipe(session_id, self.log_reader.log_path(session_id))

    def start_pane(self, pane_id: PaneId) -> bool:
        """Start appending one pane's output to its pane log. See start()."""
        return self._pipe(pane_id, self.log_reader.pane_log_path(pane_id))

    def stop(self, target: SessionId | PaneId) -> None:
        """Close the pipe on the target's pane."""
        expect_success(
            self.executor.execute(Command("pipe-pane", target)),
            f"Failed to stop capture for {target}",
        )
        logger.info(f"Stopped capturing {target}")
