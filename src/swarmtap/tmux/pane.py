"""Pane operations - split, list, key injection, paste, capture.

PUBLIC API:
  - PaneManager: Pane-level tmux commands
"""

import hashlib
import logging
from typing import Optional

from ..errors import CommandError, PaneNotFoundError
from ..types import SERVER, Command, Pane, PaneId, SessionId, WindowId
from .core import CommandExecutor, expect_success
from .parser import PANE_FORMAT, parse_panes

logger = logging.getLogger(__name__)


class PaneManager:
    def __init__(self, executor: CommandExecutor):
        self.executor = executor

    def _run(self, command: str, target, *args: str, fallback: str):
        return expect_success(self.executor.execute(Command(command, target, args)), fallback)

    def list_panes(self, target: WindowId | SessionId) -> list[Pane]:
        """List panes of a window, or of every window in a session."""
        args = ("-s", "-F", PANE_FORMAT) if isinstance(target, SessionId) else ("-F", PANE_FORMAT)
        response = self._run("list-panes", target, *args, fallback="Failed to list panes")
        return parse_panes(response.output)

    def get_pane(self, window_id: WindowId, pane_id: PaneId) -> Pane:
        for pane in self.list_panes(window_id):
            if pane.id == pane_id:
                return pane
        raise PaneNotFoundError(f"Pane '{pane_id}' not found")

    def split_pane(self, window_id: WindowId, horizontal: bool = False) -> Pane:
        """Split a window and return the new pane.

        tmux places the new pane after the active one, not at the end of the
        listing, so its id is taken from split-window -P.

        Args:
            window_id: Window to split.
            horizontal: Split side by side instead of stacked.
        """
        response = self._run(
            "split-window",
            window_id,
            "-d",
            "-h" if horizontal else "-v",
            "-P",
            "-F",
            "#{pane_id}",
            fallback="Failed to split pane",
        )
        new_id = response.output.strip()
        if not new_id:
            raise CommandError("split-window did not report the new pane id")
        return self.get_pane(window_id, PaneId(new_id))

    def kill_pane(self, pane_id: PaneId) -> None:
        self._run("kill-pane", pane_id, fallback="Failed to kill pane")

    def select_pane(self, pane_id: PaneId) -> None:
        self._run("select-pane", pane_id, fallback="Failed to select pane")

    def send_keys(self, pane_id: PaneId, *keys: str, enter: bool = False, literal: bool = False) -> None:
        """Send keystrokes to a pane.

        Without literal, an argument that matches a key name ("Escape", "C-c")
        is sent as that key.

        Args:
            pane_id: Target pane.
            *keys: Literal text or tmux key names, each a separate argument.
            enter: Send Enter after the keys.
            literal: Send keys as text (send-keys -l), never as key names.

        Examples:
            send_keys(pane, "ls -la", enter=True)
            send_keys(pane, "C-c")
            send_keys(pane, "Escape", literal=True)
        """
        if keys:
            flags = ("-l",) if literal else ()
            self._run("send-keys", pane_id, *flags, *keys, fallback="Failed to send keys")
        if enter:
            self._run("send-keys", pane_id, "Enter", fallback="Failed to send keys")

    def paste_text(self, pane_id: PaneId, text: str, enter: bool = False) -> None:
        """Paste arbitrary text into a pane through a tmux buffer.

        Unlike send_keys, the text is never interpreted as key names and embedded
        newlines do not submit it line by line (paste-buffer -p uses bracketed
        paste when the application asks for it).

        Args:
            pane_id: Target pane.
            text: Content to paste; may span several lines.
            enter: Send Enter after the paste.
        """
        buffer_name = f"swarmtap_{hashlib.md5(text.encode()).hexdigest()[:8]}"
        expect_success(
            self.executor.execute(Command("load-buffer", SERVER, ("-b", buffer_name, "-"), input=text)),
            "Failed to load paste buffer",
        )
        self._run("paste-buffer", pane_id, "-b", buffer_name, "-d", "-p", fallback="Failed to paste buffer")
        if enter:
            self._run("send-keys", pane_id, "Enter", fallback="Failed to send keys")
        logger.debug(f"Pasted {len(text)} chars into {pane_id}")

    def capture_pane(self, pane_id: PaneId, start: Optional[int] = None) -> str:
        """Capture the visible content of a pane.

        Args:
            pane_id: Target pane.
            start: Include this many lines of scrollback above the visible area.
        """
        args = ["-p"]
        if start is not None:
            args.extend(["-S", f"-{start}"])
        return self._run("capture-pane", pane_id, *args, fallback="Failed to capture pane output").output

    def resize_pane(self, pane_id: PaneId, width: Optional[int] = None, height: Optional[int] = None) -> None:
        if width is not None:
            self._run("resize-pane", pane_id, "-x", str(width), fallback="Failed to resize pane width")
        if height is not None:
            self._run("resize-pane", pane_id, "-y", str(height), fallback="Failed to resize pane height")
