"""Exceptions raised by swarmtap operations.

Every core operation either returns its result or raises one of these. The
only conditions that are not raised are the idempotent deletes (clearing a
missing prompt, truncating or deleting a missing log).

PUBLIC API:
  - TmuxError: Base exception for all swarmtap operations
  - TmuxIOError: Process launch or filesystem failure
  - CommandError: tmux ran but reported failure
  - ParseError: tmux output did not match the expected shape
  - NotFoundError: Queried entity or resource is absent
  - SessionNotFoundError: Session not found
  - WindowNotFoundError: Window not found
  - PaneNotFoundError: Pane not found
  - PromptNotFoundError: Prompt file not found
  - LogNotFoundError: Capture log not found
  - ProcessError: Lock contention or process-level failure with an error kind
"""

from typing import Optional


class TmuxError(Exception):
    """Base exception for all swarmtap operations."""

    pass


class TmuxIOError(TmuxError):
    """Raised when a process cannot be launched or a file cannot be accessed."""

    pass


class CommandError(TmuxError):
    """Raised when a tmux command ran and reported failure."""

    pass


class ParseError(TmuxError):
    """Raised when tmux output does not match the expected record shape."""

    pass


class NotFoundError(TmuxError):
    """Raised when a queried entity or resource is absent."""

    pass


class SessionNotFoundError(NotFoundError):
    """Raised when a tmux session cannot be found."""

    pass


class WindowNotFoundError(NotFoundError):
    """Raised when a tmux window cannot be found."""

    pass


class PaneNotFoundError(NotFoundError):
    """Raised when a tmux pane cannot be found."""

    pass


class PromptNotFoundError(NotFoundError):
    """Raised when a pane has no pending prompt file."""

    pass


class LogNotFoundError(NotFoundError):
    """Raised when a session has no capture log."""

    pass


class ProcessError(TmuxError):
    """Raised on lock contention or process-level failure.

    Attributes:
        kind: Short error kind, e.g. "WouldBlock", "TimedOut", "Unsupported".
        errno: OS error number when one was reported.
    """

    def __init__(self, kind: str, message: str, errno: Optional[int] = None):
        super().__init__(f"{message} ({kind})")
        self.kind = kind
        self.errno = errno
