"""Type definitions for swarmtap - tmux entities and messaging records.

Entities are immutable snapshots built fresh from a tmux listing on every
query. Identifiers are the tmux server's own ids ($0, @0, %0) and are only
meaningful within a single listing snapshot; never cache them across a server
restart.
"""

import time
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class _TmuxId:
    value: str

    def __post_init__(self):
        if not self.value:
            raise ValueError(f"{type(self).__name__} cannot be empty")

    def __str__(self) -> str:
        return self.value


class SessionId(_TmuxId):
    """tmux session id, e.g. "$0"."""


class WindowId(_TmuxId):
    """tmux window id, e.g. "@0"."""


class PaneId(_TmuxId):
    """tmux pane id, e.g. "%0"."""


@dataclass(frozen=True)
class Pane:
    id: PaneId
    window_id: WindowId
    session_id: SessionId
    current_path: Optional[str] = None
    pid: Optional[int] = None
    active: bool = False


@dataclass(frozen=True)
class Window:
    id: WindowId
    session_id: SessionId  # back-reference, lookup only
    name: str
    panes: tuple[Pane, ...] = ()
    active: bool = False


@dataclass(frozen=True)
class Session:
    id: SessionId
    name: str
    windows: tuple[Window, ...] = ()
    attached: bool = False

    @property
    def panes(self) -> list[Pane]:
        """All panes across the session's windows, in listing order."""
        return [pane for window in self.windows for pane in window.panes]

    @property
    def active_window(self) -> Optional[Window]:
        return next((w for w in self.windows if w.active), None)


@dataclass(frozen=True)
class ServerTarget:
    """Command target for server-wide commands (no -t flag)."""

    pass


SERVER = ServerTarget()

type CommandTarget = ServerTarget | SessionId | WindowId | PaneId


@dataclass(frozen=True)
class Command:
    """Request descriptor for a single tmux invocation.

    Attributes:
        command: tmux command name, e.g. "list-sessions".
        target: Server, session, window or pane the command addresses.
        args: Additional arguments appended after the target flag.
        input: Text written to the process' stdin, e.g. for load-buffer -.
    """

    command: str
    target: CommandTarget = SERVER
    args: tuple[str, ...] = ()
    input: Optional[str] = None


# None is the empty payload, str is raw command output
type ResponseData = None | Session | Window | Pane | list[Session] | list[Window] | list[Pane] | str


@dataclass(frozen=True)
class Response:
    success: bool
    data: ResponseData = None
    error: Optional[str] = None

    @property
    def output(self) -> str:
        """Raw stdout text, empty when the command printed nothing."""
        return self.data if isinstance(self.data, str) else ""


@dataclass(frozen=True)
class Message:
    """Point-in-time record of a prompt sent to a pane."""

    id: str
    pane_id: PaneId
    content: str
    timestamp: int = field(default_factory=lambda: int(time.time()))


@dataclass(frozen=True)
class QueuedMessage:
    id: str
    pane_id: PaneId
    content: str
    queued_at: float


@dataclass(frozen=True)
class QueueStats:
    total_messages: int
    oldest_message_age: Optional[float] = None  # seconds, None when empty


@dataclass(frozen=True)
class PromptMetadata:
    """Provenance header attached to a delivered prompt."""

    session_id: SessionId
    agent: str
    timestamp: int = field(default_factory=lambda: int(time.time()))
