"""swarmtap ReplKit2 application.

Dual REPL/MCP (and typer CLI) surface over the swarmtap core. Commands get the
application state, which owns one instance of each core component built from a
single SwarmConfig.
"""

from dataclasses import dataclass, field

from replkit2 import App

from .config import SwarmConfig, load_config
from .messaging import LogReader, MessageQueue, MessageSender
from .tmux import CaptureControl, CommandExecutor, PaneManager, SessionManager


@dataclass
class SwarmTapState:
    """Application state for swarmtap.

    Attributes:
        config: Resolved configuration all components are built from.
        sessions: tmux session operations.
        panes: tmux pane operations.
        sender: Prompt file writer.
        logs: Capture log reader.
        capture: pipe-pane control.
        queue: Messages waiting for dispatch.
    """

    config: SwarmConfig = field(default_factory=load_config)
    executor: CommandExecutor = field(init=False)
    sessions: SessionManager = field(init=False)
    panes: PaneManager = field(init=False)
    sender: MessageSender = field(init=False)
    logs: LogReader = field(init=False)
    capture: CaptureControl = field(init=False)
    queue: MessageQueue = field(init=False, default_factory=MessageQueue)

    def __post_init__(self):
        self.executor = CommandExecutor.from_config(self.config)
        self.sessions = SessionManager(self.executor)
        self.panes = PaneManager(self.executor)
        self.sender = MessageSender(self.config.base_path)
        self.logs = LogReader(self.config.log_dir, poll_interval=self.config.poll_interval)
        self.capture = CaptureControl(self.executor, self.logs)


# Must be created before command imports for decorator registration
app = App(
    "swarmtap",
    SwarmTapState,
    uri_scheme="swarmtap",
    fastmcp={
        "description": "Drive tmux sessions for automation agents",
        "tags": {"tmux", "automation", "agents"},
    },
)


# Command imports trigger @app.command decorator registration
from .commands import session  # noqa: E402, F401
from .commands import message  # noqa: E402, F401
from .commands import output  # noqa: E402, F401
from .commands import status  # noqa: E402, F401
