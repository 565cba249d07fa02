"""swarmtap commands."""

from .session import session_start, session_list, session_attach, session_detach, session_stop
from .message import message_send, message_read, message_clear, message_queue, message_dispatch
from .output import output_read, output_tail, output_search, output_watch, output_pane
from .status import status

__all__ = [
    "session_start",
    "session_list",
    "session_attach",
    "session_detach",
    "session_stop",
    "message_send",
    "message_read",
    "message_clear",
    "message_queue",
    "message_dispatch",
    "output_read",
    "output_tail",
    "output_search",
    "output_watch",
    "output_pane",
    "status",
]
