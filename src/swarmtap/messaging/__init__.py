"""File-based messaging - prompt files, locking, queueing and capture logs.

PUBLIC API:
  - FileLock: Non-blocking advisory lock
  - MessageSender: Per-pane prompt files
  - MessageQueue: In-memory FIFO feeding MessageSender
  - LogReader: Per-session capture log queries and watching
"""

from .lock import FileLock
from .send import MessageSender, parse_prompt, format_metadata_header
from .queue import MessageQueue
from .read import LogReader, split_lines

__all__ = [
    "FileLock",
    "MessageSender",
    "parse_prompt",
    "format_metadata_header",
    "MessageQueue",
    "LogReader",
    "split_lines",
]
