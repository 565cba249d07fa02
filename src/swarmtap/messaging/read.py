"""Read access to per-session capture logs.

tmux appends pane output to <log_dir>/<session_id>.log (or, for a single pane,
<log_dir>/pane_<pane_id>.log) through pipe-pane; this module only reads,
truncates or deletes those files. Watching tracks a byte offset into the file,
so several readers can follow the same log independently.

PUBLIC API:
  - LogReader: Read, slice, tail, search and watch capture logs
  - split_lines: Split log text into lines
"""

import logging
import os
import time
from pathlib import Path
from typing import Callable, Iterator, Optional

from ..config import default_log_dir
from ..errors import CommandError, LogNotFoundError
from ..types import PaneId, SessionId

logger = logging.getLogger(__name__)

LOG_SUFFIX = ".log"
PANE_LOG_PREFIX = "pane_"


def split_lines(text: str) -> list[str]:
    """Split on \\n, dropping one trailing \\r per line and the empty tail after a final newline."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class LogReader:
    """Query surface over <log_dir>/<session_id>.log and pane_<pane_id>.log files.

    A missing log reads as empty. Metadata queries on a missing log raise
    CommandError.
    """

    def __init__(self, log_dir: Optional[Path | str] = None, poll_interval: float = 0.1):
        self.log_dir = Path(log_dir) if log_dir is not None else default_log_dir()
        self.poll_interval = poll_interval

    def log_path(self, session_id: SessionId) -> Path:
        return self.log_dir / f"{session_id}{LOG_SUFFIX}"

    def pane_log_path(self, pane_id: PaneId) -> Path:
        return self.log_dir / f"{PANE_LOG_PREFIX}{pane_id}{LOG_SUFFIX}"

    # Whole-file reads

    def _read_text(self, path: Path) -> str:
        try:
            with open(path, "rb") as f:
                return f.read().decode("utf-8", errors="replace")
        except FileNotFoundError:
            return ""
        except OSError as e:
            raise CommandError(f"Failed to read log file: {e}") from e

    def read_log(self, session_id: SessionId) -> str:
        return self._read_text(self.log_path(session_id))

    def read_pane_output(self, pane_id: PaneId) -> str:
        """Whole per-pane capture log, empty when the pane was never captured."""
        return self._read_text(self.pane_log_path(pane_id))

    def read_log_lines(self, session_id: SessionId) -> list[str]:
        return split_lines(self.read_log(session_id))

    def read_log_from(self, session_id: SessionId, offset: int) -> list[str]:
        """Lines after skipping the first offset lines."""
        return self.read_log_lines(session_id)[max(offset, 0) :]

    def tail_log(self, session_id: SessionId, n: int) -> list[str]:
        """Last n lines, or every line when the log is shorter."""
        if n <= 0:
            return []
        return self.read_log_lines(session_id)[-n:]

    def search_log(self, session_id: SessionId, pattern: str) -> list[str]:
        """Lines containing pattern as a literal substring, in file order."""
        return [line for line in self.read_log_lines(session_id) if pattern in line]

    # Metadata

    def _stat(self, session_id: SessionId) -> os.stat_result:
        path = self.log_path(session_id)
        try:
            return path.stat()
        except OSError as e:
            raise CommandError(f"Failed to get log metadata for {path}: {e}") from e

    def get_log_size(self, session_id: SessionId) -> int:
        """Size of the log in bytes."""
        return self._stat(session_id).st_size

    def get_log_timestamp(self, session_id: SessionId) -> int:
        """Last modification time of the log, unix seconds."""
        return int(self._stat(session_id).st_mtime)

    # Maintenance

    def clear_log(self, session_id: SessionId) -> None:
        """Truncate the log to zero length. A missing log is left missing."""
        path = self.log_path(session_id)
        try:
            with open(path, "r+b") as f:
                f.truncate(0)
        except FileNotFoundError:
            return
        except OSError as e:
            raise CommandError(f"Failed to clear log: {e}") from e

    def delete_log(self, session_id: SessionId) -> None:
        try:
            self.log_path(session_id).unlink(missing_ok=True)
        except OSError as e:
            raise CommandError(f"Failed to delete log: {e}") from e

    def list_session_logs(self) -> list[SessionId]:
        """Session ids that have a log file, sorted by id."""
        try:
            names = sorted(entry.name for entry in os.scandir(self.log_dir) if entry.is_file())
        except FileNotFoundError:
            return []
        except OSError as e:
            raise CommandError(f"Failed to read log directory: {e}") from e
        return [
            SessionId(name[: -len(LOG_SUFFIX)])
            for name in names
            if name.endswith(LOG_SUFFIX) and name != LOG_SUFFIX and not name.startswith(PANE_LOG_PREFIX)
        ]

    # Watching

    def follow_log(
        self, session_id: SessionId, from_start: bool = True, poll_interval: Optional[float] = None
    ) -> Iterator[str]:
        """Yield lines as they are appended to a session's log.

        The iterator never ends on its own; stop consuming it (or interrupt the
        thread) to cancel. A line is yielded once, after its newline has been
        written. If the log shrinks it was truncated and is read again from the
        beginning.

        Args:
            session_id: Session whose log to follow.
            from_start: Deliver existing content first. When False only lines
                appended after the call are delivered.
            poll_interval: Seconds between size checks.

        Raises:
            LogNotFoundError: If the log does not exist when watching starts.
            CommandError: On any I/O failure while watching.
        """
        path = self.log_path(session_id)
        interval = self.poll_interval if poll_interval is None else poll_interval

        try:
            size = path.stat().st_size
        except FileNotFoundError:
            raise LogNotFoundError(f"Log file does not exist: {path}")
        except OSError as e:
            raise CommandError(f"Failed to read log: {e}") from e

        position = 0 if from_start else size
        logger.debug(f"Watching {path} from byte {position}")
        return self._follow(path, position, interval)

    def _follow(self, path: Path, position: int, interval: float) -> Iterator[str]:
        pending = b""

        while True:
            try:
                size = path.stat().st_size
                if size < position:
                    logger.debug(f"{path} shrank from {position} to {size} bytes, rewinding")
                    position, pending = 0, b""
                chunk = b""
                if size > position:
                    with open(path, "rb") as f:
                        f.seek(position)
                        chunk = f.read(size - position)
            except OSError as e:
                raise CommandError(f"Failed to read log: {e}") from e

            if not chunk:
                time.sleep(interval)
                continue

            position += len(chunk)
            pending += chunk
            *complete, pending = pending.split(b"\n")
            for raw in complete:
                line = raw.decode("utf-8", errors="replace")
                yield line[:-1] if line.endswith("\r") else line

    def watch_log(
        self,
        session_id: SessionId,
        callback: Callable[[str], object],
        from_start: bool = True,
        poll_interval: Optional[float] = None,
    ) -> None:
        """Block, calling callback once per appended line in append order.

        Runs until interrupted or until callback raises; see follow_log.
        """
        for line in self.follow_log(session_id, from_start=from_start, poll_interval=poll_interval):
            callback(line)
