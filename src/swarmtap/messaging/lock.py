"""Advisory file locking for prompt files.

Locks are cooperative: they exclude only other processes that lock the same
path through FileLock. Acquisition never waits; callers that want to retry
own their backoff.

PUBLIC API:
  - FileLock: Non-blocking exclusive lock held on a marker file
"""

import errno
import logging
import os
from pathlib import Path
from typing import Callable, Optional, TypeVar

from ..errors import ProcessError, TmuxIOError

try:
    import fcntl
except ImportError:  # Windows
    fcntl = None

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FileLock:
    """Exclusive advisory lock on a zero-byte marker file.

    Examples:
        with FileLock.acquire(path):
            ...  # lock held

        FileLock.try_with(path, lambda: write_prompt())
    """

    def __init__(self, path: Path, fd: int):
        self.path = path
        self._fd: Optional[int] = fd

    @classmethod
    def acquire(cls, path: Path | str) -> "FileLock":
        """Take the lock or fail immediately.

        Args:
            path: Lock file path. Parent directories are created.

        Returns:
            Held lock; release with release() or by leaving a with block.

        Raises:
            ProcessError: "WouldBlock" if another holder is active,
                "Unsupported" on platforms without flock.
            TmuxIOError: If the marker file cannot be created.
        """
        if fcntl is None:
            raise ProcessError("Unsupported", "File locking not supported on this platform")

        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o644)
        except OSError as e:
            raise TmuxIOError(f"Failed to open lock file {path}: {e}") from e

        try:
            fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except OSError as e:
            os.close(fd)
            if e.errno in (errno.EWOULDBLOCK, errno.EAGAIN, errno.EACCES):
                raise ProcessError("WouldBlock", f"File is locked: {path}", e.errno) from e
            raise ProcessError("Other", f"Failed to lock {path}: {e}", e.errno) from e

        logger.debug(f"Acquired lock {path}")
        return cls(path, fd)

    @property
    def held(self) -> bool:
        return self._fd is not None

    def release(self) -> None:
        """Release the lock. Safe to call more than once."""
        if self._fd is None:
            return
        fd, self._fd = self._fd, None
        try:
            fcntl.flock(fd, fcntl.LOCK_UN)
        finally:
            os.close(fd)
        logger.debug(f"Released lock {self.path}")

    def __enter__(self) -> "FileLock":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    @classmethod
    def try_with(cls, path: Path | str, body: Callable[[], T]) -> T:
        """Run body while holding the lock at path.

        The lock is released whether body returns or raises; body's result or
        exception passes through unchanged.
        """
        with cls.acquire(path):
            return body()
