"""In-memory FIFO of pending messages.

Single-owner, single-thread: no locking here. Share across threads only
behind your own synchronization.

PUBLIC API:
  - MessageQueue: FIFO with age statistics and dispatch to a MessageSender
"""

import logging
import time
import uuid
from collections import deque
from typing import Optional

from ..types import PaneId, QueuedMessage, QueueStats
from .send import MessageSender

logger = logging.getLogger(__name__)


class MessageQueue:
    def __init__(self):
        self._queue: deque[QueuedMessage] = deque()

    def __len__(self) -> int:
        return len(self._queue)

    def is_empty(self) -> bool:
        return not self._queue

    def push(self, pane_id: PaneId, content: str, queued_at: Optional[float] = None) -> QueuedMessage:
        """Queue content for a pane.

        Args:
            pane_id: Destination pane.
            content: Prompt text.
            queued_at: Unix time of queuing. Defaults to now.

        Returns:
            The queued record with a fresh id.
        """
        message = QueuedMessage(
            id=uuid.uuid4().hex,
            pane_id=pane_id,
            content=content,
            queued_at=time.time() if queued_at is None else queued_at,
        )
        self._queue.append(message)
        return message

    def push_message(self, message: QueuedMessage) -> None:
        self._queue.append(message)

    def pop(self) -> Optional[QueuedMessage]:
        """Remove and return the oldest message, or None when empty."""
        return self._queue.popleft() if self._queue else None

    def peek(self) -> Optional[QueuedMessage]:
        """Return the oldest message without removing it."""
        return self._queue[0] if self._queue else None

    def clear(self) -> None:
        self._queue.clear()

    def stats(self, now: Optional[float] = None) -> QueueStats:
        """Report queue length and the age of the oldest entry in seconds."""
        if not self._queue:
            return QueueStats(total_messages=0)
        now = time.time() if now is None else now
        return QueueStats(total_messages=len(self._queue), oldest_message_age=now - self._queue[0].queued_at)

    def dispatch(self, sender: MessageSender) -> list[QueuedMessage]:
        """Deliver queued messages in order through sender.send_prompt.

        Prompt files are last-write-wins, so several messages for one pane
        leave only the newest on disk. If a send fails the message goes back to
        the head of the queue and the error propagates.

        Returns:
            Messages delivered before the queue emptied.
        """
        delivered = []
        while self._queue:
            message = self._queue.popleft()
            try:
                sender.send_prompt(message.pane_id, message.content)
            except Exception:
                self._queue.appendleft(message)
                raise
            delivered.append(message)
        if delivered:
            logger.info(f"Dispatched {len(delivered)} queued message(s)")
        return delivered
