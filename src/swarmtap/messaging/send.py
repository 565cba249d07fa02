"""Prompt delivery through per-pane files.

A producer writes a prompt into <base>/.opencode/prompts/<pane_id>.prompt.input
and a consumer in the pane picks it up. Each send overwrites the previous
prompt; every access takes the lock at <prompt file>.lock.

PUBLIC API:
  - MessageSender: Write, read and clear per-pane prompt files
  - format_metadata_header: Render the metadata header block
  - parse_prompt: Split prompt text into content and optional metadata
"""

import logging
import os
import re
import tempfile
import uuid
from pathlib import Path
from typing import Optional

from ..errors import PromptNotFoundError, TmuxIOError
from ..types import Message, PaneId, PromptMetadata, SessionId
from .lock import FileLock

logger = logging.getLogger(__name__)

PROMPT_DIR = Path(".opencode") / "prompts"
PROMPT_INPUT_SUFFIX = ".prompt.input"
LOCK_SUFFIX = ".lock"

_HEADER_RE = re.compile(r"\A# session: (?P<session>.+)\n# timestamp: (?P<timestamp>\d+)\n# agent: (?P<agent>.*)\n\n")


def format_metadata_header(metadata: PromptMetadata) -> str:
    """Render the fixed four-line header that precedes a prompt."""
    return f"# session: {metadata.session_id}\n# timestamp: {metadata.timestamp}\n# agent: {metadata.agent}\n\n"


def parse_prompt(text: str) -> tuple[str, Optional[PromptMetadata]]:
    """Split prompt file text into (content, metadata).

    Text without a header is returned unchanged with metadata None.
    """
    match = _HEADER_RE.match(text)
    if not match:
        return text, None
    metadata = PromptMetadata(
        session_id=SessionId(match["session"]),
        agent=match["agent"],
        timestamp=int(match["timestamp"]),
    )
    return text[match.end() :], metadata


class MessageSender:
    """Deliver prompts to panes via prompt files under base_path."""

    def __init__(self, base_path: Path | str):
        self.base_path = Path(base_path)

    @property
    def prompt_dir(self) -> Path:
        return self.base_path / PROMPT_DIR

    def prompt_path(self, pane_id: PaneId) -> Path:
        return self.prompt_dir / f"{pane_id}{PROMPT_INPUT_SUFFIX}"

    def lock_path(self, pane_id: PaneId) -> Path:
        path = self.prompt_path(pane_id)
        return path.with_name(path.name + LOCK_SUFFIX)

    def _write(self, pane_id: PaneId, text: str) -> None:
        target = self.prompt_path(pane_id)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                    f.write(text)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp, target)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise TmuxIOError(f"Failed to write prompt for pane {pane_id}: {e}") from e
        logger.debug(f"Wrote {len(text)} chars to {target}")

    def send_prompt(self, pane_id: PaneId, prompt: str) -> Message:
        """Write a prompt for a pane, replacing any pending one.

        Returns:
            Record of the send with a fresh id.

        Raises:
            ProcessError: If another process holds the prompt lock.
            TmuxIOError: If the file cannot be written.
        """
        FileLock.try_with(self.lock_path(pane_id), lambda: self._write(pane_id, prompt))
        logger.info(f"Sent prompt to pane {pane_id}")
        return Message(id=uuid.uuid4().hex, pane_id=pane_id, content=prompt)

    def send_prompt_with_metadata(self, pane_id: PaneId, prompt: str, metadata: PromptMetadata) -> Message:
        """Write a prompt preceded by a session/timestamp/agent header."""
        text = format_metadata_header(metadata) + prompt
        FileLock.try_with(self.lock_path(pane_id), lambda: self._write(pane_id, text))
        logger.info(f"Sent prompt to pane {pane_id} for session {metadata.session_id} ({metadata.agent})")
        return Message(id=uuid.uuid4().hex, pane_id=pane_id, content=prompt, timestamp=metadata.timestamp)

    def _read(self, pane_id: PaneId) -> str:
        path = self.prompt_path(pane_id)
        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                return f.read()
        except FileNotFoundError:
            raise PromptNotFoundError(f"Prompt file not found for pane {pane_id}")
        except OSError as e:
            raise TmuxIOError(f"Failed to read prompt for pane {pane_id}: {e}") from e

    def read_prompt(self, pane_id: PaneId) -> str:
        """Read the pending prompt text exactly as written.

        Raises:
            PromptNotFoundError: If the pane has no prompt file.
            ProcessError: If another process holds the prompt lock.
        """
        return FileLock.try_with(self.lock_path(pane_id), lambda: self._read(pane_id))

    def read_prompt_with_metadata(self, pane_id: PaneId) -> tuple[str, Optional[PromptMetadata]]:
        """Read the pending prompt, separating a metadata header if present."""
        return parse_prompt(self.read_prompt(pane_id))

    def has_prompt(self, pane_id: PaneId) -> bool:
        return self.prompt_path(pane_id).exists()

    def clear_prompt(self, pane_id: PaneId) -> None:
        """Remove the pane's prompt file. A missing file is not an error."""

        def _remove():
            try:
                self.prompt_path(pane_id).unlink(missing_ok=True)
            except OSError as e:
                raise TmuxIOError(f"Failed to clear prompt for pane {pane_id}: {e}") from e

        FileLock.try_with(self.lock_path(pane_id), _remove)
        logger.debug(f"Cleared prompt for pane {pane_id}")
