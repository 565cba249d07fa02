"""Session management for tmux.

PUBLIC API:
  - SessionManager: Create, list, look up, rename, attach, detach and kill sessions
"""

import logging
from typing import Optional

from ..errors import CommandError, NotFoundError, SessionNotFoundError
from ..types import SERVER, Command, Session, SessionId
from .core import CommandExecutor, expect_success, is_no_server_error
from .parser import PANE_FORMAT, SESSION_FORMAT, WINDOW_FORMAT, build_sessions

logger = logging.getLogger(__name__)

# tmux rewrites these to "_" in session names
RESERVED_NAME_CHARS = ".:"


class SessionManager:
    """Session operations composed from a CommandExecutor.

    Every read re-queries tmux; no Session is cached between calls. After
    kill_session succeeds the id must be treated as invalid.
    """

    def __init__(self, executor: CommandExecutor):
        self.executor = executor

    def _listing(self, command: str, *args: str) -> Optional[str]:
        """Run a listing command, mapping "no server running" to an empty listing."""
        response = self.executor.execute(Command(command, SERVER, args))
        if not response.success:
            if is_no_server_error(response.error):
                return None
            raise CommandError(response.error or f"Failed to run {command}")
        return response.output

    def list_sessions(self) -> list[Session]:
        """Get all tmux sessions with their windows and panes.

        Returns:
            Sessions in tmux listing order. Empty if no server is running.

        Raises:
            CommandError: If a listing command fails.
            ParseError: If a listing is malformed or inconsistent.
        """
        sessions = self._listing("list-sessions", "-F", SESSION_FORMAT)
        if not sessions or not sessions.strip():
            return []
        windows = self._listing("list-windows", "-a", "-F", WINDOW_FORMAT)
        panes = self._listing("list-panes", "-a", "-F", PANE_FORMAT)
        return build_sessions(sessions, windows, panes)

    def get_session(self, session_id: SessionId) -> Session:
        """Get a session by id.

        Raises:
            SessionNotFoundError: If no session has that id.
        """
        for session in self.list_sessions():
            if session.id == session_id:
                return session
        raise SessionNotFoundError(f"Session '{session_id}' not found")

    def find_session(self, identifier: str) -> Session:
        """Find a session by id ("$3") or by name.

        Id matches take precedence over name matches.

        Raises:
            SessionNotFoundError: If nothing matches.
        """
        sessions = self.list_sessions()
        for session in sessions:
            if session.id.value == identifier:
                return session
        for session in sessions:
            if session.name == identifier:
                return session
        raise SessionNotFoundError(f"Session '{identifier}' not found")

    def has_session(self, name: str) -> bool:
        """Check whether a session with this name exists."""
        return any(session.name == name for session in self.list_sessions())

    def new_session(self, name: str, start_dir: Optional[str] = None) -> Session:
        """Create a detached session and return it.

        tmux does not reliably report the new id, so the session is located by
        name with a single re-query. Concurrent creation of same-named sessions
        can make that lookup ambiguous.

        Args:
            name: Session name.
            start_dir: Starting directory for the session.

        Raises:
            ValueError: If the name is empty or contains "." or ":", which tmux
                silently replaces with "_".
            CommandError: If tmux refuses to create the session.
            NotFoundError: If the session is not in the listing afterwards.
        """
        if not name or any(ch in name for ch in RESERVED_NAME_CHARS):
            raise ValueError(f"Invalid session name {name!r}: must be non-empty without '.' or ':'")

        args = ["-d", "-s", name]
        if start_dir:
            args.extend(["-c", start_dir])
        expect_success(self.executor.execute(Command("new-session", SERVER, tuple(args))), "Failed to create session")

        for session in self.list_sessions():
            if session.name == name:
                logger.info(f"Created session {session.id} ({name})")
                return session
        raise NotFoundError(f"Session '{name}' not found after creation")

    def rename_session(self, session_id: SessionId, new_name: str) -> None:
        expect_success(
            self.executor.execute(Command("rename-session", session_id, (new_name,))), "Failed to rename session"
        )
        logger.info(f"Renamed session {session_id} to {new_name}")

    def attach_session(self, session_id: SessionId) -> None:
        """Attach the current terminal to a session (blocks while attached)."""
        expect_success(self.executor.execute(Command("attach-session", session_id)), "Failed to attach session")

    def detach_session(self, session_id: SessionId) -> None:
        """Detach every client attached to a session."""
        expect_success(
            self.executor.execute(Command("detach-client", SERVER, ("-s", session_id.value))),
            "Failed to detach session",
        )

    def kill_session(self, session_id: SessionId) -> None:
        expect_success(self.executor.execute(Command("kill-session", session_id)), "Failed to kill session")
        logger.info(f"Killed session {session_id}")
