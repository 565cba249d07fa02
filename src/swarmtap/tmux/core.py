"""Core tmux operations - the single point of contact with the tmux server.

PUBLIC API:
  - RunResult: Captured exit status and output of one process
  - ProcessRunner: Callable protocol that runs one argv
  - SubprocessRunner: Default runner built on subprocess.run
  - CommandExecutor: Build and execute a Command, return a Response
  - expect_success: Raise CommandError for a failed Response
"""

import logging
import subprocess
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from ..config import SwarmConfig
from ..errors import CommandError, ProcessError, TmuxIOError
from ..types import Command, Response, ServerTarget

logger = logging.getLogger(__name__)

NO_SERVER_MARKERS = ("no server running", "error connecting to", "no current client")


@dataclass(frozen=True)
class RunResult:
    returncode: int
    stdout: str
    stderr: str


class ProcessRunner(Protocol):
    """Runs one process to completion and captures its output."""

    def __call__(
        self, argv: Sequence[str], timeout: Optional[float] = None, input: Optional[str] = None
    ) -> RunResult: ...


class SubprocessRunner:
    """Run processes with subprocess.run, decoding output as UTF-8."""

    def __call__(
        self, argv: Sequence[str], timeout: Optional[float] = None, input: Optional[str] = None
    ) -> RunResult:
        try:
            result = subprocess.run(
                list(argv),
                input=input,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            raise ProcessError("TimedOut", f"{argv[0]} did not finish within {timeout}s")
        except OSError as e:
            raise TmuxIOError(f"Failed to execute {argv[0]}: {e}") from e
        return RunResult(result.returncode, result.stdout, result.stderr)


def is_no_server_error(message: Optional[str]) -> bool:
    """Check whether an error message means the tmux server is not running."""
    if not message:
        return False
    lowered = message.lower()
    return any(marker in lowered for marker in NO_SERVER_MARKERS)


class CommandExecutor:
    """Execute Command descriptors against tmux.

    Each execute() call spawns exactly one process and never retries. A
    missing binary or unreachable server is a hard failure for the caller to
    handle.
    """

    def __init__(
        self,
        runner: Optional[ProcessRunner] = None,
        tmux: str = "tmux",
        socket: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.runner = runner or SubprocessRunner()
        self.tmux = tmux
        self.socket = socket
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: SwarmConfig, runner: Optional[ProcessRunner] = None) -> "CommandExecutor":
        return cls(runner=runner, tmux=config.tmux, socket=config.socket, timeout=config.timeout)

    def build_args(self, command: Command) -> list[str]:
        """Build the full argv for a command: tmux [-L socket] cmd [-t target] args..."""
        argv = [self.tmux]
        if self.socket:
            argv.extend(["-L", self.socket])
        argv.append(command.command)
        if not isinstance(command.target, ServerTarget):
            argv.extend(["-t", command.target.value])
        argv.extend(command.args)
        return argv

    def execute(self, command: Command) -> Response:
        """Run a command and capture its result.

        Args:
            command: Command descriptor to run.

        Returns:
            Response with success=True and stdout as data (None when empty),
            or success=False with error set from stderr.

        Raises:
            TmuxIOError: If the tmux process could not be launched.
            ProcessError: If the configured timeout elapsed.
        """
        argv = self.build_args(command)
        logger.debug(f"Running {' '.join(argv)}")
        result = self.runner(argv, timeout=self.timeout, input=command.input)

        if result.returncode != 0:
            error = result.stderr.strip() or result.stdout.strip()
            if not error:
                error = f"tmux {command.command} exited with status {result.returncode}"
            logger.debug(f"tmux {command.command} failed: {error}")
            return Response(success=False, error=error)

        return Response(success=True, data=result.stdout or None)


def expect_success(response: Response, fallback: str) -> Response:
    """Return the response if it succeeded, else raise CommandError.

    Args:
        response: Response from CommandExecutor.execute.
        fallback: Message used when tmux gave no error text.
    """
    if not response.success:
        raise CommandError(response.error or fallback)
    return response
