"""Shared fixtures: a scripted tmux runner and tmp_path-backed components."""

from collections import deque
from pathlib import Path

import pytest

from swarmtap.config import SwarmConfig
from swarmtap.messaging import LogReader, MessageSender
from swarmtap.tmux import CommandExecutor, RunResult


class FakeRunner:
    """Process runner that records argv and answers from a script.

    Replies are matched on the tmux command name (the argv element after the
    binary and optional -L socket). Each command has a FIFO of replies; the
    last reply for a command is reused once its queue runs down to one.
    """

    def __init__(self):
        self.calls: list[list[str]] = []
        self.inputs: list[str | None] = []
        self.replies: dict[str, deque[RunResult]] = {}

    def reply(self, command: str, stdout: str = "", returncode: int = 0, stderr: str = "") -> "FakeRunner":
        self.replies.setdefault(command, deque()).append(RunResult(returncode, stdout, stderr))
        return self

    @staticmethod
    def command_of(argv: list[str]) -> str:
        return argv[3] if argv[1] == "-L" else argv[1]

    def commands(self) -> list[str]:
        return [self.command_of(argv) for argv in self.calls]

    def __call__(self, argv, timeout=None, input=None) -> RunResult:
        argv = list(argv)
        self.calls.append(argv)
        self.inputs.append(input)
        queue = self.replies.get(self.command_of(argv))
        if not queue:
            return RunResult(0, "", "")
        return queue.popleft() if len(queue) > 1 else queue[0]


def session_line(session_id: str, name: str, attached: int = 0) -> str:
    return f"{session_id}\t{name}\t{attached}"


def window_line(window_id: str, session_id: str, name: str, active: int = 1) -> str:
    return f"{window_id}\t{session_id}\t{name}\t{active}"


def pane_line(pane_id: str, window_id: str, session_id: str, path: str = "/tmp", pid: str = "100", active: int = 1) -> str:
    return f"{pane_id}\t{window_id}\t{session_id}\t{path}\t{pid}\t{active}"


def listing(*lines: str) -> str:
    return "".join(line + "\n" for line in lines)


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def executor(runner) -> CommandExecutor:
    return CommandExecutor(runner=runner)


@pytest.fixture
def config(tmp_path: Path) -> SwarmConfig:
    return SwarmConfig(base_path=tmp_path / "base", log_dir=tmp_path / "logs", poll_interval=0.01)


@pytest.fixture
def sender(config) -> MessageSender:
    return MessageSender(config.base_path)


@pytest.fixture
def log_reader(config) -> LogReader:
    config.log_dir.mkdir(parents=True, exist_ok=True)
    return LogReader(config.log_dir, poll_interval=config.poll_interval)
