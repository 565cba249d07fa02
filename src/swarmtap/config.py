"""Configuration management for swarmtap.

Settings come from swarmtap.toml (current or parent directories), then
environment overrides. The result is a plain value passed to each component's
constructor; nothing here is process-global.
"""

import os
import tempfile
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

CONFIG_FILENAME = "swarmtap.toml"

ENV_BASE_PATH = "SWARMTAP_BASE_PATH"
ENV_LOG_DIR = "SWARMTAP_LOG_DIR"
ENV_SOCKET = "SWARMTAP_SOCKET"


def default_log_dir() -> Path:
    """Default capture log directory: <tempdir>/tmux_logs."""
    return Path(tempfile.gettempdir()) / "tmux_logs"


@dataclass(frozen=True)
class SwarmConfig:
    """Resolved swarmtap settings.

    Attributes:
        base_path: Root under which .opencode/prompts lives.
        log_dir: Directory holding <session_id>.log capture files.
        tmux: tmux executable name or path.
        socket: Optional tmux socket name (passed as -L).
        poll_interval: Seconds between size checks while watching a log.
        timeout: Optional per-command timeout in seconds.
        agent: Agent name written into prompt metadata headers.
    """

    base_path: Path = field(default_factory=Path.cwd)
    log_dir: Path = field(default_factory=default_log_dir)
    tmux: str = "tmux"
    socket: Optional[str] = None
    poll_interval: float = 0.1
    timeout: Optional[float] = None
    agent: str = "swarmtap"

    def with_overrides(self, **changes) -> "SwarmConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


def _find_config_file() -> Optional[Path]:
    """Find swarmtap.toml in current or parent directories."""
    current = Path.cwd()

    for parent in [current] + list(current.parents):
        config_file = parent / CONFIG_FILENAME
        if config_file.exists():
            return config_file

    return None


def _load_raw(path: Optional[Path] = None) -> dict:
    """Load raw configuration from file."""
    if path is None:
        path = _find_config_file()

    if path is None or not path.exists():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def load_config(path: Optional[Path] = None, environ: Optional[dict] = None) -> SwarmConfig:
    """Build a SwarmConfig from file and environment.

    Args:
        path: Explicit config file. Defaults to discovery from the cwd.
        environ: Environment mapping. Defaults to os.environ.

    Returns:
        Resolved configuration. Relative paths in the file are resolved
        against the file's directory.
    """
    environ = os.environ if environ is None else environ
    if path is None:
        path = _find_config_file()
    raw = _load_raw(path)
    section = raw.get("default", {})
    root = Path(path).parent if path else Path.cwd()

    config = SwarmConfig()
    changes: dict = {}

    if "base_path" in section:
        changes["base_path"] = (root / Path(section["base_path"]).expanduser()).resolve()
    if "log_dir" in section:
        changes["log_dir"] = (root / Path(section["log_dir"]).expanduser()).resolve()
    if "tmux" in section:
        changes["tmux"] = str(section["tmux"])
    if "socket" in section:
        changes["socket"] = str(section["socket"])
    if "poll_interval" in section:
        changes["poll_interval"] = float(section["poll_interval"])
    if "timeout" in section:
        changes["timeout"] = float(section["timeout"])
    if "agent" in section:
        changes["agent"] = str(section["agent"])

    if environ.get(ENV_BASE_PATH):
        changes["base_path"] = Path(environ[ENV_BASE_PATH]).expanduser()
    if environ.get(ENV_LOG_DIR):
        changes["log_dir"] = Path(environ[ENV_LOG_DIR]).expanduser()
    if environ.get(ENV_SOCKET):
        changes["socket"] = environ[ENV_SOCKET]

    return config.with_overrides(**changes) if changes else config
