"""Tests for configuration loading."""

from pathlib import Path

from swarmtap.config import SwarmConfig, default_log_dir, load_config


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = load_config(environ={})

        assert config.log_dir == default_log_dir()
        assert config.base_path == tmp_path
        assert config.tmux == "tmux"
        assert config.socket is None

    def test_file_values_resolve_relative_to_file(self, tmp_path):
        path = tmp_path / "swarmtap.toml"
        path.write_text(
            '[default]\nbase_path = "work"\nlog_dir = "logs"\nsocket = "agents"\npoll_interval = 0.5\nagent = "planner"\n'
        )

        config = load_config(path, environ={})

        assert config.base_path == (tmp_path / "work").resolve()
        assert config.log_dir == (tmp_path / "logs").resolve()
        assert config.socket == "agents"
        assert config.poll_interval == 0.5
        assert config.agent == "planner"

    def test_discovered_in_parent_directory(self, tmp_path, monkeypatch):
        (tmp_path / "swarmtap.toml").write_text('[default]\ntmux = "/opt/tmux"\n')
        child = tmp_path / "a" / "b"
        child.mkdir(parents=True)
        monkeypatch.chdir(child)

        assert load_config(environ={}).tmux == "/opt/tmux"

    def test_environment_wins(self, tmp_path):
        path = tmp_path / "swarmtap.toml"
        path.write_text('[default]\nsocket = "from-file"\n')

        config = load_config(
            path, environ={"SWARMTAP_SOCKET": "from-env", "SWARMTAP_LOG_DIR": str(tmp_path / "env-logs")}
        )

        assert config.socket == "from-env"
        assert config.log_dir == Path(tmp_path / "env-logs")


class TestSwarmConfig:
    def test_with_overrides_is_a_copy(self):
        config = SwarmConfig(agent="a")
        changed = config.with_overrides(agent="b")
        assert config.agent == "a"
        assert changed.agent == "b"
