"""Tests for advisory file locks."""

import pytest

from swarmtap.errors import ProcessError
from swarmtap.messaging import FileLock


class TestFileLock:
    def test_second_acquire_would_block(self, tmp_path):
        path = tmp_path / "a.lock"
        with FileLock.acquire(path):
            with pytest.raises(ProcessError) as exc_info:
                FileLock.acquire(path)
        assert exc_info.value.kind == "WouldBlock"

    def test_reacquire_after_release(self, tmp_path):
        path = tmp_path / "a.lock"
        lock = FileLock.acquire(path)
        lock.release()
        lock.release()

        assert not lock.held
        FileLock.acquire(path).release()

    def test_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "x.lock"
        with FileLock.acquire(path) as lock:
            assert lock.held
        assert path.exists()

    def test_try_with_returns_body_result(self, tmp_path):
        assert FileLock.try_with(tmp_path / "b.lock", lambda: 42) == 42

    def test_try_with_releases_on_error(self, tmp_path):
        path = tmp_path / "c.lock"

        def body():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            FileLock.try_with(path, body)
        FileLock.acquire(path).release()

    def test_try_with_contended_does_not_run_body(self, tmp_path):
        path = tmp_path / "d.lock"
        calls = []
        with FileLock.acquire(path):
            with pytest.raises(ProcessError):
                FileLock.try_with(path, lambda: calls.append(1))
        assert calls == []
