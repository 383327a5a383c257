"""
Test suite for task cancellation.
"""

import signal
import threading
import time

import pytest

from .fixtures import FakeTask
from .test_tasks import wait_until_exited
from ..core.cancel import cancel
from ..core import monitor as monitor_module
from ..core.monitor import DisplayOptions, Monitor
from ..ui.styles import get_style
from ..utils.error_handling import ArgumentError, NotFoundError, TaskTerminationError


class TestCancel:
    """Test stopping tasks."""

    def test_cancel_running_process(self, spawn, terminal):
        handle = spawn("import time; time.sleep(30)")

        assert cancel(handle, terminal=terminal) == -signal.SIGTERM
        assert not handle.exists()

    def test_cancel_with_custom_signal(self, spawn, terminal):
        handle = spawn("import time; time.sleep(30)")
        assert cancel(handle, sig=signal.SIGKILL, terminal=terminal) == -signal.SIGKILL

    def test_cancel_finished_process(self, spawn, terminal, err):
        """A task that already exited cannot be signalled."""
        handle = spawn("pass")
        wait_until_exited(handle)

        with pytest.raises(TaskTerminationError):
            cancel(handle, terminal=terminal)

        assert "✗ cancel:" in err.getvalue()

    def test_cancel_consumed_handle(self, terminal):
        task = FakeTask()
        task.wait()

        with pytest.raises(NotFoundError):
            cancel(task, terminal=terminal)
        assert task.signals == []

    def test_cancel_missing_handle(self, terminal):
        with pytest.raises(ArgumentError):
            cancel(None, terminal=terminal)


class TestCancelDuringWatch:
    """Test cancelling a task that is being watched."""

    def test_watch_reports_forced_exit(self, spawn, terminal, out, test_config):
        handle = spawn("import time; time.sleep(30)")
        monitor = Monitor(terminal, test_config.monitor)
        options = DisplayOptions(label="Waiting", success_label="Done", failure_label="Stopped")
        result = {}

        def run_watch():
            result["exit_code"] = monitor.watch(handle, options)

        watcher = threading.Thread(target=run_watch)
        watcher.start()

        deadline = time.monotonic() + 10
        while not handle.watched:
            assert time.monotonic() < deadline
            time.sleep(0.01)

        assert cancel(handle, terminal=terminal) == -signal.SIGTERM

        watcher.join(timeout=10)
        assert not watcher.is_alive()
        assert result["exit_code"] == -signal.SIGTERM
        assert out.getvalue().endswith("✗ Stopped\n")
        assert not handle.exists()

    def test_cancel_while_watch_is_starting(self, spawn, terminal, out, test_config,
                                            monkeypatch):
        """A cancel that arrives before the first frame is still reported."""
        handle = spawn("import time; time.sleep(30)")
        cancelled = []

        def cancel_then_resolve(name):
            cancelled.append(cancel(handle, terminal=terminal))
            return get_style(name)

        monkeypatch.setattr(monitor_module, "get_style", cancel_then_resolve)
        monitor = Monitor(terminal, test_config.monitor)

        exit_code = monitor.watch(handle, DisplayOptions(failure_label="Stopped"))

        assert cancelled == [-signal.SIGTERM]
        assert exit_code == -signal.SIGTERM
        assert out.getvalue().endswith("✗ Stopped\n")
        assert not handle.exists()
        assert not handle.watched

    def test_cancel_before_watch(self, spawn, terminal, test_config):
        """A task cancelled before anyone watches it has nothing left to watch."""
        handle = spawn("import time; time.sleep(30)")
        cancel(handle, terminal=terminal)

        with pytest.raises(NotFoundError):
            Monitor(terminal, test_config.monitor).watch(handle)
