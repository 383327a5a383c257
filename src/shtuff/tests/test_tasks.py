"""
Test suite for task handles and launching.
"""

import subprocess
import time

import pytest

from .fixtures import FakeTask, python_command
from ..core.tasks import ProcessHandle, as_handle, launch
from ..utils.error_handling import ArgumentError, NotFoundError, TaskTerminationError


def wait_until_exited(handle, timeout=10.0):
    deadline = time.monotonic() + timeout
    while handle.is_alive():
        if time.monotonic() > deadline:
            raise AssertionError(f"task {handle.pid} did not exit")
        time.sleep(0.01)


class TestLaunch:
    """Test starting child processes."""

    def test_launch_returns_running_handle(self, spawn):
        handle = spawn("import time; time.sleep(5)")

        assert isinstance(handle, ProcessHandle)
        assert handle.pid > 0
        assert handle.is_alive()
        assert handle.exists()

    def test_exit_code_is_preserved(self, spawn):
        handle = spawn("import sys; sys.exit(7)")
        assert handle.wait() == 7

    def test_string_command(self):
        handle = launch("true")
        assert handle.wait() == 0

    def test_log_file_receives_output(self, tmp_path):
        log_file = tmp_path / "task.log"
        handle = launch(python_command("print('hello from task')"), log_file=log_file)
        handle.wait()

        assert "hello from task" in log_file.read_text()

    def test_empty_command(self, terminal, err):
        with pytest.raises(ArgumentError):
            launch([], terminal=terminal)
        assert "✗ launch: No command provided" in err.getvalue()

    def test_missing_executable(self, terminal):
        with pytest.raises(NotFoundError) as exc_info:
            launch(["shtuff-no-such-command"], terminal=terminal)
        assert "Command not found: shtuff-no-such-command" in str(exc_info.value)

    def test_command_without_execute_permission(self, tmp_path, terminal, err):
        script = tmp_path / "build.sh"
        script.write_text("#!/bin/sh\nexit 0\n")
        script.chmod(0o644)

        with pytest.raises(ArgumentError):
            launch([str(script)], terminal=terminal)

        assert f"✗ launch: Command is not executable: {script}" in err.getvalue()

    def test_log_file_in_missing_directory(self, tmp_path, terminal, err):
        log_file = tmp_path / "missing" / "task.log"

        with pytest.raises(NotFoundError):
            launch(python_command("pass"), log_file=log_file, terminal=terminal)

        assert "✗ launch: Log directory not found" in err.getvalue()


class TestTaskHandle:
    """Test the handle life cycle."""

    def test_wait_consumes_handle(self, spawn):
        handle = spawn("pass")
        handle.wait()

        assert handle.consumed
        assert not handle.exists()
        with pytest.raises(NotFoundError):
            handle.wait()

    def test_join_does_not_consume(self):
        task = FakeTask(exit_code=3)
        assert task.join() == 3
        assert task.exists()
        assert task.wait() == 3

    def test_is_alive_is_non_destructive(self, spawn):
        handle = spawn("pass")
        wait_until_exited(handle)

        assert not handle.is_alive()
        assert handle.exists()
        assert handle.wait() == 0

    def test_terminate_finished_task(self, spawn):
        handle = spawn("pass")
        wait_until_exited(handle)

        with pytest.raises(TaskTerminationError):
            handle.terminate()


class TestTaskOwnership:
    """Test how a watcher claims a task and collects its exit code."""

    def test_claim_marks_task_watched(self):
        task = FakeTask()
        task.claim()
        assert task.watched

        task.release()
        assert not task.watched

    def test_claim_consumed_handle(self):
        task = FakeTask()
        task.wait()

        with pytest.raises(NotFoundError):
            task.claim()
        assert not task.watched

    def test_reap_after_another_wait(self):
        """A watcher still gets the exit code when someone else reaped first."""
        task = FakeTask(exit_code=-15)
        task.claim()
        assert task.wait() == -15

        assert task.reap() == -15
        assert task.waits == 1

    def test_reap_consumes(self):
        task = FakeTask(exit_code=4)
        assert task.reap() == 4
        assert task.consumed


class TestAsHandle:
    """Test handle normalization."""

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_handle(self, value):
        with pytest.raises(ArgumentError):
            as_handle(value)

    def test_unsupported_type(self):
        with pytest.raises(ArgumentError):
            as_handle(1234)

    def test_handle_passes_through(self):
        task = FakeTask()
        assert as_handle(task) is task

    def test_wraps_popen(self):
        process = subprocess.Popen(python_command("pass"))
        handle = as_handle(process)

        assert isinstance(handle, ProcessHandle)
        assert handle.pid == process.pid
        assert handle.wait() == 0

    def test_reaped_popen_is_consumed(self):
        process = subprocess.Popen(python_command("pass"))
        process.wait()
        assert not as_handle(process).exists()
