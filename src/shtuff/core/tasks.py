"""
Task handles for independently running units of work.

A handle answers three questions about a task: is it still running, what was
its exit code, and can it be asked to stop. ``launch`` starts a command as a
child process and returns a ``ProcessHandle`` right away, without waiting.
"""

import shlex
import signal
import subprocess
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Mapping, Optional, Sequence, Union

from ..utils.error_handling import (
    ArgumentError, NotFoundError, OperationError, TaskTerminationError, reports_failures
)
from ..utils.logging import get_logger

logger = get_logger(__name__)


class TaskHandle(ABC):
    """Reference to exactly one running or finished task.

    ``wait`` consumes the handle; a second ``wait`` raises ``NotFoundError``.
    A monitor ``claim``s the handle before it starts; while claimed,
    a cancellation blocks with ``join`` and leaves the reaping to the
    monitor, which collects the exit code with ``reap``.
    """

    def __init__(self):
        self._consumed = False
        self._watched = False
        self._exit_code: Optional[int] = None
        self._state_lock = threading.Lock()

    @property
    @abstractmethod
    def pid(self) -> Optional[int]:
        """Operating-system identifier of the task."""

    @abstractmethod
    def is_alive(self) -> bool:
        """Non-destructive liveness check."""

    @abstractmethod
    def _wait(self) -> int:
        """Block until the task exits and return its exit code."""

    @abstractmethod
    def terminate(self, sig: int = signal.SIGTERM) -> None:
        """Ask the task to stop."""

    @property
    def consumed(self) -> bool:
        return self._consumed

    @property
    def watched(self) -> bool:
        with self._state_lock:
            return self._watched

    def exists(self) -> bool:
        """Whether the handle still refers to a task nobody has reaped."""
        return not self._consumed

    def claim(self) -> None:
        """Mark the task as watched.

        Raises:
            NotFoundError: If the handle was already consumed
        """
        with self._state_lock:
            if self._consumed:
                raise NotFoundError(
                    f"Task {self.pid} does not exist",
                    details={"pid": self.pid},
                )
            self._watched = True

    def release(self) -> None:
        with self._state_lock:
            self._watched = False

    def wait(self) -> int:
        with self._state_lock:
            if self._consumed:
                raise NotFoundError(f"Task {self.pid} has already been waited on")
        return self._collect(self._wait())

    def join(self) -> int:
        return self._wait()

    def reap(self) -> int:
        """Wait as the watcher of the task.

        Unlike ``wait`` this accepts a task that a cancellation already reaped
        and returns the exit code that was collected then.
        """
        with self._state_lock:
            if self._exit_code is not None:
                return self._exit_code
        return self._collect(self._wait())

    def _collect(self, exit_code: int) -> int:
        with self._state_lock:
            self._consumed = True
            self._exit_code = exit_code
        return exit_code


class ProcessHandle(TaskHandle):
    """Handle over a ``subprocess.Popen`` child process."""

    def __init__(self, process: subprocess.Popen, name: Optional[str] = None):
        super().__init__()
        self._process = process
        self._lock = threading.Lock()
        self.name = name or _describe(process.args)
        # Someone else already reaped this process
        self._consumed = process.returncode is not None
        self._exit_code = process.returncode

    def __repr__(self) -> str:
        return f"ProcessHandle(pid={self.pid}, name={self.name!r})"

    @property
    def pid(self) -> Optional[int]:
        return self._process.pid

    @property
    def returncode(self) -> Optional[int]:
        return self._process.returncode

    def is_alive(self) -> bool:
        with self._lock:
            return self._process.poll() is None

    def _wait(self) -> int:
        return self._process.wait()

    def terminate(self, sig: int = signal.SIGTERM) -> None:
        with self._lock:
            if self._process.poll() is not None:
                raise TaskTerminationError(
                    f"Task {self.pid} has already exited",
                    details={"pid": self.pid, "exit_code": self._process.returncode},
                )
            try:
                self._process.send_signal(sig)
            except (ProcessLookupError, PermissionError) as e:
                raise TaskTerminationError(
                    f"Could not signal task {self.pid}: {e}",
                    details={"pid": self.pid, "signal": int(sig)},
                ) from e
        logger.debug(f"Sent signal {int(sig)} to task {self.pid}")


def _describe(args) -> str:
    if isinstance(args, (list, tuple)):
        return " ".join(str(arg) for arg in args)
    return str(args)


def _open_log(log_file):
    try:
        return open(log_file, "ab")
    except FileNotFoundError as e:
        raise NotFoundError(
            f"Log directory not found: {Path(log_file).parent}",
            details={"log_file": str(log_file)},
        ) from e
    except OSError as e:
        raise OperationError(
            f"Cannot open log file {log_file}: {e}",
            details={"log_file": str(log_file)},
        ) from e


def as_handle(task) -> TaskHandle:
    """
    Normalize whatever a caller passed as a task into a ``TaskHandle``.

    Raises:
        ArgumentError: If ``task`` is empty or of an unsupported type
    """
    if task is None or task == "":
        raise ArgumentError("No task handle provided")

    if isinstance(task, TaskHandle):
        return task

    if isinstance(task, subprocess.Popen):
        return ProcessHandle(task)

    raise ArgumentError(
        f"Unsupported task handle type: {type(task).__name__}",
        details={"type": type(task).__name__},
    )


@reports_failures("launch")
def launch(command: Union[str, Sequence[str]],
           cwd: Optional[Union[str, Path]] = None,
           env: Optional[Mapping[str, str]] = None,
           log_file: Optional[Union[str, Path]] = None,
           name: Optional[str] = None,
           terminal=None) -> ProcessHandle:
    """
    Start ``command`` as an independent child process.

    The child gets no stdin. Its stdout and stderr are discarded, or appended
    to ``log_file`` when one is given, so they never interleave with the
    indicator line.

    Args:
        command: Argument list, or a string split with ``shlex``
        cwd: Working directory for the child
        env: Environment for the child (inherits the current one if omitted)
        log_file: File that receives the child's combined output
        name: Display name for logging
        terminal: Terminal on which a launch failure is reported

    Returns:
        Handle for the running process

    Raises:
        ArgumentError: If the command is empty or not executable
        NotFoundError: If the executable or the log directory does not exist
        OperationError: If the log file or the process cannot be opened
    """
    if isinstance(command, str):
        command = shlex.split(command)
    command = [str(part) for part in (command or [])]
    if not command:
        raise ArgumentError("No command provided")

    output = _open_log(log_file) if log_file else subprocess.DEVNULL
    try:
        process = subprocess.Popen(
            command,
            stdin=subprocess.DEVNULL,
            stdout=output,
            stderr=subprocess.STDOUT,
            cwd=cwd,
            env=dict(env) if env is not None else None,
        )
    except FileNotFoundError as e:
        raise NotFoundError(
            f"Command not found: {command[0]}",
            details={"command": command},
        ) from e
    except PermissionError as e:
        raise ArgumentError(
            f"Command is not executable: {command[0]}",
            details={"command": command},
        ) from e
    except OSError as e:
        raise OperationError(
            f"Could not start {command[0]}: {e}",
            details={"command": command},
        ) from e
    finally:
        if log_file:
            output.close()

    handle = ProcessHandle(process, name=name)
    logger.debug(f"Launched task {handle.pid}: {handle.name}")
    return handle
