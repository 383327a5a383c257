"""
Task handles, the task monitor and cancellation.
"""

from .tasks import TaskHandle, ProcessHandle, as_handle, launch

__all__ = ["TaskHandle", "ProcessHandle", "as_handle", "launch"]
