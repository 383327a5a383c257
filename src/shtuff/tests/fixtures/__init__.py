"""Shared test fixtures for shtuff."""

from .tasks import FakeTask, python_command

__all__ = ["FakeTask", "python_command"]
