"""
Shared pytest configuration for shtuff tests.

Every test draws on a ``Terminal`` over ``io.StringIO`` buffers with colors
off, so assertions can compare the exact text that would reach the screen.
"""

import io
import os

import pytest

from .fixtures import FakeTask, python_command
from ..config.models import MonitorConfig, ProgressConfig, ShtuffConfig
from ..core.tasks import launch
from ..ui.terminal import Terminal

__all__ = ["FakeTask", "python_command"]


@pytest.fixture
def out():
    """Drawing stream."""
    return io.StringIO()


@pytest.fixture
def err():
    """Error stream."""
    return io.StringIO()


@pytest.fixture
def terminal(out, err):
    """Colorless terminal over in-memory streams."""
    return Terminal(out, err, use_colors=False)


@pytest.fixture
def color_terminal(out, err):
    """Terminal over in-memory streams that emits colors."""
    return Terminal(out, err, use_colors=True)


@pytest.fixture
def test_config():
    """Configuration with a fast frame interval."""
    return ShtuffConfig(
        monitor=MonitorConfig(frame_interval=0.01),
        progress=ProgressConfig(width=40, label="Progress"),
    )


@pytest.fixture
def spawn():
    """Launch a Python one-liner and make sure it is gone after the test."""
    handles = []

    def _spawn(code: str):
        handle = launch(python_command(code))
        handles.append(handle)
        return handle

    yield _spawn

    for handle in handles:
        if handle.is_alive():
            handle._process.kill()
            handle._process.wait()


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Run in an empty directory without SHTUFF_* overrides."""
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("SHTUFF_"):
            monkeypatch.delenv(key)
    return tmp_path
