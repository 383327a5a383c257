"""
Test suite for the single-task animator.
"""

import pytest

from .fixtures import FakeTask
from ..ui.animator import Animator
from ..utils.error_handling import ArgumentError, UnknownStyleError


class TestAnimator:
    """Test the frame loop."""

    def setup_method(self):
        """Record sleeps instead of sleeping."""
        self.sleeps = []

    def make_animator(self, terminal):
        return Animator(terminal, interval=0.1, sleep=self.sleeps.append)

    def test_draws_one_frame_per_liveness_check(self, terminal, out):
        """Frames advance in order while the task is alive."""
        animator = self.make_animator(terminal)
        animator.animate(FakeTask(alive_checks=3), "dots", "Working")

        assert out.getvalue() == (
            "\r. Working\033[K"
            "\r.. Working\033[K"
            "\r... Working\033[K"
        )
        assert self.sleeps == [0.1, 0.1, 0.1]

    def test_frames_wrap_around(self, terminal, out):
        animator = self.make_animator(terminal)
        animator.animate(FakeTask(alive_checks=5), "dots", "Working")

        frames = out.getvalue().split("\033[K")
        assert frames[4] == "\r. Working"

    def test_finished_task_draws_nothing(self, terminal, out):
        animator = self.make_animator(terminal)
        animator.animate(FakeTask(alive_checks=0), "spinner", "Working")

        assert out.getvalue() == ""
        assert self.sleeps == []

    def test_color_wraps_frame_and_label(self, color_terminal, out):
        animator = self.make_animator(color_terminal)
        animator.animate(FakeTask(alive_checks=1), "spinner", "Working", "\033[36m")

        assert out.getvalue() == "\r\033[36m⠋ Working\033[0m\033[K"

    def test_unknown_style_draws_nothing(self, terminal, out, err):
        """The style is resolved before the first frame."""
        animator = self.make_animator(terminal)

        with pytest.raises(UnknownStyleError):
            animator.animate(FakeTask(alive_checks=3), "laser", "Working")

        assert out.getvalue() == ""
        assert "✗ animate: Unknown loading style: laser" in err.getvalue()

    def test_missing_handle(self, terminal, out):
        animator = self.make_animator(terminal)

        with pytest.raises(ArgumentError):
            animator.animate(None, "spinner", "Working")

        assert out.getvalue() == ""
