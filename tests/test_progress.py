"""Tests for the Rich step display (cli/progress.py)."""

from __future__ import annotations

import importlib.util
import sys

import pytest

from tree_publish.exceptions import EnvironmentError

needs_rich = pytest.mark.skipif(
    importlib.util.find_spec("rich") is None,
    reason="rich not installed",
)


@needs_rich
class TestStepProgress:
    def test_steps_completed_in_order(self) -> None:
        from tree_publish.cli.progress import StepProgress

        with StepProgress() as progress:
            progress("Locating repository")
            progress("Creating workspace")
        assert progress.completed == ("Locating repository", "Creating workspace")

    def test_publish_step_stops_spinner(self) -> None:
        from tree_publish.cli.progress import StepProgress

        with StepProgress() as progress:
            progress("Removing testdata/")
            progress("Publishing crates/core")
            assert not progress._started
        assert progress.completed == ("Removing testdata/", "Publishing crates/core")

    def test_failed_step_not_completed(self) -> None:
        from tree_publish.cli.progress import StepProgress

        with pytest.raises(RuntimeError):
            with StepProgress() as progress:
                progress("Exporting HEAD")
                raise RuntimeError("boom")
        assert progress.completed == ()
        assert not progress._started

    def test_steps_recorded_after_stop(self) -> None:
        from tree_publish.cli.progress import StepProgress

        progress = StepProgress()
        progress.start()
        progress.stop()
        progress("Removing testdata/")
        progress("Publishing .")
        assert progress.completed == ("Removing testdata/",)

    def test_stop_is_idempotent(self) -> None:
        from tree_publish.cli.progress import StepProgress

        progress = StepProgress()
        progress.start()
        progress.stop()
        progress.stop()


def test_requires_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)
    from tree_publish.cli.progress import StepProgress

    with pytest.raises(EnvironmentError, match="rich is not installed"):
        StepProgress()
