"""Rich-based step display driven by the publish service's progress callback.

The service reports the name of each workflow step as it starts.
:class:`StepProgress` shows the running step next to a spinner and
prints a check mark line for each step once the next one begins.

Design
------
* :meth:`__call__` is the callback passed to
  :meth:`~tree_publish.core.publish_service.PublishService.publish`.
* The spinner is stopped before the publish step so the package
  manager's own output is not interleaved with spinner redraws.
* Shutdown-safe: after :meth:`stop` steps are still recorded, only the
  spinner is no longer updated.
"""

from __future__ import annotations

from typing import Any

from tree_publish.cli.console import get_rich_console

PASSTHROUGH_PREFIX = "Publishing"
"""Steps starting with this prefix hand the terminal to a child process."""


class StepProgress:
    """Callable progress adapter for Rich.

    Usage::

        with StepProgress() as progress:
            service.publish(request, progress_callback=progress)
    """

    def __init__(self) -> None:
        self._console: Any = get_rich_console()
        self._status: Any = self._console.status("Starting…", spinner="dots")
        self._current: str | None = None
        self._started: bool = False
        self._completed: list[str] = []

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> StepProgress:
        self.start()
        return self

    def __exit__(self, exc_type: type[BaseException] | None, *_args: object) -> None:
        if exc_type is None:
            self._finish_current()
        self.stop()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the spinner."""
        if not self._started:
            self._status.start()
            self._started = True

    def stop(self) -> None:
        """Stop the spinner (idempotent)."""
        if self._started:
            self._status.stop()
            self._started = False

    @property
    def completed(self) -> tuple[str, ...]:
        return tuple(self._completed)

    # ------------------------------------------------------------------
    # Callback
    # ------------------------------------------------------------------

    def __call__(self, step: str) -> None:
        """Record that *step* has begun."""
        self._finish_current()
        self._current = step

        if step.startswith(PASSTHROUGH_PREFIX):
            self._console.print(f"[bold]→[/bold] {step}")
            self.stop()
            return
        if self._started:
            self._status.update(f"[bold blue]{step}…")

    def _finish_current(self) -> None:
        if self._current is None:
            return
        if not self._current.startswith(PASSTHROUGH_PREFIX):
            self._console.print(f"[green]✓[/green] {self._current}")
        self._completed.append(self._current)
        self._current = None
