"""Tests for the signal guard (infra/signals.py).

Signals are raised in-process with :func:`signal.raise_signal`; Python
runs the handler before the next bytecode, so no sleeping is needed.
"""

from __future__ import annotations

import signal
import sys
import threading
from pathlib import Path

import pytest

from tree_publish.exceptions import Interrupted
from tree_publish.infra.signals import GUARDED_SIGNALS, deferred_signals, signal_guard
from tree_publish.infra.workspace import TemporaryWorkspace

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")


@posix_only
class TestSignalGuard:
    @pytest.mark.parametrize("name", ["SIGINT", "SIGTERM", "SIGQUIT"])
    def test_signal_raises_interrupted(self, name: str) -> None:
        sig = getattr(signal, name)
        with pytest.raises(Interrupted) as exc_info:
            with signal_guard():
                signal.raise_signal(sig)
        assert exc_info.value.signal_name == name
        assert exc_info.value.exit_code == 1

    def test_previous_handlers_restored(self) -> None:
        before = {name: signal.getsignal(getattr(signal, name)) for name in GUARDED_SIGNALS}
        with signal_guard():
            assert signal.getsignal(signal.SIGTERM) is not before["SIGTERM"]
        after = {name: signal.getsignal(getattr(signal, name)) for name in GUARDED_SIGNALS}
        assert after == before

    def test_handlers_restored_after_interrupt(self) -> None:
        before = signal.getsignal(signal.SIGTERM)
        with pytest.raises(Interrupted):
            with signal_guard():
                signal.raise_signal(signal.SIGTERM)
        assert signal.getsignal(signal.SIGTERM) is before

    def test_second_signal_ignored_while_unwinding(self) -> None:
        reached_finally = False
        with pytest.raises(Interrupted) as exc_info:
            with signal_guard():
                try:
                    signal.raise_signal(signal.SIGINT)
                finally:
                    signal.raise_signal(signal.SIGTERM)
                    reached_finally = True
        assert reached_finally
        assert exc_info.value.signal_name == "SIGINT"

    def test_workspace_removed_on_signal(self, temp_root: Path) -> None:
        with pytest.raises(Interrupted):
            with signal_guard(), TemporaryWorkspace.create(temp_root, "tp.") as ws:
                (ws.path / "payload").write_text("x")
                signal.raise_signal(signal.SIGQUIT)
        assert not ws.path.exists()
        assert list(temp_root.iterdir()) == []


@posix_only
class TestDeferredSignals:
    def test_signal_held_until_block_exits(self) -> None:
        steps: list[str] = []
        with pytest.raises(Interrupted) as exc_info:
            with signal_guard():
                with deferred_signals():
                    signal.raise_signal(signal.SIGTERM)
                    steps.append("body finished")
                steps.append("after block")
        assert steps == ["body finished"]
        assert exc_info.value.signal_name == "SIGTERM"

    def test_mask_restored(self) -> None:
        before = signal.pthread_sigmask(signal.SIG_BLOCK, [])
        with deferred_signals():
            assert signal.SIGINT in signal.pthread_sigmask(signal.SIG_BLOCK, [])
        assert signal.pthread_sigmask(signal.SIG_BLOCK, []) == before


class TestNonMainThread:
    def test_guard_is_noop_outside_main_thread(self) -> None:
        before = signal.getsignal(signal.SIGINT)
        seen: list[object] = []

        def _worker() -> None:
            with signal_guard():
                seen.append(signal.getsignal(signal.SIGINT))

        thread = threading.Thread(target=_worker)
        thread.start()
        thread.join()
        assert seen == [before]
