"""Background diff loader for the show-commit screen."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from .engine import DiffLoadCancelled, DiffLoadError
from .model import CommitDiff
from .state import DiffComplete, DiffState, LoadError, LoadStatus

logger = logging.getLogger(__name__)

DiffBuilder = Callable[[str, Callable[[LoadStatus], bool]], CommitDiff]


class DiffLoader:
    """Single-threaded latest-request-wins diff loader.

    ``load`` never blocks on diff computation. Results reach the UI only
    through ``DiffState.publish``, which drops anything computed for a hash
    that is no longer current.
    """

    def __init__(self, diff_state: DiffState, build_diff: DiffBuilder) -> None:
        self._diff_state = diff_state
        self._build_diff = build_diff
        self._lock = threading.Lock()
        self._idle = threading.Condition(self._lock)
        self._pending: str | None = None
        self._in_flight: str | None = None
        self._running = False

    @property
    def diff_state(self) -> DiffState:
        return self._diff_state

    def _worker(self) -> None:
        while True:
            with self._lock:
                hash = self._pending
                self._pending = None
                self._in_flight = hash
                if hash is None:
                    self._running = False
                    self._idle.notify_all()
                    return
            # load() reset the slot for hash on the control thread
            self._run_load(hash)

    def _run_load(self, hash: str) -> None:
        logger.debug("loading diff for %s", hash)

        def progress(status: LoadStatus) -> bool:
            return self._diff_state.publish(hash, status)

        try:
            diff = self._build_diff(hash, progress)
        except DiffLoadCancelled:
            logger.debug("discarding superseded diff load for %s", hash)
            return
        except DiffLoadError as exc:
            logger.warning("diff load for %s failed: %s", hash, exc)
            self._diff_state.publish(hash, LoadError(str(exc), exc.code))
            return
        except Exception as exc:
            logger.exception("unexpected failure loading diff for %s", hash)
            self._diff_state.publish(hash, LoadError(str(exc) or type(exc).__name__))
            return
        if not self._diff_state.publish(hash, DiffComplete(), diff):
            logger.debug("discarding superseded diff for %s", hash)

    def load(self, hash: str) -> None:
        """Reset the cache to ``hash`` and schedule a background load."""
        with self._lock:
            if self._pending is None and self._in_flight == hash and self._diff_state.is_current(hash):
                return
            self._diff_state.reset(hash)
            self._pending = hash
            if self._running:
                return
            self._running = True

        worker = threading.Thread(
            target=self._worker,
            name="lazyrebase-diff-loader",
            daemon=True,
        )
        worker.start()

    def cancel(self) -> None:
        """Drop any pending request and orphan an unfinished load."""
        with self._lock:
            self._pending = None
            self._diff_state.cancel()

    def wait_idle(self, timeout: float | None = None) -> bool:
        """Block until the worker thread exits. Returns ``False`` on timeout."""
        with self._idle:
            return self._idle.wait_for(lambda: not self._running, timeout=timeout)


__all__ = ["DiffBuilder", "DiffLoader"]
