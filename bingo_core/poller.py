from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from .errors import StoreError
from .state import GameSnapshot

log = logging.getLogger(__name__)

Fetch = Callable[[], Optional[GameSnapshot]]


class SnapshotPoller:
    """Polls the game row on a fixed interval and hands results to callbacks.

    Every tick starts its fetch on a worker thread and tags it with a
    monotonic sequence number, so a slow request can overlap the next tick.
    A response older than the newest one already applied is dropped.
    Errors are reported and simply retried on the next tick.
    """

    def __init__(
        self,
        fetch: Fetch,
        on_snapshot: Callable[[GameSnapshot], None],
        on_not_found: Optional[Callable[[], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
        interval: float = 2.0,
    ):
        self.fetch = fetch
        self.on_snapshot = on_snapshot
        self.on_not_found = on_not_found
        self.on_error = on_error
        self.interval = interval
        self._stop = threading.Event()
        self._lock = threading.Lock()
        self._issued = 0
        self._applied = 0
        self._thread: Optional[threading.Thread] = None

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def issue(self) -> int:
        with self._lock:
            self._issued += 1
            return self._issued

    def deliver(self, seq: int, snapshot: Optional[GameSnapshot] = None,
                error: Optional[Exception] = None) -> bool:
        """Applies a fetch result unless a newer one was applied already. Returns True if applied."""
        with self._lock:
            if self._stop.is_set() or seq <= self._applied:
                log.debug("dropping stale poll response #%d (applied #%d)", seq, self._applied)
                return False
            self._applied = seq
        if error is not None:
            if self.on_error:
                self.on_error(error)
        elif snapshot is None:
            if self.on_not_found:
                self.on_not_found()
        else:
            self.on_snapshot(snapshot)
        return True

    def _run_fetch(self, seq: int) -> None:
        try:
            snap = self.fetch()
        except StoreError as e:
            log.warning("poll #%d failed: %s", seq, e)
            self.deliver(seq, error=e)
            return
        self.deliver(seq, snapshot=snap)

    def poll_once(self) -> bool:
        """Runs one fetch synchronously on the calling thread."""
        seq = self.issue()
        self._run_fetch(seq)
        return seq == self._applied

    def _loop(self) -> None:
        while not self._stop.is_set():
            seq = self.issue()
            worker = threading.Thread(target=self._run_fetch, args=(seq,), daemon=True)
            worker.start()
            self._stop.wait(self.interval)

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="snapshot-poller", daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
