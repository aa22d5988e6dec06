# campsite_booking/locks.py
import threading
from contextlib import contextmanager
from typing import Dict, Iterator

from fastapi import Request


class SpotLocks:
    """Per-spot mutual exclusion. An entry lives only while someone holds or waits on it."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[int, threading.Lock] = {}
        self._holders: Dict[int, int] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    def _acquire_entry(self, spot_id: int) -> threading.Lock:
        with self._guard:
            lock = self._locks.setdefault(spot_id, threading.Lock())
            self._holders[spot_id] = self._holders.get(spot_id, 0) + 1
            return lock

    def _release_entry(self, spot_id: int) -> None:
        with self._guard:
            self._holders[spot_id] -= 1
            if not self._holders[spot_id]:
                del self._holders[spot_id]
                del self._locks[spot_id]

    @contextmanager
    def hold(self, spot_id: int) -> Iterator[None]:
        lock = self._acquire_entry(spot_id)
        try:
            with lock:
                yield
        finally:
            self._release_entry(spot_id)


def get_spot_locks(request: Request) -> SpotLocks:
    return request.app.state.spot_locks
