"""Deduplication of concurrently requested work."""

import threading
from contextlib import contextmanager
from typing import Iterator

from ..errors import ConflictError


class InFlightSet:
    """Keys currently being worked on.

    `claim` checks and inserts atomically, and always releases the key when
    the work finishes, whether it succeeded or raised.
    """

    def __init__(self):
        self._keys: set[str] = set()
        self._lock = threading.Lock()

    def try_add(self, key: str) -> bool:
        with self._lock:
            if key in self._keys:
                return False
            self._keys.add(key)
            return True

    def discard(self, key: str) -> None:
        with self._lock:
            self._keys.discard(key)

    @contextmanager
    def claim(self, key: str) -> Iterator[str]:
        """Hold `key` for the duration of the block.

        Raises:
            ConflictError: If the key is already in flight.
        """
        if not self.try_add(key):
            raise ConflictError(key)
        try:
            yield key
        finally:
            self.discard(key)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._keys

    def __len__(self) -> int:
        with self._lock:
            return len(self._keys)
