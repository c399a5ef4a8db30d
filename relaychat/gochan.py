"""A thread-safe channel with optional bounded capacity and close semantics."""

from __future__ import annotations

import threading
from collections import deque
from typing import Generic, Iterator, Optional, TypeVar

T = TypeVar("T")


class GoChan(Generic[T]):
    """A FIFO channel shared between threads.

    A capacity of 0 means the buffer is unbounded and ``send`` never blocks.
    With a positive capacity, ``send`` blocks while the buffer is full.
    ``receive`` blocks until an item is available or the channel is closed.
    """

    def __init__(self, capacity: int = 0) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self._capacity = capacity
        self._buffer: deque[T] = deque()
        self._closed = False
        self._cond = threading.Condition()

    def _has_room(self) -> bool:
        return self._capacity == 0 or len(self._buffer) < self._capacity

    def send(self, data: T) -> bool:
        """Put ``data`` on the channel; return False if the channel is closed."""
        with self._cond:
            self._cond.wait_for(lambda: self._closed or self._has_room())
            if self._closed:
                return False
            self._buffer.append(data)
            self._cond.notify_all()
            return True

    def receive(self) -> Optional[T]:
        """Take the next item, or return None once the channel is closed and drained."""
        with self._cond:
            self._cond.wait_for(lambda: self._closed or bool(self._buffer))
            if not self._buffer:
                return None
            data = self._buffer.popleft()
            self._cond.notify_all()
            return data

    def close(self) -> None:
        """Close the channel and wake every waiting sender and receiver."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def is_closed(self) -> bool:
        with self._cond:
            return self._closed

    def __iter__(self) -> Iterator[T]:
        while True:
            item = self.receive()
            if item is None:
                return
            yield item