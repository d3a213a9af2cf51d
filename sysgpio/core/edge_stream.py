"""Notification stream carrying pin states from an edge monitor to a consumer."""

from __future__ import annotations

import threading
from collections import deque
from typing import Callable, Iterator, Optional

from sysgpio.core.exceptions import StreamClosedError


class EdgeStream:
    """Single-producer, single-consumer stream of pin states.

    The buffer holds one value: push() blocks until the consumer has taken
    the previous value, so a slow consumer stalls the producer instead of
    values being dropped or coalesced. Values arrive in push order.

    The producer ends the stream with finish(); the consumer abandons it with
    close(). Iteration stops at the end of the stream. A stream that ends
    without the consumer closing it ended because of a failure, recorded in
    ``error``.
    """

    def __init__(
        self,
        name: str = "edge-stream",
        on_close: Optional[Callable[[], None]] = None,
    ):
        self.name = name
        self._cond = threading.Condition()
        self._buffer: deque[bool] = deque()
        self._capacity = 1
        self._producer_done = False
        self._consumer_closed = False
        self._error: Optional[BaseException] = None
        self._on_close = on_close

    def __repr__(self) -> str:
        return f"EdgeStream(name={self.name!r}, closed={self.closed})"

    @property
    def closed(self) -> bool:
        """True once either end has closed the stream."""
        with self._cond:
            return self._producer_done or self._consumer_closed

    @property
    def error(self) -> Optional[BaseException]:
        """Exception that terminated the producer, if any."""
        with self._cond:
            return self._error

    # ==========================================================
    # Producer side
    # ==========================================================

    def push(self, value: bool) -> bool:
        """Hand a value to the consumer, blocking while the buffer is full.

        Returns:
            False if the consumer has closed the stream, True otherwise.
        """
        with self._cond:
            self._cond.wait_for(
                lambda: self._consumer_closed or len(self._buffer) < self._capacity
            )
            if self._consumer_closed or self._producer_done:
                return False
            self._buffer.append(value)
            self._cond.notify_all()
            return True

    def finish(self, error: Optional[BaseException] = None) -> None:
        """End the stream from the producer side. Buffered values stay readable."""
        with self._cond:
            if self._producer_done:
                return
            self._producer_done = True
            self._error = error
            self._cond.notify_all()

    # ==========================================================
    # Consumer side
    # ==========================================================

    def get(self, timeout: Optional[float] = None) -> bool:
        """Take the next value.

        Args:
            timeout: Seconds to wait; None waits indefinitely.

        Raises:
            StreamClosedError: If the stream has ended and nothing is buffered.
            TimeoutError: If no value arrived within timeout.
        """
        with self._cond:
            ready = self._cond.wait_for(
                lambda: self._buffer or self._producer_done or self._consumer_closed,
                timeout,
            )
            if not ready:
                raise TimeoutError(f"No value on {self.name} within {timeout}s")
            if self._buffer:
                value = self._buffer.popleft()
                self._cond.notify_all()
                return value
            raise StreamClosedError(f"{self.name} is closed", details={"error": self._error})

    def close(self) -> None:
        """Abandon the stream. Unread values are discarded. Idempotent."""
        with self._cond:
            if self._consumer_closed:
                return
            self._consumer_closed = True
            self._buffer.clear()
            self._cond.notify_all()
        if self._on_close is not None:
            self._on_close()

    def __iter__(self) -> Iterator[bool]:
        return self

    def __next__(self) -> bool:
        try:
            return self.get()
        except StreamClosedError:
            raise StopIteration from None

    def __enter__(self) -> "EdgeStream":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
