"""Readiness-wait protocol used by the edge monitor."""

from __future__ import annotations

from typing import Protocol


class ReadinessWaiter(Protocol):
    """Blocks until a watched pin reports an edge or a timeout elapses."""

    def wait(self, timeout_ms: int) -> bool:
        """Wait for an edge.

        Args:
            timeout_ms: Milliseconds to wait; negative waits indefinitely.

        Returns:
            True if the pin reported an edge, False on timeout or wake().

        Raises:
            PinIOError: If the wait itself fails.
        """
        ...

    def wake(self) -> None:
        """Interrupt a concurrent wait(). Safe to call from any thread."""
        ...

    def close(self) -> None:
        """Release the waiter's resources."""
        ...
