"""Edge-event monitor for sysfs GPIO input pins.

With a pin's edge attribute set to rising, falling or both, the kernel
raises a priority ("exceptional") condition on the value file descriptor on
every matching transition. EdgeMonitor runs a background thread that waits
for that condition, reads the new state and pushes it onto an EdgeStream.

Lifecycle: ATTACHED -> POLLING -> (EMITTING <-> POLLING) -> CLOSED.
The monitor ends when a wait or read fails, or when it is cancelled through
stop() or by the consumer closing the stream. CLOSED is terminal: attach a
new monitor to resume watching the pin.
"""

from __future__ import annotations

import logging
import os
import select
import threading
from typing import TYPE_CHECKING, Callable, Optional

from sysgpio.core.edge_stream import EdgeStream
from sysgpio.core.exceptions import (
    ConfigurationError,
    ConflictError,
    GPIOError,
    PinIOError,
)
from sysgpio.core.sysfs_gpio import SysfsGPIO
from sysgpio.interfaces.gpio_enums import Direction, Edge, MonitorState
from sysgpio.interfaces.readiness import ReadinessWaiter
from sysgpio.utils.consts import POLL_FOREVER, SysfsConsts

if TYPE_CHECKING:
    from sysgpio.utils.config_loader import SysfsConfig

logger = logging.getLogger(__name__)

WaiterFactory = Callable[[SysfsGPIO], ReadinessWaiter]

# Pins with a live monitor, keyed by value-file path
_ACTIVE_MONITORS: set[str] = set()
_REGISTRY_LOCK = threading.RLock()


class PollWaiter:
    """Readiness wait on a value file descriptor using select.poll().

    A self-pipe is registered next to the value file so wake() can interrupt
    a wait from another thread, including an unbounded one.
    """

    def __init__(self, fd: int):
        self._fd = fd
        self._wake_r, self._wake_w = os.pipe()
        self._poller = select.poll()
        self._poller.register(fd, select.POLLPRI | select.POLLERR)
        self._poller.register(self._wake_r, select.POLLIN)
        self._lock = threading.Lock()
        self._closed = False

    @classmethod
    def for_pin(cls, pin: SysfsGPIO) -> "PollWaiter":
        return cls(pin.fileno())

    def wait(self, timeout_ms: int) -> bool:
        try:
            events = self._poller.poll(None if timeout_ms < 0 else timeout_ms)
        except OSError as exc:
            raise PinIOError(f"poll() on fd {self._fd} failed: {exc}") from exc

        ready = False
        for fd, mask in events:
            if fd == self._wake_r:
                os.read(self._wake_r, 64)
                continue
            if mask & (select.POLLNVAL | select.POLLHUP):
                raise PinIOError(f"fd {self._fd} is no longer pollable (revents={mask:#x})")
            # sysfs reports edges as POLLPRI | POLLERR
            if mask & (select.POLLPRI | select.POLLERR):
                ready = True
        return ready

    def wake(self) -> None:
        with self._lock:
            if not self._closed:
                os.write(self._wake_w, b"\0")

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._poller.unregister(self._wake_r)
            os.close(self._wake_r)
            os.close(self._wake_w)


def _registry_key(pin: SysfsGPIO) -> str:
    return str(pin.attributes.attribute_path(pin.number, SysfsConsts.ATTR_VALUE))


class EdgeMonitor:
    """Watches one sysfs input pin and publishes its transitions.

    Preconditions are checked in the constructor, before any thread exists:
    the handle is open, the pin is an INPUT and its edge mode is not NONE.
    start() additionally rejects a second live monitor on the same pin.

    Typical use::

        pin = SysfsGPIO(17, Direction.INPUT, edge=Edge.BOTH)
        with pin.watch_edges() as stream:
            for state in stream:
                handle(state)
    """

    def __init__(
        self,
        pin: SysfsGPIO,
        timeout_ms: int = POLL_FOREVER,
        waiter_factory: Optional[WaiterFactory] = None,
    ):
        """Validate the pin and prepare a monitor.

        Args:
            pin: Open input pin with a non-NONE edge mode.
            timeout_ms: Per-wait timeout in milliseconds; negative waits
                indefinitely. Timeouts only bound a single wait, they never
                end the monitor.
            waiter_factory: Builds the readiness waiter for the pin.
                Defaults to PollWaiter.for_pin.

        Raises:
            ClosedHandleError: If the pin has been closed.
            ConfigurationError: If the pin is not an input or its edge mode
                is NONE.
            PinIOError, FormatError: If the pin's attributes cannot be read.
        """
        if pin.check_direction() is not Direction.INPUT:
            raise ConfigurationError(
                "direction", f"{pin.name} must be an INPUT to monitor edges"
            )
        if pin.get_edge() is Edge.NONE:
            raise ConfigurationError("edge", f"Edge value of {pin.name} is set to NONE")

        self._pin = pin
        self._timeout_ms = timeout_ms
        self._waiter_factory = waiter_factory or PollWaiter.for_pin
        self._waiter: Optional[ReadinessWaiter] = None
        self._key = _registry_key(pin)
        self._cancelled = threading.Event()
        self._state_lock = threading.Lock()
        self._state = MonitorState.ATTACHED
        self._thread: Optional[threading.Thread] = None
        self._stream = EdgeStream(name=f"{pin.name}-edges", on_close=self._cancel)

    @classmethod
    def attach(
        cls,
        pin: SysfsGPIO,
        timeout_ms: int = POLL_FOREVER,
        waiter_factory: Optional[WaiterFactory] = None,
    ) -> EdgeStream:
        """Validate the pin, start monitoring it and return the stream."""
        return cls(pin, timeout_ms, waiter_factory).start()

    @classmethod
    def from_config(
        cls,
        pin: SysfsGPIO,
        cfg: SysfsConfig,
        waiter_factory: Optional[WaiterFactory] = None,
    ) -> "EdgeMonitor":
        """Prepare a monitor using the configured per-wait timeout."""
        return cls(pin, cfg.poll_timeout_ms, waiter_factory)

    @property
    def pin(self) -> SysfsGPIO:
        return self._pin

    @property
    def stream(self) -> EdgeStream:
        return self._stream

    @property
    def state(self) -> MonitorState:
        with self._state_lock:
            return self._state

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _set_state(self, state: MonitorState) -> None:
        with self._state_lock:
            if self._state is not MonitorState.CLOSED:
                self._state = state

    # ==========================================================
    # Lifecycle
    # ==========================================================

    def start(self) -> EdgeStream:
        """Claim the pin, clear stale readiness and start the polling thread.

        Raises:
            ConflictError: If another monitor is watching this pin, or this
                monitor was already started.
            PinIOError, FormatError: If the initial read or the waiter setup
                fails. Nothing is left running in that case.
        """
        if self._thread is not None or self.state is MonitorState.CLOSED:
            raise ConflictError(f"Edge monitor for {self._pin.name} was already started")

        with _REGISTRY_LOCK:
            if self._key in _ACTIVE_MONITORS:
                raise ConflictError(
                    f"{self._pin.name} already has an edge monitor attached",
                    details={"path": self._key},
                )
            _ACTIVE_MONITORS.add(self._key)

        try:
            # The first wait reports the file's existing content as ready;
            # reading it now discards that false edge.
            self._pin.get_state()
            self._waiter = self._waiter_factory(self._pin)
        except BaseException as exc:
            self._stream.finish(exc)
            self._release()
            raise

        self._thread = threading.Thread(
            target=self._run,
            name=f"edge-monitor-{self._pin.name}",
            daemon=True,
        )
        self._thread.start()
        logger.debug("Edge monitor started for %s", self._pin.name)
        return self._stream

    def stop(self) -> None:
        """Cancel the monitor and end its stream.

        Takes effect even while the thread is blocked in a wait or a push.
        """
        self._cancel()
        self._stream.close()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the polling thread to exit. Returns True if it has."""
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def _cancel(self) -> None:
        self._cancelled.set()
        waiter = self._waiter
        if waiter is not None:
            waiter.wake()

    def _release(self) -> None:
        with _REGISTRY_LOCK:
            _ACTIVE_MONITORS.discard(self._key)
        with self._state_lock:
            self._state = MonitorState.CLOSED

    # ==========================================================
    # Polling loop
    # ==========================================================

    def _run(self) -> None:
        assert self._waiter is not None
        error: Optional[BaseException] = None
        try:
            while not self._cancelled.is_set():
                self._set_state(MonitorState.POLLING)
                if not self._waiter.wait(self._timeout_ms):
                    continue
                if self._cancelled.is_set():
                    break
                state = self._pin.get_state()
                self._set_state(MonitorState.EMITTING)
                if not self._stream.push(state):
                    break
        except GPIOError as exc:
            logger.warning("Edge monitor for %s stopped: %s", self._pin.name, exc)
            error = exc
        except Exception as exc:  # pylint: disable=broad-exception-caught
            # No caller to raise to: the stream carries the failure instead
            logger.exception("Edge monitor for %s failed", self._pin.name)
            error = exc
        finally:
            waiter, self._waiter = self._waiter, None
            waiter.close()
            self._stream.finish(error)
            self._release()
            logger.debug("Edge monitor for %s closed", self._pin.name)
