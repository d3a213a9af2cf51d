"""Custom exceptions used throughout the sysgpio package."""

from typing import Any, Optional


class GPIOError(Exception):
    """Base exception for all GPIO errors.

    All sysgpio-specific exceptions inherit from this class.
    This allows catching all GPIO errors with a single except clause.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Additional context about the error
        """

        super().__init__(message)
        self.details = details or {}


class ConfigurationError(GPIOError):
    """Raised when a caller-supplied precondition or configuration is invalid.

    This includes:
    - Wrong pin direction for the requested operation (e.g. monitoring an output)
    - Edge mode NONE when attaching an edge monitor
    - Invalid edge-mode or direction values
    - Invalid configuration files
    """

    def __init__(
        self,
        config_key: Optional[str] = None,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        """Initialize configuration error.

        Args:
            config_key: The configuration key that caused the error
            message: Description of what's wrong. If omitted, config_key is
                treated as the message and the key defaults to "configuration".
            details: Additional context
        """
        if message is None:
            message = config_key or "Invalid configuration"
            config_key = "configuration"
        if config_key is None:
            config_key = "configuration"

        full_message = f"Configuration error for '{config_key}': {message}"
        super().__init__(message=full_message, details=details)
        self.config_key = config_key


class DirectionError(GPIOError):
    """Raised when a pin's direction forbids the requested operation.

    Examples:
    - Driving an INPUT pin
    - Faking input on, or wiring as a target, an OUTPUT pin
    """

    def __init__(
        self,
        pin: str,
        operation: str,
        details: Optional[dict[str, Any]] = None,
    ):
        message = f"Direction error: cannot {operation} on {pin}"
        super().__init__(message=message, details=details)
        self.pin = pin
        self.operation = operation


class PinIOError(GPIOError):
    """Raised when a control-file read/write or a readiness wait fails.

    The originating OSError (missing file, permission, device removal) is
    chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        if path is not None:
            details = details or {}
            details["path"] = path

        super().__init__(message=message, details=details)
        self.path = path


class FormatError(GPIOError):
    """Raised when a control file's content matches no recognized value."""

    def __init__(
        self,
        path: str,
        content: str,
        details: Optional[dict[str, Any]] = None,
    ):
        message = f"Unrecognized content {content!r} in {path}"
        super().__init__(message=message, details=details)
        self.path = path
        self.content = content


class ConflictError(GPIOError):
    """Raised when an operation conflicts with another in-progress operation.

    Examples:
    - Attaching a second edge monitor to a pin that is already monitored
    """


class ClosedHandleError(GPIOError):
    """Raised when a pin handle is used after close()."""

    def __init__(self, pin: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message=f"{pin} is closed", details=details)
        self.pin = pin


class StreamClosedError(GPIOError):
    """Raised when reading from an edge stream that has ended."""


class PropagationDepthError(GPIOError):
    """Raised when re-entrant drives in a simulation graph nest too deeply.

    This almost always means the wiring contains a cycle.
    """

    def __init__(
        self,
        pin: str,
        max_depth: int,
        details: Optional[dict[str, Any]] = None,
    ):
        message = f"Drive of {pin} exceeded maximum propagation depth {max_depth}"
        super().__init__(message=message, details=details)
        self.pin = pin
        self.max_depth = max_depth
