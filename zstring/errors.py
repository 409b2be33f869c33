"""
Error kinds reported by ZString operations.

The core API never raises on a failed precondition or allocation: it returns
one of the `Error` kinds and leaves the receiver untouched. Exceptions only
appear at the Pythonic edges, like the `ZString(...)` constructor.
"""

from enum import IntEnum


class Error(IntEnum):
    """Closed set of failure kinds. `NONE` is falsy, so `if err:` means "failed"."""

    NONE = 0
    OUT_OF_MEMORY = 1
    INVALID_RANGE = 2

    def raise_for_error(self) -> None:
        """Raise `ZStringError` for anything but `Error.NONE`."""
        if self is not Error.NONE:
            raise ZStringError(self)


class ZStringError(ValueError):
    """Raised by the Pythonic surface when an operation reports an `Error`."""

    def __init__(self, error: Error, message: str = ""):
        self.error = error
        super().__init__(message or f"zstring operation failed: {error.name}")


class StaleViewError(RuntimeError):
    """Raised when a borrowed view or iterator outlives the content it points to."""

    pass
