"""
Owned byte storage behind every ZString.

The storage is a fixed-length `bytearray` whose length *is* the capacity, while
`size` tracks how many leading bytes are in use. Growing or shrinking never
resizes that `bytearray` in place: a fresh one is requested from the allocator
and the used prefix is copied over. Exported memory views therefore never
block a reallocation, and a failed request leaves the old storage untouched.
"""

import logging
from typing import Final, Optional

from zstring.errors import Error

logger = logging.getLogger(__name__)

GROWTH_FACTOR: Final[int] = 2


class SystemAllocator:
    """Default allocator, backed by the interpreter's own memory manager."""

    def allocate(self, nbytes: int) -> bytearray:
        try:
            return bytearray(nbytes)
        except OverflowError as e:
            raise MemoryError(f"cannot allocate {nbytes} bytes") from e

    def __repr__(self) -> str:
        return "SystemAllocator()"


class LimitedAllocator(SystemAllocator):
    """Refuses any single request above `limit` bytes.

    Useful to embed strings under a hard memory cap, and to simulate
    allocation failures in tests.
    """

    def __init__(self, limit: int):
        if limit < 0:
            raise ValueError("limit must be non-negative")
        self.limit = limit

    def allocate(self, nbytes: int) -> bytearray:
        if nbytes > self.limit:
            raise MemoryError(f"requested {nbytes} bytes, limit is {self.limit}")
        return super().allocate(nbytes)

    def __repr__(self) -> str:
        return f"LimitedAllocator(limit={self.limit})"


SYSTEM_ALLOCATOR: Final[SystemAllocator] = SystemAllocator()


class Buffer:
    """Growable byte buffer with explicit capacity control.

    Every successful mutation bumps `generation`, which borrowed views and
    iterators compare against to detect that they went stale.
    """

    __slots__ = ("data", "size", "generation", "allocator")

    def __init__(self, allocator: Optional[SystemAllocator] = None):
        self.allocator = allocator if allocator is not None else SYSTEM_ALLOCATOR
        self.data = bytearray()
        self.size = 0
        self.generation = 0

    @property
    def capacity(self) -> int:
        return len(self.data)

    def used(self) -> bytes:
        return bytes(self.data[: self.size])

    def _reallocate(self, capacity: int) -> Error:
        try:
            fresh = self.allocator.allocate(capacity)
        except MemoryError as e:
            logger.debug("Allocation of %d bytes failed: %s", capacity, e)
            return Error.OUT_OF_MEMORY
        fresh[: self.size] = self.data[: self.size]
        logger.debug("Reallocated buffer from %d to %d bytes", len(self.data), capacity)
        self.data = fresh
        self.generation += 1
        return Error.NONE

    def reserve(self, required: int) -> Error:
        """Make room for at least `required` bytes, growing geometrically."""
        if required < 0:
            return Error.INVALID_RANGE
        if required <= self.capacity:
            return Error.NONE
        return self._reallocate(max(required, self.capacity * GROWTH_FACTOR))

    def shrink_to_fit(self) -> Error:
        if self.capacity == self.size:
            return Error.NONE
        return self._reallocate(self.size)

    def splice(self, start: int, end: int, payload: bytes) -> Error:
        """Replace bytes `[start, end)` with `payload`, shifting the tail.

        Either the whole splice happens or, on allocation failure, nothing does.
        """
        length = len(payload)
        new_size = self.size - (end - start) + length
        if new_size > self.capacity:
            error = self.reserve(new_size)
            if error:
                return error
        data = self.data
        tail = data[end : self.size]
        data[start : start + length] = payload
        data[start + length : new_size] = tail
        self.size = new_size
        self.generation += 1
        return Error.NONE

    def overwrite(self, start: int, payload: bytes) -> None:
        """Write `payload` at `start`, anywhere within capacity, without changing `size`."""
        self.data[start : start + len(payload)] = payload
        self.generation += 1

    def resize(self, size: int) -> None:
        """Move the end of the used region. Dropped bytes stay physically in place."""
        self.size = size
        self.generation += 1

    def release(self) -> None:
        self.data = bytearray()
        self.size = 0
        self.generation += 1
