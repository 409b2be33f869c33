"""
Borrowed views into a ZString buffer.

A `View` remembers the buffer generation it was created at. Every access
checks it, so reading a view after its string was modified raises
`StaleViewError` rather than silently returning bytes that moved or vanished.
Call `tobytes()` or `str()` to keep a copy that outlives the string's next write.
"""

from zstring.buffer import Buffer
from zstring.codepoints import raw_bytes
from zstring.errors import StaleViewError


class View:
    __slots__ = ("_buffer", "_generation", "offset", "length")

    def __init__(self, buffer: Buffer, offset: int, length: int):
        self._buffer = buffer
        self._generation = buffer.generation
        self.offset = offset
        self.length = length

    def is_valid(self) -> bool:
        return self._generation == self._buffer.generation

    def _check(self) -> None:
        if not self.is_valid():
            raise StaleViewError("view used after the string it borrows from was modified")

    def memoryview(self) -> memoryview:
        """Zero-copy, read-only window over the viewed bytes."""
        self._check()
        return memoryview(self._buffer.data)[self.offset : self.offset + self.length].toreadonly()

    def tobytes(self) -> bytes:
        self._check()
        return bytes(self._buffer.data[self.offset : self.offset + self.length])

    def __bytes__(self) -> bytes:
        return self.tobytes()

    def __str__(self) -> str:
        return self.tobytes().decode("utf-8")

    def __len__(self) -> int:
        return self.length

    def __eq__(self, other) -> bool:
        if isinstance(other, View):
            return self.tobytes() == other.tobytes()
        try:
            return self.tobytes() == raw_bytes(other)
        except TypeError:
            return NotImplemented

    def __ne__(self, other) -> bool:
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None

    def __repr__(self) -> str:
        if not self.is_valid():
            return "zs.View(<stale>)"
        return f"zs.View({str(self)!r})"
