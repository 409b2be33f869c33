from typing import Optional

from zstring.buffer import Buffer
from zstring.codepoints import sequence_length
from zstring.errors import StaleViewError
from zstring.views import View


class ZStringIterator:
    """Forward, single-pass cursor over the codepoints of a ZString.

    The cursor is a byte offset, so each step is O(1). Iterators over the same
    string are independent; a fresh one is needed to start over.
    """

    __slots__ = ("_buffer", "_generation", "index", "exhausted")

    def __init__(self, buffer: Buffer):
        self._buffer = buffer
        self._generation = buffer.generation
        self.index = 0
        self.exhausted = False

    def next(self) -> Optional[View]:
        """View of the next codepoint, or `None` once the end was reached."""
        if self.exhausted:
            return None
        buffer = self._buffer
        if buffer.generation != self._generation:
            raise StaleViewError("string was modified during iteration")
        if self.index >= buffer.size:
            self.exhausted = True
            return None
        length = sequence_length(buffer.data[self.index])
        view = View(buffer, self.index, length)
        self.index += length
        return view

    def __iter__(self) -> "ZStringIterator":
        return self

    def __next__(self) -> View:
        view = self.next()
        if view is None:
            raise StopIteration
        return view
