"""
The `ZString` type: a growable UTF-8 buffer edited in codepoint units.

All operations that take an index count codepoints, not bytes. Fallible
operations return an `Error` kind (or a `(value, Error)` pair for the ones that
produce a new object) and leave the receiver unchanged when they fail.
Lookups that find nothing return `None` or `NOT_FOUND` instead.
"""

from __future__ import annotations

import logging
from typing import Final, List, Optional, Tuple, Union

from zstring.buffer import Buffer, SystemAllocator
from zstring.codepoints import (
    byte_offset,
    char_span,
    codepoint_set,
    count,
    encode_literal,
    is_valid,
    last_span,
    raw_bytes,
    spans,
)
from zstring.errors import Error, ZStringError
from zstring.iterator import ZStringIterator
from zstring.search import NOT_FOUND, find as find_in_buffer, token_span, token_spans
from zstring.views import View

logger = logging.getLogger(__name__)

StringLike = Union[str, bytes, bytearray, memoryview, View, "ZString"]

WHITESPACE: Final[str] = " \t\n\r\f\v"


def _validated(literal: StringLike) -> Optional[bytes]:
    data = encode_literal(literal)
    if data is None:
        logger.debug("Rejected malformed UTF-8 literal: %r", raw_bytes(literal)[:32])
    return data


class ZString:
    """Growable, UTF-8 aware string with codepoint-indexed editing.

    A `ZString` exclusively owns its buffer and is not thread-safe: callers
    sharing one across threads must serialize access themselves.
    """

    __slots__ = ("_buffer",)

    def __init__(self, contents: Optional[StringLike] = None, allocator: Optional[SystemAllocator] = None):
        self._buffer: Optional[Buffer] = Buffer(allocator)
        if contents is None:
            return
        data = _validated(contents)
        if data is None:
            raise ZStringError(Error.INVALID_RANGE, "contents are not valid UTF-8")
        self._live.splice(0, 0, data).raise_for_error()

    @classmethod
    def init(cls, allocator: Optional[SystemAllocator] = None) -> ZString:
        return cls(allocator=allocator)

    @classmethod
    def init_with_contents(
        cls, contents: StringLike, allocator: Optional[SystemAllocator] = None
    ) -> Tuple[Optional[ZString], Error]:
        """Build a string holding `contents`, sized exactly to fit it."""
        data = _validated(contents)
        if data is None:
            return None, Error.INVALID_RANGE
        string = cls(allocator=allocator)
        error = string._live.splice(0, 0, data)
        if error:
            return None, error
        return string, Error.NONE

    def deinit(self) -> None:
        """Release the buffer. The string must not be used afterwards."""
        if self._buffer is not None:
            self._buffer.release()
            self._buffer = None

    @property
    def _live(self) -> Buffer:
        buffer = self._buffer
        if buffer is None:
            raise ZStringError(Error.INVALID_RANGE, "string was deinitialized")
        return buffer

    # region Buffer & Memory

    @property
    def size(self) -> int:
        """Bytes in use."""
        return self._live.size

    @property
    def capacity(self) -> int:
        """Bytes allocated."""
        return self._live.capacity

    @property
    def allocator(self) -> SystemAllocator:
        return self._live.allocator

    def allocate(self, nbytes: int) -> Error:
        return self._live.reserve(nbytes)

    def truncate(self) -> Error:
        """Shrink capacity down to the size."""
        return self._live.shrink_to_fit()

    def clear(self) -> None:
        self._live.resize(0)

    # endregion

    # region Accessors

    def len(self) -> int:
        """Number of codepoints. O(n) in bytes, cache it when calling repeatedly."""
        buffer = self._live
        return count(buffer.data, buffer.size)

    def is_empty(self) -> bool:
        return self._live.size == 0

    def char_at(self, index: int) -> Optional[View]:
        buffer = self._live
        span = char_span(buffer.data, buffer.size, index)
        if span is None:
            return None
        return View(buffer, *span)

    def str(self) -> View:
        """Borrowed view of the whole content."""
        buffer = self._live
        return View(buffer, 0, buffer.size)

    def to_owned(self) -> Tuple[Optional[bytearray], Error]:
        buffer = self._live
        try:
            copy = buffer.allocator.allocate(buffer.size)
        except MemoryError as e:
            logger.debug("Could not copy %d bytes out: %s", buffer.size, e)
            return None, Error.OUT_OF_MEMORY
        copy[:] = buffer.data[: buffer.size]
        return copy, Error.NONE

    def iterator(self) -> ZStringIterator:
        return ZStringIterator(self._live)

    # endregion

    # region Mutators

    def concat(self, literal: StringLike) -> Error:
        data = _validated(literal)
        if data is None:
            return Error.INVALID_RANGE
        buffer = self._live
        return buffer.splice(buffer.size, buffer.size, data)

    def insert(self, literal: StringLike, index: int) -> Error:
        data = _validated(literal)
        if data is None:
            return Error.INVALID_RANGE
        buffer = self._live
        offset = byte_offset(buffer.data, buffer.size, index)
        if offset is None:
            return Error.INVALID_RANGE
        return buffer.splice(offset, offset, data)

    def remove(self, index: int) -> Error:
        buffer = self._live
        span = char_span(buffer.data, buffer.size, index)
        if span is None:
            return Error.INVALID_RANGE
        offset, length = span
        return buffer.splice(offset, offset + length, b"")

    def remove_range(self, start: int, end: int) -> Error:
        """Remove codepoints `[start, end)`."""
        if start < 0 or end < start:
            return Error.INVALID_RANGE
        buffer = self._live
        end_offset = byte_offset(buffer.data, buffer.size, end)
        if end_offset is None:
            return Error.INVALID_RANGE
        if start == end:
            return Error.NONE
        start_offset = byte_offset(buffer.data, buffer.size, start)
        return buffer.splice(start_offset, end_offset, b"")

    def pop(self) -> Optional[View]:
        """Remove the last codepoint and return a view of it.

        The popped bytes stay in the buffer past `size` until the next write,
        so the view is only good until then.
        """
        buffer = self._live
        span = last_span(buffer.data, buffer.size)
        if span is None:
            return None
        buffer.resize(span[0])
        return View(buffer, *span)

    def trim_start(self, whitelist: StringLike = WHITESPACE) -> None:
        trimmable = codepoint_set(whitelist)
        buffer = self._live
        data = buffer.data
        cut = 0
        for offset, length in spans(data, 0, buffer.size):
            if bytes(data[offset : offset + length]) not in trimmable:
                break
            cut = offset + length
        if cut:
            buffer.splice(0, cut, b"")

    def trim_end(self, whitelist: StringLike = WHITESPACE) -> None:
        trimmable = codepoint_set(whitelist)
        buffer = self._live
        data = buffer.data
        end = buffer.size
        while end > 0:
            offset, _ = last_span(data, end)
            if bytes(data[offset:end]) not in trimmable:
                break
            end = offset
        if end != buffer.size:
            buffer.resize(end)

    def trim(self, whitelist: StringLike = WHITESPACE) -> None:
        self.trim_end(whitelist)
        self.trim_start(whitelist)

    def reverse(self) -> None:
        """Reverse the order of codepoints, keeping each one's bytes intact."""
        buffer = self._live
        data = buffer.data
        pieces = [bytes(data[offset : offset + length]) for offset, length in spans(data, 0, buffer.size)]
        pieces.reverse()
        buffer.overwrite(0, b"".join(pieces))

    def repeat(self, n: int) -> Error:
        """Append `n` more copies of the current content."""
        if n < 0:
            return Error.INVALID_RANGE
        buffer = self._live
        size = buffer.size
        if n == 0 or size == 0:
            return Error.NONE
        error = buffer.reserve(size * (n + 1))
        if error:
            return error
        content = buffer.used()
        for copy in range(1, n + 1):
            buffer.overwrite(copy * size, content)
        buffer.resize(size * (n + 1))
        return Error.NONE

    def to_lowercase(self) -> None:
        buffer = self._live
        buffer.overwrite(0, buffer.used().lower())

    def to_uppercase(self) -> None:
        buffer = self._live
        buffer.overwrite(0, buffer.used().upper())

    # endregion

    # region Search & Split

    def find(self, literal: StringLike) -> int:
        """Codepoint index of the first occurrence of `literal`, or `NOT_FOUND`."""
        needle = raw_bytes(literal)
        if not is_valid(needle):
            return NOT_FOUND
        buffer = self._live
        return find_in_buffer(buffer.data, buffer.size, needle)

    def split(self, delimiters: StringLike, index: int) -> Optional[View]:
        """The `index`-th token between any of the `delimiters` codepoints.

        Every call re-tokenizes from the start; use `tokens` to get them all.
        """
        buffer = self._live
        span = token_span(buffer.data, buffer.size, codepoint_set(delimiters), index)
        if span is None:
            return None
        start, end = span
        return View(buffer, start, end - start)

    def tokens(self, delimiters: StringLike) -> List[View]:
        buffer = self._live
        return [
            View(buffer, start, end - start)
            for start, end in token_spans(buffer.data, buffer.size, codepoint_set(delimiters))
        ]

    def split_to_zstring(self, delimiters: StringLike, index: int) -> Tuple[Optional[ZString], Error]:
        """Like `split`, but returns an owned copy of the token."""
        buffer = self._live
        span = token_span(buffer.data, buffer.size, codepoint_set(delimiters), index)
        if span is None:
            return None, Error.NONE
        start, end = span
        return self._spawn(bytes(buffer.data[start:end]))

    def substr(self, start: int, end: int) -> Tuple[Optional[ZString], Error]:
        """Owned copy of codepoints `[start, end)`."""
        if start < 0 or end < start:
            return None, Error.INVALID_RANGE
        buffer = self._live
        end_offset = byte_offset(buffer.data, buffer.size, end)
        if end_offset is None:
            return None, Error.INVALID_RANGE
        start_offset = byte_offset(buffer.data, buffer.size, start)
        return self._spawn(bytes(buffer.data[start_offset:end_offset]))

    # endregion

    # region Comparison & Cloning

    def cmp(self, literal: StringLike) -> int:
        """Byte-wise comparison: negative, zero or positive, like C's `memcmp`."""
        mine, theirs = self._live.used(), raw_bytes(literal)
        return (mine > theirs) - (mine < theirs)

    def clone(self) -> Tuple[Optional[ZString], Error]:
        return self._spawn(self._live.used())

    def _spawn(self, data: bytes) -> Tuple[Optional[ZString], Error]:
        string = type(self)(allocator=self._live.allocator)
        error = string._live.splice(0, 0, data)
        if error:
            return None, error
        return string, Error.NONE

    # endregion

    # region Python protocols

    def __len__(self) -> int:
        return self.len()

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __bytes__(self) -> bytes:
        return self._live.used()

    def __str__(self) -> str:
        return self._live.used().decode("utf-8")

    def __repr__(self) -> str:
        if self._buffer is None:
            return "zs.ZString(<deinitialized>)"
        return f"zs.ZString({self.__str__()!r})"

    def __iter__(self) -> ZStringIterator:
        return self.iterator()

    def __contains__(self, literal: StringLike) -> bool:
        return self.find(literal) != NOT_FOUND

    def __getitem__(self, index: int) -> str:
        if not isinstance(index, int):
            raise TypeError(f"ZString indices must be integers, not {type(index).__name__}")
        if index < 0:
            index += self.len()
        view = self.char_at(index)
        if view is None:
            raise IndexError("ZString index out of range")
        return view.__str__()

    def _compare(self, other) -> int:
        try:
            return self.cmp(other)
        except TypeError:
            return NotImplemented

    def __eq__(self, other) -> bool:
        result = self._compare(other)
        return result if result is NotImplemented else result == 0

    def __ne__(self, other) -> bool:
        result = self._compare(other)
        return result if result is NotImplemented else result != 0

    def __lt__(self, other) -> bool:
        result = self._compare(other)
        return result if result is NotImplemented else result < 0

    def __le__(self, other) -> bool:
        result = self._compare(other)
        return result if result is NotImplemented else result <= 0

    def __gt__(self, other) -> bool:
        result = self._compare(other)
        return result if result is NotImplemented else result > 0

    def __ge__(self, other) -> bool:
        result = self._compare(other)
        return result if result is NotImplemented else result >= 0

    __hash__ = None

    # endregion
