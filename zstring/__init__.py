"""
ZString: a growable UTF-8 string with codepoint-indexed editing.

Every `ZString` method is also available as a module-level function taking the
string as its first argument. Read-only functions also accept plain `str` or
bytes-like inputs, which are validated and wrapped on the fly:

    >>> import zstring as zs
    >>> zs.find("hello world", "world")
    6
    >>> zs.len("héllo")
    5
"""

from typing import List, Optional, Tuple

from zstring.buffer import GROWTH_FACTOR, SYSTEM_ALLOCATOR, Buffer, LimitedAllocator, SystemAllocator
from zstring.errors import Error, StaleViewError, ZStringError
from zstring.iterator import ZStringIterator
from zstring.search import NOT_FOUND
from zstring.string import WHITESPACE, StringLike, ZString
from zstring.views import View

__version__ = "1.0.0"

__all__ = [
    "GROWTH_FACTOR",
    "NOT_FOUND",
    "SYSTEM_ALLOCATOR",
    "WHITESPACE",
    "Buffer",
    "Error",
    "LimitedAllocator",
    "StaleViewError",
    "StringLike",
    "SystemAllocator",
    "View",
    "ZString",
    "ZStringError",
    "ZStringIterator",
]


def _readable(string: StringLike) -> ZString:
    return string if isinstance(string, ZString) else ZString(string)


def _mutable(string: ZString) -> ZString:
    if not isinstance(string, ZString):
        raise TypeError(f"expected a ZString to modify in place, got {type(string).__name__}")
    return string


# region Construction & Memory


def init(allocator: Optional[SystemAllocator] = None) -> ZString:
    return ZString.init(allocator)


def init_with_contents(
    contents: StringLike, allocator: Optional[SystemAllocator] = None
) -> Tuple[Optional[ZString], Error]:
    return ZString.init_with_contents(contents, allocator)


def deinit(string: ZString) -> None:
    _mutable(string).deinit()


def size(string: StringLike) -> int:
    return _readable(string).size


def capacity(string: ZString) -> int:
    return _mutable(string).capacity


def allocate(string: ZString, nbytes: int) -> Error:
    return _mutable(string).allocate(nbytes)


def truncate(string: ZString) -> Error:
    return _mutable(string).truncate()


def clear(string: ZString) -> None:
    _mutable(string).clear()


# endregion

# region Read-only


def len(string: StringLike) -> int:  # noqa: A001
    return _readable(string).len()


def is_empty(string: StringLike) -> bool:
    return _readable(string).is_empty()


def cmp(string: StringLike, literal: StringLike) -> int:
    return _readable(string).cmp(literal)


def find(string: StringLike, literal: StringLike) -> int:
    return _readable(string).find(literal)


def char_at(string: StringLike, index: int) -> Optional[View]:
    return _readable(string).char_at(index)


def str(string: StringLike) -> View:  # noqa: A001
    return _readable(string).str()


def to_owned(string: StringLike) -> Tuple[Optional[bytearray], Error]:
    return _readable(string).to_owned()


def split(string: StringLike, delimiters: StringLike, index: int) -> Optional[View]:
    return _readable(string).split(delimiters, index)


def tokens(string: StringLike, delimiters: StringLike) -> List[View]:
    return _readable(string).tokens(delimiters)


def split_to_zstring(string: StringLike, delimiters: StringLike, index: int) -> Tuple[Optional[ZString], Error]:
    return _readable(string).split_to_zstring(delimiters, index)


def substr(string: StringLike, start: int, end: int) -> Tuple[Optional[ZString], Error]:
    return _readable(string).substr(start, end)


def clone(string: StringLike) -> Tuple[Optional[ZString], Error]:
    return _readable(string).clone()


def iterator(string: StringLike) -> ZStringIterator:
    return _readable(string).iterator()


# endregion

# region Mutators


def concat(string: ZString, literal: StringLike) -> Error:
    return _mutable(string).concat(literal)


def insert(string: ZString, literal: StringLike, index: int) -> Error:
    return _mutable(string).insert(literal, index)


def pop(string: ZString) -> Optional[View]:
    return _mutable(string).pop()


def remove(string: ZString, index: int) -> Error:
    return _mutable(string).remove(index)


def remove_range(string: ZString, start: int, end: int) -> Error:
    return _mutable(string).remove_range(start, end)


def trim_start(string: ZString, whitelist: StringLike = WHITESPACE) -> None:
    _mutable(string).trim_start(whitelist)


def trim_end(string: ZString, whitelist: StringLike = WHITESPACE) -> None:
    _mutable(string).trim_end(whitelist)


def trim(string: ZString, whitelist: StringLike = WHITESPACE) -> None:
    _mutable(string).trim(whitelist)


def reverse(string: ZString) -> None:
    _mutable(string).reverse()


def repeat(string: ZString, n: int) -> Error:
    return _mutable(string).repeat(n)


def to_lowercase(string: ZString) -> None:
    _mutable(string).to_lowercase()


def to_uppercase(string: ZString) -> None:
    _mutable(string).to_uppercase()


# endregion
