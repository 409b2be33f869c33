"""
Substring search and delimiter-set tokenization over UTF-8 buffers.

Matching is byte-wise, positions are reported in codepoints. A valid UTF-8
needle can only match at a codepoint boundary of a valid UTF-8 haystack, so
no match ever starts inside a multi-byte sequence.

Tokenization re-scans the buffer from the start on every call, which makes
`token_span` O(n) per token. Use `token_spans` to collect all tokens at once.
"""

from typing import FrozenSet, Iterator, Optional, Tuple

from zstring.codepoints import count, spans

NOT_FOUND = -1


def find(data, size: int, needle: bytes) -> int:
    """Codepoint index of the first occurrence of `needle`, or `NOT_FOUND`."""
    offset = data.find(needle, 0, size)
    if offset == -1:
        return NOT_FOUND
    return count(data, offset)


def token_spans(data, size: int, delimiters: FrozenSet[bytes]) -> Iterator[Tuple[int, int]]:
    """Yield `(start, end)` byte ranges of the tokens between delimiters.

    Adjacent, leading and trailing delimiters produce empty tokens, and
    there is always at least one token, even for an empty buffer.
    """
    start = 0
    if delimiters:
        for offset, length in spans(data, 0, size):
            if bytes(data[offset : offset + length]) in delimiters:
                yield start, offset
                start = offset + length
    yield start, size


def token_span(data, size: int, delimiters: FrozenSet[bytes], index: int) -> Optional[Tuple[int, int]]:
    if index < 0:
        return None
    for position, span in enumerate(token_spans(data, size, delimiters)):
        if position == index:
            return span
    return None
