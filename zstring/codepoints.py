"""
Translation between codepoint indices and byte offsets in UTF-8 buffers.

Everything here is stateless and works on a `(data, size)` pair, where only the
first `size` bytes of `data` are meaningful. Buffers handed to these helpers
are expected to be valid UTF-8: malformed input is rejected by `encode_literal`
before it ever lands in a `Buffer`, so the read paths only look at lead bytes.
"""

from typing import FrozenSet, Iterator, Optional, Tuple

Span = Tuple[int, int]


def sequence_length(lead: int) -> int:
    """Byte length of the UTF-8 sequence starting with the `lead` byte."""
    if lead < 0x80:
        return 1
    if lead < 0xC0:
        return 1  # stray continuation byte, only seen in unvalidated input
    if lead < 0xE0:
        return 2
    if lead < 0xF0:
        return 3
    if lead < 0xF8:
        return 4
    return 1


def is_continuation(byte: int) -> bool:
    return byte & 0xC0 == 0x80


def raw_bytes(literal) -> bytes:
    """Bytes of `literal` without validation. Strings are encoded as UTF-8,
    letting lone surrogates through so that callers can compare them."""
    if isinstance(literal, str):
        return literal.encode("utf-8", "surrogatepass")
    if isinstance(literal, int):
        raise TypeError(f"expected a string or bytes-like object, got {type(literal).__name__}")
    return bytes(literal)


def is_valid(data: bytes) -> bool:
    """Strict UTF-8 check: no overlongs, surrogates, truncations or values past U+10FFFF."""
    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        return False
    return True


def encode_literal(literal) -> Optional[bytes]:
    """Validated UTF-8 bytes of `literal`, or `None` if it is malformed."""
    data = raw_bytes(literal)
    return data if is_valid(data) else None


def count(data, size: int) -> int:
    """Number of codepoints in the first `size` bytes."""
    return sum(1 for byte in data[:size] if not is_continuation(byte))


def byte_offset(data, size: int, index: int) -> Optional[int]:
    """Byte offset of the `index`-th codepoint.

    `index == count(data, size)` resolves to `size`, the append position.
    Anything further, or negative, resolves to `None`.
    """
    if index < 0:
        return None
    offset = 0
    while index > 0:
        if offset >= size:
            return None
        offset += sequence_length(data[offset])
        index -= 1
    return offset


def char_span(data, size: int, index: int) -> Optional[Span]:
    """`(offset, length)` of the `index`-th codepoint, or `None` past the end."""
    offset = byte_offset(data, size, index)
    if offset is None or offset >= size:
        return None
    return offset, sequence_length(data[offset])


def last_span(data, size: int) -> Optional[Span]:
    if size == 0:
        return None
    offset = size - 1
    while offset > 0 and is_continuation(data[offset]):
        offset -= 1
    return offset, size - offset


def spans(data, start: int, end: int) -> Iterator[Span]:
    """Yield `(offset, length)` for every codepoint in bytes `[start, end)`."""
    offset = start
    while offset < end:
        length = min(sequence_length(data[offset]), end - offset)
        yield offset, length
        offset += length


def codepoint_set(literal) -> FrozenSet[bytes]:
    """Encoded codepoints of `literal`, each as its own byte string."""
    data = raw_bytes(literal)
    return frozenset(data[offset : offset + length] for offset, length in spans(data, 0, len(data)))
