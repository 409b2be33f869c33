#!/usr/bin/env python3
"""
Test suite for the ZString package.
For full coverage, preinstall NumPy.
To run locally:

    pip install -e ".[test]"
    python -m pytest scripts/test_zstring.py -s -x

Set `ZSTRING_TESTS_SEED` to replay the randomized property checks with a single seed.
"""

import random
import re

import pytest

from test_helpers import SEED_VALUES, SwitchAllocator, codepoint_widths, get_random_text

import zstring as zs
from zstring import Error, LimitedAllocator, StaleViewError, ZString, ZStringError

try:
    import numpy as np

    numpy_available = True
except ImportError:
    # NumPy is not installed, buffer interop tests will be skipped
    numpy_available = False


MALFORMED = [
    b"\xc0\xaf",  # overlong "/"
    b"\xe0\x80\xaf",  # overlong "/" in three bytes
    b"\xed\xa0\x80",  # UTF-16 surrogate
    b"\xf4\x90\x80\x80",  # past U+10FFFF
    b"\xe2\x82",  # truncated euro sign
    b"a\x80b",  # lone continuation byte
    b"\xff",  # never valid
    "\ud800",  # lone surrogate in a Python string
]


def snapshot(string: ZString):
    return string.size, string.capacity, bytes(string)


def test_library_properties():
    assert len(zs.__version__.split(".")) == 3, "Semantic versioning must be preserved"
    assert not Error.NONE
    assert Error.OUT_OF_MEMORY and Error.INVALID_RANGE


# region Construction & Memory


def test_init_empty():
    string = ZString.init()
    assert string.size == 0
    assert string.capacity == 0
    assert string.len() == 0
    assert string.is_empty()
    assert not string


@pytest.mark.parametrize("native_type", [str, bytes, bytearray, memoryview])
def test_init_with_contents(native_type):
    native = "héllo wörld"
    contents = native if native_type is str else native_type(native.encode("utf-8"))
    string, error = ZString.init_with_contents(contents)
    assert error == Error.NONE
    assert string.size == len(native.encode("utf-8"))
    assert string.capacity == string.size
    assert str(string) == native


@pytest.mark.parametrize("malformed", MALFORMED)
def test_init_rejects_malformed(malformed):
    string, error = ZString.init_with_contents(malformed)
    assert string is None
    assert error == Error.INVALID_RANGE

    with pytest.raises(ZStringError) as excinfo:
        ZString(malformed)
    assert excinfo.value.error == Error.INVALID_RANGE


def test_init_out_of_memory():
    string, error = ZString.init_with_contents("abcdef", allocator=LimitedAllocator(4))
    assert string is None
    assert error == Error.OUT_OF_MEMORY

    with pytest.raises(ZStringError) as excinfo:
        ZString("abcdef", allocator=LimitedAllocator(4))
    assert excinfo.value.error == Error.OUT_OF_MEMORY


def test_init_rejects_non_text():
    with pytest.raises(TypeError):
        ZString(42)


def test_str_repr():
    native = "abcdéf"
    string = ZString(native)
    assert repr(string) == f"zs.ZString({repr(native)})"
    assert str(string) == native
    assert bytes(string) == native.encode("utf-8")


def test_allocate_is_monotonic():
    string = ZString()
    assert string.allocate(10) == Error.NONE
    assert string.capacity == 10
    assert string.allocate(4) == Error.NONE
    assert string.capacity == 10
    assert string.size == 0
    assert string.allocate(-1) == Error.INVALID_RANGE


def test_allocate_grows_geometrically():
    string = ZString("abc")
    assert string.capacity == 3
    assert string.concat("d") == Error.NONE
    assert string.capacity == 6


def test_appends_are_amortized():
    allocator = SwitchAllocator()
    string = ZString(allocator=allocator)
    for _ in range(1000):
        assert string.concat("é") == Error.NONE
    assert string.size == 2000
    assert string.len() == 1000
    assert len(allocator.requests) < 16


def test_allocate_failure_keeps_capacity():
    string = ZString("abc", allocator=LimitedAllocator(8))
    before = snapshot(string)
    assert string.allocate(9) == Error.OUT_OF_MEMORY
    assert snapshot(string) == before


def test_truncate():
    string = ZString()
    string.allocate(64)
    string.concat("héllo")
    assert string.capacity == 64
    assert string.truncate() == Error.NONE
    assert string.capacity == string.size == 6
    assert string == "héllo"


def test_truncate_failure_is_recoverable():
    allocator = SwitchAllocator()
    string = ZString("abc", allocator=allocator)
    string.allocate(100)
    allocator.failing = True
    before = snapshot(string)
    assert string.truncate() == Error.OUT_OF_MEMORY
    assert snapshot(string) == before


def test_clear_keeps_capacity():
    string = ZString("héllo")
    string.clear()
    assert string.size == 0
    assert string.capacity == 6
    assert string.is_empty()
    assert string == ""


def test_deinit():
    string = ZString("abc")
    view = string.str()
    string.deinit()
    assert repr(string) == "zs.ZString(<deinitialized>)"
    with pytest.raises(ZStringError):
        string.len()
    with pytest.raises(ZStringError):
        string.concat("d")
    with pytest.raises(StaleViewError):
        bytes(view)
    string.deinit()  # Releasing twice is harmless


# endregion

# region Codepoint Indexing


def test_size_and_length_scenario():
    string = ZString("héllo")
    assert string.size == 6
    assert string.len() == 5

    second = string.char_at(1)
    assert len(second) == 2
    assert second == "é"

    first = string.char_at(0)
    assert len(first) == 1
    assert first == "h"


def test_char_at_miss():
    string = ZString("héllo")
    assert string.char_at(string.len()) is None
    assert string.char_at(100) is None
    assert string.char_at(-1) is None
    assert ZString().char_at(0) is None


def test_char_at_every_width():
    native = "a€é😀"
    string = ZString(native)
    for index, (char, width) in enumerate(zip(native, codepoint_widths(native))):
        view = string.char_at(index)
        assert str(view) == char
        assert len(view) == width


def test_getitem():
    string = ZString("añ😀")
    assert string[2] == "😀"
    assert string[-3] == "a"
    with pytest.raises(IndexError):
        string[3]
    with pytest.raises(IndexError):
        string[-4]
    with pytest.raises(TypeError):
        string["0"]


@pytest.mark.parametrize("seed_value", SEED_VALUES)
def test_round_trip(seed_value: int):
    rng = random.Random(seed_value)
    for _ in range(20):
        native = get_random_text(rng=rng)
        string = ZString(native)
        assert bytes(string.str()) == native.encode("utf-8")
        assert string.len() == len(native)


# endregion

# region Mutators


def test_concat():
    string = ZString("añ")
    assert string.concat("€😀") == Error.NONE
    assert string == "añ€😀"
    assert string.concat(b"") == Error.NONE
    assert string == "añ€😀"
    assert string.concat(string) == Error.NONE
    assert string == "añ€😀añ€😀"


@pytest.mark.parametrize("malformed", MALFORMED)
def test_concat_rejects_malformed(malformed):
    string = ZString("abc")
    before = snapshot(string)
    assert string.concat(malformed) == Error.INVALID_RANGE
    assert snapshot(string) == before


@pytest.mark.parametrize("index, expected", [(0, "€añ"), (1, "a€ñ"), (2, "añ€")])
def test_insert(index, expected):
    string = ZString("añ")
    assert string.insert("€", index) == Error.NONE
    assert string == expected


def test_insert_out_of_range():
    string = ZString("héllo")
    before = snapshot(string)
    assert string.insert("x", string.len() + 1) == Error.INVALID_RANGE
    assert string.insert("x", -1) == Error.INVALID_RANGE
    assert string.insert(b"\xc0\xaf", 0) == Error.INVALID_RANGE
    assert snapshot(string) == before


@pytest.mark.parametrize("seed_value", SEED_VALUES)
def test_insert_length_relation(seed_value: int):
    rng = random.Random(seed_value)
    for _ in range(20):
        native = get_random_text(rng=rng)
        addition = get_random_text(rng=rng, length=rng.randint(0, 8))
        string = ZString(native)
        index = rng.randint(0, len(native))
        size_before = string.size
        assert string.insert(addition, index) == Error.NONE
        assert string.len() == len(native) + len(addition)
        assert string.size == size_before + len(addition.encode("utf-8"))
        assert str(string) == native[:index] + addition + native[index:]


@pytest.mark.parametrize("seed_value", SEED_VALUES)
def test_insert_remove_range_inverse(seed_value: int):
    rng = random.Random(seed_value)
    for _ in range(20):
        native = get_random_text(rng=rng)
        addition = get_random_text(rng=rng, length=rng.randint(0, 8))
        string = ZString(native)
        index = rng.randint(0, len(native))
        assert string.insert(addition, index) == Error.NONE
        assert string.remove_range(index, index + len(addition)) == Error.NONE
        assert string == native


def test_insert_failure_atomicity():
    allocator = SwitchAllocator()
    string = ZString("héllo", allocator=allocator)
    view = string.char_at(1)
    before = snapshot(string)
    allocator.failing = True
    assert string.insert(" wörld", 2) == Error.OUT_OF_MEMORY
    assert snapshot(string) == before
    assert view.is_valid()
    assert view == "é"


@pytest.mark.parametrize(
    "operation",
    [
        lambda s: s.concat("x"),
        lambda s: s.insert("x", 0),
        lambda s: s.insert("€", 3),
        lambda s: s.repeat(1),
        lambda s: s.allocate(7),
    ],
)
def test_failure_atomicity(operation):
    string = ZString("héllo", allocator=LimitedAllocator(6))
    before = snapshot(string)
    assert operation(string) == Error.OUT_OF_MEMORY
    assert snapshot(string) == before


def test_remove():
    string = ZString("a€b")
    assert string.remove(1) == Error.NONE
    assert string == "ab"
    assert string.size == 2
    assert string.remove(2) == Error.INVALID_RANGE
    assert string.remove(-1) == Error.INVALID_RANGE
    assert string == "ab"


def test_remove_range():
    string = ZString("héllo wörld")
    assert string.remove_range(3, 1) == Error.INVALID_RANGE
    assert string.remove_range(0, 12) == Error.INVALID_RANGE
    assert string.remove_range(-1, 2) == Error.INVALID_RANGE
    assert string.remove_range(4, 4) == Error.NONE
    assert string == "héllo wörld"
    assert string.remove_range(1, 7) == Error.NONE
    assert string == "hörld"
    assert string.remove_range(0, string.len()) == Error.NONE
    assert string.is_empty()


def test_pop():
    string = ZString("añ€")
    popped = string.pop()
    assert popped == "€"
    assert len(popped) == 3
    assert string == "añ"
    assert string.size == 3

    assert string.concat("x") == Error.NONE
    assert not popped.is_valid()
    with pytest.raises(StaleViewError):
        bytes(popped)


def test_pop_until_empty():
    native = "a😀é"
    string = ZString(native)
    popped = []
    while True:
        view = string.pop()
        if view is None:
            break
        popped.append(str(view))
    assert popped == list(reversed(native))
    assert string.pop() is None


def test_trim_scenario():
    string = ZString(" a ")
    string.trim(" \t\n")
    assert string == "a"
    assert string.len() == 1


def test_trim_default_whitespace():
    native = "  \t\n héllo wörld \r\f\v  "
    string = ZString(native)
    string.trim()
    assert str(string) == native.strip()


def test_trim_start_and_end():
    string = ZString("€€a€b€€")
    string.trim_start("€")
    assert string == "a€b€€"
    string.trim_end("€")
    assert string == "a€b"


def test_trim_matches_whole_codepoints():
    # "é" and "ã" share their lead byte, a byte-wise whitelist would confuse them
    string = ZString("ãaã")
    string.trim("é")
    assert string == "ãaã"
    string.trim("ã")
    assert string == "a"


def test_trim_everything():
    string = ZString("  ")
    string.trim()
    assert string.is_empty()
    string.trim()
    assert string.is_empty()


@pytest.mark.parametrize("native", ["", "a", "añ€😀", "héllo wörld"])
def test_reverse(native):
    string = ZString(native)
    string.reverse()
    assert str(string) == native[::-1]
    string.reverse()
    assert str(string) == native


@pytest.mark.parametrize("seed_value", SEED_VALUES)
def test_reverse_involution(seed_value: int):
    rng = random.Random(seed_value)
    for _ in range(20):
        native = get_random_text(rng=rng)
        string = ZString(native)
        string.reverse()
        assert string.size == len(native.encode("utf-8"))
        string.reverse()
        assert string == native


def test_repeat():
    string = ZString("añ")
    assert string.repeat(0) == Error.NONE
    assert string == "añ"
    assert string.repeat(2) == Error.NONE
    assert string == "añañañ"
    assert string.len() == 6
    assert string.repeat(-1) == Error.INVALID_RANGE
    assert string == "añañañ"

    empty = ZString()
    assert empty.repeat(5) == Error.NONE
    assert empty.is_empty()


def test_case_conversion_is_ascii_only():
    string = ZString("Héllo WÖRLD 123")
    string.to_lowercase()
    assert string == "héllo wÖrld 123"
    string.to_uppercase()
    assert string == "HéLLO WÖRLD 123"


# endregion

# region Search & Split


def test_find():
    string = ZString("héllo wörld")
    assert string.find("wörld") == 6
    assert string.find("h") == 0
    assert string.find("ö") == 7
    assert string.find("xyz") == zs.NOT_FOUND
    assert string.find("") == 0
    assert string.find(b"\xc3") == zs.NOT_FOUND
    assert ZString().find("a") == zs.NOT_FOUND


@pytest.mark.parametrize("seed_value", SEED_VALUES)
def test_find_reports_codepoint_index(seed_value: int):
    rng = random.Random(seed_value)
    for _ in range(20):
        native = get_random_text(rng=rng, length=rng.randint(1, 64))
        start = rng.randint(0, len(native) - 1)
        needle = native[start : rng.randint(start + 1, len(native))]
        assert ZString(native).find(needle) == native.find(needle)


@pytest.mark.parametrize(
    "native, delimiters",
    [
        ("a,b,c", ","),
        ("a,,b", ","),
        (",a,", ","),
        ("a,b;c d", ",; "),
        ("1€2€€3", "€"),
        ("abc", ","),
        ("", ","),
    ],
)
def test_split_yields_empty_tokens(native, delimiters):
    expected = re.split("|".join(map(re.escape, delimiters)), native)
    string = ZString(native)
    assert [str(token) for token in string.tokens(delimiters)] == expected
    for index, token in enumerate(expected):
        assert str(string.split(delimiters, index)) == token
    assert string.split(delimiters, len(expected)) is None
    assert string.split(delimiters, -1) is None


def test_split_without_delimiters():
    string = ZString("a,b")
    assert str(string.split("", 0)) == "a,b"
    assert string.split("", 1) is None


def test_split_to_zstring():
    string = ZString("héllo wörld")
    token, error = string.split_to_zstring(" ", 1)
    assert error == Error.NONE
    assert token == "wörld"
    string.clear()
    assert token == "wörld"
    assert token.capacity == token.size

    missing, error = string.split_to_zstring(" ", 5)
    assert missing is None
    assert error == Error.NONE


def test_split_to_zstring_out_of_memory():
    allocator = SwitchAllocator()
    string = ZString("a b", allocator=allocator)
    allocator.failing = True
    token, error = string.split_to_zstring(" ", 0)
    assert token is None
    assert error == Error.OUT_OF_MEMORY


def test_substr():
    string = ZString("héllo wörld")
    part, error = string.substr(1, 5)
    assert error == Error.NONE
    assert part == "éllo"

    empty, error = string.substr(2, 2)
    assert error == Error.NONE
    assert empty.is_empty()

    assert string.substr(3, 1) == (None, Error.INVALID_RANGE)
    assert string.substr(0, 12) == (None, Error.INVALID_RANGE)


# endregion

# region Iteration


def test_iterator():
    native = "añ€😀"
    string = ZString(native)
    iterator = string.iterator()
    for char in native:
        view = iterator.next()
        assert str(view) == char
    assert iterator.next() is None
    assert iterator.next() is None


def test_iterators_are_independent():
    string = ZString("ab")
    first, second = string.iterator(), string.iterator()
    assert first.next() == "a"
    assert first.next() == "b"
    assert second.next() == "a"
    assert list(map(str, string)) == ["a", "b"]


def test_iterator_detects_mutation():
    string = ZString("abc")
    iterator = iter(string)
    assert next(iterator) == "a"
    string.concat("d")
    with pytest.raises(StaleViewError):
        next(iterator)


def test_empty_iteration():
    assert list(ZString()) == []
    assert ZString().iterator().next() is None


# endregion

# region Comparison, Cloning, Accessors


def test_cmp():
    string = ZString("abc")
    assert string.cmp("abc") == 0
    assert string.cmp("abd") < 0
    assert string.cmp("abb") > 0
    assert string.cmp("ab") > 0
    assert string.cmp("abcd") < 0
    assert string.cmp(b"abc") == 0
    assert ZString("é").cmp("z") > 0
    assert ZString().cmp("") == 0


def test_clone_independence():
    original = ZString("héllo")
    copy, error = original.clone()
    assert error == Error.NONE
    assert copy.cmp(bytes(original)) == 0
    assert copy.capacity == copy.size

    copy.concat(" wörld")
    copy.reverse()
    assert original == "héllo"
    assert original.size == 6


def test_clone_out_of_memory():
    allocator = SwitchAllocator()
    string = ZString("abc", allocator=allocator)
    allocator.failing = True
    assert string.clone() == (None, Error.OUT_OF_MEMORY)
    assert string == "abc"


def test_to_owned():
    string = ZString("héllo")
    owned, error = string.to_owned()
    assert error == Error.NONE
    assert owned == "héllo".encode("utf-8")
    owned[0] = ord("j")
    assert string == "héllo"
    string.clear()
    assert owned == "jéllo".encode("utf-8")


def test_to_owned_out_of_memory():
    allocator = SwitchAllocator()
    string = ZString("abc", allocator=allocator)
    allocator.failing = True
    assert string.to_owned() == (None, Error.OUT_OF_MEMORY)


def test_views_go_stale():
    string = ZString("héllo")
    view = string.str()
    assert view == "héllo"
    assert view.is_valid()
    string.to_uppercase()
    assert not view.is_valid()
    assert repr(view) == "zs.View(<stale>)"
    with pytest.raises(StaleViewError):
        str(view)
    with pytest.raises(StaleViewError):
        view.memoryview()


def test_view_memoryview_is_read_only():
    string = ZString("héllo")
    window = string.str().memoryview()
    assert window.readonly
    assert window.tobytes() == "héllo".encode("utf-8")


@pytest.mark.skipif(not numpy_available, reason="NumPy is not installed")
def test_view_buffer_protocol():
    """Tests weather views can be wrapped by NumPy without copies."""
    string = ZString("héllo")
    array = np.frombuffer(string.str().memoryview(), dtype=np.uint8)
    assert array.shape == (string.size,)
    assert array.tolist() == list("héllo".encode("utf-8"))

    token = string.char_at(1)
    array = np.frombuffer(token.memoryview(), dtype=np.uint8)
    assert bytes(array) == "é".encode("utf-8")


def test_error_raise_for_error():
    Error.NONE.raise_for_error()
    with pytest.raises(ZStringError) as excinfo:
        Error.OUT_OF_MEMORY.raise_for_error()
    assert excinfo.value.error == Error.OUT_OF_MEMORY
    assert isinstance(excinfo.value, ValueError)


# endregion
