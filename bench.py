import time

import fire

from zstring import ZString


def log(name: str, bytes_length: int, operator: callable):
    a = time.time_ns()
    operator()
    b = time.time_ns()
    secs = (b - a) / 1e9
    mb_per_sec = bytes_length / (1e6 * max(secs, 1e-9))
    print(f"{name}: took {secs:} seconds ~ {mb_per_sec:.3f} MB/s")


def append_all(pieces, target):
    for piece in pieces:
        target.concat(piece)


def log_functionality(pattern: str, bytes_length: int, pythonic_str: str, zstring_str: ZString):
    log("str.__contains__", bytes_length, lambda: pattern in pythonic_str)
    log("ZString.__contains__", bytes_length, lambda: pattern in zstring_str)

    log("str.find", bytes_length, lambda: pythonic_str.find(pattern))
    log("ZString.find", bytes_length, lambda: zstring_str.find(pattern))

    log("str.split", bytes_length, lambda: pythonic_str.split(pattern))
    log("ZString.tokens", bytes_length, lambda: zstring_str.tokens(pattern))

    log("len(str)", bytes_length, lambda: len(pythonic_str))
    log("ZString.len", bytes_length, lambda: zstring_str.len())

    words = pythonic_str.split()
    log("ZString.concat", bytes_length, lambda: append_all(words, ZString()))


def bench(
    needle: str,
    haystack_path: str = None,
    haystack_pattern: str = None,
    haystack_length: int = None,
):
    if haystack_path:
        pythonic_str: str = open(haystack_path, "r", encoding="utf-8").read()
    else:
        haystack_length = int(haystack_length)
        repetitions = haystack_length // len(haystack_pattern)
        pythonic_str: str = haystack_pattern * repetitions

    zstring_str = ZString(pythonic_str)

    log_functionality(needle, zstring_str.size, pythonic_str, zstring_str)


if __name__ == "__main__":
    fire.Fire(bench)
