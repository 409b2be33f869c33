# /// script
# dependencies = [
#   "zstring"
# ]
# ///
"""
ZString search and edit operations benchmark script.

This script compares ZString operations against their closest native `str` peers:
- `str.find()` vs `ZString.find()`
- `str.split()` vs `ZString.tokens()` for a delimiter set
- `str.strip()` vs `ZString.trim()`
- slicing with a negative step vs `ZString.reverse()`

Example usage via UV:

    # Benchmark with a file
    uv run --no-project scripts/bench_find.py --haystack-path leipzig1M.txt

    # Benchmark with synthetic data
    uv run --no-project scripts/bench_find.py --haystack-pattern "héllo wörld " --haystack-length 1000000
"""

import argparse
import re
import random
import time
from typing import List

from zstring import ZString


def log(name: str, haystack, patterns, operator: callable):
    a = time.time_ns()
    for pattern in patterns:
        operator(haystack, pattern)
    b = time.time_ns()
    bytes_length = len(str(haystack).encode("utf-8")) * len(patterns)
    secs = (b - a) / 1e9
    mb_per_sec = bytes_length / (1e6 * max(secs, 1e-9))
    print(f"{name}: took {secs:.4f} seconds ~ {mb_per_sec:.3f} MB/s")


def split_regex(haystack: str, characters: str) -> int:
    return len(re.split(f"[{re.escape(characters)}]", haystack))


def split_sets(haystack: ZString, characters: str) -> int:
    return len(haystack.tokens(characters))


def strip_native(haystack: str, characters: str) -> str:
    return haystack.strip(characters)


def trim_copy(haystack: ZString, characters: str) -> ZString:
    copy, _ = haystack.clone()
    copy.trim(characters)
    return copy


def reverse_native(haystack: str, _) -> str:
    return haystack[::-1]


def reverse_copy(haystack: ZString, _) -> ZString:
    copy, _ = haystack.clone()
    copy.reverse()
    return copy


def log_functionality(tokens: List[str], pythonic_str: str, zstring_str: ZString):
    # Read-only Search
    log("str.find", pythonic_str, tokens, lambda haystack, token: haystack.find(token))
    log("ZString.find", zstring_str, tokens, lambda haystack, token: haystack.find(token))
    log("re.split", pythonic_str, [" \t\n\r"], split_regex)
    log("ZString.tokens", zstring_str, [" \t\n\r"], split_sets)

    # Copy & Modify
    log("str.strip", pythonic_str, [" \t\n\r"], strip_native)
    log("ZString.trim", zstring_str, [" \t\n\r"], trim_copy)
    log("str[::-1]", pythonic_str, [None], reverse_native)
    log("ZString.reverse", zstring_str, [None], reverse_copy)


def bench(
    haystack_path: str = None,
    haystack_pattern: str = None,
    haystack_length: int = None,
):
    """Run string search benchmarks."""
    if haystack_path:
        pythonic_str: str = open(haystack_path, "r", encoding="utf-8").read()
    else:
        haystack_length = int(haystack_length)
        repetitions = haystack_length // len(haystack_pattern)
        pythonic_str: str = haystack_pattern * repetitions

    zstring_str = ZString(pythonic_str)
    tokens = pythonic_str.split()
    total_tokens = len(tokens)
    mean_token_length = sum(len(t) for t in tokens) / total_tokens

    print(f"Prepared {total_tokens:,} tokens of {mean_token_length:.2f} mean length!")

    tokens = random.sample(tokens, min(100, total_tokens))
    log_functionality(tokens, pythonic_str, zstring_str)


_main_epilog = """
Examples:

  # Benchmark with a file
  %(prog)s --haystack-path leipzig1M.txt

  # Benchmark with synthetic data
  %(prog)s --haystack-pattern "héllo wörld " --haystack-length 1000000
"""


def main():
    """Main entry point with argument parsing."""
    parser = argparse.ArgumentParser(
        description="Benchmark ZString search and edit operations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=_main_epilog,
    )

    parser.add_argument("--haystack-path", help="Path to input file")
    parser.add_argument("--haystack-pattern", help="Pattern to repeat for synthetic data")
    parser.add_argument("--haystack-length", type=int, help="Length of synthetic haystack")

    args = parser.parse_args()

    if args.haystack_path:
        if args.haystack_pattern or args.haystack_length:
            parser.error("Cannot specify both --haystack-path and synthetic options")
    else:
        if not (args.haystack_pattern and args.haystack_length):
            parser.error("Must specify either --haystack-path or both --haystack-pattern and --haystack-length")

    bench(args.haystack_path, args.haystack_pattern, args.haystack_length)


if __name__ == "__main__":
    main()
