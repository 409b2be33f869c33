#!/usr/bin/env python3

import argparse
import logging
import sys
from typing import List, Optional, TextIO

import zstring
from zstring import Error, ZString

logger = logging.getLogger("zs_split")


def parse_arguments(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Split FILE on any of the DELIMITERS codepoints and print the tokens, one per line."
    )
    parser.add_argument("file", nargs="?", default="-", help='File to process, "-" for standard input')
    parser.add_argument(
        "-t",
        "--delimiters",
        default="\n",
        help="Set of delimiter codepoints, default is newline; '\\0' (zero) specifies the NUL character",
    )
    parser.add_argument(
        "-i",
        "--index",
        type=int,
        default=None,
        help="Print only the token at this position",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details to standard error")
    parser.add_argument("--version", action="version", version=zstring.__version__)
    return parser.parse_args(argv)


def read_contents(file_path: str) -> bytes:
    if file_path == "-":
        return sys.stdin.buffer.read()
    with open(file_path, "rb") as f:
        return f.read()


def split_file(file_path: str, delimiters: str, index: Optional[int], output: Optional[TextIO] = None) -> int:
    output = output or sys.stdout
    if delimiters == "\\0":
        delimiters = "\0"
    try:
        contents = read_contents(file_path)
    except FileNotFoundError:
        print(f"No such file: {file_path}", file=sys.stderr)
        return 1

    text, error = ZString.init_with_contents(contents)
    if error == Error.INVALID_RANGE:
        print(f"Not valid UTF-8: {file_path}", file=sys.stderr)
        return 1
    if error:
        print(f"Could not load {file_path}: {error.name}", file=sys.stderr)
        return 1
    logger.debug("Loaded %d bytes, %d codepoints from %s", text.size, text.len(), file_path)

    if index is not None:
        token = text.split(delimiters, index)
        if token is None:
            print(f"No token at index {index}", file=sys.stderr)
            return 1
        print(token, file=output)
        return 0

    for token in text.tokens(delimiters):
        print(token, file=output)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_arguments(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, stream=sys.stderr)
    return split_file(args.file, args.delimiters, args.index)


if __name__ == "__main__":
    sys.exit(main())
