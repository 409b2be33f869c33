#!/usr/bin/env python3

import sys, os
import argparse
import logging
from typing import Dict, List, Optional, Tuple, Union

import zstring
from zstring import ZString

logger = logging.getLogger("zs_wc")


def parse_arguments(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Print newline, word, and byte counts for each FILE, and a total line if more than one FILE is \
        specified. A word is a non-zero-length sequence of codepoints delimited by white space."
    )
    parser.add_argument("files", nargs="*", default=["-"], help="Files to process")
    parser.add_argument("-c", "--bytes", action="store_true", help="print the byte counts")
    parser.add_argument("-m", "--chars", action="store_true", help="print the codepoint counts")
    parser.add_argument("-l", "--lines", action="store_true", help="print the newline counts")
    parser.add_argument(
        "-L",
        "--max-line-length",
        action="store_true",
        help="print the length of the longest line, in codepoints",
    )
    parser.add_argument("-w", "--words", action="store_true", help="print the word counts")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details to standard error")
    parser.add_argument("--version", action="version", version=zstring.__version__)
    return parser.parse_args(argv)


def wc(file_path: str, args) -> Tuple[Union[Dict[str, int], str], bool]:
    try:
        if file_path == "-":
            contents = sys.stdin.buffer.read()
        else:
            with open(file_path, "rb") as f:
                contents = f.read()
    except FileNotFoundError:
        return f"No such file: {file_path}", False

    text, error = ZString.init_with_contents(contents)
    if error:
        return f"Cannot count {file_path}: {error.name}", False

    counts = {}
    if args.lines:
        counts["line_count"] = len(text.tokens("\n")) - 1
    if args.words:
        counts["word_count"] = sum(1 for word in text.tokens(zstring.WHITESPACE) if len(word))
    if args.chars:
        counts["char_count"] = text.len()
    if args.bytes:
        counts["byte_count"] = text.size
    if args.max_line_length:
        counts["max_line_length"] = max(zstring.len(line) for line in text.tokens("\n"))

    logger.debug("Counted %s: %s", file_path, counts)
    text.deinit()
    return counts, True


def format_output(counts: Dict[str, int], args, just: int) -> str:
    selected_counts = []
    if args.lines:
        selected_counts.append(counts["line_count"])
    if args.words:
        selected_counts.append(counts["word_count"])
    if args.chars:
        selected_counts.append(counts["char_count"])
    if args.bytes:
        selected_counts.append(counts["byte_count"])
    if args.max_line_length:
        selected_counts.append(counts.get("max_line_length", 0))

    return " ".join(str(count).rjust(just) for count in selected_counts)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_arguments(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, stream=sys.stderr)
    total_counts = {
        "line_count": 0,
        "word_count": 0,
        "char_count": 0,
        "max_line_length": 0,
        "byte_count": 0,
    }
    if not any([args.lines, args.words, args.chars, args.bytes, args.max_line_length]):
        args.lines = True
        args.words = True
        args.bytes = True

    # wc uses the file size to determine column width when printing
    sizes = [os.stat(fn).st_size for fn in args.files if fn != "-" and os.path.isfile(fn)]
    just = max((len(str(size)) for size in sizes), default=1)

    status = 0
    for file_path in args.files:
        counts, success = wc(file_path, args)
        if success:
            for key in total_counts.keys():
                if key == "max_line_length":
                    total_counts[key] = max(total_counts[key], counts.get(key, 0))
                else:
                    total_counts[key] += counts.get(key, 0)
            print(format_output(counts, args, just) + f" {file_path}")
        else:
            print(counts, file=sys.stderr)
            status = 1

    if len(args.files) > 1:
        print(format_output(total_counts, args, just) + " total")
    return status


if __name__ == "__main__":
    sys.exit(main())
