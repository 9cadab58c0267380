#!/usr/bin/env python3
import argparse
import sys
from typing import List, Optional

from file_utils import (
    COMPRESSED_SUFFIX,
    EXIT_MISMATCH,
    EXIT_USAGE,
    UNCOMPRESSED_SUFFIX,
    FileAccessError,
    read_file,
    write_file,
)
from report_utils import format_code_table
from shannon_fano_utils import decode_bytes, encode_bytes, shannon_fano_codes


PROG_USAGE = "shannon-fano [file]..."
USAGE = "Usage: " + PROG_USAGE


def process_file(path: str, verify: bool) -> int:
    data = read_file(path)
    if not data:
        print("Nothing to do (file is empty)")
        return 0

    pairs, codes = shannon_fano_codes(data)
    for line in format_code_table(path, pairs, codes):
        print(line)

    compressed_path = path + COMPRESSED_SUFFIX
    write_file(compressed_path, encode_bytes(data, codes))
    packed = read_file(compressed_path)
    restored = decode_bytes(packed, codes)
    write_file(path + UNCOMPRESSED_SUFFIX, restored)

    if verify and restored != data:
        print(f'Roundtrip mismatch for "{path}"', file=sys.stderr)
        return EXIT_MISMATCH
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Build a Shannon-Fano code per file, then compress and decompress it.",
        usage=PROG_USAGE,
    )
    parser.add_argument("files", nargs="*", help="Input files.")
    parser.add_argument("--keep-going", action="store_true", help="Continue with the next file after an error.")
    parser.add_argument("--verify", action="store_true", help="Compare decompressed bytes with the input.")
    args = parser.parse_args(argv)

    if not args.files:
        print(USAGE)
        return EXIT_USAGE

    status = 0
    for path in args.files:
        try:
            code = process_file(path, args.verify)
        except FileAccessError as exc:
            print(exc, file=sys.stderr)
            code = exc.exit_code
        if code:
            status = code
            if not args.keep_going:
                return status
    return status


if __name__ == "__main__":
    raise SystemExit(main())
