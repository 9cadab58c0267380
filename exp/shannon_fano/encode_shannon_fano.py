#!/usr/bin/env python3
import argparse
import os
import sys
from typing import Dict, List, Optional

from file_utils import (
    CODEBOOK_SUFFIX,
    COMPRESSED_SUFFIX,
    FileAccessError,
    read_file,
    write_file,
    write_json,
)
from shannon_fano_utils import CodeTable, Pair, code_to_string, encode_bytes, shannon_fano_codes


LAYOUT = "bitstream_shannon_fano"


def build_codebook_meta(name: str, num_bytes: int, packed: bytes, pairs: List[Pair], codes: CodeTable) -> Dict:
    return {
        "layout": LAYOUT,
        "source_file": name,
        "compressed_file": name + COMPRESSED_SUFFIX,
        "num_bytes": num_bytes,
        "compressed_bytes": len(packed),
        "padding_bits": packed[0],
        "frequencies": [[sym, count] for sym, count in pairs],
        "codes": {str(sym): code_to_string(codes[sym]) for sym, _ in pairs},
    }


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Shannon-Fano encode files with a JSON codebook sidecar.")
    parser.add_argument("files", nargs="+", help="Input files.")
    parser.add_argument("--out-dir", default="", help="Output directory (default: next to each input).")
    parser.add_argument("--overwrite", action="store_true")
    args = parser.parse_args(argv)

    encoded = 0
    skipped = 0
    errors = 0

    if args.out_dir:
        os.makedirs(args.out_dir, exist_ok=True)

    for path in args.files:
        name = os.path.basename(path)
        dst_dir = args.out_dir or os.path.dirname(path)
        packed_path = os.path.join(dst_dir, name + COMPRESSED_SUFFIX)
        meta_path = os.path.join(dst_dir, name + CODEBOOK_SUFFIX)

        if not args.overwrite and os.path.exists(meta_path):
            skipped += 1
            continue

        try:
            data = read_file(path)
        except FileAccessError as exc:
            print(exc, file=sys.stderr)
            errors += 1
            continue
        if not data:
            print(f"Skip {path}: nothing to do (file is empty)", file=sys.stderr)
            skipped += 1
            continue

        pairs, codes = shannon_fano_codes(data)
        packed = encode_bytes(data, codes)
        try:
            write_file(packed_path, packed)
            write_json(meta_path, build_codebook_meta(name, len(data), packed, pairs, codes))
        except (FileAccessError, OSError) as exc:
            print(f"Error {path}: {exc}", file=sys.stderr)
            errors += 1
            continue
        encoded += 1

    print(f"Encoded: {encoded}")
    print(f"Skipped: {skipped}")
    if errors:
        print(f"Errors: {errors}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
