#!/usr/bin/env python3
import argparse
import os
import sys
from typing import Dict, List, Optional

from file_utils import UNCOMPRESSED_SUFFIX, FileAccessError, load_json, read_file, write_file
from shannon_fano_utils import CodeTable, build_code_table, code_from_string, decode_bytes, is_prefix_free


def load_code_table(meta: Dict) -> CodeTable:
    if not isinstance(meta, dict):
        raise ValueError("Codebook is not a JSON object.")
    codes_meta = meta.get("codes")
    freqs_meta = meta.get("frequencies")
    if codes_meta:
        if not isinstance(codes_meta, dict):
            raise ValueError("Codebook codes must be an object.")
        if not all(isinstance(text, str) for text in codes_meta.values()):
            raise ValueError("Codebook codes must be strings.")
        codes = {int(sym): code_from_string(text) for sym, text in codes_meta.items()}
    elif freqs_meta:
        if not isinstance(freqs_meta, list) or not all(isinstance(p, list) and len(p) == 2 for p in freqs_meta):
            raise ValueError("Codebook frequencies must be a list of [symbol, count] pairs.")
        # Same input order and counts give the same table
        codes = build_code_table([(int(sym), int(count)) for sym, count in freqs_meta])
    else:
        raise ValueError("Codebook has neither codes nor frequencies.")
    if any(sym < 0 or sym > 255 for sym in codes):
        raise ValueError("Codebook symbol out of byte range.")
    if not is_prefix_free(codes):
        raise ValueError("Codebook is not prefix-free.")
    return codes


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Decode Shannon-Fano bitstreams and optionally verify exact match.")
    parser.add_argument("codebooks", nargs="+", help="Codebook JSON files written by the encoder.")
    parser.add_argument("--out-dir", default="", help="Output directory (default: next to each codebook).")
    parser.add_argument("--orig-dir", default="", help="Directory holding the original files (for verification).")
    parser.add_argument("--verify", action="store_true", help="Compare decoded bytes with the original files.")
    args = parser.parse_args(argv)

    checked = 0
    failed = 0

    if args.out_dir:
        os.makedirs(args.out_dir, exist_ok=True)

    for meta_path in args.codebooks:
        meta_dir = os.path.dirname(meta_path)
        try:
            meta = load_json(meta_path)
            codes = load_code_table(meta)
            packed = read_file(os.path.join(meta_dir, meta["compressed_file"]))
            data = decode_bytes(packed, codes)
            num_bytes = int(meta["num_bytes"]) if "num_bytes" in meta else len(data)
        except (FileAccessError, OSError, ValueError, TypeError, KeyError) as exc:
            print(f"Skip {meta_path}: {exc}", file=sys.stderr)
            failed += 1
            continue

        if len(data) != num_bytes:
            print(f"Length mismatch: {meta_path}: {len(data)} != {num_bytes}", file=sys.stderr)
            failed += 1
            continue

        name = meta.get("source_file") or os.path.basename(meta_path)
        out_path = os.path.join(args.out_dir or meta_dir, name + UNCOMPRESSED_SUFFIX)
        try:
            write_file(out_path, data)
        except FileAccessError as exc:
            print(exc, file=sys.stderr)
            failed += 1
            continue

        if args.verify:
            orig_path = os.path.join(args.orig_dir or meta_dir, name)
            try:
                orig = read_file(orig_path)
            except FileAccessError as exc:
                print(f"Missing original for {meta_path}: {exc}", file=sys.stderr)
                failed += 1
                continue
            if orig != data:
                print(f"Mismatch: {meta_path}", file=sys.stderr)
                failed += 1
                continue
        checked += 1

    print(f"Checked: {checked}, Failed: {failed}")
    return 0 if failed == 0 else 2


if __name__ == "__main__":
    raise SystemExit(main())
