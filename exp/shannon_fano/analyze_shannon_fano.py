#!/usr/bin/env python3
import argparse
import csv
import os
import sys
from typing import Dict, List, Optional

import zstandard as zstd

from file_utils import FileAccessError, read_file
from report_utils import format_code_table
from shannon_fano_utils import (
    CodeTable,
    Pair,
    average_code_length,
    encode_bytes,
    entropy_bits,
    shannon_fano_codes,
)


def ratio(raw: float, comp: float) -> float:
    return raw / comp if comp > 0 else 0.0


def zstd_ratio(data: bytes, level: int) -> float:
    if not data:
        return 0.0
    compressor = zstd.ZstdCompressor(level=level)
    return ratio(len(data), len(compressor.compress(data)))


def analyze_bytes(name: str, data: bytes, pairs: List[Pair], codes: CodeTable, zstd_level: int) -> Dict:
    packed = encode_bytes(data, codes)
    return {
        "file": name,
        "num_bytes": len(data),
        "symbols": len(pairs),
        "entropy_bits": entropy_bits(pairs),
        "avg_code_bits": average_code_length(pairs, codes),
        "max_code_bits": max(len(code) for code in codes.values()),
        "packed_bytes": len(packed),
        "padding_bits": packed[0],
        "sf_ratio": ratio(len(data), len(packed)),
        "zstd_ratio": zstd_ratio(data, zstd_level),
    }


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Analyze Shannon-Fano code efficiency and compression ratios.")
    parser.add_argument("files", nargs="+", help="Input files.")
    parser.add_argument("--out-dir", default="out", help="Output directory for CSV and summary.")
    parser.add_argument("--zstd-level", type=int, default=3, help="Zstd compression level for comparison.")
    parser.add_argument("--show-codes", action="store_true", help="Print the code table of every file.")
    args = parser.parse_args(argv)

    rows = []
    errors = 0
    for path in args.files:
        try:
            data = read_file(path)
        except FileAccessError as exc:
            print(exc, file=sys.stderr)
            errors += 1
            continue
        if not data:
            print(f"Skip {path}: nothing to do (file is empty)", file=sys.stderr)
            continue
        pairs, codes = shannon_fano_codes(data)
        if args.show_codes:
            for line in format_code_table(path, pairs, codes):
                print(line)
        rows.append(analyze_bytes(path, data, pairs, codes, args.zstd_level))

    if not rows:
        print("No rows to write.", file=sys.stderr)
        return 1

    os.makedirs(args.out_dir, exist_ok=True)
    csv_path = os.path.join(args.out_dir, "shannon_fano_metrics.csv")
    with open(csv_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
        writer.writeheader()
        writer.writerows(rows)

    raw_total = sum(r["num_bytes"] for r in rows)
    packed_total = sum(r["packed_bytes"] for r in rows)
    avg_entropy = sum(r["entropy_bits"] * r["num_bytes"] for r in rows) / raw_total
    avg_code = sum(r["avg_code_bits"] * r["num_bytes"] for r in rows) / raw_total

    summary_path = os.path.join(args.out_dir, "shannon_fano_summary.md")
    with open(summary_path, "w", encoding="utf-8") as f:
        f.write("# Shannon-Fano Summary\n\n")
        f.write(f"- Files analyzed: {len(rows)}\n")
        f.write(f"- Raw bytes: {raw_total}\n")
        f.write(f"- Packed bytes: {packed_total}\n")
        f.write(f"- Weighted entropy (bits/byte): {avg_entropy:.3f}\n")
        f.write(f"- Weighted code length (bits/byte): {avg_code:.3f}\n")
        f.write(f"- Weighted Shannon-Fano ratio: {ratio(raw_total, packed_total):.3f}\n")
        f.write(f"- Avg zstd ratio (level {args.zstd_level}): {sum(r['zstd_ratio'] for r in rows) / len(rows):.3f}\n")

    print(f"Wrote {csv_path}")
    print(f"Wrote {summary_path}")
    if errors:
        print(f"Errors: {errors}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
