#!/usr/bin/env python3
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np


Pair = Tuple[int, int]
Code = Tuple[int, ...]
CodeTable = Dict[int, Code]

MAX_PADDING = 7


def build_frequency_list(data: bytes) -> List[Pair]:
    if not data:
        raise ValueError("Empty input.")
    arr = np.frombuffer(data, dtype=np.uint8)
    symbols, first_seen, counts = np.unique(arr, return_index=True, return_counts=True)
    # Descending count, first occurrence breaks ties
    order = np.lexsort((first_seen, -counts))
    return [(int(symbols[i]), int(counts[i])) for i in order]


def balanced_mid(counts: Sequence[int], start: int = 0, end: Optional[int] = None) -> int:
    if end is None:
        end = len(counts)
    if end - start < 1:
        raise ValueError("Empty range.")
    if end - start < 2:
        return start
    total = sum(counts[start:end])
    left = 0
    best_mid = start
    best_diff = -1
    for i in range(start, end - 1):
        left += counts[i]
        diff = abs(left - (total - left))
        if best_diff < 0 or diff < best_diff:
            best_diff = diff
            best_mid = i
    return best_mid


def build_code_table(pairs: Sequence[Pair]) -> CodeTable:
    if not pairs:
        raise ValueError("Empty frequency list.")
    symbols = [sym for sym, _ in pairs]
    if len(set(symbols)) != len(symbols):
        raise ValueError("Duplicate symbol in frequency list.")
    counts = [count for _, count in pairs]
    codes: CodeTable = {}

    def walk(start: int, end: int, path: Code) -> None:
        if end - start == 1:
            codes[symbols[start]] = path
            return
        mid = balanced_mid(counts, start, end)
        walk(start, mid + 1, path + (0,))
        walk(mid + 1, end, path + (1,))

    if len(pairs) == 1:
        codes[symbols[0]] = (0,)
        return codes
    # The root has no bit of its own.
    mid = balanced_mid(counts)
    walk(0, mid + 1, (0,))
    walk(mid + 1, len(pairs), (1,))
    return codes


def shannon_fano_codes(data: bytes) -> Tuple[List[Pair], CodeTable]:
    pairs = build_frequency_list(data)
    return pairs, build_code_table(pairs)


def is_prefix_free(codes: CodeTable) -> bool:
    ordered = sorted(codes.values())
    for prev, cur in zip(ordered, ordered[1:]):
        if cur[:len(prev)] == prev:
            return False
    return all(len(code) > 0 for code in ordered)


def code_to_string(code: Iterable[int]) -> str:
    return "".join("1" if bit else "0" for bit in code)


def code_from_string(text: str) -> Code:
    if not text or any(ch not in "01" for ch in text):
        raise ValueError(f"Invalid code string: {text!r}")
    return tuple(1 if ch == "1" else 0 for ch in text)


def bits_to_bytes(bits: Sequence[int]) -> bytes:
    if len(bits) == 0:
        return b""
    arr = np.asarray(bits, dtype=np.uint8)
    return np.packbits(arr, bitorder="little").tobytes()


def bytes_to_bits(data: bytes, num_bits: Optional[int] = None) -> List[int]:
    arr = np.frombuffer(data, dtype=np.uint8)
    bits = np.unpackbits(arr, bitorder="little")
    if num_bits is None:
        return bits.tolist()
    if num_bits < 0 or num_bits > bits.size:
        raise ValueError(f"Requested {num_bits} bits from {bits.size} available.")
    return bits[:num_bits].tolist()


def encode_bytes(data: bytes, codes: CodeTable) -> bytes:
    bits: List[int] = []
    for sym in data:
        code = codes.get(sym)
        if code is None:
            raise ValueError(f"Symbol {sym} has no code in table.")
        bits.extend(code)
    packed = bits_to_bytes(bits)
    padding = len(packed) * 8 - len(bits)
    return bytes([padding]) + packed


def decode_bytes(packed: bytes, codes: CodeTable) -> bytes:
    if len(packed) < 1:
        raise ValueError("Data too short for Shannon-Fano decode.")
    padding = packed[0]
    if padding > MAX_PADDING:
        raise ValueError(f"Invalid padding header: {padding}")
    payload = packed[1:]
    num_bits = len(payload) * 8 - padding
    if num_bits < 0:
        raise ValueError("Padding exceeds payload.")
    bits = bytes_to_bits(payload, num_bits)

    code_list = [(list(code), sym) for sym, code in codes.items()]
    out = bytearray()
    pos = 0
    while pos < num_bits:
        for code, sym in code_list:
            end = pos + len(code)
            if end <= num_bits and bits[pos:end] == code:
                out.append(sym)
                pos = end
                break
        else:
            raise ValueError(f"Invalid bitstream: no matching code at bit {pos}.")
    return bytes(out)


def average_code_length(pairs: Sequence[Pair], codes: CodeTable) -> float:
    total = sum(count for _, count in pairs)
    if total <= 0:
        return 0.0
    return sum(count * len(codes[sym]) for sym, count in pairs) / total


def entropy_bits(pairs: Sequence[Pair]) -> float:
    if not pairs:
        return 0.0
    counts = np.array([count for _, count in pairs], dtype=np.float64)
    probs = counts / counts.sum()
    return float(-(probs * np.log2(probs)).sum())
