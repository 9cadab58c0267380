#!/usr/bin/env python3
from typing import List, Sequence

from shannon_fano_utils import CodeTable, Pair, code_to_string


LABEL_WIDTH = 6


def symbol_label(sym: int) -> str:
    # Printable ASCII without space, everything else by value
    if 33 <= sym <= 126:
        return f"'{chr(sym)}'"
    return f"[{sym}]"


def format_code_line(sym: int, code: Sequence[int]) -> str:
    return f"{symbol_label(sym).rjust(LABEL_WIDTH)}: {code_to_string(code)}"


def format_code_table(name: str, pairs: Sequence[Pair], codes: CodeTable) -> List[str]:
    lines = [f'Shannon-Fano code for "{name}":']
    for sym, _ in pairs:
        lines.append(format_code_line(sym, codes[sym]))
    lines.append("")
    return lines
