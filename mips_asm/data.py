"""
Data segment encoder.

Lays the .word and .space directives of the data section out as words
following the instruction stream, in the same order pass 1 counted them.
"""

from typing import Dict, Sequence

from .parser import parse_immediate
from .symbols import LineKind, SourceLine, SymbolTable


def encode_data(lines: Sequence[SourceLine], symbols: SymbolTable) -> Dict[int, int]:
    """
    Encode the data segment.

    Args:
        lines: Lines classified by pass 1
        symbols: Symbol table from pass 1

    Returns:
        Mapping of word address to 32-bit value, starting at the .data address
    """
    words: Dict[int, int] = {}
    address = symbols.data_address

    for line in lines:
        if line.kind is not LineKind.LABEL or not line.in_data:
            continue
        if line.directive not in (".word", ".space"):
            continue
        # Only a label bound inside the data segment introduces data
        if line.label is not None and symbols.lookup(line.label) < symbols.data_address:
            continue

        if line.directive == ".word":
            for value in line.tokens[1:]:
                words[address] = parse_immediate(value) & 0xFFFFFFFF
                address += 1
        else:
            for _ in range(parse_immediate(line.tokens[1])):
                words[address] = 0
                address += 1

    return words
