"""
MIPS Assembler - A two-pass assembler for a MIPS subset.

This package translates MIPS assembly (16 mnemonics plus the .text, .data,
.word and .space directives) into 32-bit words rendered as hex text.
"""

__version__ = "1.0.0"

from .assembler import Assembler
from .errors import (
    AssemblerError,
    ParseError,
    EncodingError,
    RegisterError,
    SymbolError,
    UnresolvedSymbolError,
    UnknownInstructionError,
)

__all__ = [
    "Assembler",
    "AssemblerError",
    "ParseError",
    "EncodingError",
    "RegisterError",
    "SymbolError",
    "UnresolvedSymbolError",
    "UnknownInstructionError",
]
