"""
Main assembler implementation.

Two-pass assembler for a MIPS subset to hex output.
"""

from typing import Dict, List, Sequence, Tuple
import sys

from .symbols import LineKind, SourceLine, SymbolTable, build_symbol_table
from .instructions import get_instruction
from .encoder import encode_instruction
from .data import encode_data
from .decoder import decode_word
from .formatter import format_word, format_words
from .errors import AssemblerError, UnknownInstructionError


class Assembler:
    """
    Two-pass MIPS assembler.

    Pass 1: Classify lines, collect labels and compute addresses
    Pass 2: Encode instructions with resolved labels
    Pass 3: Append the data segment after the instructions
    """

    def __init__(self, verbose: bool = False, strict: bool = False):
        """
        Initialize the assembler.

        Args:
            verbose: If True, log pass progress to stderr
            strict: If True, reject immediates that do not fit their field
                instead of truncating them
        """
        self.verbose = verbose
        self.strict = strict
        self.lines: List[SourceLine] = []
        self.symbols: SymbolTable = None
        self.words: Dict[int, int] = {}  # address -> 32-bit word
        self.diagnostics: List[AssemblerError] = []
        self.source_map: List[Tuple[int, str, int]] = []  # (addr, original_line, line_num)

    def log(self, message: str) -> None:
        """Print message if verbose mode is enabled."""
        if self.verbose:
            print(message, file=sys.stderr)

    def assemble_file(self, input_path: str, output_path: str = None) -> Dict[int, int]:
        """
        Assemble an assembly file to hex output.

        Args:
            input_path: Path to input .s/.asm file
            output_path: Path to output .hex file (optional)

        Returns:
            Mapping of word address to 32-bit word
        """
        self.log(f"Assembling: {input_path}")
        with open(input_path, "r", encoding="utf-8") as f:
            source = f.read()

        self.assemble_string(source)

        if output_path:
            self.write_hex(output_path)
            self.log(f"Output written to: {output_path}")

        return self.words

    def assemble_string(self, source: str) -> Dict[int, int]:
        """
        Assemble from a string.

        Args:
            source: Assembly source code

        Returns:
            Mapping of word address to 32-bit word
        """
        return self.assemble_lines(source.splitlines())

    def assemble_lines(self, raw_lines: Sequence[str]) -> Dict[int, int]:
        """Run all passes over a sequence of source lines."""
        self.words = {}
        self.diagnostics = []
        self.source_map = []

        self.lines, self.symbols = self._pass1(raw_lines)
        text = self._pass2(self.lines, self.symbols)
        data = self._pass3(self.lines, self.symbols)

        words = dict(text)
        words.update(data)
        self.words = words
        return self.words

    def _pass1(self, raw_lines: Sequence[str]) -> Tuple[List[SourceLine], SymbolTable]:
        """
        First pass: Classify lines and collect labels.
        """
        self.log("\n=== Pass 1: Collecting labels ===")
        lines, symbols = build_symbol_table(raw_lines)

        for label, address in symbols.items():
            self.log(f"  Label '{label}' at {address}")
        self.log(f"  Total symbols: {len(symbols)}")
        self.log(f"  Data segment starts at: {symbols.data_address}")
        return lines, symbols

    def _pass2(self, lines: Sequence[SourceLine], symbols: SymbolTable) -> Dict[int, int]:
        """
        Second pass: Encode instructions with resolved labels.

        Unknown mnemonics are recorded in ``diagnostics`` and leave their
        address empty; every other error aborts the pass.
        """
        self.log("\n=== Pass 2: Encoding instructions ===")
        words: Dict[int, int] = {}

        for line in lines:
            if line.kind is not LineKind.INSTRUCTION:
                continue

            mnemonic = line.tokens[0].lower()
            operands = list(line.tokens[1:])
            source = line.text.strip()

            instr = get_instruction(mnemonic)
            if instr is None:
                error = UnknownInstructionError(
                    f"Unknown instruction '{line.tokens[0]}' at address {line.address}",
                    line.line_num,
                    source,
                    address=line.address,
                )
                self.diagnostics.append(error)
                self.log(f"  {line.address:4d}: ????????  {source}")
                continue

            try:
                encoded = encode_instruction(
                    instr, mnemonic, operands, symbols, line.address, strict=self.strict
                )
            except AssemblerError as e:
                raise e.at_line(line.line_num, source) from e

            words[line.address] = encoded
            self.source_map.append((line.address, line.text, line.line_num))
            self.log(f"  {line.address:4d}: {format_word(encoded)}  {source}")

        self.log(f"\n  Total instructions: {len(words)}")
        return words

    def _pass3(self, lines: Sequence[SourceLine], symbols: SymbolTable) -> Dict[int, int]:
        """
        Third pass: Lay out the data segment after the instructions.
        """
        self.log("\n=== Pass 3: Encoding data segment ===")
        words = encode_data(lines, symbols)
        self.log(f"  Total data words: {len(words)}")
        return words

    def write_hex(self, output_path: str) -> None:
        """
        Write assembled words to hex file.

        Args:
            output_path: Path to output file
        """
        with open(output_path, "w") as f:
            for line in format_words(self.words):
                f.write(f"{line}\n")

    def get_hex_string(self) -> str:
        """
        Get assembled words as a hex string.

        Returns:
            String with one hex word per line
        """
        return "\n".join(format_words(self.words))

    def get_listing(self) -> str:
        """
        Get an assembly listing showing addresses, encodings, and source.

        Data words are listed after the instructions, without source text.

        Returns:
            Formatted listing string
        """
        lines = []
        lines.append("Address   Code       Source")
        lines.append("-" * 60)

        for addr, source, line_num in self.source_map:
            code = self.words[addr]
            lines.append(f"{addr:7d}:  {format_word(code)}   {source.strip()}")

        for addr in sorted(self.words):
            if addr >= self.symbols.data_address:
                lines.append(f"{addr:7d}:  {format_word(self.words[addr])}   data {self.words[addr]}")

        return "\n".join(lines)

    def get_disassembly(self) -> str:
        """Decode every instruction word back to assembly text."""
        return "\n".join(
            f"{addr:7d}:  {decode_word(self.words[addr])}"
            for addr in sorted(self.words)
            if addr < self.symbols.data_address
        )
