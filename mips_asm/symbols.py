"""
Symbol table and first assembler pass.

Pass 1 classifies every source line, gives each instruction line its word
address and binds each label to the address it names. Labels in the text
section name the next instruction; labels in the data section name a word
of the data segment, which is laid out after the last instruction.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .errors import ParseError, SymbolError, UnresolvedSymbolError
from .parser import (
    INSTRUCTION_DELIMITERS,
    LABEL_DELIMITERS,
    defined_label,
    is_integer_literal,
    is_label_line,
    parse_immediate,
    split_line,
    strip_comments,
)

DATA_SYMBOL = ".data"

# Directives accepted for compatibility but without effect on the output
IGNORED_DIRECTIVES = (".globl", ".global")


class LineKind(Enum):
    """Classification of a source line."""

    BLANK = auto()  # Empty or comment-only
    LABEL = auto()  # Label and/or directive, occupies no instruction address
    INSTRUCTION = auto()


@dataclass(frozen=True)
class SourceLine:
    """
    A source line as classified by pass 1.

    Attributes:
        index: 0-based position in the source
        text: Original line text
        kind: Line classification
        label: Label defined or reused on this line (if any)
        tokens: Directive and arguments, or mnemonic and operands
        address: Word address (instruction lines only)
        in_data: True if the line lies in the data section
    """

    index: int
    text: str
    kind: LineKind
    label: Optional[str] = None
    tokens: Tuple[str, ...] = ()
    address: Optional[int] = None
    in_data: bool = False

    @property
    def line_num(self) -> int:
        return self.index + 1

    @property
    def directive(self) -> Optional[str]:
        if self.tokens and self.tokens[0].startswith("."):
            return self.tokens[0].lower()
        return None


class SymbolTable(Mapping):
    """
    Read-only mapping from label name to word address.

    The ``.data`` key is always present and holds the address where the
    data segment begins.
    """

    def __init__(self, entries: Mapping):
        if DATA_SYMBOL not in entries:
            raise ValueError(f"Symbol table requires a '{DATA_SYMBOL}' entry")
        self._entries = MappingProxyType(dict(entries))

    def __getitem__(self, name: str) -> int:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"SymbolTable({dict(self._entries)!r})"

    @property
    def data_address(self) -> int:
        return self._entries[DATA_SYMBOL]

    def lookup(self, name: str) -> int:
        """Return the address of a label, raising UnresolvedSymbolError if undefined."""
        try:
            return self._entries[name]
        except KeyError:
            raise UnresolvedSymbolError(f"Undefined label: {name}") from None

    def data_offset(self, name: str) -> int:
        """Return a label's distance, in words, from the start of the data segment."""
        return self.lookup(name) - self.data_address


def directive_size(directive: str, args: Sequence[str]) -> int:
    """
    Return the number of data words a .word or .space directive occupies.

    Raises:
        ParseError: If the directive arguments are malformed
    """
    if directive == ".word":
        if not args:
            raise ParseError("'.word' requires at least one value")
        for value in args:
            parse_immediate(value)
        return len(args)

    if directive == ".space":
        if len(args) != 1 or not is_integer_literal(args[0]):
            raise ParseError(
                f"'.space' requires one numeric argument, got: {' '.join(args) or 'nothing'}"
            )
        count = parse_immediate(args[0])
        if count < 0:
            raise ParseError(f"'.space' size must not be negative, got {count}")
        return count

    raise ParseError(f"Unsupported directive: {directive}")


def build_symbol_table(
    raw_lines: Sequence[str],
) -> Tuple[List[SourceLine], SymbolTable]:
    """
    Run pass 1 over the source.

    Args:
        raw_lines: Source lines in file order

    Returns:
        Tuple of (classified lines, symbol table)
    """
    lines: List[SourceLine] = []
    text_labels: Dict[str, int] = {}
    data_labels: Dict[str, int] = {}  # label -> word offset within the data segment
    address = 0
    data_offset = 0
    in_data = False

    for index, raw in enumerate(raw_lines):
        text = strip_comments(raw).strip()
        if not text:
            lines.append(SourceLine(index, raw, LineKind.BLANK, in_data=in_data))
            continue

        known = text_labels.keys() | data_labels.keys()

        if not is_label_line(text, known):
            tokens = tuple(split_line(text, INSTRUCTION_DELIMITERS))
            lines.append(
                SourceLine(index, raw, LineKind.INSTRUCTION, None, tokens, address, in_data)
            )
            address += 1
            continue

        try:
            label, body = _split_label(text, known)

            if label is not None and label not in known:
                if in_data:
                    data_labels[label] = data_offset
                else:
                    text_labels[label] = address

            # "label: mnemonic operands" in the text section
            if body and not body.startswith("."):
                if in_data:
                    raise ParseError("Instruction cannot share a line with a data label")
                tokens = tuple(split_line(body, INSTRUCTION_DELIMITERS))
                lines.append(
                    SourceLine(index, raw, LineKind.INSTRUCTION, label, tokens, address)
                )
                address += 1
                continue

            tokens = tuple(split_line(body, LABEL_DELIMITERS))
            directive = tokens[0].lower() if tokens else None

            if directive == ".data":
                in_data = True
            elif directive == ".text":
                in_data = False
            elif directive in (".word", ".space"):
                if not in_data:
                    raise ParseError(f"'{directive}' outside of the .data section")
                if label in text_labels:
                    raise ParseError(f"Label '{label}' belongs to the .text section")
                data_offset += directive_size(directive, tokens[1:])
            elif directive is not None and directive not in IGNORED_DIRECTIVES:
                raise ParseError(f"Unsupported directive: {tokens[0]}")

        except (ParseError, SymbolError) as e:
            raise e.at_line(index + 1, raw.strip()) from e

        lines.append(SourceLine(index, raw, LineKind.LABEL, label, tokens, None, in_data))

    # The data segment follows the last instruction
    symbols = dict(text_labels)
    for label, offset in data_labels.items():
        symbols[label] = address + offset
    symbols[DATA_SYMBOL] = address

    return lines, SymbolTable(symbols)


def _split_label(text: str, known) -> Tuple[Optional[str], str]:
    """
    Separate a leading label from the rest of a label/directive line.

    Returns:
        Tuple of (label or None, remaining statement text)
    """
    label = defined_label(text)
    if label is not None:
        if label in known:
            raise SymbolError(f"Duplicate label: {label}")
        return label, text.split(":", 1)[1].strip()

    head = split_line(text, LABEL_DELIMITERS)[0]
    if head.startswith("."):
        return None, text

    if ":" in text and "." in head:
        raise ParseError(f"Invalid label name: {head}")

    if head in known:
        # Reuse of an existing label, e.g. "buffer .space 4"
        return head, text[text.index(head) + len(head):].strip()

    raise ParseError(f"Malformed statement: {text}")
