"""
Assembly source line helpers.

Handles tokenization, comment stripping, literal parsing and the
label-versus-instruction classification used by both assembler passes.
"""

import re
from typing import Iterable, List, Optional

from .errors import ParseError

# Delimiters for label/directive lines ("A: .word 1, 2") and for
# instruction lines ("lw $t0, 4($sp)").
LABEL_DELIMITERS = ": ,"
INSTRUCTION_DELIMITERS = ", ()"

_LITERAL_RE = re.compile(r"^-?\s*(0[xX][0-9a-fA-F]+|0[bB][01]+|0[oO][0-7]+|\d+)$")
_LABEL_DEF_RE = re.compile(r"^([^\s:,.][^\s:,.]*)\s*:")


def split_line(line: str, delimiters: str) -> List[str]:
    """
    Split a line into its non-empty tokens.

    Every character of ``delimiters`` separates tokens and is dropped.
    When a space is a delimiter, tabs and other whitespace are too.
    """
    split_on_space = " " in delimiters
    tokens = []
    current = ""

    for char in line:
        if char in delimiters or (split_on_space and char.isspace()):
            if current:
                tokens.append(current)
            current = ""
        else:
            current += char

    if current:
        tokens.append(current)

    return tokens


def strip_comments(line: str) -> str:
    """
    Remove comments from a line.

    Supports # and // style comments.
    """
    hash_pos = line.find("#")
    double_slash = line.find("//")

    comment_pos = -1
    if hash_pos >= 0 and double_slash >= 0:
        comment_pos = min(hash_pos, double_slash)
    elif hash_pos >= 0:
        comment_pos = hash_pos
    elif double_slash >= 0:
        comment_pos = double_slash

    if comment_pos >= 0:
        return line[:comment_pos]
    return line


def is_integer_literal(value_str: str) -> bool:
    """Check if a token is an integer literal accepted by parse_immediate."""
    return bool(_LITERAL_RE.match(value_str.strip()))


def parse_immediate(value_str: str) -> int:
    """
    Parse an immediate value from string.

    Supports:
    - Decimal: 123, -45
    - Hexadecimal: 0x1A, 0X1a
    - Binary: 0b1010
    - Octal: 0o17

    Returns:
        Integer value
    """
    value_str = value_str.strip()

    if not value_str:
        raise ParseError("Empty immediate value")

    negative = value_str.startswith("-")
    if negative:
        value_str = value_str[1:].strip()

    try:
        if value_str.lower().startswith("0x"):
            result = int(value_str, 16)
        elif value_str.lower().startswith("0b"):
            result = int(value_str, 2)
        elif value_str.lower().startswith("0o"):
            result = int(value_str, 8)
        else:
            result = int(value_str, 10)

        return -result if negative else result
    except ValueError:
        raise ParseError(f"Invalid immediate value: {value_str}")


def defined_label(line: str) -> Optional[str]:
    """Return the label a line defines with a trailing colon, if any."""
    match = _LABEL_DEF_RE.match(line.strip())
    if match:
        return match.group(1)
    return None


def is_label_line(line: str, known_labels: Iterable[str]) -> bool:
    """
    Decide whether a line is a label/directive line.

    True if the line contains a colon or a period, or if its first token
    is an already known label.
    """
    if ":" in line or "." in line:
        return True

    tokens = split_line(line, LABEL_DELIMITERS)
    return bool(tokens) and tokens[0] in known_labels
