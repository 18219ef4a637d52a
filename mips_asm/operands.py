"""
Operand resolvers.

Each resolver turns one operand token into the integer that goes into an
instruction field. Values are returned unmasked; the encoder truncates them
to the field width.
"""

from .errors import RegisterError
from .parser import is_integer_literal, parse_immediate
from .registers import is_valid_register, parse_register
from .symbols import SymbolTable


def resolve_register(name: str) -> int:
    """
    Resolve a register name to its 5-bit number.

    Raises:
        RegisterError: If the name is not a MIPS register
    """
    if not is_valid_register(name):
        raise RegisterError(f"Invalid register name: {name}")
    return parse_register(name)


def resolve_branch(pc: int, target: str, symbols: SymbolTable) -> int:
    """
    Resolve a branch target to a signed word displacement.

    The displacement is relative to the instruction after the branch:
    ``target - (pc + 1)``. A literal target is taken as the displacement.

    Args:
        pc: Address of the branch instruction itself
        target: Label name or integer literal
        symbols: Symbol table from pass 1
    """
    target = target.strip()
    if target not in symbols and is_integer_literal(target):
        return parse_immediate(target)
    return symbols.lookup(target) - (pc + 1)


def resolve_jump(target: str, symbols: SymbolTable) -> int:
    """Resolve a jump target to its absolute word address."""
    target = target.strip()
    if target not in symbols and is_integer_literal(target):
        return parse_immediate(target)
    return symbols.lookup(target)


def resolve_offset(token: str, symbols: SymbolTable) -> int:
    """
    Resolve a load/store offset.

    A label gives its distance from the start of the data segment; anything
    else must be an integer literal.
    """
    token = token.strip()
    if token in symbols:
        return symbols.data_offset(token)
    if is_integer_literal(token):
        return parse_immediate(token)
    return symbols.data_offset(token)


def resolve_immediate(token: str, symbols: SymbolTable) -> int:
    """Resolve an immediate operand: an integer literal or a label's address."""
    token = token.strip()
    if token in symbols:
        return symbols[token]
    if is_integer_literal(token):
        return parse_immediate(token)
    return symbols.lookup(token)
