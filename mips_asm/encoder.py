"""
MIPS instruction encoder.

Encodes parsed instructions into 32-bit machine code based on their format
type. Each format has one encoder function; dispatch is a lookup in
FORMAT_ENCODERS.
"""

from typing import Callable, Dict, List

from .instructions import Instruction, InstructionFormat
from .errors import EncodingError, ParseError
from .operands import (
    resolve_branch,
    resolve_immediate,
    resolve_jump,
    resolve_offset,
    resolve_register,
)
from .symbols import SymbolTable


def check_immediate_range(value: int, bits: int, signed: bool = True, name: str = "immediate") -> None:
    """
    Check if an immediate value fits in the specified bit width.

    Args:
        value: The immediate value to check
        bits: Number of bits available
        signed: Whether the immediate is signed
        name: Name for error messages
    """
    if signed:
        min_val = -(1 << (bits - 1))
        max_val = (1 << (bits - 1)) - 1
    else:
        min_val = 0
        max_val = (1 << bits) - 1

    if not (min_val <= value <= max_val):
        raise EncodingError(
            f"{name} value {value} out of range [{min_val}, {max_val}] for {bits}-bit field"
        )


def pack_field(value: int, bits: int, signed: bool = True, strict: bool = False, name: str = "immediate") -> int:
    """
    Truncate a value to a two's-complement field of the given width.

    In strict mode, values that do not fit raise EncodingError instead.
    """
    if strict:
        check_immediate_range(value, bits, signed=signed, name=name)
    return value & ((1 << bits) - 1)


def _expect_operands(mnemonic: str, operands: List[str], counts, layout: str) -> None:
    if len(operands) not in counts:
        raise ParseError(
            f"{mnemonic} requires {counts[0]} operands ({layout}), got {len(operands)}"
        )


def encode_fixed(instr: Instruction, mnemonic: str, operands: List[str], symbols: SymbolTable, pc: int, strict: bool = False) -> int:
    """Encode an instruction whose word is a constant (syscall)."""
    _expect_operands(mnemonic, operands, (0,), "none")
    return instr.constant


def encode_jump(instr: Instruction, mnemonic: str, operands: List[str], symbols: SymbolTable, pc: int, strict: bool = False) -> int:
    """
    Encode a jump.

    Format: [opcode(6) | address(26)]
    """
    _expect_operands(mnemonic, operands, (1,), "target")
    address = resolve_jump(operands[0], symbols)

    encoding = (instr.opcode & 0x3F) << 26
    encoding |= pack_field(address, 26, signed=False, strict=strict, name="jump address")
    return encoding


def encode_immediate(instr: Instruction, mnemonic: str, operands: List[str], symbols: SymbolTable, pc: int, strict: bool = False) -> int:
    """
    Encode an immediate arithmetic instruction (source order: rt, rs, imm).

    Format: [opcode(6) | rs(5) | rt(5) | imm(16)]
    """
    _expect_operands(mnemonic, operands, (3,), "rt, rs, imm")
    rt = resolve_register(operands[0])
    rs = resolve_register(operands[1])
    imm = resolve_immediate(operands[2], symbols)

    encoding = (instr.opcode & 0x3F) << 26
    encoding |= rs << 21
    encoding |= rt << 16
    encoding |= pack_field(imm, 16, strict=strict)
    return encoding


def encode_register(instr: Instruction, mnemonic: str, operands: List[str], symbols: SymbolTable, pc: int, strict: bool = False) -> int:
    """
    Encode a register-register instruction (source order: rd, rs, rt).

    Format: [0(6) | rs(5) | rt(5) | rd(5) | shamt(5)=0 | funct(6)]
    """
    _expect_operands(mnemonic, operands, (3,), "rd, rs, rt")
    rd = resolve_register(operands[0])
    rs = resolve_register(operands[1])
    rt = resolve_register(operands[2])

    encoding = rs << 21
    encoding |= rt << 16
    encoding |= rd << 11
    encoding |= instr.funct & 0x3F
    return encoding


def encode_branch(instr: Instruction, mnemonic: str, operands: List[str], symbols: SymbolTable, pc: int, strict: bool = False) -> int:
    """
    Encode a conditional branch (source order: rs, rt, target).

    Format: [opcode(6) | rs(5) | rt(5) | offset(16)]
    """
    _expect_operands(mnemonic, operands, (3,), "rs, rt, target")
    rs = resolve_register(operands[0])
    rt = resolve_register(operands[1])
    offset = resolve_branch(pc, operands[2], symbols)

    encoding = (instr.opcode & 0x3F) << 26
    encoding |= rs << 21
    encoding |= rt << 16
    encoding |= pack_field(offset, 16, strict=strict, name="branch offset")
    return encoding


def encode_muldiv(instr: Instruction, mnemonic: str, operands: List[str], symbols: SymbolTable, pc: int, strict: bool = False) -> int:
    """
    Encode a multiply/divide (source order: rs, rt).

    Format: [0(6) | rs(5) | rt(5) | 0(10) | funct(6)]
    """
    _expect_operands(mnemonic, operands, (2,), "rs, rt")
    rs = resolve_register(operands[0])
    rt = resolve_register(operands[1])

    encoding = rs << 21
    encoding |= rt << 16
    encoding |= instr.funct & 0x3F
    return encoding


def encode_move_from(instr: Instruction, mnemonic: str, operands: List[str], symbols: SymbolTable, pc: int, strict: bool = False) -> int:
    """
    Encode a move from HI/LO.

    Format: [0(16) | rd(5) | funct(11)]
    """
    _expect_operands(mnemonic, operands, (1,), "rd")
    rd = resolve_register(operands[0])

    encoding = rd << 11
    encoding |= instr.funct & 0x7FF
    return encoding


def encode_memory(instr: Instruction, mnemonic: str, operands: List[str], symbols: SymbolTable, pc: int, strict: bool = False) -> int:
    """
    Encode a load or store (source order: rt, offset(rs)).

    The offset may be omitted ("lw $t0, ($sp)"), meaning 0.

    Format: [opcode(6) | rs(5) | rt(5) | offset(16)]
    """
    _expect_operands(mnemonic, operands, (3, 2), "rt, offset(rs)")
    rt = resolve_register(operands[0])
    if len(operands) == 3:
        offset = resolve_offset(operands[1], symbols)
        rs = resolve_register(operands[2])
    else:
        offset = 0
        rs = resolve_register(operands[1])

    encoding = (instr.opcode & 0x3F) << 26
    encoding |= rs << 21
    encoding |= rt << 16
    encoding |= pack_field(offset, 16, strict=strict, name="memory offset")
    return encoding


FORMAT_ENCODERS: Dict[InstructionFormat, Callable[..., int]] = {
    InstructionFormat.FIXED: encode_fixed,
    InstructionFormat.JUMP: encode_jump,
    InstructionFormat.IMMEDIATE: encode_immediate,
    InstructionFormat.REGISTER: encode_register,
    InstructionFormat.BRANCH: encode_branch,
    InstructionFormat.MULDIV: encode_muldiv,
    InstructionFormat.MOVE_FROM: encode_move_from,
    InstructionFormat.MEMORY: encode_memory,
}


def encode_instruction(
    instr: Instruction,
    mnemonic: str,
    operands: List[str],
    symbols: SymbolTable,
    pc: int,
    strict: bool = False,
) -> int:
    """
    Encode an instruction based on its format.

    Args:
        instr: Instruction definition
        mnemonic: Instruction mnemonic (for error messages)
        operands: Operand tokens in source order
        symbols: Symbol table from pass 1
        pc: Address of this instruction
        strict: Reject immediates that do not fit their field

    Returns:
        32-bit encoded instruction
    """
    encoder = FORMAT_ENCODERS.get(instr.format)
    if encoder is None:
        raise EncodingError(f"Unknown instruction format: {instr.format}")
    return encoder(instr, mnemonic, list(operands), symbols, pc, strict)
