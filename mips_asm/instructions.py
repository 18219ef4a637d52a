"""
MIPS instruction definitions.

This module defines the supported instructions with their opcodes, function
codes and format types. Adding an instruction of an existing format is a
single table entry.
"""

from dataclasses import dataclass
from typing import Optional
from enum import Enum, auto


class InstructionFormat(Enum):
    """Field layouts of the supported instructions."""

    FIXED = auto()  # Constant word (syscall)
    JUMP = auto()  # opcode | address(26)
    IMMEDIATE = auto()  # opcode | rs | rt | imm(16)
    REGISTER = auto()  # 0 | rs | rt | rd | 0 | funct
    BRANCH = auto()  # opcode | rs | rt | offset(16)
    MULDIV = auto()  # 0 | rs | rt | 0(10) | funct
    MOVE_FROM = auto()  # 0(16) | rd | funct(11)
    MEMORY = auto()  # opcode | rs | rt | offset(16)


@dataclass(frozen=True)
class Instruction:
    """
    Definition of a MIPS instruction.

    Attributes:
        format: Instruction format type
        opcode: 6-bit opcode field
        funct: Function field (None if not applicable)
        constant: Complete encoding for FIXED instructions
    """

    format: InstructionFormat
    opcode: int = 0
    funct: Optional[int] = None
    constant: Optional[int] = None


INSTRUCTIONS = {
    # -------------------------------------------------------------------------
    # System
    # -------------------------------------------------------------------------
    "syscall": Instruction(format=InstructionFormat.FIXED, constant=0x0000000C),
    # -------------------------------------------------------------------------
    # Jump - Opcode: 0x02
    # -------------------------------------------------------------------------
    "j": Instruction(format=InstructionFormat.JUMP, opcode=0x02),
    # -------------------------------------------------------------------------
    # Immediate arithmetic - Opcode: 0x09
    # -------------------------------------------------------------------------
    "addiu": Instruction(format=InstructionFormat.IMMEDIATE, opcode=0x09),
    # -------------------------------------------------------------------------
    # Register-register (SPECIAL) - Opcode: 0x00
    # -------------------------------------------------------------------------
    "addu": Instruction(format=InstructionFormat.REGISTER, funct=0x21),
    "subu": Instruction(format=InstructionFormat.REGISTER, funct=0x23),
    "and": Instruction(format=InstructionFormat.REGISTER, funct=0x24),
    "or": Instruction(format=InstructionFormat.REGISTER, funct=0x25),
    "slt": Instruction(format=InstructionFormat.REGISTER, funct=0x2A),
    # -------------------------------------------------------------------------
    # Branches
    # -------------------------------------------------------------------------
    "beq": Instruction(format=InstructionFormat.BRANCH, opcode=0x04),
    "bne": Instruction(format=InstructionFormat.BRANCH, opcode=0x05),
    # -------------------------------------------------------------------------
    # Multiply/divide and HI/LO moves (SPECIAL) - Opcode: 0x00
    # -------------------------------------------------------------------------
    "mult": Instruction(format=InstructionFormat.MULDIV, funct=0x18),
    "div": Instruction(format=InstructionFormat.MULDIV, funct=0x1A),
    "mfhi": Instruction(format=InstructionFormat.MOVE_FROM, funct=0x10),
    "mflo": Instruction(format=InstructionFormat.MOVE_FROM, funct=0x12),
    # -------------------------------------------------------------------------
    # Loads and stores
    # -------------------------------------------------------------------------
    "lw": Instruction(format=InstructionFormat.MEMORY, opcode=0x23),
    "sw": Instruction(format=InstructionFormat.MEMORY, opcode=0x2B),
}


def get_instruction(mnemonic: str) -> Optional[Instruction]:
    """
    Look up an instruction by mnemonic.

    Args:
        mnemonic: Instruction mnemonic (case-insensitive)

    Returns:
        Instruction object if found, None otherwise
    """
    return INSTRUCTIONS.get(mnemonic.lower())
