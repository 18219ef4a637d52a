"""
Field decoder for encoded words.

Splits a 32-bit word back into its fields using the layout of the
instruction format it belongs to. Used to check encodings and to annotate
listings.
"""

from dataclasses import dataclass
from typing import Optional

from .instructions import INSTRUCTIONS, InstructionFormat
from .registers import get_register_name


@dataclass
class DecodedWord:
    """
    Fields of a decoded instruction word.

    Attributes:
        mnemonic: Matching mnemonic, None if the word is not a known instruction
        opcode: Bits 31-26
        rs: Bits 25-21
        rt: Bits 20-16
        rd: Bits 15-11
        shamt: Bits 10-6
        funct: Bits 5-0
        imm: Bits 15-0
        address: Bits 25-0
    """

    mnemonic: Optional[str]
    opcode: int
    rs: int
    rt: int
    rd: int
    shamt: int
    funct: int
    imm: int
    address: int

    def __str__(self) -> str:
        if self.mnemonic is None:
            return ".word"
        fmt = INSTRUCTIONS[self.mnemonic].format
        rs, rt, rd = (get_register_name(r) for r in (self.rs, self.rt, self.rd))
        if fmt == InstructionFormat.FIXED:
            return self.mnemonic
        elif fmt == InstructionFormat.JUMP:
            return f"{self.mnemonic} {self.address}"
        elif fmt == InstructionFormat.IMMEDIATE:
            return f"{self.mnemonic} {rt}, {rs}, {self.signed_imm}"
        elif fmt == InstructionFormat.REGISTER:
            return f"{self.mnemonic} {rd}, {rs}, {rt}"
        elif fmt == InstructionFormat.BRANCH:
            return f"{self.mnemonic} {rs}, {rt}, {self.signed_imm}"
        elif fmt == InstructionFormat.MULDIV:
            return f"{self.mnemonic} {rs}, {rt}"
        elif fmt == InstructionFormat.MOVE_FROM:
            return f"{self.mnemonic} {rd}"
        return f"{self.mnemonic} {rt}, {self.signed_imm}({rs})"

    @property
    def signed_imm(self) -> int:
        return self.imm - 0x10000 if self.imm & 0x8000 else self.imm


def decode_word(word: int) -> DecodedWord:
    """Decode a 32-bit word into its instruction fields."""
    word &= 0xFFFFFFFF
    opcode = (word >> 26) & 0x3F
    funct = word & 0x3F

    mnemonic = None
    for name, instr in INSTRUCTIONS.items():
        fmt = instr.format
        if fmt == InstructionFormat.FIXED:
            matched = word == instr.constant
        elif fmt in (InstructionFormat.REGISTER, InstructionFormat.MULDIV):
            matched = opcode == 0 and funct == instr.funct and word != 0
        elif fmt == InstructionFormat.MOVE_FROM:
            matched = (word >> 16) == 0 and (word & 0x7FF) == instr.funct
        else:
            matched = opcode == instr.opcode
        if matched:
            mnemonic = name
            break

    return DecodedWord(
        mnemonic=mnemonic,
        opcode=opcode,
        rs=(word >> 21) & 0x1F,
        rt=(word >> 16) & 0x1F,
        rd=(word >> 11) & 0x1F,
        shamt=(word >> 6) & 0x1F,
        funct=funct,
        imm=word & 0xFFFF,
        address=word & 0x3FFFFFF,
    )
