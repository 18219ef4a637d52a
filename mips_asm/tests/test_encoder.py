"""
Tests for the instruction table, encoder and decoder.
"""

import pytest

from mips_asm.decoder import decode_word
from mips_asm.encoder import FORMAT_ENCODERS, encode_instruction, pack_field
from mips_asm.errors import EncodingError, ParseError, RegisterError
from mips_asm.instructions import INSTRUCTIONS, InstructionFormat, get_instruction
from mips_asm.parser import INSTRUCTION_DELIMITERS, split_line
from mips_asm.symbols import SymbolTable


SYMBOLS = SymbolTable({".data": 6, "loop": 1, "target": 5, "end": 5, "B": 9})


def encode(line, pc=0, strict=False):
    tokens = split_line(line, INSTRUCTION_DELIMITERS)
    mnemonic = tokens[0].lower()
    return encode_instruction(get_instruction(mnemonic), mnemonic, tokens[1:], SYMBOLS, pc, strict=strict)


class TestInstructionTable:
    """Tests for the static instruction table."""

    def test_all_mnemonics_present(self):
        """Test that the 16 supported mnemonics are defined."""
        assert set(INSTRUCTIONS) == {
            "syscall", "j", "addiu", "addu", "and", "or", "slt", "subu",
            "beq", "bne", "div", "mult", "mfhi", "mflo", "lw", "sw",
        }

    def test_every_format_has_an_encoder(self):
        """Test that dispatch covers every format."""
        assert set(FORMAT_ENCODERS) == set(InstructionFormat)

    def test_lookup_is_case_insensitive(self):
        """Test mnemonic lookup."""
        assert get_instruction("ADDU").funct == 0x21
        assert get_instruction("foo") is None


class TestEncoding:
    """Tests for encode_instruction function."""

    @pytest.mark.parametrize("line, word", [
        ("syscall", 0x0000000C),
        ("addiu $t0, $zero, 5", 0x24080005),
        ("addiu $t0, $t0, -1", 0x2508FFFF),
        ("addu $t0, $t1, $t2", 0x012A4021),
        ("subu $t3, $t1, $t2", 0x012A5823),
        ("and $t0, $t1, $t2", 0x012A4024),
        ("or $t0, $t1, $t2", 0x012A4025),
        ("slt $t0, $t1, $t2", 0x012A402A),
        ("div $t0, $t1", 0x0109001A),
        ("mult $t0, $t1", 0x01090018),
        ("mfhi $t2", 0x00005010),
        ("mflo $t3", 0x00005812),
        ("lw $t0, 4($sp)", 0x8FA80004),
        ("sw $t0, 8($sp)", 0xAFA80008),
        ("lw $t0, ($sp)", 0x8FA80000),
        ("lw $t1, B($gp)", 0x8F890003),
        ("j end", 0x08000005),
    ])
    def test_encoding(self, line, word):
        """Test the field layout of each format."""
        assert encode(line) == word

    def test_branch_forward(self):
        """Test beq at address 2 to a label at 5 (offset 2)."""
        assert encode("beq $t0, $t1, target", pc=2) == 0x11090002

    def test_branch_backward(self):
        """Test that a negative displacement is two's complement."""
        assert encode("bne $t0, $zero, loop", pc=3) == 0x1500FFFD

    def test_out_of_range_truncates(self):
        """Test that oversized immediates are truncated to 16 bits."""
        assert encode("addiu $t0, $zero, 70000") == 0x24081170

    def test_strict_rejects_out_of_range(self):
        """Test that strict mode raises EncodingError."""
        with pytest.raises(EncodingError, match="out of range"):
            encode("addiu $t0, $zero, 70000", strict=True)

    def test_strict_accepts_in_range(self):
        """Test that strict mode accepts fitting values."""
        assert encode("addiu $t0, $zero, -32768", strict=True) == 0x24088000

    def test_wrong_operand_count(self):
        """Test that a missing operand raises ParseError."""
        with pytest.raises(ParseError, match="addu requires 3 operands"):
            encode("addu $t0, $t1")

    def test_unknown_register(self):
        """Test that a bad register raises RegisterError."""
        with pytest.raises(RegisterError):
            encode("mfhi $q0")

    def test_pack_field(self):
        """Test two's-complement truncation."""
        assert pack_field(-1, 16) == 0xFFFF
        assert pack_field(5, 26, signed=False) == 5
        with pytest.raises(EncodingError):
            pack_field(1 << 26, 26, signed=False, strict=True)


class TestDecoding:
    """Tests for decode_word function."""

    def test_addu_round_trip(self):
        """Test that decoding addu recovers its fields."""
        decoded = decode_word(encode("addu $t0, $t1, $t2"))
        assert decoded.mnemonic == "addu"
        assert decoded.rs == 9
        assert decoded.rt == 10
        assert decoded.rd == 8
        assert format(decoded.funct, "06b") == "100001"

    @pytest.mark.parametrize("line, text", [
        ("addiu $t0, $zero, -1", "addiu $t0, $zero, -1"),
        ("lw $t1, B($gp)", "lw $t1, 3($gp)"),
        ("mflo $t3", "mflo $t3"),
        ("div $t0, $t1", "div $t0, $t1"),
        ("j end", "j 5"),
        ("syscall", "syscall"),
    ])
    def test_disassembly(self, line, text):
        """Test rendering decoded words as assembly."""
        assert str(decode_word(encode(line))) == text

    def test_data_word(self):
        """Test that a plain data value is not an instruction."""
        assert decode_word(5).mnemonic is None
        assert decode_word(0).mnemonic is None
