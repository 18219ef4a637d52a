"""
Tests for the operand resolvers and the register table.
"""

import pytest

from mips_asm.errors import RegisterError, UnresolvedSymbolError
from mips_asm.operands import (
    resolve_branch,
    resolve_immediate,
    resolve_jump,
    resolve_offset,
    resolve_register,
)
from mips_asm.registers import get_register_name, is_valid_register, parse_register
from mips_asm.symbols import SymbolTable


@pytest.fixture
def symbols():
    return SymbolTable({".data": 6, "main": 0, "loop": 1, "target": 5, "A": 6, "B": 9})


class TestRegisters:
    """Tests for register resolution."""

    @pytest.mark.parametrize("name, number", [
        ("$zero", 0),
        ("$at", 1),
        ("$v1", 3),
        ("$a0", 4),
        ("$t0", 8),
        ("$t3", 11),
        ("$s0", 16),
        ("$t8", 24),
        ("$t9", 25),
        ("$k1", 27),
        ("$gp", 28),
        ("$sp", 29),
        ("$fp", 30),
        ("$s8", 30),
        ("$ra", 31),
        ("$17", 17),
        ("$T1", 9),
    ])
    def test_register_numbers(self, name, number):
        """Test the standard register file numbering."""
        assert resolve_register(name) == number

    def test_fixed_codes(self):
        """Test that $zero and $ra always give 00000 and 11111."""
        assert format(resolve_register("$zero"), "05b") == "00000"
        assert format(resolve_register("$ra"), "05b") == "11111"

    def test_unknown_register(self):
        """Test that an unknown register raises RegisterError."""
        with pytest.raises(RegisterError, match=r"Invalid register name: \$t10"):
            resolve_register("$t10")

    def test_unprefixed_register(self):
        """Test that a name without $ is not a register."""
        with pytest.raises(RegisterError, match="Invalid register name: t0"):
            resolve_register("t0")

    def test_register_table_helpers(self):
        """Test name validation and reverse lookup."""
        assert is_valid_register("$sp")
        assert not is_valid_register("t0")
        assert get_register_name(9) == "$t1"
        with pytest.raises(ValueError):
            parse_register("x5")


class TestBranchResolver:
    """Tests for resolve_branch function."""

    def test_forward_displacement(self, symbols):
        """Test that a branch at 2 to a label at 5 gives 2."""
        assert resolve_branch(2, "target", symbols) == 2

    def test_backward_displacement(self, symbols):
        """Test a branch to an earlier label."""
        assert resolve_branch(2, "loop", symbols) == -2

    def test_branch_to_next_instruction(self, symbols):
        """Test that a branch to the following instruction gives 0."""
        assert resolve_branch(4, "target", symbols) == 0

    def test_literal_displacement(self, symbols):
        """Test that a literal target is used as the displacement."""
        assert resolve_branch(2, "-3", symbols) == -3

    def test_undefined_label(self, symbols):
        """Test that an unknown target raises UnresolvedSymbolError."""
        with pytest.raises(UnresolvedSymbolError):
            resolve_branch(0, "nowhere", symbols)


class TestJumpResolver:
    """Tests for resolve_jump function."""

    def test_absolute_address(self, symbols):
        """Test that a jump resolves to the label address."""
        assert resolve_jump("target", symbols) == 5

    def test_literal_address(self, symbols):
        """Test that a literal is used as the address."""
        assert resolve_jump("12", symbols) == 12

    def test_undefined_label(self, symbols):
        """Test that an unknown target raises UnresolvedSymbolError."""
        with pytest.raises(UnresolvedSymbolError, match="Undefined label: exit"):
            resolve_jump("exit", symbols)


class TestOffsetResolver:
    """Tests for resolve_offset and resolve_immediate functions."""

    def test_label_relative_to_data(self, symbols):
        """Test that a label offset is measured from the data segment."""
        assert resolve_offset("A", symbols) == 0
        assert resolve_offset("B", symbols) == 3

    def test_literal_offset(self, symbols):
        """Test literal offsets, including negative ones."""
        assert resolve_offset("4", symbols) == 4
        assert resolve_offset("-8", symbols) == -8

    def test_undefined_label(self, symbols):
        """Test that an unknown offset label raises UnresolvedSymbolError."""
        with pytest.raises(UnresolvedSymbolError):
            resolve_offset("missing", symbols)

    def test_immediate(self, symbols):
        """Test literal and label immediates."""
        assert resolve_immediate("-1", symbols) == -1
        assert resolve_immediate("B", symbols) == 9
        with pytest.raises(UnresolvedSymbolError):
            resolve_immediate("missing", symbols)
