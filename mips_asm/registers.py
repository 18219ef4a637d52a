"""
MIPS register definitions and name mappings.

Supports both symbolic names ($zero, $t0, $sp, ...) and numeric names ($0-$31).
"""

# Register number to symbolic name mapping
REG_NAMES = {
    0: "zero",
    1: "at",
    2: "v0",
    3: "v1",
    4: "a0",
    5: "a1",
    6: "a2",
    7: "a3",
    8: "t0",
    9: "t1",
    10: "t2",
    11: "t3",
    12: "t4",
    13: "t5",
    14: "t6",
    15: "t7",
    16: "s0",
    17: "s1",
    18: "s2",
    19: "s3",
    20: "s4",
    21: "s5",
    22: "s6",
    23: "s7",
    24: "t8",
    25: "t9",
    26: "k0",
    27: "k1",
    28: "gp",
    29: "sp",
    30: "fp",  # Also s8
    31: "ra",
}

# Build the reverse mapping (name to number)
REGISTER_MAP = {}

# Add numeric names ($0-$31)
for i in range(32):
    REGISTER_MAP[f"${i}"] = i

# Add symbolic names
for num, name in REG_NAMES.items():
    REGISTER_MAP[f"${name}"] = num

# Add alias: s8 = fp = $30
REGISTER_MAP["$s8"] = 30


def parse_register(name: str) -> int:
    """
    Parse a register name and return its number.

    Args:
        name: Register name (e.g., "$zero", "$t3", "$sp", "$31")

    Returns:
        Register number (0-31)

    Raises:
        ValueError: If the register name is invalid
    """
    name_lower = name.lower().strip()
    if name_lower in REGISTER_MAP:
        return REGISTER_MAP[name_lower]
    raise ValueError(f"Invalid register name: {name}")


def is_valid_register(name: str) -> bool:
    """Check if a string is a valid register name."""
    return name.lower().strip() in REGISTER_MAP


def get_register_name(num: int) -> str:
    """Get the symbolic name ("$t1") for a register number."""
    if not 0 <= num <= 31:
        raise ValueError(f"Invalid register number: {num}")
    return f"${REG_NAMES[num]}"
