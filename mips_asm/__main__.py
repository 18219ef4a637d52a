#!/usr/bin/env python3
"""
MIPS Assembler - Command Line Interface

Usage:
    python3 -m mips_asm input.s
    python3 -m mips_asm input.s -o output.hex
    python3 -m mips_asm input.s --listing -v
"""

import argparse
import sys

from . import __version__
from .assembler import Assembler
from .errors import AssemblerError


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="mips-asm",
        description="MIPS subset assembler",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s programs/sum.s
  %(prog)s programs/sum.s -o programs/sum.hex
  %(prog)s programs/sum.s --listing
        """,
    )

    parser.add_argument(
        "input",
        type=str,
        help="Input assembly file (.s/.asm)",
    )

    parser.add_argument(
        "-o",
        "--output",
        type=str,
        help="Output hex file (.hex). If not specified, prints to stdout.",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output (on stderr)",
    )

    parser.add_argument(
        "-l",
        "--listing",
        action="store_true",
        help="Print assembly listing",
    )

    parser.add_argument(
        "-d",
        "--disassemble",
        action="store_true",
        help="Print the instruction words decoded back to assembly",
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject immediates that do not fit their field instead of truncating",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    args = parser.parse_args(argv)

    asm = Assembler(verbose=args.verbose, strict=args.strict)

    try:
        asm.assemble_file(args.input, args.output)
    except OSError as e:
        print(f"Error opening file: {args.input}: {e.strerror or e}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as e:
        print(f"Error reading file: {args.input}: {e}", file=sys.stderr)
        return 1
    except AssemblerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for diagnostic in asm.diagnostics:
        print(f"Error: {diagnostic}", file=sys.stderr)

    if args.listing:
        print("\n" + asm.get_listing())
    elif args.disassemble:
        print("\n" + asm.get_disassembly())
    elif not args.output and asm.words:
        print()
        print(asm.get_hex_string())

    if args.verbose or args.output:
        print(f"\nAssembly finished: {len(asm.words)} words", file=sys.stderr)

    return 1 if asm.diagnostics else 0


if __name__ == "__main__":
    sys.exit(main())
