"""
Custom exception types for the MIPS assembler.
"""


class AssemblerError(Exception):
    """Base exception for assembler errors."""

    def __init__(self, message: str, line_num: int = None, line_text: str = None):
        self.message = message
        self.line_num = line_num
        self.line_text = line_text
        if line_num is not None:
            if line_text:
                message = f"Line {line_num}: {message}\n  {line_text}"
            else:
                message = f"Line {line_num}: {message}"
        super().__init__(message)

    def at_line(self, line_num: int, line_text: str = None) -> "AssemblerError":
        """Return a copy of this error located at the given source line."""
        located = type(self)(self.message, line_num, line_text)
        for key, value in self.__dict__.items():
            if key not in ("message", "line_num", "line_text"):
                setattr(located, key, value)
        return located


class ParseError(AssemblerError):
    """Exception raised for malformed statements, literals and directives."""

    pass


class EncodingError(AssemblerError):
    """Exception raised for instruction encoding errors."""

    pass


class UnknownInstructionError(EncodingError):
    """
    Reported for a mnemonic missing from the instruction table.

    The assembler records these as diagnostics and keeps going; the
    address of the rejected line is left empty in the word stream.
    """

    def __init__(
        self,
        message: str,
        line_num: int = None,
        line_text: str = None,
        address: int = None,
    ):
        super().__init__(message, line_num, line_text)
        self.address = address


class RegisterError(AssemblerError):
    """Exception raised for an unknown register name."""

    pass


class SymbolError(AssemblerError):
    """Exception raised for symbol/label errors."""

    pass


class UnresolvedSymbolError(SymbolError):
    """Exception raised when a referenced label was never defined."""

    pass
