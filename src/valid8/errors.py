"""
Error taxonomy for VALID8.

Every error terminates the pipeline run for the current input.
Nothing here is retried internally; retrying is the caller's job.
"""

from typing import Optional


class Valid8Error(Exception):
    """Base class for all pipeline errors."""
    pass


class LexicalError(Valid8Error):
    """Raised when the lexer meets a character it cannot tokenize."""

    def __init__(self, message: str, line: int, column: int, char: str):
        self.message = message
        self.line = line
        self.column = column
        self.char = char
        super().__init__(f"{line}:{column}: {message}")


class ParseError(Valid8Error):
    """
    A required-token mismatch or unterminated group.

    Collected in Parser.errors, or raised by parse_source().
    """

    def __init__(self, message: str, line: int, column: int, token: Optional[str]):
        self.message = message
        self.line = line
        self.column = column
        self.token = token
        super().__init__(f"{line}:{column}: {message}")


class SemanticError(Valid8Error):
    """Raised when a well-formed program cannot be evaluated."""
    pass


class ResourceExhaustedError(Valid8Error):
    """Raised when the truth table would exceed the variable ceiling."""

    def __init__(self, message: str, limit: int, actual: int):
        self.limit = limit
        self.actual = actual
        super().__init__(message)
