"""
Lexical Scanner Error Hierarchy
===============================

This module defines the exception hierarchy for the lexical scanner.
All exceptions inherit from LexScanError, allowing callers to catch all
scanner-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
LexScanError (base)
├── SourceOpenError - source file missing or unreadable
├── RegistryError - invalid special character registration
└── ScanError - located scanning failure (strict mode)
    ├── UnterminatedTokenError - block comment or quoted literal hit EOF
    └── UnbalancedHeaderError - for(...) header hit EOF before balancing

Ordinary end of input is never an exception: the tokenizer returns None
and the aggregator returns False. Failure to open a source is reported
as a False return from open(); SourceOpenError is raised only by the
explicit CharacterSource.from_file() constructor.

Error messages follow this format:
    filename:line: error: description
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class LexScanError(Exception):
    """
    Base exception for all scanner errors.

        try:
            toker.get_tok()
        except LexScanError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A line within a scanned source.

    Attributes:
        filename: Name of the source file (or "<string>" for string input)
        line: Line number (1-indexed)
    """
    filename: str
    line: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}"


# =============================================================================
# Source and Registry Errors
# =============================================================================

class SourceOpenError(LexScanError):
    """
    A source could not be opened.

    Raised when:
    - File not found
    - Permission denied
    - Path is a directory
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot open '{path}': {reason}")


class RegistryError(LexScanError):
    """
    Invalid special character registration.

    Special single characters must be exactly one character long and
    special pairs exactly two.
    """
    pass


# =============================================================================
# Scanning Errors
# =============================================================================

class ScanError(LexScanError):
    """
    Base exception for located scanning failures.

    Only raised when the scanner runs in strict mode. In the default
    permissive mode the same conditions are logged and scanning
    continues to the end of the source.

    Attributes:
        message: The error description
        location: Where in the source the offending token started
        hint: A suggestion for fixing the error
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location and hint.

        Example output:
            main.cs:12: error: unterminated block comment
            hint: add closing */ to terminate the comment
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class UnterminatedTokenError(ScanError):
    """
    A block comment or quoted literal reached the end of the source.

    Example:
        string s = "hello;     // missing closing quote
    """

    def __init__(
        self,
        kind: str,
        terminator: str,
        location: Optional[SourceLocation] = None,
    ):
        self.kind = kind
        self.terminator = terminator
        super().__init__(
            f"unterminated {kind}",
            location=location,
            hint=f"add closing {terminator} before end of file",
        )


class UnbalancedHeaderError(ScanError):
    """
    A for(...) header reached the end of the source before its
    parentheses balanced.
    """

    def __init__(
        self,
        opens: int,
        closes: int,
        location: Optional[SourceLocation] = None,
    ):
        self.opens = opens
        self.closes = closes
        super().__init__(
            f"unbalanced 'for' header ({opens} '(' vs {closes} ')')",
            location=location,
            hint="add the missing ')' to close the header",
        )
