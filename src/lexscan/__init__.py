"""
lexscan - Lexical Scanner for C-Family Source Text
==================================================

This package provides a two-layer lexical front end for source code:

Main Components
---------------
- **source**: Peekable character source with lookahead queue and line
  counting, over files or strings

- **states**: Token state machine. Classifies characters into
  whitespace, alphanumeric, punctuation, special single characters,
  special character pairs, comments and quoted literals

- **toker**: Tokenizer driving the state machine and filtering out
  whitespace

- **semi**: Semi-expression aggregator folding tokens into
  statement-sized units ending in ';', '{' or '}'

Quick Start
-----------
Tokenize a file:
    >>> from lexscan import Toker
    >>> toker = Toker()
    >>> if toker.open("Program.cs"):
    ...     for tok in toker.tokens():
    ...         print(toker.line_count(), tok)
    ...     toker.close()

Collect semi-expressions:
    >>> from lexscan import SemiExpression
    >>> with SemiExpression() as semi:
    ...     semi.open("Program.cs")
    ...     while semi.get_semi():
    ...         print(semi.display_str())

Or use the command-line tool:
    $ lexscan tokens Program.cs
    $ lexscan semis Program.cs
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from lexscan.errors import (
    LexScanError,
    SourceLocation,
    SourceOpenError,
    RegistryError,
    ScanError,
    UnterminatedTokenError,
    UnbalancedHeaderError,
)
from lexscan.source import CharacterSource, END
from lexscan.states import (
    TokenState,
    SpecialCharRegistry,
    DEFAULT_SPECIAL_SINGLE_CHARS,
    DEFAULT_SPECIAL_CHAR_PAIRS,
    next_state,
    extract_token,
)
from lexscan.config import ScannerOptions
from lexscan.toker import Toker
from lexscan.semi import SemiExpression, NEWLINE_MARKER

__all__ = [
    # Version info
    "__version__",
    # Character source
    "CharacterSource",
    "END",
    # State machine
    "TokenState",
    "SpecialCharRegistry",
    "DEFAULT_SPECIAL_SINGLE_CHARS",
    "DEFAULT_SPECIAL_CHAR_PAIRS",
    "next_state",
    "extract_token",
    # Configuration
    "ScannerOptions",
    # Tokenizer and aggregator
    "Toker",
    "SemiExpression",
    "NEWLINE_MARKER",
    # Exception hierarchy
    "LexScanError",
    "SourceLocation",
    "SourceOpenError",
    "RegistryError",
    "ScanError",
    "UnterminatedTokenError",
    "UnbalancedHeaderError",
]
