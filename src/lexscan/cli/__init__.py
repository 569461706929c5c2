"""
Lexical Scanner Command-Line Interface
======================================

This package provides the ``lexscan`` console tool, a Click-based
driver for the tokenizer and the semi-expression aggregator:

- **lexscan tokens**: list the tokens of one or more files
- **lexscan semis**: list the semi-expressions of one or more files
- **lexscan specials**: show the special character tables
"""

__all__ = ["lexscan"]
