"""DBAL2AST: tokenize and parse DBAL schema text into an AST."""

__version__ = "0.1.0"
