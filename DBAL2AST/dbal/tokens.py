"""Token vocabulary for the DBAL front end.

The lexer produces an ordered list of ``DBALToken``; the parser only relies on
that ordering and on each token's kind/text pair.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional


class TokenKind(str, Enum):
    """Classification of a lexical unit."""
    KEYWORD = "Keyword"
    IDENTIFIER = "Identifier"
    STRING_LITERAL = "StringLiteral"
    SYMBOL = "Symbol"
    NUMBER = "Number"
    WHITESPACE = "Whitespace"
    # Declared but never emitted: DBAL has no comment syntax.
    COMMENT = "Comment"
    ERROR = "Error"


KEYWORDS: FrozenSet[str] = frozenset({
    "Table",
    "Note",
    "ref",
    "not",
    "null",
    "unique",
    "default",
    "bool",
    "string",
    "int",
    "float",
})

# Reserved words that name a column data type.
TYPE_KEYWORDS: FrozenSet[str] = frozenset({"bool", "string", "int", "float"})

SYMBOLS: FrozenSet[str] = frozenset("{}[]:,<>")

QUOTES: FrozenSet[str] = frozenset({"'", '"'})


@dataclass(frozen=True)
class DBALToken:
    kind: TokenKind
    text: str
    position: int = 0
    line: int = 1
    column: int = 1
    # Location just past the last consumed character, quotes included.
    end_line: Optional[int] = None
    end_column: Optional[int] = None

    def is_symbol(self, text: str) -> bool:
        return self.kind is TokenKind.SYMBOL and self.text == text

    def describe(self) -> str:
        """Human-readable ``Kind 'text'`` form used in diagnostics."""
        return f"{self.kind.value} {self.text!r}"
