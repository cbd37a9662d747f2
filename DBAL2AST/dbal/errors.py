"""Centralized error handling for the DBAL front end.

This module provides Pydantic-based error details for both phases:
- Lexical errors (tokenization)
- Syntax errors (parsing)

and the exceptions that carry them. Both are fatal: the first error aborts
the whole run and no partial result is produced.
"""

from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field

from .tokens import TYPE_KEYWORDS


END_OF_INPUT = "end of input"


class LexicalErrorDetail(BaseModel):
    """Lexical analysis error (tokenization phase)."""

    message: str = Field(description="Error message")
    position: Optional[int] = Field(None, description="Offset of the offending character (0-indexed)")
    line: Optional[int] = Field(None, description="Line number where error occurred (1-indexed)")
    column: Optional[int] = Field(None, description="Column number where error occurred (1-indexed)")
    invalid_char: Optional[str] = Field(None, description="Invalid character that caused the error")
    context: Optional[str] = Field(None, description="Context snippet showing error location")

    def format_message(self) -> str:
        """Format a comprehensive lexical error message."""
        parts = []
        parts.append(f"Lexical error: {self.message}")

        if self.line is not None and self.column is not None:
            parts.append(f"Location: line {self.line}, column {self.column}")

        if self.invalid_char:
            parts.append(f"Invalid character: {self.invalid_char!r}")
            if ord(self.invalid_char) > 127:
                parts.append(f"Character code: U+{ord(self.invalid_char):04X}")

        if self.context:
            parts.append(f"Context:\n{self.context}")

        suggestions = self._get_suggestions()
        if suggestions:
            parts.append("Suggestions:")
            parts.extend(f"  - {s}" for s in suggestions)

        return "\n".join(parts)

    def _get_suggestions(self) -> List[str]:
        suggestions = []
        if self.invalid_char:
            if self.invalid_char == "_":
                suggestions.append("Identifiers may only contain letters, digits and '.'; "
                                   "enable the 'underscore_identifiers' feature to allow '_'")
            elif self.invalid_char.isdigit():
                suggestions.append("Identifiers must start with a letter; "
                                   "enable the 'numbers' feature to lex numeric literals")
            elif self.invalid_char in ("/", "#"):
                suggestions.append("DBAL has no comment syntax")
            elif self.invalid_char in ("(", ")"):
                suggestions.append("Type parameters such as varchar(255) are not supported")
        return suggestions


class SyntaxErrorDetail(BaseModel):
    """Syntax analysis error (parsing phase)."""

    message: str = Field(description="Error message")
    line: Optional[int] = Field(None, description="Line number where error occurred (1-indexed)")
    column: Optional[int] = Field(None, description="Column number where error occurred (1-indexed)")
    found: Optional[str] = Field(None, description="Token that was found, or 'end of input'")
    expected: Optional[List[str]] = Field(None, description="List of expected tokens")
    context: Optional[str] = Field(None, description="Context snippet showing error location")

    def format_message(self) -> str:
        """Format a comprehensive syntax error message."""
        parts = []
        parts.append(f"Syntax error: {self.message}")

        if self.line is not None and self.column is not None:
            parts.append(f"Location: line {self.line}, column {self.column}")

        if self.found:
            parts.append(f"Found: {self.found}")

        if self.expected:
            if len(self.expected) == 1:
                parts.append(f"Expected: {self.expected[0]}")
            else:
                parts.append(f"Expected one of: {', '.join(self.expected)}")

        if self.context:
            parts.append(f"\nContext:\n{self.context}")

        suggestions = self._get_suggestions()
        if suggestions:
            parts.append("\nSuggestions:")
            parts.extend(f"  - {s}" for s in suggestions)

        return "\n".join(parts)

    def _get_suggestions(self) -> List[str]:
        suggestions = []
        expected = self.expected or []
        found = self.found or ""

        if found == END_OF_INPUT:
            if any("']'" in e for e in expected):
                suggestions.append("Check for a missing closing bracket ']'")
            elif any("'}'" in e for e in expected):
                suggestions.append("Check for a missing closing brace '}'")
        if "Keyword" in expected and found.startswith("Identifier"):
            suggestions.append(f"Column data types must be one of: {', '.join(sorted(TYPE_KEYWORDS))}")
        return suggestions


def build_context(text: Optional[str], line: Optional[int], column: Optional[int], span: int = 30) -> Optional[str]:
    """Return a two-line snippet with a caret under ``line``/``column``."""
    if not text or not line or not column:
        return None
    # Only "\n" breaks a line, as in the lexer.
    lines = text.split("\n")
    if line > len(lines):
        return None
    line_text = lines[line - 1]
    start = max(0, column - span)
    end = min(len(line_text), column + span)
    snippet = line_text[start:end]
    pointer = " " * (column - 1 - start) + "^"
    return f"  {snippet}\n  {pointer}"


class DBALError(Exception):
    """Base class for fatal DBAL front-end errors."""

    def __init__(self, detail: BaseModel):
        self.detail = detail
        super().__init__(detail.format_message())

    @property
    def message(self) -> str:
        return self.detail.message

    @property
    def line(self) -> Optional[int]:
        return self.detail.line

    @property
    def column(self) -> Optional[int]:
        return self.detail.column

    def __str__(self) -> str:
        return self.detail.format_message()


class DBALLexError(DBALError):
    """Raised when the lexer meets a character no token rule accepts."""

    detail: LexicalErrorDetail

    @property
    def position(self) -> Optional[int]:
        return self.detail.position

    @property
    def invalid_char(self) -> Optional[str]:
        return self.detail.invalid_char


class DBALSyntaxError(DBALError):
    """Raised when the token stream does not match the DBAL grammar."""

    detail: SyntaxErrorDetail

    @property
    def found(self) -> Optional[str]:
        return self.detail.found

    @property
    def expected(self) -> Optional[List[str]]:
        return self.detail.expected


def create_lexical_error(
    message: str,
    position: Optional[int] = None,
    line: Optional[int] = None,
    column: Optional[int] = None,
    invalid_char: Optional[str] = None,
    context: Optional[str] = None,
) -> DBALLexError:
    """Factory function to create a lexical error."""
    return DBALLexError(LexicalErrorDetail(
        message=message,
        position=position,
        line=line,
        column=column,
        invalid_char=invalid_char,
        context=context,
    ))


def create_syntax_error(
    message: str,
    line: Optional[int] = None,
    column: Optional[int] = None,
    found: Optional[str] = None,
    expected: Optional[List[str]] = None,
    context: Optional[str] = None,
) -> DBALSyntaxError:
    """Factory function to create a syntax error."""
    return DBALSyntaxError(SyntaxErrorDetail(
        message=message,
        line=line,
        column=column,
        found=found,
        expected=expected,
        context=context,
    ))
