"""Lexer/tokenizer for DBAL schema text.

This module provides pure tokenization, independent of parsing. The scan is a
single forward pass over the input with no backtracking:

- whitespace run           -> Whitespace
- letter, then [A-Za-z0-9.]* -> Keyword (reserved word) or Identifier
- '...' or "..."           -> StringLiteral (quotes stripped, no escapes)
- one of { } [ ] : , < >   -> Symbol
- anything else            -> DBALLexError (fatal, no resynchronization)

Architecture:
- Lexer: Pure tokenization (this module)
- Parser: Builds the AST from the token list (parser.py)
"""

from __future__ import annotations

from typing import List, Optional, Union

from DBAL2AST.utils.logging import get_logger

from .grammar_profile import DBALGrammarProfile, FEATURE_NUMBERS, FEATURE_UNDERSCORE_IDENTIFIERS
from .tokens import DBALToken, KEYWORDS, QUOTES, SYMBOLS, TokenKind
from .errors import DBALLexError, build_context, create_lexical_error
from .models import TokenizationResult

logger = get_logger(__name__)


def _is_letter(char: str) -> bool:
    return ("a" <= char <= "z") or ("A" <= char <= "Z")


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


class DBALLexer:
    """Converts raw DBAL text into an ordered list of tokens.

    Each instance owns its cursor and output buffer; create a new lexer (or
    call ``tokenize_dbal``) for every input.
    """

    def __init__(self, text: str, profile: Optional[DBALGrammarProfile] = None):
        self.text = text
        self.profile = profile or DBALGrammarProfile()
        self.position = 0
        self.line = 1
        self.column = 1
        self.tokens: List[DBALToken] = []
        self._underscores = self.profile.enabled(FEATURE_UNDERSCORE_IDENTIFIERS)
        self._numbers = self.profile.enabled(FEATURE_NUMBERS)

    def _peek(self, offset: int = 0) -> str:
        index = self.position + offset
        return self.text[index] if index < len(self.text) else ""

    def _advance(self) -> str:
        char = self.text[self.position]
        self.position += 1
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return char

    def _at_end(self) -> bool:
        return self.position >= len(self.text)

    def _emit(self, kind: TokenKind, text: str, start: int, line: int, column: int) -> None:
        self.tokens.append(DBALToken(
            kind=kind,
            text=text,
            position=start,
            line=line,
            column=column,
            end_line=self.line,
            end_column=self.column,
        ))

    def _starts_identifier(self, char: str) -> bool:
        return _is_letter(char) or (self._underscores and char == "_")

    def _continues_identifier(self, char: str) -> bool:
        if not char:
            return False
        return _is_letter(char) or _is_digit(char) or char == "." or (self._underscores and char == "_")

    def tokenize(self) -> List[DBALToken]:
        """Scan the whole input and return the token list."""
        while not self._at_end():
            char = self._peek()

            if char.isspace():
                self._scan_whitespace()
            elif self._starts_identifier(char):
                self._scan_word()
            elif char in QUOTES:
                self._scan_string()
            elif char in SYMBOLS:
                start, line, column = self.position, self.line, self.column
                self._emit(TokenKind.SYMBOL, self._advance(), start, line, column)
            elif self._numbers and _is_digit(char):
                self._scan_number()
            else:
                raise create_lexical_error(
                    f"Unexpected character {char!r} at position {self.position}",
                    position=self.position,
                    line=self.line,
                    column=self.column,
                    invalid_char=char,
                    context=build_context(self.text, self.line, self.column),
                )

        return self.tokens

    def _scan_whitespace(self) -> None:
        start, line, column = self.position, self.line, self.column
        while not self._at_end() and self._peek().isspace():
            self._advance()
        self._emit(TokenKind.WHITESPACE, self.text[start:self.position], start, line, column)

    def _scan_word(self) -> None:
        start, line, column = self.position, self.line, self.column
        while self._continues_identifier(self._peek()):
            self._advance()
        word = self.text[start:self.position]
        kind = TokenKind.KEYWORD if word in KEYWORDS else TokenKind.IDENTIFIER
        self._emit(kind, word, start, line, column)

    def _scan_string(self) -> None:
        start, line, column = self.position, self.line, self.column
        quote = self._advance()
        body_start = self.position
        while not self._at_end() and self._peek() != quote:
            self._advance()
        body = self.text[body_start:self.position]
        if self._at_end():
            # The literal silently runs to end of input.
            logger.warning(
                f"Unterminated string literal starting at line {line}, column {column}; "
                f"accepting it up to end of input"
            )
        else:
            self._advance()
        self._emit(TokenKind.STRING_LITERAL, body, start, line, column)

    def _scan_number(self) -> None:
        start, line, column = self.position, self.line, self.column
        while _is_digit(self._peek()):
            self._advance()
        if self._peek() == "." and _is_digit(self._peek(1)):
            self._advance()
            while _is_digit(self._peek()):
                self._advance()
        self._emit(TokenKind.NUMBER, self.text[start:self.position], start, line, column)


def tokenize_dbal(
    text: str,
    profile: Optional[DBALGrammarProfile] = None,
    return_model: bool = False,
) -> Union[List[DBALToken], TokenizationResult]:
    """Tokenize DBAL text into a list of typed tokens.

    This is a pure lexer function - it only tokenizes and does not parse.

    Args:
        text: The DBAL source text
        profile: Optional grammar profile (for extensions)
        return_model: If True, returns TokenizationResult (Pydantic model) instead of List[DBALToken]

    Returns:
        If return_model=False: List of DBALToken objects in input order
        If return_model=True: TokenizationResult with structured tokenization information

    Raises:
        DBALLexError: On an unrecognized character (only when return_model=False)
    """
    source = text or ""
    try:
        tokens = DBALLexer(source, profile=profile).tokenize()
    except DBALLexError as e:
        if return_model:
            return TokenizationResult.from_error(source, e.detail)
        raise

    logger.debug(f"Tokenized {len(source)} characters into {len(tokens)} tokens")
    if return_model:
        return TokenizationResult.from_tokens(tokens, source)
    return tokens


def significant_tokens(tokens: List[DBALToken]) -> List[DBALToken]:
    """Return the tokens with Whitespace (and Comment) tokens removed."""
    return [t for t in tokens if t.kind not in (TokenKind.WHITESPACE, TokenKind.COMMENT)]
