"""Recursive-descent parser for DBAL.

This module works on tokens from the lexer, not on raw text. This enforces
proper separation: lexer -> tokens -> parser.

Grammar (one token of lookahead; whitespace tokens are skipped):

    schema          := { table }
    table           := "Table" ident [ "[" constraint-list "]" ] "{" { member } "}"
    member          := column | note | "[" constraint-list "]"
    column          := ident type-kw [ "[" constraint-list "]" ] [ "note" ":" string ]
    note            := "Note" ":" string
    constraint-list := token { "," token }

There is no error recovery: the first mismatch raises DBALSyntaxError and no
partial AST is returned.
"""

from __future__ import annotations

from typing import List, Optional, Union

from DBAL2AST.ir.models.ast import Column, SchemaAST, Table
from DBAL2AST.utils.logging import get_logger

from .errors import END_OF_INPUT, DBALSyntaxError, build_context, create_syntax_error
from .grammar_profile import DBALGrammarProfile
from .models import ParseResult
from .tokens import DBALToken, TokenKind

logger = get_logger(__name__)


class DBALParser:
    """Builds a SchemaAST from a token list.

    The productions share a single read cursor; a parser instance is good for
    exactly one ``parse()`` call.
    """

    def __init__(self, tokens: List[DBALToken], source_text: Optional[str] = None):
        self.tokens = tokens
        self.position = 0
        self.source_text = source_text

    # ------------------------------------------------------------------
    # Cursor primitives
    # ------------------------------------------------------------------

    def peek(self) -> Optional[DBALToken]:
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return None

    def advance(self) -> Optional[DBALToken]:
        token = self.peek()
        if token is not None:
            self.position += 1
        return token

    def skip_whitespace(self) -> None:
        while self.position < len(self.tokens) and self.tokens[self.position].kind is TokenKind.WHITESPACE:
            self.position += 1

    def peek_significant(self) -> Optional[DBALToken]:
        """Skip whitespace and return the next token without consuming it."""
        self.skip_whitespace()
        return self.peek()

    def _peek_after_next(self) -> Optional[DBALToken]:
        # Second significant token; only used to tell an inline `note:` apart
        # from a following column that happens to be named `note`.
        index = self.position + 1
        while index < len(self.tokens) and self.tokens[index].kind is TokenKind.WHITESPACE:
            index += 1
        return self.tokens[index] if index < len(self.tokens) else None

    def expect(self, kind: TokenKind, text: Optional[str] = None) -> DBALToken:
        """Consume the next significant token, which must match kind (and text)."""
        self.skip_whitespace()
        token = self.advance()
        if token is None or token.kind is not kind or (text is not None and token.text != text):
            expected = kind.value if text is None else f"{kind.value} {text!r}"
            raise self._error(f"Expected {expected}", token, expected=[expected])
        return token

    def _error(self, message: str, token: Optional[DBALToken], expected: Optional[List[str]] = None) -> DBALSyntaxError:
        if token is None:
            found = END_OF_INPUT
            line, column = self._end_location()
        else:
            found = token.describe()
            line, column = token.line, token.column
        return create_syntax_error(
            f"{message}, but got {found}",
            line=line,
            column=column,
            found=found,
            expected=expected,
            context=build_context(self.source_text, line, column),
        )

    def _end_location(self):
        if not self.tokens:
            return 1, 1
        last = self.tokens[-1]
        if last.end_line is not None and last.end_column is not None:
            return last.end_line, last.end_column
        # Hand-built tokens carry no end span; derive it from the text.
        lines = last.text.split("\n")
        if len(lines) == 1:
            return last.line, last.column + len(last.text)
        return last.line + len(lines) - 1, len(lines[-1]) + 1

    # ------------------------------------------------------------------
    # Productions
    # ------------------------------------------------------------------

    def parse(self) -> SchemaAST:
        """Parse every table declaration until the tokens are exhausted."""
        tables: List[Table] = []
        while True:
            token = self.peek_significant()
            if token is None:
                break
            if token.kind is TokenKind.KEYWORD and token.text == "Table":
                tables.append(self.parse_table())
            else:
                raise self._error("Unexpected token at top level", token, expected=["Keyword 'Table'"])
        return SchemaAST(tables=tables)

    def parse_table(self) -> Table:
        self.expect(TokenKind.KEYWORD, "Table")
        name = self.expect(TokenKind.IDENTIFIER).text

        constraints: List[str] = []
        token = self.peek_significant()
        if token is not None and token.is_symbol("["):
            self.parse_constraints(constraints)

        self.expect(TokenKind.SYMBOL, "{")

        columns: List[Column] = []
        note: Optional[str] = None
        while True:
            token = self.peek_significant()
            if token is None:
                # Let expect() report the missing brace.
                break
            if token.is_symbol("}"):
                break
            if token.kind is TokenKind.IDENTIFIER:
                columns.append(self.parse_column())
            elif token.kind is TokenKind.KEYWORD and token.text == "Note":
                # A later Note overwrites an earlier one.
                note = self.parse_note()
            elif token.is_symbol("["):
                self.parse_constraints(constraints)
            else:
                raise self._error(
                    f"Unexpected token in body of table {name!r}",
                    token,
                    expected=["Identifier", "Keyword 'Note'", "Symbol '['", "Symbol '}'"],
                )

        self.expect(TokenKind.SYMBOL, "}")
        logger.debug(f"Parsed table {name!r} with {len(columns)} column(s)")
        return Table(name=name, columns=columns, note=note, constraints=constraints)

    def parse_column(self) -> Column:
        name = self.expect(TokenKind.IDENTIFIER).text
        data_type = self.expect(TokenKind.KEYWORD).text

        constraints: List[str] = []
        token = self.peek_significant()
        if token is not None and token.is_symbol("["):
            self.parse_constraints(constraints)

        note: Optional[str] = None
        token = self.peek_significant()
        if token is not None and token.kind is TokenKind.IDENTIFIER and token.text == "note":
            following = self._peek_after_next()
            if following is not None and following.is_symbol(":"):
                self.advance()
                self.expect(TokenKind.SYMBOL, ":")
                note = self.expect(TokenKind.STRING_LITERAL).text

        return Column(name=name, data_type=data_type, constraints=constraints, note=note)

    def parse_constraints(self, into: List[str]) -> None:
        """Append the raw text of each bracketed entry to ``into``.

        Entries are not validated: ``ref: <> users.id`` becomes the five
        entries "ref", ":", "<", ">", "users.id".
        """
        self.expect(TokenKind.SYMBOL, "[")
        while True:
            token = self.peek_significant()
            if token is None or token.is_symbol("]"):
                break
            into.append(self.advance().text)
            token = self.peek_significant()
            if token is not None and token.is_symbol(","):
                self.advance()
        self.expect(TokenKind.SYMBOL, "]")

    def parse_note(self) -> str:
        self.expect(TokenKind.KEYWORD, "Note")
        self.expect(TokenKind.SYMBOL, ":")
        return self.expect(TokenKind.STRING_LITERAL).text


def parse_tokens(
    tokens: List[DBALToken],
    original_text: Optional[str] = None,
    return_model: bool = False,
) -> Union[SchemaAST, ParseResult]:
    """Parse tokens from the lexer into a SchemaAST.

    This is the PRIMARY parsing function - it works ONLY on tokens produced by
    the lexer. An empty token list is a valid, empty schema.

    Args:
        tokens: List of tokens from the lexer
        original_text: Original DBAL text (for error context snippets only)
        return_model: If True, returns ParseResult (Pydantic model) instead of SchemaAST

    Returns:
        If return_model=False: the SchemaAST
        If return_model=True: ParseResult with the AST or the error detail

    Raises:
        DBALSyntaxError: if parsing fails (only when return_model=False)
    """
    try:
        ast = DBALParser(tokens, source_text=original_text).parse()
    except DBALSyntaxError as e:
        if return_model:
            return ParseResult.from_error(e.detail)
        raise

    logger.debug(f"Parsed {len(ast.tables)} table(s) from {len(tokens)} tokens")
    if return_model:
        return ParseResult.from_success(ast)
    return ast


def parse_dbal(text: str, profile: Optional[DBALGrammarProfile] = None) -> SchemaAST:
    """Tokenize and parse DBAL text in one call.

    Raises:
        DBALLexError: on an unrecognized character
        DBALSyntaxError: on a grammar violation
    """
    from .lexer import tokenize_dbal

    tokens = tokenize_dbal(text, profile=profile)
    return parse_tokens(tokens, original_text=text)
