"""Pydantic models for the intermediate results of the DBAL front end.

- Lexer: TokenizationResult
- Parser: ParseResult
- Full Pipeline: DBALPipelineResult

These are returned instead of raising when a caller asks for
``return_model=True``; the error details are the same models carried by
the exceptions in ``errors.py``.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from DBAL2AST.ir.models.ast import SchemaAST

from .errors import LexicalErrorDetail, SyntaxErrorDetail


class PipelineStage(str, Enum):
    """Stages of the DBAL front end."""
    LEXICAL = "lexical"
    SYNTAX = "syntax"
    COMPLETE = "complete"


# ============================================================================
# Lexer Models
# ============================================================================

class DBALTokenModel(BaseModel):
    """Pydantic model for a DBAL token."""

    kind: str = Field(description="Token kind (e.g., 'Keyword', 'Symbol')")
    text: str = Field(description="Exact matched text")
    position: int = Field(description="Offset of the first character (0-indexed)")
    line: int = Field(description="Line number where token appears (1-indexed)")
    column: int = Field(description="Column number where token appears (1-indexed)")
    end_line: Optional[int] = Field(None, description="Line just past the token's last character")
    end_column: Optional[int] = Field(None, description="Column just past the token's last character")

    model_config = ConfigDict(frozen=True)


class TokenizationResult(BaseModel):
    """Result of lexical analysis (tokenization) phase."""

    success: bool = Field(description="Whether tokenization succeeded")
    tokens: List[DBALTokenModel] = Field(default_factory=list, description="List of tokens produced")
    original_text: str = Field(description="Source text that was tokenized")
    token_count: int = Field(description="Total number of tokens")
    error: Optional[LexicalErrorDetail] = Field(None, description="Error detail if tokenization failed")
    timestamp: datetime = Field(default_factory=datetime.now, description="When tokenization was performed")

    @classmethod
    def from_tokens(cls, tokens: List[Any], text: str) -> TokenizationResult:
        """Create TokenizationResult from a list of DBALToken objects."""
        token_models = [
            DBALTokenModel(
                kind=token.kind.value,
                text=token.text,
                position=token.position,
                line=token.line,
                column=token.column,
                end_line=token.end_line,
                end_column=token.end_column,
            )
            for token in tokens
        ]
        return cls(
            success=True,
            tokens=token_models,
            original_text=text,
            token_count=len(token_models),
        )

    @classmethod
    def from_error(cls, text: str, error: LexicalErrorDetail) -> TokenizationResult:
        """Create TokenizationResult from an error."""
        return cls(
            success=False,
            tokens=[],
            original_text=text,
            token_count=0,
            error=error,
        )

    def to_tokens(self) -> List[Any]:
        """Rebuild DBALToken objects from the stored token models."""
        from .tokens import DBALToken, TokenKind

        return [
            DBALToken(
                kind=TokenKind(t.kind),
                text=t.text,
                position=t.position,
                line=t.line,
                column=t.column,
                end_line=t.end_line,
                end_column=t.end_column,
            )
            for t in self.tokens
        ]


# ============================================================================
# Parser Models
# ============================================================================

class ParseResult(BaseModel):
    """Result of syntax analysis (parsing) phase."""

    success: bool = Field(description="Whether parsing succeeded")
    ast: Optional[SchemaAST] = Field(None, description="The AST (only if parsing succeeded)")
    error: Optional[SyntaxErrorDetail] = Field(None, description="Detailed error information if parsing failed")
    timestamp: datetime = Field(default_factory=datetime.now, description="When parsing was performed")

    table_count: int = Field(0, description="Number of tables in the AST")
    column_count: int = Field(0, description="Number of columns across all tables")

    @classmethod
    def from_success(cls, ast: SchemaAST) -> ParseResult:
        """Create ParseResult from a successful parse."""
        return cls(
            success=True,
            ast=ast,
            table_count=len(ast.tables),
            column_count=sum(len(t.columns) for t in ast.tables),
        )

    @classmethod
    def from_error(cls, error: SyntaxErrorDetail) -> ParseResult:
        """Create ParseResult from a parse error."""
        return cls(success=False, ast=None, error=error)


# ============================================================================
# Full Pipeline Model
# ============================================================================

class DBALPipelineResult(BaseModel):
    """Complete result of running both front-end stages."""

    original_text: str = Field(description="Source text")
    timestamp: datetime = Field(default_factory=datetime.now, description="When the pipeline was executed")

    tokenization: TokenizationResult = Field(description="Result from lexical analysis phase")
    parsing: Optional[ParseResult] = Field(None, description="Result from syntax analysis (None if tokenization failed)")

    overall_success: bool = Field(description="Whether both stages passed")
    stage_failed: Optional[PipelineStage] = Field(None, description="First stage that failed (None if all passed)")
    total_tokens: int = Field(0, description="Total number of tokens produced")

    @property
    def ast(self) -> Optional[SchemaAST]:
        return self.parsing.ast if self.parsing else None

    def get_summary(self) -> str:
        """Get a human-readable summary of the pipeline result."""
        parts = [f"Overall Status: {'SUCCESS' if self.overall_success else 'FAILED'}"]

        if self.stage_failed:
            parts.append(f"Failed at stage: {self.stage_failed.value}")

        parts.append(f"  1. Lexical (Tokenization): {'PASSED' if self.tokenization.success else 'FAILED'}")
        if self.tokenization.success:
            parts.append(f"     - Tokens: {self.total_tokens}")
        elif self.tokenization.error:
            parts.append(f"     - Error: {self.tokenization.error.message}")

        if self.parsing:
            parts.append(f"  2. Syntax (Parsing): {'PASSED' if self.parsing.success else 'FAILED'}")
            if self.parsing.success:
                parts.append(f"     - Tables: {self.parsing.table_count}, Columns: {self.parsing.column_count}")
            elif self.parsing.error:
                parts.append(f"     - Error: {self.parsing.error.message}")

        return "\n".join(parts)

    @classmethod
    def from_pipeline(
        cls,
        text: str,
        tokenization: TokenizationResult,
        parsing: Optional[ParseResult] = None,
    ) -> DBALPipelineResult:
        """Create a pipeline result from individual phase results."""
        stage_failed = None
        if not tokenization.success:
            stage_failed = PipelineStage.LEXICAL
        elif parsing is None or not parsing.success:
            stage_failed = PipelineStage.SYNTAX

        return cls(
            original_text=text,
            tokenization=tokenization,
            parsing=parsing,
            overall_success=stage_failed is None,
            stage_failed=stage_failed,
            total_tokens=tokenization.token_count,
        )
