"""DBAL front end: schema text -> tokens -> AST.

This package provides:
- A lexer (tokenization) - produces tokens from DBAL text
- A parser (recursive descent) - works ONLY on tokens from the lexer
- Pydantic models for structured intermediate results
- A pipeline running both stages
- A typed view over the raw constraint strings

Architecture:
- Lexer: tokenize_dbal() - converts text -> tokens
- Parser: parse_tokens() - converts tokens -> SchemaAST (PRIMARY function)
- Parser: parse_dbal() - convenience wrapper running both stages
- Pipeline: run_dbal_pipeline() - both stages, results as models
"""

from .tokens import DBALToken, TokenKind, KEYWORDS, TYPE_KEYWORDS
from .lexer import DBALLexer, tokenize_dbal
from .parser import DBALParser, parse_tokens, parse_dbal
from .grammar_profile import (
    DBALGrammarProfile,
    FEATURE_NUMBERS,
    FEATURE_UNDERSCORE_IDENTIFIERS,
    build_profile,
    parse_profile_string,
)
from .models import TokenizationResult, ParseResult, DBALPipelineResult, PipelineStage
from .pipeline import run_dbal_pipeline
from .analysis import classify_constraints, extract_references
from .errors import (
    DBALError,
    DBALLexError,
    DBALSyntaxError,
    LexicalErrorDetail,
    SyntaxErrorDetail,
)

__all__ = [
    # Tokens
    "DBALToken",
    "TokenKind",
    "KEYWORDS",
    "TYPE_KEYWORDS",
    # Lexer
    "DBALLexer",
    "tokenize_dbal",
    # Parser
    "DBALParser",
    "parse_tokens",
    "parse_dbal",
    # Grammar profile
    "DBALGrammarProfile",
    "FEATURE_NUMBERS",
    "FEATURE_UNDERSCORE_IDENTIFIERS",
    "build_profile",
    "parse_profile_string",
    # Models
    "TokenizationResult",
    "ParseResult",
    "DBALPipelineResult",
    "PipelineStage",
    # Pipeline
    "run_dbal_pipeline",
    # Analysis
    "classify_constraints",
    "extract_references",
    # Errors
    "DBALError",
    "DBALLexError",
    "DBALSyntaxError",
    "LexicalErrorDetail",
    "SyntaxErrorDetail",
]
