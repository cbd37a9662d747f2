"""DBAL pipeline that runs both front-end stages with Pydantic models.

1. Tokenizes the text (lexer)
2. Parses the tokens into an AST (parser)

All intermediate results are stored in Pydantic models so a caller can
inspect which stage failed without catching exceptions.
"""

from __future__ import annotations

from typing import Optional, Union

from DBAL2AST.utils.logging import get_logger

from .grammar_profile import DBALGrammarProfile, parse_profile_string
from .lexer import tokenize_dbal
from .parser import parse_tokens
from .models import DBALPipelineResult

logger = get_logger(__name__)


def run_dbal_pipeline(
    text: str,
    profile: Optional[Union[DBALGrammarProfile, str]] = None,
) -> DBALPipelineResult:
    """Run tokenization and parsing and return structured results.

    Args:
        text: The DBAL source text
        profile: Optional grammar profile, or a profile string such as
                 "profile:v1+numbers"

    Returns:
        DBALPipelineResult containing the result of each stage

    Example:
        >>> result = run_dbal_pipeline("Table users { id int }")
        >>> result.overall_success
        True
        >>> result.ast.tables[0].name
        'users'
    """
    if isinstance(profile, str):
        profile = parse_profile_string(profile)

    # Phase 1: Tokenization
    tokenization_result = tokenize_dbal(text, profile=profile, return_model=True)
    if not tokenization_result.success:
        logger.debug("Pipeline stopped at lexical stage")
        return DBALPipelineResult.from_pipeline(text, tokenization_result, parsing=None)

    # Phase 2: Parsing (works on tokens from lexer)
    tokens = tokenization_result.to_tokens()
    parse_result = parse_tokens(tokens, original_text=text, return_model=True)

    return DBALPipelineResult.from_pipeline(text, tokenization_result, parsing=parse_result)
