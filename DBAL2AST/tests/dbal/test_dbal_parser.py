import pytest

from DBAL2AST.dbal.lexer import tokenize_dbal, significant_tokens
from DBAL2AST.dbal.parser import DBALParser, parse_dbal, parse_tokens
from DBAL2AST.dbal.errors import DBALLexError, DBALSyntaxError, END_OF_INPUT
from DBAL2AST.dbal.models import ParseResult
from DBAL2AST.dbal.tokens import DBALToken, TokenKind
from DBAL2AST.ir.models.ast import Column, SchemaAST, Table


def parse(text: str) -> SchemaAST:
    return parse_tokens(tokenize_dbal(text), original_text=text)


# ============================================================================
# Well-formed input
# ============================================================================

def test_single_column_table() -> None:
    ast = parse("Table t { id int }")
    assert ast == SchemaAST(tables=[
        Table(
            name="t",
            columns=[Column(name="id", data_type="int", constraints=[], note=None)],
            note=None,
        )
    ])


def test_empty_input_is_empty_schema() -> None:
    assert parse("").tables == []
    assert parse("  \n\t ").tables == []


def test_empty_table_body() -> None:
    ast = parse("Table t {}")
    assert ast.tables[0].name == "t"
    assert ast.tables[0].columns == []


def test_tables_in_source_order(sample_schema: str) -> None:
    ast = parse(sample_schema)
    assert [t.name for t in ast.tables] == ["affiliate", "user", "membership"]
    assert len(ast.tables) == sample_schema.count("Table ")


def test_columns_in_declaration_order(sample_schema: str) -> None:
    affiliate = parse(sample_schema).get_table("affiliate")
    assert [c.name for c in affiliate.columns] == ["affiliateId", "code", "name", "createdAt", "updatedAt"]
    assert all(c.data_type == "string" for c in affiliate.columns)


def test_constraint_order_is_preserved() -> None:
    column = parse("Table t { id string [not null, unique] }").tables[0].columns[0]
    assert column.constraints == ["not", "null", "unique"]


def test_duplicate_constraints_are_kept() -> None:
    column = parse("Table t { id int [unique, unique] }").tables[0].columns[0]
    assert column.constraints == ["unique", "unique"]


def test_reference_constraint_is_raw_tokens() -> None:
    column = parse("Table t { uid string [not null, ref: <> user.userId] }").tables[0].columns[0]
    assert column.constraints == ["not", "null", "ref", ":", "<", ">", "user.userId"]


def test_string_and_identifier_constraints(sample_schema: str) -> None:
    ast = parse(sample_schema)
    assert ast.get_table("user").get_column("memberId").constraints == [
        "not", "null", "note", ":", "DMS member ID",
    ]
    assert ast.get_table("membership").get_column("isActive").constraints == [
        "not", "null", "default", ":", "true",
    ]


def test_table_notes(sample_schema: str) -> None:
    ast = parse(sample_schema)
    assert ast.get_table("user").note == "Simple user entity"
    assert ast.get_table("affiliate").get_column("code").note is None


def test_later_table_note_overwrites_earlier() -> None:
    ast = parse("Table t {\n  Note: 'first'\n  id int\n  Note: \"second\"\n}")
    assert ast.tables[0].note == "second"
    assert [c.name for c in ast.tables[0].columns] == ["id"]


def test_schema_qualified_table_name() -> None:
    ast = parse("Table ecommerce.orders { id int }")
    assert ast.tables[0].name == "ecommerce.orders"


def test_header_constraints_are_accepted() -> None:
    ast = parse("Table t [headercolor: red] {\n  id int\n}")
    table = ast.tables[0]
    assert [c.name for c in table.columns] == ["id"]
    assert table.constraints == ["headercolor", ":", "red"]


def test_constraint_block_inside_body_accumulates() -> None:
    ast = parse("Table t [a] {\n  [b, c]\n  id int\n}")
    table = ast.tables[0]
    assert table.constraints == ["a", "b", "c"]
    assert [c.name for c in table.columns] == ["id"]


def test_inline_column_note() -> None:
    ast = parse("Table t {\n  id int [unique] note: 'primary id'\n  name string note: \"display\"\n}")
    id_col, name_col = ast.tables[0].columns
    assert id_col.constraints == ["unique"]
    assert id_col.note == "primary id"
    assert name_col.note == "display"


def test_column_named_note_is_still_a_column() -> None:
    ast = parse("Table t {\n  id int\n  note string\n}")
    assert [(c.name, c.data_type) for c in ast.tables[0].columns] == [("id", "int"), ("note", "string")]
    assert ast.tables[0].columns[0].note is None


@pytest.mark.parametrize("data_type", ["bool", "string", "int", "float"])
def test_type_keywords(data_type: str) -> None:
    column = parse(f"Table t {{ c {data_type} }}").tables[0].columns[0]
    assert column.data_type == data_type


def test_parses_without_whitespace_tokens() -> None:
    tokens = significant_tokens(tokenize_dbal("Table t { id int [not null] }"))
    ast = parse_tokens(tokens)
    assert ast.tables[0].columns[0].constraints == ["not", "null"]


def test_parse_dbal_runs_both_stages() -> None:
    assert parse_dbal("Table a {}\nTable b {}").tables[1].name == "b"


def test_serializes_with_camel_case_data_type() -> None:
    ast = parse("Table t { id int }")
    dumped = ast.model_dump(by_alias=True)
    assert dumped["tables"][0]["columns"][0]["dataType"] == "int"
    assert '"dataType": "int"' in ast.to_json()


# ============================================================================
# Malformed input
# ============================================================================

def test_identifier_as_data_type_is_syntax_error() -> None:
    with pytest.raises(DBALSyntaxError) as exc_info:
        parse("Table t { id foo }")
    err = exc_info.value
    assert err.expected == ["Keyword"]
    assert err.found == "Identifier 'foo'"
    assert "Expected Keyword" in err.message
    assert (err.line, err.column) == (1, 14)


def test_unknown_top_level_token() -> None:
    with pytest.raises(DBALSyntaxError) as exc_info:
        parse("Note: 'x'")
    assert exc_info.value.found == "Keyword 'Note'"


def test_unknown_top_level_character_is_lex_error() -> None:
    with pytest.raises(DBALLexError) as exc_info:
        parse_dbal("@")
    assert exc_info.value.invalid_char == "@"


def test_keyword_table_name_is_syntax_error() -> None:
    with pytest.raises(DBALSyntaxError) as exc_info:
        parse("Table int { }")
    assert exc_info.value.expected == ["Identifier"]
    assert exc_info.value.found == "Keyword 'int'"


def test_missing_closing_brace_reports_end_of_input() -> None:
    with pytest.raises(DBALSyntaxError) as exc_info:
        parse("Table t { id int")
    err = exc_info.value
    assert err.found == END_OF_INPUT
    assert err.expected == ["Symbol '}'"]
    assert (err.line, err.column) == (1, 17)
    assert "end of input" in str(err)


def test_end_of_input_after_string_literal_counts_quotes() -> None:
    with pytest.raises(DBALSyntaxError) as exc_info:
        parse_dbal("Table t {\n  Note: 'abc'")
    err = exc_info.value
    assert err.found == END_OF_INPUT
    assert (err.line, err.column) == (2, 14)
    assert err.detail.context == "    Note: 'abc'\n               ^"


def test_end_of_input_after_unterminated_literal() -> None:
    with pytest.raises(DBALSyntaxError) as exc_info:
        parse_dbal("Table t {\n  Note: 'abc")
    assert (exc_info.value.line, exc_info.value.column) == (2, 13)


def test_end_of_input_after_trailing_newline() -> None:
    with pytest.raises(DBALSyntaxError) as exc_info:
        parse_dbal("Table t {\n  id int\n")
    assert (exc_info.value.line, exc_info.value.column) == (3, 1)


def test_end_location_without_lexer_spans() -> None:
    tokens = [
        DBALToken(TokenKind.KEYWORD, "Table", 0, 1, 1),
        DBALToken(TokenKind.WHITESPACE, " ", 5, 1, 6),
        DBALToken(TokenKind.IDENTIFIER, "t", 6, 1, 7),
    ]
    with pytest.raises(DBALSyntaxError) as exc_info:
        parse_tokens(tokens)
    assert (exc_info.value.line, exc_info.value.column) == (1, 8)


def test_missing_closing_bracket() -> None:
    with pytest.raises(DBALSyntaxError) as exc_info:
        parse("Table t { id int [not null")
    assert exc_info.value.found == END_OF_INPUT
    assert exc_info.value.expected == ["Symbol ']'"]
    assert "missing closing bracket" in str(exc_info.value)


def test_missing_open_brace() -> None:
    with pytest.raises(DBALSyntaxError) as exc_info:
        parse("Table t id int }")
    assert exc_info.value.expected == ["Symbol '{'"]


def test_unexpected_body_token() -> None:
    with pytest.raises(DBALSyntaxError) as exc_info:
        parse("Table t { 'oops' }")
    assert exc_info.value.found == "StringLiteral 'oops'"


def test_note_requires_string_literal() -> None:
    with pytest.raises(DBALSyntaxError) as exc_info:
        parse("Table t { Note: text }")
    assert exc_info.value.expected == ["StringLiteral"]


def test_unterminated_note_swallows_closing_brace() -> None:
    # The literal runs to end of input, so the table is never closed.
    source = "Table t {\n  Note: 'abc }"
    tokens = tokenize_dbal(source)
    assert tokens[-1].text == "abc }"
    with pytest.raises(DBALSyntaxError) as exc_info:
        parse_tokens(tokens, original_text=source)
    assert exc_info.value.found == END_OF_INPUT


def test_error_stops_at_first_violation() -> None:
    with pytest.raises(DBALSyntaxError) as exc_info:
        parse("Table a { id foo }\nTable b { id bar }")
    assert exc_info.value.found == "Identifier 'foo'"


def test_error_context_snippet() -> None:
    with pytest.raises(DBALSyntaxError) as exc_info:
        parse("Table t {\n  id foo\n}")
    err = exc_info.value
    assert (err.line, err.column) == (2, 6)
    assert "  id foo\n" in err.detail.context
    assert err.detail.context.endswith("^")
    assert "bool, float, int, string" in str(err)


def test_carriage_return_is_not_a_line_break_in_context() -> None:
    # "\r" lexes as whitespace, so the whole buffer is line 1.
    with pytest.raises(DBALSyntaxError) as exc_info:
        parse_dbal("Table t {\r  id foo\r}")
    err = exc_info.value
    assert (err.line, err.column) == (1, 16)
    assert err.detail.context == "  Table t {\r  id foo\r}\n                 ^"


# ============================================================================
# Model output
# ============================================================================

def test_return_model_on_success(sample_schema: str) -> None:
    result = parse_tokens(tokenize_dbal(sample_schema), return_model=True)
    assert isinstance(result, ParseResult)
    assert result.success is True
    assert result.table_count == 3
    assert result.column_count == 10
    assert result.ast.get_table("membership") is not None


def test_return_model_on_error() -> None:
    result = parse_tokens(tokenize_dbal("Table t {"), return_model=True)
    assert result.success is False
    assert result.ast is None
    assert result.error.found == END_OF_INPUT


def test_cursor_primitives() -> None:
    parser = DBALParser(tokenize_dbal("  t"))
    assert parser.peek().text == "  "
    parser.skip_whitespace()
    assert parser.advance().text == "t"
    assert parser.peek() is None
    assert parser.advance() is None
