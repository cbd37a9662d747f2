"""Pydantic models for the DBAL abstract syntax tree.

The parser builds these nodes once; callers receive the finished ``SchemaAST``
and should treat it as read-only. Serialized field names follow the
camelCase used by the DBAL tooling (``dataType``).
"""

from __future__ import annotations

from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


class Column(BaseModel):
    type: Literal["Column"] = "Column"
    name: str
    data_type: str = Field(alias="dataType")
    constraints: List[str] = Field(default_factory=list)  # raw constraint tokens, source order
    note: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class Table(BaseModel):
    type: Literal["Table"] = "Table"
    name: str  # may be schema-qualified, e.g. "ecommerce.orders"
    columns: List[Column] = Field(default_factory=list)
    note: Optional[str] = None
    # Bracketed metadata found after the table name or inside the body.
    constraints: List[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    def get_column(self, name: str) -> Optional[Column]:
        for column in self.columns:
            if column.name == name:
                return column
        return None


class Reference(BaseModel):
    """A column-level relationship recorded as raw source/target strings."""

    type: Literal["Reference"] = "Reference"
    source: str
    target: str
    operator: Optional[str] = None  # raw relation symbols, e.g. "<>" or ">"


class SchemaAST(BaseModel):
    tables: List[Table] = Field(default_factory=list)

    def get_table(self, name: str) -> Optional[Table]:
        for table in self.tables:
            if table.name == name:
                return table
        return None

    def to_json(self, indent: Optional[int] = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)
