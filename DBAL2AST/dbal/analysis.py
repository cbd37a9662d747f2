"""Deterministic helpers to analyze a parsed DBAL schema.

The parser keeps constraints as flat raw strings. This module offers a typed
view on top of them without changing the AST:

- classify_constraints(): raw strings -> NotNull | Unique | Default | Reference | Unknown
- extract_references(): every `ref:` declaration in a schema, as raw strings

Anything that does not match a known shape becomes ``Unknown`` rather than
an error, so the view accepts everything the parser accepts.
"""

from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import BaseModel

from DBAL2AST.ir.models.ast import Reference, SchemaAST

# Symbols that may make up a relation operator: `<`, `>`, `<>`.
_RELATION_SYMBOLS = {"<", ">"}


class NotNullConstraint(BaseModel):
    kind: Literal["not_null"] = "not_null"


class UniqueConstraint(BaseModel):
    kind: Literal["unique"] = "unique"


class DefaultConstraint(BaseModel):
    kind: Literal["default"] = "default"
    value: Optional[str] = None


class ReferenceConstraint(BaseModel):
    kind: Literal["reference"] = "reference"
    operator: str = ""
    target: Optional[str] = None


class UnknownConstraint(BaseModel):
    kind: Literal["unknown"] = "unknown"
    raw: str


TypedConstraint = Union[
    NotNullConstraint,
    UniqueConstraint,
    DefaultConstraint,
    ReferenceConstraint,
    UnknownConstraint,
]


def classify_constraints(raw: List[str]) -> List[TypedConstraint]:
    """Group a flat list of raw constraint entries into typed constraints.

    Examples:
        >>> classify_constraints(["not", "null", "unique"])
        [NotNullConstraint(kind='not_null'), UniqueConstraint(kind='unique')]
        >>> classify_constraints(["pk"])
        [UnknownConstraint(kind='unknown', raw='pk')]
    """
    out: List[TypedConstraint] = []
    i = 0
    n = len(raw)
    while i < n:
        entry = raw[i]

        if entry == "not" and i + 1 < n and raw[i + 1] == "null":
            out.append(NotNullConstraint())
            i += 2
            continue

        if entry == "unique":
            out.append(UniqueConstraint())
            i += 1
            continue

        if entry == "default" and i + 1 < n and raw[i + 1] == ":":
            value = raw[i + 2] if i + 2 < n else None
            out.append(DefaultConstraint(value=value))
            i += 3
            continue

        if entry == "ref" and i + 1 < n and raw[i + 1] == ":":
            j = i + 2
            operator = ""
            while j < n and raw[j] in _RELATION_SYMBOLS:
                operator += raw[j]
                j += 1
            target = raw[j] if j < n else None
            out.append(ReferenceConstraint(operator=operator, target=target))
            i = j + 1
            continue

        out.append(UnknownConstraint(raw=entry))
        i += 1

    return out


def extract_references(ast: SchemaAST) -> List[Reference]:
    """Return every column-level `ref:` declaration in the schema.

    ``source`` is ``<table>.<column>`` of the declaring column and ``target``
    is the raw text after the relation operator; neither side is resolved.
    """
    references: List[Reference] = []
    for table in ast.tables:
        for column in table.columns:
            for constraint in classify_constraints(column.constraints):
                if isinstance(constraint, ReferenceConstraint) and constraint.target:
                    references.append(Reference(
                        source=f"{table.name}.{column.name}",
                        target=constraint.target,
                        operator=constraint.operator or None,
                    ))
    return references


def is_nullable(raw: List[str]) -> bool:
    """True unless the raw constraints contain `not null`."""
    return not any(isinstance(c, NotNullConstraint) for c in classify_constraints(raw))
