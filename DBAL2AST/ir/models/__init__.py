"""AST node models."""

from .ast import SchemaAST, Table, Column, Reference

__all__ = ["SchemaAST", "Table", "Column", "Reference"]
