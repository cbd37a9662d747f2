"""Intermediate Representation (IR) models for parsed DBAL schemas."""

from .models import SchemaAST, Table, Column, Reference

__all__ = ["SchemaAST", "Table", "Column", "Reference"]
