"""Shared utilities for DBAL2AST."""
