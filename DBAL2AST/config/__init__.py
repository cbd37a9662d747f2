"""Configuration loading for DBAL2AST."""

from .loader import find_config_file, load_config, get_config, get_default_profile

__all__ = ["find_config_file", "load_config", "get_config", "get_default_profile"]
