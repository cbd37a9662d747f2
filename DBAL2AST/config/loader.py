"""Load configuration from YAML file."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from DBAL2AST.dbal.grammar_profile import DBALGrammarProfile, build_profile


CONFIG_ENV_VAR = "DBAL2AST_CONFIG"


def find_config_file() -> Path:
    """Find config.yaml, honouring the DBAL2AST_CONFIG override."""
    override = os.environ.get(CONFIG_ENV_VAR)
    config_file = Path(override) if override else Path(__file__).parent / "config.yaml"

    if not config_file.exists():
        raise FileNotFoundError(
            f"config.yaml not found at {config_file}. "
            f"Please create the configuration file."
        )

    return config_file


def load_config() -> Dict[str, Any]:
    """
    Load configuration from config.yaml.

    Returns:
        dict: Configuration dictionary

    Raises:
        FileNotFoundError: If config.yaml is not found
        yaml.YAMLError: If YAML parsing fails
    """
    config_file = find_config_file()

    with open(config_file, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f)

    return config or {}


def get_config(section: Optional[str] = None) -> Any:
    """
    Get configuration value(s).

    Args:
        section: Optional section name (e.g., "dbal", "logging")
                 If None, returns entire config

    Returns:
        Configuration value or dictionary
    """
    config = load_config()

    if section is None:
        return config

    return config.get(section, {}) or {}


def get_default_profile() -> DBALGrammarProfile:
    """Build the grammar profile described by the ``dbal`` section."""
    dbal = get_config("dbal")
    return build_profile(
        version=str(dbal.get("grammar_version", "v1")),
        features=dbal.get("features") or [],
    )
