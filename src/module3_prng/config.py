"""
Configuration loading for key derivation and PRNG settings.
"""

import logging
import os
from typing import Any, Dict, Optional

import yaml

from .prng_errors import PRNGConfigurationError


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "default_config.yaml")


def get_default_config() -> Dict[str, Any]:
    """
    Get hardcoded default configuration.

    Returns:
        Default configuration dictionary
    """
    return {
        "hkdf": {
            "hash": "sha256",
            "backend": "hashlib",
            "info": "DLEQ_PROOF",
        },
        "xof": {
            "variant": "shake256",
        },
        "prng": {
            "name": "shake",
            "bit_length": 256,
        },
    }


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from a YAML file or use defaults.

    Args:
        config_path: Path to config file. If None, the packaged
                     default_config.yaml is used, falling back to
                     hardcoded defaults when it is missing.

    Returns:
        Configuration dictionary

    Raises:
        PRNGConfigurationError: If an explicit path cannot be read or parsed
    """
    if config_path is None:
        if not os.path.exists(DEFAULT_CONFIG_PATH):
            logger.debug("No default_config.yaml found, using built-in defaults")
            return get_default_config()
        config_path = DEFAULT_CONFIG_PATH

    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise PRNGConfigurationError(f"Cannot load config {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise PRNGConfigurationError(
            f"Config {config_path} must contain a mapping, got {type(config).__name__}"
        )

    logger.debug("Loaded config from %s", config_path)
    return config


def get_section(config: Dict[str, Any], section: str) -> Dict[str, Any]:
    """Return config[section], raising PRNGConfigurationError if absent."""
    try:
        value = config[section]
    except (KeyError, TypeError) as e:
        raise PRNGConfigurationError(f"Missing required config key: {section}") from e
    if not isinstance(value, dict):
        raise PRNGConfigurationError(f"Config section '{section}' must be a mapping")
    return value


def get_optional_section(config: Dict[str, Any], section: str) -> Dict[str, Any]:
    """Return config[section], or {} when absent or empty."""
    value = config.get(section)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise PRNGConfigurationError(f"Config section '{section}' must be a mapping")
    return value
