"""
Module 3: Seeded PRNG selection

Wraps Module 1 (HKDF) and Module 2 (SHAKE256) behind one named PRNG
interface, configured from YAML.

Public API:
    - create_prng(name, seed, ...) -> PRNG
    - create_prng_from_config(seed, config) -> PRNG
    - load_config(path) -> dict
"""

from .prng import (
    PRNG,
    ShakePRNG,
    HkdfPRNG,
    create_prng,
    create_prng_from_config,
    encode_counter,
    PRNG_SHAKE,
    PRNG_HKDF,
    DEFAULT_INFO,
)
from .config import load_config, get_default_config
from .prng_errors import (
    PRNGError,
    UnsupportedPRNGError,
    PRNGConfigurationError,
)

__version__ = "1.0.0"

__all__ = [
    "PRNG",
    "ShakePRNG",
    "HkdfPRNG",
    "create_prng",
    "create_prng_from_config",
    "encode_counter",
    "PRNG_SHAKE",
    "PRNG_HKDF",
    "DEFAULT_INFO",
    "load_config",
    "get_default_config",
    "PRNGError",
    "UnsupportedPRNGError",
    "PRNGConfigurationError",
]
