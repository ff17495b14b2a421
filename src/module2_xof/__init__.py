"""
Module 2: Extendable-Output Hash Factory

Builds independent SHAKE sponge instances with absorb/squeeze streaming.
"""

from .shake import (
    ExtendableHash,
    create_extendable_hash,
    create_shake256,
    supported_variants,
    SHAKE128,
    SHAKE256,
    DEFAULT_VARIANT,
)
from .xof_errors import (
    XOFError,
    UnsupportedVariantError,
    XOFStateError,
)


__all__ = [
    'ExtendableHash',
    'create_extendable_hash',
    'create_shake256',
    'supported_variants',
    'SHAKE128',
    'SHAKE256',
    'DEFAULT_VARIANT',
    'XOFError',
    'UnsupportedVariantError',
    'XOFStateError',
]


__version__ = '1.0.0'
