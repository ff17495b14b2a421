"""
Module 1: HKDF Engine

HMAC-based Extract-then-Expand key derivation (RFC 5869) over a
pluggable keyed-hash capability.

Public API:
    - hkdf_extract(salt, ikm, hash) -> bytes
    - hkdf_expand(prk, info, length, hash) -> bytes
    - evaluate_hkdf(ikm, length, info, salt, hash) -> bytes
    - HKDF(ikm, salt, hash).expand(info, length) -> bytes
    - get_keyed_hash(name, backend) -> keyed hash
"""

from .hkdf import (
    hkdf_extract,
    hkdf_expand,
    evaluate_hkdf,
    max_output_length,
    HKDF,
    MAX_BLOCKS,
)
from .keyed_hash import (
    get_keyed_hash,
    HashlibKeyedHash,
    CryptographyKeyedHash,
    BACKEND_HASHLIB,
    BACKEND_CRYPTOGRAPHY,
)
from .kdf_errors import (
    KDFError,
    OutputTooLargeError,
    UnsupportedHashError,
    KDFConfigurationError,
)


__all__ = [
    'hkdf_extract',
    'hkdf_expand',
    'evaluate_hkdf',
    'max_output_length',
    'HKDF',
    'MAX_BLOCKS',
    'get_keyed_hash',
    'HashlibKeyedHash',
    'CryptographyKeyedHash',
    'BACKEND_HASHLIB',
    'BACKEND_CRYPTOGRAPHY',
    'KDFError',
    'OutputTooLargeError',
    'UnsupportedHashError',
    'KDFConfigurationError',
]


__version__ = '1.0.0'
