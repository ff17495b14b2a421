"""
Pluggable keyed-hash (HMAC) capability.

HKDF is written against a small interface rather than a fixed hash:

    keyed_hash.name          -> str
    keyed_hash.digest_size   -> int (bytes)
    keyed_hash.new(key)      -> context with update(data) and digest()

Two backends are provided. The hashlib backend uses the standard library
hmac module; the cryptography backend uses
cryptography.hazmat.primitives.hmac.
"""

import hashlib
import hmac
import re
from typing import Dict, Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import hmac as crypto_hmac

from .kdf_errors import UnsupportedHashError, KDFConfigurationError


BACKEND_HASHLIB = 'hashlib'
BACKEND_CRYPTOGRAPHY = 'cryptography'

# Fixed-output hashes accepted by the cryptography backend
_CRYPTOGRAPHY_ALGORITHMS: Dict[str, type] = {
    'sha1': hashes.SHA1,
    'sha224': hashes.SHA224,
    'sha256': hashes.SHA256,
    'sha384': hashes.SHA384,
    'sha512': hashes.SHA512,
    'sha512_224': hashes.SHA512_224,
    'sha512_256': hashes.SHA512_256,
    'sha3_256': hashes.SHA3_256,
    'sha3_384': hashes.SHA3_384,
    'sha3_512': hashes.SHA3_512,
}


def _normalize_name(name: str) -> str:
    """'SHA-256' -> 'sha256', 'sha3-256' -> 'sha3_256', 'sha512-256' -> 'sha512_256'."""
    normalized = name.lower().replace('-', '_')
    return re.sub(r'^sha_(\d+)$', r'sha\1', normalized)


class HashlibKeyedHash:
    """HMAC over a hashlib algorithm, selected by name."""

    def __init__(self, name: str = 'sha256'):
        normalized = _normalize_name(name)
        try:
            reference = hashlib.new(normalized)
        except (ValueError, TypeError) as e:
            raise UnsupportedHashError(f"Unknown hash algorithm: {name}") from e

        # shake_* report digest_size 0 and cannot key an HMAC
        if reference.digest_size == 0:
            raise UnsupportedHashError(
                f"Hash {name} has no fixed digest size and cannot be used with HMAC"
            )

        self.name = normalized
        self.digest_size = reference.digest_size

    def new(self, key: bytes):
        return hmac.new(key, digestmod=self.name)

    def __repr__(self) -> str:
        return f"HashlibKeyedHash({self.name!r})"


class _CryptographyHMACContext:
    """Adapts cryptography's HMAC (update/finalize) to update/digest."""

    def __init__(self, key: bytes, algorithm: hashes.HashAlgorithm):
        self._ctx = crypto_hmac.HMAC(key, algorithm)

    def update(self, data: bytes) -> None:
        self._ctx.update(data)

    def digest(self) -> bytes:
        return self._ctx.finalize()


class CryptographyKeyedHash:
    """HMAC over a cryptography HashAlgorithm instance."""

    def __init__(self, algorithm: hashes.HashAlgorithm):
        if isinstance(algorithm, hashes.ExtendableOutputFunction):
            raise UnsupportedHashError(
                f"Hash {algorithm.name} is extendable-output and cannot be used with HMAC"
            )
        self.algorithm = algorithm
        self.name = algorithm.name.replace('-', '_')
        self.digest_size = algorithm.digest_size

    @classmethod
    def from_name(cls, name: str) -> 'CryptographyKeyedHash':
        normalized = _normalize_name(name)
        if normalized not in _CRYPTOGRAPHY_ALGORITHMS:
            raise UnsupportedHashError(f"Unknown hash algorithm: {name}")
        return cls(_CRYPTOGRAPHY_ALGORITHMS[normalized]())

    def new(self, key: bytes) -> _CryptographyHMACContext:
        return _CryptographyHMACContext(key, self.algorithm)

    def __repr__(self) -> str:
        return f"CryptographyKeyedHash({self.name!r})"


KeyedHash = Union[HashlibKeyedHash, CryptographyKeyedHash]


def get_keyed_hash(name: str = 'sha256', backend: str = BACKEND_HASHLIB) -> KeyedHash:
    """
    Resolve a hash name to a keyed-hash capability.

    Args:
        name: Hash algorithm name, e.g. 'sha256' or 'sha3_256'
        backend: 'hashlib' or 'cryptography'

    Returns:
        Keyed-hash object usable by hkdf_extract/hkdf_expand

    Raises:
        UnsupportedHashError: If the hash is unknown or extendable-output
        KDFConfigurationError: If the backend is unknown
    """
    if backend == BACKEND_HASHLIB:
        return HashlibKeyedHash(name)
    elif backend == BACKEND_CRYPTOGRAPHY:
        return CryptographyKeyedHash.from_name(name)
    else:
        raise KDFConfigurationError(f"Unknown keyed-hash backend: {backend}")


def resolve_keyed_hash(hash) -> KeyedHash:
    """Accept either a hash name or an object already exposing new()/digest_size."""
    if isinstance(hash, str):
        return get_keyed_hash(hash)
    if isinstance(hash, hashes.HashAlgorithm):
        return CryptographyKeyedHash(hash)
    if hasattr(hash, 'new') and hasattr(hash, 'digest_size'):
        return hash
    raise TypeError(f"Expected a hash name or keyed-hash object, got {type(hash)}")
