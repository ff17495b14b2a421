"""
HKDF (RFC 5869) Extract-then-Expand over a pluggable keyed hash.
"""

import logging
from typing import Optional

from .kdf_errors import OutputTooLargeError
from .keyed_hash import resolve_keyed_hash


logger = logging.getLogger(__name__)

# The block counter is a single byte, so at most 255 blocks
MAX_BLOCKS = 255

_BYTES_LIKE = (bytes, bytearray, memoryview)


def _require_bytes(value, name: str) -> bytes:
    if not isinstance(value, _BYTES_LIKE):
        raise TypeError(f"{name} must be bytes-like, got {type(value)}")
    return bytes(value)


def max_output_length(hash='sha256') -> int:
    """Largest OKM length (in bytes) HKDF-Expand can produce for this hash."""
    return MAX_BLOCKS * resolve_keyed_hash(hash).digest_size


def hkdf_extract(salt: Optional[bytes], ikm: bytes, hash='sha256') -> bytes:
    """
    HKDF-Extract step.

    Args:
        salt: Salt value (key for HMAC). None or empty means HashLen zero bytes.
        ikm: Input keying material (message for HMAC)
        hash: Hash name or keyed-hash object

    Returns:
        Pseudorandom key (PRK), digest_size bytes long
    """
    keyed_hash = resolve_keyed_hash(hash)
    ikm = _require_bytes(ikm, 'ikm')

    salt = b"" if salt is None else _require_bytes(salt, 'salt')
    if len(salt) == 0:
        salt = b"\x00" * keyed_hash.digest_size

    if len(ikm) == 0:
        logger.warning("HKDF-Extract called with empty input keying material")

    mac = keyed_hash.new(salt)
    mac.update(ikm)
    return mac.digest()


def hkdf_expand(prk: bytes, info: Optional[bytes], length: int, hash='sha256') -> bytes:
    """
    HKDF-Expand step.

    Computes T(i) = HMAC(PRK, T(i-1) || info || i) for i = 1..N and returns
    the first `length` bytes of T(1) || T(2) || ... || T(N).

    Args:
        prk: Pseudorandom key, usually from hkdf_extract
        info: Context and application specific information (may be empty)
        length: Length of output keying material in bytes
        hash: Hash name or keyed-hash object (same family as Extract)

    Returns:
        Output keying material of exactly `length` bytes

    Raises:
        OutputTooLargeError: If ceil(length / HashLen) > 255
        ValueError: If length is negative
    """
    keyed_hash = resolve_keyed_hash(hash)
    prk = _require_bytes(prk, 'prk')
    info = b"" if info is None else _require_bytes(info, 'info')

    if isinstance(length, bool) or not isinstance(length, int):
        raise TypeError(f"length must be int, got {type(length)}")
    if length < 0:
        raise ValueError(f"length must be >= 0, got {length}")

    hash_len = keyed_hash.digest_size
    n = (length + hash_len - 1) // hash_len

    if n > MAX_BLOCKS:
        raise OutputTooLargeError(
            f"HKDF error, number of proposed iterations too large: {n} "
            f"(length={length}, max={MAX_BLOCKS * hash_len})",
            requested_length=length,
            num_blocks=n,
            max_length=MAX_BLOCKS * hash_len,
        )

    logger.debug("HKDF-Expand: %d bytes in %d block(s) of %s", length, n, keyed_hash.name)

    okm = bytearray()
    previous = b""

    for i in range(1, n + 1):
        mac = keyed_hash.new(prk)
        mac.update(previous + info + bytes([i]))
        previous = mac.digest()
        okm += previous

    return bytes(okm[:length])


def evaluate_hkdf(ikm: bytes, length: int, info: Optional[bytes],
                  salt: Optional[bytes], hash='sha256') -> bytes:
    """One-shot Extract+Expand: derive `length` bytes from ikm."""
    keyed_hash = resolve_keyed_hash(hash)
    prk = hkdf_extract(salt, ikm, keyed_hash)
    return hkdf_expand(prk, info, length, keyed_hash)


class HKDF:
    """
    Extract once, expand many times.

    The PRK stays inside the instance; each expand() call derives an
    independent sub-key bound to its own info tag.

    Example:
        >>> kdf = HKDF(ikm=shared_secret, salt=b"session-salt")
        >>> enc_key = kdf.expand(b"encryption", 32)
        >>> mac_key = kdf.expand(b"authentication", 32)
    """

    def __init__(self, ikm: bytes, salt: Optional[bytes] = None, hash='sha256'):
        self.keyed_hash = resolve_keyed_hash(hash)
        self._prk = hkdf_extract(salt, ikm, self.keyed_hash)

    @property
    def max_length(self) -> int:
        return MAX_BLOCKS * self.keyed_hash.digest_size

    def expand(self, info: Optional[bytes], length: int) -> bytes:
        return hkdf_expand(self._prk, info, length, self.keyed_hash)

    def __repr__(self) -> str:
        return f"HKDF(hash={self.keyed_hash.name!r})"
