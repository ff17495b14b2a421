"""
SHAKE extendable-output hash instances.

Each call to create_extendable_hash() returns an independent sponge. Data
is absorbed with update(); output is read with squeeze(), which continues
the output stream across calls, or digest(), which always returns the
stream from its start.
"""

import hashlib
import logging
from typing import Callable, Dict

from .xof_errors import UnsupportedVariantError, XOFStateError


logger = logging.getLogger(__name__)

SHAKE128 = 'shake128'
SHAKE256 = 'shake256'

DEFAULT_VARIANT = SHAKE256

_VARIANTS: Dict[str, Callable] = {
    SHAKE128: hashlib.shake_128,
    SHAKE256: hashlib.shake_256,
}

# Security level in bits
SECURITY_BITS = {
    SHAKE128: 128,
    SHAKE256: 256,
}


# Smallest read-ahead computed on the first squeeze
_MIN_READAHEAD = 64


def _normalize_variant(variant: str) -> str:
    return variant.lower().replace('_', '').replace('-', '')


def _check_length(length) -> None:
    if isinstance(length, bool) or not isinstance(length, int):
        raise TypeError(f"length must be int, got {type(length)}")
    if length < 0:
        raise ValueError(f"length must be >= 0, got {length}")


class ExtendableHash:
    """
    Streaming SHAKE instance.

    Invariants:
        - update() is only allowed before the first squeeze()
        - successive squeeze() calls return consecutive slices of one stream
        - instances never share state
    """

    def __init__(self, variant: str = DEFAULT_VARIANT):
        name = _normalize_variant(variant)
        if name not in _VARIANTS:
            raise UnsupportedVariantError(
                f"Unsupported XOF variant: {variant} (expected one of {sorted(_VARIANTS)})"
            )
        self.variant = name
        self._sponge = _VARIANTS[name]()
        self._offset = 0
        self._squeezing = False
        # Output stream prefix already computed; grows geometrically
        self._readahead = b""

    @property
    def security_bits(self) -> int:
        return SECURITY_BITS[self.variant]

    @property
    def squeezed(self) -> int:
        """Number of bytes already read via squeeze()."""
        return self._offset

    def update(self, data: bytes) -> 'ExtendableHash':
        """
        Absorb more input.

        Raises:
            XOFStateError: If squeeze() has already been called
        """
        if self._squeezing:
            raise XOFStateError("Squeeze already called, cannot absorb more data")
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"data must be bytes-like, got {type(data)}")
        self._sponge.update(data)
        return self

    def squeeze(self, length: int) -> bytes:
        """
        Read the next `length` bytes of output.

        Args:
            length: Number of bytes to read

        Returns:
            Bytes continuing from where the previous squeeze stopped
        """
        _check_length(length)
        self._squeezing = True

        end = self._offset + length
        if end > len(self._readahead):
            # SHAKE output of n bytes is a prefix of any longer output
            size = max(end, 2 * len(self._readahead), _MIN_READAHEAD)
            self._readahead = self._sponge.digest(size)

        out = self._readahead[self._offset:end]
        self._offset = end
        return out

    def digest(self, length: int) -> bytes:
        """Return the first `length` output bytes without moving the squeeze position."""
        _check_length(length)
        if length <= len(self._readahead):
            return self._readahead[:length]
        return self._sponge.digest(length)

    def hexdigest(self, length: int) -> str:
        return self.digest(length).hex()

    def copy(self) -> 'ExtendableHash':
        clone = ExtendableHash.__new__(ExtendableHash)
        clone.variant = self.variant
        clone._sponge = self._sponge.copy()
        clone._offset = self._offset
        clone._squeezing = self._squeezing
        clone._readahead = self._readahead
        return clone

    def __repr__(self) -> str:
        return f"ExtendableHash({self.variant!r}, squeezed={self._offset})"


def create_extendable_hash(variant: str = DEFAULT_VARIANT) -> ExtendableHash:
    """
    Construct a fresh extendable-output hash instance.

    Args:
        variant: 'shake256' (default) or 'shake128'

    Returns:
        New ExtendableHash with no absorbed data

    Raises:
        UnsupportedVariantError: If the variant is not known
    """
    instance = ExtendableHash(variant)
    logger.debug("Created %s instance", instance.variant)
    return instance


def create_shake256() -> ExtendableHash:
    return create_extendable_hash(SHAKE256)


def supported_variants():
    return sorted(_VARIANTS)
