"""
Seeded PRNGs built on Module 1 (HKDF) and Module 2 (SHAKE).

A PRNG is selected by name:
    - "shake": SHAKE256 absorbs the seed once; outputs are successive squeezes
    - "hkdf":  each output is HKDF(seed, n, info, salt=counter), counter = 0, 1, 2, ...

Both produce the same interface: next_bytes(), next_scalar(), sample_below().
"""

import logging
from typing import Any, Dict, Optional

from src.module1_hkdf import evaluate_hkdf, get_keyed_hash
from src.module1_hkdf.keyed_hash import resolve_keyed_hash
from src.module2_xof import create_extendable_hash, DEFAULT_VARIANT

from .config import get_section, get_optional_section
from .prng_errors import UnsupportedPRNGError, PRNGConfigurationError


logger = logging.getLogger(__name__)

PRNG_SHAKE = 'shake'
PRNG_HKDF = 'hkdf'

DEFAULT_INFO = b"DLEQ_PROOF"

# Keeps the low (bit_length % 8) bits of the leading byte
MASK = [0xff, 0x01, 0x03, 0x07, 0x0f, 0x1f, 0x3f, 0x7f]


def encode_counter(counter: int) -> bytes:
    """Big-endian encoding of a non-negative counter, at least one byte."""
    if counter < 0:
        raise ValueError(f"counter must be >= 0, got {counter}")
    return counter.to_bytes(max(1, (counter.bit_length() + 7) // 8), 'big')


class PRNG:
    """Base class; subclasses implement next_bytes()."""

    name = None
    bit_length = 256

    def next_bytes(self, length: int) -> bytes:
        raise NotImplementedError

    def next_scalar(self, bit_length: Optional[int] = None) -> int:
        """
        Draw an integer of at most `bit_length` bits.

        Reads ceil(bit_length / 8) bytes and masks the leading byte so the
        result never exceeds bit_length bits. Defaults to self.bit_length.
        """
        if bit_length is None:
            bit_length = self.bit_length
        if bit_length <= 0:
            raise ValueError(f"bit_length must be > 0, got {bit_length}")
        out = bytearray(self.next_bytes((bit_length + 7) // 8))
        out[0] &= MASK[bit_length % 8]
        return int.from_bytes(out, 'big')

    def sample_below(self, order: int) -> int:
        """
        Draw a uniform integer in [0, order) by rejection sampling.

        Args:
            order: Exclusive upper bound, must be > 0

        Returns:
            First drawn scalar that is smaller than order
        """
        if order <= 0:
            raise ValueError(f"order must be > 0, got {order}")
        bit_length = order.bit_length()
        rejected = 0
        while True:
            candidate = self.next_scalar(bit_length)
            if candidate < order:
                if rejected:
                    logger.debug("%s PRNG rejected %d candidate(s)", self.name, rejected)
                return candidate
            rejected += 1


class ShakePRNG(PRNG):

    name = PRNG_SHAKE

    def __init__(self, seed: bytes, variant: str = DEFAULT_VARIANT):
        self._xof = create_extendable_hash(variant)
        self._xof.update(seed)

    def next_bytes(self, length: int) -> bytes:
        return self._xof.squeeze(length)


class HkdfPRNG(PRNG):
    """Every call derives fresh output with the evaluation counter as salt."""

    name = PRNG_HKDF

    def __init__(self, seed: bytes, hash='sha256', info: Optional[bytes] = DEFAULT_INFO):
        self._seed = bytes(seed)
        self._keyed_hash = resolve_keyed_hash(hash)
        self._info = info
        self.counter = 0

    def next_bytes(self, length: int) -> bytes:
        salt = encode_counter(self.counter)
        self.counter += 1
        return evaluate_hkdf(self._seed, length, self._info, salt, self._keyed_hash)


def create_prng(name: str, seed: bytes, hash='sha256',
                info: Optional[bytes] = DEFAULT_INFO,
                variant: str = DEFAULT_VARIANT) -> PRNG:
    """
    Construct a seeded PRNG by name.

    Args:
        name: 'shake' or 'hkdf'
        seed: Seed bytes
        hash: Hash for the HKDF PRNG (ignored for shake)
        info: HKDF info tag (ignored for shake)
        variant: XOF variant for the shake PRNG (ignored for hkdf)

    Returns:
        PRNG instance

    Raises:
        UnsupportedPRNGError: If name is not recognised
    """
    if not isinstance(seed, (bytes, bytearray, memoryview)):
        raise TypeError(f"seed must be bytes-like, got {type(seed)}")

    if name == PRNG_SHAKE:
        prng = ShakePRNG(seed, variant)
    elif name == PRNG_HKDF:
        prng = HkdfPRNG(seed, hash, info)
    else:
        raise UnsupportedPRNGError(f"PRNG is not compatible: {name}")

    logger.debug("Created %s PRNG from %d-byte seed", name, len(seed))
    return prng


def create_prng_from_config(seed: bytes, config: Dict[str, Any]) -> PRNG:
    """
    Construct a PRNG from a configuration dictionary.

    Configuration Schema:
        config['prng']['name']: 'shake' | 'hkdf' (required)
        config['prng']['bit_length']: default scalar size (default: 256)
        config['hkdf']['hash']: hash name (default: 'sha256')
        config['hkdf']['backend']: 'hashlib' | 'cryptography' (default: 'hashlib')
        config['hkdf']['info']: info tag string (default: 'DLEQ_PROOF')
        config['xof']['variant']: 'shake256' | 'shake128' (default: 'shake256')
    """
    prng_config = get_section(config, 'prng')
    try:
        name = prng_config['name']
    except KeyError as e:
        raise PRNGConfigurationError(f"Missing required config key: prng.{e.args[0]}") from e

    bit_length = prng_config.get('bit_length', PRNG.bit_length)
    if isinstance(bit_length, bool) or not isinstance(bit_length, int) or bit_length <= 0:
        raise PRNGConfigurationError(
            f"prng.bit_length must be a positive integer, got {bit_length!r}"
        )

    if name == PRNG_HKDF:
        hkdf_config = get_optional_section(config, 'hkdf')
        keyed_hash = get_keyed_hash(
            hkdf_config.get('hash', 'sha256'),
            hkdf_config.get('backend', 'hashlib'),
        )
        info = hkdf_config.get('info', DEFAULT_INFO)
        if isinstance(info, str):
            info = info.encode('utf-8')
        prng = create_prng(name, seed, hash=keyed_hash, info=info)
    elif name == PRNG_SHAKE:
        xof_config = get_optional_section(config, 'xof')
        prng = create_prng(name, seed, variant=xof_config.get('variant', DEFAULT_VARIANT))
    else:
        raise UnsupportedPRNGError(f"PRNG is not compatible: {name}")

    prng.bit_length = bit_length
    return prng
