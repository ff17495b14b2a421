"""
Unit tests for Module 3: seeded PRNG selection and configuration.
"""

import hashlib
import pytest

from src.module1_hkdf import evaluate_hkdf
from src.module3_prng import (
    ShakePRNG,
    HkdfPRNG,
    create_prng,
    create_prng_from_config,
    encode_counter,
    load_config,
    get_default_config,
    PRNG_SHAKE,
    PRNG_HKDF,
    DEFAULT_INFO,
    PRNGError,
    UnsupportedPRNGError,
    PRNGConfigurationError,
)


SEED = bytes.fromhex('9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08')

# P-256 group order
P256_ORDER = int('ffffffff00000000ffffffffffffffffbce6faada7179e84f3b9cac2fc632551', 16)


class TestSelection:
    """PRNG construction by name."""

    def test_shake(self):
        """Test selecting the SHAKE PRNG."""
        prng = create_prng(PRNG_SHAKE, SEED)
        assert isinstance(prng, ShakePRNG)
        assert prng.name == 'shake'

    def test_hkdf(self):
        """Test selecting the HKDF PRNG."""
        prng = create_prng(PRNG_HKDF, SEED)
        assert isinstance(prng, HkdfPRNG)
        assert prng.name == 'hkdf'

    def test_unknown(self):
        """Test that unknown names raise UnsupportedPRNGError."""
        with pytest.raises(UnsupportedPRNGError, match="not compatible: xorshift"):
            create_prng('xorshift', SEED)
        assert issubclass(UnsupportedPRNGError, PRNGError)

    def test_seed_type(self):
        """Test that a str seed raises TypeError."""
        with pytest.raises(TypeError):
            create_prng(PRNG_SHAKE, "seed")


class TestShakePRNG:

    def test_stream_matches_shake256(self):
        """Test outputs are successive SHAKE256 squeezes of the seed."""
        prng = create_prng(PRNG_SHAKE, SEED)
        out = prng.next_bytes(32) + prng.next_bytes(32)
        assert out == hashlib.shake_256(SEED).digest(64)

    def test_deterministic(self):
        """Test same seed gives the same sequence."""
        a = create_prng(PRNG_SHAKE, SEED)
        b = create_prng(PRNG_SHAKE, SEED)
        assert [a.next_bytes(16) for _ in range(4)] == [b.next_bytes(16) for _ in range(4)]


class TestHkdfPRNG:

    def test_counter_salt(self):
        """Test each output is HKDF with the counter as salt."""
        prng = create_prng(PRNG_HKDF, SEED)

        first = prng.next_bytes(32)
        second = prng.next_bytes(32)

        assert first == evaluate_hkdf(SEED, 32, DEFAULT_INFO, b"\x00", 'sha256')
        assert second == evaluate_hkdf(SEED, 32, DEFAULT_INFO, b"\x01", 'sha256')
        assert first != second
        assert prng.counter == 2

    def test_custom_info(self):
        """Test info tag changes the output."""
        a = create_prng(PRNG_HKDF, SEED, info=b"A").next_bytes(32)
        b = create_prng(PRNG_HKDF, SEED, info=b"B").next_bytes(32)
        assert a != b

    def test_encode_counter(self):
        """Test big-endian minimal counter encoding."""
        assert encode_counter(0) == b"\x00"
        assert encode_counter(255) == b"\xff"
        assert encode_counter(256) == b"\x01\x00"
        with pytest.raises(ValueError):
            encode_counter(-1)


class TestScalars:
    """next_scalar masking and rejection sampling."""

    @pytest.mark.parametrize('name', [PRNG_SHAKE, PRNG_HKDF])
    @pytest.mark.parametrize('bit_length', [1, 7, 8, 9, 255, 256, 521])
    def test_scalar_fits_bit_length(self, name, bit_length):
        """Test scalars never exceed the requested bit length."""
        prng = create_prng(name, SEED)
        for _ in range(20):
            assert prng.next_scalar(bit_length).bit_length() <= bit_length

    def test_scalar_mask_leading_byte(self):
        """Test that only the leading byte is masked."""
        raw = hashlib.shake_256(SEED).digest(3)
        expected = int.from_bytes(bytes([raw[0] & 0x0f]) + raw[1:], 'big')
        assert create_prng(PRNG_SHAKE, SEED).next_scalar(20) == expected

    def test_full_byte_scalar_unmasked(self):
        """Test bit lengths divisible by 8 keep all bits."""
        raw = hashlib.shake_256(SEED).digest(32)
        assert create_prng(PRNG_SHAKE, SEED).next_scalar(256) == int.from_bytes(raw, 'big')

    @pytest.mark.parametrize('name', [PRNG_SHAKE, PRNG_HKDF])
    def test_sample_below_order(self, name):
        """Test rejection sampling stays below the group order."""
        prng = create_prng(name, SEED)
        for _ in range(20):
            assert 0 <= prng.sample_below(P256_ORDER) < P256_ORDER

    def test_sample_below_small_order(self):
        """Test rejection sampling with a tiny bound."""
        prng = create_prng(PRNG_HKDF, SEED)
        values = {prng.sample_below(5) for _ in range(100)}
        assert values <= {0, 1, 2, 3, 4}
        assert len(values) > 1

    def test_invalid_arguments(self):
        """Test non-positive arguments raise ValueError."""
        prng = create_prng(PRNG_SHAKE, SEED)
        with pytest.raises(ValueError):
            prng.next_scalar(0)
        with pytest.raises(ValueError):
            prng.sample_below(0)


class TestConfig:
    """YAML configuration."""

    def test_packaged_defaults(self):
        """Test the packaged YAML matches the built-in defaults."""
        assert load_config() == get_default_config()

    def test_from_default_config(self):
        """Test building the default PRNG from config."""
        prng = create_prng_from_config(SEED, get_default_config())
        assert isinstance(prng, ShakePRNG)
        assert prng.next_bytes(32) == hashlib.shake_256(SEED).digest(32)

    def test_hkdf_from_config(self):
        """Test HKDF PRNG with the cryptography backend and custom hash."""
        config = {
            'prng': {'name': 'hkdf'},
            'hkdf': {'hash': 'sha512', 'backend': 'cryptography', 'info': 'tag'},
        }
        prng = create_prng_from_config(SEED, config)
        assert prng.next_bytes(80) == evaluate_hkdf(SEED, 80, b"tag", b"\x00", 'sha512')

    def test_bit_length_from_config(self):
        """Test prng.bit_length sets the default scalar size."""
        prng = create_prng_from_config(SEED, {'prng': {'name': 'shake', 'bit_length': 12}})
        raw = hashlib.shake_256(SEED).digest(2)
        assert prng.bit_length == 12
        assert prng.next_scalar() == int.from_bytes(bytes([raw[0] & 0x0f]) + raw[1:], 'big')

    def test_load_from_file(self, tmp_path):
        """Test loading a user YAML file."""
        path = tmp_path / "config.yaml"
        path.write_text("prng:\n  name: hkdf\nhkdf:\n  hash: sha384\n")

        config = load_config(str(path))

        assert config['prng']['name'] == 'hkdf'
        assert isinstance(create_prng_from_config(SEED, config), HkdfPRNG)

    def test_missing_file(self, tmp_path):
        """Test that a missing explicit path raises."""
        with pytest.raises(PRNGConfigurationError, match="Cannot load"):
            load_config(str(tmp_path / "absent.yaml"))

    def test_non_mapping_file(self, tmp_path):
        """Test that a YAML list is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(PRNGConfigurationError, match="mapping"):
            load_config(str(path))

    def test_missing_prng_section(self):
        """Test missing prng section."""
        with pytest.raises(PRNGConfigurationError, match="Missing required config key: prng"):
            create_prng_from_config(SEED, {})

    def test_missing_prng_name(self):
        """Test missing prng.name key."""
        with pytest.raises(PRNGConfigurationError, match="prng.name"):
            create_prng_from_config(SEED, {'prng': {}})

    def test_shake_ignores_hkdf_section(self):
        """Test a shake PRNG does not resolve the HKDF hash."""
        config = {
            'prng': {'name': 'shake'},
            'hkdf': {'hash': 'no-such-hash', 'backend': 'no-such-backend'},
        }
        prng = create_prng_from_config(SEED, config)
        assert prng.next_bytes(16) == hashlib.shake_256(SEED).digest(16)

    def test_xof_variant_from_config(self):
        """Test xof.variant selects SHAKE128 for the shake PRNG."""
        config = {'prng': {'name': 'shake'}, 'xof': {'variant': 'shake128'}}
        prng = create_prng_from_config(SEED, config)
        assert prng.next_bytes(16) == hashlib.shake_128(SEED).digest(16)

    @pytest.mark.parametrize('section', ['hkdf', 'xof'])
    def test_non_mapping_section(self, section):
        """Test scalar hkdf/xof sections raise PRNGConfigurationError."""
        name = 'hkdf' if section == 'hkdf' else 'shake'
        config = {'prng': {'name': name}, section: 'sha256'}
        with pytest.raises(PRNGConfigurationError, match=f"'{section}' must be a mapping"):
            create_prng_from_config(SEED, config)

    def test_empty_section_uses_defaults(self):
        """Test an empty hkdf: key in YAML falls back to defaults."""
        prng = create_prng_from_config(SEED, {'prng': {'name': 'hkdf'}, 'hkdf': None})
        assert prng.next_bytes(32) == evaluate_hkdf(SEED, 32, DEFAULT_INFO, b"\x00", 'sha256')

    @pytest.mark.parametrize('bit_length', [0, -8, '256', 12.5, True])
    def test_invalid_bit_length(self, bit_length):
        """Test prng.bit_length must be a positive integer."""
        config = {'prng': {'name': 'shake', 'bit_length': bit_length}}
        with pytest.raises(PRNGConfigurationError, match="bit_length"):
            create_prng_from_config(SEED, config)

    def test_unknown_prng_in_config(self):
        """Test unknown PRNG name in config."""
        with pytest.raises(UnsupportedPRNGError):
            create_prng_from_config(SEED, {'prng': {'name': 'mt19937'}})
