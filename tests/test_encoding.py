"""
Tests for Byte Encoding Utilities
=================================

Tests cover:
- Base64 decoding of standard and URL-safe input, and standard encoding
- Byte concatenation and hash equality
- Varint encoding boundaries and decoding
- Base58Check encoding and checksum validation
"""

import pytest

from magicmsg.errors import DecodeError, RangeError
from magicmsg.utils.encoding import (
    base58check_decode,
    base58check_encode,
    base64_to_bytes,
    bytes_equal,
    bytes_to_base64,
    concat_bytes,
    decode_varint,
    encode_varint,
    rfc_base64_to_bytes,
    url_base64_to_rfc_base64,
)


# ---------------------------------------------------------------------------
# Base64
# ---------------------------------------------------------------------------

class TestBase64:
    """Tests for base64 decoding and encoding."""

    def test_encode_uses_standard_alphabet_with_padding(self):
        """Encoding should emit '+', '/' and '=' padding."""
        assert bytes_to_base64(b'\xfb\xff') == '+/8='

    def test_encode_empty(self):
        """Empty input encodes to the empty string."""
        assert bytes_to_base64(b'') == ''

    def test_decode_standard(self):
        """Standard base64 should decode unchanged."""
        assert base64_to_bytes('aGVsbG8=') == b'hello'

    def test_decode_url_safe_without_padding(self):
        """URL-safe text without padding should decode to the same bytes."""
        assert base64_to_bytes('-_8') == b'\xfb\xff'

    def test_url_to_rfc_pads_to_multiple_of_four(self):
        """Normalization should substitute characters and pad with '='."""
        assert url_base64_to_rfc_base64('-_8') == '+/8='
        assert url_base64_to_rfc_base64('aGk') == 'aGk='
        assert url_base64_to_rfc_base64('aA') == 'aA=='

    def test_url_to_rfc_leaves_standard_text_alone(self):
        """Already-padded standard text should pass through."""
        assert url_base64_to_rfc_base64('aGVsbG8=') == 'aGVsbG8='

    def test_decode_invalid_character(self):
        """Characters outside both alphabets should raise DecodeError."""
        with pytest.raises(DecodeError):
            base64_to_bytes('aGVs*G8=')

    def test_decode_impossible_length(self):
        """A single leftover character cannot be valid base64."""
        with pytest.raises(DecodeError):
            base64_to_bytes('aGVsb')

    def test_strict_decode_rejects_url_alphabet(self):
        """The strict RFC decoder does not accept URL-safe characters."""
        with pytest.raises(DecodeError):
            rfc_base64_to_bytes('-_8=')

    def test_decode_error_is_value_error(self):
        """DecodeError should still be catchable as ValueError."""
        with pytest.raises(ValueError):
            base64_to_bytes('!!!!')

    def test_signature_sized_roundtrip_both_alphabets(self):
        """A 65-byte blob should decode from standard and URL-safe text."""
        data = bytes([31]) + bytes(range(200, 256)) + bytes(range(8))
        standard = bytes_to_base64(data)
        url_safe = standard.replace('+', '-').replace('/', '_').rstrip('=')

        assert base64_to_bytes(standard) == data
        assert base64_to_bytes(url_safe) == data


# ---------------------------------------------------------------------------
# Byte sequences
# ---------------------------------------------------------------------------

class TestConcatBytes:
    """Tests for concat_bytes."""

    def test_preserves_order(self):
        assert concat_bytes([b'\x01', b'\x02\x03', b'\x04']) == b'\x01\x02\x03\x04'

    def test_length_is_sum_of_parts(self):
        parts = [b'a' * 5, b'', b'b' * 300, bytearray(b'cd')]
        assert len(concat_bytes(parts)) == 307

    def test_empty_list(self):
        assert concat_bytes([]) == b''


class TestBytesEqual:
    """Tests for bytes_equal."""

    def test_equal_content(self):
        """Identical content should compare equal."""
        assert bytes_equal(bytes(range(20)), bytes(range(20))) is True

    def test_both_empty(self):
        assert bytes_equal(b'', b'') is True

    def test_different_lengths(self):
        """A prefix is not equal to the longer value."""
        assert bytes_equal(b'\x00' * 20, b'\x00' * 21) is False

    @pytest.mark.parametrize("index", [0, 7, 19])
    def test_single_differing_byte(self, index):
        """A difference at any position should be detected."""
        a = bytearray(range(20))
        b = bytearray(range(20))
        b[index] ^= 0x01
        assert bytes_equal(bytes(a), bytes(b)) is False


# ---------------------------------------------------------------------------
# Varint
# ---------------------------------------------------------------------------

class TestEncodeVarint:
    """Tests for varint encoding boundaries."""

    @pytest.mark.parametrize("value, expected", [
        (0, [0]),
        (1, [1]),
        (252, [252]),
        (253, [253, 253, 0]),
        (255, [253, 255, 0]),
        (65535, [253, 255, 255]),
        (65536, [254, 0, 0, 1, 0]),
        (4294967295, [254, 255, 255, 255, 255]),
    ])
    def test_boundaries(self, value, expected):
        """Each value should use the narrowest form, little-endian."""
        assert list(encode_varint(value)) == expected

    def test_too_large(self):
        """2^32 and above cannot be encoded."""
        with pytest.raises(RangeError):
            encode_varint(4294967296)

    def test_negative(self):
        with pytest.raises(RangeError):
            encode_varint(-1)


class TestDecodeVarint:
    """Tests for varint decoding."""

    @pytest.mark.parametrize("value", [0, 252, 253, 65535, 65536, 4294967295])
    def test_decodes_encoded_values(self, value):
        """Decoding should invert encoding and report the bytes consumed."""
        encoded = encode_varint(value)
        assert decode_varint(encoded) == (value, len(encoded))

    def test_offset(self):
        """Decoding should start at the given offset."""
        assert decode_varint(b'\xaa\xbb\xfd\x00\x01', offset=2) == (256, 3)

    def test_empty(self):
        with pytest.raises(DecodeError):
            decode_varint(b'')

    def test_offset_past_end(self):
        with pytest.raises(DecodeError):
            decode_varint(b'\x01', offset=1)

    @pytest.mark.parametrize("data", [b'\xfd', b'\xfd\x00', b'\xfe\x00\x00\x01'])
    def test_truncated(self, data):
        """A marker byte without its full payload should raise DecodeError."""
        with pytest.raises(DecodeError):
            decode_varint(data)

    @pytest.mark.parametrize("data", [b'\xfd\xfc\x00', b'\xfe\xff\xff\x00\x00'])
    def test_non_minimal(self, data):
        """Values that fit a narrower form should be rejected."""
        with pytest.raises(DecodeError):
            decode_varint(data)

    def test_eight_byte_form_unsupported(self):
        with pytest.raises(RangeError):
            decode_varint(b'\xff' + b'\x00' * 8)


# ---------------------------------------------------------------------------
# Base58Check
# ---------------------------------------------------------------------------

class TestBase58Check:
    """Tests for Base58Check encoding."""

    def test_known_vector(self):
        """A zero hash with version 0 is the well-known burn address."""
        assert base58check_encode(b'\x00', bytes(20)) == '1111111111111111111114oLvT2'

    def test_decode(self):
        version, payload = base58check_decode('1111111111111111111114oLvT2')
        assert version == b'\x00'
        assert payload == bytes(20)

    def test_roundtrip_with_version(self):
        encoded = base58check_encode(b'\x4c', bytes(range(20)))
        assert base58check_decode(encoded) == (b'\x4c', bytes(range(20)))

    def test_bad_checksum(self):
        """Altering a character should break the checksum."""
        with pytest.raises(DecodeError):
            base58check_decode('1111111111111111111114oLvT3')

    def test_invalid_character(self):
        """'0' is not part of the Base58 alphabet."""
        with pytest.raises(DecodeError):
            base58check_decode('10000000')

    def test_too_short(self):
        with pytest.raises(DecodeError):
            base58check_decode('1111')
