"""
Tests for the Recoverable Signature Format
==========================================

Tests cover:
- Header byte computation (31 + recovery)
- Length and header validation on decode
- Encode/decode round trip
"""

import pytest

from magicmsg.errors import FormatError
from magicmsg.message.signature import (
    RECOVERY_OFFSET,
    Signature,
    decode_recovery_sig,
    encode_recovery_sig,
)


@pytest.fixture
def sig_bytes():
    """64 distinct signature bytes."""
    return bytes(range(64))


class TestEncodeRecoverySig:
    """Tests for encode_recovery_sig."""

    def test_recovery_zero_header(self, sig_bytes):
        encoded = encode_recovery_sig(Signature(sig_bytes, 0))
        assert encoded[0] == 31

    def test_recovery_one_header(self, sig_bytes):
        encoded = encode_recovery_sig(Signature(sig_bytes, 1))
        assert encoded[0] == 32

    def test_layout(self, sig_bytes):
        """Output is the header byte followed by the untouched signature."""
        encoded = encode_recovery_sig(Signature(sig_bytes, 1))
        assert len(encoded) == 65
        assert encoded[1:] == sig_bytes

    @pytest.mark.parametrize("length", [0, 63, 65, 72])
    def test_wrong_signature_length(self, length):
        with pytest.raises(FormatError):
            encode_recovery_sig(Signature(b'\x01' * length, 0))

    @pytest.mark.parametrize("recovery", [-1, 4])
    def test_recovery_out_of_range(self, sig_bytes, recovery):
        with pytest.raises(FormatError):
            encode_recovery_sig(Signature(sig_bytes, recovery))

    def test_uncompressed_rejected(self, sig_bytes):
        with pytest.raises(FormatError):
            encode_recovery_sig(Signature(sig_bytes, 0, compressed=False))


class TestDecodeRecoverySig:
    """Tests for decode_recovery_sig."""

    def test_decodes_fields(self, sig_bytes):
        signature = decode_recovery_sig(bytes([32]) + sig_bytes)
        assert signature.recovery == 1
        assert signature.compressed is True
        assert signature.bytes == sig_bytes

    @pytest.mark.parametrize("header, recovery", [(31, 0), (32, 1), (33, 2), (34, 3)])
    def test_compressed_header_range(self, sig_bytes, header, recovery):
        """Headers 31-34 map to recovery ids 0-3."""
        assert decode_recovery_sig(bytes([header]) + sig_bytes).recovery == recovery

    @pytest.mark.parametrize("header", [0, 27, 30, 35, 255])
    def test_unsupported_header(self, sig_bytes, header):
        """Uncompressed (27-30) and out-of-range headers are rejected."""
        with pytest.raises(FormatError):
            decode_recovery_sig(bytes([header]) + sig_bytes)

    @pytest.mark.parametrize("length", [0, 64, 66])
    def test_wrong_length(self, length):
        with pytest.raises(FormatError):
            decode_recovery_sig(bytes([RECOVERY_OFFSET]) * length)

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            decode_recovery_sig(b'')


class TestRoundTrip:
    """decode(encode(s)) == s for compressed signatures."""

    @pytest.mark.parametrize("recovery", [0, 1])
    def test_roundtrip(self, recovery):
        signature = Signature(bytes(range(100, 164)), recovery, compressed=True)
        assert decode_recovery_sig(encode_recovery_sig(signature)) == signature

    def test_r_and_s(self):
        signature = Signature(b'\x00' * 31 + b'\x05' + b'\x00' * 31 + b'\x07', 0)
        assert signature.r == 5
        assert signature.s == 7
