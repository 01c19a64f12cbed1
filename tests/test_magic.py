"""
Tests for the Magic Message Hash
================================

Tests cover:
- Exact framing bytes for Dash and Bitcoin magics
- Varint length prefixes crossing the one-byte boundary
- Double hashing and hasher injection
"""

import hashlib

import pytest

from magicmsg.errors import CapabilityError
from magicmsg.message.magic import magic_concat, magic_hash
from magicmsg.networks import BITCOIN, DASH, DEFAULT_MAGIC_BYTES


def _reference_hash(data: bytes) -> bytes:
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()


class TestMagicConcat:
    """Tests for the framed bytes."""

    def test_dash_framing(self):
        framed = magic_concat(DASH.magic_bytes, b"Hello, World!")
        assert framed == (
            b'\x19DarkCoin Signed Message:\n'
            b'\x0dHello, World!'
        )

    def test_bitcoin_framing(self):
        framed = magic_concat(BITCOIN.magic_bytes, b"")
        assert framed == b'\x18Bitcoin Signed Message:\n\x00'

    def test_long_message_uses_three_byte_varint(self):
        """A 253-byte message gets the 0xfd prefix."""
        message = b'm' * 253
        framed = magic_concat(DASH.magic_bytes, message)
        prefix_end = 1 + len(DASH.magic_bytes)
        assert framed[prefix_end:prefix_end + 3] == b'\xfd\xfd\x00'
        assert framed[prefix_end + 3:] == message

    def test_252_byte_message_uses_single_byte(self):
        framed = magic_concat(DASH.magic_bytes, b'm' * 252)
        assert framed[1 + len(DASH.magic_bytes)] == 252
        assert len(framed) == 1 + 25 + 1 + 252


class TestMagicHash:
    """Tests for magic_hash."""

    def test_default_magic_is_dash(self):
        assert DEFAULT_MAGIC_BYTES == b'DarkCoin Signed Message:\n'
        assert magic_hash(b"hi") == magic_hash(b"hi", DASH.magic_bytes)

    def test_is_double_sha256_of_framing(self):
        message = b"Hello, World!"
        expected = _reference_hash(magic_concat(DASH.magic_bytes, message))
        assert magic_hash(message, DASH.magic_bytes) == expected

    def test_is_not_single_sha256(self):
        message = b"Hello, World!"
        single = hashlib.sha256(magic_concat(DASH.magic_bytes, message)).digest()
        assert magic_hash(message) != single

    def test_network_scoped(self):
        """The same message hashes differently on different networks."""
        assert magic_hash(b"msg", DASH.magic_bytes) != magic_hash(b"msg", BITCOIN.magic_bytes)

    def test_32_bytes(self):
        assert len(magic_hash(b"x" * 70000)) == 32

    def test_injected_hasher_receives_framing(self):
        seen = []

        def hasher(data):
            seen.append(data)
            return b'\xab' * 32

        assert magic_hash(b"abc", b"MAGIC", hash_fn=hasher) == b'\xab' * 32
        assert seen == [b'\x05MAGIC\x03abc']

    def test_hasher_with_wrong_output_size(self):
        with pytest.raises(CapabilityError):
            magic_hash(b"abc", hash_fn=lambda data: b'\x00' * 20)
