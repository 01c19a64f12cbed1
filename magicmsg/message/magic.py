"""
Magic Message Hash
==================

Wallets never sign a message directly. They sign the "magic hash":

    double_sha256(varint(len(magic)) || magic || varint(len(message)) || message)

The magic is a network preamble such as b"DarkCoin Signed Message:\\n".
Prefixing it keeps a signed message from ever being mistaken for a signed
transaction, and from being replayed on another network. Both lengths are
CompactSize varints, so for common magics the framing starts with the single
byte 0x19 (25) or 0x18 (24).

Getting any piece of this wrong (a different magic, a wrong varint boundary,
a single instead of a double hash) still produces signatures that sign and
verify locally but that no other wallet will accept.
"""

from magicmsg.crypto.hash import double_sha256
from magicmsg.errors import CapabilityError
from magicmsg.networks import DEFAULT_MAGIC_BYTES
from magicmsg.utils.encoding import concat_bytes, encode_varint

DIGEST_SIZE = 32


def magic_concat(magic_bytes: bytes, message_bytes: bytes) -> bytes:
    """
    Build the framed bytes that get hashed.

    Args:
        magic_bytes: The network magic preamble.
        message_bytes: The message to sign.

    Returns:
        varint(len(magic)) || magic || varint(len(message)) || message

    Raises:
        RangeError: If either length is 2^32 or more.
    """
    return concat_bytes([
        encode_varint(len(magic_bytes)),
        magic_bytes,
        encode_varint(len(message_bytes)),
        message_bytes,
    ])


def magic_hash(message_bytes: bytes, magic_bytes: bytes = DEFAULT_MAGIC_BYTES,
               hash_fn=double_sha256) -> bytes:
    """
    Compute the network-scoped digest that is actually signed.

    Args:
        message_bytes: The message to sign or verify.
        magic_bytes: The network magic; defaults to Dash.
        hash_fn: Hasher taking bytes and returning a 32-byte digest.

    Returns:
        The 32-byte magic hash.

    Raises:
        RangeError: If the magic or message is 2^32 bytes or longer.
        CapabilityError: If hash_fn does not return a 32-byte digest.
    """
    digest = hash_fn(magic_concat(magic_bytes, message_bytes))
    if len(digest) != DIGEST_SIZE:
        raise CapabilityError(
            f"Hasher returned {len(digest)} bytes, expected {DIGEST_SIZE}"
        )
    return digest
