"""
Hash Functions for Signed Messages
==================================

Two hash constructions take part in signing and verifying a message:

- **double SHA-256**: SHA-256 applied twice. The framed message (network magic
  plus message, each length-prefixed) is hashed this way, and the resulting
  32-byte digest is what the private key actually signs. It is also the
  Base58Check checksum function.
- **hash160**: RIPEMD-160(SHA-256(data)). Turns a serialized public key into
  the 20-byte public key hash that an address encodes. Verification compares
  these hashes, never raw public keys.

All functions are pure: the same input always yields the same output, with no
keying or salt.
"""

import hashlib

from Cryptodome.Hash import RIPEMD160


def sha256(data: bytes) -> bytes:
    """
    Compute the SHA-256 hash of the input data.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def double_sha256(data: bytes) -> bytes:
    """
    Compute the double SHA-256 hash: SHA-256(SHA-256(data)).

    This is the default hasher for message framing. Its contract is fixed:
    arbitrary input bytes, exactly 32 output bytes.

    Args:
        data: The raw bytes to hash.

    Returns:
        The 32-byte double-SHA-256 digest.

    Example:
        >>> double_sha256(b"hello").hex()
        '9595c9df90075148eb06860365df33584b75bff782a510c6cd4883a419833d50'
    """
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()


def ripemd160(data: bytes) -> bytes:
    """
    Compute the RIPEMD-160 hash of the input data.

    OpenSSL 3 moved RIPEMD-160 to its legacy provider, so hashlib may not
    offer it; pycryptodomex is used in that case.

    Example:
        >>> ripemd160(b"hello").hex()
        '108f07b8382412612c048d07d13f814118445acd'
    """
    try:
        return hashlib.new('ripemd160', data).digest()
    except ValueError:
        return RIPEMD160.new(data).digest()


def hash160(data: bytes) -> bytes:
    """
    Compute hash160: RIPEMD-160(SHA-256(data)).

    Applied to a serialized public key this gives the 20-byte "public key
    hash" (PKH) carried inside a P2PKH address.

    Args:
        data: The raw bytes to hash (typically a serialized public key).

    Returns:
        The 20-byte hash160 digest.

    Example:
        >>> hash160(b"hello").hex()
        'b6a9c8c230722b7c748331a8b450f05566dc7d0f'
    """
    return ripemd160(sha256(data))
