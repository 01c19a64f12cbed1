"""
Signing and Verifying Messages
==============================

This module composes the magic hash and the recoverable signature format with
caller-supplied cryptography. Nothing here touches elliptic curve math; each
step that needs it goes through a capability:

- **Signer**: signs a 32-byte digest with a private key and reports the
  recovery id.
- **Recoverer**: rebuilds the public key from a digest and a signature.
- **PubKeyHasher**: turns a public key into the address hash it is known by.
- **Hasher**: the double hash used for framing (double SHA-256 by default).

Any object with a matching call signature works: the software implementations
in magicmsg.crypto.keys, a hardware wallet bridge, or a test double.

Signing:
    message -> magic hash -> Signer -> 65-byte recovery signature

Verifying:
    recovery signature -> decode -> magic hash of the claimed message
    -> Recoverer -> public key -> PubKeyHasher -> compare with claimed hash

A signature that is well formed but was made by another key makes
magic_verify return False. Errors raised by a capability (for instance bytes
that do not describe a curve point) are not caught here and reach the caller
unchanged. Nothing is retried.
"""

import logging
from typing import Protocol

from magicmsg.crypto.hash import double_sha256
from magicmsg.message.magic import magic_hash
from magicmsg.message.signature import Signature, decode_recovery_sig, encode_recovery_sig
from magicmsg.networks import DEFAULT_MAGIC_BYTES
from magicmsg.utils.encoding import bytes_equal

logger = logging.getLogger(__name__)


# =============================================================================
# Capabilities
# =============================================================================

class Hasher(Protocol):
    """Hash bytes to a 32-byte digest."""

    def __call__(self, data: bytes) -> bytes: ...


class Signer(Protocol):
    """Sign a 32-byte digest; return a compressed Signature with recovery 0 or 1."""

    def __call__(self, digest: bytes, private_key_bytes: bytes) -> Signature: ...


class Recoverer(Protocol):
    """Recover the signer's public key bytes from a digest and raw signature."""

    def __call__(self, digest: bytes, signature_bytes: bytes, recovery: int,
                 compressed: bool) -> bytes: ...


class PubKeyHasher(Protocol):
    """Derive the address hash (e.g. hash160) of a serialized public key."""

    def __call__(self, public_key_bytes: bytes) -> bytes: ...


# =============================================================================
# Orchestration
# =============================================================================

def magic_sign(private_key_bytes: bytes, message_bytes: bytes, sign_fn: Signer,
               magic_bytes: bytes = DEFAULT_MAGIC_BYTES,
               hash_fn: Hasher = double_sha256) -> bytes:
    """
    Sign a message for the network identified by magic_bytes.

    Args:
        private_key_bytes: The private key, passed through to sign_fn as is.
        message_bytes: The message to sign.
        sign_fn: Signer capability.
        magic_bytes: The network magic; defaults to Dash.
        hash_fn: Hasher used for the magic hash.

    Returns:
        The 65-byte recovery signature.

    Raises:
        RangeError: If the message is too long to frame.
        FormatError: If sign_fn returns a signature that cannot be encoded.
    """
    digest = magic_hash(message_bytes, magic_bytes, hash_fn=hash_fn)
    logger.debug("Signing %d-byte message, magic hash %s", len(message_bytes), digest.hex())

    signature = sign_fn(digest, private_key_bytes)
    return encode_recovery_sig(signature)


def magic_recover_pubkey(message_bytes: bytes, recovery_sig_bytes: bytes,
                         recover_fn: Recoverer,
                         magic_bytes: bytes = DEFAULT_MAGIC_BYTES,
                         hash_fn: Hasher = double_sha256) -> bytes:
    """
    Recover the public key that produced a message signature.

    Args:
        message_bytes: The message that was signed.
        recovery_sig_bytes: The 65-byte recovery signature.
        recover_fn: Recoverer capability.
        magic_bytes: The network magic; defaults to Dash.
        hash_fn: Hasher used for the magic hash.

    Returns:
        The public key bytes as returned by recover_fn.

    Raises:
        FormatError: If the signature is not a 65-byte compressed-key signature.
    """
    signature = decode_recovery_sig(recovery_sig_bytes)
    digest = magic_hash(message_bytes, magic_bytes, hash_fn=hash_fn)
    return recover_fn(digest, signature.bytes, signature.recovery, signature.compressed)


def magic_verify(pubkey_hash: bytes, message_bytes: bytes, recovery_sig_bytes: bytes,
                 recover_fn: Recoverer, pubkey_hasher: PubKeyHasher,
                 magic_bytes: bytes = DEFAULT_MAGIC_BYTES,
                 hash_fn: Hasher = double_sha256) -> bool:
    """
    Check that a message was signed by the holder of an address.

    Args:
        pubkey_hash: The claimed signer's address hash (decoded address).
        message_bytes: The message that was signed.
        recovery_sig_bytes: The 65-byte recovery signature.
        recover_fn: Recoverer capability.
        pubkey_hasher: PubKeyHasher capability.
        magic_bytes: The network magic; defaults to Dash.
        hash_fn: Hasher used for the magic hash.

    Returns:
        True if the recovered key hashes to pubkey_hash, False otherwise.

    Raises:
        FormatError: If the signature is not a 65-byte compressed-key signature.
    """
    public_key_bytes = magic_recover_pubkey(
        message_bytes,
        recovery_sig_bytes,
        recover_fn,
        magic_bytes,
        hash_fn=hash_fn,
    )
    signer_hash = pubkey_hasher(public_key_bytes)

    is_equal = bytes_equal(signer_hash, pubkey_hash)
    if is_equal:
        logger.info("Message signature verified for %s", pubkey_hash.hex())
    else:
        logger.info(
            "Message signature does not match %s (signed by %s)",
            pubkey_hash.hex(), signer_hash.hex(),
        )
    return is_equal
