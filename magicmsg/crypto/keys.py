"""
secp256k1 Keys, Recoverable Signatures and Addresses
=====================================================

This module is the software backend for message signing. It implements the
capabilities that magicmsg.message.signing expects, on top of the pure Python
``ecdsa`` library:

- **sign_digest**: sign a 32-byte magic hash and work out the recovery id.
- **recover_public_key**: rebuild the signer's public key from a digest and a
  64-byte signature plus recovery id.
- **pubkey_to_pubkey_hash**: hash160 of a serialized public key.

It also covers the key and address formats needed to drive those
capabilities from wallet strings:

- **Wallet Import Format (WIF)**: Base58Check(version || key || [0x01]).
  The trailing 0x01 marks a key whose public key is used compressed.
- **P2PKH addresses**: Base58Check(version || hash160(pubkey)).

Public Key Recovery
-------------------
An ECDSA signature (r, s) does not carry the public key, but given the signed
digest e, the key can be computed from the curve point R whose x coordinate
is r:

    Q = r^-1 * (s*R - e*G)

Two points share that x coordinate (one with even y, one with odd y), so a
signer records which one it used: recovery id 0 for even y, 1 for odd y. A
verifier recomputes Q and checks that its address hash matches.

Signatures are produced deterministically (RFC 6979 nonces with SHA-256) and
in low-S form, so the same key and message always give the same signature,
identical to what other wallets produce.
"""

import hashlib
import logging

from ecdsa import SECP256k1, SigningKey, VerifyingKey, numbertheory
from ecdsa.ecdsa import InvalidPointError
from ecdsa.errors import MalformedPointError
from ecdsa.util import MalformedSignature, sigdecode_string, sigencode_string_canonize

from magicmsg.errors import CapabilityError, DecodeError
from magicmsg.message.signature import Signature
from magicmsg.networks import (
    DEFAULT_NETWORK,
    Network,
    network_for_address_version,
    network_for_wif_version,
)
from magicmsg.utils.encoding import base58check_decode, base58check_encode
from .hash import hash160

logger = logging.getLogger(__name__)

_RECOVERY_ERRORS = (MalformedSignature, MalformedPointError, InvalidPointError, numbertheory.Error)

_ORDER = SECP256k1.order


def _recover_candidates(digest: bytes, signature_bytes: bytes) -> list:
    """
    Return the two VerifyingKeys that validate a signature, indexed by recovery id.

    Raises:
        CapabilityError: If r or s is outside [1, n-1], or the signature does
            not encode a usable curve point.
    """
    if len(signature_bytes) == 64:
        r = int.from_bytes(signature_bytes[:32], 'big')
        s = int.from_bytes(signature_bytes[32:], 'big')
        if not (0 < r < _ORDER and 0 < s < _ORDER):
            raise CapabilityError("Cannot recover public key: r and s must be in [1, n-1]")

    try:
        return VerifyingKey.from_public_key_recovery_with_digest(
            signature_bytes,
            digest,
            SECP256k1,
            hashfunc=hashlib.sha256,
            sigdecode=sigdecode_string,
        )
    except _RECOVERY_ERRORS as e:
        logger.debug("Public key recovery failed: %r", e)
        raise CapabilityError(f"Cannot recover public key: {e}") from e


# =============================================================================
# PublicKey Class
# =============================================================================

class PublicKey:
    """
    A secp256k1 public key.

    Serialized as 33 bytes, (0x02 if y is even, 0x03 if odd) || x, in
    compressed form, or as 65 bytes, 0x04 || x || y, uncompressed. Message
    signatures made by this package always refer to the compressed form.
    """

    def __init__(self, key: VerifyingKey):
        """
        Initialize a PublicKey from an ecdsa VerifyingKey.

        Args:
            key: An ecdsa.VerifyingKey instance on the SECP256k1 curve.
        """
        self._key = key

    def to_bytes(self, compressed: bool = True) -> bytes:
        """
        Serialize the public key to bytes.

        Args:
            compressed: If True (default), return the 33-byte compressed format.
                       If False, return the 65-byte uncompressed format.
        """
        raw = self._key.to_string()
        x = raw[:32]
        y = raw[32:]

        if not compressed:
            return b'\x04' + x + y

        if y[-1] % 2 == 0:
            return b'\x02' + x
        else:
            return b'\x03' + x

    def to_hex(self, compressed: bool = True) -> str:
        return self.to_bytes(compressed).hex()

    def get_hash160(self, compressed: bool = True) -> bytes:
        """
        Compute the 20-byte public key hash that addresses encode.

        Args:
            compressed: If True, hash the compressed serialization.
        """
        return hash160(self.to_bytes(compressed=compressed))

    def to_address(self, network: Network = DEFAULT_NETWORK) -> str:
        """
        Derive the P2PKH address of the compressed public key.

        1. Serialize the public key in compressed format (33 bytes)
        2. hash160 it -> 20 bytes
        3. Base58Check encode with the network's address version byte

        Args:
            network: Network whose address version byte to use.

        Returns:
            The Base58Check-encoded address string.
        """
        return pubkey_hash_to_address(self.get_hash160(), network)

    @classmethod
    def from_bytes(cls, data: bytes) -> 'PublicKey':
        """
        Deserialize a public key from compressed or uncompressed bytes.

        For compressed keys, the y coordinate is recovered from the curve
        equation y^2 = x^3 + 7 (mod p).

        Raises:
            ValueError: If the data format is not recognized.
        """
        if len(data) == 65 and data[0] == 0x04:
            key = VerifyingKey.from_string(data[1:], curve=SECP256k1)
            return cls(key)
        elif len(data) == 33 and data[0] in (0x02, 0x03):
            x = int.from_bytes(data[1:], 'big')
            p = SECP256k1.curve.p()

            y_squared = (pow(x, 3, p) + 7) % p
            # p % 4 == 3 for secp256k1, so the square root is a single pow
            y = pow(y_squared, (p + 1) // 4, p)

            if data[0] == 0x02 and y % 2 != 0:
                y = p - y
            elif data[0] == 0x03 and y % 2 == 0:
                y = p - y

            key = VerifyingKey.from_string(
                x.to_bytes(32, 'big') + y.to_bytes(32, 'big'), curve=SECP256k1
            )
            return cls(key)
        else:
            raise ValueError(
                f"Invalid public key format: expected 33 (compressed) or 65 "
                f"(uncompressed) bytes, got {len(data)} bytes"
            )

    def __repr__(self) -> str:
        return f"PublicKey({self.to_hex(compressed=True)})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, PublicKey):
            return NotImplemented
        return self.to_bytes(compressed=True) == other.to_bytes(compressed=True)

    def __hash__(self) -> int:
        return hash(self.to_bytes(compressed=True))


# =============================================================================
# PrivateKey Class
# =============================================================================

class PrivateKey:
    """
    A secp256k1 private key: a 32-byte scalar in [1, n-1].

    Whoever holds it can sign messages for the matching address, so the
    repr only shows a fingerprint and nothing in this package logs it.
    """

    def __init__(self, key_bytes: bytes = None, compressed: bool = True):
        """
        Create a PrivateKey from raw bytes or generate a new random one.

        Args:
            key_bytes: Optional 32-byte private key. If None, a new random
                      key is generated.
            compressed: Whether the key pairs with the compressed public key
                      encoding. WIF import sets this from the payload flag.

        Raises:
            ValueError: If key_bytes is provided but not exactly 32 bytes.
        """
        if key_bytes is not None:
            if len(key_bytes) != 32:
                raise ValueError(
                    f"Private key must be exactly 32 bytes, got {len(key_bytes)}"
                )
            self._key = SigningKey.from_string(key_bytes, curve=SECP256k1)
        else:
            self._key = SigningKey.generate(curve=SECP256k1)
        self.compressed = compressed
        self._public_key = None

    @property
    def public_key(self) -> PublicKey:
        """The corresponding public key, computed once and cached."""
        if self._public_key is None:
            self._public_key = PublicKey(self._key.get_verifying_key())
        return self._public_key

    def sign_recoverable(self, digest: bytes) -> Signature:
        """
        Sign a 32-byte digest and determine its recovery id.

        The signature is deterministic (RFC 6979 with SHA-256) and canonical
        (low S). The recovery id is found by recovering both candidate keys
        and picking the one equal to ours.

        Args:
            digest: The 32-byte digest to sign (e.g. a magic hash).

        Returns:
            A compressed Signature with recovery 0 or 1.

        Raises:
            CapabilityError: If neither candidate matches this key.
        """
        sig_bytes = self._key.sign_digest_deterministic(
            digest,
            hashfunc=hashlib.sha256,
            sigencode=sigencode_string_canonize,
        )

        own_point = self._key.get_verifying_key().to_string()
        for recovery, candidate in enumerate(_recover_candidates(digest, sig_bytes)):
            if candidate.to_string() == own_point:
                return Signature(sig_bytes, recovery, compressed=True)

        raise CapabilityError("Could not determine recovery id for signature")

    def to_bytes(self) -> bytes:
        return self._key.to_string()

    def to_hex(self) -> str:
        return self.to_bytes().hex()

    def to_wif(self, network: Network = DEFAULT_NETWORK, compressed: bool = True) -> str:
        """
        Export the private key in Wallet Import Format (WIF).

        1. Start with the network's WIF version byte
        2. Append the 32-byte raw private key
        3. If compressed: append 0x01 compression flag
        4. Base58Check encode

        Args:
            network: Network whose WIF version byte to use.
            compressed: If True (default), flag the key as compressed.

        Returns:
            The WIF-encoded private key string.
        """
        payload = self.to_bytes()
        if compressed:
            payload += b'\x01'
        return base58check_encode(network.wif_version_byte, payload)

    @classmethod
    def from_wif(cls, wif_string: str, network: Network = None) -> 'PrivateKey':
        """
        Import a private key from Wallet Import Format (WIF).

        Args:
            wif_string: The WIF-encoded private key string.
            network: If given, the WIF version byte must match this network.
                Otherwise any built-in network's version byte is accepted.

        Returns:
            A PrivateKey instance.

        Raises:
            DecodeError: If the Base58Check encoding or checksum is invalid.
            ValueError: If the version byte or payload length is wrong.
        """
        version, payload = base58check_decode(wif_string)

        if network is not None:
            if version != network.wif_version_byte:
                raise ValueError(
                    f"Invalid WIF version byte: 0x{version.hex()}. "
                    f"Expected 0x{network.wif_version:02x} ({network.name})."
                )
        else:
            network_for_wif_version(version[0])

        if len(payload) == 33 and payload[-1] == 0x01:
            return cls(payload[:32], compressed=True)
        if len(payload) == 32:
            return cls(payload, compressed=False)
        raise ValueError(
            f"Invalid WIF payload length: {len(payload)}. "
            f"Expected 32 (uncompressed) or 33 (compressed) bytes."
        )

    @classmethod
    def from_hex(cls, hex_string: str) -> 'PrivateKey':
        return cls(bytes.fromhex(hex_string))

    @classmethod
    def generate(cls) -> 'PrivateKey':
        """Generate a new random private key."""
        return cls()

    def __repr__(self) -> str:
        # Only show a partial fingerprint to discourage accidental exposure
        hex_str = self.to_hex()
        return f"PrivateKey({hex_str[:8]}...{hex_str[-8:]})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, PrivateKey):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self) -> int:
        return hash(self.to_bytes())


# =============================================================================
# KeyPair Class
# =============================================================================

class KeyPair:
    """
    A matched private key, public key and address on one network.
    """

    def __init__(self, private_key: PrivateKey, public_key: PublicKey, address: str):
        self.private_key = private_key
        self.public_key = public_key
        self.address = address

    @classmethod
    def generate(cls, network: Network = DEFAULT_NETWORK) -> 'KeyPair':
        """Generate a new random key pair with its P2PKH address."""
        return cls.from_private_key(PrivateKey.generate(), network)

    @classmethod
    def from_private_key(cls, private_key: PrivateKey, network: Network = DEFAULT_NETWORK) -> 'KeyPair':
        public_key = private_key.public_key
        return cls(private_key, public_key, public_key.to_address(network))

    def __repr__(self) -> str:
        return f"KeyPair(address={self.address})"


# =============================================================================
# Addresses
# =============================================================================

def pubkey_hash_to_address(pubkey_hash: bytes, network: Network = DEFAULT_NETWORK) -> str:
    """Base58Check encode a 20-byte public key hash as a P2PKH address."""
    return base58check_encode(network.address_version, pubkey_hash)


def address_to_pubkey_hash(address: str, network: Network = None) -> bytes:
    """
    Decode a P2PKH address to its 20-byte public key hash.

    Args:
        address: The Base58Check address string.
        network: If given, the address version byte must match this network.
            Otherwise any built-in network's address version is accepted.

    Returns:
        The 20-byte public key hash.

    Raises:
        DecodeError: If the Base58Check encoding or checksum is invalid, or
            the payload is not 20 bytes.
        ValueError: If the version byte does not belong to the network.
    """
    version, payload = base58check_decode(address)

    if network is not None:
        if version != network.address_version:
            raise ValueError(
                f"Address version 0x{version.hex()} does not belong to "
                f"{network.name} (expected 0x{network.pubkey_hash_version:02x})"
            )
    else:
        network_for_address_version(version[0])

    if len(payload) != 20:
        raise DecodeError(f"Address payload must be 20 bytes, got {len(payload)}")
    return payload


# =============================================================================
# Message Signing Capabilities
# =============================================================================

def sign_digest(digest: bytes, private_key_bytes: bytes) -> Signature:
    """
    Signer capability: sign a 32-byte digest with a raw private key.

    Raises:
        CapabilityError: If the private key is not a valid secp256k1 scalar.
    """
    try:
        private_key = PrivateKey(private_key_bytes)
    except (ValueError, MalformedPointError) as e:
        raise CapabilityError(f"Invalid private key: {e}") from e
    return private_key.sign_recoverable(digest)


def recover_public_key(digest: bytes, signature_bytes: bytes, recovery: int,
                       compressed: bool = True) -> bytes:
    """
    Recoverer capability: rebuild the signer's serialized public key.

    Only recovery ids 0 and 1 are supported; 2 and 3 need r + n as the x
    coordinate, which practically never happens.

    Args:
        digest: The 32-byte digest that was signed.
        signature_bytes: The 64-byte r || s signature.
        recovery: The recovery id from the signature header.
        compressed: Serialize the recovered key compressed (33 bytes) or not.

    Returns:
        The recovered public key bytes.

    Raises:
        CapabilityError: If the signature cannot be turned into a public key.
    """
    if recovery not in (0, 1):
        raise CapabilityError(f"Unsupported recovery id: {recovery}")

    candidates = _recover_candidates(digest, signature_bytes)
    return PublicKey(candidates[recovery]).to_bytes(compressed=compressed)


def pubkey_to_pubkey_hash(public_key_bytes: bytes) -> bytes:
    """PubKeyHasher capability: hash160 of a serialized public key."""
    return hash160(public_key_bytes)
