"""
Wallet-Level Message Signing
============================

The functions in magicmsg.message.signing work on raw bytes and leave all
cryptography to injected capabilities. Wallet users deal in strings instead:
a WIF private key, an address, a text message and a base64 signature.

This module bridges the two, using the software secp256k1 backend from
magicmsg.crypto.keys. The output is interchangeable with the "signmessage" /
"verifymessage" commands of Dash Core and Bitcoin Core:

    >>> sig = sign_message(wif, "Hello, World!")
    >>> verify_message(address, "Hello, World!", sig)
    True

Messages are UTF-8 encoded before signing.
"""

import logging

from magicmsg.crypto.keys import (
    PrivateKey,
    address_to_pubkey_hash,
    pubkey_to_pubkey_hash,
    recover_public_key,
    sign_digest,
)
from magicmsg.errors import FormatError
from magicmsg.message.signing import magic_sign, magic_verify
from magicmsg.networks import DEFAULT_NETWORK, Network
from magicmsg.utils.encoding import base64_to_bytes, bytes_to_base64

logger = logging.getLogger(__name__)


def sign_message(wif: str, message_text: str, network: Network = DEFAULT_NETWORK) -> str:
    """
    Sign a text message with a WIF private key.

    Args:
        wif: The signer's private key in Wallet Import Format.
        message_text: The message to sign.
        network: Network of the key; its magic scopes the signature.

    Returns:
        The signature as standard base64 (88 characters).

    Raises:
        DecodeError: If the WIF string is not valid Base58Check.
        ValueError: If the WIF belongs to another network.
        FormatError: If the WIF is for an uncompressed key, whose address
            a compressed-key signature could never match.
    """
    private_key = PrivateKey.from_wif(wif, network)
    if not private_key.compressed:
        raise FormatError("Message signing requires a compressed-key WIF")
    logger.debug("Signing message as %s on %s", private_key.public_key.to_address(network), network.name)
    recovery_sig_bytes = magic_sign(
        private_key.to_bytes(),
        message_text.encode('utf-8'),
        sign_digest,
        network.magic_bytes,
    )
    return bytes_to_base64(recovery_sig_bytes)


def verify_message(address: str, message_text: str, signature: str,
                   network: Network = DEFAULT_NETWORK) -> bool:
    """
    Check that a text message was signed by the holder of an address.

    Args:
        address: The claimed signer's P2PKH address.
        message_text: The message that was signed.
        signature: The base64 signature, standard or URL-safe alphabet.
        network: Network of the address; its magic scopes the signature.

    Returns:
        True if the signature was made by the address's key, False otherwise.

    Raises:
        DecodeError: If the address or signature cannot be decoded.
        FormatError: If the signature is not a 65-byte compressed-key signature.
        CapabilityError: If the signature bytes do not describe a curve point.
    """
    pubkey_hash = address_to_pubkey_hash(address, network)
    recovery_sig_bytes = base64_to_bytes(signature)

    return magic_verify(
        pubkey_hash,
        message_text.encode('utf-8'),
        recovery_sig_bytes,
        recover_public_key,
        pubkey_to_pubkey_hash,
        network.magic_bytes,
    )
