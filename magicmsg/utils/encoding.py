"""
Signed-message encoding utilities.

This module provides the byte-level building blocks of the signed-message
wire format:

- Base64 decoding (standard or URL-safe input) and encoding (standard output)
- Byte concatenation and hash equality
- Little-endian integer encoding
- Variable-length integer (varint / CompactSize) encoding, used to length-prefix
  the network magic and the message before hashing
- Base58Check encoding (used for addresses and WIF private keys)

Signatures travel as base64 text. Wallets disagree on the alphabet (some emit
the URL-safe variant without padding), so decoding accepts both while encoding
always produces the standard RFC 4648 alphabet with '=' padding.
"""

import base64
import binascii
import logging

import base58

from magicmsg.crypto.hash import double_sha256
from magicmsg.errors import DecodeError, RangeError

logger = logging.getLogger(__name__)

MAX_U16 = 0xffff
MAX_U32 = 0xffffffff


# ---------------------------------------------------------------------------
# Base64
# ---------------------------------------------------------------------------

def url_base64_to_rfc_base64(url_base64: str) -> str:
    """
    Recode URL-safe base64 text to the standard (RFC) alphabet.

    '-' becomes '+', '_' becomes '/', and '=' is appended until the length is
    a multiple of 4. Text that is already standard base64 passes through
    unchanged.

    Example:
        >>> url_base64_to_rfc_base64('H2Op-_8')
        'H2Op+/8='
    """
    rfc_base64 = url_base64.replace('_', '/').replace('-', '+')
    while len(rfc_base64) % 4 > 0:
        rfc_base64 += '='
    return rfc_base64


def rfc_base64_to_bytes(rfc_base64: str) -> bytes:
    """
    Decode standard base64 text.

    Raises:
        DecodeError: On characters outside the alphabet or malformed padding.
    """
    try:
        return base64.b64decode(rfc_base64, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Invalid base64 input: {e}") from e


def base64_to_bytes(text: str) -> bytes:
    """
    Decode standard or URL-safe base64 text to bytes.

    Args:
        text: Base64 text in either alphabet, padded or not.

    Returns:
        The decoded bytes.

    Raises:
        DecodeError: If the text is not valid base64 after normalization.

    Example:
        >>> base64_to_bytes('aGVsbG8')
        b'hello'
    """
    return rfc_base64_to_bytes(url_base64_to_rfc_base64(text))


def bytes_to_base64(data: bytes) -> str:
    """
    Encode bytes as standard base64 with '=' padding.

    Example:
        >>> bytes_to_base64(b'hello')
        'aGVsbG8='
    """
    return base64.b64encode(data).decode('ascii')


# ---------------------------------------------------------------------------
# Byte sequences
# ---------------------------------------------------------------------------

def concat_bytes(parts) -> bytes:
    """
    Join an ordered sequence of byte strings into one.

    The parts may have any lengths; the result length is their sum.

    Example:
        >>> concat_bytes([b'\\x01', b'', b'\\x02\\x03'])
        b'\\x01\\x02\\x03'
    """
    return b''.join(bytes(part) for part in parts)


def bytes_equal(a: bytes, b: bytes) -> bool:
    """
    Compare two hashes for equality.

    Only meant for public values such as address hashes. Every byte is
    visited once the lengths match, but constant-time behavior is not
    guaranteed by the interpreter, so never use this for private keys or
    other secrets (use hmac.compare_digest for those).

    Returns:
        False if the lengths differ or any byte differs, True otherwise.
    """
    if len(a) != len(b):
        return False

    is_equal = True
    for x, y in zip(a, b):
        if x != y:
            is_equal = False
    return is_equal


# ---------------------------------------------------------------------------
# Endian conversions
# ---------------------------------------------------------------------------

def int_to_little_endian(value: int, length: int) -> bytes:
    """
    Encode an integer as little-endian bytes of the specified length.

    Example:
        >>> int_to_little_endian(1, 4)
        b'\\x01\\x00\\x00\\x00'
    """
    return value.to_bytes(length, byteorder='little')


def little_endian_to_int(data: bytes) -> int:
    """
    Decode little-endian bytes to an integer.

    Example:
        >>> little_endian_to_int(b'\\x01\\x00\\x00\\x00')
        1
    """
    return int.from_bytes(data, byteorder='little')


# ---------------------------------------------------------------------------
# Variable-length integer (varint) encoding
# ---------------------------------------------------------------------------

def encode_varint(value: int) -> bytes:
    """
    Encode an integer using the CompactSize variable-length format.

    Encoding rules:
    - 0x00-0xfc:          1 byte  (the value itself)
    - 0xfd-0xffff:        3 bytes (0xfd prefix + 2-byte little-endian)
    - 0x10000-0xffffffff: 5 bytes (0xfe prefix + 4-byte little-endian)

    The 9-byte 0xff form is not part of the signed-message format; nothing
    signs multi-gigabyte messages.

    Args:
        value: Non-negative integer to encode.

    Returns:
        Variable-length encoded bytes.

    Raises:
        RangeError: If value is negative or larger than 0xffffffff.

    Example:
        >>> encode_varint(252).hex()
        'fc'
        >>> encode_varint(253).hex()
        'fdfd00'
    """
    if value < 0:
        raise RangeError(f"Varint value must be non-negative, got {value}")

    if value < 0xfd:
        return bytes([value])
    elif value <= MAX_U16:
        return b'\xfd' + int_to_little_endian(value, 2)
    elif value <= MAX_U32:
        return b'\xfe' + int_to_little_endian(value, 4)

    raise RangeError(f"Value too large to encode as varint: {value}")


def decode_varint(data: bytes, offset: int = 0) -> tuple:
    """
    Decode a CompactSize variable-length integer from a byte buffer.

    Mirrors encode_varint: only the 1, 3 and 5 byte forms are accepted, and
    each value must use the narrowest form that can hold it.

    Args:
        data: The byte buffer containing the varint.
        offset: Starting position in the buffer.

    Returns:
        A tuple of (decoded_value, number_of_bytes_consumed).

    Raises:
        DecodeError: If the buffer is truncated or the encoding is not minimal.
        RangeError: If the 0xff (8-byte) form is encountered.

    Example:
        >>> decode_varint(b'\\xfc')
        (252, 1)
        >>> decode_varint(b'\\xfd\\xfd\\x00')
        (253, 3)
    """
    if offset >= len(data):
        raise DecodeError("Not enough data to decode varint")

    first_byte = data[offset]

    if first_byte < 0xfd:
        return (first_byte, 1)
    elif first_byte == 0xfd:
        if offset + 3 > len(data):
            raise DecodeError("Not enough data for 2-byte varint")
        value = little_endian_to_int(data[offset + 1:offset + 3])
        if value < 0xfd:
            raise DecodeError(f"Non-minimal varint encoding of {value}")
        return (value, 3)
    elif first_byte == 0xfe:
        if offset + 5 > len(data):
            raise DecodeError("Not enough data for 4-byte varint")
        value = little_endian_to_int(data[offset + 1:offset + 5])
        if value <= MAX_U16:
            raise DecodeError(f"Non-minimal varint encoding of {value}")
        return (value, 5)

    raise RangeError("8-byte varint values are not supported")


# ---------------------------------------------------------------------------
# Base58Check encoding / decoding
# ---------------------------------------------------------------------------

def base58check_encode(version: bytes, payload: bytes) -> str:
    """
    Encode data using Base58Check encoding with a version prefix and checksum.

    Format: Base58(version + payload + checksum)
    where checksum = first 4 bytes of double_sha256(version + payload)

    Args:
        version: Version byte(s) indicating the type of data
                 (e.g., b'\\x4c' for Dash mainnet P2PKH addresses).
        payload: The data to encode (e.g., 20-byte public key hash).

    Returns:
        Base58Check encoded string.

    Example:
        >>> base58check_encode(b'\\x00', bytes(20))
        '1111111111111111111114oLvT2'
    """
    data = version + payload
    checksum = double_sha256(data)[:4]
    return base58.b58encode(data + checksum).decode('ascii')


def base58check_decode(s: str) -> tuple:
    """
    Decode a Base58Check encoded string, verifying the checksum.

    Args:
        s: Base58Check encoded string.

    Returns:
        A tuple of (version_bytes, payload_bytes).

    Raises:
        DecodeError: If the string is not Base58, is too short, or the
            checksum does not match.
    """
    try:
        data = base58.b58decode(s)
    except ValueError as e:
        raise DecodeError(f"Invalid Base58 string: {e}") from e

    if len(data) < 5:
        raise DecodeError("Base58Check data too short (must be at least 5 bytes)")

    payload_with_version = data[:-4]
    checksum = data[-4:]

    expected_checksum = double_sha256(payload_with_version)[:4]
    if checksum != expected_checksum:
        logger.warning("Rejected Base58Check string with bad checksum")
        raise DecodeError(
            f"Base58Check checksum mismatch: "
            f"expected {expected_checksum.hex()}, got {checksum.hex()}"
        )

    return (payload_with_version[:1], payload_with_version[1:])
