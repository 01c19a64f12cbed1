"""
magicmsg: sign and verify "magic" messages for Bitcoin-derived networks.

A wallet proves control of an address by signing an arbitrary text message.
The signature is 65 bytes (a recovery header plus r || s), usually shown as
base64, and anyone can check it against the address alone.
"""

from .errors import CapabilityError, DecodeError, FormatError, MessageSigningError, RangeError
from .message import (
    Signature,
    decode_recovery_sig,
    encode_recovery_sig,
    magic_hash,
    magic_recover_pubkey,
    magic_sign,
    magic_verify,
)
from .networks import BITCOIN, BITCOIN_TESTNET, DASH, DASH_TESTNET, DEFAULT_MAGIC_BYTES, Network
from .utils.encoding import (
    base64_to_bytes,
    bytes_equal,
    bytes_to_base64,
    concat_bytes,
    decode_varint,
    encode_varint,
)

__version__ = '0.1.0'

__all__ = [
    '__version__',
    # Errors
    'MessageSigningError',
    'RangeError',
    'DecodeError',
    'FormatError',
    'CapabilityError',
    # Networks
    'Network',
    'DASH',
    'DASH_TESTNET',
    'BITCOIN',
    'BITCOIN_TESTNET',
    'DEFAULT_MAGIC_BYTES',
    # Encoding
    'base64_to_bytes',
    'bytes_to_base64',
    'concat_bytes',
    'bytes_equal',
    'encode_varint',
    'decode_varint',
    # Messages
    'Signature',
    'encode_recovery_sig',
    'decode_recovery_sig',
    'magic_hash',
    'magic_sign',
    'magic_verify',
    'magic_recover_pubkey',
]
