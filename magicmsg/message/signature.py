"""
Recoverable Message Signatures
==============================

A signed message travels as 65 bytes: one header byte followed by the raw
64-byte ECDSA signature (r || s, each 32 bytes big-endian, no DER).

The header byte tells the verifier how to rebuild the signer's public key
from the signature alone:

    header = 27 + 4 + recovery

- 27 is the fixed base every wallet uses.
- +4 marks a compressed public key. This format only ever produces
  compressed-key signatures, so headers 27-30 (uncompressed) are rejected.
- recovery (0-3) selects which of the candidate curve points R was used
  while signing. In practice it is 0 or 1; 2 and 3 only occur when r
  overflowed the curve order, which is astronomically rare.

So valid headers are 31-34, and decoding simply subtracts 31.
See https://en.bitcoin.it/wiki/Message_signing
"""

from magicmsg.errors import FormatError

HEADER_BASE = 27
COMPRESSED_FLAG = 4
RECOVERY_OFFSET = HEADER_BASE + COMPRESSED_FLAG
"""Header value for a compressed-key signature with recovery id 0 (31)."""

MAX_RECOVERY = 3
SIGNATURE_SIZE = 64
RECOVERY_SIG_SIZE = 1 + SIGNATURE_SIZE


class Signature:
    """
    A raw ECDSA signature together with its public key recovery hint.

    Attributes:
        bytes: The 64-byte r || s signature.
        recovery: Recovery id (0-3, normally 0 or 1).
        compressed: Whether the signer's public key is compressed. Always
            True for signatures this package produces or accepts.
    """

    def __init__(self, sig_bytes: bytes, recovery: int, compressed: bool = True):
        self.bytes = bytes(sig_bytes)
        self.recovery = recovery
        self.compressed = compressed

    @property
    def r(self) -> int:
        return int.from_bytes(self.bytes[:32], 'big')

    @property
    def s(self) -> int:
        return int.from_bytes(self.bytes[32:], 'big')

    def __repr__(self) -> str:
        return (
            f"Signature({self.bytes.hex()[:16]}..., "
            f"recovery={self.recovery}, compressed={self.compressed})"
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Signature):
            return NotImplemented
        return (
            self.bytes == other.bytes
            and self.recovery == other.recovery
            and self.compressed == other.compressed
        )

    def __hash__(self) -> int:
        return hash((self.bytes, self.recovery, self.compressed))


def encode_recovery_sig(signature: Signature) -> bytes:
    """
    Serialize a signature into the 65-byte recoverable format.

    Args:
        signature: A compressed-key signature with a 64-byte body.

    Returns:
        header byte (31 + recovery) followed by the 64 signature bytes.

    Raises:
        FormatError: If the body is not 64 bytes, the recovery id is outside
            0-3, or the signature is for an uncompressed key.
    """
    if len(signature.bytes) != SIGNATURE_SIZE:
        raise FormatError(
            f"Signature must be exactly {SIGNATURE_SIZE} bytes, "
            f"got {len(signature.bytes)}"
        )
    if not 0 <= signature.recovery <= MAX_RECOVERY:
        raise FormatError(f"Recovery id must be between 0 and 3, got {signature.recovery}")
    if not signature.compressed:
        raise FormatError("Only compressed-key signatures can be encoded")

    header = RECOVERY_OFFSET + signature.recovery
    return bytes([header]) + signature.bytes


def decode_recovery_sig(recovery_sig_bytes: bytes) -> Signature:
    """
    Parse a 65-byte recoverable signature.

    Args:
        recovery_sig_bytes: header byte followed by 64 signature bytes.

    Returns:
        The Signature, always marked compressed.

    Raises:
        FormatError: If the input is not 65 bytes long or the header byte is
            outside 31-34 (i.e. not a compressed-key signature).
    """
    if len(recovery_sig_bytes) != RECOVERY_SIG_SIZE:
        raise FormatError(
            f"Recovery signature must be exactly {RECOVERY_SIG_SIZE} bytes, "
            f"got {len(recovery_sig_bytes)}"
        )

    header = recovery_sig_bytes[0]
    if not RECOVERY_OFFSET <= header <= RECOVERY_OFFSET + MAX_RECOVERY:
        raise FormatError(
            f"Unsupported signature header byte {header}: expected "
            f"{RECOVERY_OFFSET}-{RECOVERY_OFFSET + MAX_RECOVERY} (compressed key)"
        )

    return Signature(
        sig_bytes=recovery_sig_bytes[1:],
        recovery=header - RECOVERY_OFFSET,
        compressed=True,
    )
