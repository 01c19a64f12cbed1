"""
Message Signing Errors
======================

Every structural problem found while framing, encoding or decoding a signed
message raises one of the exceptions below. A signature that is well formed
but belongs to a different address is *not* an error: verification simply
returns False.

- **RangeError**: a length does not fit the supported varint forms (>= 2^32).
- **DecodeError**: malformed base64 text or a truncated/non-minimal varint.
- **FormatError**: a recovery signature with the wrong length or header byte.
- **CapabilityError**: a signing, recovery or hashing backend failed, e.g. the
  signature bytes do not describe a point on the curve.

The first three also derive from ValueError, so callers that already treat
bad input as ValueError keep working.
"""


class MessageSigningError(Exception):
    """Base class for all errors raised by this package."""


class RangeError(MessageSigningError, ValueError):
    """Raised when an integer is outside the encodable varint range."""


class DecodeError(MessageSigningError, ValueError):
    """Raised when encoded input (base64, varint) cannot be decoded."""


class FormatError(MessageSigningError, ValueError):
    """Raised when a recovery signature does not have the expected layout."""


class CapabilityError(MessageSigningError):
    """Raised by a signing, recovery or hashing backend that could not complete."""
