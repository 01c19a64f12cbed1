# Signed-message framing, signature codec and sign/verify orchestration

from .magic import magic_concat, magic_hash
from .signature import Signature, decode_recovery_sig, encode_recovery_sig
from .signing import (
    Hasher,
    PubKeyHasher,
    Recoverer,
    Signer,
    magic_recover_pubkey,
    magic_sign,
    magic_verify,
)

__all__ = [
    # Magic hash
    'magic_concat',
    'magic_hash',
    # Recovery signatures
    'Signature',
    'decode_recovery_sig',
    'encode_recovery_sig',
    # Capabilities
    'Hasher',
    'PubKeyHasher',
    'Recoverer',
    'Signer',
    # Orchestration
    'magic_recover_pubkey',
    'magic_sign',
    'magic_verify',
]
