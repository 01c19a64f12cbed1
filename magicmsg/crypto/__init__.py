# Hash functions; curve-backed keys live in magicmsg.crypto.keys

from .hash import sha256, double_sha256, ripemd160, hash160

__all__ = [
    'sha256',
    'double_sha256',
    'ripemd160',
    'hash160',
]
