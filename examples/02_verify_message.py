"""
Example 02: Verify a Message
============================

This example checks a base64 message signature against a Dash address:
1. Decode the address to its 20-byte public key hash.
2. Decode the signature and recover the signer's public key from it.
3. Hash the recovered key and compare it with the address hash.

Changing any letter of the message, or most letters of the signature, makes
verification fail.

Usage:
    python examples/02_verify_message.py
"""

from magicmsg.crypto.keys import (
    address_to_pubkey_hash,
    pubkey_to_pubkey_hash,
    recover_public_key,
)
from magicmsg.message import magic_recover_pubkey, magic_verify
from magicmsg.networks import DASH
from magicmsg.utils.encoding import base64_to_bytes

ADDRESS = "XyBmeuLa8y3D3XmzPvCTj5PVh7WvMPkLn1"
MESSAGE = "dte2022-akerdemelidis|estoever|mmason"
SIGNATURE = "H2Opy9NX72iPZRcDVEHrFn2qmVwWMgc+DKILdVxl1yfmcL2qcpu9esw9wcD7RH0/dJHnIISe5j39EYahorWQM7I="


def main():
    print("=" * 60)
    print("Magic Message Signing - Verify")
    print("=" * 60)

    pubkey_hash = address_to_pubkey_hash(ADDRESS, DASH)
    recovery_sig_bytes = base64_to_bytes(SIGNATURE)
    message_bytes = MESSAGE.encode("utf-8")

    print(f"\n  Address:      {ADDRESS}")
    print(f"  Address hash: {pubkey_hash.hex()}")

    public_key_bytes = magic_recover_pubkey(
        message_bytes, recovery_sig_bytes, recover_public_key, DASH.magic_bytes
    )
    print(f"  Recovered public key: {public_key_bytes.hex()}")

    verified = magic_verify(
        pubkey_hash,
        message_bytes,
        recovery_sig_bytes,
        recover_public_key,
        pubkey_to_pubkey_hash,
        DASH.magic_bytes,
    )
    print(f"\n  Verified: {verified}")

    tampered = magic_verify(
        pubkey_hash,
        (MESSAGE + "!").encode("utf-8"),
        recovery_sig_bytes,
        recover_public_key,
        pubkey_to_pubkey_hash,
        DASH.magic_bytes,
    )
    print(f"  Verified with a tampered message: {tampered}")


if __name__ == "__main__":
    main()
