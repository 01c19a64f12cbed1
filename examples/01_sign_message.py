"""
Example 01: Sign a Message
==========================

This example signs a text message with a Dash private key:
1. Import the private key from Wallet Import Format (WIF).
2. Compute the magic hash of the message (the network preamble and the
   message, each length-prefixed, double SHA-256 hashed).
3. Sign the hash and prepend the recovery header byte.
4. Print the 65-byte signature as base64.

The signature is deterministic, so it always matches the one Dash Core's
"signmessage" command produces for the same key and message.

Usage:
    python examples/01_sign_message.py
"""

import logging

from magicmsg.crypto.keys import PrivateKey, sign_digest
from magicmsg.message import magic_hash, magic_sign
from magicmsg.networks import DASH
from magicmsg.utils.encoding import bytes_to_base64

WIF = "XK5DHnAiSj6HQNsNcDkawd9qdp8UFMdYftdVZFuRreTMJtbJhk8i"
MESSAGE = "dte2022-akerdemelidis|estoever|mmason"


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    print("=" * 60)
    print("Magic Message Signing - Sign")
    print("=" * 60)

    print("\n[Step 1] Importing the private key...")
    private_key = PrivateKey.from_wif(WIF, DASH)
    print(f"  Address: {private_key.public_key.to_address(DASH)}")

    print("\n[Step 2] Hashing the message with the network magic...")
    message_bytes = MESSAGE.encode("utf-8")
    print(f"  Message:    {MESSAGE}")
    print(f"  Magic hash: {magic_hash(message_bytes, DASH.magic_bytes).hex()}")

    print("\n[Step 3] Signing...")
    recovery_sig_bytes = magic_sign(
        private_key.to_bytes(),
        message_bytes,
        sign_digest,
        DASH.magic_bytes,
    )
    print(f"  Header byte: {recovery_sig_bytes[0]}")

    print("\n[Step 4] Signature (base64):")
    print(f"  {bytes_to_base64(recovery_sig_bytes)}")


if __name__ == "__main__":
    main()
