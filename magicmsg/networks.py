"""
Network Parameters
==================

A signed message is scoped to one network by the "magic" preamble mixed into
its hash, so a signature made for Dash is useless on Bitcoin and vice versa.
Addresses and WIF private keys carry a network-specific version byte as well.

Each supported network is an immutable Network value defined below. Callers
pick one per call; nothing here is mutable global state, so several networks
can be used side by side in one process.
"""

from typing import NamedTuple


class Network(NamedTuple):
    """
    Parameters that tie messages, addresses and keys to one network.

    Attributes:
        name: Human readable network name.
        magic_bytes: Preamble hashed in front of every signed message.
        pubkey_hash_version: Base58Check version byte of P2PKH addresses.
        wif_version: Base58Check version byte of WIF private keys.
    """

    name: str
    magic_bytes: bytes
    pubkey_hash_version: int
    wif_version: int

    @property
    def address_version(self) -> bytes:
        """The address version as a single byte."""
        return bytes([self.pubkey_hash_version])

    @property
    def wif_version_byte(self) -> bytes:
        """The WIF version as a single byte."""
        return bytes([self.wif_version])

    def __repr__(self) -> str:
        return f"Network({self.name})"


# ---------------------------------------------------------------------------
# Built-in networks
# ---------------------------------------------------------------------------

DASH = Network('dash', b'DarkCoin Signed Message:\n', 0x4c, 0xcc)
"""Dash mainnet. Addresses start with 'X', WIF keys with 'X' or '7'.
The magic keeps the network's original DarkCoin name."""

DASH_TESTNET = Network('dash-testnet', b'DarkCoin Signed Message:\n', 0x8c, 0xef)
"""Dash testnet. Same magic as mainnet; addresses start with 'y'."""

BITCOIN = Network('bitcoin', b'Bitcoin Signed Message:\n', 0x00, 0x80)
"""Bitcoin mainnet. Addresses start with '1'."""

BITCOIN_TESTNET = Network('bitcoin-testnet', b'Bitcoin Signed Message:\n', 0x6f, 0xef)
"""Bitcoin testnet. Addresses start with 'm' or 'n'."""

DEFAULT_NETWORK = DASH

DEFAULT_MAGIC_BYTES = DEFAULT_NETWORK.magic_bytes
"""Magic bytes used when a caller does not supply any."""

NETWORKS = (DASH, DASH_TESTNET, BITCOIN, BITCOIN_TESTNET)


def network_for_address_version(version: int) -> Network:
    """
    Look up the built-in network whose addresses use a version byte.

    Raises:
        ValueError: If no built-in network uses the version byte.
    """
    for network in NETWORKS:
        if network.pubkey_hash_version == version:
            return network
    raise ValueError(f"Unknown address version byte: 0x{version:02x}")


def network_for_wif_version(version: int) -> Network:
    """
    Look up the first built-in network whose WIF keys use a version byte.

    Testnets share 0xef, in which case the first match wins.

    Raises:
        ValueError: If no built-in network uses the version byte.
    """
    for network in NETWORKS:
        if network.wif_version == version:
            return network
    raise ValueError(f"Unknown WIF version byte: 0x{version:02x}")
