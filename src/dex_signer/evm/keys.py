"""
Deterministic key and address derivation.

A seed always maps to the same private key (``sha256(seed)``) and a private
key always maps to the same EIP-55 address.
"""

import hashlib
from typing import Union

from eth_account import Account

from ..exceptions import SigningError
from ..schemas.orders import Keypair
from .constants import SECP256K1_ORDER

SeedLike = Union[bytes, bytearray, str]


def check_private_key(private_key: bytes) -> bytes:
    """
    Ensure ``private_key`` is a valid secp256k1 scalar.

    Raises:
        SigningError: If the key is not 32 bytes or not in ``[1, n - 1]``.
    """
    if not isinstance(private_key, (bytes, bytearray)) or len(private_key) != 32:
        raise SigningError("private key must be 32 bytes")
    if not 0 < int.from_bytes(private_key, "big") < SECP256K1_ORDER:
        raise SigningError("private key is not a valid secp256k1 scalar")
    return bytes(private_key)


def derive_private_key(seed: SeedLike) -> bytes:
    """SHA-256 of ``seed``; text seeds are UTF-8 encoded first."""
    if isinstance(seed, str):
        seed = seed.encode("utf-8")
    if not isinstance(seed, (bytes, bytearray)):
        raise TypeError(f"seed must be bytes or str, got {type(seed).__name__}")
    return hashlib.sha256(seed).digest()


def derive_address(private_key: bytes) -> str:
    """
    EIP-55 checksummed address of ``private_key``.

    The result is mixed case (``0x7E5F...``), not the all-lowercase hex some
    exchange clients emit. Compare addresses case-insensitively, or lowercase
    both sides first.

    Raises:
        SigningError: If the key is not a valid secp256k1 scalar.
    """
    return Account.from_key(check_private_key(private_key)).address


def derive_keypair(seed: SeedLike) -> Keypair:
    """
    Build a ``Keypair`` from ``seed``.

    Example::

        keypair = derive_keypair(b"correct horse battery staple")
        keypair.address  # same value on every call
    """
    return Keypair(private_key=derive_private_key(seed))
