"""
Shared test data and fixtures for the dex-signer test suite.

Key Components:
    - Well-known private keys with their published addresses
    - Token, order, cancellation and withdrawal fixtures
    - Environment isolation for configuration tests

Usage:
    Fixtures are picked up automatically by pytest; constants can be imported
    with ``from conftest import MOCK_TOKEN_ADDRESS``.
"""

import pytest

from dex_signer.schemas import Keypair, TokenDescriptor
from dex_signer.evm.keys import derive_keypair


# ========================================================================
# Mock Constants
# ========================================================================

# Private key 1 and its well-known address
KEY_ONE = (1).to_bytes(32, "big")
KEY_ONE_ADDRESS = "0x7E5F4552091A69125d5DfCb7b8C2659029395Bdf"

# Example key from the eth-account documentation
DOC_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
DOC_ADDRESS = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"

MOCK_SEED = b"dex-signer test seed"
MOCK_TOKEN_ADDRESS = "0x" + "aa" * 20
MOCK_OWNER_ADDRESS = "0x" + "bb" * 20
ZERO_ADDRESS = "0x" + "00" * 20

# Order hash of the ``order_data`` fixture under the default exchange config
ORDER_HASH_HEX = "16e85cfd43473210cb6e580fe1711eb447b9775d93c32876b96313efeae49539"
# Cancellation envelope of ORDER_HASH_HEX with nonce 9
CANCEL_ENVELOPE_HEX = "8e1ba58acbc1e84aa1ce0c79331a6d113a75385d79066399804f16599bda7f62"

ENV_VARS = ("DEX_EXCHANGE_CONTRACT", "DEX_NATIVE_ASSET_ADDRESS", "DEX_NATIVE_DECIMALS")


# ========================================================================
# Fixtures
# ========================================================================

@pytest.fixture(autouse=True)
def clean_exchange_env(monkeypatch):
    """Remove configuration overrides and restore the environment afterwards."""
    for name in ENV_VARS:
        # setenv first so monkeypatch removes anything a .env file adds
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)


@pytest.fixture
def keypair() -> Keypair:
    """Keypair derived from the fixed test seed."""
    return derive_keypair(MOCK_SEED)


@pytest.fixture
def doc_keypair() -> Keypair:
    """Keypair with a published address."""
    return Keypair(private_key=DOC_PRIVATE_KEY)


@pytest.fixture
def token() -> TokenDescriptor:
    return TokenDescriptor(contract=MOCK_TOKEN_ADDRESS, factor=18)


@pytest.fixture
def order_data() -> dict:
    """Buy order in exchange wire format."""
    return {
        "amountETH": "1",
        "amountToken": "100",
        "isBuyOrder": True,
        "token": {"contract": MOCK_TOKEN_ADDRESS, "factor": 18},
        "nonce": 5,
        "address": MOCK_OWNER_ADDRESS,
    }


@pytest.fixture
def cancel_data(order_data) -> dict:
    """Cancellation of ``order_data`` with a fresh nonce."""
    return {**order_data, "nonceOfOrder": order_data["nonce"], "nonce": 9}


@pytest.fixture
def withdrawal_data() -> dict:
    return {
        "token": {"contract": MOCK_TOKEN_ADDRESS, "factor": 6},
        "amount": "2.5",
        "nonce": 11,
        "address": MOCK_OWNER_ADDRESS,
    }
