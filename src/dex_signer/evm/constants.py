"""
Exchange Configuration Management

Provides the global values every signed message depends on: the exchange
contract address, the placeholder address standing for the native asset, the
native asset's decimals and the fixed ``expires`` value. They are kept in one
immutable ``ExchangeConfig`` that is passed to the assemblers, with overrides
loadable from the environment.
"""

import logging
import os
from typing import Optional

import dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from web3 import Web3

from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

#: Order of the secp256k1 base point; valid private keys lie in ``[1, n - 1]``.
SECP256K1_ORDER: int = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

#: Largest value representable as ``uint256``.
UINT256_MAX: int = 2**256 - 1

#: Placeholder address the exchange uses for the native asset (ETH).
NATIVE_ASSET_ADDRESS: str = "0x0000000000000000000000000000000000000000"

#: Decimals of the native asset.
NATIVE_DECIMALS: int = 18

#: Exchange contract that verifies the signatures.
EXCHANGE_CONTRACT_ADDRESS: str = "0x2a0c0dbecc7e4d658f48e01e3fa353f44050c208"

#: ``expires`` is unused by the exchange but still part of the order hash.
ORDER_EXPIRES: int = 1


class ExchangeConfig(BaseModel):
    """Constants injected into the order, cancellation and withdrawal assemblers."""

    model_config = ConfigDict(frozen=True)

    exchange_contract: str = Field(default=EXCHANGE_CONTRACT_ADDRESS, description="Exchange contract address")
    native_asset_address: str = Field(default=NATIVE_ASSET_ADDRESS, description="Native asset placeholder address")
    native_decimals: int = Field(default=NATIVE_DECIMALS, ge=0, description="Native asset decimals")
    expires: int = Field(default=ORDER_EXPIRES, ge=0, description="Fixed order expiry value")

    @field_validator("exchange_contract", "native_asset_address")
    @classmethod
    def check_address(cls, value: str) -> str:
        if not Web3.is_address(value):
            raise ValueError(f"not a valid address: {value!r}")
        return value.lower()


DEFAULT_EXCHANGE_CONFIG = ExchangeConfig()


def get_exchange_contract_from_env() -> Optional[str]:
    """
    Load the exchange contract address override from the environment.

    Environment Variable:
        - DEX_EXCHANGE_CONTRACT: Exchange contract address (0x-prefixed)

    Returns:
        str: Address from environment, or None if not configured
    """
    return os.getenv("DEX_EXCHANGE_CONTRACT")


def get_native_asset_from_env() -> Optional[str]:
    """
    Load the native asset placeholder address override from the environment.

    Environment Variable:
        - DEX_NATIVE_ASSET_ADDRESS: Native asset placeholder (0x-prefixed)
    """
    return os.getenv("DEX_NATIVE_ASSET_ADDRESS")


def get_native_decimals_from_env() -> Optional[str]:
    """
    Load the native asset decimals override from the environment.

    Environment Variable:
        - DEX_NATIVE_DECIMALS: Non-negative integer
    """
    return os.getenv("DEX_NATIVE_DECIMALS")


def load_exchange_config(dotenv_path: Optional[str] = None) -> ExchangeConfig:
    """
    Build an ``ExchangeConfig`` from defaults plus environment overrides.

    A ``.env`` file is loaded first (existing environment variables win).
    Unset variables fall back to the module defaults.

    Args:
        dotenv_path: Optional explicit path to a ``.env`` file.

    Returns:
        ExchangeConfig: Frozen configuration.

    Raises:
        ConfigurationError: If an override is malformed.

    Example:
        # export DEX_EXCHANGE_CONTRACT="0x2a0c0dbecc7e4d658f48e01e3fa353f44050c208"
        config = load_exchange_config()
        signed = sign_order(intent, keypair, config=config)
    """
    dotenv.load_dotenv(dotenv_path)

    overrides = {}
    contract = get_exchange_contract_from_env()
    if contract:
        overrides["exchange_contract"] = contract.strip()
    native = get_native_asset_from_env()
    if native:
        overrides["native_asset_address"] = native.strip()
    decimals = get_native_decimals_from_env()
    if decimals:
        overrides["native_decimals"] = decimals.strip()

    try:
        config = ExchangeConfig(**overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid exchange configuration: {e}") from e

    logger.debug("Exchange config loaded (overrides: %s)", ", ".join(sorted(overrides)) or "none")
    return config
