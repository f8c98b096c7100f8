"""
EVM Off-Chain Signing Utilities

Builds and signs the three messages the exchange accepts: order placement,
order cancellation and withdrawal. All cryptographic operations are performed
in-process using ``eth_account``; no RPC calls are made.

Exported helpers
----------------
sign_digest
    Deterministic (RFC 6979) ECDSA signature over a 32-byte digest, returned
    as a typed ``ECDSASignature`` (v, r, s).

sign_order
    Convert amounts, orient the buy/sell sides, hash the order tuple and sign
    it. Returns a ``SignedOrder``.

sign_cancel_order
    Recompute the hash of the original order (with its own nonce), wrap it in
    the cancellation envelope with the new nonce and sign it. Returns a
    ``SignedCancellation``.

sign_withdrawal
    Hash and sign a withdrawal request. Returns a ``SignedWithdrawal``.

Every signature is taken over ``signable_digest(content_hash)``, the EIP-191
personal-message hash the exchange contract recomputes on-chain.
"""

import logging
from typing import Any, Mapping, Optional, Tuple, Type, TypeVar, Union

from eth_account import Account
from eth_utils import to_hex
from pydantic import ValidationError

from ..exceptions import SigningError, UnsupportedOrderShape
from ..schemas.bases import CanonicalModel
from ..schemas.orders import (
    CancelIntent,
    ECDSASignature,
    Keypair,
    OrderIntent,
    SignedCancellation,
    SignedOrder,
    SignedWithdrawal,
    WithdrawalIntent,
)
from .constants import DEFAULT_EXCHANGE_CONFIG, SECP256K1_ORDER, ExchangeConfig
from .hashing import cancel_envelope_hash, order_hash, signable_digest, withdrawal_hash
from .keys import check_private_key
from .units import to_atomic_units

logger = logging.getLogger(__name__)

IntentT = TypeVar("IntentT", bound=CanonicalModel)


# ---------------------------------------------------------------------------
# Low-level signer
# ---------------------------------------------------------------------------

def _encode_component(name: str, value: int) -> str:
    if not 0 < value < SECP256K1_ORDER:
        raise SigningError(f"signature component {name} out of range")
    return to_hex(value.to_bytes(32, "big"))


def sign_digest(digest: bytes, private_key: Union[bytes, Keypair]) -> ECDSASignature:
    """
    Sign a 32-byte digest with deterministic ECDSA.

    The nonce is derived from digest and key (RFC 6979), so the same inputs
    always give the same signature.

    Args:
        digest:      32-byte value to sign, normally ``signable_digest(...)``.
        private_key: 32-byte secp256k1 private key, or a ``Keypair``.

    Returns:
        ``ECDSASignature`` with ``v`` in {27, 28} and 32-byte hex ``r``/``s``.

    Raises:
        SigningError: If the key is not a valid secp256k1 scalar or the digest
            is not 32 bytes.
    """
    if isinstance(private_key, Keypair):
        private_key = private_key.private_key.get_secret_value()
    key = check_private_key(private_key)
    if not isinstance(digest, (bytes, bytearray)) or len(digest) != 32:
        raise SigningError("digest must be 32 bytes")

    try:
        signed = Account.unsafe_sign_hash(bytes(digest), key)
    except ValueError as e:
        # eth_account messages never carry key material
        raise SigningError(f"ECDSA signing failed: {e}") from e

    v = signed.v if signed.v >= 27 else signed.v + 27
    return ECDSASignature(
        v=v,
        r=_encode_component("r", signed.r),
        s=_encode_component("s", signed.s),
    )


def sign_content_hash(message_hash: bytes, private_key: Union[bytes, Keypair]) -> ECDSASignature:
    """Wrap ``message_hash`` in the personal-message prefix and sign it."""
    return sign_digest(signable_digest(message_hash), private_key)


# ---------------------------------------------------------------------------
# Assemblers
# ---------------------------------------------------------------------------

def _coerce_intent(intent: Union[IntentT, Mapping[str, Any]], model: Type[IntentT]) -> IntentT:
    if isinstance(intent, model):
        return intent
    if isinstance(intent, CanonicalModel):
        intent = intent.model_dump(by_alias=True)
    try:
        return model.model_validate(intent)
    except ValidationError as e:
        raise UnsupportedOrderShape(
            f"{model.__name__} is missing or has invalid fields: {e.error_count()} error(s)",
            errors=e.errors(include_input=False),
        ) from e


def _orient(intent: OrderIntent, config: ExchangeConfig) -> Tuple[str, str, str, str]:
    """Return ``(token_buy, amount_buy, token_sell, amount_sell)`` for the intent."""
    amount_token = to_atomic_units(intent.amount_token, intent.token.decimals)
    amount_eth = to_atomic_units(intent.amount_eth, config.native_decimals)
    token_address = intent.token.contract_address

    if intent.is_buy_order:
        return token_address, amount_token, config.native_asset_address, amount_eth
    return config.native_asset_address, amount_eth, token_address, amount_token


def _order_hash_for(intent: OrderIntent, nonce: int, config: ExchangeConfig) -> Tuple[bytes, Tuple[str, str, str, str]]:
    sides = _orient(intent, config)
    token_buy, amount_buy, token_sell, amount_sell = sides
    raw = order_hash(
        exchange_contract=config.exchange_contract,
        token_buy=token_buy,
        amount_buy=amount_buy,
        token_sell=token_sell,
        amount_sell=amount_sell,
        expires=config.expires,
        nonce=nonce,
        owner=intent.address,
    )
    return raw, sides


def sign_order(
    intent: Union[OrderIntent, Mapping[str, Any]],
    keypair: Keypair,
    config: Optional[ExchangeConfig] = None,
) -> SignedOrder:
    """
    Build and sign an order placement payload.

    Args:
        intent:  ``OrderIntent`` or a mapping with its fields (wire names such
                 as ``amountETH`` and ``isBuyOrder`` are accepted).
        keypair: Key of the order owner.
        config:  Exchange constants; ``DEFAULT_EXCHANGE_CONFIG`` when omitted.

    Returns:
        ``SignedOrder`` with amounts in atomic units and v, r, s attached.

    Raises:
        UnsupportedOrderShape: If ``intent`` is missing required fields.
        InvalidAmount: If an amount is not a valid non-negative decimal.
        InvalidField: If an address is not 20 bytes.
        SigningError: If the key is invalid.

    Example::

        signed = sign_order(
            {
                "amountETH": "1",
                "amountToken": "100",
                "isBuyOrder": True,
                "token": {"contract": "0xaaaa...aaaa", "factor": 18},
                "nonce": 5,
                "address": "0xbbbb...bbbb",
            },
            derive_keypair(b"seed"),
        )
        body = signed.to_dict()
    """
    config = config or DEFAULT_EXCHANGE_CONFIG
    intent = _coerce_intent(intent, OrderIntent)

    raw, (token_buy, amount_buy, token_sell, amount_sell) = _order_hash_for(intent, intent.nonce, config)
    signature = sign_content_hash(raw, keypair)
    logger.debug("Signed order %s nonce=%s owner=%s", to_hex(raw), intent.nonce, intent.address)

    return SignedOrder(
        token_buy=token_buy,
        amount_buy=amount_buy,
        token_sell=token_sell,
        amount_sell=amount_sell,
        address=intent.address,
        nonce=intent.nonce,
        expires=config.expires,
        v=signature.v,
        r=signature.r,
        s=signature.s,
    )


def sign_cancel_order(
    intent: Union[CancelIntent, Mapping[str, Any]],
    keypair: Keypair,
    config: Optional[ExchangeConfig] = None,
) -> SignedCancellation:
    """
    Build and sign an order cancellation payload.

    The order hash is recomputed from the original order fields and
    ``intent.nonce_of_order``; the cancellation envelope then binds it to the
    fresh ``intent.nonce``. The returned ``order_hash`` is therefore identical
    to the hash of the order as placed.

    Raises:
        UnsupportedOrderShape: If ``intent`` is missing required fields
            (``nonceOfOrder`` included).
        InvalidAmount, InvalidField, SigningError: As for ``sign_order``.
    """
    config = config or DEFAULT_EXCHANGE_CONFIG
    intent = _coerce_intent(intent, CancelIntent)

    raw_order_hash, _ = _order_hash_for(intent, intent.nonce_of_order, config)
    envelope = cancel_envelope_hash(raw_order_hash, intent.nonce)
    signature = sign_content_hash(envelope, keypair)
    logger.debug(
        "Signed cancellation of %s nonce=%s owner=%s",
        to_hex(raw_order_hash), intent.nonce, intent.address,
    )

    return SignedCancellation(
        order_hash=to_hex(raw_order_hash),
        address=intent.address,
        nonce=intent.nonce,
        v=signature.v,
        r=signature.r,
        s=signature.s,
    )


def sign_withdrawal(
    intent: Union[WithdrawalIntent, Mapping[str, Any]],
    keypair: Keypair,
    config: Optional[ExchangeConfig] = None,
) -> SignedWithdrawal:
    """
    Build and sign a withdrawal request payload.

    Field tuple: ``(exchange_contract, token, amount, address, nonce)``.

    Raises:
        UnsupportedOrderShape: If ``intent`` is missing required fields.
        InvalidAmount, InvalidField, SigningError: As for ``sign_order``.
    """
    config = config or DEFAULT_EXCHANGE_CONFIG
    intent = _coerce_intent(intent, WithdrawalIntent)

    amount = to_atomic_units(intent.amount, intent.token.decimals)
    raw = withdrawal_hash(
        exchange_contract=config.exchange_contract,
        token=intent.token.contract_address,
        amount=amount,
        owner=intent.address,
        nonce=intent.nonce,
    )
    signature = sign_content_hash(raw, keypair)
    logger.debug("Signed withdrawal %s nonce=%s owner=%s", to_hex(raw), intent.nonce, intent.address)

    return SignedWithdrawal(
        address=intent.address,
        amount=amount,
        token=intent.token.contract_address,
        nonce=intent.nonce,
        v=signature.v,
        r=signature.r,
        s=signature.s,
    )
