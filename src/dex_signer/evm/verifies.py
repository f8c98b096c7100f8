"""
EVM Signature Verification Utilities

Recovers the signer of a personal-message signature and checks signed
payloads against the address they claim. Used to self-check payloads before
they are submitted, and by the exchange-side tests.

verify_signature
    Check an ``ECDSASignature`` over a content hash against an address.

verify_signed_order / verify_signed_cancellation / verify_signed_withdrawal
    Rebuild the content hash from a signed payload's own fields and check the
    embedded signature against ``payload.address``.
"""

from typing import Optional, Union

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_utils import decode_hex

from ..schemas.orders import ECDSASignature, SignedCancellation, SignedOrder, SignedWithdrawal
from .constants import DEFAULT_EXCHANGE_CONFIG, ExchangeConfig
from .hashing import cancel_envelope_hash, order_hash, withdrawal_hash


def recover_signer(message_hash: bytes, signature: ECDSASignature) -> str:
    """
    Recover the address that signed ``message_hash`` (personal-message form).

    Args:
        message_hash: 32-byte content hash, before the personal-message prefix.
        signature:    ``ECDSASignature`` produced over ``signable_digest(message_hash)``.

    Returns:
        EIP-55 checksummed address.
    """
    signable = encode_defunct(primitive=bytes(message_hash))
    return Account.recover_message(signable, vrs=signature.vrs)


def verify_signature(message_hash: bytes, signature: ECDSASignature, expected_address: str) -> bool:
    """
    Return ``True`` if ``signature`` over ``message_hash`` recovers to
    ``expected_address`` (case-insensitive), ``False`` otherwise.
    """
    try:
        recovered = recover_signer(message_hash, signature)
    except Exception:
        # eth_keys raises BadSignature / ValidationError for unrecoverable values
        return False
    return recovered.lower() == expected_address.lower()


def verify_signed_order(payload: SignedOrder, config: Optional[ExchangeConfig] = None) -> bool:
    """Check that ``payload`` was signed by ``payload.address``."""
    config = config or DEFAULT_EXCHANGE_CONFIG
    raw = order_hash(
        exchange_contract=config.exchange_contract,
        token_buy=payload.token_buy,
        amount_buy=payload.amount_buy,
        token_sell=payload.token_sell,
        amount_sell=payload.amount_sell,
        expires=payload.expires,
        nonce=payload.nonce,
        owner=payload.address,
    )
    return verify_signature(raw, payload.signature, payload.address)


def verify_signed_cancellation(payload: SignedCancellation, config: Optional[ExchangeConfig] = None) -> bool:
    """Check that ``payload`` was signed by ``payload.address``.

    ``config`` is accepted for symmetry; the cancellation envelope does not
    include the exchange contract.
    """
    raw = cancel_envelope_hash(decode_hex(payload.order_hash), payload.nonce)
    return verify_signature(raw, payload.signature, payload.address)


def verify_signed_withdrawal(payload: SignedWithdrawal, config: Optional[ExchangeConfig] = None) -> bool:
    """Check that ``payload`` was signed by ``payload.address``."""
    config = config or DEFAULT_EXCHANGE_CONFIG
    raw = withdrawal_hash(
        exchange_contract=config.exchange_contract,
        token=payload.token,
        amount=payload.amount,
        owner=payload.address,
        nonce=payload.nonce,
    )
    return verify_signature(raw, payload.signature, payload.address)


def verify_payload(
    payload: Union[SignedOrder, SignedCancellation, SignedWithdrawal],
    config: Optional[ExchangeConfig] = None,
) -> bool:
    """Dispatch to the verifier matching the payload type."""
    if isinstance(payload, SignedOrder):
        return verify_signed_order(payload, config)
    if isinstance(payload, SignedCancellation):
        return verify_signed_cancellation(payload, config)
    if isinstance(payload, SignedWithdrawal):
        return verify_signed_withdrawal(payload, config)
    raise TypeError(f"Unsupported payload type: {type(payload).__name__}")
