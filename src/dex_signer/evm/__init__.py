from .constants import (
    ExchangeConfig,
    DEFAULT_EXCHANGE_CONFIG,
    EXCHANGE_CONTRACT_ADDRESS,
    NATIVE_ASSET_ADDRESS,
    NATIVE_DECIMALS,
    ORDER_EXPIRES,
    load_exchange_config,
)
from .units import to_atomic_units, from_atomic_units
from .hashing import (
    content_hash,
    signable_digest,
    order_hash_fields,
    order_hash,
    cancel_envelope_hash,
    withdrawal_hash,
)
from .keys import derive_private_key, derive_address, derive_keypair
from .signatures import (
    sign_digest,
    sign_content_hash,
    sign_order,
    sign_cancel_order,
    sign_withdrawal,
)
from .verifies import (
    recover_signer,
    verify_signature,
    verify_signed_order,
    verify_signed_cancellation,
    verify_signed_withdrawal,
    verify_payload,
)

__all__ = [
    "ExchangeConfig",
    "DEFAULT_EXCHANGE_CONFIG",
    "EXCHANGE_CONTRACT_ADDRESS",
    "NATIVE_ASSET_ADDRESS",
    "NATIVE_DECIMALS",
    "ORDER_EXPIRES",
    "load_exchange_config",
    "to_atomic_units",
    "from_atomic_units",
    "content_hash",
    "signable_digest",
    "order_hash_fields",
    "order_hash",
    "cancel_envelope_hash",
    "withdrawal_hash",
    "derive_private_key",
    "derive_address",
    "derive_keypair",
    "sign_digest",
    "sign_content_hash",
    "sign_order",
    "sign_cancel_order",
    "sign_withdrawal",
    "recover_signer",
    "verify_signature",
    "verify_signed_order",
    "verify_signed_cancellation",
    "verify_signed_withdrawal",
    "verify_payload",
]
