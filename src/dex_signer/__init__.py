from .exceptions import (
    DexSignerError,
    InvalidAmount,
    InvalidField,
    SigningError,
    UnsupportedOrderShape,
    ConfigurationError,
)
from .schemas import (
    TokenDescriptor,
    OrderIntent,
    CancelIntent,
    WithdrawalIntent,
    Keypair,
    ECDSASignature,
    SignedOrder,
    SignedCancellation,
    SignedWithdrawal,
)
from .evm import (
    ExchangeConfig,
    DEFAULT_EXCHANGE_CONFIG,
    load_exchange_config,
    to_atomic_units,
    from_atomic_units,
    content_hash,
    signable_digest,
    derive_private_key,
    derive_address,
    derive_keypair,
    sign_digest,
    sign_order,
    sign_cancel_order,
    sign_withdrawal,
    verify_payload,
)

__all__ = [
    "DexSignerError",
    "InvalidAmount",
    "InvalidField",
    "SigningError",
    "UnsupportedOrderShape",
    "ConfigurationError",
    "TokenDescriptor",
    "OrderIntent",
    "CancelIntent",
    "WithdrawalIntent",
    "Keypair",
    "ECDSASignature",
    "SignedOrder",
    "SignedCancellation",
    "SignedWithdrawal",
    "ExchangeConfig",
    "DEFAULT_EXCHANGE_CONFIG",
    "load_exchange_config",
    "to_atomic_units",
    "from_atomic_units",
    "content_hash",
    "signable_digest",
    "derive_private_key",
    "derive_address",
    "derive_keypair",
    "sign_digest",
    "sign_order",
    "sign_cancel_order",
    "sign_withdrawal",
    "verify_payload",
]
