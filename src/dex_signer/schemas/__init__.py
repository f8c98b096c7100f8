from .bases import CanonicalModel, BaseSignature, BaseSignedPayload
from .orders import (
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

__all__ = [
    "CanonicalModel",
    "BaseSignature",
    "BaseSignedPayload",
    "TokenDescriptor",
    "OrderIntent",
    "CancelIntent",
    "WithdrawalIntent",
    "Keypair",
    "ECDSASignature",
    "SignedOrder",
    "SignedCancellation",
    "SignedWithdrawal",
]
