"""
Order, Cancellation and Withdrawal Schema Models

Pydantic models for the inputs and outputs of the signing assemblers. All
classes inherit from the base schema hierarchy in ``schemas.bases``.

Input classes:
    - TokenDescriptor: Token contract address plus its decimal factor.
    - OrderIntent: What the caller wants to buy or sell.
    - CancelIntent: An ``OrderIntent`` plus the nonce of the order being
      cancelled.
    - WithdrawalIntent: Token, amount and nonce of a withdrawal request.
    - Keypair: Private key wrapper; the key is masked in every representation.

Signature class:
    - ECDSASignature: Typed (v, r, s) triple with per-component checks.

Payload classes:
    - SignedOrder, SignedCancellation, SignedWithdrawal: Flattened payloads
      ready to be serialized into exchange API request bodies.

Every model accepts both Python field names and the exchange's camelCase wire
names (``amountETH``, ``isBuyOrder``, ``nonceOfOrder``, ...).
"""

import re
from decimal import Decimal
from typing import Any, Tuple

from eth_utils import decode_hex
from pydantic import ConfigDict, Field, SecretBytes, StrictBool, field_validator

from .bases import BaseSignature, BaseSignedPayload, CanonicalModel

_HEX32_RE = re.compile(r"^0x[0-9a-f]{64}$")


def _amount_to_str(value: Any) -> Any:
    # ints and Decimals are exact; floats are left for str validation to reject
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, Decimal)):
        return str(value)
    return value


class TokenDescriptor(CanonicalModel):
    """
    Token contract address and decimal factor.

    Attributes:
        contract_address: Token contract address (wire name ``contract``).
        decimals: Number of decimals of the token (wire name ``factor``).

    Example::

        token = TokenDescriptor(contract="0xaaaa...aaaa", factor=18)
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    contract_address: str = Field(..., alias="contract", description="Token contract address (0x-prefixed)")
    decimals: int = Field(..., ge=0, alias="factor", description="Token decimal factor")


class OrderIntent(CanonicalModel):
    """
    A trade the caller wants to place.

    ``is_buy_order=True`` buys ``amount_token`` of the token with
    ``amount_eth`` of the native asset; ``False`` sells the token for the
    native asset. Amounts are whole-unit decimal strings (``"2.5"``).

    Attributes:
        amount_eth: Native asset amount in whole units (``amountETH``).
        amount_token: Token amount in whole units (``amountToken``).
        is_buy_order: Order side (``isBuyOrder``).
        token: Token being traded.
        nonce: Exchange nonce of the order.
        address: Owner address the order belongs to.
    """

    amount_eth: str = Field(..., alias="amountETH", description="Native asset amount in whole units")
    amount_token: str = Field(..., alias="amountToken", description="Token amount in whole units")
    is_buy_order: StrictBool = Field(..., alias="isBuyOrder", description="True to buy the token with ETH")
    token: TokenDescriptor
    nonce: int = Field(..., ge=0, description="Exchange nonce")
    address: str = Field(..., description="Order owner address")

    @field_validator("amount_eth", "amount_token", mode="before")
    @classmethod
    def coerce_amounts(cls, value: Any) -> Any:
        return _amount_to_str(value)


class CancelIntent(OrderIntent):
    """
    Cancellation of a previously placed order.

    The order fields must match the original order exactly. ``nonce_of_order``
    is the nonce the order was placed with; ``nonce`` is the fresh nonce of
    the cancellation request itself.
    """

    nonce_of_order: int = Field(..., ge=0, alias="nonceOfOrder", description="Nonce of the order to cancel")


class WithdrawalIntent(CanonicalModel):
    """Withdrawal of ``amount`` whole units of ``token`` to ``address``."""

    token: TokenDescriptor
    amount: str = Field(..., description="Amount in whole units")
    nonce: int = Field(..., ge=0, description="Exchange nonce")
    address: str = Field(..., description="Address the funds go back to")

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, value: Any) -> Any:
        return _amount_to_str(value)


class Keypair(CanonicalModel):
    """
    Private key holder.

    The key is stored as ``SecretBytes`` so it never shows up in ``repr``,
    ``str``, logs or serialized output. Hex strings are accepted on input.
    Key validity is checked when the key is used, not here.
    """

    model_config = ConfigDict(frozen=True)

    private_key: SecretBytes

    @field_validator("private_key", mode="before")
    @classmethod
    def decode_hex_key(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return decode_hex(value)
            except ValueError as e:
                raise ValueError("private key is not valid hex") from e
        return value

    @property
    def address(self) -> str:
        """EIP-55 checksummed address controlled by this key."""
        from ..evm.keys import derive_address

        return derive_address(self.private_key.get_secret_value())


class ECDSASignature(BaseSignature):
    """
    Recoverable secp256k1 ECDSA signature (v, r, s).

    Attributes:
        v: Recovery ID in the 27/28 convention.
        r: r component, ``0x`` + 64 lowercase hex chars (32 bytes, big-endian).
        s: s component, ``0x`` + 64 lowercase hex chars (32 bytes, big-endian).

    Example::

        sig = ECDSASignature(v=27, r="0x" + "a" * 64, s="0x" + "b" * 64)
        sig.to_packed_hex()
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    v: int = Field(..., ge=27, le=28, description="ECDSA recovery ID (27 or 28)")
    r: str = Field(..., description="Signature r component (0x + 64 hex chars)")
    s: str = Field(..., description="Signature s component (0x + 64 hex chars)")

    @field_validator("r", "s")
    @classmethod
    def check_component(cls, value: str) -> str:
        value = value.lower()
        if not _HEX32_RE.match(value):
            raise ValueError("expected 0x followed by 64 hex chars")
        return value

    def validate_format(self) -> bool:
        """
        Validate v/r/s components.

        Returns:
            True when all components pass.

        Raises:
            ValueError: Descriptive message on the first failed check.
        """
        if self.v not in (27, 28):
            raise ValueError(f"Invalid recovery ID: {self.v}. Must be 27 or 28")
        for name, val in [("r", self.r), ("s", self.s)]:
            if not _HEX32_RE.match(val):
                raise ValueError(f"Invalid {name}: expected 0x followed by 64 hex chars")
        return True

    @property
    def vrs(self) -> Tuple[int, int, int]:
        """Integer ``(v, r, s)`` tuple as accepted by ``eth_account`` recovery."""
        return self.v, int(self.r, 16), int(self.s, 16)

    def to_packed_hex(self) -> str:
        """
        Encode v/r/s into a packed 65-byte hex string (``r || s || v``).

        Returns:
            0x-prefixed 132-character hex string.
        """
        self.validate_format()
        return "0x" + self.r[2:] + self.s[2:] + format(self.v, "02x")


class SignedOrder(BaseSignedPayload):
    """
    Signed order placement payload.

    Wire keys: ``tokenBuy``, ``amountBuy``, ``tokenSell``, ``amountSell``,
    ``address``, ``nonce``, ``expires``, ``v``, ``r``, ``s``. Amounts are in
    atomic units.
    """

    token_buy: str = Field(..., alias="tokenBuy")
    amount_buy: str = Field(..., alias="amountBuy")
    token_sell: str = Field(..., alias="tokenSell")
    amount_sell: str = Field(..., alias="amountSell")
    expires: int

    @property
    def signature(self) -> ECDSASignature:
        return ECDSASignature(v=self.v, r=self.r, s=self.s)


class SignedCancellation(BaseSignedPayload):
    """
    Signed order cancellation payload.

    ``order_hash`` is the content hash of the original order; ``nonce`` is the
    cancellation nonce, not the order's.
    """

    order_hash: str = Field(..., alias="orderHash")

    @property
    def signature(self) -> ECDSASignature:
        return ECDSASignature(v=self.v, r=self.r, s=self.s)


class SignedWithdrawal(BaseSignedPayload):
    """Signed withdrawal payload; ``amount`` is in atomic units."""

    amount: str
    token: str

    @property
    def signature(self) -> ECDSASignature:
        return ECDSASignature(v=self.v, r=self.r, s=self.s)
