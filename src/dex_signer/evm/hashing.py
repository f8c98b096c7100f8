"""
Canonical hashing of exchange messages.

Two stages turn message fields into the value that gets signed:

content_hash
    Keccak-256 over the tightly packed (Solidity ``abi.encodePacked``)
    encoding of an ordered list of ``(type, value)`` fields. ``address`` packs
    to 20 bytes, ``uint256`` to 32 big-endian bytes, ``bytes`` to its raw
    content. Packing and hashing are delegated to ``Web3.solidity_keccak``;
    this module only validates and normalizes values beforehand.

signable_digest
    EIP-191 personal-message hash of a 32-byte content hash:
    ``keccak(b"\\x19Ethereum Signed Message:\\n32" + content_hash)``.

The message-specific builders (``order_hash``, ``cancel_envelope_hash``,
``withdrawal_hash``) are the only places field tuples are defined.
"""

import re
from typing import Any, List, Sequence, Tuple, Union

from eth_account.messages import encode_defunct
from eth_utils import decode_hex, is_hex, keccak
from web3 import Web3

from ..exceptions import InvalidField
from .constants import UINT256_MAX

PackedField = Tuple[str, Any]
BytesLike = Union[bytes, bytearray, str]

SUPPORTED_TYPES = ("address", "uint256", "bytes")

_UINT_PATTERN = re.compile(r"^-?[0-9]+$")


def _to_bytes(value: BytesLike, field_type: str) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str) and value.startswith(("0x", "0X")) and is_hex(value):
        try:
            return decode_hex(value)
        except ValueError as e:
            raise InvalidField(f"{field_type} value has an odd number of hex digits: {value!r}") from e
    raise InvalidField(f"{field_type} value must be bytes or 0x-prefixed hex, got {value!r}")


def _normalize_address(value: BytesLike) -> str:
    raw = _to_bytes(value, "address")
    if len(raw) != 20:
        raise InvalidField(f"address must be exactly 20 bytes, got {len(raw)}")
    # solidity_keccak only accepts checksummed addresses
    return Web3.to_checksum_address("0x" + raw.hex())


def _normalize_uint256(value: Union[int, str]) -> int:
    if isinstance(value, bool):
        raise InvalidField("uint256 value must be an int or a base-10 string, got bool")
    if isinstance(value, str):
        text = value.strip()
        if not _UINT_PATTERN.match(text):
            raise InvalidField(f"uint256 value is not a base-10 integer: {value!r}")
        value = int(text)
    if not isinstance(value, int):
        raise InvalidField(f"uint256 value must be an int or a base-10 string, got {type(value).__name__}")
    if value < 0 or value > UINT256_MAX:
        raise InvalidField(f"uint256 value out of range: {value}")
    return value


def _normalize(field_type: str, value: Any) -> Any:
    if field_type == "address":
        return _normalize_address(value)
    if field_type == "uint256":
        return _normalize_uint256(value)
    if field_type == "bytes":
        return _to_bytes(value, "bytes")
    raise InvalidField(f"Unsupported field type {field_type!r}; expected one of {SUPPORTED_TYPES}")


def content_hash(fields: Sequence[PackedField]) -> bytes:
    """
    Keccak-256 of the tightly packed encoding of ``fields``.

    Args:
        fields: Ordered ``(type, value)`` pairs. ``type`` is one of
            ``"address"``, ``"uint256"`` or ``"bytes"``.

    Returns:
        bytes: 32-byte hash.

    Raises:
        InvalidField: If a type tag is unknown or a value has the wrong width
            or range.

    Example::

        content_hash([("address", "0x" + "aa" * 20), ("uint256", 5)])
    """
    abi_types: List[str] = []
    values: List[Any] = []
    for field in fields:
        try:
            field_type, value = field
        except (TypeError, ValueError) as e:
            raise InvalidField(f"fields must be (type, value) pairs, got {field!r}") from e
        abi_types.append(field_type)
        values.append(_normalize(field_type, value))
    return bytes(Web3.solidity_keccak(abi_types, values))


def signable_digest(message_hash: BytesLike) -> bytes:
    """
    EIP-191 (version ``E``) personal-message digest of a 32-byte content hash.

    Raises:
        InvalidField: If ``message_hash`` is not 32 bytes.
    """
    raw = _to_bytes(message_hash, "bytes")
    if len(raw) != 32:
        raise InvalidField(f"content hash must be 32 bytes, got {len(raw)}")
    signable = encode_defunct(primitive=raw)
    return keccak(b"\x19" + signable.version + signable.header + signable.body)


# ---------------------------------------------------------------------------
# Message field tuples
# ---------------------------------------------------------------------------

def order_hash_fields(
    *,
    exchange_contract: str,
    token_buy: str,
    amount_buy: Union[int, str],
    token_sell: str,
    amount_sell: Union[int, str],
    expires: int,
    nonce: int,
    owner: str,
) -> List[PackedField]:
    """Ordered field tuple identifying an order on the exchange contract."""
    return [
        ("address", exchange_contract),
        ("address", token_buy),
        ("uint256", amount_buy),
        ("address", token_sell),
        ("uint256", amount_sell),
        ("uint256", expires),
        ("uint256", nonce),
        ("address", owner),
    ]


def order_hash(**order_fields: Any) -> bytes:
    """Content hash of an order; see ``order_hash_fields`` for the arguments."""
    return content_hash(order_hash_fields(**order_fields))


def cancel_envelope_hash(order_hash_value: BytesLike, nonce: int) -> bytes:
    """Content hash signed to cancel the order identified by ``order_hash_value``."""
    return content_hash([
        ("bytes", order_hash_value),
        ("uint256", nonce),
    ])


def withdrawal_hash(
    *,
    exchange_contract: str,
    token: str,
    amount: Union[int, str],
    owner: str,
    nonce: int,
) -> bytes:
    """Content hash of a withdrawal request."""
    return content_hash([
        ("address", exchange_contract),
        ("address", token),
        ("uint256", amount),
        ("address", owner),
        ("uint256", nonce),
    ])
