"""
Tests for the canonical content hash and the personal-message digest.

Packed encodings are cross-checked against ``eth_abi.packed.encode_packed``.
"""

import itertools

import pytest
from eth_abi.packed import encode_packed
from eth_utils import keccak

from dex_signer.evm.constants import EXCHANGE_CONTRACT_ADDRESS, UINT256_MAX
from dex_signer.evm.hashing import (
    cancel_envelope_hash,
    content_hash,
    order_hash,
    order_hash_fields,
    signable_digest,
    withdrawal_hash,
)
from dex_signer.exceptions import InvalidField

from conftest import (
    CANCEL_ENVELOPE_HEX,
    MOCK_OWNER_ADDRESS,
    MOCK_TOKEN_ADDRESS,
    ORDER_HASH_HEX,
    ZERO_ADDRESS,
)


ORDER_ARGS = dict(
    exchange_contract=EXCHANGE_CONTRACT_ADDRESS,
    token_buy=MOCK_TOKEN_ADDRESS,
    amount_buy="100000000000000000000",
    token_sell=ZERO_ADDRESS,
    amount_sell="1000000000000000000",
    expires=1,
    nonce=5,
    owner=MOCK_OWNER_ADDRESS,
)


class TestContentHash:
    """Tight packing and Keccak-256 of typed field lists."""

    def test_matches_encode_packed(self):
        fields = [
            ("address", MOCK_TOKEN_ADDRESS),
            ("uint256", 1234),
            ("bytes", b"\x01\x02\x03"),
            ("address", MOCK_OWNER_ADDRESS),
        ]
        expected = keccak(encode_packed(
            ["address", "uint256", "bytes", "address"],
            [MOCK_TOKEN_ADDRESS, 1234, b"\x01\x02\x03", MOCK_OWNER_ADDRESS],
        ))
        assert content_hash(fields) == expected

    def test_returns_32_bytes(self):
        assert len(content_hash([("uint256", 1)])) == 32

    def test_deterministic(self):
        fields = order_hash_fields(**ORDER_ARGS)
        assert content_hash(fields) == content_hash(list(fields))

    def test_uint_string_and_int_agree(self):
        assert content_hash([("uint256", "42")]) == content_hash([("uint256", 42)])

    def test_address_bytes_and_hex_agree(self):
        assert content_hash([("address", b"\xaa" * 20)]) == content_hash([("address", MOCK_TOKEN_ADDRESS)])

    def test_address_case_insensitive(self):
        mixed = "0xAaAaAaAaAaAaAaAaAaAaAaAaAaAaAaAaAaAaAaAa"
        assert content_hash([("address", mixed)]) == content_hash([("address", MOCK_TOKEN_ADDRESS)])

    def test_bytes_hex_and_raw_agree(self):
        assert content_hash([("bytes", "0x0102")]) == content_hash([("bytes", b"\x01\x02")])

    def test_field_order_matters(self):
        fields = order_hash_fields(**ORDER_ARGS)
        hashes = {content_hash(list(p)) for p in itertools.islice(itertools.permutations(fields), 50)}
        assert len(hashes) > 1

    def test_swapping_addresses_changes_hash(self):
        a = content_hash([("address", MOCK_TOKEN_ADDRESS), ("address", MOCK_OWNER_ADDRESS)])
        b = content_hash([("address", MOCK_OWNER_ADDRESS), ("address", MOCK_TOKEN_ADDRESS)])
        assert a != b

    def test_uint_max_accepted(self):
        content_hash([("uint256", UINT256_MAX)])


class TestContentHashRejects:
    """Malformed values never reach the hash."""

    def test_19_byte_address(self):
        with pytest.raises(InvalidField, match="20 bytes"):
            content_hash([("address", "0x" + "bb" * 19)])

    def test_21_byte_address(self):
        with pytest.raises(InvalidField):
            content_hash([("address", b"\xbb" * 21)])

    def test_address_without_prefix(self):
        with pytest.raises(InvalidField):
            content_hash([("address", "bb" * 20)])

    def test_uint_overflow(self):
        with pytest.raises(InvalidField, match="out of range"):
            content_hash([("uint256", UINT256_MAX + 1)])

    @pytest.mark.parametrize("value", [-1, "-1"])
    def test_negative_uint(self, value):
        with pytest.raises(InvalidField):
            content_hash([("uint256", value)])

    @pytest.mark.parametrize("value", ["1.5", "abc", "--1", "-", "1_000", "\u0661\u0662", True, 1.0])
    def test_non_integer_uint(self, value):
        with pytest.raises(InvalidField):
            content_hash([("uint256", value)])

    def test_unknown_type(self):
        with pytest.raises(InvalidField, match="Unsupported field type"):
            content_hash([("int8", 1)])

    def test_odd_hex_bytes(self):
        with pytest.raises(InvalidField):
            content_hash([("bytes", "0xabc")])

    def test_not_a_pair(self):
        with pytest.raises(InvalidField):
            content_hash([("uint256",)])


class TestMessageHashes:
    """Message-specific tuples built on the shared hash builder."""

    def test_order_hash_uses_order_tuple(self):
        expected = keccak(encode_packed(
            ["address", "address", "uint256", "address", "uint256", "uint256", "uint256", "address"],
            [
                EXCHANGE_CONTRACT_ADDRESS, MOCK_TOKEN_ADDRESS, 10**20, ZERO_ADDRESS,
                10**18, 1, 5, MOCK_OWNER_ADDRESS,
            ],
        ))
        assert order_hash(**ORDER_ARGS) == expected

    def test_order_hash_known_answer(self):
        assert order_hash(**ORDER_ARGS).hex() == ORDER_HASH_HEX

    def test_address_case_does_not_change_order_hash(self):
        """Addresses are checksummed before packing, whatever case they arrive in."""
        upper = {**ORDER_ARGS, "exchange_contract": "0x" + EXCHANGE_CONTRACT_ADDRESS[2:].upper()}
        assert order_hash(**upper).hex() == ORDER_HASH_HEX

    def test_cancel_envelope_known_answer(self):
        assert cancel_envelope_hash(bytes.fromhex(ORDER_HASH_HEX), 9).hex() == CANCEL_ENVELOPE_HEX

    def test_cancel_envelope(self):
        raw = order_hash(**ORDER_ARGS)
        expected = keccak(encode_packed(["bytes", "uint256"], [raw, 9]))
        assert cancel_envelope_hash(raw, 9) == expected

    def test_cancel_envelope_accepts_hex(self):
        raw = order_hash(**ORDER_ARGS)
        assert cancel_envelope_hash("0x" + raw.hex(), 9) == cancel_envelope_hash(raw, 9)

    def test_withdrawal_hash(self):
        expected = keccak(encode_packed(
            ["address", "address", "uint256", "address", "uint256"],
            [EXCHANGE_CONTRACT_ADDRESS, MOCK_TOKEN_ADDRESS, 2500000, MOCK_OWNER_ADDRESS, 11],
        ))
        assert withdrawal_hash(
            exchange_contract=EXCHANGE_CONTRACT_ADDRESS,
            token=MOCK_TOKEN_ADDRESS,
            amount="2500000",
            owner=MOCK_OWNER_ADDRESS,
            nonce=11,
        ) == expected


class TestSignableDigest:
    """EIP-191 personal-message wrapping."""

    def test_prefix_and_hash(self):
        raw = order_hash(**ORDER_ARGS)
        assert signable_digest(raw) == keccak(b"\x19Ethereum Signed Message:\n32" + raw)

    def test_differs_from_content_hash(self):
        raw = order_hash(**ORDER_ARGS)
        assert signable_digest(raw) != raw

    def test_rejects_wrong_length(self):
        with pytest.raises(InvalidField, match="32 bytes"):
            signable_digest(b"\x00" * 31)
