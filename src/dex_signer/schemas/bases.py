"""
Base Schema Models for dex-signer

This module defines the base classes every intent and payload model inherits
from. It provides consistent validation and serialization across the package.

Core Classes:
    - CanonicalModel: Pydantic base model with deterministic JSON serialization
    - BaseSignature: Abstract signature component model
    - BaseSignedPayload: Abstract signed payload returned by the assemblers

Dependencies:
    - pydantic: For data validation and serialization
"""

import json
from typing import Dict, Any
from abc import ABC

from pydantic import BaseModel, ConfigDict


class CanonicalModel(BaseModel):
    """
    Pydantic base model with canonical JSON serialization.

    Output always uses the wire (alias) field names expected by the exchange
    REST API, so ``tokenBuy`` rather than ``token_buy``. Input accepts either
    form.

    Example:
        class MyModel(CanonicalModel):
            token_buy: str = Field(..., alias="tokenBuy")

        model = MyModel(token_buy="0x00")
        model.to_canonical_json()  # '{"tokenBuy":"0x00"}'
    """

    model_config = ConfigDict(populate_by_name=True)

    def to_canonical_json(self) -> str:
        """
        Convert model to a canonical JSON string.

        The JSON representation is:
        1. Deterministically ordered (sorted keys)
        2. Whitespace-minimal (compact format)
        3. Keyed by wire (alias) names

        Returns:
            str: JSON string with sorted keys and no extra whitespace.
        """
        data = self.model_dump(mode="json", by_alias=True)
        return json.dumps(
            data,
            separators=(",", ":"),
            sort_keys=True,
            ensure_ascii=False
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert model to a dictionary keyed by wire names.

        Returns:
            Dict[str, Any]: Dictionary with all model fields.
        """
        return self.model_dump(by_alias=True)


class BaseSignature(CanonicalModel, ABC):
    """
    Abstract base class for signature components.

    Concrete classes check their components on construction and expose
    ``validate_format`` for re-checking deserialized values.
    """

    def validate_format(self) -> bool:
        """
        Validate the signature format.

        Returns:
            bool: True if signature format is valid.

        Raises:
            ValueError: If signature format is invalid with descriptive message.
        """
        pass


class BaseSignedPayload(CanonicalModel, ABC):
    """
    Abstract base class for signed exchange payloads.

    Every payload carries the signer address and the flattened ``v``, ``r``
    and ``s`` components the exchange contract expects next to the message
    fields.
    """

    address: str
    nonce: int
    v: int
    r: str
    s: str
