"""
Exception and Error Definitions Module

Defines the exception hierarchy for order construction, canonical hashing and
signing. All exceptions inherit from DexSignerError for unified exception
handling.

Exception Hierarchy:
    DexSignerError (root)
    ├── InvalidAmount
    ├── InvalidField
    ├── SigningError
    ├── UnsupportedOrderShape
    └── ConfigurationError
"""


class DexSignerError(Exception):
    """
    Root exception class for all project-specific exceptions.

    All custom exceptions inherit from this class so callers can catch every
    signing failure with a single ``except`` clause.
    """
    pass


class InvalidAmount(DexSignerError, ValueError):
    """
    Raised when a decimal amount cannot be converted to atomic units.

    This includes scenarios such as:
    - Non-numeric strings (``"abc"``), NaN or Infinity
    - Negative amounts
    - Binary floats (exactness cannot be guaranteed)
    - More fractional digits than the token's decimals allow
    """
    pass


class InvalidField(DexSignerError, ValueError):
    """
    Raised when a value handed to the canonical hash builder is malformed.

    This includes scenarios such as:
    - Address that is not exactly 20 bytes
    - uint256 that is negative or exceeds 2**256 - 1
    - Unknown field type tag
    - Content hash that is not 32 bytes
    """
    pass


class SigningError(DexSignerError):
    """
    Raised when ECDSA signing or key handling fails.

    This includes scenarios such as:
    - Private key of the wrong length
    - Private key equal to zero or not below the secp256k1 group order
    - Digest that is not 32 bytes

    The private key itself is never part of the message.
    """
    pass


class UnsupportedOrderShape(DexSignerError, ValueError):
    """
    Raised when a caller-supplied order, cancellation or withdrawal intent is
    missing required fields or carries fields of the wrong type.

    Attributes:
        errors: Validation error details reported by pydantic
    """

    def __init__(self, message: str, errors=None):
        super().__init__(message)
        self.errors = errors or []


class ConfigurationError(DexSignerError):
    """
    Raised when exchange configuration is missing or invalid.

    This includes scenarios such as:
    - Malformed exchange contract address in the environment
    - Non-integer native asset decimals
    """
    pass
