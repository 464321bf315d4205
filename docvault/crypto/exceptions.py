from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    """Stable failure kinds that outer layers map to messages and exit codes."""

    INVALID_KEY_LENGTH = "invalid_key_length"
    INVALID_SEED_LENGTH = "invalid_seed_length"
    INVALID_ENCODING = "invalid_encoding"
    AUTHENTICATION_FAILED = "authentication_failed"
    UNWRAP_FAILED = "unwrap_failed"
    MALFORMED_PAYLOAD = "malformed_payload"


class CryptoError(Exception):
    """Base exception for all cryptographic core failures.

    Messages never include key material.
    """

    kind: ClassVar[ErrorKind]


class InvalidKeyLengthError(CryptoError):
    """Raised when a symmetric or asymmetric key is not exactly 32 bytes."""

    kind = ErrorKind.INVALID_KEY_LENGTH


class InvalidSeedLengthError(CryptoError):
    """Raised when a key-pair seed is not exactly 32 bytes."""

    kind = ErrorKind.INVALID_SEED_LENGTH


class InvalidEncodingError(CryptoError):
    """Raised when hex input does not decode to the expected byte length."""

    kind = ErrorKind.INVALID_ENCODING


class AuthenticationFailedError(CryptoError):
    """Raised when an AEAD tag does not verify (wrong key or corrupted data)."""

    kind = ErrorKind.AUTHENTICATION_FAILED


class UnwrapFailedError(CryptoError):
    """Raised when a wrapped key cannot be opened. Treat as access denied."""

    kind = ErrorKind.UNWRAP_FAILED


class MalformedPayloadError(CryptoError):
    """Raised when packed or structured crypto data has invalid lengths."""

    kind = ErrorKind.MALFORMED_PAYLOAD
