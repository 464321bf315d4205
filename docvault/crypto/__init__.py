from docvault.crypto.commitment import CommitmentDeriver, commit
from docvault.crypto.exceptions import (
    AuthenticationFailedError,
    CryptoError,
    ErrorKind,
    InvalidEncodingError,
    InvalidKeyLengthError,
    InvalidSeedLengthError,
    MalformedPayloadError,
    UnwrapFailedError,
)
from docvault.crypto.key_exchange import KeyExchange
from docvault.crypto.models import EncryptedPayload, IdentityKeyPair, WrappedKey
from docvault.crypto.random_source import RandomSource, SystemRandomSource
from docvault.crypto.symmetric_cipher import SymmetricCipher

__all__ = [
    "AuthenticationFailedError",
    "CommitmentDeriver",
    "CryptoError",
    "EncryptedPayload",
    "ErrorKind",
    "IdentityKeyPair",
    "InvalidEncodingError",
    "InvalidKeyLengthError",
    "InvalidSeedLengthError",
    "KeyExchange",
    "MalformedPayloadError",
    "RandomSource",
    "SymmetricCipher",
    "SystemRandomSource",
    "UnwrapFailedError",
    "WrappedKey",
    "commit",
]
